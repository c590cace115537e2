from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One response of an ARM list operation.

    ``next_link`` is the continuation cursor; ``None`` marks the last page.
    """

    items: Sequence[T] = field(default_factory=tuple)
    next_link: str | None = None


@dataclass
class Tenant:
    """A directory the signed-in account belongs to."""

    tenant_id: str
    display_name: str | None = None
    default_domain: str | None = None
    extra: Mapping[str, Any] | None = None

    @classmethod
    def from_arm(cls, payload: Mapping[str, Any], keep_metadata: bool = True) -> "Tenant":
        return cls(
            tenant_id=payload["tenantId"],
            display_name=payload.get("displayName"),
            default_domain=payload.get("defaultDomain"),
            extra=payload if keep_metadata else None,
        )


@dataclass
class Subscription:
    """A subscription visible to the tenant-scoped credential."""

    subscription_id: str
    display_name: str
    state: str | None = None
    tenant_id: str | None = None
    extra: Mapping[str, Any] | None = None

    @classmethod
    def from_arm(
        cls, payload: Mapping[str, Any], keep_metadata: bool = True
    ) -> "Subscription":
        subscription_id = payload["subscriptionId"]
        return cls(
            subscription_id=subscription_id,
            # displayName is optional in the ARM schema
            display_name=payload.get("displayName") or subscription_id,
            state=payload.get("state"),
            tenant_id=payload.get("tenantId"),
            extra=payload if keep_metadata else None,
        )


@dataclass
class Vault:
    """A key vault resource."""

    name: str
    vault_id: str | None = None
    location: str | None = None
    resource_group: str | None = None
    extra: Mapping[str, Any] | None = None

    @classmethod
    def from_arm(cls, payload: Mapping[str, Any], keep_metadata: bool = True) -> "Vault":
        vault_id = payload.get("id")
        return cls(
            name=payload["name"],
            vault_id=vault_id,
            location=payload.get("location"),
            resource_group=resource_group_from_id(vault_id),
            extra=payload if keep_metadata else None,
        )


def resource_group_from_id(resource_id: str | None) -> str | None:
    """Pull the resource group name out of an ARM resource id."""
    if not resource_id:
        return None
    parts = resource_id.strip("/").split("/")
    for key, value in zip(parts, parts[1:]):
        if key.lower() == "resourcegroups":
            return value
    return None
