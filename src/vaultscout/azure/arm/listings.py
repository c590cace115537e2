from __future__ import annotations

import dataclasses
import logging
from typing import Final

from .client import ArmClient
from .models import Page, Subscription, Tenant, Vault
from .paging import PageEnumerator, enumerate_pages

logger = logging.getLogger(__name__)

TENANTS_API_VERSION: Final[str] = "2022-12-01"
SUBSCRIPTIONS_API_VERSION: Final[str] = "2022-12-01"
VAULTS_API_VERSION: Final[str] = "2022-07-01"

DEFAULT_VAULT_PAGE_SIZE: Final[int] = 30


def list_tenants(client: ArmClient) -> PageEnumerator[Tenant]:
    """Stream the tenants the signed-in account belongs to."""
    return enumerate_pages(
        lambda: client.fetch_page(
            "/tenants", Tenant.from_arm, api_version=TENANTS_API_VERSION
        ),
        lambda page: client.fetch_next(page, Tenant.from_arm),
        name="tenants",
    )


def list_subscriptions(client: ArmClient) -> PageEnumerator[Subscription]:
    """Stream the subscriptions visible to the client's credential."""
    return enumerate_pages(
        lambda: client.fetch_page(
            "/subscriptions",
            Subscription.from_arm,
            api_version=SUBSCRIPTIONS_API_VERSION,
        ),
        lambda page: client.fetch_next(page, Subscription.from_arm),
        name="subscriptions",
    )


def vaults_path(subscription_id: str, resource_group: str | None = None) -> str:
    scope = f"/subscriptions/{subscription_id}"
    if resource_group:
        scope += f"/resourceGroups/{resource_group}"
    return f"{scope}/providers/Microsoft.KeyVault/vaults"


def list_vaults(
    client: ArmClient,
    subscription_id: str,
    resource_group: str | None = None,
    top: int = DEFAULT_VAULT_PAGE_SIZE,
    follow_pages: bool = True,
) -> PageEnumerator[Vault]:
    """Stream the key vaults in a subscription, or in one of its resource groups.

    Args:
        client: ARM client holding the tenant-scoped credential.
        subscription_id: Subscription to search.
        resource_group: Restrict the search to this resource group.
        top: Page size requested from ARM.
        follow_pages: If ``False``, stop after the first page even when ARM
            reports more.
    """
    path = vaults_path(subscription_id, resource_group)

    def fetch_first() -> Page[Vault]:
        page = client.fetch_page(
            path, Vault.from_arm, api_version=VAULTS_API_VERSION, top=top
        )
        if not follow_pages and page.next_link is not None:
            logger.warning(
                "More than %s key vaults found; only the first page is listed.", top
            )
            return dataclasses.replace(page, next_link=None)
        return page

    return enumerate_pages(
        fetch_first,
        lambda page: client.fetch_next(page, Vault.from_arm),
        name="key vaults",
    )
