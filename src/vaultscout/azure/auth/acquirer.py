from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

import requests
from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError

from vaultscout.azure.arm.client import ArmClient
from vaultscout.azure.arm.listings import list_tenants
from vaultscout.azure.arm.paging import drain
from vaultscout.errors import AuthError, TenantCountError

from .credential import Credential
from .factory import get_credential
from .scopes import arm_scope_from_endpoint

if TYPE_CHECKING:
    from vaultscout.config import ExplorerConfig

logger = logging.getLogger(__name__)

CredentialFactory = Callable[..., TokenCredential]


def _request_token(
    token_credential: TokenCredential, scope: str, tenant_id: str | None = None
) -> Credential:
    """Return a :class:`Credential` for ``scope``, optionally for another tenant."""
    kwargs: dict[str, Any] = {}
    if tenant_id is not None:
        kwargs["tenant_id"] = tenant_id
    try:
        access_token = token_credential.get_token(scope, **kwargs)
    except AzureError as exc:
        # also covers ServiceRequestError raised while polling for the device code
        reason = exc.message or str(exc)
        target = f"tenant {tenant_id}" if tenant_id else "the sign-in directory"
        raise AuthError(f"Authentication for {target} failed: {reason}") from exc
    return Credential.from_access_token(access_token, tenant_id=tenant_id)


def discover_tenant(client: ArmClient) -> str:
    """Return the id of the only tenant the signed-in account belongs to.

    Raises:
        TenantCountError: If there are zero or several tenants.
        FetchError: If the tenant listing fails.
    """
    tenants = drain(list_tenants(client))
    if len(tenants) != 1:
        logger.debug("Found %s tenants", len(tenants))
        raise TenantCountError(len(tenants))
    tenant_id = tenants[0].tenant_id
    logger.info("Signed-in account belongs to tenant %s", tenant_id)
    return tenant_id


def acquire(
    config: "ExplorerConfig",
    *,
    write: Callable[[str], Any] = print,
    session: requests.Session | None = None,
    credential_factory: CredentialFactory = get_credential,
) -> Credential:
    """Sign in with a device code and return a credential scoped to the user's tenant.

    The operator signs in once against the configured directory (``common``
    by default). The tenants of the account are listed with that token, and
    exactly one is required. The token for that tenant is then obtained from
    the same credential's cache, without a second device code.

    Args:
        config: Run configuration; ``config.auth`` drives the sign-in.
        write: Receives the device-code instructions.
        session: HTTP session for the tenant listing.
        credential_factory: Builds the interactive credential from
            ``config.auth``. Defaults to :func:`get_credential`.

    Returns:
        The tenant-scoped credential.

    Raises:
        AuthError: Sign-in or token exchange failed.
        TenantCountError: The account has zero or several tenants.
        FetchError: The tenant listing failed.
    """
    scope = arm_scope_from_endpoint(config.arm_endpoint)
    token_credential = credential_factory(config.auth, write=write)

    generic = _request_token(token_credential, scope)
    logger.info("Device code sign-in completed")

    client = ArmClient(
        generic,
        endpoint=config.arm_endpoint,
        timeout=config.request_timeout,
        session=session,
    )
    tenant_id = discover_tenant(client)

    return _request_token(token_credential, scope, tenant_id=tenant_id)
