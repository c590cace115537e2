"""Sign in, pick a subscription and list its key vaults."""

from __future__ import annotations

import logging
from typing import Any, Callable

import requests

from vaultscout.azure.arm.client import ArmClient
from vaultscout.azure.arm.listings import list_subscriptions, list_vaults
from vaultscout.azure.arm.models import Vault
from vaultscout.azure.arm.paging import drain
from vaultscout.azure.auth.acquirer import CredentialFactory, acquire
from vaultscout.azure.auth.factory import get_credential
from vaultscout.config import ExplorerConfig
from vaultscout.errors import EmptyResultError
from vaultscout.selection import resolve

logger = logging.getLogger(__name__)


def run(
    config: ExplorerConfig | None = None,
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], Any] = print,
    session: requests.Session | None = None,
    credential_factory: CredentialFactory = get_credential,
) -> list[Vault]:
    """Run the whole sign-in and listing sequence once.

    Args:
        config: Run configuration. If ``None``, read from the environment.
        read: Reads the operator's subscription choice.
        write: Writes prompts and results.
        session: HTTP session shared by every ARM request.
        credential_factory: Builds the interactive credential.

    Returns:
        The key vaults that were printed.
    """
    cfg = config or ExplorerConfig()
    http = session or requests.Session()

    credential = acquire(
        cfg, write=write, session=http, credential_factory=credential_factory
    )
    client = ArmClient(
        credential,
        endpoint=cfg.arm_endpoint,
        timeout=cfg.request_timeout,
        session=http,
    )

    subscriptions = drain(list_subscriptions(client))
    if not subscriptions:
        raise EmptyResultError("No subscriptions found for this user in this tenant.")

    subscription_id = resolve(
        [(s.subscription_id, s.display_name) for s in subscriptions],
        read=read,
        write=write,
    )
    logger.info("Listing key vaults in subscription %s", subscription_id)

    vaults = list_vaults(
        client,
        subscription_id,
        resource_group=cfg.resource_group,
        top=cfg.vault_page_size,
        follow_pages=cfg.follow_vault_pages,
    )

    found: list[Vault] = []
    with vaults:
        write("Resources Found:")
        for vault in vaults:
            write(f"\t{vault.name}")
            found.append(vault)
        vaults.raise_for_error()
    return found
