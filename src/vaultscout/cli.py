from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Sequence

from pydantic import ValidationError

from vaultscout import __version__
from vaultscout.azure.auth.config import AuthConfig
from vaultscout.config import ExplorerConfig
from vaultscout.errors import VaultScoutError
from vaultscout.explorer import run

logger = logging.getLogger(__name__)

EXIT_INVALID_CONFIG = 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vaultscout",
        description="Sign in with a device code and list the key vaults in a subscription.",
    )
    parser.add_argument(
        "-rg",
        "--resource-group",
        dest="resource_group",
        default=None,
        help="The name of the resource group to scrape for key vaults.",
    )
    parser.add_argument(
        "--tenant",
        dest="tenant_id",
        default=None,
        help="Directory to sign in against (default: common).",
    )
    parser.add_argument(
        "--client-id",
        dest="client_id",
        default=None,
        help="Public client id used for the device code (default: Azure CLI).",
    )
    parser.add_argument(
        "--first-page-only",
        action="store_true",
        help="List only the first page of key vaults.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug output).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config(args: argparse.Namespace) -> ExplorerConfig:
    """Environment first, command line flags on top."""
    auth_overrides: dict[str, Any] = {}
    if args.tenant_id is not None:
        auth_overrides["tenant_id"] = args.tenant_id
    if args.client_id is not None:
        auth_overrides["client_id"] = args.client_id

    overrides: dict[str, Any] = {"auth": AuthConfig(**auth_overrides)}
    if args.resource_group is not None:
        overrides["resource_group"] = args.resource_group
    if args.first_page_only:
        overrides["follow_vault_pages"] = False
    return ExplorerConfig(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = _load_config(args)
    except ValidationError as exc:
        print(f"ERROR: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    try:
        run(config)
    except VaultScoutError as exc:
        logger.debug("Run failed", exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return exc.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main())
