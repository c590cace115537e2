"""Error types for vaultscout.

Every fatal condition maps to its own exit code so the CLI can report it
without inspecting messages.
"""

from __future__ import annotations


class VaultScoutError(Exception):
    """Base class for user-facing errors."""

    exit_code: int = 1


class AuthError(VaultScoutError):
    """Device-code initiation, polling or token exchange failed."""

    exit_code = 2


class TenantCountError(VaultScoutError):
    """The signed-in account is not associated with exactly one tenant."""

    exit_code = 3

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__("zero or multiple tenants associated with this account")


class FetchError(VaultScoutError):
    """A page request against Azure Resource Manager failed."""

    exit_code = 4

    def __init__(
        self, message: str, *, url: str | None = None, status_code: int | None = None
    ) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class EmptyResultError(VaultScoutError):
    """Nothing to choose from."""

    exit_code = 5


class SelectionError(VaultScoutError):
    """The operator did not provide a usable selection."""

    exit_code = 6


class EnumerationProtocolError(RuntimeError):
    """The terminal outcome was read before the item stream was drained."""
