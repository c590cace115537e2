from __future__ import annotations

import os
import time
from typing import Any, Iterator

import pytest

from fakes import FakeSession, FakeTokenCredential
from vaultscout.azure.auth.credential import Credential


@pytest.fixture(autouse=True)
def clear_azure_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove AZURE_* and VAULTSCOUT_* vars to prevent cross-test leakage.

    Yields:
        Iterator[None]: Context manager semantics for pytest.
    """
    to_clear = [
        k for k in os.environ.keys() if k.upper().startswith(("AZURE_", "VAULTSCOUT_"))
    ]
    for k in to_clear:
        monkeypatch.delenv(k, raising=False)
    yield


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def credential() -> Credential:
    return Credential(token="tkn", expires_on=int(time.time()) + 3600, tenant_id="T1")


@pytest.fixture()
def token_credential() -> FakeTokenCredential:
    return FakeTokenCredential()


@pytest.fixture()
def credential_factory(token_credential: FakeTokenCredential):
    """Factory with the same call shape as ``get_credential``.

    Every call is appended to ``credential_factory.received``.
    """
    received: list[dict[str, Any]] = []

    def _factory(config: Any, **kwargs: Any) -> FakeTokenCredential:
        received.append({"config": config, **kwargs})
        return token_credential

    _factory.received = received  # type: ignore[attr-defined]
    return _factory
