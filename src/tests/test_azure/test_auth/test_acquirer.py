from __future__ import annotations

import pytest
from azure.core.exceptions import ClientAuthenticationError, ServiceRequestError

from fakes import ARM, FakeSession, FakeTokenCredential, arm_page, tenant
from vaultscout.azure.auth.acquirer import acquire
from vaultscout.config import ExplorerConfig
from vaultscout.errors import AuthError, FetchError, TenantCountError

TENANTS = f"{ARM}/tenants"
SCOPE = f"{ARM}/.default"


def test_acquire__single_tenant_exchanges_for_scoped_credential(
    session: FakeSession, token_credential: FakeTokenCredential, credential_factory
) -> None:
    session.routes[TENANTS] = arm_page([tenant("T1")])
    cfg = ExplorerConfig()

    cred = acquire(cfg, session=session, credential_factory=credential_factory)

    assert cred.tenant_id == "T1"
    assert cred.token == "token-T1"
    # one interactive credential, asked twice: generic then tenant-scoped
    assert len(credential_factory.received) == 1
    assert credential_factory.received[0]["config"] is cfg.auth
    assert token_credential.calls == [((SCOPE,), {}), ((SCOPE,), {"tenant_id": "T1"})]
    # the tenant listing used the generic token
    assert session.calls[0]["headers"] == {"Authorization": "Bearer token-common"}
    assert session.calls[0]["params"] == {"api-version": "2022-12-01"}


def test_acquire__tenants_across_pages_still_counted(
    session: FakeSession, credential_factory
) -> None:
    session.routes[TENANTS] = arm_page([], next_link=f"{TENANTS}?page=2")
    session.routes[f"{TENANTS}?page=2"] = arm_page([tenant("T1")])

    cred = acquire(ExplorerConfig(), session=session, credential_factory=credential_factory)
    assert cred.tenant_id == "T1"


@pytest.mark.parametrize("tenant_ids", [[], ["T1", "T2"], ["T1", "T2", "T3"]])
def test_acquire__zero_or_many_tenants_is_fatal(
    tenant_ids: list[str],
    session: FakeSession,
    token_credential: FakeTokenCredential,
    credential_factory,
) -> None:
    session.routes[TENANTS] = arm_page([tenant(t) for t in tenant_ids])

    with pytest.raises(TenantCountError, match="zero or multiple tenants") as info:
        acquire(ExplorerConfig(), session=session, credential_factory=credential_factory)

    assert info.value.count == len(tenant_ids)
    # no exchange, no further requests
    assert len(token_credential.calls) == 1
    assert session.urls == [TENANTS]


def test_acquire__sign_in_failure_is_auth_error(session: FakeSession) -> None:
    failing = FakeTokenCredential(error=ClientAuthenticationError("code expired"))

    with pytest.raises(AuthError, match="code expired"):
        acquire(
            ExplorerConfig(),
            session=session,
            credential_factory=lambda config, **kwargs: failing,
        )
    assert session.calls == []


def test_acquire__exchange_failure_is_auth_error(session: FakeSession) -> None:
    session.routes[TENANTS] = arm_page([tenant("T1")])
    failing = FakeTokenCredential(
        error=ClientAuthenticationError("consent required"), only_for_tenant=True
    )

    with pytest.raises(AuthError, match="tenant T1"):
        acquire(
            ExplorerConfig(),
            session=session,
            credential_factory=lambda config, **kwargs: failing,
        )


def test_acquire__tenant_listing_failure_is_fetch_error(
    session: FakeSession, credential_factory
) -> None:
    # no route: the fake session answers 404
    with pytest.raises(FetchError) as info:
        acquire(ExplorerConfig(), session=session, credential_factory=credential_factory)
    assert info.value.status_code == 404


def test_acquire__passes_write_to_factory(session: FakeSession, credential_factory) -> None:
    session.routes[TENANTS] = arm_page([tenant("T1")])
    lines: list[str] = []

    acquire(
        ExplorerConfig(),
        write=lines.append,
        session=session,
        credential_factory=credential_factory,
    )
    assert credential_factory.received[0]["write"] == lines.append


def test_acquire__network_failure_during_sign_in_is_auth_error(
    session: FakeSession,
) -> None:
    failing = FakeTokenCredential(error=ServiceRequestError("connection refused"))

    with pytest.raises(AuthError, match="connection refused") as info:
        acquire(
            ExplorerConfig(),
            session=session,
            credential_factory=lambda config, **kwargs: failing,
        )
    assert isinstance(info.value.__cause__, ServiceRequestError)
    assert session.calls == []
