from __future__ import annotations

import pytest

from fakes import ARM, FakeSession, arm_page, subscription, vault
from vaultscout.azure.arm.client import ArmClient
from vaultscout.azure.arm.listings import (
    list_subscriptions,
    list_tenants,
    list_vaults,
    vaults_path,
)
from vaultscout.azure.arm.paging import drain
from vaultscout.azure.auth.credential import Credential
from vaultscout.errors import FetchError

VAULTS = f"{ARM}/subscriptions/S1/providers/Microsoft.KeyVault/vaults"


@pytest.fixture()
def client(credential: Credential, session: FakeSession) -> ArmClient:
    return ArmClient(credential, session=session)


def test_vaults_path__subscription_and_resource_group() -> None:
    assert vaults_path("S1") == "/subscriptions/S1/providers/Microsoft.KeyVault/vaults"
    assert (
        vaults_path("S1", "rg1")
        == "/subscriptions/S1/resourceGroups/rg1/providers/Microsoft.KeyVault/vaults"
    )


def test_list_tenants(client: ArmClient, session: FakeSession) -> None:
    session.routes[f"{ARM}/tenants"] = arm_page(
        [{"tenantId": "T1", "displayName": "Contoso", "defaultDomain": "contoso.com"}]
    )

    tenants = drain(list_tenants(client))

    assert [(t.tenant_id, t.display_name, t.default_domain) for t in tenants] == [
        ("T1", "Contoso", "contoso.com")
    ]


def test_list_subscriptions__two_pages(client: ArmClient, session: FakeSession) -> None:
    session.routes[f"{ARM}/subscriptions"] = arm_page(
        [subscription("S1")], next_link="c1"
    )
    session.routes["c1"] = arm_page([subscription("S2")])

    subs = drain(list_subscriptions(client))

    assert [s.subscription_id for s in subs] == ["S1", "S2"]
    assert session.urls == [f"{ARM}/subscriptions", "c1"]


def test_list_subscriptions__failure_on_second_page(
    client: ArmClient, session: FakeSession
) -> None:
    session.routes[f"{ARM}/subscriptions"] = arm_page(
        [subscription("S1")], next_link=f"{ARM}/missing"
    )

    enumerator = list_subscriptions(client)
    items = list(enumerator)

    assert [s.subscription_id for s in items] == ["S1"]
    with pytest.raises(FetchError) as info:
        enumerator.raise_for_error()
    assert info.value.status_code == 404


def test_list_vaults__follows_pages_with_page_size(
    client: ArmClient, session: FakeSession
) -> None:
    session.routes[VAULTS] = arm_page([vault("S1", "V1")], next_link=f"{VAULTS}?p=2")
    session.routes[f"{VAULTS}?p=2"] = arm_page([vault("S1", "V2")])

    vaults = drain(list_vaults(client, "S1"))

    assert [v.name for v in vaults] == ["V1", "V2"]
    assert session.calls[0]["params"] == {"api-version": "2022-07-01", "$top": 30}


def test_list_vaults__first_page_only(client: ArmClient, session: FakeSession) -> None:
    session.routes[VAULTS] = arm_page([vault("S1", "V1")], next_link=f"{VAULTS}?p=2")

    enumerator = list_vaults(client, "S1", top=1, follow_pages=False)
    vaults = drain(enumerator)

    assert [v.name for v in vaults] == ["V1"]
    assert session.urls == [VAULTS]
    assert enumerator.rebind_count == 0


def test_list_vaults__resource_group_scope(client: ArmClient, session: FakeSession) -> None:
    url = f"{ARM}/subscriptions/S1/resourceGroups/rg1/providers/Microsoft.KeyVault/vaults"
    session.routes[url] = arm_page([vault("S1", "V1", resource_group="rg1")])

    vaults = drain(list_vaults(client, "S1", resource_group="rg1"))

    assert [(v.name, v.resource_group) for v in vaults] == [("V1", "rg1")]
