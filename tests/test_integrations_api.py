"""Tests for integration settings endpoints"""

import pytest

from vira.models.integration import IntegrationStatus
from vira.services.integrations import resolve_status


@pytest.fixture
def integrations_url(test_tenant):
    return f"/tenants/{test_tenant.id}/integrations"


@pytest.mark.parametrize(
    "config, expected",
    [
        (None, IntegrationStatus.DISCONNECTED),
        ({}, IntegrationStatus.DISCONNECTED),
        ({"api_key": "secret"}, IntegrationStatus.CONFIGURED),
    ],
)
def test_resolve_status(config, expected):
    assert resolve_status(config) == expected


async def test_no_integrations_by_default(client, integrations_url):
    response = await client.get(integrations_url)

    assert response.status_code == 200
    assert response.json() == []


async def test_configure_integration(client, integrations_url):
    response = await client.put(
        integrations_url, json={"type": "WHATSAPP", "config": {"phone": "+77001112233"}}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "WHATSAPP"
    assert data["status"] == "CONFIGURED"
    assert data["config"] == {"phone": "+77001112233"}

    fetched = await client.get(f"{integrations_url}/WHATSAPP")
    assert fetched.json()["id"] == data["id"]


async def test_one_row_per_type(client, integrations_url):
    first = (
        await client.put(integrations_url, json={"type": "KASPI", "config": {"merchant": "1"}})
    ).json()
    second = (await client.put(integrations_url, json={"type": "KASPI", "config": {}})).json()

    assert second["id"] == first["id"]
    assert second["status"] == "DISCONNECTED"
    assert second["config"] == {}

    listing = (await client.get(integrations_url)).json()
    assert [i["type"] for i in listing] == ["KASPI"]


async def test_unconfigured_integration_is_not_found(client, integrations_url):
    response = await client.get(f"{integrations_url}/POS_IIKO")

    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


async def test_unknown_type_is_rejected(client, integrations_url):
    response = await client.put(integrations_url, json={"type": "TELEGRAM", "config": {}})
    assert response.status_code == 422

    response = await client.get(f"{integrations_url}/TELEGRAM")
    assert response.status_code == 422


async def test_integrations_are_scoped_to_tenant(client, test_tenant, other_tenant):
    tenant_id, other_id = test_tenant.id, other_tenant.id
    await client.put(
        f"/tenants/{tenant_id}/integrations", json={"type": "POS_RKEEPER", "config": {"host": "pos"}}
    )

    assert (await client.get(f"/tenants/{other_id}/integrations")).json() == []
    response = await client.get(f"/tenants/{other_id}/integrations/POS_RKEEPER")
    assert response.status_code == 404
