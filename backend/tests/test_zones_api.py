"""Tests for zone, authority and validation API endpoints."""

import pytest
from httpx import AsyncClient

AUTHORITY = {"X-Caller-Identity": "0xAuthority"}
OUTSIDER = {"X-Caller-Identity": "0xOutsider"}

ZONE_BODY = {
    "name": "Valley",
    "minLatitude": 10_000_000,
    "maxLatitude": 20_000_000,
    "minLongitude": 70_000_000,
    "maxLongitude": 80_000_000,
}


@pytest.mark.asyncio
async def test_register_zone_returns_sequential_ids(client: AsyncClient):
    first = await client.post("/api/zones", json=ZONE_BODY, headers=AUTHORITY)
    second = await client.post("/api/zones", json=ZONE_BODY, headers=AUTHORITY)

    assert first.status_code == 201
    assert first.json() == {"zoneId": 1}
    assert second.json() == {"zoneId": 2}

    count = await client.get("/api/zones/count")
    assert count.json() == {"count": 2}


@pytest.mark.asyncio
async def test_register_zone_accepts_snake_case(client: AsyncClient):
    body = {
        "name": "Valley",
        "min_latitude": 1,
        "max_latitude": 2,
        "min_longitude": 3,
        "max_longitude": 4,
    }
    response = await client.post("/api/zones", json=body, headers=AUTHORITY)
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_register_zone_invalid_coordinates(client: AsyncClient):
    body = {**ZONE_BODY, "minLatitude": 20, "maxLatitude": 10}
    response = await client.post("/api/zones", json=body, headers=AUTHORITY)

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_coordinates"
    assert (await client.get("/api/zones/count")).json() == {"count": 0}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override",
    [
        {"minLatitude": -(2**70)},
        {"maxLatitude": 90_000_001},
        {"minLongitude": -180_000_001},
        {"maxLongitude": 2**64},
    ],
)
async def test_register_zone_coordinates_outside_globe(client: AsyncClient, override):
    response = await client.post("/api/zones", json={**ZONE_BODY, **override}, headers=AUTHORITY)

    assert response.status_code == 422
    assert (await client.get("/api/zones/count")).json() == {"count": 0}


@pytest.mark.asyncio
async def test_register_zone_requires_authority(client: AsyncClient):
    response = await client.post("/api/zones", json=ZONE_BODY, headers=OUTSIDER)
    assert response.status_code == 403
    assert response.json()["error"] == "unauthorized"


@pytest.mark.asyncio
async def test_missing_caller_header(client: AsyncClient):
    response = await client.post("/api/zones", json=ZONE_BODY)
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_address"


@pytest.mark.asyncio
async def test_get_zone_structure(client: AsyncClient):
    await client.post("/api/zones", json=ZONE_BODY, headers=AUTHORITY)

    response = await client.get("/api/zones/1")
    assert response.status_code == 200

    zone = response.json()
    assert zone["id"] == 1
    assert zone["name"] == "Valley"
    assert zone["minLatitude"] == 10_000_000
    assert zone["maxLongitude"] == 80_000_000
    assert zone["isActive"] is True
    assert zone["exists"] is True


@pytest.mark.asyncio
async def test_get_unknown_zone_is_empty_unless_strict(client: AsyncClient):
    response = await client.get("/api/zones/9")
    assert response.status_code == 200
    assert response.json()["exists"] is False
    assert response.json()["id"] == 0

    strict = await client.get("/api/zones/9", params={"strict": True})
    assert strict.status_code == 404
    assert strict.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_oversized_zone_id(client: AsyncClient):
    await client.post("/api/zones", json=ZONE_BODY, headers=AUTHORITY)

    response = await client.get("/api/zones/99999999999999999999")
    assert response.status_code == 422

    largest = await client.get(f"/api/zones/{2**63 - 1}")
    assert largest.status_code == 200
    assert largest.json()["exists"] is False

    body = {k: v for k, v in ZONE_BODY.items() if k != "name"}
    update = await client.put(
        "/api/zones/99999999999999999999/coordinates", json=body, headers=AUTHORITY
    )
    assert update.status_code == 422


@pytest.mark.asyncio
async def test_deactivate_zone(client: AsyncClient):
    await client.post("/api/zones", json=ZONE_BODY, headers=AUTHORITY)

    response = await client.patch("/api/zones/1/active", json={"isActive": False}, headers=AUTHORITY)
    assert response.status_code == 200
    assert response.json()["isActive"] is False

    active = await client.get("/api/zones", params={"active_only": True})
    assert active.json() == []


@pytest.mark.asyncio
async def test_deactivate_zone_by_outsider_is_rejected(client: AsyncClient):
    await client.post("/api/zones", json=ZONE_BODY, headers=AUTHORITY)

    response = await client.patch("/api/zones/1/active", json={"isActive": False}, headers=OUTSIDER)
    assert response.status_code == 403
    assert (await client.get("/api/zones/1")).json()["isActive"] is True


@pytest.mark.asyncio
async def test_update_unknown_zone(client: AsyncClient):
    body = {k: v for k, v in ZONE_BODY.items() if k != "name"}
    response = await client.put("/api/zones/99/coordinates", json=body, headers=AUTHORITY)
    assert response.status_code == 404
    assert response.json()["error"] == "invalid_zone_id"


@pytest.mark.asyncio
async def test_update_zone_coordinates(client: AsyncClient):
    await client.post("/api/zones", json=ZONE_BODY, headers=AUTHORITY)
    body = {"minLatitude": 1, "maxLatitude": 2, "minLongitude": 3, "maxLongitude": 4}

    response = await client.put("/api/zones/1/coordinates", json=body, headers=AUTHORITY)
    assert response.status_code == 200
    assert response.json()["minLatitude"] == 1
    assert response.json()["maxLongitude"] == 4


@pytest.mark.asyncio
async def test_validate_first_match(client: AsyncClient):
    await client.post("/api/zones", json=ZONE_BODY, headers=AUTHORITY)
    await client.post("/api/zones", json=ZONE_BODY, headers=AUTHORITY)

    inside = await client.get("/api/validate", params={"lat": 15_000_000, "lon": 75_000_000})
    assert inside.json() == {"matched": True, "zoneId": 1}

    outside = await client.get("/api/validate", params={"lat": 5_000_000, "lon": 75_000_000})
    assert outside.json() == {"matched": False, "zoneId": 0}

    off_globe = await client.get("/api/validate", params={"lat": 91_000_000, "lon": 75_000_000})
    assert off_globe.status_code == 422


@pytest.mark.asyncio
async def test_transfer_authority(client: AsyncClient):
    response = await client.post(
        "/api/authority/transfer",
        json={"newAuthority": "0xNewAuthority"},
        headers=AUTHORITY,
    )
    assert response.status_code == 200
    assert response.json() == {"authority": "0xNewAuthority"}

    rejected = await client.post("/api/zones", json=ZONE_BODY, headers=AUTHORITY)
    assert rejected.status_code == 403


@pytest.mark.asyncio
async def test_transfer_authority_to_empty_identity(client: AsyncClient):
    response = await client.post(
        "/api/authority/transfer",
        json={"newAuthority": ""},
        headers=AUTHORITY,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_address"
    assert (await client.get("/api/authority")).json() == {"authority": "0xAuthority"}
