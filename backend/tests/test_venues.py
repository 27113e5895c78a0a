"""
Tests for venue endpoints: public listing and admin management.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from conftest import create_venue
from venue_platform.api.routes import venues as venue_routes
from venue_platform.models.venue import Venue

VENUE = {
    "name": "Harbour Stadium",
    "description": "Open-air stadium next to the harbour",
    "venue_type": "entertainment",
    "location": "Harbour Road 12, Baku",
    "capacity": 2000,
    "amenities": ["parking", " ", "stage"],
    "contact_phone": "+994551112233",
    "contact_email": "Bookings@Harbour.example.com",
}


@pytest.mark.asyncio
async def test_admin_creates_venue(client: AsyncClient, admin_headers):
    response = await client.post("/api/venues/", json=VENUE, headers=admin_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["amenities"] == ["parking", "stage"]
    assert data["contact_email"] == "bookings@harbour.example.com"
    assert data["is_active"] is True
    assert data["rating"] == 0


@pytest.mark.asyncio
async def test_regular_user_cannot_create_venue(client: AsyncClient, auth_headers):
    response = await client.post("/api/venues/", json=VENUE, headers=auth_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"


@pytest.mark.asyncio
async def test_venue_validation(client: AsyncClient, admin_headers):
    bad = {**VENUE, "capacity": 0, "contact_phone": "012", "venue_type": "museum"}
    response = await client.post("/api/venues/", json=bad, headers=admin_headers)
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert {"capacity", "contact_phone", "venue_type"} <= set(errors)


@pytest.mark.asyncio
async def test_public_list_hides_inactive(client: AsyncClient, test_venue, inactive_venue):
    response = await client.get("/api/venues/")
    assert response.status_code == 200
    data = response.json()
    assert [v["id"] for v in data["venues"]] == [test_venue.id]
    assert data["cached"] is False
    assert data["pagination"]["total_items"] == 1


@pytest.mark.asyncio
async def test_list_filters(client: AsyncClient, db_session, admin_headers):
    await create_venue(db_session, name="Small Court")
    await client.post("/api/venues/", json=VENUE, headers=admin_headers)

    by_type = await client.get("/api/venues/?venue_type=entertainment")
    assert [v["name"] for v in by_type.json()["venues"]] == ["Harbour Stadium"]

    by_search = await client.get("/api/venues/?search=harbour")
    assert by_search.json()["pagination"]["total_items"] == 1

    by_capacity = await client.get("/api/venues/?min_capacity=1000")
    assert [v["name"] for v in by_capacity.json()["venues"]] == ["Harbour Stadium"]

    small = await client.get("/api/venues/?max_capacity=1000")
    assert [v["name"] for v in small.json()["venues"]] == ["Small Court"]


@pytest.mark.asyncio
async def test_get_inactive_venue_is_404(client: AsyncClient, inactive_venue):
    response = await client.get(f"/api/venues/{inactive_venue.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_venue(client: AsyncClient, admin_headers, test_venue):
    response = await client.put(
        f"/api/venues/{test_venue.id}",
        json={**VENUE, "name": "Renamed Arena"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Renamed Arena"


@pytest.mark.asyncio
async def test_soft_delete_and_restore(client: AsyncClient, admin_headers, test_venue):
    deleted = await client.delete(f"/api/venues/{test_venue.id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert (await client.get(f"/api/venues/{test_venue.id}")).status_code == 404

    restored = await client.put(f"/api/venues/{test_venue.id}/restore", headers=admin_headers)
    assert restored.status_code == 200
    assert restored.json()["is_active"] is True
    assert (await client.get(f"/api/venues/{test_venue.id}")).status_code == 200


@pytest.mark.asyncio
async def test_venue_stats(client: AsyncClient, admin_headers, test_venue, inactive_venue):
    response = await client.get("/api/venues/stats/overview", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total_venues"] == 2
    assert data["active_venues"] == 1
    assert data["inactive_venues"] == 1
    assert data["sports_venues"] == 1


@pytest.mark.asyncio
async def test_cache_is_invalidated_after_commit(client: AsyncClient, admin_headers, test_venue, session_factory, monkeypatch):
    """A listing refilled right after invalidation must already see the write."""
    seen = []

    async def record_committed_state():
        async with session_factory() as session:
            result = await session.execute(select(Venue.name, Venue.is_active).order_by(Venue.id))
            seen.append(result.all())

    monkeypatch.setattr(venue_routes, "invalidate_venue_cache", record_committed_state)

    created = await client.post("/api/venues/", json=VENUE, headers=admin_headers)
    assert created.status_code == 201
    assert (VENUE["name"], True) in seen[-1]

    await client.delete(f"/api/venues/{test_venue.id}", headers=admin_headers)
    assert (test_venue.name, False) in seen[-1]

    await client.put(f"/api/venues/{test_venue.id}/restore", headers=admin_headers)
    assert (test_venue.name, True) in seen[-1]
