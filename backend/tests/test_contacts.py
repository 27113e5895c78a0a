"""
Tests for contact endpoints.
"""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from venue_platform.services.trends import monthly_counts

MESSAGE = {
    "name": "Rashad",
    "email": "rashad@example.com",
    "phone": "+994501112233",
    "subject": "Group booking",
    "message": "Can we book the arena for a company event?",
}


@pytest.mark.asyncio
async def test_anyone_can_write_in(client: AsyncClient):
    response = await client.post("/api/contacts/", json=MESSAGE)
    assert response.status_code == 201
    data = response.json()
    assert data["is_resolved"] is False
    assert data["resolved_at"] is None


@pytest.mark.asyncio
async def test_admin_only_reads(client: AsyncClient, auth_headers):
    assert (await client.get("/api/contacts/")).status_code == 401
    assert (await client.get("/api/contacts/", headers=auth_headers)).status_code == 403


@pytest.mark.asyncio
async def test_resolve_cycle(client: AsyncClient, admin_headers):
    created = await client.post("/api/contacts/", json=MESSAGE)
    contact_id = created.json()["id"]

    resolved = await client.put(f"/api/contacts/{contact_id}/resolve", headers=admin_headers)
    assert resolved.status_code == 200
    assert resolved.json()["is_resolved"] is True
    assert resolved.json()["resolved_at"] is not None

    again = await client.put(f"/api/contacts/{contact_id}/resolve", headers=admin_headers)
    assert again.status_code == 400

    reopened = await client.put(f"/api/contacts/{contact_id}/unresolve", headers=admin_headers)
    assert reopened.json()["resolved_at"] is None
    assert (await client.put(f"/api/contacts/{contact_id}/unresolve", headers=admin_headers)).status_code == 400


@pytest.mark.asyncio
async def test_list_filter_and_delete(client: AsyncClient, admin_headers):
    first = await client.post("/api/contacts/", json=MESSAGE)
    await client.post("/api/contacts/", json={**MESSAGE, "subject": "Lost and found"})
    await client.put(f"/api/contacts/{first.json()['id']}/resolve", headers=admin_headers)

    pending = await client.get("/api/contacts/?is_resolved=false", headers=admin_headers)
    assert [c["subject"] for c in pending.json()["contacts"]] == ["Lost and found"]

    assert (await client.delete(f"/api/contacts/{first.json()['id']}", headers=admin_headers)).status_code == 200
    assert (await client.get(f"/api/contacts/{first.json()['id']}", headers=admin_headers)).status_code == 404


@pytest.mark.asyncio
async def test_contact_stats(client: AsyncClient, admin_headers):
    await client.post("/api/contacts/", json=MESSAGE)
    response = await client.get("/api/contacts/stats/overview", headers=admin_headers)
    data = response.json()
    assert data["total_contacts"] == 1
    assert data["pending_contacts"] == 1
    assert data["recent_contacts_30_days"] == 1
    assert sum(m["count"] for m in data["monthly_trends"]) == 1


def test_monthly_counts_buckets_and_window():
    now = datetime(2030, 6, 15, tzinfo=timezone.utc)
    stamps = [
        datetime(2030, 6, 1, tzinfo=timezone.utc),
        datetime(2030, 6, 10, tzinfo=timezone.utc),
        datetime(2030, 5, 3, tzinfo=timezone.utc),
        datetime(2029, 1, 1, tzinfo=timezone.utc),  # outside the window
    ]
    assert monthly_counts(stamps, months=3, now=now) == [
        {"year": 2030, "month": 5, "count": 1},
        {"year": 2030, "month": 6, "count": 2},
    ]
