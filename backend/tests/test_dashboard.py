"""
Tests for the admin dashboard endpoints.
"""

import pytest
from httpx import AsyncClient

from conftest import create_appointment


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["stats", "analytics", "activities", "health"])
async def test_dashboard_requires_admin(client: AsyncClient, auth_headers, path):
    response = await client.get(f"/api/dashboard/{path}", headers=auth_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_stats(client: AsyncClient, db_session, admin_headers, test_user, test_venue, inactive_venue, future_start):
    await create_appointment(db_session, test_user, test_venue, future_start)
    await client.post(
        "/api/contacts/",
        json={
            "name": "Visitor",
            "email": "visitor@example.com",
            "phone": "+994501112233",
            "subject": "Opening hours",
            "message": "When does the arena open on Sundays?",
        },
    )

    response = await client.get("/api/dashboard/stats", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total_users"] == 2
    assert data["total_venues"] == 1
    assert data["pending_contacts"] == 1
    assert data["pending_appointments"] == 1
    assert data["total_reviews"] == 0


@pytest.mark.asyncio
async def test_analytics(client: AsyncClient, db_session, admin_headers, test_user, test_venue, future_start):
    await create_appointment(db_session, test_user, test_venue, future_start)
    await create_appointment(db_session, test_user, test_venue, future_start, status="cancelled")
    await client.post(
        "/api/reviews/",
        json={"entity_type": "venue", "entity_id": test_venue.id, "rating": 4, "comment": "Solid floor"},
        headers=admin_headers,
    )

    response = await client.get("/api/dashboard/analytics", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()

    assert sum(m["count"] for m in data["user_registration_trends"]) == 2
    assert {t["status"] for t in data["appointment_trends"]} == {"pending", "cancelled"}
    assert data["review_analytics"] == [{"entity_type": "venue", "count": 1, "average_rating": 4.0}]
    assert data["top_venues_by_appointments"] == [
        {"venue_id": test_venue.id, "venue_name": test_venue.name, "count": 2}
    ]
    assert data["top_blog_authors"] == []


@pytest.mark.asyncio
async def test_activities(client: AsyncClient, db_session, admin_headers, test_user, test_venue, future_start):
    await create_appointment(db_session, test_user, test_venue, future_start)

    response = await client.get("/api/dashboard/activities", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert len(data["recent_users"]) == 2
    assert data["recent_appointments"][0]["venue_name"] == test_venue.name
    assert data["recent_blogs"] == []
    assert "hashed_password" not in data["recent_users"][0]


@pytest.mark.asyncio
async def test_health(client: AsyncClient, admin_headers):
    response = await client.get("/api/dashboard/health", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["database"] == {"status": "connected"}
    assert data["cache"] == {"status": "disabled"}
    assert data["sweeper"]["enabled"] is False
    assert data["api"]["status"] == "operational"
