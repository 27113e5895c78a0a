"""
Tests for partner endpoints.
"""

import pytest
from httpx import AsyncClient

PARTNER = {
    "company_name": "Goal Sports LLC",
    "contact_person": "Leyla Mammadova",
    "email": "hello@goalsports.example.com",
    "phone": "+994701234567",
    "partnership_type": "Sponsor",
    "description": "Kit and equipment sponsor for local leagues",
    "website": "https://goalsports.example.com",
}


@pytest.mark.asyncio
async def test_admin_creates_partner(client: AsyncClient, admin_headers):
    response = await client.post("/api/partners/", json=PARTNER, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["is_active"] is True


@pytest.mark.asyncio
async def test_user_cannot_create_partner(client: AsyncClient, auth_headers):
    response = await client.post("/api/partners/", json=PARTNER, headers=auth_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_duplicate_partner_email(client: AsyncClient, admin_headers):
    await client.post("/api/partners/", json=PARTNER, headers=admin_headers)
    again = await client.post(
        "/api/partners/",
        json={**PARTNER, "company_name": "Another Co", "email": "HELLO@goalsports.example.com"},
        headers=admin_headers,
    )
    assert again.status_code == 409


@pytest.mark.asyncio
async def test_bad_website(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/partners/", json={**PARTNER, "website": "goalsports.example.com"}, headers=admin_headers
    )
    assert response.status_code == 400
    assert "website" in response.json()["errors"]


@pytest.mark.asyncio
async def test_list_types_and_soft_delete(client: AsyncClient, admin_headers):
    first = await client.post("/api/partners/", json=PARTNER, headers=admin_headers)
    await client.post(
        "/api/partners/",
        json={**PARTNER, "company_name": "Stage Lights", "email": "info@stagelights.example.com",
              "partnership_type": "Supplier"},
        headers=admin_headers,
    )

    listing = await client.get("/api/partners/?partnership_type=sponsor")
    assert [p["company_name"] for p in listing.json()["partners"]] == ["Goal Sports LLC"]

    types = await client.get("/api/partners/types/list")
    assert types.json() == ["Sponsor", "Supplier"]

    partner_id = first.json()["id"]
    assert (await client.delete(f"/api/partners/{partner_id}", headers=admin_headers)).status_code == 200
    assert (await client.get(f"/api/partners/{partner_id}")).status_code == 404
    assert (await client.get("/api/partners/types/list")).json() == ["Supplier"]

    restored = await client.put(f"/api/partners/{partner_id}/restore", headers=admin_headers)
    assert restored.json()["is_active"] is True


@pytest.mark.asyncio
async def test_partner_stats(client: AsyncClient, admin_headers):
    await client.post("/api/partners/", json=PARTNER, headers=admin_headers)
    response = await client.get("/api/partners/stats/overview", headers=admin_headers)
    data = response.json()
    assert data["total_partners"] == 1
    assert data["partnership_type_distribution"] == [{"partnership_type": "Sponsor", "count": 1}]
