"""
Tests for identity endpoints: login by email and signup.
"""

import pytest
from httpx import AsyncClient

from tests.helpers import SATURDAY


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient):
    """Known email returns the user record."""
    response = await client.post("/api/v1/auth/login", json={"email": "alice@test.com"})
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "user_123"
    assert data["role"] == "member"


@pytest.mark.asyncio
async def test_login_is_case_insensitive(client: AsyncClient):
    response = await client.post("/api/v1/auth/login", json={"email": "John@Test.com"})
    assert response.status_code == 200
    assert response.json()["id"] == "coach1"


@pytest.mark.asyncio
async def test_login_unknown_email(client: AsyncClient):
    """Unknown email returns 401."""
    response = await client.post("/api/v1/auth/login", json={"email": "nobody@test.com"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_signup_member(client: AsyncClient):
    response = await client.post("/api/v1/auth/signup", json={
        "name": "Carol",
        "email": "carol@test.com",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "member"
    assert data["id"].startswith("user_")

    # New id works as a caller identity straight away
    mine = await client.get("/api/v1/bookings/", headers={"X-User-Id": data["id"]})
    assert mine.status_code == 200
    assert mine.json() == []


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient):
    """Duplicate email returns 409, regardless of case."""
    response = await client.post("/api/v1/auth/signup", json={
        "name": "Alice Again",
        "email": "ALICE@test.com",
    })
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_signup_invalid_email(client: AsyncClient):
    response = await client.post("/api/v1/auth/signup", json={
        "name": "Broken",
        "email": "not-an-email",
    })
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_coach_signup_joins_catalog(client: AsyncClient):
    """A new coach can be booked and answers their own bookings."""
    signup = await client.post("/api/v1/auth/signup", json={
        "name": "Dana Coach",
        "email": "dana@test.com",
        "role": "coach",
    })
    coach_id = signup.json()["id"]

    profile = await client.get(f"/api/v1/coaches/{coach_id}")
    assert profile.status_code == 200
    assert profile.json()["specialty"] == "General Trainer"
    assert profile.json()["hourly_rate"] == "20"

    booking = await client.post(
        "/api/v1/bookings/",
        json={"court_id": "c3", "slot_start": f"{SATURDAY}T10:00:00", "coach_id": coach_id},
        headers={"X-User-Id": "user_123"},
    )
    assert booking.status_code == 201
    assert booking.json()["pricing"]["total"] == "40.00"

    decision = await client.post(
        f"/api/v1/bookings/{booking.json()['id']}/decision",
        json={"decision": "confirmed"},
        headers={"X-User-Id": coach_id},
    )
    assert decision.status_code == 200
