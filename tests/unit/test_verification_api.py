"""Tests for the admin phone verification queue."""

import httpx
import pytest

QUEUE = "/api/admin/users/verification"
PHONE = "/api/auth/phone-verification"


@pytest.fixture
async def requested(client: httpx.AsyncClient, make_user) -> dict:
    """A user with an open verification request; returns the queue row."""
    user, headers = await make_user(name="Bilal", phone="+923331112222")
    r = await client.post(PHONE, headers=headers)
    assert r.status_code == 200
    return {"user": user, "verification_id": r.json()["verification"]["id"]}


async def test_queue_is_admin_only(client: httpx.AsyncClient, user_headers: dict) -> None:
    r = await client.get(QUEUE, headers=user_headers)
    assert r.status_code == 403


async def test_pending_tab_shows_code_for_the_call(
    client: httpx.AsyncClient, admin_headers: dict, requested: dict
) -> None:
    r = await client.get(QUEUE, headers=admin_headers)

    [row] = r.json()["data"]
    assert row["id"] == requested["verification_id"]
    assert len(row["otp"]) == 6
    assert row["user"]["name"] == "Bilal"
    assert (await client.get(f"{QUEUE}/pending-count", headers=admin_headers)).json() == {"count": 1}

    r = await client.get(QUEUE, params={"search": "nobody"}, headers=admin_headers)
    assert r.json()["data"] == []


async def test_verify_request_clears_queue(client: httpx.AsyncClient, admin_headers: dict, requested: dict) -> None:
    r = await client.put(
        QUEUE, json={"action": "verify", "verificationId": requested["verification_id"]}, headers=admin_headers
    )
    assert r.json()["message"] == "Phone number verified for Bilal"

    assert (await client.get(f"{QUEUE}/pending-count", headers=admin_headers)).json() == {"count": 0}
    r = await client.get(QUEUE, params={"tab": "all"}, headers=admin_headers)
    [row] = r.json()["data"]
    assert row["phoneVerified"] is True


async def test_reject_expires_request(client: httpx.AsyncClient, admin_headers: dict, requested: dict) -> None:
    r = await client.put(
        QUEUE, json={"action": "reject", "verificationId": requested["verification_id"]}, headers=admin_headers
    )
    assert r.json()["message"] == "Verification request rejected"

    assert (await client.get(QUEUE, headers=admin_headers)).json()["data"] == []
    r = await client.get(QUEUE, params={"tab": "unverified"}, headers=admin_headers)
    [row] = r.json()["data"]
    assert row["pendingVerification"] is None


async def test_verify_user_directly(client: httpx.AsyncClient, admin_headers: dict, make_user) -> None:
    user, _ = await make_user(name="Sana", phone="+923214445555")

    r = await client.put(QUEUE, json={"action": "verify", "userId": user.id}, headers=admin_headers)
    assert r.json()["message"] == "Phone number verified for Sana"

    r = await client.put(QUEUE, json={"action": "verify"}, headers=admin_headers)
    assert r.json() == {"error": "verificationId or userId required"}


async def test_reminders_count_failures_without_mail(
    client: httpx.AsyncClient, admin_headers: dict, make_user
) -> None:
    user, _ = await make_user(phone="+923215556666")
    verified, _ = await make_user(phone="+923217778888", phone_verified=True)

    r = await client.post(QUEUE, json={"action": "send_reminder", "userIds": [user.id]}, headers=admin_headers)
    assert r.json() == {
        "success": True,
        "message": "Reminder sent to 0 user(s), 1 failed",
        "sent": 0,
        "failed": 1,
    }

    r = await client.post(QUEUE, json={"action": "send_reminder", "userIds": [verified.id]}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json() == {"error": "No eligible users found"}

    r = await client.post(QUEUE, json={"action": "send_reminder", "userIds": []}, headers=admin_headers)
    assert r.json() == {"error": "userIds array required"}
