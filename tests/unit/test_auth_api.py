"""Tests for registration, login, account settings and self-service phone verification."""

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.db.models import PhoneVerification, User

PASSWORD = "Passw0rd!"

PHONE = "/api/auth/phone-verification"


async def test_register_then_login(client: httpx.AsyncClient) -> None:
    body = {"name": "Ayesha", "email": "Ayesha@Example.com", "password": "Secret123"}
    r = await client.post("/api/auth/register", json=body)
    assert r.status_code == 201
    assert r.json()["role"] == "USER"
    assert r.json()["accessToken"]

    r = await client.post("/api/auth/register", json={**body, "email": "ayesha@example.com"})
    assert r.status_code == 400
    assert r.json() == {"error": "Email already registered"}

    r = await client.post("/api/auth/login", json={"email": "AYESHA@example.com", "password": "Secret123"})
    assert r.status_code == 200


async def test_register_rejects_weak_password(client: httpx.AsyncClient) -> None:
    r = await client.post("/api/auth/register", json={"name": "A", "email": "a@example.com", "password": "letters-only"})

    assert r.status_code == 422
    assert "Password must include a letter and a number" in r.json()["error"]


async def test_login_failures(client: httpx.AsyncClient, make_user) -> None:
    await make_user(email="gone@example.com", status="SUSPENDED")

    r = await client.post("/api/auth/login", json={"email": "nobody@example.com", "password": PASSWORD})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid email or password"}

    r = await client.post("/api/auth/login", json={"email": "gone@example.com", "password": PASSWORD})
    assert r.status_code == 403


async def test_account_update_name_only(client: httpx.AsyncClient, user_headers: dict) -> None:
    r = await client.patch(
        "/api/auth/account",
        json={"name": " Member Two ", "email": "member@example.com", "phone": "+923001234567"},
        headers=user_headers,
    )

    body = r.json()
    assert body["message"] == "Account updated successfully"
    assert body["phoneChanged"] is False
    assert body["user"]["name"] == "Member Two"


async def test_account_email_in_use(client: httpx.AsyncClient, user_headers: dict, make_user) -> None:
    await make_user(email="taken@example.com")

    r = await client.patch(
        "/api/auth/account", json={"name": "Member", "email": "Taken@example.com"}, headers=user_headers
    )

    assert r.status_code == 400
    assert r.json() == {"error": "Email address is already in use"}


async def test_phone_change_starts_cooldown(client: httpx.AsyncClient, user_headers: dict) -> None:
    base = {"name": "Member", "email": "member@example.com"}

    r = await client.patch("/api/auth/account", json={**base, "phone": "+923007654321"}, headers=user_headers)
    body = r.json()
    assert body["phoneChanged"] is True
    assert body["message"] == "Account updated successfully. Phone verification required."
    assert body["user"]["phoneVerified"] is False
    assert body["user"]["phoneCooldownDays"] == 30

    r = await client.patch("/api/auth/account", json={**base, "phone": "+923000000000"}, headers=user_headers)
    assert r.status_code == 429
    assert r.json() == {"error": "You can change your phone number again in 30 days"}

    r = await client.get("/api/auth/account", headers=user_headers)
    assert r.json()["phone"] == "+923007654321"


async def test_change_password_rules(client: httpx.AsyncClient, user_headers: dict) -> None:
    path = "/api/auth/change-password"

    r = await client.post(path, json={"currentPassword": "wrong", "newPassword": "Another123"}, headers=user_headers)
    assert r.json() == {"error": "Current password is incorrect"}

    r = await client.post(path, json={"currentPassword": PASSWORD, "newPassword": PASSWORD}, headers=user_headers)
    assert r.json() == {"error": "New password must be different from current password"}

    r = await client.post(path, json={"currentPassword": PASSWORD, "newPassword": "Another123"}, headers=user_headers)
    assert r.json()["message"] == "Password changed successfully"

    r = await client.post("/api/auth/login", json={"email": "member@example.com", "password": "Another123"})
    assert r.status_code == 200


async def test_phone_request_is_rate_limited(client: httpx.AsyncClient, user_headers: dict) -> None:
    r = await client.post(PHONE, headers=user_headers)
    assert r.json()["message"] == "Verification request submitted. Our team will contact you within 24 hours."

    r = await client.post(PHONE, headers=user_headers)
    assert r.status_code == 429
    assert r.json()["error"].startswith("Please wait ")

    status = (await client.get(PHONE, headers=user_headers)).json()
    assert status["phoneVerified"] is False
    assert status["pendingVerification"]["phone"] == "+923001234567"


async def test_phone_request_needs_a_number(client: httpx.AsyncClient, make_user) -> None:
    _user, headers = await make_user()

    r = await client.post(PHONE, headers=headers)

    assert r.json() == {"error": "Please add a phone number first"}


async def test_wrong_code_attempts_persist_then_correct_code_verifies(
    client: httpx.AsyncClient, user_headers: dict, db: AsyncSession
) -> None:
    await client.post(PHONE, headers=user_headers)
    verification = (await db.execute(select(PhoneVerification))).scalar_one()
    wrong = "111111" if verification.otp != "111111" else "222222"

    r = await client.put(PHONE, json={"otp": wrong}, headers=user_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid code. 4 attempts remaining."}
    await db.refresh(verification)
    assert verification.attempts == 1

    r = await client.put(PHONE, json={"otp": "12ab56"}, headers=user_headers)
    assert r.json() == {"error": "Please enter a valid 6-digit code"}

    r = await client.put(PHONE, json={"otp": verification.otp}, headers=user_headers)
    assert r.json()["message"] == "Phone number verified successfully!"

    user = (await db.execute(select(User).where(User.email == "member@example.com"))).scalar_one()
    assert user.phone_verified is True
    r = await client.put(PHONE, json={"otp": verification.otp}, headers=user_headers)
    assert r.json() == {"error": "No pending verification found. Please request a new code."}
