"""Tests for the admin profile moderation endpoints."""

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from nikah_api.db.models import City, Country, Photo, Profile, StateProvince

ADMIN = "/api/admin/profiles"


@pytest.fixture
async def profile(session_factory: async_sessionmaker[AsyncSession], make_user) -> Profile:
    user, _ = await make_user(name="Candidate", phone="+923009999999")
    async with session_factory() as session:
        country = Country(code="PK", name="Pakistan")
        state = StateProvince(country=country, name="Punjab")
        row = Profile(
            user_id=user.id,
            gender="female",
            country_living_in=country,
            state_province=state,
            suggested_location="Sahiwal",
            profile_completion=60,
        )
        row.photos = [Photo(url="https://cdn.example.com/a.jpg"), Photo(url="https://cdn.example.com/b.jpg")]
        session.add(row)
        await session.commit()
        await session.refresh(row, ["photos"])
        return row


async def test_review_returns_denormalized_profile(
    client: httpx.AsyncClient, admin_headers: dict, profile: Profile
) -> None:
    r = await client.get(f"{ADMIN}/{profile.id}", headers=admin_headers)

    body = r.json()["profile"]
    assert body["countryLivingIn"]["label"] == "Pakistan"
    assert body["stateProvince"]["label"] == "Punjab"
    assert body["suggestedLocation"] == "Sahiwal"
    assert body["user"]["name"] == "Candidate"
    assert len(body["photos"]) == 2


async def test_plain_user_cannot_moderate(client: httpx.AsyncClient, user_headers: dict, profile: Profile) -> None:
    r = await client.post(f"{ADMIN}/{profile.id}/moderate", json={"action": "approve"}, headers=user_headers)
    assert r.status_code == 403


async def test_approve_publishes_and_clears_rejection(
    client: httpx.AsyncClient, admin_headers: dict, profile: Profile, db: AsyncSession
) -> None:
    await client.post(f"{ADMIN}/{profile.id}/moderate", json={"action": "reject", "feedback": " Add a bio "}, headers=admin_headers)
    rejected = await db.get(Profile, profile.id)
    assert (rejected.moderation_status, rejected.rejection_reason, rejected.is_published) == ("REJECTED", "Add a bio", False)

    r = await client.post(f"{ADMIN}/{profile.id}/moderate", json={"action": "approve"}, headers=admin_headers)
    assert r.json()["message"] == "Profile approved successfully"

    await db.refresh(rejected)
    assert rejected.moderation_status == "APPROVED"
    assert rejected.rejection_reason is None
    assert rejected.is_published is True
    assert rejected.moderated_by is not None


async def test_ban_deactivates(client: httpx.AsyncClient, admin_headers: dict, profile: Profile, db: AsyncSession) -> None:
    r = await client.post(f"{ADMIN}/{profile.id}/moderate", json={"action": "ban", "feedback": "Fake"}, headers=admin_headers)
    assert r.status_code == 200

    banned = await db.get(Profile, profile.id)
    assert banned.moderation_status == "BANNED"
    assert banned.ban_reason == "Fake"
    assert banned.is_active is False
    assert banned.is_published is False
    assert banned.banned_at is not None


async def test_unknown_action_rejected(client: httpx.AsyncClient, admin_headers: dict, profile: Profile) -> None:
    r = await client.post(f"{ADMIN}/{profile.id}/moderate", json={"action": "promote"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid action"}


async def test_photo_reject_then_back_to_pending(
    client: httpx.AsyncClient, admin_headers: dict, profile: Profile, db: AsyncSession
) -> None:
    photo_id = profile.photos[0].id
    path = f"{ADMIN}/{profile.id}/photos/{photo_id}"

    r = await client.patch(path, json={"action": "reject", "reason": "Group photo"}, headers=admin_headers)
    assert r.json()["photo"] == {"id": photo_id, "status": "REJECTED"}
    photo = await db.get(Photo, photo_id)
    assert photo.rejection_reason == "Group photo"

    await client.patch(path, json={"action": "pending"}, headers=admin_headers)
    await db.refresh(photo)
    assert photo.status == "PENDING"
    assert photo.rejection_reason is None


async def test_photo_delete_needs_supervisor(
    client: httpx.AsyncClient, make_user, profile: Profile, admin_headers: dict
) -> None:
    _editor, editor_headers = await make_user("CONTENT_EDITOR")
    path = f"{ADMIN}/{profile.id}/photos/{profile.photos[1].id}"

    assert (await client.delete(path, headers=editor_headers)).status_code == 403
    r = await client.delete(path, headers=admin_headers)
    assert r.json()["message"] == "Photo deleted successfully"
    assert (await client.delete(path, headers=admin_headers)).status_code == 404


async def test_edit_remaps_suggestion(
    client: httpx.AsyncClient, admin_headers: dict, profile: Profile, db: AsyncSession
) -> None:
    city = City(state_province_id=profile.state_province_id, name="Sahiwal")
    db.add(city)
    await db.commit()

    r = await client.patch(
        f"{ADMIN}/{profile.id}/edit",
        json={"cityId": city.id, "suggestedLocation": None},
        headers=admin_headers,
    )

    body = r.json()
    assert body["message"] == "Profile updated successfully"
    assert body["profile"]["city"] == {"id": city.id, "label": "Sahiwal"}
    assert body["profile"]["suggestedLocation"] is None
    assert body["profile"]["stateProvince"]["label"] == "Punjab"


async def test_list_filters_by_status_with_counts(
    client: httpx.AsyncClient, admin_headers: dict, profile: Profile
) -> None:
    r = await client.get(ADMIN, params={"status": "PENDING", "sort": "completeness"}, headers=admin_headers)

    body = r.json()
    assert [p["id"] for p in body["profiles"]] == [profile.id]
    assert body["counts"]["pending"] == 1
    assert body["pagination"]["totalCount"] == 1

    r = await client.get(ADMIN, params={"status": "APPROVED"}, headers=admin_headers)
    assert r.json()["profiles"] == []
