"""Tests for the admin review of user-submitted field suggestions."""

import httpx
import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.db.models import FieldSuggestion, Language
from nikah_api.services.suggestions import language_code, language_slug

SUGGESTIONS = "/api/admin/suggestions"
MISSING_ID = "00000000-0000-4000-8000-000000000000"


@pytest.fixture
async def suggestions(db: AsyncSession, make_user) -> dict[str, FieldSuggestion]:
    user, _ = await make_user(name="Zainab", email="zainab@example.com")
    rows = {
        "brahui": FieldSuggestion(
            user_id=user.id, field_type="MOTHER_TONGUE", suggested_value="Brahui", suggested_label="Brahui"
        ),
        "caste": FieldSuggestion(user_id=user.id, field_type="CASTE", suggested_value="Awan"),
        "done": FieldSuggestion(
            user_id=user.id, field_type="MOTHER_TONGUE", suggested_value="Hindko", status="REJECTED"
        ),
    }
    db.add_all(rows.values())
    await db.commit()
    return rows


async def test_review_is_super_admin_only(client: httpx.AsyncClient, make_user, user_headers: dict) -> None:
    _editor, editor_headers = await make_user("CONTENT_EDITOR")

    assert (await client.get(SUGGESTIONS, headers=user_headers)).status_code == 403
    assert (await client.get(SUGGESTIONS, headers=editor_headers)).status_code == 403
    assert (await client.get(SUGGESTIONS)).status_code == 401


async def test_list_filters_and_counts(client: httpx.AsyncClient, admin_headers: dict, suggestions: dict) -> None:
    r = await client.get(SUGGESTIONS, params={"status": "PENDING"}, headers=admin_headers)

    body = r.json()
    assert {s["suggestedValue"] for s in body["suggestions"]} == {"Brahui", "Awan"}
    assert body["counts"] == {"pending": 2, "approved": 0, "rejected": 1, "total": 2}
    assert body["suggestions"][0]["user"]["name"] == "Zainab"

    r = await client.get(SUGGESTIONS, params={"fieldType": "MOTHER_TONGUE"}, headers=admin_headers)
    assert {s["suggestedValue"] for s in r.json()["suggestions"]} == {"Brahui", "Hindko"}

    r = await client.get(SUGGESTIONS, params={"status": "LOST"}, headers=admin_headers)
    assert r.status_code == 400


async def test_get_single_suggestion(client: httpx.AsyncClient, admin_headers: dict, suggestions: dict) -> None:
    r = await client.get(f"{SUGGESTIONS}/{suggestions['caste'].id}", headers=admin_headers)

    suggestion = r.json()["suggestion"]
    assert suggestion["fieldType"] == "CASTE"
    assert suggestion["reviewedBy"] is None

    r = await client.get(f"{SUGGESTIONS}/{MISSING_ID}", headers=admin_headers)
    assert r.status_code == 404
    assert r.json() == {"error": "Suggestion not found"}


async def test_approve_with_create_language_adds_language(
    client: httpx.AsyncClient, admin_headers: dict, db: AsyncSession, suggestions: dict
) -> None:
    db.add(Language(slug="urdu", label="Urdu", sort_order=4))
    await db.commit()

    r = await client.patch(
        f"{SUGGESTIONS}/{suggestions['brahui'].id}",
        json={"status": "APPROVED", "createLanguage": True, "reviewNote": " spoken in Kalat "},
        headers=admin_headers,
    )

    assert r.status_code == 200
    body = r.json()
    assert body["suggestion"]["status"] == "APPROVED"
    assert body["suggestion"]["reviewNote"] == "spoken in Kalat"
    assert body["suggestion"]["reviewedBy"]["name"] == "Admin"
    assert body["suggestion"]["reviewedAt"] is not None
    assert body["createdLanguage"]["slug"] == "brahui"

    language = (await db.execute(select(Language).where(Language.slug == "brahui"))).scalar_one()
    assert (language.code, language.label, language.sort_order) == ("brahui", "Brahui", 5)
    assert language.is_active is True
    assert language.is_global is False


async def test_create_language_refuses_existing_name(
    client: httpx.AsyncClient, admin_headers: dict, db: AsyncSession, suggestions: dict
) -> None:
    db.add(Language(slug="brahui_language", label="BRAHUI"))
    await db.commit()

    r = await client.patch(
        f"{SUGGESTIONS}/{suggestions['brahui'].id}",
        json={"status": "APPROVED", "createLanguage": True},
        headers=admin_headers,
    )

    assert r.status_code == 400
    assert r.json() == {"error": "A language with this name/code already exists"}
    r = await client.get(f"{SUGGESTIONS}/{suggestions['brahui'].id}", headers=admin_headers)
    assert r.json()["suggestion"]["status"] == "PENDING"


async def test_approve_without_flag_or_for_other_fields_adds_nothing(
    client: httpx.AsyncClient, admin_headers: dict, db: AsyncSession, suggestions: dict
) -> None:
    r = await client.patch(
        f"{SUGGESTIONS}/{suggestions['caste'].id}",
        json={"status": "APPROVED", "createLanguage": True},
        headers=admin_headers,
    )
    assert r.json()["createdLanguage"] is None

    r = await client.patch(
        f"{SUGGESTIONS}/{suggestions['brahui'].id}", json={"status": "DUPLICATE"}, headers=admin_headers
    )
    assert r.json()["suggestion"]["status"] == "DUPLICATE"

    assert (await db.execute(select(Language))).scalars().all() == []


async def test_review_rejects_unknown_status(
    client: httpx.AsyncClient, admin_headers: dict, suggestions: dict
) -> None:
    r = await client.patch(
        f"{SUGGESTIONS}/{suggestions['caste'].id}", json={"status": "PENDING"}, headers=admin_headers
    )

    assert r.status_code == 400
    assert r.json() == {"error": "Invalid status. Must be APPROVED, REJECTED, DUPLICATE, or MERGED"}

    r = await client.patch(f"{SUGGESTIONS}/{MISSING_ID}", json={"status": "REJECTED"}, headers=admin_headers)
    assert r.status_code == 404


async def test_delete_suggestion(client: httpx.AsyncClient, admin_headers: dict, suggestions: dict) -> None:
    r = await client.delete(f"{SUGGESTIONS}/{suggestions['done'].id}", headers=admin_headers)
    assert r.json() == {"success": True}

    r = await client.get(f"{SUGGESTIONS}/{suggestions['done'].id}", headers=admin_headers)
    assert r.status_code == 404


def test_language_code_and_slug() -> None:
    assert language_code("Brahui (Balochistan)") == "brahuibalo"
    assert language_slug("Brahui (Balochistan)") == "brahui_balochistan"
    assert language_code("پشتو") is None
    assert language_slug("پشتو") == "پشتو"
