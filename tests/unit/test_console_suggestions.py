"""Tests for the suggestion review console screen."""

import pytest

from nikah_console.suggestions import SuggestionQueue

from tests.unit.fakes import FakeApi

SUGGESTIONS = "/api/admin/suggestions"
PENDING_LIST = {
    "suggestions": [{"id": "s1", "fieldType": "MOTHER_TONGUE", "suggestedValue": "Brahui", "status": "PENDING"}],
    "counts": {"pending": 1, "approved": 0, "rejected": 0, "total": 1},
}


async def test_load_sends_filters_and_drops_all(fake_api: FakeApi) -> None:
    fake_api.add_response("GET", SUGGESTIONS, PENDING_LIST)
    queue = SuggestionQueue(fake_api.client())

    await queue.load()
    await queue.set_field_type("MOTHER_TONGUE")
    await queue.set_status_filter("all")

    params = [c.params for c in fake_api.calls_to("GET", SUGGESTIONS)]
    assert params == [
        {"status": "PENDING"},
        {"status": "PENDING", "fieldType": "MOTHER_TONGUE"},
        {"fieldType": "MOTHER_TONGUE"},
    ]
    assert queue.counts["pending"] == 1
    assert queue.suggestions[0]["suggestedValue"] == "Brahui"

    with pytest.raises(ValueError):
        await queue.set_status_filter("LOST")


async def test_approve_creates_language_and_reloads(fake_api: FakeApi) -> None:
    fake_api.add_response(
        "PATCH",
        f"{SUGGESTIONS}/s1",
        {"suggestion": {"id": "s1", "status": "APPROVED"}, "createdLanguage": {"id": "l1", "label": "Brahui"}},
    )
    fake_api.add_response("GET", SUGGESTIONS, {"suggestions": [], "counts": {"pending": 0}})
    queue = SuggestionQueue(fake_api.client())

    assert await queue.review("s1", "approve", note="  common in Kalat ")

    [call] = fake_api.calls_to("PATCH", f"{SUGGESTIONS}/s1")
    assert call.json == {"status": "APPROVED", "reviewNote": "common in Kalat", "createLanguage": True}
    assert queue.message == 'Suggestion approved and language "Brahui" created'
    assert queue.suggestions == []
    assert "s1" not in queue.busy


async def test_reject_sends_no_language_flag(fake_api: FakeApi) -> None:
    fake_api.add_response("PATCH", f"{SUGGESTIONS}/s1", {"suggestion": {"id": "s1"}, "createdLanguage": None})
    fake_api.add_response("GET", SUGGESTIONS, PENDING_LIST)
    queue = SuggestionQueue(fake_api.client())

    assert await queue.review("s1", "reject")

    [call] = fake_api.calls_to("PATCH", f"{SUGGESTIONS}/s1")
    assert call.json == {"status": "REJECTED", "reviewNote": None}
    assert queue.message == "Suggestion marked rejected"


async def test_review_error_is_shown_and_busy_row_refuses(fake_api: FakeApi) -> None:
    fake_api.add_response(
        "PATCH", f"{SUGGESTIONS}/s1", {"error": "A language with this name/code already exists"}, status=400
    )
    queue = SuggestionQueue(fake_api.client())

    assert not await queue.review("s1", "approve")
    assert queue.error == "A language with this name/code already exists"

    queue.busy.add("s1")
    assert not await queue.review("s1", "reject")
    assert len(fake_api.calls_to("PATCH", f"{SUGGESTIONS}/s1")) == 1


async def test_delete_requires_confirmation(fake_api: FakeApi) -> None:
    fake_api.add_response("DELETE", f"{SUGGESTIONS}/s1", {"success": True})
    fake_api.add_response("GET", SUGGESTIONS, {"suggestions": [], "counts": {}})
    queue = SuggestionQueue(fake_api.client())

    assert not await queue.delete("s1")
    assert queue.pending_delete == "s1"
    assert fake_api.calls == []

    assert await queue.delete("s1", confirmed=True)
    assert queue.pending_delete is None
    assert queue.message == "Suggestion deleted"
