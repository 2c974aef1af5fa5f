"""Tests for the delete confirmation flow."""

from nikah_console.taxonomy.delete import DeleteConfirmation, DeleteState, can_delete
from nikah_console.taxonomy.domains import LANGUAGE, LOCATIONS, ORIGINS, SECTS, COUNTRY, SECT
from nikah_console.taxonomy.editor import TaxonomyEditor

from tests.unit.fakes import FakeApi

BASE = "/api/admin/global-settings"


def test_country_warning_names_states_and_cities() -> None:
    assert LOCATIONS.descendant_labels(0, {"id": "pk"}, []) == ["states", "cities"]
    assert LOCATIONS.descendant_labels(1, {"id": "pb"}, [{"id": "pk"}]) == ["cities"]
    assert LOCATIONS.descendant_labels(2, {"id": "lhr"}, [{"id": "pk"}, {"id": "pb"}]) == []
    assert SECTS.descendant_labels(0, {"id": "s"}, []) == ["maslaks"]


def test_origin_warning_uses_its_own_terminology() -> None:
    origin = {"id": "o1", "level1LabelPlural": "Tribes", "level2LabelPlural": "Clans", "level2Enabled": True}
    assert ORIGINS.descendant_labels(0, origin, []) == ["tribes", "clans"]
    assert ORIGINS.descendant_labels(1, {"id": "e1"}, [origin]) == ["clans"]
    assert ORIGINS.descendant_labels(1, {"id": "e1"}, [{**origin, "level2Enabled": False}]) == []


async def test_open_country_shows_message_before_any_delete(fake_api: FakeApi) -> None:
    flow = DeleteConfirmation(fake_api.client())

    assert flow.open(COUNTRY, {"id": "pk", "name": "Pakistan"}, ["states", "cities"])

    assert flow.state is DeleteState.OPEN
    assert flow.message == 'This will delete "Pakistan" and all its states and cities. This action cannot be undone.'
    assert fake_api.calls == []


async def test_cancel_closes_without_request(fake_api: FakeApi) -> None:
    flow = DeleteConfirmation(fake_api.client())
    flow.open(SECT, {"id": "s1", "label": "Sunni"})

    flow.cancel()

    assert flow.state is DeleteState.CLOSED
    assert fake_api.calls == []


async def test_confirm_deletes_and_notifies(fake_api: FakeApi) -> None:
    deleted = []

    async def on_deleted(schema, item):
        deleted.append((schema.kind, item["id"]))

    fake_api.add_response("DELETE", f"{BASE}/sects/s1", {"success": True})
    flow = DeleteConfirmation(fake_api.client(), on_deleted=on_deleted)
    flow.open(SECT, {"id": "s1", "label": "Sunni"}, ["maslaks"])

    assert await flow.confirm()

    assert flow.state is DeleteState.CLOSED
    assert deleted == [("sect", "s1")]


async def test_failed_delete_stays_open_with_error(fake_api: FakeApi) -> None:
    fake_api.add_response(
        "DELETE",
        f"{BASE}/sects/s1",
        {"error": "Cannot delete sect that is in use by profiles. Consider deactivating it instead."},
        status=400,
    )
    flow = DeleteConfirmation(fake_api.client())
    flow.open(SECT, {"id": "s1", "label": "Sunni"})

    assert not await flow.confirm()

    assert flow.state is DeleteState.OPEN
    assert flow.error.startswith("Cannot delete sect")


def test_other_language_is_never_deletable(fake_api: FakeApi) -> None:
    sentinel = {"id": "x", "slug": "other_language", "label": "Other", "isSystem": False}
    system = {"id": "y", "slug": "urdu", "label": "Urdu", "isSystem": True}

    assert not can_delete(sentinel)
    assert not can_delete(system)
    assert can_delete({"id": "z", "slug": "punjabi", "label": "Punjabi"})

    flow = DeleteConfirmation(fake_api.client())
    assert not flow.open(LANGUAGE, sentinel)
    assert flow.state is DeleteState.CLOSED


async def test_editor_request_delete_builds_descendant_warning(fake_api: FakeApi) -> None:
    fake_api.add_response("GET", f"{BASE}/origins", {"origins": []})
    editor = TaxonomyEditor(fake_api.client(), "origins", close_delay=0)
    origin = {"id": "o1", "label": "South Asian", "level1LabelPlural": "Ethnicities", "level2LabelPlural": "Castes"}

    assert editor.request_delete(0, origin)

    assert editor.deletion.message == (
        'This will delete "South Asian" and all its ethnicities and castes. This action cannot be undone.'
    )
