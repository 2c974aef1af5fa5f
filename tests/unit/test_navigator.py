"""Tests for hierarchy navigation across taxonomy levels."""

from nikah_console.taxonomy.domains import EDUCATION, LOCATIONS, ORIGINS
from nikah_console.taxonomy.navigator import HierarchyNavigator

from tests.unit.fakes import FakeApi

BASE = "/api/admin/global-settings"

PK = {"id": "pk", "name": "Pakistan"}
PUNJAB = {"id": "pb", "name": "Punjab", "countryId": "pk"}
SINDH = {"id": "sd", "name": "Sindh", "countryId": "pk"}


def _locations(fake_api: FakeApi) -> HierarchyNavigator:
    fake_api.add_response("GET", f"{BASE}/locations/countries", {"countries": [PK]})
    fake_api.add_response("GET", f"{BASE}/locations/states", {"states": [PUNJAB, SINDH]})
    fake_api.add_response("GET", f"{BASE}/locations/cities", {"cities": [{"id": "lhr", "name": "Lahore"}]})
    return HierarchyNavigator(fake_api.client(), LOCATIONS)


async def test_select_node_loads_children_and_switches_tab(fake_api: FakeApi) -> None:
    nav = _locations(fake_api)
    await nav.load()

    assert await nav.select_node(0, PK)

    assert nav.active_level == 1
    assert [s["id"] for s in nav.lists[1].items] == ["pb", "sd"]
    [call] = fake_api.calls_to("GET", f"{BASE}/locations/states")
    assert call.params == {"countryId": "pk"}


async def test_selecting_new_parent_clears_deeper_levels(fake_api: FakeApi) -> None:
    nav = _locations(fake_api)
    await nav.load()
    await nav.select_node(0, PK)
    await nav.select_node(1, PUNJAB)
    assert nav.lists[2].ids == ["lhr"]

    await nav.select_node(0, {"id": "in", "name": "India"})

    assert nav.selected == [{"id": "in", "name": "India"}, None, None]
    assert nav.lists[2].items == []
    assert not nav.level_enabled(2)


async def test_select_at_leaf_is_refused(fake_api: FakeApi) -> None:
    nav = _locations(fake_api)
    await nav.load()
    await nav.select_node(0, PK)
    await nav.select_node(1, PUNJAB)

    assert not await nav.select_node(2, {"id": "lhr"})
    assert nav.active_level == 2


async def test_castes_tab_disabled_when_origin_has_no_level2(fake_api: FakeApi) -> None:
    fake_api.add_response("GET", f"{BASE}/origins", {"origins": []})
    fake_api.add_response("GET", f"{BASE}/origins/ethnicities", {"ethnicities": [{"id": "e1", "label": "Arab"}]})
    nav = HierarchyNavigator(fake_api.client(), ORIGINS)
    await nav.load()
    origin = {"id": "o1", "label": "Arab", "level2Enabled": False}

    assert await nav.select_node(0, origin)
    assert not nav.level_enabled(2)
    assert not await nav.select_node(1, {"id": "e1", "label": "Arab"})

    assert nav.active_level == 1
    assert nav.selected[1] is None
    assert fake_api.calls_to("GET", f"{BASE}/origins/castes") == []


async def test_go_back_clears_the_tab_returned_to(fake_api: FakeApi) -> None:
    nav = _locations(fake_api)
    await nav.load()
    await nav.select_node(0, PK)
    await nav.select_node(1, PUNJAB)

    nav.go_back(0)

    assert nav.active_level == 0
    assert nav.selected == [None, None, None]
    assert nav.lists[0].ids == ["pk"]
    assert nav.lists[1].items == []
    assert nav.lists[2].items == []
    assert not nav.level_enabled(1)
    assert nav.breadcrumb() == ["Locations"]


async def test_go_back_to_middle_level_keeps_ancestors(fake_api: FakeApi) -> None:
    nav = _locations(fake_api)
    await nav.load()
    await nav.select_node(0, PK)
    await nav.select_node(1, PUNJAB)

    nav.go_back(1)

    assert nav.active_level == 1
    assert nav.selected == [PK, None, None]
    assert nav.lists[1].ids == ["pb", "sd"]
    assert nav.lists[2].items == []


async def test_fetch_failure_sets_error_and_retry_refetches(fake_api: FakeApi) -> None:
    path = f"{BASE}/locations/countries"
    fake_api.add_response("GET", path, {"error": "Database unavailable"}, status=503)
    fake_api.add_response("GET", path, {"countries": [PK]})
    nav = HierarchyNavigator(fake_api.client(), LOCATIONS)

    await nav.load()
    assert nav.error == "Database unavailable"

    await nav.retry()
    assert nav.error is None
    assert nav.lists[0].ids == ["pk"]


async def test_flat_domain_loads_every_list(fake_api: FakeApi) -> None:
    fake_api.add_response("GET", f"{BASE}/education/levels", {"levels": [{"id": "l1", "label": "Bachelors"}]})
    fake_api.add_response("GET", f"{BASE}/education/fields", {"fields": [{"id": "f1", "label": "Medicine"}]})
    nav = HierarchyNavigator(fake_api.client(), EDUCATION)

    await nav.load()

    assert nav.lists[0].ids == ["l1"]
    assert nav.lists[1].ids == ["f1"]
    assert nav.level_enabled(1)
    assert not await nav.select_node(0, {"id": "l1"})
