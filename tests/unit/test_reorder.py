"""Tests for optimistic list reordering."""

from nikah_console.client import ApiError
from nikah_console.taxonomy.domains import LOCATIONS, ORIGINS
from nikah_console.taxonomy.navigator import HierarchyNavigator
from nikah_console.taxonomy.reorder import ReorderableList

from tests.unit.fakes import FakeApi

COUNTRIES = "/api/admin/global-settings/locations/countries"
REORDER = "/api/admin/global-settings/locations/reorder"


def _rows(*ids: str) -> list[dict]:
    return [{"id": i, "name": i.upper()} for i in ids]


class Recorder:
    def __init__(self, items: list[dict], fail: bool = False):
        self.items = items
        self.fail = fail
        self.commits: list[list[str]] = []
        self.loads = 0

    async def load(self) -> list[dict]:
        self.loads += 1
        return list(self.items)

    async def commit(self, ordered_ids: list[str]) -> None:
        self.commits.append(ordered_ids)
        if self.fail:
            raise ApiError(500, "Internal server error")


async def _loaded(recorder: Recorder) -> ReorderableList:
    lst = ReorderableList(recorder.load, recorder.commit)
    await lst.reload()
    return lst


async def test_move_up_then_move_down_restores_order() -> None:
    recorder = Recorder(_rows("a", "b", "c", "d"))
    lst = await _loaded(recorder)

    assert await lst.move_up(2)
    assert lst.ids == ["a", "c", "b", "d"]
    assert await lst.move_down(1)
    assert lst.ids == ["a", "b", "c", "d"]
    assert recorder.commits == [["a", "c", "b", "d"], ["a", "b", "c", "d"]]


async def test_boundary_moves_are_noops_without_request() -> None:
    recorder = Recorder(_rows("a", "b", "c"))
    lst = await _loaded(recorder)

    assert not await lst.move_up(0)
    assert not await lst.move_down(2)
    assert lst.ids == ["a", "b", "c"]
    assert recorder.commits == []


async def test_failed_reorder_restores_server_order_and_sets_error() -> None:
    recorder = Recorder(_rows("a", "b", "c"), fail=True)
    lst = await _loaded(recorder)

    assert not await lst.move_up(2)

    assert recorder.commits == [["a", "c", "b"]]
    assert lst.ids == ["a", "b", "c"]
    assert lst.error == "Internal server error"
    assert recorder.loads == 2
    assert lst.reordering is False


async def test_failed_reorder_ends_equal_to_following_get() -> None:
    recorder = Recorder(_rows("a", "b", "c"), fail=True)
    lst = await _loaded(recorder)
    # Someone else reordered meanwhile; the reload shows their order.
    recorder.items = _rows("c", "a", "b")

    await lst.move_down(0)

    assert lst.ids == ["c", "a", "b"]


async def test_moves_refused_while_reordering() -> None:
    recorder = Recorder(_rows("a", "b", "c"))
    lst = await _loaded(recorder)
    lst.reordering = True

    assert not await lst.move_up(1)
    assert recorder.commits == []


async def test_stale_reload_is_discarded() -> None:
    recorder = Recorder(_rows("a", "b"))
    lst = ReorderableList(recorder.load, recorder.commit)

    async def superseding_load() -> list[dict]:
        lst.invalidate()
        return _rows("x")

    lst._load = superseding_load
    assert await lst.reload() is False
    assert lst.items == []


async def test_navigator_posts_full_order_and_reverts_on_500(fake_api: FakeApi) -> None:
    fake_api.add_response("GET", COUNTRIES, {"countries": _rows("a", "b", "c")})
    fake_api.add_response("POST", REORDER, {"error": "Internal server error"}, status=500)
    nav = HierarchyNavigator(fake_api.client(), LOCATIONS)
    await nav.load()

    countries = nav.lists[0]
    assert not await countries.move_up(2)

    [post] = fake_api.calls_to("POST", REORDER)
    assert post.json == {"orderedIds": ["a", "c", "b"], "type": "countries"}
    assert countries.ids == ["a", "b", "c"]
    assert countries.error == "Internal server error"
    assert len(fake_api.calls_to("GET", COUNTRIES)) == 2


async def test_network_error_uses_client_message(fake_api: FakeApi) -> None:
    path = "/api/admin/global-settings/origins"
    fake_api.add_response("GET", path, {"origins": _rows("a", "b")})
    nav = HierarchyNavigator(fake_api.client(), ORIGINS)
    await nav.load()

    async def broken(_ids: list[str]) -> None:
        raise ApiError(None, "")

    nav.lists[0]._commit = broken
    await nav.lists[0].move_down(0)

    assert nav.lists[0].error == "Failed to reorder"
    assert nav.lists[0].ids == ["a", "b"]
