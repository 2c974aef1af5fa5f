import logging
from typing import Any

from nikah_console.client import ApiClient, ApiError
from nikah_console.taxonomy.domains import DomainSpec
from nikah_console.taxonomy.reorder import ReorderableList

logger = logging.getLogger(__name__)


class HierarchyNavigator:
    """Tabbed drill-down through a taxonomy domain.

    Level 0 lists the roots; selecting a node at level ``n`` loads its children
    into level ``n + 1`` and switches the active tab there. Flat domains keep
    every level independent and loaded at once.
    """

    def __init__(self, client: ApiClient, domain: DomainSpec):
        self.client = client
        self.domain = domain
        depth = len(domain.levels)
        self.lists = [self._make_list(level) for level in range(depth)]
        self.selected: list[dict[str, Any] | None] = [None] * depth
        self.active_level = 0
        self.error: str | None = None
        self._last_fetch: int | None = None

    def _make_list(self, level: int) -> ReorderableList:
        async def load() -> list[dict[str, Any]]:
            return await self._fetch(level)

        async def commit(ordered_ids: list[str]) -> None:
            await self._commit_order(level, ordered_ids)

        return ReorderableList(load, commit)

    def parent_of(self, level: int) -> dict[str, Any] | None:
        if level == 0 or not self.domain.hierarchical:
            return None
        return self.selected[level - 1]

    async def _fetch(self, level: int) -> list[dict[str, Any]]:
        schema = self.domain.level(level).schema
        params = None
        parent = self.parent_of(level)
        if schema.parent_query:
            if parent is None:
                return []
            params = {schema.parent_query: parent["id"]}
        body = await self.client.get(schema.endpoint, params=params)
        return body.get(schema.list_key, [])

    async def _commit_order(self, level: int, ordered_ids: list[str]) -> None:
        spec = self.domain.level(level)
        payload: dict[str, Any] = {"orderedIds": ordered_ids}
        if spec.reorder_type:
            payload["type"] = spec.reorder_type
        await self.client.post(self.domain.reorder_endpoint, json=payload)

    def level_enabled(self, level: int) -> bool:
        if level == 0 or not self.domain.hierarchical:
            return True
        if level >= len(self.lists) or self.selected[level - 1] is None:
            return False
        requires = self.domain.level(level).requires
        if requires:
            ancestor_level, flag = requires
            ancestor = self.selected[ancestor_level]
            if ancestor is None or not ancestor.get(flag, True):
                return False
        return True

    async def reload(self, level: int) -> None:
        self._last_fetch = level
        self.error = None
        try:
            await self.lists[level].reload()
        except ApiError as e:
            logger.warning("Failed to load %s: %s", self.domain.level(level).schema.plural, e.message)
            self.error = e.message

    async def load(self) -> None:
        """Initial fetch: the roots, or every list of a flat domain."""
        levels = range(len(self.lists)) if not self.domain.hierarchical else (0,)
        for level in levels:
            await self.reload(level)

    def _clear_below(self, level: int) -> None:
        for deeper in range(level + 1, len(self.lists)):
            self.selected[deeper] = None
            self.lists[deeper].invalidate()

    def deselect(self, level: int) -> None:
        self.selected[level] = None
        self._clear_below(level)
        self.active_level = min(self.active_level, level)

    async def select_node(self, level: int, node: dict[str, Any]) -> bool:
        """Select ``node`` and open its children. Refused at the leaf or when the child level is disabled."""
        if not self.domain.hierarchical or level + 1 >= len(self.lists):
            return False
        previous = self.selected[level]
        self.selected[level] = node
        if not self.level_enabled(level + 1):
            self.selected[level] = previous
            return False
        self._clear_below(level)
        self.active_level = level + 1
        await self.reload(level + 1)
        return True

    def go_back(self, to_level: int) -> None:
        """Return to the tab at ``to_level``; its selection and everything below it are cleared."""
        if to_level < 0 or to_level >= len(self.lists):
            return
        self.deselect(to_level)
        self.active_level = to_level

    async def retry(self) -> None:
        if self._last_fetch is not None:
            await self.reload(self._last_fetch)

    def breadcrumb(self) -> list[str]:
        crumbs = [self.domain.title]
        for level, node in enumerate(self.selected):
            if node is not None:
                crumbs.append(self.domain.level(level).schema.label_of(node))
        return crumbs
