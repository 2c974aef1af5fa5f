import logging
from typing import Any, Awaitable, Callable

from nikah_console.client import ApiError

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[list[dict[str, Any]]]]
Committer = Callable[[list[str]], Awaitable[Any]]


class ReorderableList:
    """An ordered list with optimistic moves.

    A move is applied locally, then ``commit`` is awaited with the full ordered
    id list. If that fails, the snapshot is restored and the list is reloaded
    from ``load`` so it ends up equal to what the server holds.
    """

    def __init__(self, load: Loader, commit: Committer, failure_message: str = "Failed to reorder"):
        self._load = load
        self._commit = commit
        self.failure_message = failure_message
        self.items: list[dict[str, Any]] = []
        self.loading = False
        self.reordering = False
        self.error: str | None = None
        self._generation = 0

    @property
    def ids(self) -> list[str]:
        return [item["id"] for item in self.items]

    def invalidate(self) -> None:
        """Drop the items and any in-flight load."""
        self._generation += 1
        self.items = []
        self.loading = False

    async def reload(self) -> bool:
        """Fetch the list. Returns False if the response was superseded."""
        self._generation += 1
        generation = self._generation
        self.loading = True
        try:
            items = await self._load()
        except ApiError as e:
            if generation == self._generation:
                self.loading = False
                self.error = e.message
            raise
        if generation != self._generation:
            logger.debug("Discarding stale list response")
            return False
        self.items = list(items)
        self.loading = False
        return True

    async def move(self, from_index: int, to_index: int) -> bool:
        n = len(self.items)
        if self.reordering or from_index == to_index:
            return False
        if not (0 <= from_index < n and 0 <= to_index < n):
            return False

        snapshot = list(self.items)
        moved = self.items.pop(from_index)
        self.items.insert(to_index, moved)
        self.reordering = True
        self.error = None
        try:
            await self._commit(self.ids)
        except ApiError as e:
            logger.warning("Reorder failed: %s", e.message)
            self.items = snapshot
            self.error = e.message or self.failure_message
            try:
                await self.reload()
            except ApiError:
                self.error = e.message or self.failure_message
            return False
        finally:
            self.reordering = False
        return True

    async def move_up(self, index: int) -> bool:
        return await self.move(index, index - 1)

    async def move_down(self, index: int) -> bool:
        return await self.move(index, index + 1)
