import enum
import logging
from typing import Any, Awaitable, Callable

from nikah_console.client import ApiClient, ApiError
from nikah_console.taxonomy.domains import RecordSchema

logger = logging.getLogger(__name__)

SYSTEM_SLUGS = frozenset({"other_language"})


class DeleteState(str, enum.Enum):
    CLOSED = "closed"
    OPEN = "open"
    CONFIRMED = "confirmed"
    DELETING = "deleting"


def can_delete(item: dict[str, Any]) -> bool:
    """System records (the server marks them ``isSystem``) are never deletable."""
    return not item.get("isSystem") and item.get("slug") not in SYSTEM_SLUGS


def delete_message(label: str, descendants: list[str]) -> str:
    message = f'This will delete "{label}"'
    if descendants:
        message += f" and all its {' and '.join(descendants)}"
    return message + ". This action cannot be undone."


class DeleteConfirmation:
    def __init__(self, client: ApiClient, on_deleted: Callable[[RecordSchema, dict[str, Any]], Awaitable[None]] | None = None):
        self.client = client
        self.on_deleted = on_deleted
        self.state = DeleteState.CLOSED
        self.item: dict[str, Any] | None = None
        self.schema: RecordSchema | None = None
        self.message = ""
        self.error: str | None = None

    def open(self, schema: RecordSchema, item: dict[str, Any], descendants: list[str] | None = None) -> bool:
        if not can_delete(item):
            return False
        self.schema = schema
        self.item = item
        self.message = delete_message(schema.label_of(item), descendants or [])
        self.error = None
        self.state = DeleteState.OPEN
        return True

    def cancel(self) -> None:
        if self.state is DeleteState.DELETING:
            return
        self._reset()

    def _reset(self) -> None:
        self.state = DeleteState.CLOSED
        self.item = None
        self.schema = None
        self.message = ""

    async def confirm(self) -> bool:
        if self.state is not DeleteState.OPEN:
            return False
        self.state = DeleteState.CONFIRMED
        schema, item = self.schema, self.item
        self.state = DeleteState.DELETING
        try:
            await self.client.delete(f"{schema.endpoint}/{item['id']}")
        except ApiError as e:
            logger.warning("Deleting %s %s failed: %s", schema.kind, item["id"], e.message)
            self.error = e.message
            self.state = DeleteState.OPEN
            return False
        self._reset()
        if self.on_deleted:
            await self.on_deleted(schema, item)
        return True
