"""Review queue for values users typed when the taxonomy lacked an option."""

import logging
from typing import Any

from nikah_console.client import ApiClient, ApiError

logger = logging.getLogger(__name__)

SUGGESTIONS_PATH = "/api/admin/suggestions"
STATUS_FILTERS = ("PENDING", "APPROVED", "REJECTED", "all")
REVIEW_ACTIONS = {"approve": "APPROVED", "reject": "REJECTED", "duplicate": "DUPLICATE", "merge": "MERGED"}


class SuggestionQueue:
    def __init__(self, client: ApiClient):
        self.client = client
        self.status_filter = "PENDING"
        self.field_type = "all"
        self.suggestions: list[dict[str, Any]] = []
        self.counts: dict[str, int] = {"pending": 0, "approved": 0, "rejected": 0, "total": 0}
        self.busy: set[str] = set()
        self.pending_delete: str | None = None
        self.loading = False
        self.error: str | None = None
        self.message: str | None = None
        self.created_language: dict[str, Any] | None = None

    async def load(self) -> None:
        self.loading = True
        self.error = None
        params = {
            "status": None if self.status_filter == "all" else self.status_filter,
            "fieldType": None if self.field_type == "all" else self.field_type,
        }
        try:
            body = await self.client.get(SUGGESTIONS_PATH, params=params)
        except ApiError as e:
            self.error = e.message
            return
        finally:
            self.loading = False
        self.suggestions = body.get("suggestions", [])
        self.counts = body.get("counts", self.counts)

    async def set_status_filter(self, status: str) -> None:
        if status not in STATUS_FILTERS:
            raise ValueError(f"status must be one of: {', '.join(STATUS_FILTERS)}")
        self.status_filter = status
        await self.load()

    async def set_field_type(self, field_type: str) -> None:
        self.field_type = field_type or "all"
        await self.load()

    async def review(
        self, suggestion_id: str, action: str, note: str = "", create_language: bool = True
    ) -> bool:
        """approve/reject/duplicate/merge; approving a mother tongue adds it as a language unless told not to."""
        if action not in REVIEW_ACTIONS:
            raise ValueError(f"action must be one of: {', '.join(REVIEW_ACTIONS)}")
        if suggestion_id in self.busy:
            return False
        payload: dict[str, Any] = {"status": REVIEW_ACTIONS[action], "reviewNote": note.strip() or None}
        if action == "approve":
            payload["createLanguage"] = create_language

        self.busy.add(suggestion_id)
        self.error = None
        self.created_language = None
        try:
            body = await self.client.patch(f"{SUGGESTIONS_PATH}/{suggestion_id}", json=payload)
        except ApiError as e:
            logger.warning("Suggestion %s %s failed: %s", suggestion_id, action, e.message)
            self.error = e.message
            return False
        finally:
            self.busy.discard(suggestion_id)

        self.created_language = body.get("createdLanguage")
        if self.created_language:
            self.message = f"Suggestion approved and language \"{self.created_language['label']}\" created"
        else:
            self.message = f"Suggestion marked {payload['status'].lower()}"
        await self.load()
        return True

    async def delete(self, suggestion_id: str, confirmed: bool = False) -> bool:
        if not confirmed:
            self.pending_delete = suggestion_id
            return False
        self.pending_delete = None
        if suggestion_id in self.busy:
            return False
        self.busy.add(suggestion_id)
        self.error = None
        try:
            await self.client.delete(f"{SUGGESTIONS_PATH}/{suggestion_id}")
        except ApiError as e:
            self.error = e.message
            return False
        finally:
            self.busy.discard(suggestion_id)
        self.message = "Suggestion deleted"
        await self.load()
        return True
