"""Admin phone verification queue."""

import logging
from typing import Any

from nikah_console.client import ApiClient, ApiError

logger = logging.getLogger(__name__)

QUEUE_PATH = "/api/admin/users/verification"
TABS = ("pending", "unverified", "all")


class VerificationQueue:
    def __init__(self, client: ApiClient, limit: int = 20):
        self.client = client
        self.limit = limit
        self.tab = "pending"
        self.page = 1
        self.search = ""
        self.rows: list[dict[str, Any]] = []
        self.pagination: dict[str, Any] = {}
        self.pending_count = 0
        self.selected: set[str] = set()
        self.busy: set[str] = set()
        self.loading = False
        self.error: str | None = None
        self.message: str | None = None

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            body = await self.client.get(
                QUEUE_PATH,
                params={"tab": self.tab, "page": self.page, "limit": self.limit, "search": self.search or None},
            )
        except ApiError as e:
            self.error = e.message
            return
        finally:
            self.loading = False
        self.rows = body.get("data", [])
        self.pagination = body.get("pagination", {})

    async def refresh_count(self) -> None:
        try:
            body = await self.client.get(f"{QUEUE_PATH}/pending-count")
        except ApiError as e:
            logger.warning("Pending count failed: %s", e.message)
            return
        self.pending_count = body.get("count", 0)

    async def set_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"tab must be one of: {', '.join(TABS)}")
        self.tab = tab
        self.page = 1
        self.selected.clear()
        await self.load()

    async def set_search(self, search: str) -> None:
        self.search = search.strip()
        self.page = 1
        await self.load()

    async def go_to_page(self, page: int) -> None:
        total_pages = self.pagination.get("totalPages") or 1
        if 1 <= page <= total_pages and page != self.page:
            self.page = page
            await self.load()

    def toggle(self, user_id: str) -> None:
        self.selected ^= {user_id}

    async def _act(self, key: str, method: str, json: dict[str, Any]) -> dict[str, Any] | None:
        if key in self.busy:
            return None
        self.busy.add(key)
        self.error = None
        try:
            body = await self.client.request(method, QUEUE_PATH, json=json)
        except ApiError as e:
            logger.warning("Verification %s failed: %s", json.get("action"), e.message)
            self.error = e.message
            return None
        finally:
            self.busy.discard(key)
        self.message = body.get("message")
        await self.load()
        await self.refresh_count()
        return body

    async def verify_request(self, verification_id: str) -> bool:
        body = await self._act(verification_id, "PUT", {"action": "verify", "verificationId": verification_id})
        return body is not None

    async def verify_user(self, user_id: str) -> bool:
        body = await self._act(user_id, "PUT", {"action": "verify", "userId": user_id})
        return body is not None

    async def reject(self, verification_id: str) -> bool:
        body = await self._act(verification_id, "PUT", {"action": "reject", "verificationId": verification_id})
        return body is not None

    async def send_reminders(self, user_ids: list[str] | None = None) -> dict[str, Any] | None:
        ids = sorted(user_ids if user_ids is not None else self.selected)
        if not ids:
            self.error = "Select at least one user"
            return None
        body = await self._act("reminders", "POST", {"action": "send_reminder", "userIds": ids})
        if body is not None:
            self.selected.clear()
        return body
