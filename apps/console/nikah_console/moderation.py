"""Moderator screens: profile list, profile review (with photos) and the remap editor."""

import logging
from typing import Any

from nikah_api.profile_fields import ADMIN_EDITABLE_FIELDS

from nikah_console.client import ApiClient, ApiError
from nikah_console.lookups import Lookups

logger = logging.getLogger(__name__)

PROFILES_PATH = "/api/admin/profiles"
PROFILE_SORTS = ("oldest", "newest", "completeness")
CONFIRM_ACTIONS = frozenset({"reject", "ban"})

# Free-text suggestion columns and the reference they get remapped to
SUGGESTIONS = {
    "suggestedLocation": ("countryLivingInId", "stateProvinceId", "cityId"),
    "customCaste": ("casteId",),
    "otherMotherTongue": ("motherTongueId",),
}


class ProfileListScreen:
    def __init__(self, client: ApiClient, limit: int = 20):
        self.client = client
        self.limit = limit
        self.status: str | None = "PENDING"
        self.sort = "oldest"
        self.page = 1
        self.profiles: list[dict[str, Any]] = []
        self.pagination: dict[str, Any] = {}
        self.counts: dict[str, int] = {}
        self.loading = False
        self.error: str | None = None

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            body = await self.client.get(
                PROFILES_PATH,
                params={"status": self.status, "sort": self.sort, "page": self.page, "limit": self.limit},
            )
        except ApiError as e:
            self.error = e.message
            return
        finally:
            self.loading = False
        self.profiles = body.get("profiles", [])
        self.pagination = body.get("pagination", {})
        self.counts = body.get("counts", {})

    async def set_status(self, status: str | None) -> None:
        self.status = status
        self.page = 1
        await self.load()

    async def set_sort(self, sort: str) -> None:
        if sort not in PROFILE_SORTS:
            raise ValueError(f"sort must be one of: {', '.join(PROFILE_SORTS)}")
        self.sort = sort
        self.page = 1
        await self.load()

    async def go_to_page(self, page: int) -> None:
        total_pages = self.pagination.get("totalPages") or 1
        if 1 <= page <= total_pages and page != self.page:
            self.page = page
            await self.load()


class ProfileReviewScreen:
    """One profile under review.

    Actions are keyed per row (``"profile"``, ``"photo:<id>"``); a key that is
    still busy refuses a second submission.
    """

    def __init__(self, client: ApiClient, profile_id: str):
        self.client = client
        self.profile_id = profile_id
        self.profile: dict[str, Any] | None = None
        self.loading = False
        self.error: str | None = None
        self.message: str | None = None
        self.busy: set[str] = set()
        self.pending_confirm: str | None = None

    @property
    def path(self) -> str:
        return f"{PROFILES_PATH}/{self.profile_id}"

    @property
    def photos(self) -> list[dict[str, Any]]:
        return (self.profile or {}).get("photos", [])

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            body = await self.client.get(self.path)
        except ApiError as e:
            self.error = e.message
            return
        finally:
            self.loading = False
        self.profile = body.get("profile")

    async def _run(self, key: str, method: str, path: str, json: Any = None) -> bool:
        if key in self.busy:
            return False
        self.busy.add(key)
        self.error = None
        try:
            body = await self.client.request(method, path, json=json)
        except ApiError as e:
            logger.warning("%s on %s failed: %s", key, self.profile_id, e.message)
            self.error = e.message
            return False
        finally:
            self.busy.discard(key)
        self.message = body.get("message")
        await self.load()
        return True

    async def moderate(self, action: str, feedback: str | None = None, confirmed: bool = False) -> bool:
        """approve | reject | ban. Reject and ban only go through with ``confirmed``."""
        if action in CONFIRM_ACTIONS and not confirmed:
            self.pending_confirm = action
            return False
        self.pending_confirm = None
        return await self._run("profile", "POST", f"{self.path}/moderate", {"action": action, "feedback": feedback})

    def cancel_confirm(self) -> None:
        self.pending_confirm = None

    async def moderate_photo(self, photo_id: str, action: str, reason: str | None = None) -> bool:
        return await self._run(
            f"photo:{photo_id}", "PATCH", f"{self.path}/photos/{photo_id}", {"action": action, "reason": reason}
        )

    async def delete_photo(self, photo_id: str) -> bool:
        return await self._run(f"photo:{photo_id}", "DELETE", f"{self.path}/photos/{photo_id}")


class ProfileRemapEditor:
    """Maps a profile's free-text suggestions onto taxonomy rows."""

    def __init__(self, client: ApiClient, profile_id: str):
        self.client = client
        self.profile_id = profile_id
        self.lookups = Lookups(client, fields=ADMIN_EDITABLE_FIELDS)
        self.values: dict[str, Any] = {}
        self.original: dict[str, Any] = {}
        self.saving = False
        self.error: str | None = None
        self.success: str | None = None

    async def load(self) -> None:
        self.error = None
        try:
            body = await self.client.get(f"{PROFILES_PATH}/{self.profile_id}")
        except ApiError as e:
            self.error = e.message
            return
        profile = body.get("profile") or {}
        self.values = {name: profile.get(name) for name in ADMIN_EDITABLE_FIELDS}
        self.original = dict(self.values)
        await self.lookups.load_roots()
        await self.lookups.load_dependents(self.values)

    @property
    def suggestions(self) -> dict[str, str]:
        return {name: self.original[name] for name in SUGGESTIONS if self.original.get(name)}

    async def set_field(self, name: str, value: Any) -> list[str]:
        if name not in ADMIN_EDITABLE_FIELDS:
            raise KeyError(name)
        if self.values.get(name) == value:
            return []
        self.values[name] = value
        return await self.lookups.on_change(name, self.values)

    def clear_suggestion(self, name: str) -> None:
        if name in SUGGESTIONS:
            self.values[name] = None

    def changes(self) -> dict[str, Any]:
        return {k: v for k, v in self.values.items() if v != self.original.get(k)}

    async def save(self) -> bool:
        changes = self.changes()
        if not changes or self.saving:
            return False
        self.saving = True
        self.error = None
        try:
            body = await self.client.patch(f"{PROFILES_PATH}/{self.profile_id}/edit", json=changes)
        except ApiError as e:
            logger.warning("Profile %s edit failed: %s", self.profile_id, e.message)
            self.error = e.message
            return False
        finally:
            self.saving = False
        self.success = body.get("message")
        profile = body.get("profile") or {}
        self.values = {name: profile.get(name) for name in ADMIN_EDITABLE_FIELDS}
        self.original = dict(self.values)
        return True
