"""Dropdown options from ``/api/lookup`` with parent-dependent reloads."""

import logging
from typing import Any

from nikah_console.client import ApiClient, ApiError

logger = logging.getLogger(__name__)

LOOKUP_PATH = "/api/lookup"

# Form field -> lookup table for options with no parent
ROOT_LOOKUPS: dict[str, str] = {
    "originId": "origin",
    "countryOfOriginId": "country",
    "countryLivingInId": "country",
    "sectId": "sect",
    "heightId": "height",
    "educationLevelId": "educationLevel",
    "educationFieldId": "educationField",
}

# Form field -> (lookup table, form field holding the parent id)
DEPENDENT_LOOKUPS: dict[str, tuple[str, str]] = {
    "ethnicityId": ("ethnicity", "originId"),
    "casteId": ("caste", "ethnicityId"),
    "stateProvinceId": ("stateProvince", "countryLivingInId"),
    "cityId": ("city", "stateProvinceId"),
    "maslakId": ("maslak", "sectId"),
    "incomeRangeId": ("incomeRange", "countryLivingInId"),
    "motherTongueId": ("language", "countryOfOriginId"),
}

# Changing the key clears every listed field
CASCADES: dict[str, tuple[str, ...]] = {
    "originId": ("ethnicityId", "casteId"),
    "ethnicityId": ("casteId",),
    "countryLivingInId": ("stateProvinceId", "cityId", "incomeRangeId"),
    "stateProvinceId": ("cityId",),
    "sectId": ("maslakId",),
    "countryOfOriginId": ("motherTongueId",),
}


class Lookups:
    """Options per form field. Each dependent field has its own generation
    counter so a slow response for an old parent never overwrites a newer one."""

    def __init__(self, client: ApiClient, fields: tuple[str, ...] | None = None):
        self.client = client
        self.fields = fields
        self.options: dict[str, list[dict[str, Any]]] = {}
        self.error: str | None = None
        self._generation: dict[str, int] = {}

    def _wanted(self, name: str) -> bool:
        return self.fields is None or name in self.fields

    async def fetch(self, table: str, parent_id: str | None = None) -> list[dict[str, Any]]:
        body = await self.client.get(LOOKUP_PATH, params={"table": table, "parentId": parent_id})
        return body.get("data", [])

    async def load_roots(self) -> None:
        cache: dict[str, list[dict[str, Any]]] = {}
        for name, table in ROOT_LOOKUPS.items():
            if not self._wanted(name):
                continue
            try:
                if table not in cache:
                    cache[table] = await self.fetch(table)
            except ApiError as e:
                logger.warning("Lookup %s failed: %s", table, e.message)
                self.error = e.message
                continue
            self.options[name] = cache[table]

    async def load_dependents(self, values: dict[str, Any]) -> None:
        """Fill every dependent list whose parent already has a value (resume/edit)."""
        for name, (_table, parent) in DEPENDENT_LOOKUPS.items():
            if self._wanted(name) and values.get(parent):
                await self.reload(name, values[parent])

    async def reload(self, name: str, parent_id: str | None) -> bool:
        self._generation[name] = self._generation.get(name, 0) + 1
        generation = self._generation[name]
        if not parent_id:
            self.options[name] = []
            return True
        table, _parent = DEPENDENT_LOOKUPS[name]
        try:
            options = await self.fetch(table, parent_id)
        except ApiError as e:
            logger.warning("Lookup %s failed: %s", table, e.message)
            if generation == self._generation[name]:
                self.error = e.message
            return False
        if generation != self._generation[name]:
            return False
        self.options[name] = options
        return True

    async def on_change(self, name: str, values: dict[str, Any]) -> list[str]:
        """Clear the fields ``name`` cascades into and reload their options.

        Returns the cleared field names.
        """
        cleared = [f for f in CASCADES.get(name, ()) if self._wanted(f) or f in values]
        for field in cleared:
            values[field] = None
        for child, (_table, parent) in DEPENDENT_LOOKUPS.items():
            if not self._wanted(child):
                continue
            if parent == name:
                await self.reload(child, values.get(name))
            elif child in cleared:
                self.options[child] = []
        return cleared

    def label(self, name: str, option_id: str | None) -> str | None:
        for option in self.options.get(name, []):
            if option.get("id") == option_id:
                return option.get("display") or option.get("name")
        return None

    def option(self, name: str, option_id: str | None) -> dict[str, Any] | None:
        for option in self.options.get(name, []):
            if option.get("id") == option_id:
                return option
        return None
