"""One taxonomy admin page: navigator + reorderable lists + form + delete dialog."""

import logging
from typing import Any

from nikah_console.client import ApiClient, ApiError
from nikah_console.taxonomy.delete import DeleteConfirmation, can_delete
from nikah_console.taxonomy.domains import BASE, DOMAINS, DomainSpec, RecordSchema
from nikah_console.taxonomy.form import EntityForm
from nikah_console.taxonomy.navigator import HierarchyNavigator
from nikah_console.taxonomy.reorder import ReorderableList

logger = logging.getLogger(__name__)


class TaxonomyEditor:
    def __init__(self, client: ApiClient, domain: DomainSpec | str, close_delay: float | None = None):
        self.client = client
        self.domain = DOMAINS[domain] if isinstance(domain, str) else domain
        self.navigator = HierarchyNavigator(client, self.domain)
        self.form = EntityForm(client, on_saved=self._after_save, close_delay=close_delay)
        self.deletion = DeleteConfirmation(client, on_deleted=self._after_delete)

    async def load(self) -> None:
        await self.navigator.load()

    @property
    def error(self) -> str | None:
        return self.navigator.error

    def items(self, level: int) -> list[dict[str, Any]]:
        return self.navigator.lists[level].items

    def list_for(self, level: int) -> ReorderableList:
        return self.navigator.lists[level]

    def _level_of(self, schema: RecordSchema) -> int:
        for index, spec in enumerate(self.domain.levels):
            if spec.schema is schema:
                return index
        raise ValueError(f"{schema.kind} is not part of {self.domain.key}")

    # -- form ---------------------------------------------------------------

    def open_create(self, level: int) -> bool:
        parent = self.navigator.parent_of(level)
        schema = self.domain.level(level).schema
        if schema.parent_field and parent is None:
            return False
        self.form.open_for(schema, parent_id=parent["id"] if parent else None)
        return True

    def open_edit(self, level: int, record: dict[str, Any]) -> None:
        self.form.open_for(self.domain.level(level).schema, record)

    async def _after_save(self, schema: RecordSchema, _saved: dict[str, Any]) -> None:
        await self.navigator.reload(self._level_of(schema))

    # -- delete -------------------------------------------------------------

    def can_delete(self, record: dict[str, Any]) -> bool:
        return can_delete(record)

    def request_delete(self, level: int, record: dict[str, Any]) -> bool:
        schema = self.domain.level(level).schema
        descendants = self.domain.descendant_labels(level, record, self.navigator.selected[:level])
        return self.deletion.open(schema, record, descendants)

    async def _after_delete(self, schema: RecordSchema, record: dict[str, Any]) -> None:
        level = self._level_of(schema)
        if self.navigator.selected[level] and self.navigator.selected[level]["id"] == record["id"]:
            self.navigator.deselect(level)
        await self.navigator.reload(level)


class CountryLanguages:
    """Which languages a country offers, in the country's own order."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.countries: list[dict[str, Any]] = []
        self.country: dict[str, Any] | None = None
        self.available: list[dict[str, Any]] = []
        self.error: str | None = None
        self.languages = ReorderableList(self._fetch_languages, self._commit_order)

    def _path(self) -> str:
        return f"{BASE}/languages/countries/{self.country['id']}"

    async def load_countries(self) -> None:
        try:
            body = await self.client.get(f"{BASE}/languages/countries")
        except ApiError as e:
            self.error = e.message
            return
        self.countries = body.get("countries", [])

    async def _fetch_languages(self) -> list[dict[str, Any]]:
        body = await self.client.get(self._path())
        self.available = body.get("availableLanguages", [])
        return body.get("languages", [])

    async def _commit_order(self, ordered_ids: list[str]) -> None:
        await self.client.post(
            f"{BASE}/languages/reorder", json={"orderedIds": ordered_ids, "countryId": self.country["id"]}
        )

    async def select_country(self, country: dict[str, Any]) -> None:
        self.country = country
        self.error = None
        try:
            await self.languages.reload()
        except ApiError as e:
            self.error = e.message

    async def _mutate(self, method: str, **kwargs) -> bool:
        self.error = None
        try:
            await self.client.request(method, self._path(), **kwargs)
        except ApiError as e:
            logger.warning("Country language %s failed: %s", method, e.message)
            self.error = e.message
            return False
        try:
            await self.languages.reload()
        except ApiError as e:
            self.error = e.message
        return True

    async def add(self, language_id: str, is_primary: bool = False) -> bool:
        if self.country is None:
            return False
        return await self._mutate("POST", json={"languageId": language_id, "isPrimary": is_primary})

    async def remove(self, language_id: str) -> bool:
        if self.country is None:
            return False
        return await self._mutate("DELETE", params={"languageId": language_id})
