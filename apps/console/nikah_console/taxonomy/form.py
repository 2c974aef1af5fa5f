import asyncio
import logging
from typing import Any, Awaitable, Callable

from nikah_console.client import ApiClient, ApiError
from nikah_console.config import get_console_settings
from nikah_console.taxonomy.domains import FieldSpec, RecordSchema

logger = logging.getLogger(__name__)


def _to_number(text: str) -> int | float | None:
    """Blank or unparseable input clears the value."""
    text = text.strip()
    for cast in (int, float):
        try:
            return cast(text)
        except ValueError:
            continue
    return None


class EntityForm:
    """Create/edit dialog for one taxonomy record.

    ``schema`` decides which fields are shown and sent. Hidden fields keep their
    values, so toggling a visibility flag back on shows what was there before.
    """

    def __init__(
        self,
        client: ApiClient,
        on_saved: Callable[[RecordSchema, dict[str, Any]], Awaitable[None]] | None = None,
        close_delay: float | None = None,
    ):
        self.client = client
        self.on_saved = on_saved
        self.close_delay = get_console_settings().success_close_delay if close_delay is None else close_delay
        self.schema: RecordSchema | None = None
        self.record_id: str | None = None
        self.parent_id: str | None = None
        self.values: dict[str, Any] = {}
        self.is_open = False
        self.saving = False
        self.submit_error: str | None = None
        self.success: str | None = None
        self._close_task: asyncio.Task | None = None

    @property
    def editing(self) -> bool:
        return self.record_id is not None

    @property
    def title(self) -> str:
        if self.schema is None:
            return ""
        return f"{'Edit' if self.editing else 'Add'} {self.schema.display}"

    def open_for(self, schema: RecordSchema, record: dict[str, Any] | None = None, parent_id: str | None = None) -> None:
        self._cancel_close()
        self.schema = schema
        self.record_id = record.get("id") if record else None
        self.parent_id = parent_id
        self.values = schema.values_from(record) if record else schema.empty()
        self.submit_error = None
        self.success = None
        self.saving = False
        self.is_open = True

    def _cancel_close(self) -> None:
        if self._close_task and not self._close_task.done() and self._close_task is not asyncio.current_task():
            self._close_task.cancel()
        self._close_task = None

    def close(self) -> None:
        self.is_open = False
        self._cancel_close()

    def _field(self, name: str) -> FieldSpec:
        for f in self.schema.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    def set(self, name: str, value: Any) -> None:
        spec = self._field(name)
        if spec.kind == "number" and isinstance(value, str):
            value = _to_number(value)
        elif spec.kind == "bool":
            value = bool(value)
        self.values[name] = value

    def _visible(self, spec: FieldSpec) -> bool:
        return spec.visible_when is None or bool(self.values.get(spec.visible_when))

    @property
    def visible_fields(self) -> list[FieldSpec]:
        return [f for f in self.schema.fields if self._visible(f)] if self.schema else []

    @property
    def missing_fields(self) -> list[str]:
        missing = []
        for f in self.visible_fields:
            value = self.values.get(f.name)
            if f.required and (value is None or (isinstance(value, str) and not value.strip())):
                missing.append(f.name)
        return missing

    @property
    def range_errors(self) -> dict[str, str]:
        errors = {}
        for f in self.visible_fields:
            value = self.values.get(f.name)
            if f.kind != "number" or value is None:
                continue
            if f.min is not None and value < f.min:
                errors[f.name] = f"{f.label} must be at least {f.min}"
            elif f.max is not None and value > f.max:
                errors[f.name] = f"{f.label} must be at most {f.max}"
        return errors

    @property
    def can_submit(self) -> bool:
        return self.is_open and not self.saving and not self.missing_fields and not self.range_errors

    def payload(self) -> dict[str, Any]:
        body = dict(self.values)
        if not self.editing and self.schema.parent_field and self.parent_id:
            body[self.schema.parent_field] = self.parent_id
        return body

    async def submit(self) -> bool:
        if not self.can_submit:
            return False
        self.saving = True
        self.submit_error = None
        try:
            if self.editing:
                body = await self.client.patch(f"{self.schema.endpoint}/{self.record_id}", json=self.payload())
            else:
                body = await self.client.post(self.schema.endpoint, json=self.payload())
        except ApiError as e:
            logger.warning("Saving %s failed: %s", self.schema.kind, e.message)
            self.submit_error = e.message
            return False
        finally:
            self.saving = False

        self.success = "Updated successfully" if self.editing else "Created successfully"
        saved = body.get(self.schema.kind) or {}
        if self.on_saved:
            await self.on_saved(self.schema, saved)
        self._close_task = asyncio.create_task(self._close_later())
        return True

    async def _close_later(self) -> None:
        await asyncio.sleep(self.close_delay)
        self.close()
