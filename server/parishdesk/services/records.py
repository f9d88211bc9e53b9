from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from parishdesk.schemas.collections import CollectionName, model_for
from parishdesk.schemas.records import RESERVED_FIELDS, BaseRecord
from parishdesk.stores.base import DocumentStore, join_path

T = TypeVar("T", bound=BaseRecord)

Record = dict[str, Any]


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""

    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _strip_reserved(data: Mapping[str, Any]) -> Record:
    return {key: value for key, value in data.items() if key not in RESERVED_FIELDS}


def strictly_equal(left: Any, right: Any) -> bool:
    """Equality without cross-type coercion: ``"1"`` never equals ``1``."""

    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return type(left) is type(right) and left == right


class RecordAccessor(Generic[T]):
    """CRUD and lookup over one collection of the document store.

    The accessor owns the audit fields: ``dateTimeStamp`` on create and
    ``updated`` on patch. Store keys are injected back as ``id`` on every
    read because the stored bodies never contain them. Store failures are
    not caught here.
    """

    def __init__(
        self,
        store: DocumentStore,
        collection: CollectionName,
        model: type[T] | None = None,
        *,
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        self.store = store
        self.collection = CollectionName(collection)
        self.model = model
        self._clock = clock

    @property
    def path(self) -> str:
        return self.collection.value

    def _document_path(self, record_id: str) -> str:
        if not record_id or not str(record_id).strip():
            raise ValueError("A record id is required")
        return join_path(self.path, str(record_id))

    def create(self, data: T | Mapping[str, Any]) -> str:
        if isinstance(data, BaseRecord):
            document = data.to_document()
        elif isinstance(data, BaseModel):
            document = _strip_reserved(data.model_dump(mode="json", exclude_none=True))
        else:
            document = _strip_reserved(data)
        document["dateTimeStamp"] = self._clock()

        key = self.store.generate_key(self.path)
        self.store.set(join_path(self.path, key), document)
        return key

    def patch(self, record_id: str, data: Mapping[str, Any]) -> None:
        path = self._document_path(record_id)
        partial = _strip_reserved(data)
        partial["updated"] = self._clock()
        self.store.update(path, partial)

    def remove(self, record_id: str) -> None:
        self.store.delete(self._document_path(record_id))

    def fetch(self, record_id: str) -> Record | None:
        document = self.store.get(self._document_path(record_id))
        if not isinstance(document, dict):
            return None
        return {**document, "id": str(record_id)}

    def fetch_all(self) -> list[Record]:
        snapshot = self.store.get(self.path) or {}
        return [{**value, "id": key} for key, value in snapshot.items() if isinstance(value, dict)]

    def search_by_field(self, field: str, value: Any) -> list[Record]:
        return [
            record
            for record in self.fetch_all()
            if field in record and strictly_equal(record[field], value)
        ]

    def parse(self, record: Mapping[str, Any]) -> T:
        if self.model is None:
            raise TypeError(f"No record model registered for {self.path}")
        return self.model.model_validate(record)


def accessor_for(store: DocumentStore, collection: CollectionName | str) -> RecordAccessor[BaseRecord]:
    name = CollectionName(collection)
    return RecordAccessor(store, name, model_for(name))
