from __future__ import annotations

import copy
import threading
from typing import Any

from parishdesk.stores.base import DocumentStore, RecordNotFoundError, split_path
from parishdesk.stores.pushid import generate_push_id


class MemoryDocumentStore(DocumentStore):
    """Process-local store used for tests and throwaway demos."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.RLock()

    def generate_key(self, path: str) -> str:
        split_path(path)
        return generate_push_id()

    def set(self, path: str, value: dict[str, Any]) -> None:
        collection, key = split_path(path)
        with self._lock:
            if key is None:
                self._data[collection] = copy.deepcopy(value)
                return
            self._data.setdefault(collection, {})[key] = copy.deepcopy(value)

    def update(self, path: str, value: dict[str, Any]) -> None:
        collection, key = split_path(path)
        if key is None:
            raise ValueError("Merge-writes must target a single document")
        with self._lock:
            current = self._data.get(collection, {}).get(key)
            if current is None:
                raise RecordNotFoundError(path)
            current.update(copy.deepcopy(value))

    def delete(self, path: str) -> None:
        collection, key = split_path(path)
        with self._lock:
            if key is None:
                self._data.pop(collection, None)
                return
            self._data.get(collection, {}).pop(key, None)

    def get(self, path: str) -> dict[str, Any] | None:
        collection, key = split_path(path)
        with self._lock:
            documents = self._data.get(collection)
            if not documents:
                return None
            if key is None:
                return {doc_key: copy.deepcopy(documents[doc_key]) for doc_key in sorted(documents)}
            document = documents.get(key)
            return copy.deepcopy(document) if document is not None else None

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
