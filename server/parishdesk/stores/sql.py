from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from parishdesk.models.document import StoredDocument
from parishdesk.stores.base import DocumentStore, RecordNotFoundError, StoreError, split_path
from parishdesk.stores.pushid import generate_push_id

logger = logging.getLogger(__name__)


def key_ordering(dialect_name: str):
    """Byte-order sort on keys so push ids come back in creation order.

    Postgres locales fold case and skip punctuation, so force the C collation there.
    """

    if dialect_name == "postgresql":
        return StoredDocument.key.collate("C").asc()
    return StoredDocument.key.asc()


class SqlDocumentStore(DocumentStore):
    """Document store over the ``documents`` table.

    Each call commits on its own, so a single document write is atomic and
    nothing spans more than one document. Reads refresh from the database so
    writes made through other sessions are visible.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def generate_key(self, path: str) -> str:
        split_path(path)
        return generate_push_id()

    def _commit(self, action: str, path: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("document_store_write_failed", extra={"action": action, "path": path})
            raise StoreError(f"Could not {action} {path}") from exc

    def set(self, path: str, value: dict[str, Any]) -> None:
        collection, key = split_path(path)
        if key is None:
            raise ValueError("Whole-document writes must target a single document")
        try:
            document = self.db.get(StoredDocument, (collection, key), populate_existing=True)
            if document is None:
                self.db.add(StoredDocument(collection=collection, key=key, body=dict(value)))
            else:
                document.body = dict(value)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"Could not write {path}") from exc
        self._commit("write", path)

    def update(self, path: str, value: dict[str, Any]) -> None:
        collection, key = split_path(path)
        if key is None:
            raise ValueError("Merge-writes must target a single document")
        try:
            document = self.db.get(StoredDocument, (collection, key), populate_existing=True)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"Could not read {path}") from exc
        if document is None:
            raise RecordNotFoundError(path)
        # reassign so the JSON column is flagged dirty
        document.body = {**(document.body or {}), **value}
        self._commit("update", path)

    def delete(self, path: str) -> None:
        collection, key = split_path(path)
        try:
            query = self.db.query(StoredDocument).filter(StoredDocument.collection == collection)
            if key is not None:
                query = query.filter(StoredDocument.key == key)
            query.delete(synchronize_session=False)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"Could not delete {path}") from exc
        self._commit("delete", path)

    def get(self, path: str) -> dict[str, Any] | None:
        collection, key = split_path(path)
        try:
            if key is not None:
                document = self.db.get(StoredDocument, (collection, key), populate_existing=True)
                return dict(document.body) if document is not None else None
            rows = (
                self.db.query(StoredDocument)
                .filter(StoredDocument.collection == collection)
                .order_by(key_ordering(self.db.get_bind().dialect.name))
                .populate_existing()
                .all()
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"Could not read {path}") from exc
        if not rows:
            return None
        return {row.key: dict(row.body or {}) for row in rows}
