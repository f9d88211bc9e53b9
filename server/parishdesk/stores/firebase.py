from __future__ import annotations

import logging
from typing import Any

import firebase_admin
from firebase_admin import credentials, db
from firebase_admin.exceptions import FirebaseError

from parishdesk.core.config import Settings
from parishdesk.stores.base import DocumentStore, RecordNotFoundError, StoreError, split_path
from parishdesk.stores.pushid import generate_push_id

logger = logging.getLogger(__name__)

APP_NAME = "parishdesk"


class FirebaseDocumentStore(DocumentStore):
    """Firebase Realtime Database backend."""

    def __init__(self, app: firebase_admin.App) -> None:
        self.app = app

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirebaseDocumentStore":
        if not settings.FIREBASE_DATABASE_URL:
            raise StoreError("FIREBASE_DATABASE_URL is not configured")
        try:
            app = firebase_admin.get_app(APP_NAME)
        except ValueError:
            credential = (
                credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
                if settings.FIREBASE_CREDENTIALS_PATH
                else credentials.ApplicationDefault()
            )
            app = firebase_admin.initialize_app(
                credential,
                {"databaseURL": settings.FIREBASE_DATABASE_URL},
                name=APP_NAME,
            )
            logger.info("firebase_app_initialized", extra={"database_url": settings.FIREBASE_DATABASE_URL})
        return cls(app)

    def _ref(self, path: str) -> db.Reference:
        split_path(path)
        return db.reference(path, app=self.app)

    def generate_key(self, path: str) -> str:
        split_path(path)
        # same algorithm the SDK clients use for push(), without the extra round trip
        return generate_push_id()

    def set(self, path: str, value: dict[str, Any]) -> None:
        try:
            self._ref(path).set(value)
        except FirebaseError as exc:
            raise StoreError(f"Could not write {path}") from exc

    def update(self, path: str, value: dict[str, Any]) -> None:
        _, key = split_path(path)
        if key is None:
            raise ValueError("Merge-writes must target a single document")
        ref = self._ref(path)
        try:
            if ref.get(shallow=True) is None:
                raise RecordNotFoundError(path)
            ref.update(value)
        except FirebaseError as exc:
            raise StoreError(f"Could not update {path}") from exc

    def delete(self, path: str) -> None:
        try:
            self._ref(path).delete()
        except FirebaseError as exc:
            raise StoreError(f"Could not delete {path}") from exc

    def get(self, path: str) -> dict[str, Any] | None:
        _, key = split_path(path)
        try:
            value = self._ref(path).get()
        except FirebaseError as exc:
            raise StoreError(f"Could not read {path}") from exc
        if value is None:
            return None
        if key is None:
            return {child_key: value[child_key] for child_key in sorted(value)}
        return value
