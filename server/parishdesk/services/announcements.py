from __future__ import annotations

from datetime import datetime, timezone

from parishdesk.schemas.collections import CollectionName
from parishdesk.services.records import Record, accessor_for
from parishdesk.stores.base import DocumentStore


def _parse_expiration(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def is_not_expired(record: Record, now: datetime | None = None) -> bool:
    expiration = _parse_expiration(record.get("expiration"))
    if expiration is None:
        return False
    return expiration > (now or datetime.now(timezone.utc))


def public_feed(store: DocumentStore, now: datetime | None = None) -> dict[str, list[Record]]:
    announcements = accessor_for(store, CollectionName.ANNOUNCEMENTS).fetch_all()
    notices = accessor_for(store, CollectionName.WEDDING_ANNOUNCEMENTS).fetch_all()
    return {
        "announcements": announcements,
        "wedding_announcements": [notice for notice in notices if is_not_expired(notice, now)],
    }
