from __future__ import annotations

import logging
import re
from datetime import datetime

from parishdesk.schemas.collections import CollectionName
from parishdesk.schemas.records import NotificationRecord
from parishdesk.services.records import Record, accessor_for
from parishdesk.stores.base import DocumentStore

logger = logging.getLogger(__name__)

_PASCAL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def separate_pascal_case(text: str) -> str:
    return _PASCAL_BOUNDARY.sub(r"\1 \2", text)


def _date_string(now: datetime | None = None) -> str:
    # e.g. "Mon Oct 19 2026", what the mobile app renders
    return (now or datetime.now()).strftime("%a %b %d %Y")


def notify_user(
    store: DocumentStore,
    *,
    notification_type: str,
    message: str,
    user_id: str | None,
    now: datetime | None = None,
) -> str:
    """Queue a notification from the parish office to a mobile user."""

    notification = NotificationRecord(
        message=message,
        timestamp=_date_string(now),
        title=separate_pascal_case(notification_type),
        type=notification_type,
        userId=user_id or None,
        fromAdmin=True,
    )
    notification_id = accessor_for(store, CollectionName.NOTIFICATION).create(notification)
    logger.info(
        "notification_created",
        extra={"notification_id": notification_id, "type": notification_type, "user_id": user_id},
    )
    return notification_id


def inbox(store: DocumentStore) -> list[Record]:
    """Notifications sent by parishioners to the office, newest first."""

    records = accessor_for(store, CollectionName.NOTIFICATION).fetch_all()
    incoming = [record for record in records if record.get("userId") and not record.get("fromAdmin")]
    return list(reversed(incoming))


def mark_read(store: DocumentStore, notification_id: str) -> None:
    accessor_for(store, CollectionName.NOTIFICATION).patch(notification_id, {"read": True})
