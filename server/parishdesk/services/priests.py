from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from parishdesk.schemas.collections import PRIEST_ASSIGNABLE_COLLECTIONS, CollectionName
from parishdesk.schemas.records import PriestConfirmationStatusEnum
from parishdesk.services.records import Record, accessor_for
from parishdesk.services.session import SessionUser
from parishdesk.stores.base import DocumentStore


def find_priest_for_user(store: DocumentStore, user: SessionUser) -> Record | None:
    matches = accessor_for(store, CollectionName.PRIESTS).search_by_field("authId", str(user.id))
    return matches[0] if matches else None


def filter_for_priest(records: Iterable[Any], user: SessionUser, priest_id: str | None) -> list[Any]:
    """Super admins see everything; a priest only sees assignments they have not turned down."""

    if user.is_super_admin:
        return list(records)
    if not priest_id:
        return []
    return [
        record
        for record in records
        if isinstance(record, dict)
        and record.get("priestId") == priest_id
        and record.get("priestConfirmationStatus") != PriestConfirmationStatusEnum.REJECTED.value
    ]


def visible_records(store: DocumentStore, collection: CollectionName, user: SessionUser) -> list[Record]:
    records = accessor_for(store, collection).fetch_all()
    if user.is_super_admin or collection not in PRIEST_ASSIGNABLE_COLLECTIONS:
        return records
    priest = find_priest_for_user(store, user)
    return filter_for_priest(records, user, priest["id"] if priest else None)
