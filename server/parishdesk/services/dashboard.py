from __future__ import annotations

from collections import Counter
from datetime import datetime, tzinfo

from parishdesk.schemas.collections import CollectionName
from parishdesk.schemas.dashboard import DashboardSummary, KindSummary, MonthCount
from parishdesk.services.browser import MONTH_NAMES, record_timestamp
from parishdesk.services.priests import visible_records
from parishdesk.services.session import SessionUser
from parishdesk.stores.base import DocumentStore

APPOINTMENT_KINDS = (
    ("Mass", CollectionName.MASS_APPOINTMENTS),
    ("Confirmation", CollectionName.CONFIRMATION_APPOINTMENT),
    ("Baptism", CollectionName.BAPTISM_APPOINTMENT),
    ("Church Liturgy", CollectionName.CHURCH_LITURGY_APPOINTMENT),
    ("House Liturgy", CollectionName.HOUSE_LITURGY_APPOINTMENT),
    ("Wedding", CollectionName.WEDDING_APPOINTMENT),
)

REQUEST_FORM_KINDS = (
    ("Wedding", CollectionName.WEDDING_REQUEST_FORM),
    ("Confirmation", CollectionName.CONFIRMATION_REQUEST_FORM),
    ("Baptism", CollectionName.BAPTISM_REQUEST_FORM),
    ("Funeral", CollectionName.FUNERAL_REQUEST_FORM),
)


def _summarize_kind(
    store: DocumentStore,
    name: str,
    collection: CollectionName,
    user: SessionUser,
    year: int,
    tz: tzinfo | None,
) -> KindSummary:
    records = visible_records(store, collection, user)
    by_status = Counter(str(record.get("status") or "pending") for record in records)

    per_month = [0] * 12
    for record in records:
        stamp = record_timestamp(record)
        if stamp is None:
            continue
        if tz is not None and stamp.tzinfo is not None:
            stamp = stamp.astimezone(tz)
        if stamp.year == year:
            per_month[stamp.month - 1] += 1

    return KindSummary(
        name=name,
        collection=collection.value,
        total=len(records),
        by_status=dict(by_status),
        monthly=[MonthCount(month=month[:3], count=count) for month, count in zip(MONTH_NAMES, per_month)],
    )


def build_summary(
    store: DocumentStore,
    user: SessionUser,
    *,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> DashboardSummary:
    year = (now or datetime.now(tz)).year
    appointments = [_summarize_kind(store, name, coll, user, year, tz) for name, coll in APPOINTMENT_KINDS]
    request_forms = None
    if user.is_super_admin:
        request_forms = [_summarize_kind(store, name, coll, user, year, tz) for name, coll in REQUEST_FORM_KINDS]
    return DashboardSummary(year=year, appointments=appointments, request_forms=request_forms)
