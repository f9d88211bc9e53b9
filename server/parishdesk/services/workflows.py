"""Status changes on appointments and certificate requests.

Every transition is a plain field patch through the record accessor,
followed by a notification to the parishioner who filed the record.
"""

from __future__ import annotations

import logging
from datetime import date

from parishdesk.core.timezone import local_now
from parishdesk.schemas.collections import (
    APPOINTMENT_COLLECTIONS,
    DECISION_NOTIFIED_COLLECTIONS,
    NOTIFICATION_TYPES,
    PRIEST_ASSIGNABLE_COLLECTIONS,
    REQUEST_FORM_COLLECTIONS,
    CollectionName,
)
from parishdesk.schemas.records import (
    PriestConfirmationStatusEnum,
    RequestFormStatusEnum,
    StatusEnum,
)
from parishdesk.services.notifications import notify_user, separate_pascal_case
from parishdesk.services.priests import find_priest_for_user
from parishdesk.services.records import Record, RecordAccessor, accessor_for
from parishdesk.services.session import SessionUser
from parishdesk.stores.base import DocumentStore, RecordNotFoundError, join_path

logger = logging.getLogger(__name__)

_OPEN_STATES = (None, "", "pending")


class WorkflowError(Exception):
    """Raised when a record is not in a state that allows the requested change."""


class AssignmentPermissionError(WorkflowError):
    """Raised when a priest answers an assignment that belongs to someone else."""


def _load(accessor: RecordAccessor, record_id: str) -> Record:
    record = accessor.fetch(record_id)
    if record is None:
        raise RecordNotFoundError(join_path(accessor.path, record_id))
    return record


def _require(collection: CollectionName, allowed: frozenset, kind: str) -> None:
    if collection not in allowed:
        raise WorkflowError(f"{collection.value} is not a {kind} collection")


def set_appointment_status(
    store: DocumentStore,
    collection: CollectionName,
    record_id: str,
    status: StatusEnum,
) -> Record:
    _require(collection, APPOINTMENT_COLLECTIONS, "appointment")
    if status == StatusEnum.PENDING:
        raise WorkflowError("Appointments can only be approved or rejected")

    accessor = accessor_for(store, collection)
    record = _load(accessor, record_id)
    if record.get("status") not in _OPEN_STATES:
        raise WorkflowError(f"Appointment is already {record.get('status')}")

    accessor.patch(record_id, {"status": status.value})
    logger.info(
        "appointment_status_changed",
        extra={"collection": collection.value, "record_id": record_id, "status": status.value},
    )

    if collection in DECISION_NOTIFIED_COLLECTIONS:
        notification_type = NOTIFICATION_TYPES[collection]
        notify_user(
            store,
            notification_type=notification_type,
            message=f"{separate_pascal_case(notification_type)} has been {status.value}",
            user_id=record.get("userId"),
        )
    return _load(accessor, record_id)


def approve_appointment(store: DocumentStore, collection: CollectionName, record_id: str) -> Record:
    return set_appointment_status(store, collection, record_id, StatusEnum.APPROVED)


def reject_appointment(store: DocumentStore, collection: CollectionName, record_id: str) -> Record:
    return set_appointment_status(store, collection, record_id, StatusEnum.REJECTED)


def assign_priest(
    store: DocumentStore,
    collection: CollectionName,
    record_id: str,
    priest_id: str,
    *,
    send_confirmation_request: bool,
) -> Record:
    """Point an appointment at a priest.

    With ``send_confirmation_request`` the priest has to accept first;
    otherwise the assignment counts as accepted straight away.
    """

    _require(collection, PRIEST_ASSIGNABLE_COLLECTIONS, "priest-assignable")
    accessor = accessor_for(store, collection)
    _load(accessor, record_id)
    _load(accessor_for(store, CollectionName.PRIESTS), priest_id)

    confirmation = (
        PriestConfirmationStatusEnum.PENDING
        if send_confirmation_request
        else PriestConfirmationStatusEnum.APPROVED
    )
    accessor.patch(record_id, {"priestId": priest_id, "priestConfirmationStatus": confirmation.value})
    logger.info(
        "priest_assigned",
        extra={
            "collection": collection.value,
            "record_id": record_id,
            "priest_id": priest_id,
            "confirmation": confirmation.value,
        },
    )
    return _load(accessor, record_id)


def respond_to_assignment(
    store: DocumentStore,
    collection: CollectionName,
    record_id: str,
    user: SessionUser,
    *,
    accept: bool,
) -> Record:
    _require(collection, PRIEST_ASSIGNABLE_COLLECTIONS, "priest-assignable")
    accessor = accessor_for(store, collection)
    record = _load(accessor, record_id)

    priest = find_priest_for_user(store, user)
    if priest is None or record.get("priestId") != priest["id"]:
        raise AssignmentPermissionError("This appointment is not assigned to you")
    if record.get("priestConfirmationStatus") not in _OPEN_STATES:
        raise WorkflowError(f"Assignment is already {record.get('priestConfirmationStatus')}")

    answer = PriestConfirmationStatusEnum.APPROVED if accept else PriestConfirmationStatusEnum.REJECTED
    accessor.patch(record_id, {"priestConfirmationStatus": answer.value})
    logger.info(
        "priest_assignment_answered",
        extra={"collection": collection.value, "record_id": record_id, "answer": answer.value},
    )
    return _load(accessor, record_id)


def mark_request_ready(store: DocumentStore, collection: CollectionName, record_id: str) -> Record:
    _require(collection, REQUEST_FORM_COLLECTIONS, "request form")
    accessor = accessor_for(store, collection)
    record = _load(accessor, record_id)
    if record.get("status") not in _OPEN_STATES:
        raise WorkflowError(f"Request is already {record.get('status')}")

    accessor.patch(record_id, {"status": RequestFormStatusEnum.READY.value})
    logger.info("request_form_ready", extra={"collection": collection.value, "record_id": record_id})
    notify_user(
        store,
        notification_type=NOTIFICATION_TYPES[collection],
        message="Certificate is ready to be released",
        user_id=record.get("userId"),
    )
    return _load(accessor, record_id)


def release_request(
    store: DocumentStore,
    collection: CollectionName,
    record_id: str,
    *,
    released_to: str,
    released_date: date | None = None,
) -> Record:
    _require(collection, REQUEST_FORM_COLLECTIONS, "request form")
    name = (released_to or "").strip()
    if len(name) < 2:
        raise ValueError("Name must have at least 2 letters")

    accessor = accessor_for(store, collection)
    record = _load(accessor, record_id)
    if record.get("status") != RequestFormStatusEnum.READY.value:
        raise WorkflowError("Only requests marked ready can be released")

    accessor.patch(
        record_id,
        {
            "status": RequestFormStatusEnum.RELEASED.value,
            "releasedTo": name,
            "releasedDate": (released_date or local_now().date()).isoformat(),
        },
    )
    logger.info(
        "request_form_released",
        extra={"collection": collection.value, "record_id": record_id, "released_to": name},
    )
    notify_user(
        store,
        notification_type=NOTIFICATION_TYPES[collection],
        message=f"Certificate has been released to {name}",
        user_id=record.get("userId"),
    )
    return _load(accessor, record_id)
