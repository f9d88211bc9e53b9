from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from parishdesk.auth.deps import get_current_user, require_super_admin
from parishdesk.routers.deps import ensure_in
from parishdesk.schemas.collections import (
    APPOINTMENT_COLLECTIONS,
    PRIEST_ASSIGNABLE_COLLECTIONS,
    CollectionName,
)
from parishdesk.schemas.workflow import AssignPriestRequest, PriestConfirmationRequest
from parishdesk.services import workflows
from parishdesk.services.records import Record
from parishdesk.services.session import SessionUser
from parishdesk.stores import DocumentStore, get_store

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.post("/{name}/{record_id}/approve", response_model=dict[str, Any])
def approve_appointment(
    name: CollectionName,
    record_id: str,
    store: DocumentStore = Depends(get_store),
    _: SessionUser = Depends(require_super_admin),
) -> Record:
    ensure_in(name, APPOINTMENT_COLLECTIONS, "appointment")
    return workflows.approve_appointment(store, name, record_id)


@router.post("/{name}/{record_id}/reject", response_model=dict[str, Any])
def reject_appointment(
    name: CollectionName,
    record_id: str,
    store: DocumentStore = Depends(get_store),
    _: SessionUser = Depends(require_super_admin),
) -> Record:
    ensure_in(name, APPOINTMENT_COLLECTIONS, "appointment")
    return workflows.reject_appointment(store, name, record_id)


@router.post("/{name}/{record_id}/assign-priest", response_model=dict[str, Any])
def assign_priest(
    name: CollectionName,
    record_id: str,
    payload: AssignPriestRequest,
    store: DocumentStore = Depends(get_store),
    _: SessionUser = Depends(require_super_admin),
) -> Record:
    ensure_in(name, PRIEST_ASSIGNABLE_COLLECTIONS, "priest-assignable")
    return workflows.assign_priest(
        store,
        name,
        record_id,
        payload.priest_id,
        send_confirmation_request=payload.send_confirmation_request,
    )


@router.post("/{name}/{record_id}/priest-confirmation", response_model=dict[str, Any])
def answer_assignment(
    name: CollectionName,
    record_id: str,
    payload: PriestConfirmationRequest,
    store: DocumentStore = Depends(get_store),
    user: SessionUser = Depends(get_current_user),
) -> Record:
    ensure_in(name, PRIEST_ASSIGNABLE_COLLECTIONS, "priest-assignable")
    return workflows.respond_to_assignment(store, name, record_id, user, accept=payload.accept)
