from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from parishdesk.auth.deps import require_super_admin
from parishdesk.routers.deps import ensure_in
from parishdesk.schemas.collections import REQUEST_FORM_COLLECTIONS, CollectionName
from parishdesk.schemas.workflow import ReleaseRequest
from parishdesk.services import workflows
from parishdesk.services.records import Record
from parishdesk.services.session import SessionUser
from parishdesk.stores import DocumentStore, get_store

router = APIRouter(prefix="/request-forms", tags=["request-forms"])


@router.post("/{name}/{record_id}/ready", response_model=dict[str, Any])
def mark_ready(
    name: CollectionName,
    record_id: str,
    store: DocumentStore = Depends(get_store),
    _: SessionUser = Depends(require_super_admin),
) -> Record:
    ensure_in(name, REQUEST_FORM_COLLECTIONS, "request form")
    return workflows.mark_request_ready(store, name, record_id)


@router.post("/{name}/{record_id}/release", response_model=dict[str, Any])
def release(
    name: CollectionName,
    record_id: str,
    payload: ReleaseRequest,
    store: DocumentStore = Depends(get_store),
    _: SessionUser = Depends(require_super_admin),
) -> Record:
    ensure_in(name, REQUEST_FORM_COLLECTIONS, "request form")
    try:
        return workflows.release_request(
            store,
            name,
            record_id,
            released_to=payload.released_to,
            released_date=payload.released_date,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
