from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status

from parishdesk.auth.deps import require_super_admin
from parishdesk.services import notifications as notifications_service
from parishdesk.services.records import Record
from parishdesk.services.session import SessionUser
from parishdesk.stores import DocumentStore, get_store

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[dict[str, Any]])
def list_notifications(
    store: DocumentStore = Depends(get_store),
    _: SessionUser = Depends(require_super_admin),
) -> list[Record]:
    return notifications_service.inbox(store)


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notification_read(
    notification_id: str,
    store: DocumentStore = Depends(get_store),
    _: SessionUser = Depends(require_super_admin),
) -> None:
    notifications_service.mark_read(store, notification_id)
