from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from parishdesk.auth.deps import get_current_user
from parishdesk.services.priests import find_priest_for_user
from parishdesk.services.records import Record
from parishdesk.services.session import SessionUser
from parishdesk.stores import DocumentStore, get_store

router = APIRouter(prefix="/priests", tags=["priests"])


@router.get("/me", response_model=dict[str, Any])
def my_priest_record(
    store: DocumentStore = Depends(get_store),
    user: SessionUser = Depends(get_current_user),
) -> Record:
    priest = find_priest_for_user(store, user)
    if priest is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No priest record for this account")
    return priest
