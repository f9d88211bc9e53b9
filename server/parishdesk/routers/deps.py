from __future__ import annotations

from fastapi import HTTPException, status

from parishdesk.schemas.collections import PRIEST_VISIBLE_COLLECTIONS, CollectionName
from parishdesk.services.session import SessionUser


def ensure_readable(collection: CollectionName, user: SessionUser) -> None:
    if not user.is_super_admin and collection not in PRIEST_VISIBLE_COLLECTIONS:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Super Admin privileges required")


def ensure_in(collection: CollectionName, allowed: frozenset, kind: str) -> None:
    if collection not in allowed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{collection.value} is not a {kind} collection",
        )
