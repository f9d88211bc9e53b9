from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from parishdesk.auth.deps import get_current_user, require_super_admin
from parishdesk.config import PAGE_SIZES
from parishdesk.core.config import settings
from parishdesk.core.timezone import local_now, local_timezone
from parishdesk.routers.deps import ensure_readable
from parishdesk.schemas.browse import (
    BrowseResponse,
    BulkDeleteRequest,
    BulkDeleteResponse,
    CreatedResponse,
)
from parishdesk.schemas.collections import CollectionName
from parishdesk.services.browser import ALL_MONTHS, MONTH_OPTIONS, RecordBrowser
from parishdesk.services.columns import columns_for, title_for
from parishdesk.services.priests import visible_records
from parishdesk.services.records import Record, accessor_for
from parishdesk.services.session import SessionUser
from parishdesk.stores import DocumentStore, get_store
from parishdesk.stores.base import RecordNotFoundError, join_path

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/collections", tags=["collections"])


def _browser_for(
    store: DocumentStore,
    collection: CollectionName,
    user: SessionUser,
) -> RecordBrowser:
    accessor = accessor_for(store, collection)

    def _remove(records: list[Record]) -> None:
        for record in records:
            accessor.remove(record["id"])

    return RecordBrowser(
        visible_records(store, collection, user),
        columns_for(collection),
        title=title_for(collection),
        on_delete_records=_remove,
        debounce_seconds=settings.SEARCH_DEBOUNCE_MS / 1000,
        today=local_now,
        tz=local_timezone(),
    )


def _fetch_or_404(store: DocumentStore, collection: CollectionName, record_id: str) -> Record:
    record = accessor_for(store, collection).fetch(record_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Record not found")
    return record


@router.get("/{name}", response_model=BrowseResponse)
def browse_collection(
    name: CollectionName,
    q: str | None = Query(default=None, max_length=200),
    month: str = Query(default=ALL_MONTHS),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=PAGE_SIZES[0]),
    store: DocumentStore = Depends(get_store),
    user: SessionUser = Depends(get_current_user),
) -> BrowseResponse:
    ensure_readable(name, user)
    if month not in MONTH_OPTIONS:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"Unknown month: {month}")
    if page_size not in PAGE_SIZES:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"page_size must be one of {list(PAGE_SIZES)}",
        )

    browser = _browser_for(store, name, user)
    browser.set_page_size(page_size)
    browser.set_page(page)
    browser.set_month(month)
    if q:
        browser.apply_search_now(q)

    return BrowseResponse(
        items=browser.visible_records(),
        total=browser.total_filtered(),
        page=browser.page,
        page_size=browser.page_size,
        month=browser.selected_month,
    )


@router.get("/{name}/export.csv")
def export_collection(
    name: CollectionName,
    store: DocumentStore = Depends(get_store),
    user: SessionUser = Depends(get_current_user),
) -> StreamingResponse:
    ensure_readable(name, user)
    export = _browser_for(store, name, user).export_csv()

    response = StreamingResponse(iter([export.content]), media_type="text/csv")
    response.headers["Content-Disposition"] = f'attachment; filename="{export.filename}"'
    return response


@router.get("/{name}/search", response_model=list[dict[str, Any]])
def search_collection(
    name: CollectionName,
    field: str = Query(..., min_length=1),
    value: str = Query(...),
    store: DocumentStore = Depends(get_store),
    user: SessionUser = Depends(get_current_user),
) -> list[Record]:
    """Exact match on one field. Query strings only carry text, so only string values match."""

    ensure_readable(name, user)
    return accessor_for(store, name).search_by_field(field, value)


@router.post("/{name}", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_record(
    name: CollectionName,
    payload: dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_store),
    user: SessionUser = Depends(require_super_admin),
) -> CreatedResponse:
    accessor = accessor_for(store, name)
    try:
        record = accessor.parse(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc
    record_id = accessor.create(record)
    logger.info("record_created", extra={"collection": name.value, "record_id": record_id, "user_id": user.id})
    return CreatedResponse(id=record_id)


@router.post("/{name}/bulk-delete", response_model=BulkDeleteResponse)
def bulk_delete_records(
    name: CollectionName,
    payload: BulkDeleteRequest,
    store: DocumentStore = Depends(get_store),
    user: SessionUser = Depends(require_super_admin),
) -> BulkDeleteResponse:
    browser = _browser_for(store, name, user)
    wanted = set(payload.ids)
    browser.select(record for record in browser.records if record.get("id") in wanted)
    deleted = [record["id"] for record in browser.delete_selected()]
    logger.info("records_bulk_deleted", extra={"collection": name.value, "count": len(deleted)})
    return BulkDeleteResponse(deleted=deleted)


@router.get("/{name}/{record_id}", response_model=dict[str, Any])
def get_record(
    name: CollectionName,
    record_id: str,
    store: DocumentStore = Depends(get_store),
    user: SessionUser = Depends(get_current_user),
) -> Record:
    ensure_readable(name, user)
    return _fetch_or_404(store, name, record_id)


@router.patch("/{name}/{record_id}", response_model=dict[str, Any])
def patch_record(
    name: CollectionName,
    record_id: str,
    payload: dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_store),
    _: SessionUser = Depends(require_super_admin),
) -> Record:
    if not payload:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nothing to update")
    accessor = accessor_for(store, name)
    accessor.patch(record_id, payload)
    logger.info("record_patched", extra={"collection": name.value, "record_id": record_id, "fields": sorted(payload)})
    return _fetch_or_404(store, name, record_id)


@router.delete("/{name}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_record(
    name: CollectionName,
    record_id: str,
    store: DocumentStore = Depends(get_store),
    _: SessionUser = Depends(require_super_admin),
) -> None:
    accessor = accessor_for(store, name)
    if accessor.fetch(record_id) is None:
        raise RecordNotFoundError(join_path(name.value, record_id))
    accessor.remove(record_id)
    logger.info("record_deleted", extra={"collection": name.value, "record_id": record_id})
