from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class BrowseResponse(BaseModel):
    items: list[dict[str, Any]]
    total: int
    page: int
    page_size: int
    month: str = "All"


class CreatedResponse(BaseModel):
    id: str


class BulkDeleteRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)


class BulkDeleteResponse(BaseModel):
    deleted: list[str]


class AnnouncementFeed(BaseModel):
    announcements: list[dict[str, Any]]
    wedding_announcements: list[dict[str, Any]]
