from __future__ import annotations

from pydantic import BaseModel


class MonthCount(BaseModel):
    month: str
    count: int


class KindSummary(BaseModel):
    name: str
    collection: str
    total: int
    by_status: dict[str, int]
    monthly: list[MonthCount]


class DashboardSummary(BaseModel):
    year: int
    appointments: list[KindSummary]
    request_forms: list[KindSummary] | None = None
