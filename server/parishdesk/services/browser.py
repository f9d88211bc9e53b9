"""Filter, page, select and export an in-memory list of records.

The browser works on whatever list the caller hands it and knows nothing
about where the records came from. It keeps its own transient state (search
query, month filter, page, page size, selection) and derives the visible
page from it on every call.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Literal, Union

from parishdesk.config import PAGE_SIZES

logger = logging.getLogger(__name__)

ALL_MONTHS = "All"
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
MONTH_OPTIONS = (ALL_MONTHS, *MONTH_NAMES)
TIMESTAMP_FIELDS = ("dateTimeStamp", "created")
DEFAULT_DEBOUNCE_SECONDS = 0.8

Align = Literal["left", "center", "right"]


class BrowserConfigError(Exception):
    """Raised when the browser is asked to do something its setup does not allow."""


@dataclass(frozen=True)
class FieldColumn:
    """Displays ``record[accessor]`` as is."""

    accessor: str
    title: str | None = None
    width: int | str | None = None
    align: Align = "left"

    @property
    def header(self) -> str:
        return self.accessor


@dataclass(frozen=True)
class ComputedColumn:
    """Displays whatever ``render(record)`` returns (status badges, actions...)."""

    title: str
    render: Callable[[Any], Any] = field(compare=False)
    accessor: str = ""
    width: int | str | None = None
    align: Align = "left"

    @property
    def header(self) -> str:
        return self.accessor or self.title


Column = Union[FieldColumn, ComputedColumn]


def column_value(column: Column, record: Any) -> Any:
    if isinstance(column, FieldColumn):
        return record.get(column.accessor) if isinstance(record, Mapping) else None
    if isinstance(column, ComputedColumn):
        return column.render(record)
    raise TypeError(f"Unsupported column type: {type(column).__name__}")


def export_headers(columns: Sequence[Column]) -> list[str]:
    headers = [column.header for column in columns]
    return [header for header in headers if header and header.lower() != "actions"]


def record_timestamp(record: Any) -> datetime | None:
    """First parseable ISO timestamp among the audit fields, else ``None``."""

    if not isinstance(record, Mapping):
        return None
    for name in TIMESTAMP_FIELDS:
        raw = record.get(name)
        if not isinstance(raw, str) or not raw:
            continue
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            continue
    return None


def matches_query(record: Any, query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    haystack = json.dumps(record, default=str, ensure_ascii=False, separators=(",", ":"))
    return needle in haystack.lower()


class Debouncer:
    """Fire-once timer that settles a value after ``delay`` seconds of quiet.

    Every ``set`` re-arms the deadline; the settled value only changes when
    ``clock()`` passes it. Pass a fake clock to drive it from tests.
    """

    def __init__(self, delay: float, clock: Callable[[], float] = time.monotonic, initial: str = "") -> None:
        self.delay = delay
        self._clock = clock
        self._value = initial
        self._pending: str | None = None
        self._deadline: float | None = None

    def set(self, value: str) -> None:
        self._pending = value
        self._deadline = self._clock() + self.delay

    def cancel(self) -> None:
        self._pending = None
        self._deadline = None

    def flush(self) -> None:
        if self._pending is not None:
            self._value = self._pending
        self.cancel()

    @property
    def pending(self) -> bool:
        self._settle()
        return self._deadline is not None

    @property
    def value(self) -> str:
        self._settle()
        return self._value

    def _settle(self) -> None:
        if self._deadline is not None and self._clock() >= self._deadline:
            self.flush()


@dataclass(frozen=True)
class CsvExport:
    filename: str
    headers: list[str]
    content: str
    row_count: int


class RecordBrowser:
    def __init__(
        self,
        records: Sequence[Any],
        columns: Sequence[Column],
        *,
        title: str | None = None,
        on_delete_records: Callable[[list[Any]], Any] | None = None,
        show_month_filter: bool = True,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        today: Callable[[], datetime] = datetime.now,
        tz: tzinfo | None = None,
    ) -> None:
        self._records = records
        self.columns = list(columns)
        self.title = title
        self.on_delete_records = on_delete_records
        self.show_month_filter = show_month_filter
        self._today = today
        self._tz = tz
        self._query = Debouncer(debounce_seconds, clock)
        self._month = ALL_MONTHS
        self._page = 1
        self._page_size = PAGE_SIZES[0]
        self._selection: list[Any] = []

    # -- inputs -----------------------------------------------------------

    @property
    def records(self) -> Sequence[Any]:
        return self._records

    def set_records(self, records: Sequence[Any]) -> None:
        if records is not self._records:
            self._selection = []
        self._records = records

    def search(self, text: str) -> None:
        self._query.set(text)

    def apply_search_now(self, text: str) -> None:
        self._query.set(text)
        self._query.flush()

    @property
    def query(self) -> str:
        return self._query.value

    @property
    def search_pending(self) -> bool:
        return self._query.pending

    @property
    def selected_month(self) -> str:
        return self._month

    def set_month(self, month: str) -> None:
        if month not in MONTH_OPTIONS:
            raise ValueError(f"Unknown month filter: {month!r}")
        if month != ALL_MONTHS and not self.show_month_filter:
            raise BrowserConfigError("Month filtering is disabled for this browser")
        self._month = month

    @property
    def page(self) -> int:
        return self._page

    def set_page(self, page: int) -> None:
        if page < 1:
            raise ValueError("Pages are numbered from 1")
        self._page = page

    @property
    def page_size(self) -> int:
        return self._page_size

    def set_page_size(self, page_size: int) -> None:
        if page_size not in PAGE_SIZES:
            raise ValueError(f"Page size must be one of {PAGE_SIZES}")
        self._page_size = page_size
        self._page = 1

    # -- derived view -----------------------------------------------------

    def _in_selected_month(self, record: Any) -> bool:
        stamp = record_timestamp(record)
        if stamp is None:
            return False
        if self._tz is not None and stamp.tzinfo is not None:
            stamp = stamp.astimezone(self._tz)
        month_number = MONTH_NAMES.index(self._month) + 1
        return stamp.month == month_number and stamp.year == self._today().year

    def filtered_records(self) -> list[Any]:
        filtered = list(reversed(self._records))
        query = self.query
        if query:
            filtered = [record for record in filtered if matches_query(record, query)]
        if self._month != ALL_MONTHS:
            filtered = [record for record in filtered if self._in_selected_month(record)]
        return filtered

    def visible_records(self) -> list[Any]:
        start = (self._page - 1) * self._page_size
        return self.filtered_records()[start : start + self._page_size]

    def total_filtered(self) -> int:
        return len(self.filtered_records())

    def page_count(self) -> int:
        total = self.total_filtered()
        return max(1, -(-total // self._page_size))

    def rows(self) -> list[list[Any]]:
        """Visible page rendered cell by cell through the columns."""

        return [[column_value(column, record) for column in self.columns] for record in self.visible_records()]

    # -- selection --------------------------------------------------------

    def _require_delete_hook(self) -> None:
        if self.on_delete_records is None:
            raise BrowserConfigError("Selection needs an on_delete_records callback")

    @property
    def selected_records(self) -> list[Any]:
        return list(self._selection)

    def select(self, records: Iterable[Any]) -> None:
        self._require_delete_hook()
        for record in records:
            if not any(record is chosen for chosen in self._selection):
                self._selection.append(record)

    def deselect(self, records: Iterable[Any]) -> None:
        dropped = list(records)
        self._selection = [chosen for chosen in self._selection if not any(chosen is item for item in dropped)]

    def clear_selection(self) -> None:
        self._selection = []

    def delete_label(self) -> str:
        count = len(self._selection)
        if not count:
            return "Select records to delete"
        return f"Delete {count} {'records' if count > 1 else 'record'}"

    def delete_selected(self) -> list[Any]:
        self._require_delete_hook()
        chosen = list(self._selection)
        if not chosen:
            return []
        self.on_delete_records(chosen)
        self._selection = []
        return chosen

    # -- export -----------------------------------------------------------

    def export_csv(self) -> CsvExport:
        """Dump every record (not just the filtered page) as CSV text."""

        if not self.columns:
            logger.error("csv_export_aborted", extra={"title": self.title, "reason": "no columns"})
            raise BrowserConfigError("No columns defined for CSV export")

        headers = export_headers(self.columns)
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(headers)
        for record in self._records:
            writer.writerow([_csv_cell(record, header) for header in headers])

        export = CsvExport(
            filename=f"{self.title or 'data'}.csv",
            headers=headers,
            content=buffer.getvalue(),
            row_count=len(self._records),
        )
        logger.info("csv_export_built", extra={"file_name": export.filename, "rows": export.row_count})
        return export


def _csv_cell(record: Any, header: str) -> Any:
    if not isinstance(record, Mapping):
        return ""
    value = record.get(header)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str, separators=(",", ":"))
    return value
