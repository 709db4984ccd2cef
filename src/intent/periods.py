"""Time-period phrases used by sales and revenue requests.

A period phrase is resolved by an ordered chain of substring checks; the first keyword found wins,
even when the phrase mentions several. Month names map onto a fixed reporting year.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

REPORT_YEAR = 2025


class PeriodKind(StrEnum):
    """How a period restricts the sale date."""

    all_time = "all_time"
    relative = "relative"
    month = "month"


@dataclass(frozen=True)
class Period:
    """A resolved time period.

    `interval` is set for relative periods (e.g. `"1 month"` back from today); `year`/`month` are
    set for calendar-month periods.
    """

    kind: PeriodKind
    interval: str | None = None
    year: int | None = None
    month: int | None = None


ALL_TIME = Period(kind=PeriodKind.all_time)

_RELATIVE_PHRASES: tuple[tuple[str, str], ...] = (
    ("last month", "1 month"),
    ("last year", "1 year"),
)

_MONTH_KEYWORDS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("january", "jan"), 1),
    (("february", "feb"), 2),
    (("march", "mar"), 3),
)


def resolve_period(phrase: str) -> Period:
    """Resolve a free-form period phrase (e.g. "last month", "march") into a `Period`.

    Unknown phrases resolve to `ALL_TIME`, i.e. no date filter.
    """

    value = (phrase or "").lower()

    for keyword, interval in _RELATIVE_PHRASES:
        if keyword in value:
            return Period(kind=PeriodKind.relative, interval=interval)

    for keywords, month in _MONTH_KEYWORDS:
        if any(k in value for k in keywords):
            return Period(kind=PeriodKind.month, year=REPORT_YEAR, month=month)

    return ALL_TIME
