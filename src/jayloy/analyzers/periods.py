"""
Reporting periods — calendar-month arithmetic and named report windows.
"""

from __future__ import annotations

import calendar
from datetime import date
from enum import Enum

from jayloy.models.metrics import ReportWindow


class ReportPeriod(str, Enum):
    """Named periods offered on the reports screen."""

    CURRENT_MONTH = "current-month"
    LAST_MONTH = "last-month"
    LAST_3_MONTHS = "last-3-months"
    YEAR_TO_DATE = "ytd"


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def end_of_month(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def shift_months(d: date, months: int) -> date:
    """Move ``d`` by whole months, clamping the day to the target month."""
    index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def trailing_months(end: date, months: int) -> list[date]:
    """First day of each of the ``months`` calendar months ending at ``end``, oldest first."""
    last = start_of_month(end)
    return [shift_months(last, -offset) for offset in range(months - 1, -1, -1)]


def month_label(d: date) -> str:
    """Short month label, e.g. ``Jan 2025``."""
    return f"{calendar.month_abbr[d.month]} {d.year}"


def resolve_window(window: ReportWindow | None, as_of: date) -> tuple[date, date]:
    """Return the inclusive ``(start, end)`` a window covers relative to ``as_of``."""
    window = window or ReportWindow()
    end = window.end or end_of_month(as_of)
    start = window.start or start_of_month(shift_months(end, -(window.months - 1)))
    return start, end


def window_for_period(period: ReportPeriod | str, as_of: date, months: int = 6) -> ReportWindow:
    """Build the report window for a named period.

    Args:
        period: One of the :class:`ReportPeriod` values.
        as_of: Reference date standing in for "today".
        months: Length of the trailing monthly series carried by the window.

    Returns:
        ReportWindow with explicit ``start`` and ``end``.
    """
    period = ReportPeriod(period)
    if period == ReportPeriod.LAST_MONTH:
        previous = shift_months(as_of, -1)
        start, end = start_of_month(previous), end_of_month(previous)
    elif period == ReportPeriod.LAST_3_MONTHS:
        start, end = start_of_month(shift_months(as_of, -2)), end_of_month(as_of)
    elif period == ReportPeriod.YEAR_TO_DATE:
        start, end = date(as_of.year, 1, 1), as_of
    else:
        start, end = start_of_month(as_of), end_of_month(as_of)
    return ReportWindow(months=months, start=start, end=end)
