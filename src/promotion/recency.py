"""Trailing-window filter that keeps recently updated repositories."""

from __future__ import annotations

import calendar
import datetime as dt
from typing import Iterable, List

from src.retrieval.models import Repository


def add_months(value: dt.datetime, months: int) -> dt.datetime:
    """Shift by whole calendar months, clamping to the last day of short months."""
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def months_between(later: dt.datetime, earlier: dt.datetime) -> int:
    """Whole calendar months from `earlier` to `later`, truncated toward zero."""
    if later < earlier:
        return -months_between(earlier, later)
    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    if add_months(earlier, months) > later:
        months -= 1
    return months


def filter_recent(repositories: Iterable[Repository], now: dt.datetime, window_months: int) -> List[Repository]:
    """Keep repositories updated strictly less than `window_months` before `now`."""
    return [repo for repo in repositories if months_between(now, repo.updated_at) < window_months]


__all__ = ["add_months", "months_between", "filter_recent"]
