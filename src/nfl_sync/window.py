"""Time windows and season guards for the two feeds.

The play-by-play feed uses an open-ended recency window and admits records
whose timestamp is missing or unreadable. The scheduled-event feed uses a
closed ``[start, end)`` window and excludes anything it cannot place in it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: Optional[datetime] = None

    def contains(self, instant: datetime) -> bool:
        if instant < self.start:
            return False
        return self.end is None or instant < self.end


@dataclass(frozen=True)
class SeasonWindow:
    start: date
    end: date

    def contains(self, now: datetime) -> bool:
        return self.start <= _utc(now).date() <= self.end


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return _utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raw = str(value).strip()
    if not raw or raw == "NA":
        return None
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        if len(raw) == 10:
            return datetime.combine(date.fromisoformat(raw), time.min, tzinfo=timezone.utc)
        return _utc(datetime.fromisoformat(raw))
    except ValueError:
        return None


def recency_window(now: datetime, days: int = 7) -> TimeWindow:
    return TimeWindow(start=_utc(now) - timedelta(days=days))


def upcoming_window(now: datetime, days: int = 4) -> TimeWindow:
    now = _utc(now)
    start = datetime(now.year, now.month, now.day, tzinfo=timezone.utc)
    return TimeWindow(start=start, end=start + timedelta(days=days))


def admit_recent(record: Mapping[str, Any], column: str, window: TimeWindow) -> bool:
    """Recency filter for the play-by-play feed (fail-open)."""
    ts = parse_timestamp(record.get(column))
    if ts is None:
        return True
    return window.contains(ts)


def admit_scheduled(value: Any, window: TimeWindow) -> bool:
    """Window membership for scheduled events (fail-closed)."""
    ts = parse_timestamp(value)
    if ts is None:
        return False
    return window.contains(ts)


def in_nfl_season(now: datetime) -> bool:
    # September through the end of February
    month = _utc(now).month
    return month >= 9 or month <= 2


def season_year(kickoff: datetime) -> int:
    kickoff = _utc(kickoff)
    return kickoff.year if kickoff.month >= 9 else kickoff.year - 1
