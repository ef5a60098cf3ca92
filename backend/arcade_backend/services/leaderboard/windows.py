from datetime import datetime, timedelta, timezone, tzinfo
from typing import Tuple
from zoneinfo import ZoneInfo

from arcade_backend.services import InvalidWindow

DAY = 'day'
WEEK = 'week'
MONTH = 'month'
WINDOWS = (DAY, WEEK, MONTH)


def resolve_timezone(name: str) -> tzinfo:
    if not name or name.upper() == 'UTC':
        return timezone.utc
    return ZoneInfo(name)


def _to_utc_naive(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def window_bounds(window: str, now: datetime, tz: tzinfo, week_start: int = 0) -> Tuple[datetime, datetime]:
    """Half-open [start, end) of the calendar window containing ``now`` in ``tz``.

    Returned bounds are naive UTC, matching how timestamps are stored.
    ``week_start`` follows ``datetime.weekday()`` (0 = Monday).
    """
    if window not in WINDOWS:
        raise InvalidWindow(f'Unknown leaderboard window: {window}')
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(tz)
    midnight = datetime(local.year, local.month, local.day, tzinfo=tz)

    if window == DAY:
        start = midnight
        nxt = midnight.date() + timedelta(days=1)
        end = datetime(nxt.year, nxt.month, nxt.day, tzinfo=tz)
    elif window == WEEK:
        first = midnight.date() - timedelta(days=(local.weekday() - week_start) % 7)
        start = datetime(first.year, first.month, first.day, tzinfo=tz)
        nxt = first + timedelta(days=7)
        end = datetime(nxt.year, nxt.month, nxt.day, tzinfo=tz)
    else:
        start = datetime(local.year, local.month, 1, tzinfo=tz)
        if local.month == 12:
            end = datetime(local.year + 1, 1, 1, tzinfo=tz)
        else:
            end = datetime(local.year, local.month + 1, 1, tzinfo=tz)

    return _to_utc_naive(start), _to_utc_naive(end)
