"""
Calendar bucketing in a fixed local offset.

Sales are stored with UTC timestamps while the shop reports in Myanmar time
(UTC+06:30, no DST). These helpers turn a local civil day or month into the
half-open UTC range ``[start_utc, end_utc_exclusive)`` used to filter rows.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

MYANMAR_TZ_NAME = "Asia/Yangon"
MYANMAR_UTC_OFFSET_MINUTES = 390
MYANMAR_OFFSET = timedelta(minutes=MYANMAR_UTC_OFFSET_MINUTES)

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


@dataclass(frozen=True, slots=True)
class LocalRange:
    start_utc: datetime
    end_utc_exclusive: datetime
    start_local: str
    end_local_exclusive: str
    offset: timedelta

    def contains(self, instant: datetime) -> bool:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return self.start_utc <= instant < self.end_utc_exclusive


def format_offset(offset: timedelta) -> str:
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{mins:02d}"


def _local_midnight_iso(day: date, offset: timedelta) -> str:
    return f"{day.isoformat()}T00:00:00{format_offset(offset)}"


def _local_midnight_to_utc(day: date, offset: timedelta) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc) - offset


def parse_local_date(text: str) -> date:
    """
    Parse ``YYYY-MM-DD`` and make sure it names a real calendar day.

    Raises:
        ValueError: on malformed text or an impossible date such as 2026-02-30.
    """
    if not isinstance(text, str):
        raise ValueError("Invalid date. Expected YYYY-MM-DD")
    match = _DATE_RE.match(text)
    if not match:
        raise ValueError("Invalid date. Expected YYYY-MM-DD")

    year, month, day = (int(g) for g in match.groups())
    try:
        parsed = date(year, month, day)
    except ValueError:
        raise ValueError("Invalid date. Expected YYYY-MM-DD")
    if (parsed.year, parsed.month, parsed.day) != (year, month, day):
        raise ValueError("Invalid date. Expected YYYY-MM-DD")
    return parsed


def local_today(now: Optional[datetime] = None, offset: timedelta = MYANMAR_OFFSET) -> date:
    """Current local calendar day, independent of the server's own timezone."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    shifted = now.astimezone(timezone.utc) + offset
    return shifted.date()


def _bounds(first: date, first_next: date, offset: timedelta) -> LocalRange:
    return LocalRange(
        start_utc=_local_midnight_to_utc(first, offset),
        end_utc_exclusive=_local_midnight_to_utc(first_next, offset),
        start_local=_local_midnight_iso(first, offset),
        end_local_exclusive=_local_midnight_iso(first_next, offset),
        offset=offset,
    )


def day_bounds(day: date, offset: timedelta = MYANMAR_OFFSET) -> LocalRange:
    """
    Raises:
        ValueError: if the day or its UTC range leaves the calendar.
    """
    try:
        return _bounds(day, day + timedelta(days=1), offset)
    except OverflowError:
        raise ValueError("Invalid date. Expected YYYY-MM-DD")


def month_bounds(year: int, month: int, offset: timedelta = MYANMAR_OFFSET) -> LocalRange:
    """
    Raises:
        ValueError: if month is outside 1-12 or the range leaves the calendar.
    """
    if not isinstance(month, int) or not 1 <= month <= 12:
        raise ValueError("Invalid or missing year/month")
    next_year, next_month = (year + 1, 1) if month == 12 else (year, month + 1)
    try:
        return _bounds(date(year, month, 1), date(next_year, next_month, 1), offset)
    except (ValueError, OverflowError):
        raise ValueError("Invalid or missing year/month")


def to_utc(instant: datetime) -> datetime:
    """Naive datetimes coming back from the database are UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def utc_iso(instant: datetime) -> str:
    return to_utc(instant).isoformat(timespec="milliseconds").replace("+00:00", "Z")
