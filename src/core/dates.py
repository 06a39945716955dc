"""Log-date normalisation and day boundaries.

Log dates are stored as naive wall-clock ISO strings with millisecond
precision in the configured TIMEZONE, so lexicographic order equals time
order and a day is the closed range [00:00:00.000, 23:59:59.999].
"""

from __future__ import annotations

from datetime import date, datetime, time

from src.config import settings
from src.core.errors import ValidationError

_END_OF_DAY = time(23, 59, 59, 999000)


def _local(dt: datetime) -> datetime:
    """Naive wall-clock time in TIMEZONE; naive input is taken as already local."""
    if dt.tzinfo is not None:
        return dt.astimezone(settings.tz).replace(tzinfo=None)
    return dt


def to_storage(dt: datetime) -> str:
    """Render a datetime the way it is stored; aware values are localised first."""
    return _local(dt).isoformat(timespec="milliseconds")


def now_iso() -> str:
    return to_storage(datetime.now(settings.tz))


def today() -> date:
    """The current calendar date in the configured TIMEZONE."""
    return datetime.now(settings.tz).date()


def parse_log_date(value: str | date | datetime) -> str:
    """Normalise a log date; a bare date means midnight of that day."""
    if isinstance(value, datetime):
        return to_storage(value)
    if isinstance(value, date):
        return to_storage(datetime.combine(value, time.min))
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("logDate is required")

    raw = value.strip()
    try:
        if len(raw) == 10:
            return to_storage(datetime.combine(date.fromisoformat(raw), time.min))
        return to_storage(datetime.fromisoformat(raw.replace("Z", "+00:00")))
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc


def day_bounds(day: date) -> tuple[str, str]:
    """Inclusive storage-format bounds covering one calendar day."""
    return (
        to_storage(datetime.combine(day, time.min)),
        to_storage(datetime.combine(day, _END_OF_DAY)),
    )


def parse_day(value: str | date | None) -> date:
    """Resolve a query date; None means today.

    Timestamps with an offset are moved into TIMEZONE first, so a query names
    the same day its log was stored under.
    """
    if value is None:
        return today()
    if isinstance(value, datetime):
        return _local(value).date()
    if isinstance(value, date):
        return value

    raw = value.strip()
    try:
        if len(raw) == 10:
            return date.fromisoformat(raw)
        return _local(datetime.fromisoformat(raw.replace("Z", "+00:00"))).date()
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc
