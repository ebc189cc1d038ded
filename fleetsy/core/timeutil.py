from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

# RFC 3339 "date-time": full-date "T" full-time, offset mandatory.
_RFC3339_RE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[Tt](?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})",
    re.ASCII,
)


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC 3339 date-time into an aware UTC ``datetime``.

    Anything else (missing offset, date only, space separator, out-of-range
    fields) raises ``ValueError``. Fractions finer than a microsecond are
    truncated.
    """
    if not isinstance(value, str):
        raise ValueError("timestamp must be a string")
    match = _RFC3339_RE.fullmatch(value)
    if match is None:
        raise ValueError(f"'{value}' is not an RFC 3339 date-time")

    offset = match.group("offset")
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"'{value}' has an invalid UTC offset")
        delta = timedelta(hours=hours, minutes=minutes)
        tz = timezone(-delta if offset[0] == "-" else delta)

    fraction = match.group("fraction") or ""
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0

    dt = datetime(
        int(match.group("year")),
        int(match.group("month")),
        int(match.group("day")),
        int(match.group("hour")),
        int(match.group("minute")),
        int(match.group("second")),
        microsecond,
        tzinfo=tz,
    )
    return dt.astimezone(timezone.utc)


def to_rfc3339(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def format_duration(nanoseconds: int) -> str:
    """Render a nanosecond count the way Go's ``time.Duration`` prints itself.

    >>> format_duration(90 * SECOND)
    '1m30s'
    >>> format_duration(1_500 * MICROSECOND)
    '1.5ms'
    """
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    u = abs(nanoseconds)

    if u < SECOND:
        if u < MICROSECOND:
            return f"{sign}{u}ns"
        if u < MILLISECOND:
            return f"{sign}{_with_fraction(u, MICROSECOND)}µs"
        return f"{sign}{_with_fraction(u, MILLISECOND)}ms"

    hours, rest = divmod(u, HOUR)
    minutes, rest = divmod(rest, MINUTE)
    seconds = _with_fraction(rest, SECOND)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _with_fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{frac:0{width}d}".rstrip("0")
