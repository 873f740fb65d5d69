from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional

# Full-date "T" full-time with a mandatory offset, as in RFC 3339 section 5.6.
_RFC3339_RE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[Tt ]"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})"
)


# PUBLIC_INTERFACE
def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_rfc3339(value: datetime) -> str:
    """Format an aware datetime as RFC 3339 (e.g. '2024-01-01T10:00:00+00:00')."""
    return value.isoformat()


def _parse_offset(text: str) -> timezone:
    if text in ("Z", "z"):
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    hours, minutes = int(text[1:3]), int(text[4:6])
    if minutes >= 60:
        raise ValueError(f"invalid UTC offset: {text!r}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


# PUBLIC_INTERFACE
def parse_rfc3339(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp, keeping its own UTC offset.

    Accepts a trailing 'Z' for UTC and any number of fractional second digits,
    truncated to microseconds. Naive timestamps (no offset) and ISO 8601 forms
    outside RFC 3339, such as the basic '20240101T100000Z' form, are rejected.

    Raises:
        ValueError: the string is not an RFC 3339 timestamp.
    """
    match = _RFC3339_RE.fullmatch(value.strip())
    if match is None:
        raise ValueError(f"not an RFC 3339 timestamp: {value!r}")
    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    return datetime(
        int(match.group("year")),
        int(match.group("month")),
        int(match.group("day")),
        int(match.group("hour")),
        int(match.group("minute")),
        int(match.group("second")),
        int(fraction),
        tzinfo=_parse_offset(match.group("offset")),
    )


def try_parse_rfc3339(value: Optional[str]) -> Optional[datetime]:
    """Like parse_rfc3339, but returns None for missing or unparseable input."""
    if not value:
        return None
    try:
        return parse_rfc3339(value)
    except ValueError:
        return None


def parse_calendar_date(value: str) -> date:
    """Parse a 'YYYY-MM-DD' calendar date."""
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()
