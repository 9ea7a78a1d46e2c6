"""Date and date/time display rules for published content.

Dates render as ``9 January 2024``; date/time pairs render as
``2:30pm on 9 January 2024`` with a few reader-facing normalisations:
whole hours drop their ``:00``, noon reads ``midday``, closing times at
exactly midnight roll back one second onto the previous day, and any
remaining ``12am`` time is dropped so only the date shows.

Example
-------
>>> fmt = DateTimeFormatter("UTC")
>>> fmt.display_date_and_time("2024-01-10T12:00:00Z")
'midday on 10 January 2024'
>>> fmt.display_date_and_time("2024-01-10T00:00:00Z", rollback_midnight=True)
'11:59pm on 9 January 2024'
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "Europe/London"
_MIDNIGHT_PREFIX = "12am on "


def parse_timestamp(value: dt.datetime | str | None) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


class DateTimeFormatter:
    """Format timestamps in a fixed display timezone."""

    def __init__(self, timezone: str = DEFAULT_TIMEZONE) -> None:
        self.zone = ZoneInfo(timezone)

    def localize(self, value: dt.datetime | str | None) -> dt.datetime | None:
        """Parse ``value`` and convert it into the display timezone."""
        parsed = parse_timestamp(value)
        if parsed is None:
            return None
        return parsed.astimezone(self.zone)

    def display_date(self, value: dt.datetime | str | None) -> str | typ.Literal[False]:
        """Return ``value`` as ``D Month YYYY`` or False when missing."""
        local = self.localize(value)
        if local is None:
            return False
        return _format_date(local)

    def display_date_and_time(
        self, value: dt.datetime | str | None, *, rollback_midnight: bool = False
    ) -> str | typ.Literal[False]:
        """Return ``value`` as ``<time> on <date>`` or False when missing.

        Parameters
        ----------
        value : datetime | str | None
            Timestamp to format; ISO-8601 strings are accepted.
        rollback_midnight : bool, optional
            When True, an instant at exactly 12:00am is moved back one second
            so a deadline reads as 11:59pm on the previous day.

        Returns
        -------
        str | Literal[False]
            Display string, or False when ``value`` is missing or unparseable.
        """
        local = self.localize(value)
        if local is None:
            return False
        if rollback_midnight and local.hour == 0 and local.minute == 0:
            local -= dt.timedelta(seconds=1)
        text = f"{_format_time(local)} on {_format_date(local)}"
        return text.removeprefix(_MIDNIGHT_PREFIX)

    def any_updates(
        self, first_published_at: str | None, public_updated_at: str | None
    ) -> bool:
        """Return True when both timestamps exist and name different instants."""
        first = parse_timestamp(first_published_at)
        updated = parse_timestamp(public_updated_at)
        if first is None or updated is None:
            return False
        return first != updated


def _format_date(value: dt.datetime) -> str:
    return f"{value.day} {value:%B %Y}"


def _format_time(value: dt.datetime) -> str:
    hour = value.hour % 12 or 12
    suffix = "am" if value.hour < 12 else "pm"
    if value.minute == 0:
        text = f"{hour}{suffix}"
    else:
        text = f"{hour}:{value.minute:02d}{suffix}"
    return "midday" if text == "12pm" else text


__all__ = ["DEFAULT_TIMEZONE", "DateTimeFormatter", "parse_timestamp"]
