"""Human-readable time strings for dashboards and notifications."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_YEAR_MS = 365 * _DAY * 1000


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'s' if n > 1 else ''}"


def format_relative_time(
    timestamp_ms: int, now_ms: int, tz: tzinfo = timezone.utc
) -> str:
    """'just now', 'N min ago', 'N hours ago', 'N days ago' or a short date."""
    seconds = max(now_ms - timestamp_ms, 0) // 1000
    minutes = seconds // _MINUTE
    hours = seconds // _HOUR
    days = seconds // _DAY

    if seconds < _MINUTE:
        return "just now"
    if minutes < 60:
        return f"{minutes} min ago"
    if hours < 24:
        return f"{_plural(hours, 'hour')} ago"
    if days < 7:
        return f"{_plural(days, 'day')} ago"

    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=tz)
    short = f"{moment:%b} {moment.day}"
    if timestamp_ms < now_ms - _YEAR_MS:
        short += f", {moment.year}"
    return short


def format_elapsed(delta: timedelta) -> str:
    """Two-unit breakdown of a duration: '1d 4h', '3h 12m', '2m 5s', '42s'.

    Negative durations are floored to zero.
    """
    total_seconds = max(int(delta.total_seconds()), 0)
    total_minutes = total_seconds // _MINUTE
    total_hours = total_seconds // _HOUR
    days = total_seconds // _DAY

    if days > 0:
        hours = total_hours % 24
        return f"{days}d {hours}h" if hours else f"{days}d"
    if total_hours > 0:
        minutes = total_minutes % 60
        return f"{total_hours}h {minutes}m" if minutes else f"{total_hours}h"
    if total_minutes > 0:
        return f"{total_minutes}m {total_seconds % _MINUTE}s"
    return f"{total_seconds}s"


def format_stage_time(value: datetime | None, tz: tzinfo = timezone.utc) -> str:
    """e.g. 'Jan 01, 2025, 10:26 AM', or 'Not yet' for absent stages."""
    if value is None:
        return "Not yet"
    return value.astimezone(tz).strftime("%b %d, %Y, %I:%M %p")
