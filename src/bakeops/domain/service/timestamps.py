"""Timestamp parsing for backend order records.

Backends emit a mix of formats: SQL-style ``YYYY-MM-DD HH:MM:SS`` with
no zone, ISO-8601 with or without an offset, epoch milliseconds, and the
occasional free-form string.  An explicit offset always wins.  Values
without one are read in a configured zone, and that guess is logged.
Anything unparseable becomes "now", recorded as a data-quality error.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from typing import Any, Callable

from dateutil import parser as dateutil_parser

from bakeops.domain.model.value_objects import ParsedTimestamp, TimestampSource
from bakeops.domain.service.data_quality import DataQualityIssue, DataQualityRecorder

logger = logging.getLogger(__name__)

_SQL_OR_ISO = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[ T](\d{2}):(\d{2})(?::(\d{2})(?:\.(\d+))?)?"
    r"\s*(Z|[+-]\d{2}:?\d{2})?$",
    re.IGNORECASE,
)
_EPOCH_MILLIS = re.compile(r"^\d{10,}$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _offset(text: str) -> tzinfo:
    if text.upper() == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    delta = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
    return timezone(sign * delta)


class TimestampParser:
    """Total parser: every input yields a timezone-aware instant."""

    def __init__(
        self,
        naive_timezone: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = utc_now,
        recorder: DataQualityRecorder | None = None,
    ) -> None:
        self._naive_timezone = naive_timezone
        self._clock = clock
        self._recorder = recorder or DataQualityRecorder()

    @property
    def recorder(self) -> DataQualityRecorder:
        return self._recorder

    def now(self) -> datetime:
        return self._clock()

    def parse(self, raw: Any) -> ParsedTimestamp:
        result = self._try_parse(raw)
        if result is not None:
            return result
        self._recorder.record(
            DataQualityIssue.UNPARSEABLE_TIMESTAMP,
            f"could not parse {raw!r}, using current time",
        )
        return ParsedTimestamp(self._clock(), TimestampSource.FALLBACK_NOW)

    # --- Strategies -----------------------------------------------------------

    def _try_parse(self, raw: Any) -> ParsedTimestamp | None:
        if raw is None or isinstance(raw, bool):
            return None
        if isinstance(raw, datetime):
            return self._localize(raw, raw)
        if isinstance(raw, (int, float, Decimal)):
            return self._from_epoch_millis(raw)

        text = str(raw).strip()
        if not text:
            return None
        if _EPOCH_MILLIS.match(text):
            return self._from_epoch_millis(int(text))

        match = _SQL_OR_ISO.match(text)
        if match:
            parsed = self._from_match(match)
            if parsed is not None:
                return self._localize(parsed, raw)

        try:
            parsed = dateutil_parser.parse(text)
        except (ValueError, OverflowError):
            return None
        return self._localize(parsed, raw)

    @staticmethod
    def _from_match(match: re.Match) -> datetime | None:
        year, month, day, hour, minute, second, fraction, offset = match.groups()
        micros = int((fraction or "0")[:6].ljust(6, "0"))
        try:
            return datetime(
                int(year), int(month), int(day),
                int(hour), int(minute), int(second or 0), micros,
                tzinfo=_offset(offset) if offset else None,
            )
        except ValueError:
            return None

    def _from_epoch_millis(self, value: int | float | Decimal) -> ParsedTimestamp | None:
        try:
            instant = datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
        return ParsedTimestamp(instant, TimestampSource.EPOCH)

    def _localize(self, value: datetime, raw: Any) -> ParsedTimestamp:
        if value.tzinfo is not None and value.utcoffset() is not None:
            return ParsedTimestamp(value, TimestampSource.EXPLICIT_OFFSET)
        logger.info(
            "timestamp %r has no offset, assuming %s", raw, self._naive_timezone
        )
        return ParsedTimestamp(
            value.replace(tzinfo=self._naive_timezone),
            TimestampSource.ASSUMED_TIMEZONE,
        )
