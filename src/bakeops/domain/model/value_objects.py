"""Frozen timestamp values: a parsed instant with its provenance, and the
display time of one order stage.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TimestampSource(Enum):
    """How a ParsedTimestamp was obtained."""

    EXPLICIT_OFFSET = "explicit_offset"
    ASSUMED_TIMEZONE = "assumed_timezone"
    EPOCH = "epoch"
    FALLBACK_NOW = "fallback_now"


@dataclass(frozen=True)
class ParsedTimestamp:
    """A timezone-aware instant plus a record of how trustworthy it is.

    ``FALLBACK_NOW`` values are stand-ins for data that could not be
    parsed; callers must not present them as recorded facts.
    """

    value: datetime
    source: TimestampSource

    @property
    def is_fallback(self) -> bool:
        return self.source is TimestampSource.FALLBACK_NOW


@dataclass(frozen=True)
class StageTimestamp:
    """Derived display time of one order stage (never persisted).

    ``date`` is None when the stage has not happened yet.  ``is_exact``
    separates recorded times from interpolated estimates.
    """

    date: datetime | None
    is_exact: bool

    @staticmethod
    def exact(date: datetime) -> StageTimestamp:
        return StageTimestamp(date=date, is_exact=True)

    @staticmethod
    def estimated(date: datetime) -> StageTimestamp:
        return StageTimestamp(date=date, is_exact=False)

    @staticmethod
    def absent() -> StageTimestamp:
        return StageTimestamp(date=None, is_exact=False)
