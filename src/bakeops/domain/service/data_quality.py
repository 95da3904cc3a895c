"""Data-quality bookkeeping.

Data-quality problems (an unparseable timestamp, a line item that cannot
be matched against the deals snapshot) never raise.  They degrade to a
documented fallback, and this recorder keeps the fallbacks visible: one
WARNING log line plus a per-kind counter that tests and telemetry can read.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from enum import Enum

logger = logging.getLogger(__name__)


class DataQualityIssue(Enum):
    UNPARSEABLE_TIMESTAMP = "unparseable_timestamp"
    NEGATIVE_TIME_WINDOW = "negative_time_window"
    NEGATIVE_ELAPSED = "negative_elapsed"
    DEAL_MATCH_UNAVAILABLE = "deal_match_unavailable"


class DataQualityRecorder:

    def __init__(self) -> None:
        self._counts: Counter[DataQualityIssue] = Counter()
        self._lock = threading.Lock()

    def record(self, issue: DataQualityIssue, detail: str) -> None:
        with self._lock:
            self._counts[issue] += 1
        logger.warning("data quality: %s (%s)", issue.value, detail)

    def count(self, issue: DataQualityIssue | None = None) -> int:
        with self._lock:
            if issue is None:
                return sum(self._counts.values())
            return self._counts[issue]

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return {issue.value: n for issue, n in self._counts.items()}
