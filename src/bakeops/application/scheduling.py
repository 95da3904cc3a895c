"""Periodic callbacks for views (ledger refresh, pending-elapsed ticks).

Views never own raw threads: they ask a Scheduler for a repeating task
and cancel the returned handle when they close.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable

logger = logging.getLogger(__name__)


class ScheduledTask(ABC):

    @property
    @abstractmethod
    def active(self) -> bool:
        """False once cancelled."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop future runs.  Safe to call more than once."""


class Scheduler(ABC):

    @abstractmethod
    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        """Run *callback* every *interval* seconds until cancelled."""


class _RepeatingTimer(ScheduledTask):

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self._interval = interval
        self._callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)

    @property
    def active(self) -> bool:
        return not self._stopped.is_set()

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._stopped.set()

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("scheduled callback %r failed", self._callback)


class ThreadingScheduler(Scheduler):
    """One daemon thread per task; the thread exits as soon as it is cancelled."""

    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        task = _RepeatingTimer(interval, callback)
        task.start()
        return task
