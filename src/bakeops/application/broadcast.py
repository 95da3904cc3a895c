"""Change broadcasting for the shared notification ledger.

Every open view of the ledger subscribes here; the ledger publishes one
``LedgerChange`` after each successful mutation so that, for example,
marking a notification read in one view updates the badge in another.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerChange:
    action: str  # "added", "read", "read_all", "deleted", "cleared"
    notification_id: str | None = None


Listener = Callable[[LedgerChange], None]


class Subscription:
    """Handle returned by ``subscribe``; cancel it when the view goes away."""

    def __init__(self, cancel: Callable[[], None]) -> None:
        self._cancel = cancel
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if self._active:
            self._active = False
            self._cancel()


class ChangeBroadcaster(ABC):

    @abstractmethod
    def subscribe(self, listener: Listener) -> Subscription:
        """Register *listener* for every future change."""

    @abstractmethod
    def publish(self, change: LedgerChange) -> None:
        """Deliver *change* to every current listener."""


class InProcessBroadcaster(ChangeBroadcaster):
    """Observer list shared by all views living in one process.

    A failing listener is logged and skipped; it never prevents delivery
    to the remaining views, nor fails the mutation that triggered it.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def subscribe(self, listener: Listener) -> Subscription:
        with self._lock:
            self._listeners.append(listener)
        return Subscription(lambda: self._unsubscribe(listener))

    def publish(self, change: LedgerChange) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(change)
            except Exception:
                logger.exception("notification listener failed on %s", change)

    def _unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
