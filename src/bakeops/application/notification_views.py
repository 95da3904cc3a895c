"""Views over the shared ledger: badges, dropdowns, notification pages.

A LedgerView re-evaluates its unread count and list whenever the ledger
broadcasts a change, and again on a periodic refresh so that mutations
made by another process (which this process never hears about) still
show up.
"""

from __future__ import annotations

from typing import Callable

from bakeops.application.broadcast import LedgerChange
from bakeops.application.notification_ledger import NotificationLedger
from bakeops.application.scheduling import ScheduledTask, Scheduler
from bakeops.domain.model.notification import (
    Notification,
    NotificationFilters,
    NotificationModule,
)

REFRESH_INTERVAL_SECONDS = 30.0

# Sizes of the context-aware dropdown.
FEED_MODULE_LIMIT = 5
FEED_OTHER_UNREAD_LIMIT = 3
FEED_LIMIT = 10


class LedgerView:
    """One open view of the ledger, scoped to a module (or everything)."""

    def __init__(
        self,
        ledger: NotificationLedger,
        scheduler: Scheduler | None = None,
        module: NotificationModule | None = None,
        limit: int | None = None,
        refresh_interval: float = REFRESH_INTERVAL_SECONDS,
        on_change: Callable[[LedgerView], None] | None = None,
    ) -> None:
        self._ledger = ledger
        self._module = module
        self._limit = limit
        self._on_change = on_change
        self.unread_count = 0
        self.notifications: list[Notification] = []
        self.refresh_count = 0

        self._subscription = ledger.subscribe(self._on_broadcast)
        self._refresh_task: ScheduledTask | None = None
        if scheduler is not None:
            self._refresh_task = scheduler.call_every(refresh_interval, self.refresh)
        self.refresh()

    @property
    def closed(self) -> bool:
        return not self._subscription.active

    def refresh(self) -> None:
        if self.closed:
            return
        self.notifications = self._ledger.list(
            NotificationFilters(module=self._module, limit=self._limit)
        )
        self.unread_count = self._ledger.unread_count(self._module)
        self.refresh_count += 1
        if self._on_change is not None:
            self._on_change(self)

    def close(self) -> None:
        """Stop listening and stop the periodic refresh."""
        self._subscription.cancel()
        if self._refresh_task is not None:
            self._refresh_task.cancel()

    def __enter__(self) -> LedgerView:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _on_broadcast(self, change: LedgerChange) -> None:
        self.refresh()


def context_feed(
    ledger: NotificationLedger, module: NotificationModule | None = None
) -> list[Notification]:
    """Dropdown contents for a dashboard page showing *module*.

    The module's own latest entries, plus the most important (unread)
    entries from elsewhere so nothing urgent is hidden behind the page
    filter.
    """
    if module is None or module is NotificationModule.ALL:
        return ledger.list(NotificationFilters(limit=FEED_MODULE_LIMIT))

    own = ledger.list(NotificationFilters(module=module, limit=FEED_MODULE_LIMIT))
    others = [
        n
        for n in ledger.list(
            NotificationFilters(unread_only=True, limit=FEED_OTHER_UNREAD_LIMIT)
        )
        if n.module is not module
    ]
    merged = sorted([*own, *others], key=lambda n: n.timestamp, reverse=True)
    return merged[:FEED_LIMIT]
