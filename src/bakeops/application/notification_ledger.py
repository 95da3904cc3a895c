"""Application service: the Notification Ledger.

A single shared, capacity-bounded log of business events.  Any number of
views may read and mutate it; every successful mutation is published on
the injected broadcaster so all of them stay in sync.  Each mutation is
one atomic store update, so ledgers sharing a store never lose each
other's writes.

Storage failures are caught here, at the ledger boundary, logged, and
treated as "no notifications": notifications enhance a view, they must
never break one.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable

from bakeops.application.broadcast import (
    ChangeBroadcaster,
    InProcessBroadcaster,
    LedgerChange,
    Listener,
    Subscription,
)
from bakeops.domain.exceptions import StorageError
from bakeops.domain.model.notification import (
    NewNotification,
    Notification,
    NotificationFilters,
    NotificationModule,
)
from bakeops.domain.repository.key_value_store import KeyValueStore
from bakeops.domain.service.time_format import format_relative_time
from bakeops.domain.service.timestamps import utc_now

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100
DEFAULT_STORAGE_KEY = "admin_notifications"


class NotificationLedger:

    def __init__(
        self,
        store: KeyValueStore,
        broadcaster: ChangeBroadcaster | None = None,
        capacity: int = DEFAULT_CAPACITY,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._store = store
        self._broadcaster = broadcaster or InProcessBroadcaster()
        self._capacity = capacity
        self._storage_key = storage_key
        self._clock = clock

    @property
    def capacity(self) -> int:
        return self._capacity

    def subscribe(self, listener: Listener) -> Subscription:
        return self._broadcaster.subscribe(listener)

    def now_ms(self) -> int:
        return int(self._clock().timestamp() * 1000)

    # --- Queries --------------------------------------------------------------

    def list(self, filters: NotificationFilters | None = None) -> list[Notification]:
        """Newest first, then filtered by module, type and read state, then limited."""
        filters = filters or NotificationFilters()
        entries = sorted(self._load(), key=lambda n: n.timestamp, reverse=True)
        entries = [n for n in entries if filters.matches(n)]
        if filters.limit is not None:
            entries = entries[: max(filters.limit, 0)]
        return entries

    def unread_count(self, module: NotificationModule | None = None) -> int:
        return len(self.list(NotificationFilters(module=module, unread_only=True)))

    # --- Mutations ------------------------------------------------------------

    def add(self, entry: NewNotification) -> Notification | None:
        """Record a new unread notification, evicting the oldest beyond capacity.

        Returns None if the store could not be written.
        """
        timestamp = self.now_ms()
        notification = Notification(
            id=f"notif_{timestamp}_{uuid.uuid4().hex[:9]}",
            type=entry.type,
            title=entry.title,
            message=entry.message,
            module=entry.module,
            data=dict(entry.data),
            time=format_relative_time(timestamp, timestamp),
            timestamp=timestamp,
            unread=True,
            link=entry.link,
        )

        def prepend(entries: list[Notification]) -> list[Notification]:
            return [notification, *entries][: self._capacity]

        if not self._mutate(prepend):
            return None
        self._publish(LedgerChange("added", notification.id))
        return notification

    def mark_read(self, notification_id: str) -> bool:
        """Mark one entry read.  No-op if already read or absent."""

        def flip(entries: list[Notification]) -> list[Notification] | None:
            if not any(n.id == notification_id and n.unread for n in entries):
                return None
            return [n.mark_read() if n.id == notification_id else n for n in entries]

        if not self._mutate(flip):
            return False
        self._publish(LedgerChange("read", notification_id))
        return True

    def mark_all_read(self, module: NotificationModule | None = None) -> int:
        """Mark every entry read, or only those of *module*.  Returns how many flipped."""
        scope = NotificationFilters(module=module, unread_only=True)
        flipped = 0

        def flip_all(entries: list[Notification]) -> list[Notification] | None:
            nonlocal flipped
            flipped = sum(1 for n in entries if scope.matches(n))
            if not flipped:
                return None
            return [n.mark_read() if scope.matches(n) else n for n in entries]

        if not self._mutate(flip_all):
            return 0
        self._publish(LedgerChange("read_all"))
        return flipped

    def delete(self, notification_id: str) -> bool:

        def drop(entries: list[Notification]) -> list[Notification] | None:
            remaining = [n for n in entries if n.id != notification_id]
            return remaining if len(remaining) < len(entries) else None

        if not self._mutate(drop):
            return False
        self._publish(LedgerChange("deleted", notification_id))
        return True

    def clear_all(self) -> bool:
        try:
            self._store.remove(self._storage_key)
        except StorageError:
            logger.exception("could not clear notifications")
            return False
        self._publish(LedgerChange("cleared"))
        return True

    # --- Storage boundary -----------------------------------------------------

    def _load(self) -> list[Notification]:
        try:
            return self._decode(self._store.get(self._storage_key))
        except StorageError:
            logger.exception("could not read notifications, treating as empty")
            return []

    def _decode(self, raw: object) -> list[Notification]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StorageError(
                f"Expected a list under {self._storage_key!r}, got {type(raw).__name__}"
            )
        return [Notification.from_raw(r) for r in raw]

    def _mutate(
        self, change: Callable[[list[Notification]], list[Notification] | None]
    ) -> bool:
        """Apply *change* to the stored entries in one atomic store update.

        *change* returns None when there is nothing to write.  Returns True
        only if new entries were written.
        """
        written = False

        def apply(raw: object) -> list[dict] | None:
            nonlocal written
            try:
                entries = self._decode(raw)
            except StorageError:
                logger.exception("could not read notifications, treating as empty")
                entries = []
            updated = change(entries)
            if updated is None:
                return None
            written = True
            return [n.to_raw() for n in updated]

        try:
            self._store.update(self._storage_key, apply)
        except StorageError:
            logger.exception("could not write notifications")
            return False
        return written

    def _publish(self, change: LedgerChange) -> None:
        self._broadcaster.publish(change)
