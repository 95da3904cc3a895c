"""Application service: Show Notifications use case (query).

The stored ``time`` string is frozen at creation ("just now"); listings
re-render it relative to the current clock.
"""

from __future__ import annotations

from bakeops.application.dto import NotificationDTO
from bakeops.application.notification_ledger import NotificationLedger
from bakeops.domain.model.notification import Notification, NotificationFilters
from bakeops.domain.service.time_format import format_relative_time


class ShowNotificationsHandler:

    def __init__(self, ledger: NotificationLedger) -> None:
        self._ledger = ledger

    def handle(self, filters: NotificationFilters | None = None) -> list[NotificationDTO]:
        now_ms = self._ledger.now_ms()
        return [self._to_dto(n, now_ms) for n in self._ledger.list(filters)]

    @staticmethod
    def _to_dto(notification: Notification, now_ms: int) -> NotificationDTO:
        return NotificationDTO(
            id=notification.id,
            type=notification.type.value,
            module=notification.module.value,
            title=notification.title,
            message=notification.message,
            time=format_relative_time(notification.timestamp, now_ms),
            unread=notification.unread,
            link=notification.link,
        )
