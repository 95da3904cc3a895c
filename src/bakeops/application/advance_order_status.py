"""Application service: Advance Order Status use case.

Moves an order forward through the stage sequence (or to cancelled),
stamps the update time, and announces the change on the ledger.
Re-submitting the current stage changes nothing and announces nothing.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from bakeops.application import notification_events
from bakeops.application.notification_ledger import NotificationLedger
from bakeops.domain.exceptions import EntityNotFoundError
from bakeops.domain.model.order_status import OrderStatus
from bakeops.domain.repository.order_repository import OrderRepository
from bakeops.domain.service.timestamps import utc_now


class AdvanceOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        ledger: NotificationLedger,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._ledger = ledger
        self._clock = clock

    def handle(self, order_id: int, status: str | OrderStatus) -> bool:
        """Returns True if the order changed.

        Raises UnknownStatusError for unrecognized status text and
        ValidationError for backward moves.
        """
        target = OrderStatus.parse(status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        previous = order.status
        if not order.advance_to(target, self._clock().isoformat()):
            return False
        self._order_repo.save(order)

        self._ledger.add(
            notification_events.order_status_changed(
                order.display_number, previous.value, target.value, order.id
            )
        )
        return True
