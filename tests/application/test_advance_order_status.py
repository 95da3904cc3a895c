"""Integration tests for the AdvanceOrderStatus use case."""

import pytest

from bakeops.application.advance_order_status import AdvanceOrderStatusHandler
from bakeops.application.notification_ledger import NotificationLedger
from bakeops.domain.exceptions import EntityNotFoundError, UnknownStatusError, ValidationError
from bakeops.domain.model.notification import NotificationType
from bakeops.domain.model.order import Order
from bakeops.domain.model.order_status import OrderStatus
from tests.fakes import FakeOrderRepository, FixedClock, InMemoryKeyValueStore


def _setup(status=OrderStatus.PENDING):
    order = Order(
        id=21,
        status=status,
        created_at="2025-01-01 10:00:00",
        updated_at="2025-01-01 10:00:00",
        order_number="CR-0021",
    )
    clock = FixedClock()
    order_repo = FakeOrderRepository([order])
    ledger = NotificationLedger(InMemoryKeyValueStore(), clock=clock)
    handler = AdvanceOrderStatusHandler(order_repo, ledger, clock=clock)
    return handler, order_repo, ledger


class TestAdvanceHappyPath:

    def test_forward_move(self):
        handler, order_repo, ledger = _setup()

        assert handler.handle(21, "confirmed") is True

        order = order_repo.get_by_id(21)
        assert order.status is OrderStatus.CONFIRMED
        assert order.updated_at == "2025-01-01T12:00:00+00:00"
        assert order_repo.saved == [21]

    def test_status_change_is_announced(self):
        handler, _, ledger = _setup()
        handler.handle(21, "preparing")

        [entry] = ledger.list()
        assert entry.type is NotificationType.ORDER_STATUS_CHANGED
        assert entry.message == "Order #CR-0021 changed from pending to preparing"

    def test_cancel(self):
        handler, order_repo, _ = _setup(OrderStatus.READY)
        handler.handle(21, OrderStatus.CANCELLED)
        assert order_repo.get_by_id(21).status is OrderStatus.CANCELLED


class TestAdvanceIdempotence:

    def test_same_stage_is_noop(self):
        handler, order_repo, ledger = _setup(OrderStatus.CONFIRMED)

        assert handler.handle(21, "Confirmed") is False

        assert order_repo.saved == []
        assert ledger.list() == []


class TestAdvanceValidation:

    def test_backward_move_rejected(self):
        handler, order_repo, ledger = _setup(OrderStatus.READY)

        with pytest.raises(ValidationError, match="from ready to confirmed"):
            handler.handle(21, "confirmed")

        assert order_repo.get_by_id(21).status is OrderStatus.READY
        assert ledger.list() == []

    def test_unknown_status_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(UnknownStatusError):
            handler.handle(21, "baking")

    def test_unknown_order(self):
        handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            handler.handle(404, "confirmed")
