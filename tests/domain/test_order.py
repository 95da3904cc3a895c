"""Unit tests for order records built from backend data."""

import pytest

from bakeops.domain.exceptions import UnknownStatusError, ValidationError
from bakeops.domain.model.order import Deal, Order, OrderLineItem
from bakeops.domain.model.order_status import OrderStatus


def _raw_order(**overrides) -> dict:
    raw = {
        "id": 12,
        "order_number": "CR-0012",
        "status": "preparing",
        "createdAt": "2025-01-01 10:00:00",
        "updatedAt": "2025-01-01 10:40:00",
        "items": [
            {"productId": 7, "productName": "Chocolate Truffle", "price": 650, "quantity": 1},
            {"product_id": "9", "product_name": "Candle Add-on", "price": "1.00", "is_addon": 1},
        ],
    }
    raw.update(overrides)
    return raw


class TestOrderFromRaw:

    def test_camel_and_snake_case_keys(self):
        order = Order.from_raw(_raw_order())
        assert order.status is OrderStatus.PREPARING
        assert order.created_at == "2025-01-01 10:00:00"
        assert order.items[0].name == "Chocolate Truffle"
        assert order.items[1].product_id == "9"
        assert order.items[1].flags == {"is_addon": 1}

    def test_snake_case_timestamps(self):
        raw = _raw_order()
        del raw["createdAt"], raw["updatedAt"]
        raw["created_at"] = "2025-01-02T08:00:00Z"
        raw["updated_at"] = "2025-01-02T09:00:00Z"
        order = Order.from_raw(raw)
        assert order.created_at == "2025-01-02T08:00:00Z"
        assert order.updated_at == "2025-01-02T09:00:00Z"

    def test_unknown_status_rejected(self):
        with pytest.raises(UnknownStatusError):
            Order.from_raw(_raw_order(status="out_for_delivery"))

    def test_display_number_falls_back_to_id(self):
        order = Order.from_raw(_raw_order(order_number=None))
        assert order.display_number == "12"


class TestLineItemFromRaw:

    def test_bad_quantity_defaults_to_one(self):
        item = OrderLineItem.from_raw({"productName": "Cupcake", "quantity": "two"})
        assert item.quantity == 1

    def test_missing_fields_are_none(self):
        item = OrderLineItem.from_raw({})
        assert item.product_id is None
        assert item.price is None
        assert item.name is None


class TestDealFromRaw:

    def test_deal_fields(self):
        deal = Deal.from_raw({"id": 3, "product_id": 7, "deal_price": "49.00", "is_active": 0})
        assert deal.product_id == 7
        assert deal.deal_price == "49.00"
        assert deal.is_active is False


class TestAdvance:

    def _order(self, status=OrderStatus.CONFIRMED) -> Order:
        return Order(id=1, status=status, created_at="2025-01-01 10:00:00", updated_at="2025-01-01 10:05:00")

    def test_forward_move_stamps_update_time(self):
        order = self._order()
        assert order.advance_to(OrderStatus.READY, "2025-01-01T11:00:00+00:00") is True
        assert order.status is OrderStatus.READY
        assert order.updated_at == "2025-01-01T11:00:00+00:00"

    def test_same_stage_changes_nothing(self):
        order = self._order()
        assert order.advance_to(OrderStatus.CONFIRMED, "later") is False
        assert order.updated_at == "2025-01-01 10:05:00"

    def test_backward_move_rejected(self):
        order = self._order(OrderStatus.READY)
        with pytest.raises(ValidationError, match="from ready to confirmed"):
            order.advance_to(OrderStatus.CONFIRMED, "later")
        assert order.status is OrderStatus.READY
