"""Unit tests for notification records and filters."""

import pytest

from bakeops.domain.exceptions import StorageError
from bakeops.domain.model.notification import (
    Notification,
    NotificationFilters,
    NotificationModule,
    NotificationType,
)


def _notification(**overrides) -> Notification:
    fields = dict(
        id="notif_1",
        type=NotificationType.ORDER_NEW,
        title="New Order Received",
        message="Order #CR-1 has been placed",
        module=NotificationModule.ORDERS,
        data={"orderId": 1},
        time="just now",
        timestamp=1735689600000,
    )
    fields.update(overrides)
    return Notification(**fields)


class TestNotificationRecord:

    def test_raw_uses_enum_values(self):
        raw = _notification(link="/orders?order=1").to_raw()
        assert raw["type"] == "order_new"
        assert raw["module"] == "orders"
        assert raw["unread"] is True
        assert raw["link"] == "/orders?order=1"

    def test_absent_link_not_stored(self):
        assert "link" not in _notification().to_raw()

    def test_rebuilt_from_raw(self):
        original = _notification(unread=False, link="/orders?order=1")
        assert Notification.from_raw(original.to_raw()) == original

    @pytest.mark.parametrize(
        "raw",
        [
            {"id": "x"},
            {**_notification().to_raw(), "type": "carrier_pigeon"},
            {**_notification().to_raw(), "timestamp": "yesterday"},
            "notif_1",
        ],
    )
    def test_malformed_records_are_storage_errors(self, raw):
        with pytest.raises(StorageError, match="Malformed"):
            Notification.from_raw(raw)

    def test_mark_read_returns_copy(self):
        unread = _notification()
        read = unread.mark_read()
        assert read.unread is False
        assert unread.unread is True
        assert read.mark_read() is read


class TestFilters:

    def test_empty_filter_matches_everything(self):
        assert NotificationFilters().matches(_notification())

    def test_module_all_disables_module_filter(self):
        delivery = _notification(module=NotificationModule.DELIVERY)
        assert NotificationFilters(module=NotificationModule.ALL).matches(delivery)
        assert not NotificationFilters(module=NotificationModule.ORDERS).matches(delivery)

    def test_type_filter(self):
        assert not NotificationFilters(type=NotificationType.LOW_STOCK).matches(_notification())

    def test_unread_only(self):
        read = _notification(unread=False)
        assert not NotificationFilters(unread_only=True).matches(read)
