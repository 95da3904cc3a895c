"""Integration tests for the ShowOrderTimeline use case."""

import pytest

from bakeops.application.show_order_timeline import ShowOrderTimelineHandler
from bakeops.domain.exceptions import EntityNotFoundError
from bakeops.domain.model.order import Order
from bakeops.domain.model.order_status import OrderStatus
from bakeops.domain.service.timeline_estimator import TimelineEstimator
from bakeops.domain.service.timestamps import TimestampParser
from tests.fakes import FakeOrderRepository, FixedClock


def _setup(status=OrderStatus.PREPARING, created="2025-01-01 10:00:00"):
    order = Order(
        id=7,
        status=status,
        created_at=created,
        updated_at="2025-01-01 10:40:00",
        order_number="CR-0007",
    )
    estimator = TimelineEstimator(TimestampParser(clock=FixedClock()))
    return ShowOrderTimelineHandler(FakeOrderRepository([order]), estimator)


class TestShowOrderTimeline:

    def test_stage_rows(self):
        dto = _setup().handle(7)

        assert dto.order_number == "CR-0007"
        assert dto.status_label == "Preparing"
        assert [s.label for s in dto.stages] == ["Pending", "Confirmed", "Preparing", "Ready", "Delivered"]
        assert [s.timestamp for s in dto.stages] == [
            "Jan 01, 2025, 10:00 AM",
            "Jan 01, 2025, 10:26 AM",
            "Jan 01, 2025, 10:40 AM",
            "Not yet",
            "Not yet",
        ]
        assert [s.is_approximate for s in dto.stages] == [False, True, False, False, False]
        assert [s.is_completed for s in dto.stages] == [True, True, True, False, False]
        assert [s.is_active for s in dto.stages] == [False, False, True, False, False]
        assert dto.pending_elapsed is None

    def test_pending_order_reports_elapsed(self):
        dto = _setup(status=OrderStatus.PENDING, created="2025-01-01 11:57:55").handle(7)
        assert dto.pending_elapsed == "2m 5s"

    def test_cancelled_order_has_no_completed_stages(self):
        dto = _setup(status=OrderStatus.CANCELLED).handle(7)
        assert not any(s.is_completed for s in dto.stages)
        assert dto.stages[0].timestamp == "Jan 01, 2025, 10:00 AM"

    def test_unknown_order(self):
        with pytest.raises(EntityNotFoundError, match="not found"):
            _setup().handle(999)

    def test_unparseable_time_is_marked_approximate(self):
        dto = _setup(created="??").handle(7)
        assert dto.stages[0].is_approximate
        assert not dto.stages[2].is_approximate
