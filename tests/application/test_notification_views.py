"""Tests for views observing the shared ledger."""

import pytest

from bakeops.application.broadcast import InProcessBroadcaster
from bakeops.application.notification_ledger import NotificationLedger
from bakeops.application.notification_views import LedgerView, context_feed
from bakeops.domain.model.notification import NewNotification, NotificationModule, NotificationType
from tests.fakes import FixedClock, InMemoryKeyValueStore, ManualScheduler


def _entry(module=NotificationModule.ORDERS, title="Event") -> NewNotification:
    return NewNotification(type=NotificationType.SYSTEM_ALERT, title=title, message="m", module=module)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def broadcaster():
    return InProcessBroadcaster()


@pytest.fixture
def ledger(store, broadcaster, clock):
    return NotificationLedger(store, broadcaster, clock=clock)


@pytest.fixture
def scheduler():
    return ManualScheduler()


class TestLedgerView:

    def test_initial_state(self, ledger, scheduler):
        ledger.add(_entry())
        view = LedgerView(ledger, scheduler)
        assert view.unread_count == 1
        assert len(view.notifications) == 1

    def test_badge_follows_another_view(self, store, broadcaster, clock, scheduler):
        dropdown_ledger = NotificationLedger(store, broadcaster, clock=clock)
        badge_ledger = NotificationLedger(store, broadcaster, clock=clock)
        badge = LedgerView(badge_ledger, scheduler)

        added = dropdown_ledger.add(_entry())
        assert badge.unread_count == 1

        dropdown_ledger.mark_read(added.id)
        assert badge.unread_count == 0

    def test_module_scope(self, ledger, scheduler):
        view = LedgerView(ledger, scheduler, module=NotificationModule.DELIVERY)
        ledger.add(_entry(module=NotificationModule.ORDERS))
        ledger.add(_entry(module=NotificationModule.DELIVERY))
        assert view.unread_count == 1
        assert [n.module for n in view.notifications] == [NotificationModule.DELIVERY]

    def test_periodic_refresh_catches_missed_broadcasts(self, ledger, store, clock, scheduler):
        view = LedgerView(ledger, scheduler)
        # Another process writes to the shared store; no broadcast reaches us.
        NotificationLedger(store, InProcessBroadcaster(), clock=clock).add(_entry())
        assert view.unread_count == 0

        scheduler.advance(29)
        assert view.unread_count == 0
        scheduler.advance(1)
        assert view.unread_count == 1

    def test_refresh_runs_every_interval(self, ledger, scheduler):
        view = LedgerView(ledger, scheduler, refresh_interval=30)
        scheduler.advance(90)
        assert view.refresh_count == 4  # initial render + 3 ticks

    def test_on_change_callback(self, ledger, scheduler):
        rendered = []
        LedgerView(ledger, scheduler, on_change=lambda v: rendered.append(v.unread_count))
        ledger.add(_entry())
        assert rendered == [0, 1]

    def test_close_stops_everything(self, ledger, broadcaster, scheduler):
        view = LedgerView(ledger, scheduler)
        view.close()
        ledger.add(_entry())
        scheduler.advance(60)
        assert view.closed
        assert view.unread_count == 0
        assert scheduler.active_tasks == []
        assert broadcaster.listener_count == 0

    def test_context_manager_closes(self, ledger, scheduler):
        with LedgerView(ledger, scheduler) as view:
            pass
        assert view.closed
        assert scheduler.active_tasks == []


class TestContextFeed:

    def test_all_modules(self, ledger, clock):
        for i in range(7):
            clock.advance(seconds=1)
            ledger.add(_entry(title=str(i)))
        assert [n.title for n in context_feed(ledger)] == ["6", "5", "4", "3", "2"]

    def test_includes_unread_from_other_modules(self, ledger, clock):
        clock.advance(seconds=1)
        ledger.add(_entry(module=NotificationModule.PAYMENTS, title="payment"))
        for i in range(6):
            clock.advance(seconds=1)
            ledger.add(_entry(module=NotificationModule.DELIVERY, title=f"delivery {i}"))
        clock.advance(seconds=1)
        ledger.add(_entry(module=NotificationModule.PRODUCTS, title="low stock"))

        titles = [n.title for n in context_feed(ledger, NotificationModule.DELIVERY)]

        assert titles == ["low stock", "delivery 5", "delivery 4", "delivery 3", "delivery 2", "delivery 1"]

    def test_read_entries_from_other_modules_hidden(self, ledger, clock):
        other = ledger.add(_entry(module=NotificationModule.PAYMENTS))
        ledger.mark_read(other.id)
        clock.advance(seconds=1)
        ledger.add(_entry(module=NotificationModule.ORDERS))
        feed = context_feed(ledger, NotificationModule.ORDERS)
        assert [n.module for n in feed] == [NotificationModule.ORDERS]
