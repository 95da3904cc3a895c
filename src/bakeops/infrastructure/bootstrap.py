"""Builds the JSON-backed repositories, ledger and domain services from settings.

The broadcaster and data-quality recorder are process-wide singletons so
that every ledger and estimator built here reports to the same place.
"""

from __future__ import annotations

from functools import lru_cache

from bakeops.application.broadcast import InProcessBroadcaster
from bakeops.application.notification_ledger import NotificationLedger
from bakeops.domain.service.data_quality import DataQualityRecorder
from bakeops.domain.service.deal_classifier import DealClassifier
from bakeops.domain.service.timeline_estimator import TimelineEstimator
from bakeops.domain.service.timestamps import TimestampParser
from bakeops.infrastructure.config import get_settings
from bakeops.infrastructure.persistence.json_deal_repository import JsonDealRepository
from bakeops.infrastructure.persistence.json_key_value_store import JsonKeyValueStore
from bakeops.infrastructure.persistence.json_order_repository import JsonOrderRepository


@lru_cache
def data_quality_recorder() -> DataQualityRecorder:
    return DataQualityRecorder()


@lru_cache
def broadcaster() -> InProcessBroadcaster:
    # One per process: every ledger instance built here shares it.
    return InProcessBroadcaster()


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().data_dir / "orders.json")


def deal_repository() -> JsonDealRepository:
    return JsonDealRepository(get_settings().data_dir / "deals.json")


def notification_ledger() -> NotificationLedger:
    settings = get_settings()
    return NotificationLedger(
        store=JsonKeyValueStore(settings.data_dir / "store.json"),
        broadcaster=broadcaster(),
        capacity=settings.notification_capacity,
        storage_key=settings.notification_storage_key,
    )


def timeline_estimator() -> TimelineEstimator:
    settings = get_settings()
    parser = TimestampParser(
        naive_timezone=settings.zone(settings.naive_timestamp_timezone),
        recorder=data_quality_recorder(),
    )
    return TimelineEstimator(parser)


def deal_classifier() -> DealClassifier:
    settings = get_settings()
    return DealClassifier(
        low_price_threshold=settings.low_price_deal_threshold,
        price_tolerance=settings.deal_price_tolerance,
        recorder=data_quality_recorder(),
    )
