"""CLI commands for order timelines, item classification and status changes."""

from __future__ import annotations

import time

import click

from bakeops.application.advance_order_status import AdvanceOrderStatusHandler
from bakeops.application.classify_order_items import ClassifyOrderItemsHandler
from bakeops.application.dto import LineItemDTO
from bakeops.application.pending_ticker import PendingElapsedTicker
from bakeops.application.scheduling import ThreadingScheduler
from bakeops.application.show_order_timeline import ShowOrderTimelineHandler
from bakeops.domain.exceptions import DomainException, EntityNotFoundError
from bakeops.domain.model.order import Order
from bakeops.infrastructure.bootstrap import (
    deal_classifier,
    deal_repository,
    notification_ledger,
    order_repository,
    timeline_estimator,
)
from bakeops.infrastructure.config import get_settings


@click.command("timeline")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_timeline(order_id: int) -> None:
    """Show every stage of an order with its (estimated) time."""
    settings = get_settings()
    handler = ShowOrderTimelineHandler(
        order_repo=order_repository(),
        estimator=timeline_estimator(),
        display_timezone=settings.zone(settings.display_timezone),
    )

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.order_number}  (status={dto.status_label})")
    if dto.pending_elapsed:
        click.echo(f"Pending for: {dto.pending_elapsed}")
    click.echo()
    click.echo(f"  {'':<2} {'Stage':<12} {'Time':<26}")
    click.echo(f"  {'-'*48}")
    for stage in dto.stages:
        mark = "x" if stage.is_completed else " "
        approx = " (approx)" if stage.is_approximate else ""
        click.echo(f"  [{mark}] {stage.label:<12} {stage.timestamp}{approx}")


def _echo_items(title: str, items: list[LineItemDTO]) -> None:
    click.echo(title)
    click.echo(f"  {'Product':<30} {'Qty':>5} {'Price':>10}")
    click.echo(f"  {'-'*47}")
    for item in items:
        click.echo(f"  {item.product_name:<30} {item.quantity:>5} {item.price:>10}")


@click.command("items")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_items(order_id: int) -> None:
    """List an order's main items, then its deal/add-on items."""
    handler = ClassifyOrderItemsHandler(
        order_repo=order_repository(),
        deal_repo=deal_repository(),
        classifier=deal_classifier(),
    )

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_items("Main items", dto.main_items)
    if dto.deal_items:
        click.echo()
        _echo_items("Deals & add-ons", dto.deal_items)
    if not dto.deals_available:
        click.echo()
        click.echo("(deals service unavailable; classified by heuristics)")


@click.command("advance")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--status", required=True, help="Target stage, e.g. 'preparing' or 'cancelled'.")
def order_advance(order_id: int, status: str) -> None:
    """Move an order forward to STATUS (or cancel it)."""
    handler = AdvanceOrderStatusHandler(
        order_repo=order_repository(),
        ledger=notification_ledger(),
    )

    try:
        changed = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if changed:
        click.echo(f"Order #{order_id} is now {status.strip().lower()}.")
    else:
        click.echo(f"Order #{order_id} is already {status.strip().lower()}.")


@click.command("pending")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to watch.")
@click.option("--follow", is_flag=True, default=False, help="Keep updating until confirmed.")
def order_pending(order_id: int, follow: bool) -> None:
    """Show how long an order has been waiting for confirmation."""
    repo = order_repository()

    def load_order() -> Order:
        order = repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order

    def render(text: str | None) -> None:
        click.echo(f"Pending for: {text}" if text else "Order is no longer pending.")

    estimator = timeline_estimator()
    ticker = PendingElapsedTicker(
        load_order=load_order,
        estimator=estimator,
        scheduler=ThreadingScheduler(),
        render=render,
        interval=get_settings().elapsed_tick_seconds,
    )

    try:
        if not follow:
            render(estimator.pending_elapsed(load_order()))
            return
        ticker.show()
        while ticker.active:
            time.sleep(0.2)
        if ticker.error is not None:
            raise ticker.error
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except KeyboardInterrupt:
        pass
    finally:
        ticker.hide()
