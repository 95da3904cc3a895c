"""CLI commands for the notification ledger."""

from __future__ import annotations

import click

from bakeops.application.show_notifications import ShowNotificationsHandler
from bakeops.domain.model.notification import (
    NotificationFilters,
    NotificationModule,
    NotificationType,
)
from bakeops.infrastructure.bootstrap import notification_ledger

_MODULES = click.Choice([m.value for m in NotificationModule])
_TYPES = click.Choice([t.value for t in NotificationType])


def _module(value: str | None) -> NotificationModule | None:
    return NotificationModule(value) if value else None


@click.command("list")
@click.option("--module", type=_MODULES, default=None, help="Only this module.")
@click.option("--type", "type_", type=_TYPES, default=None, help="Only this event type.")
@click.option("--unread", is_flag=True, default=False, help="Only unread entries.")
@click.option("--limit", type=int, default=None, help="Maximum entries to show.")
def notification_list(module: str | None, type_: str | None, unread: bool, limit: int | None) -> None:
    """List notifications, newest first."""
    filters = NotificationFilters(
        module=_module(module),
        type=NotificationType(type_) if type_ else None,
        unread_only=unread,
        limit=limit,
    )
    dtos = ShowNotificationsHandler(notification_ledger()).handle(filters)
    if not dtos:
        click.echo("No notifications.")
        return
    for dto in dtos:
        dot = "*" if dto.unread else " "
        click.echo(f"{dot} {dto.id}  [{dto.module}] {dto.title}: {dto.message}  ({dto.time})")


@click.command("count")
@click.option("--module", type=_MODULES, default=None, help="Only this module.")
def notification_count(module: str | None) -> None:
    """Print the number of unread notifications."""
    click.echo(notification_ledger().unread_count(_module(module)))


@click.command("read")
@click.option("--id", "notification_id", required=True, help="Notification ID.")
def notification_read(notification_id: str) -> None:
    """Mark one notification read."""
    notification_ledger().mark_read(notification_id)
    click.echo(f"Notification {notification_id} marked read.")


@click.command("read-all")
@click.option("--module", type=_MODULES, default=None, help="Only this module.")
def notification_read_all(module: str | None) -> None:
    """Mark every notification (of one module) read."""
    flipped = notification_ledger().mark_all_read(_module(module))
    click.echo(f"{flipped} notification(s) marked read.")


@click.command("delete")
@click.option("--id", "notification_id", required=True, help="Notification ID.")
def notification_delete(notification_id: str) -> None:
    """Delete one notification."""
    if not notification_ledger().delete(notification_id):
        raise click.ClickException(f"Notification {notification_id} not found")
    click.echo(f"Notification {notification_id} deleted.")


@click.command("clear")
def notification_clear() -> None:
    """Delete every notification."""
    notification_ledger().clear_all()
    click.echo("All notifications cleared.")
