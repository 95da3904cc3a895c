import click

from bakeops.infrastructure.cli.notification_commands import (
    notification_clear,
    notification_count,
    notification_delete,
    notification_list,
    notification_read,
    notification_read_all,
)
from bakeops.infrastructure.cli.order_commands import (
    order_advance,
    order_items,
    order_pending,
    order_timeline,
)
from bakeops.infrastructure.config import get_settings
from bakeops.infrastructure.logging import setup_logging


@click.group()
def cli() -> None:
    """bakeops: bakery order lifecycle and notifications"""
    setup_logging(get_settings().log_level)


@cli.group()
def order() -> None:
    """Inspect and advance orders."""


@cli.group()
def notification() -> None:
    """Manage the notification ledger."""


# Register subcommands
order.add_command(order_advance)
order.add_command(order_items)
order.add_command(order_pending)
order.add_command(order_timeline)
notification.add_command(notification_clear)
notification.add_command(notification_count)
notification.add_command(notification_delete)
notification.add_command(notification_list)
notification.add_command(notification_read)
notification.add_command(notification_read_all)
