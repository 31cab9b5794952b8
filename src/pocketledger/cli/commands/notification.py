"""Notification commands."""

import click
from pocketledger.domain.entities import Notification
from pocketledger.domain.errors import DomainError, notification_not_found
from pocketledger.domain.notification import NotificationService
from pocketledger.cli.error_handling import exit_not_found, handle_domain_error, require_user


def print_notifications(notifications: list[Notification]) -> None:
    for n in notifications:
        marker = " " if n.is_read else "*"
        click.echo(f"{marker} [{n.id}] {n.notification_type.value}: {n.title}")
        click.echo(f"      {n.message}")


@click.group()
def notification_group():
    """Read notifications."""
    pass


@notification_group.command("list")
@click.option("--limit", default=20, show_default=True, type=int, help="Maximum number shown")
@click.pass_context
def list_notifications(ctx, limit: int):
    """List recent notifications (unread marked with *)."""
    user_id = require_user(ctx)
    service = NotificationService(ctx.obj["db"])

    try:
        notifications = service.list_notifications(user_id, limit=limit)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not notifications:
        click.echo("No notifications.")
        return
    print_notifications(notifications)


@notification_group.command("unread")
@click.pass_context
def list_unread(ctx):
    """List unread notifications."""
    user_id = require_user(ctx)
    service = NotificationService(ctx.obj["db"])

    try:
        notifications = service.list_unread(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not notifications:
        click.echo("No unread notifications.")
        return
    print_notifications(notifications)


@notification_group.command("read")
@click.argument("notification_id", type=int)
@click.pass_context
def mark_read(ctx, notification_id: int):
    """Mark a notification as read."""
    user_id = require_user(ctx)
    service = NotificationService(ctx.obj["db"])

    try:
        marked = service.mark_as_read(user_id, notification_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not marked:
        exit_not_found(ctx, notification_not_found(notification_id))
    click.echo(f"Marked notification {notification_id} as read")


def register_commands(cli):
    """Register notification commands with main CLI."""
    cli.add_command(notification_group, name="notification")
