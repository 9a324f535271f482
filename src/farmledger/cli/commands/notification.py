"""Notification commands."""

import click
from farmledger.cli.error_handling import handle_domain_error
from farmledger.domain.notification import NotificationService


@click.group()
def notification_group():
    """View and manage notifications."""
    pass


@notification_group.command("add")
@click.argument("message")
@click.option("--link", help="Where the notification points, e.g. 'crops'")
@click.pass_context
def add_notification(ctx, message: str, link: str | None):
    """Add a notification."""
    try:
        notification_id = NotificationService(ctx.obj["db"]).notify(message, link=link)
        click.echo(f"Added notification {notification_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@notification_group.command("list")
@click.option("--unread", is_flag=True, help="Only unread notifications")
@click.pass_context
def list_notifications(ctx, unread: bool):
    """List notifications, newest first.

    Listing marks every notification as seen.
    """
    service = NotificationService(ctx.obj["db"])
    notifications = service.list_notifications(unread_only=unread)
    if not notifications:
        click.echo("No notifications.")
        return

    for item in notifications:
        mark = " " if item.read else "*"
        stamp = item.timestamp.strftime("%Y-%m-%d %H:%M")
        link = f" -> {item.link}" if item.link else ""
        click.echo(f"{item.id:>4} {mark} {stamp}  {item.message}{link}")
    service.mark_all_seen()


@notification_group.command("read")
@click.argument("notification_id", type=int, required=False)
@click.option("--all", "all_", is_flag=True, help="Mark every notification as read")
@click.pass_context
def mark_read(ctx, notification_id: int | None, all_: bool):
    """Mark a notification (or all of them) as read."""
    service = NotificationService(ctx.obj["db"])

    if all_:
        count = service.mark_all_read()
        click.echo(f"Marked {count} notification(s) as read")
        return
    if notification_id is None:
        click.echo("Error: Give a notification ID or --all", err=True)
        ctx.exit(1)

    try:
        service.mark_read(notification_id)
        click.echo(f"Marked notification {notification_id} as read")
    except ValueError as e:
        handle_domain_error(ctx, e)


@notification_group.command("delete")
@click.argument("notification_id", type=int)
@click.pass_context
def delete_notification(ctx, notification_id: int):
    """Delete a notification."""
    try:
        NotificationService(ctx.obj["db"]).delete_notification(notification_id)
        click.echo(f"Deleted notification {notification_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register notification commands with main CLI."""
    cli.add_command(notification_group, name="notification")
