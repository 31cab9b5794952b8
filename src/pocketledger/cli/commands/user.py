"""User management commands."""

import click
from pocketledger.domain.errors import DomainError
from pocketledger.domain.user import UserService
from pocketledger.cli.error_handling import handle_domain_error


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("open_id", metavar="OPEN_ID")
@click.option("--name", help="Display name")
@click.option("--email", help="Email address")
@click.pass_context
def create_user(ctx, open_id: str, name: str | None, email: str | None):
    """Register a user, or refresh an existing one with the same OPEN_ID.

    Examples:
        pocketledger user create alice --name "Alice" --email alice@example.com
    """
    service = UserService(ctx.obj["db"])
    try:
        user = service.sign_in(open_id, name=name, email=email)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"User '{user.name or user.open_id}' (ID: {user.id})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    service = UserService(ctx.obj["db"])
    try:
        users = service.list_users()
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 60)
    for u in users:
        click.echo(f"ID: {u.id:3d} | {u.open_id:20s} | {u.name or ''}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
