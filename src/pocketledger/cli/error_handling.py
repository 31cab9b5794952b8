"""CLI error handling helpers."""

import click

from pocketledger.domain.errors import DomainError, NotFoundError
from pocketledger.domain.validation import require_id


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def require_user(ctx: click.Context) -> int:
    """Return the --user ID, or exit if none or an invalid one was given."""
    user_id = ctx.obj.get("user_id")
    if user_id is None:
        click.echo("Error: No user selected. Pass --user ID or set POCKETLEDGER_USER.", err=True)
        ctx.exit(1)
    try:
        return require_id(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)


def exit_not_found(ctx: click.Context, message: str) -> None:
    """Report a missing entity and exit with failure."""
    handle_domain_error(ctx, NotFoundError(message))
