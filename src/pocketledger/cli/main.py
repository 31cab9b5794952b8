"""Main CLI entry point."""

import logging

import click
from pocketledger.database.factories import create_database
from pocketledger.domain.errors import StoreUnavailableError

# Import and register all commands at module level
from pocketledger.cli.commands import (
    user,
    account,
    category,
    transaction,
    budget,
    goal,
    notification,
    dashboard,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides POCKETLEDGER_DB_PATH environment variable)",
    envvar="POCKETLEDGER_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL, takes precedence over --db-path",
    envvar="POCKETLEDGER_DATABASE_URL",
)
@click.option(
    "--user",
    "user_id",
    type=int,
    help="ID of the user whose ledger to work on",
    envvar="POCKETLEDGER_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="POCKETLEDGER_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, database_url: str | None, user_id: int | None, log_level: str):
    """Pocketledger - personal finance tracking.

    Record accounts and transactions, set monthly budgets per category,
    track savings goals and read the alerts they raise.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["user_id"] = user_id

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=database_url, database_path=db_path)
        db.connect()
        ctx.call_on_close(db.disconnect)
        try:
            db.initialize_schema()
        except StoreUnavailableError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        ctx.obj["db"] = db


# Register all commands
user.register_commands(cli)
account.register_commands(cli)
category.register_commands(cli)
transaction.register_commands(cli)
budget.register_commands(cli)
goal.register_commands(cli)
notification.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
