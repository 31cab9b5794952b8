"""Transaction management commands."""

from datetime import date

import click
from pocketledger.domain.entities import RecurringFrequency, Transaction
from pocketledger.domain.errors import DomainError, transaction_not_found
from pocketledger.domain.transaction import TransactionService
from pocketledger.cli.error_handling import exit_not_found, handle_domain_error, require_user
from pocketledger.cli.parsing import format_money, parse_amount_or_exit, parse_date_or_exit


def print_transactions(transactions: list[Transaction]) -> None:
    """Print transactions one per line."""
    click.echo(f"{'ID':>5} | {'Date':10} | {'Type':7} | {'Amount':>12} | Description")
    click.echo("-" * 72)
    for txn in transactions:
        sign = "-" if txn.transaction_type.value == "expense" else "+"
        click.echo(
            f"{txn.id:5d} | {txn.date.isoformat()} | {txn.transaction_type.value:7} | "
            f"{sign + format_money(txn.amount):>12} | {txn.description or ''}"
        )


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", "account_id", required=True, type=int, help="Account ID")
@click.option("--category", "category_id", required=True, type=int, help="Category ID")
@click.option("--amount", required=True, help="Transaction amount, always positive (e.g., 123.45)")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    default="expense",
    show_default=True,
    help="Transaction type",
)
@click.option(
    "--date",
    "date_str",
    default="today",
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", help="Transaction description")
@click.option("--tags", help="Comma-separated tags")
@click.option("--notes", help="Notes")
@click.option(
    "--recurring",
    type=click.Choice([f.value for f in RecurringFrequency], case_sensitive=False),
    help="Mark as recurring with this frequency",
)
@click.pass_context
def add_transaction(
    ctx,
    account_id: int,
    category_id: int,
    amount: str,
    transaction_type: str,
    date_str: str,
    description: str | None,
    tags: str | None,
    notes: str | None,
    recurring: str | None,
):
    """Add a transaction.

    Examples:
        pocketledger --user 1 transaction add --account 1 --category 2 --amount 50.00 --description "Groceries"
        pocketledger --user 1 transaction add --account 1 --category 5 --amount 3000 --type income --date 2024-01-05
    """
    user_id = require_user(ctx)
    service = TransactionService(ctx.obj["db"])
    txn_amount = parse_amount_or_exit(ctx, amount)
    txn_date = parse_date_or_exit(ctx, date_str)

    try:
        transaction_id = service.create_transaction(
            user_id=user_id,
            account_id=account_id,
            category_id=category_id,
            amount=txn_amount,
            transaction_type=transaction_type.lower(),
            date=txn_date,
            description=description,
            tags=tags,
            notes=notes,
            is_recurring=recurring is not None,
            recurring_frequency=recurring.lower() if recurring else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {format_money(txn_amount)} ({transaction_type.lower()})")
    if description:
        click.echo(f"  Description: {description}")


@transaction_group.command("list")
@click.option("--limit", default=50, show_default=True, type=int, help="Maximum number of transactions")
@click.option("--offset", default=0, type=int, help="Number of transactions to skip")
@click.pass_context
def list_transactions(ctx, limit: int, offset: int):
    """List transactions, most recent first."""
    user_id = require_user(ctx)
    service = TransactionService(ctx.obj["db"])

    try:
        transactions = service.list_transactions(user_id, limit=limit, offset=offset)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not transactions:
        click.echo("No transactions found.")
        return
    print_transactions(transactions)


@transaction_group.command("range")
@click.option("--start-date", required=True, help="First day (inclusive)")
@click.option("--end-date", default="today", help="Last day (inclusive)")
@click.pass_context
def list_transactions_in_range(ctx, start_date: str, end_date: str):
    """List transactions between two dates.

    Examples:
        pocketledger --user 1 transaction range --start-date 2024-01-01 --end-date 2024-01-31
    """
    user_id = require_user(ctx)
    service = TransactionService(ctx.obj["db"])
    start = parse_date_or_exit(ctx, start_date)
    end = parse_date_or_exit(ctx, end_date)

    try:
        transactions = service.list_transactions_by_date_range(user_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not transactions:
        click.echo(f"No transactions between {start} and {end}.")
        return
    print_transactions(transactions)


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--description", help="New description")
@click.option("--date", "date_str", help="New date")
@click.option("--notes", help="New notes")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    amount: str | None,
    description: str | None,
    date_str: str | None,
    notes: str | None,
) -> None:
    """Update a transaction.

    Only the amount, description, date and notes can change.

    Examples:
        pocketledger --user 1 transaction update 3 --amount 75.00
    """
    user_id = require_user(ctx)
    service = TransactionService(ctx.obj["db"])
    txn_amount = parse_amount_or_exit(ctx, amount) if amount is not None else None
    txn_date: date | None = parse_date_or_exit(ctx, date_str) if date_str is not None else None

    try:
        txn = service.update_transaction(
            user_id,
            transaction_id,
            amount=txn_amount,
            description=description,
            date=txn_date,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if txn is None:
        exit_not_found(ctx, transaction_not_found(transaction_id))
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction."""
    user_id = require_user(ctx)
    service = TransactionService(ctx.obj["db"])

    try:
        txn = service.get_transaction(user_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if txn is None:
        exit_not_found(ctx, transaction_not_found(transaction_id))

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id} ({format_money(txn.amount)} on {txn.date})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(user_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
