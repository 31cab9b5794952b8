"""Account management commands."""

import click
from pocketledger.domain.account import AccountService, DEFAULT_CURRENCY
from pocketledger.domain.entities import AccountType
from pocketledger.domain.errors import DomainError, account_not_found
from pocketledger.cli.error_handling import exit_not_found, handle_domain_error, require_user
from pocketledger.cli.parsing import format_money, parse_amount_or_exit

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    default="checking",
    show_default=True,
    help="Account type",
)
@click.option("--balance", default="0", help="Opening balance (e.g., 1500.00)")
@click.option("--currency", default=DEFAULT_CURRENCY, show_default=True, help="Currency code")
@click.option("--description", help="Account description")
@click.pass_context
def create_account(
    ctx, name: str, account_type: str, balance: str, currency: str, description: str | None
):
    """Create a new account.

    Examples:
        pocketledger --user 1 account create "Main Checking"
        pocketledger --user 1 account create "Visa" --type credit_card --balance -250.00
    """
    user_id = require_user(ctx)
    service = AccountService(ctx.obj["db"])
    opening = parse_amount_or_exit(ctx, balance)

    try:
        account_id = service.create_account(
            user_id=user_id,
            name=name,
            account_type=account_type.lower(),
            balance=opening,
            currency=currency,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    user_id = require_user(ctx)
    service = AccountService(ctx.obj["db"])

    try:
        accounts = service.list_accounts(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        status = "" if acc.is_active else " (inactive)"
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {acc.account_type.value:11s} | "
            f"{format_money(acc.balance, acc.currency)}{status}"
        )


@account_group.command("update")
@click.argument("account_id", type=int)
@click.option("--name", help="New account name")
@click.option("--balance", help="New balance")
@click.option("--description", help="New description")
@click.option("--active/--inactive", "is_active", default=None, help="Mark the account active or inactive")
@click.pass_context
def update_account(
    ctx,
    account_id: int,
    name: str | None,
    balance: str | None,
    description: str | None,
    is_active: bool | None,
) -> None:
    """Update an account.

    Examples:
        pocketledger --user 1 account update 1 --balance 2000.00
        pocketledger --user 1 account update 2 --inactive
    """
    user_id = require_user(ctx)
    service = AccountService(ctx.obj["db"])
    new_balance = parse_amount_or_exit(ctx, balance) if balance is not None else None

    try:
        account = service.update_account(
            user_id,
            account_id,
            name=name,
            balance=new_balance,
            description=description,
            is_active=is_active,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if account is None:
        exit_not_found(ctx, account_not_found(account_id))
    click.echo(f"Updated account '{account.name}' (balance {format_money(account.balance, account.currency)})")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
