"""CLI helpers for parsing option values or exiting with an error."""

from datetime import date
from decimal import Decimal

import click
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.date_parser import parse_date, parse_month


def parse_amount_or_exit(ctx: click.Context, value: str) -> Decimal:
    """Parse an amount, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def parse_date_or_exit(ctx: click.Context, value: str) -> date:
    """Parse a date, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def parse_month_or_exit(ctx: click.Context, value: str) -> str:
    """Validate a YYYY-MM month, or exit with a CLI error."""
    try:
        return parse_month(value)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def format_money(amount: Decimal, currency: str | None = None) -> str:
    """Render an amount with thousands separators and 2 decimals."""
    text = f"{amount:,.2f}"
    return f"{currency} {text}" if currency else text
