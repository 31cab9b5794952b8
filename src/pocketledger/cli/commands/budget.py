"""Budget management commands."""

from datetime import date

import click
from pocketledger.domain.budget import BudgetService, DEFAULT_ALERT_THRESHOLD
from pocketledger.domain.errors import DomainError, budget_not_found
from pocketledger.cli.error_handling import exit_not_found, handle_domain_error, require_user
from pocketledger.cli.parsing import format_money, parse_amount_or_exit, parse_month_or_exit
from pocketledger.utils.date_parser import month_key

STATUS_LABELS = {
    "success": "OK",
    "warning": "WARNING",
    "danger": "OVER LIMIT",
}


def _month_or_current(ctx, month: str | None) -> str:
    if month is None:
        return month_key(date.today())
    return parse_month_or_exit(ctx, month)


@click.group()
def budget_group():
    """Manage monthly budgets."""
    pass


@budget_group.command("create")
@click.option("--category", "category_id", required=True, type=int, help="Category ID")
@click.option("--limit", required=True, help="Spending limit for the month")
@click.option("--month", help="Month as YYYY-MM (default: current month)")
@click.option(
    "--threshold",
    type=int,
    default=DEFAULT_ALERT_THRESHOLD,
    show_default=True,
    help="Alert threshold percentage",
)
@click.pass_context
def create_budget(ctx, category_id: int, limit: str, month: str | None, threshold: int):
    """Create a budget for a category and month.

    Examples:
        pocketledger --user 1 budget create --category 2 --limit 800.00
        pocketledger --user 1 budget create --category 2 --limit 800 --month 2024-03 --threshold 90
    """
    user_id = require_user(ctx)
    service = BudgetService(ctx.obj["db"])
    budget_limit = parse_amount_or_exit(ctx, limit)
    budget_month = _month_or_current(ctx, month)

    try:
        budget_id = service.create_budget(
            user_id=user_id,
            category_id=category_id,
            month=budget_month,
            limit=budget_limit,
            alert_threshold=threshold,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created budget {budget_id} for {budget_month}: limit {format_money(budget_limit)}")


@budget_group.command("list")
@click.option("--month", help="Only budgets of this month (YYYY-MM)")
@click.pass_context
def list_budgets(ctx, month: str | None):
    """List budgets."""
    user_id = require_user(ctx)
    service = BudgetService(ctx.obj["db"])
    budget_month = parse_month_or_exit(ctx, month) if month is not None else None

    try:
        budgets = service.list_budgets(user_id, month=budget_month)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not budgets:
        click.echo("No budgets found.")
        return

    click.echo("\nBudgets:")
    click.echo("-" * 72)
    for b in budgets:
        click.echo(
            f"ID: {b.id:3d} | {b.month} | category {b.category_id:3d} | "
            f"{format_money(b.spent)} of {format_money(b.limit)} | alert at {b.alert_threshold}%"
        )


@budget_group.command("update")
@click.argument("budget_id", type=int)
@click.option("--limit", help="New spending limit")
@click.option("--threshold", type=int, help="New alert threshold percentage")
@click.pass_context
def update_budget(ctx, budget_id: int, limit: str | None, threshold: int | None):
    """Update a budget's limit or alert threshold."""
    user_id = require_user(ctx)
    service = BudgetService(ctx.obj["db"])
    budget_limit = parse_amount_or_exit(ctx, limit) if limit is not None else None

    try:
        budget = service.update_budget(
            user_id, budget_id, limit=budget_limit, alert_threshold=threshold
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if budget is None:
        exit_not_found(ctx, budget_not_found(budget_id))
    click.echo(
        f"Updated budget {budget_id}: limit {format_money(budget.limit)}, "
        f"alert at {budget.alert_threshold}%"
    )


@budget_group.command("status")
@click.option("--month", help="Month as YYYY-MM (default: current month)")
@click.pass_context
def budget_status(ctx, month: str | None):
    """Show how each budget of a month is tracking."""
    user_id = require_user(ctx)
    service = BudgetService(ctx.obj["db"])
    budget_month = _month_or_current(ctx, month)

    try:
        statuses = service.list_budget_statuses(user_id, budget_month)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not statuses:
        click.echo(f"No budgets for {budget_month}.")
        return

    click.echo(f"\nBudget status for {budget_month}:")
    click.echo("-" * 72)
    for b, result in statuses:
        click.echo(
            f"ID: {b.id:3d} | category {b.category_id:3d} | "
            f"{format_money(b.spent)} / {format_money(b.limit)} | "
            f"{result.percentage}% | {STATUS_LABELS[result.status.value]}"
        )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
