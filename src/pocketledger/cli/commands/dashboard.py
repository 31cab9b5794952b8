"""Dashboard command."""

import click
from pocketledger.domain.dashboard import DashboardService
from pocketledger.domain.entities import DashboardUnavailable
from pocketledger.domain.errors import DomainError
from pocketledger.cli.error_handling import handle_domain_error, require_user
from pocketledger.cli.parsing import format_money
from pocketledger.cli.commands.transaction import print_transactions


@click.command("dashboard")
@click.pass_context
def show_dashboard(ctx):
    """Show balances, this month's budgets and recent transactions."""
    user_id = require_user(ctx)
    service = DashboardService(ctx.obj["db"])

    try:
        summary = service.get_dashboard_summary(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if isinstance(summary, DashboardUnavailable):
        click.echo(f"Error: Dashboard unavailable: {summary.reason}", err=True)
        ctx.exit(1)

    click.echo(f"\nDashboard for {summary.month}")
    click.echo("=" * 72)
    click.echo(f"Total balance:   {format_money(summary.total_balance)} ({summary.account_count} accounts)")
    click.echo(
        f"Budgets:         {format_money(summary.total_budget_spent)} of "
        f"{format_money(summary.total_budget_limit)} ({summary.budget_count} budgets)"
    )
    click.echo(f"Utilization:     {summary.utilization_percentage}%")

    click.echo("\nRecent transactions:")
    if not summary.recent_transactions:
        click.echo("No transactions yet.")
        return
    print_transactions(list(summary.recent_transactions))


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(show_dashboard)
