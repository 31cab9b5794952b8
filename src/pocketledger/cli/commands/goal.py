"""Savings goal commands."""

import click
from pocketledger.domain.errors import DomainError, goal_not_found
from pocketledger.domain.goal import GoalService, compute_goal_progress
from pocketledger.cli.error_handling import exit_not_found, handle_domain_error, require_user
from pocketledger.cli.parsing import format_money, parse_amount_or_exit, parse_date_or_exit


def _describe_progress(goal) -> str:
    progress = compute_goal_progress(goal)
    text = f"{progress.percentage}%"
    if goal.is_completed:
        text += " | completed"
    elif progress.days_left is not None:
        if progress.days_left > 0:
            text += f" | {progress.days_left} days left"
        else:
            text += " | deadline passed"
    return text


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("create")
@click.argument("name")
@click.option("--target", required=True, help="Target amount")
@click.option("--deadline", help="Deadline date")
@click.option("--description", help="Goal description")
@click.option("--category", help="Free-form goal category (e.g., travel)")
@click.pass_context
def create_goal(
    ctx, name: str, target: str, deadline: str | None, description: str | None, category: str | None
):
    """Create a savings goal.

    Examples:
        pocketledger --user 1 goal create "Emergency fund" --target 10000 --deadline 2025-12-31
    """
    user_id = require_user(ctx)
    service = GoalService(ctx.obj["db"])
    target_amount = parse_amount_or_exit(ctx, target)
    goal_deadline = parse_date_or_exit(ctx, deadline) if deadline is not None else None

    try:
        goal_id = service.create_goal(
            user_id=user_id,
            name=name,
            target_amount=target_amount,
            description=description,
            deadline=goal_deadline,
            category=category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created goal '{name}' (ID: {goal_id})")


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List goals with their progress."""
    user_id = require_user(ctx)
    service = GoalService(ctx.obj["db"])

    try:
        goals = service.list_goals(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not goals:
        click.echo("No goals found.")
        return

    click.echo("\nGoals:")
    click.echo("-" * 72)
    for g in goals:
        click.echo(
            f"ID: {g.id:3d} | {g.name:20s} | {format_money(g.current_amount)} of "
            f"{format_money(g.target_amount)} | {_describe_progress(g)}"
        )


@goal_group.command("update")
@click.argument("goal_id", type=int)
@click.option("--name", help="New name")
@click.option("--current", help="New amount saved so far")
@click.option("--deadline", help="New deadline date")
@click.option("--description", help="New description")
@click.pass_context
def update_goal(
    ctx,
    goal_id: int,
    name: str | None,
    current: str | None,
    deadline: str | None,
    description: str | None,
):
    """Update a goal."""
    user_id = require_user(ctx)
    service = GoalService(ctx.obj["db"])
    current_amount = parse_amount_or_exit(ctx, current) if current is not None else None
    goal_deadline = parse_date_or_exit(ctx, deadline) if deadline is not None else None

    try:
        goal = service.update_goal(
            user_id,
            goal_id,
            name=name,
            current_amount=current_amount,
            deadline=goal_deadline,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if goal is None:
        exit_not_found(ctx, goal_not_found(goal_id))
    click.echo(f"Updated goal '{goal.name}': {_describe_progress(goal)}")


@goal_group.command("contribute")
@click.argument("goal_id", type=int)
@click.argument("amount")
@click.pass_context
def contribute(ctx, goal_id: int, amount: str):
    """Add AMOUNT to the money saved for a goal."""
    user_id = require_user(ctx)
    service = GoalService(ctx.obj["db"])
    contribution = parse_amount_or_exit(ctx, amount)

    try:
        goal = service.add_contribution(user_id, goal_id, contribution)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if goal is None:
        exit_not_found(ctx, goal_not_found(goal_id))
    click.echo(f"Saved {format_money(contribution)} towards '{goal.name}': {_describe_progress(goal)}")
    if goal.is_completed:
        click.echo("Goal reached!")


@goal_group.command("complete")
@click.argument("goal_id", type=int)
@click.pass_context
def complete(ctx, goal_id: int):
    """Mark a goal completed."""
    user_id = require_user(ctx)
    service = GoalService(ctx.obj["db"])

    try:
        goal = service.complete_goal(user_id, goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if goal is None:
        exit_not_found(ctx, goal_not_found(goal_id))
    click.echo(f"Goal '{goal.name}' completed")


@goal_group.command("progress")
@click.argument("goal_id", type=int)
@click.pass_context
def progress(ctx, goal_id: int):
    """Show progress towards a goal."""
    user_id = require_user(ctx)
    service = GoalService(ctx.obj["db"])

    try:
        goal = service.get_goal(user_id, goal_id)
        result = service.get_progress(user_id, goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if goal is None or result is None:
        exit_not_found(ctx, goal_not_found(goal_id))
    click.echo(f"{goal.name}: {format_money(goal.current_amount)} of {format_money(goal.target_amount)}")
    click.echo(f"  Progress: {result.percentage}%")
    if result.days_left is not None:
        click.echo(f"  Days left: {result.days_left}")
    click.echo(f"  Complete: {'yes' if result.is_complete else 'no'}")


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
