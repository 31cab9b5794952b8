"""Category management commands."""

import click
from pocketledger.domain.category import CategoryService, DEFAULT_COLOR
from pocketledger.domain.errors import DomainError, category_not_found
from pocketledger.cli.error_handling import exit_not_found, handle_domain_error, require_user

CATEGORY_TYPES = ["expense", "income"]


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(CATEGORY_TYPES, case_sensitive=False),
    help="Only list categories of this type",
)
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories."""
    user_id = require_user(ctx)
    service = CategoryService(ctx.obj["db"])

    try:
        categories = service.list_categories(user_id, category_type=category_type)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"{cat.name} (ID: {cat.id}, {cat.category_type.value})")


@category_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(CATEGORY_TYPES, case_sensitive=False),
    default="expense",
    help="Category type (default: expense)",
)
@click.option("--color", default=DEFAULT_COLOR, help="Display color as #rrggbb")
@click.option("--icon", help="Icon name")
@click.option("--description", help="Category description")
@click.pass_context
def create_category(
    ctx, name: str, category_type: str, color: str, icon: str | None, description: str | None
):
    """Create a new category."""
    user_id = require_user(ctx)
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(
            user_id=user_id,
            name=name,
            category_type=category_type.lower(),
            color=color,
            icon=icon,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name}' (ID: {category_id})")


@category_group.command("update")
@click.argument("category_id", type=int)
@click.option("--name", help="New name")
@click.option("--color", help="New color as #rrggbb")
@click.option("--icon", help="New icon")
@click.option("--description", help="New description")
@click.pass_context
def update_category(
    ctx,
    category_id: int,
    name: str | None,
    color: str | None,
    icon: str | None,
    description: str | None,
):
    """Update a category."""
    user_id = require_user(ctx)
    service = CategoryService(ctx.obj["db"])

    try:
        category = service.update_category(
            user_id, category_id, name=name, color=color, icon=icon, description=description
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if category is None:
        exit_not_found(ctx, category_not_found(category_id))
    click.echo(f"Updated category '{category.name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
