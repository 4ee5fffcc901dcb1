"""Category commands."""

import click

from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.domain.category import FALLBACK_CATEGORY_NAME, CategoryService
from ledgerlens.domain.entities import TransactionKind
from ledgerlens.domain.errors import DomainError


@click.group()
def category_group():
    """Inspect, manage and seed categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List categories visible to the owner, grouped by kind."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories(ctx.obj["owner_id"])
    if not categories:
        click.echo("No categories found. Run 'category init' to create default categories.")
        return

    current_kind = None
    for cat in categories:
        if cat.kind != current_kind:
            current_kind = cat.kind
            click.echo(f"\n{current_kind.value.capitalize()}:")
        icon = f"{cat.icon} " if cat.icon else ""
        scope = "system" if cat.owner_id is None else "custom"
        click.echo(f"  {icon}{cat.name} (ID: {cat.id}, {scope})")


@category_group.command("init")
@click.pass_context
def init_categories(ctx):
    """Create the default system-wide categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    created = service.seed_system_categories()
    if created == 0:
        click.echo("Default categories already exist.")
    else:
        click.echo(f"Created {created} default categories.")


@category_group.command("create")
@click.argument("name")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in TransactionKind], case_sensitive=False),
    required=True,
    help="Income or expense category",
)
@click.option("--icon", help="Display icon (e.g., an emoji)")
@click.option("--color", help="Display color as #rrggbb")
@click.pass_context
def create_category(ctx, name: str, kind: str, icon: str | None, color: str | None):
    """Create a custom category.

    Examples:
        ledgerlens category create "Pets" --kind expense --icon 🐶 --color #a855f7
    """
    service = CategoryService(ctx.obj["db"])
    try:
        category_id = service.create_category(
            ctx.obj["owner_id"], name, kind, icon=icon, color=color
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created category '{name.strip()}' (ID: {category_id})")


@category_group.command("update")
@click.argument("category_id", type=int)
@click.option("--name", help="New name")
@click.option("--icon", help="New display icon")
@click.option("--color", help="New display color as #rrggbb")
@click.pass_context
def update_category(
    ctx, category_id: int, name: str | None, icon: str | None, color: str | None
):
    """Update a custom category.

    Updates only the fields that are provided. System categories cannot be changed.
    """
    if name is None and icon is None and color is None:
        click.echo("Error: Nothing to update. Pass --name, --icon or --color.", err=True)
        ctx.exit(1)

    service = CategoryService(ctx.obj["db"])
    try:
        service.update_category(
            ctx.obj["owner_id"], category_id, name=name, icon=icon, color=color
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated category {category_id}")


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.pass_context
def delete_category(ctx, category_id: int):
    """Delete a custom category.

    Its transactions move to the 'Other' category of the same kind.
    """
    owner_id = ctx.obj["owner_id"]
    service = CategoryService(ctx.obj["db"])
    try:
        category = service.get_editable_category(owner_id, category_id)
        usage = service.get_category_usage_count(owner_id, category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    prompt = f"Are you sure you want to delete category '{category.name}'?"
    if usage:
        prompt = (
            f"Category '{category.name}' has {usage} transaction(s) that will move "
            f"to '{FALLBACK_CATEGORY_NAME}'. Delete it?"
        )
    if not click.confirm(prompt):
        click.echo("Deletion cancelled.")
        return

    try:
        moved = service.delete_category(owner_id, category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted category '{category.name}' (moved {moved} transactions)")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
