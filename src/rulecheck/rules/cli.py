from __future__ import annotations

import click

from . import get_builtin_rules
from .categories import ALL_CATEGORIES


@click.group(name="rules")
def rules_group() -> None:
    """Inspect the built-in rules."""


@rules_group.command("list")
@click.option(
    "--category",
    "category_id",
    type=click.Choice([category.id for category in ALL_CATEGORIES]),
    default=None,
    help="Only rules of this category id.",
)
@click.option(
    "--include-default-off/--exclude-default-off",
    default=True,
    help="Whether to list rules that are off by default.",
)
def list_rules(category_id: str | None, include_default_off: bool) -> None:
    """List rule ids with their category and description."""
    for rule in get_builtin_rules():
        category = rule.category.id if rule.category else "-"
        if category_id is not None and category != category_id:
            continue
        if rule.default_off and not include_default_off:
            continue
        flag = " (off by default)" if rule.default_off else ""
        click.echo(f"{rule.id}\t{category}\t{rule.description}{flag}")


@rules_group.command("show")
@click.argument("rule_id")
def show_rule(rule_id: str) -> None:
    """Show the details of one rule."""
    for rule in get_builtin_rules():
        if rule.id == rule_id:
            click.echo(f"Id: {rule.id}")
            click.echo(f"Description: {rule.description}")
            if rule.category is not None:
                click.echo(f"Category: {rule.category.name} ({rule.category.id})")
            click.echo(f"Scope: {rule.scope.value}")
            click.echo(f"Default off: {'yes' if rule.default_off else 'no'}")
            return
    raise click.ClickException(f"Unknown rule '{rule_id}'.")
