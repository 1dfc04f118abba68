"""Periodic expense (sinking fund) commands."""

import click

from payledger.domain.entities import PeriodicFrequency
from payledger.domain.errors import DomainError
from payledger.domain.periodic import PeriodicExpenseService
from payledger.cli.account_resolution import resolve_account_or_exit
from payledger.cli.error_handling import handle_domain_error
from payledger.cli.parsing import (
    CATEGORY_CHOICES,
    amount_or_exit,
    category_or_exit,
    date_or_exit,
    get_settings,
    money,
    optional_amount_or_exit,
)

FREQUENCY_CHOICES = [frequency.value for frequency in PeriodicFrequency]


@click.group()
def periodic_group():
    """Manage sinking funds for large, infrequent costs."""
    pass


@periodic_group.command("add")
@click.argument("name")
@click.argument("target")
@click.option("--due", required=True, help="When the cost comes due")
@click.option("--frequency", type=click.Choice(FREQUENCY_CHOICES), default="monthly", show_default=True)
@click.option("--account", help="Account name or ID")
@click.pass_context
def add_periodic(ctx, name: str, target: str, due: str, frequency: str, account: str | None):
    """Create a sinking fund.

    Examples:
        payledger periodic add "Car insurance" 18000 --due 2025-09-01 --frequency yearly
    """
    account_id = resolve_account_or_exit(ctx, account)
    target_cents = amount_or_exit(ctx, target, "target")
    due_date = date_or_exit(ctx, due, "due date")

    try:
        periodic_id = PeriodicExpenseService(ctx.obj["db"]).add_periodic_expense(
            account_id, name, target_cents, due_date, frequency
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created periodic expense '{name}' (ID: {periodic_id}) due {due_date.isoformat()}")


@periodic_group.command("update")
@click.argument("periodic_id", type=int)
@click.option("--name", help="New name")
@click.option("--target", help="New target amount")
@click.option("--due", help="New due date")
@click.option("--frequency", type=click.Choice(FREQUENCY_CHOICES), help="New frequency")
@click.pass_context
def update_periodic(
    ctx, periodic_id: int, name: str | None, target: str | None, due: str | None, frequency: str | None
):
    """Update a sinking fund."""
    target_cents = optional_amount_or_exit(ctx, target, "target")
    due_date = date_or_exit(ctx, due, "due date")

    try:
        PeriodicExpenseService(ctx.obj["db"]).update_periodic_expense(
            periodic_id, name=name, target_amount=target_cents, due_date=due_date, frequency=frequency
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated periodic expense {periodic_id}")


@periodic_group.command("delete")
@click.argument("periodic_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_periodic(ctx, periodic_id: int, yes: bool):
    """Delete a sinking fund. Its past expenses stay in the history."""
    if not yes and not click.confirm(f"Delete periodic expense {periodic_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        PeriodicExpenseService(ctx.obj["db"]).delete_periodic_expense(periodic_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted periodic expense {periodic_id}")


@periodic_group.command("fund")
@click.argument("periodic_id", type=int)
@click.argument("amount")
@click.option("--from", "source", type=click.Choice(CATEGORY_CHOICES), default="fixed", show_default=True, help="Category the money comes from")
@click.pass_context
def fund_periodic(ctx, periodic_id: int, amount: str, source: str):
    """Move money from a category into a sinking fund."""
    service = PeriodicExpenseService(ctx.obj["db"], get_settings(ctx))
    cents = amount_or_exit(ctx, amount)

    try:
        periodic = service.require_periodic_expense(periodic_id)
        category = category_or_exit(ctx, periodic.account_id, source)
        new_amount = service.fund_periodic_expense(periodic_id, cents, category.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Moved {money(ctx, cents)} from {category.display_name} to '{periodic.name}' "
        f"({money(ctx, new_amount)} of {money(ctx, periodic.target_amount)})"
    )


@periodic_group.command("list")
@click.option("--account", help="Account name or ID")
@click.pass_context
def list_periodic(ctx, account: str | None):
    """List sinking funds, soonest due first."""
    account_id = resolve_account_or_exit(ctx, account)
    statuses = PeriodicExpenseService(ctx.obj["db"]).list_statuses(account_id)

    if not statuses:
        click.echo("No periodic expenses found.")
        return

    click.echo(f"\n{'ID':>4}  {'Name':20}  {'Saved':>16}  {'Target':>16}  {'Due':10}  Left")
    click.echo("-" * 90)
    for status in statuses:
        periodic = status.expense
        if status.is_overdue:
            left = "overdue"
        else:
            left = f"{status.days_left} days / {status.fortnights_left} fortnights"
        flag = " !" if status.is_urgent else ""
        click.echo(
            f"{periodic.id:>4}  {periodic.name[:20]:20}  {money(ctx, periodic.current_amount):>16}  "
            f"{money(ctx, periodic.target_amount):>16}  {periodic.due_date.isoformat():10}  {left}{flag}"
        )


def register_commands(cli):
    """Register periodic expense commands with main CLI."""
    cli.add_command(periodic_group, name="periodic")
