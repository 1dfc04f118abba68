"""Savings goal commands."""

import click

from payledger.domain.errors import DomainError
from payledger.domain.goal import GoalService
from payledger.domain.summary import SummaryService
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


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("add")
@click.argument("name")
@click.argument("target")
@click.option("--percentage", type=int, default=0, help="Share of the savings category planned for this goal")
@click.option("--due", help="Optional deadline")
@click.option("--account", help="Account name or ID")
@click.pass_context
def add_goal(ctx, name: str, target: str, percentage: int, due: str | None, account: str | None):
    """Create a savings goal.

    Examples:
        payledger goal add "Vacation" 25000 --percentage 40 --due 2025-12-01
    """
    account_id = resolve_account_or_exit(ctx, account)
    target_cents = amount_or_exit(ctx, target, "target")
    due_date = date_or_exit(ctx, due, "due date")

    try:
        goal_id = GoalService(ctx.obj["db"]).add_goal(
            account_id, name, target_cents, allocation_percentage=percentage, due_date=due_date
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created goal '{name}' (ID: {goal_id}) with target {money(ctx, target_cents)}")


@goal_group.command("update")
@click.argument("goal_id", type=int)
@click.option("--name", help="New name")
@click.option("--target", help="New target amount")
@click.option("--percentage", type=int, help="New share of savings")
@click.option("--due", help="New deadline")
@click.option("--clear-due", is_flag=True, help="Remove the deadline")
@click.pass_context
def update_goal(
    ctx,
    goal_id: int,
    name: str | None,
    target: str | None,
    percentage: int | None,
    due: str | None,
    clear_due: bool,
):
    """Update a savings goal."""
    if due is not None and clear_due:
        click.echo("Error: --due cannot be combined with --clear-due.", err=True)
        ctx.exit(1)
    target_cents = optional_amount_or_exit(ctx, target, "target")
    due_date = date_or_exit(ctx, due, "due date")

    try:
        GoalService(ctx.obj["db"]).update_goal(
            goal_id,
            name=name,
            target_amount=target_cents,
            allocation_percentage=percentage,
            due_date=due_date,
            clear_due_date=clear_due,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated goal {goal_id}")


@goal_group.command("delete")
@click.argument("goal_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_goal(ctx, goal_id: int, yes: bool):
    """Delete a savings goal. Its past expenses stay in the history."""
    if not yes and not click.confirm(f"Delete goal {goal_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        GoalService(ctx.obj["db"]).delete_goal(goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted goal {goal_id}")


@goal_group.command("fund")
@click.argument("goal_id", type=int)
@click.argument("amount")
@click.option("--from", "source", type=click.Choice(CATEGORY_CHOICES), default="savings", show_default=True, help="Category the money comes from")
@click.pass_context
def fund_goal(ctx, goal_id: int, amount: str, source: str):
    """Move money from a category into a goal.

    Examples:
        payledger goal fund 1 2000
        payledger goal fund 1 500 --from variable
    """
    service = GoalService(ctx.obj["db"], get_settings(ctx))
    cents = amount_or_exit(ctx, amount)

    try:
        goal = service.require_goal(goal_id)
        category = category_or_exit(ctx, goal.account_id, source)
        new_amount = service.fund_goal(goal_id, cents, category.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Moved {money(ctx, cents)} from {category.display_name} to '{goal.name}' "
        f"({money(ctx, new_amount)} of {money(ctx, goal.target_amount)})"
    )


@goal_group.command("list")
@click.option("--account", help="Account name or ID")
@click.pass_context
def list_goals(ctx, account: str | None):
    """List savings goals with their progress."""
    account_id = resolve_account_or_exit(ctx, account)
    overview = SummaryService(ctx.obj["db"]).get_overview(account_id)

    if not overview.goals:
        click.echo("No goals found.")
        return

    click.echo(f"\n{'ID':>4}  {'Goal':20}  {'Saved':>16}  {'Target':>16}  {'%':>6}  {'Suggested':>16}  Due")
    click.echo("-" * 100)
    for progress in overview.goals:
        goal = progress.goal
        due = goal.due_date.isoformat() if goal.due_date else ""
        click.echo(
            f"{goal.id:>4}  {goal.name[:20]:20}  {money(ctx, goal.current_amount):>16}  "
            f"{money(ctx, goal.target_amount):>16}  {progress.percent_complete:>5.1f}%  "
            f"{money(ctx, progress.suggested_amount):>16}  {due}"
        )


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
