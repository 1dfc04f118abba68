"""Expense commands."""

import click

from payledger.domain.entities import ExpenseTarget
from payledger.domain.errors import DomainError
from payledger.domain.expense import ExpenseService
from payledger.domain.summary import SummaryService
from payledger.cli.account_resolution import resolve_account_or_exit
from payledger.cli.date_filters import date_filter_options, period_flags, resolve_cli_date_range
from payledger.cli.error_handling import handle_domain_error
from payledger.cli.parsing import amount_or_exit, date_or_exit, get_settings, money, optional_amount_or_exit

TARGET_CHOICES = [target.value for target in ExpenseTarget]


@click.group()
def expense_group():
    """Record and manage expenses."""
    pass


@expense_group.command("add")
@click.argument("amount")
@click.option("--type", "target", type=click.Choice(TARGET_CHOICES), default="variable", show_default=True, help="What the expense is charged against")
@click.option("--id", "target_id", type=int, help="Goal, periodic expense or loan ID (optional for categories)")
@click.option("--description", default="", help="What was bought")
@click.option("--gas", is_flag=True, help="Pay from the gas budget; no category balance changes")
@click.option("--date", "expense_date", help="Expense date (defaults to today)")
@click.option("--account", help="Account name or ID")
@click.pass_context
def add_expense(
    ctx,
    amount: str,
    target: str,
    target_id: int | None,
    description: str,
    gas: bool,
    expense_date: str | None,
    account: str | None,
):
    """Record an expense and debit its target.

    Examples:
        payledger expense add 300 --type fixed --description "Electricity"
        payledger expense add 1200 --type goal --id 1 --description "Flights"
        payledger expense add 900 --gas --description "Fuel"
    """
    account_id = resolve_account_or_exit(ctx, account)
    cents = amount_or_exit(ctx, amount)
    spent_on = date_or_exit(ctx, expense_date)

    try:
        expense_id = ExpenseService(ctx.obj["db"], get_settings(ctx)).add_expense(
            account_id,
            cents,
            target,
            category_id=target_id,
            description=description,
            is_gas=gas,
            date=spent_on,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    suffix = " from the gas budget" if gas else ""
    click.echo(f"Recorded expense {expense_id}: {money(ctx, cents)} ({target}){suffix}")


@expense_group.command("update")
@click.argument("expense_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--type", "target", type=click.Choice(TARGET_CHOICES), help="New target type")
@click.option("--id", "target_id", type=int, help="New target ID")
@click.option("--description", help="New description")
@click.option("--gas/--no-gas", default=None, help="Charge the gas budget instead of a balance")
@click.option("--date", "expense_date", help="New date")
@click.pass_context
def update_expense(
    ctx,
    expense_id: int,
    amount: str | None,
    target: str | None,
    target_id: int | None,
    description: str | None,
    gas: bool | None,
    expense_date: str | None,
):
    """Edit an expense. The old amount is refunded before the new one is charged.

    Examples:
        payledger expense update 4 --amount 350
        payledger expense update 4 --type savings
    """
    cents = optional_amount_or_exit(ctx, amount)
    new_date = date_or_exit(ctx, expense_date)

    try:
        ExpenseService(ctx.obj["db"], get_settings(ctx)).update_expense(
            expense_id,
            amount=cents,
            category_type=target,
            category_id=target_id,
            description=description,
            is_gas=gas,
            date=new_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated expense {expense_id}")


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_expense(ctx, expense_id: int, yes: bool):
    """Delete an expense and refund its target."""
    if not yes and not click.confirm(f"Delete expense {expense_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        ExpenseService(ctx.obj["db"]).delete_expense(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted expense {expense_id}")


@expense_group.command("list")
@date_filter_options
@click.option("--account", help="Account name or ID")
@click.pass_context
def list_expenses(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_fortnight: bool,
    last_fortnight: bool,
    this_month: bool,
    last_month: bool,
    account: str | None,
):
    """List expenses, newest first, with the name of what each was charged to."""
    account_id = resolve_account_or_exit(ctx, account)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags(this_fortnight, last_fortnight, this_month, last_month),
    )

    lines = SummaryService(ctx.obj["db"]).expense_history(account_id, start_date=start, end_date=end)
    if not lines:
        click.echo("No expenses found.")
        return

    click.echo(f"\n{'ID':>4}  {'Date':10}  {'Charged to':20}  {'Description':24}  {'Amount':>16}")
    click.echo("-" * 84)
    for line in lines:
        expense = line.expense
        target_name = "Gas" if expense.is_gas else line.target_name
        click.echo(
            f"{expense.id:>4}  {expense.date.isoformat():10}  {target_name[:20]:20}  "
            f"{expense.description[:24]:24}  {money(ctx, expense.amount):>16}"
        )


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
