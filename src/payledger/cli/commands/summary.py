"""Budget summary command."""

import click

from payledger.domain.summary import SummaryService
from payledger.utils.money import format_compact_currency
from payledger.cli.account_resolution import resolve_account_or_exit
from payledger.cli.parsing import date_or_exit, get_settings, money


@click.command("summary")
@click.option("--date", "as_of", help="Day to compute the fortnight and countdowns for (defaults to today)")
@click.option("--compact", is_flag=True, help="Abbreviate large amounts (15.4K, 1.2M)")
@click.option("--account", help="Account name or ID")
@click.pass_context
def summary(ctx, as_of: str | None, compact: bool, account: str | None):
    """Show balances, the gas budget, this fortnight's commitments and surplus.

    Examples:
        payledger --account Household summary
        payledger summary --account 1 --date 2025-03-20
    """
    account_id = resolve_account_or_exit(ctx, account)
    today = date_or_exit(ctx, as_of)
    overview = SummaryService(ctx.obj["db"]).get_overview(account_id, today=today)

    symbol = get_settings(ctx).currency_symbol

    def fmt(cents: int) -> str:
        if compact:
            return format_compact_currency(cents, symbol=symbol)
        return money(ctx, cents)

    click.echo(f"\nBudget as of {overview.as_of.isoformat()} (fortnight {overview.fortnight})")
    click.echo("=" * 60)
    for category in overview.categories:
        click.echo(
            f"{category.display_name:24} {category.allocation_percentage:>3}%  {fmt(category.balance):>20}"
        )
    click.echo("-" * 60)
    click.echo(f"{'Total':29} {fmt(overview.total_balance):>20}")

    click.echo("\nGas")
    click.echo(f"  Income:    {fmt(overview.gas_income)}")
    click.echo(f"  Spent:     {fmt(overview.gas_expenses)}")
    click.echo(f"  Available: {fmt(overview.gas_available)}")

    click.echo(f"\nFortnight {overview.fortnight} commitments")
    click.echo(f"  Fixed bills:   {fmt(overview.fixed_bills_total)}")
    click.echo(f"  Loan payments: {fmt(overview.loans_total)}")
    click.echo(f"  Fixed surplus: {fmt(overview.fixed_surplus)}")

    if overview.goals:
        click.echo("\nGoals")
        for progress in overview.goals:
            goal = progress.goal
            click.echo(
                f"  {goal.name:20} {fmt(goal.current_amount)} / {fmt(goal.target_amount)} "
                f"({progress.percent_complete:.0f}%)"
            )

    if overview.periodic_expenses:
        click.echo("\nPeriodic expenses")
        for status in overview.periodic_expenses:
            periodic = status.expense
            when = "overdue" if status.is_overdue else f"{status.fortnights_left} fortnights"
            flag = "  URGENT" if status.is_urgent else ""
            click.echo(
                f"  {periodic.name:20} {fmt(periodic.current_amount)} / {fmt(periodic.target_amount)} "
                f"({when}){flag}"
            )

    if overview.loans:
        click.echo("\nLoans")
        for progress in overview.loans:
            loan = progress.loan
            click.echo(
                f"  {loan.name:20} {fmt(progress.paid_amount)} / {fmt(loan.total_amount)} "
                f"({progress.percent_paid:.0f}%, {progress.fortnights_left} fortnights left, {loan.status.value})"
            )


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
