"""Income commands."""

import click

from payledger.domain.category import CategoryService
from payledger.domain.entities import Distribution
from payledger.domain.errors import DomainError
from payledger.domain.income import IncomeService
from payledger.cli.account_resolution import resolve_account_or_exit
from payledger.cli.date_filters import date_filter_options, period_flags, resolve_cli_date_range
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
def income_group():
    """Record and manage income."""
    pass


@income_group.command("add")
@click.argument("amount")
@click.option("--concept", required=True, help="What the deposit is (e.g., 'Salary')")
@click.option("--fixed", "fixed_share", help="Amount for fixed expenses")
@click.option("--savings", "savings_share", help="Amount for savings")
@click.option("--variable", "variable_share", help="Amount for discretionary spending")
@click.option("--gas", is_flag=True, help="Deposit is gas money")
@click.option("--date", "income_date", help="Deposit date (defaults to today)")
@click.option("--account", help="Account name or ID")
@click.pass_context
def add_income(
    ctx,
    amount: str,
    concept: str,
    fixed_share: str | None,
    savings_share: str | None,
    variable_share: str | None,
    gas: bool,
    income_date: str | None,
    account: str | None,
):
    """Record a paycheck and split it across the categories.

    Give all three shares, or none to split by the account's percentages.

    Examples:
        payledger income add 10000 --concept Salary
        payledger income add 10000 --concept Salary --fixed 5000 --savings 3000 --variable 2000
        payledger income add 1500 --concept "Gas allowance" --gas
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, account)
    cents = amount_or_exit(ctx, amount)
    deposit_date = date_or_exit(ctx, income_date)

    shares = [fixed_share, savings_share, variable_share]
    if any(share is not None for share in shares) and not all(share is not None for share in shares):
        click.echo("Error: Give all of --fixed, --savings and --variable, or none of them.", err=True)
        ctx.exit(1)

    try:
        if fixed_share is not None:
            distribution = Distribution(
                fixed=amount_or_exit(ctx, fixed_share, "fixed share"),
                savings=amount_or_exit(ctx, savings_share, "savings share"),
                variable=amount_or_exit(ctx, variable_share, "variable share"),
            )
            if distribution.total != cents:
                click.echo(
                    f"Error: Shares add up to {money(ctx, distribution.total)}, "
                    f"not {money(ctx, cents)}.",
                    err=True,
                )
                ctx.exit(1)
        else:
            distribution = CategoryService(db).default_distribution(account_id, cents)

        income_id = IncomeService(db, get_settings(ctx)).record_income(
            account_id,
            cents,
            concept,
            distribution,
            includes_gas=gas,
            date=deposit_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded income {income_id}: {money(ctx, cents)} ({concept})")
    if gas:
        click.echo(f"Gas deposit routed by the '{get_settings(ctx).gas_policy.value}' policy")
    else:
        click.echo(
            f"  fixed {money(ctx, distribution.fixed)} | savings {money(ctx, distribution.savings)}"
            f" | variable {money(ctx, distribution.variable)}"
        )


@income_group.command("external")
@click.argument("amount")
@click.option("--category", type=click.Choice(CATEGORY_CHOICES), required=True, help="Category credited")
@click.option("--concept", required=True, help="Where the money came from")
@click.option("--date", "income_date", help="Deposit date (defaults to today)")
@click.option("--account", help="Account name or ID")
@click.pass_context
def add_external_income(
    ctx, amount: str, category: str, concept: str, income_date: str | None, account: str | None
):
    """Add money straight to one category without splitting it.

    Examples:
        payledger income external 800 --category savings --concept "Gift"
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, account)
    cents = amount_or_exit(ctx, amount)
    deposit_date = date_or_exit(ctx, income_date)
    target = category_or_exit(ctx, account_id, category)

    try:
        income_id = IncomeService(db, get_settings(ctx)).record_external_income(
            account_id, cents, target.id, concept, date=deposit_date
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded income {income_id}: {money(ctx, cents)} to {target.display_name}")


@income_group.command("list")
@date_filter_options
@click.option("--account", help="Account name or ID")
@click.pass_context
def list_incomes(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_fortnight: bool,
    last_fortnight: bool,
    this_month: bool,
    last_month: bool,
    account: str | None,
):
    """List income records, newest first."""
    account_id = resolve_account_or_exit(ctx, account)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags(this_fortnight, last_fortnight, this_month, last_month),
    )

    incomes = IncomeService(ctx.obj["db"]).list_incomes(account_id, start_date=start, end_date=end)
    if not incomes:
        click.echo("No income found.")
        return

    click.echo(f"\n{'ID':>4}  {'Date':10}  {'Concept':24}  {'Amount':>16}  Gas")
    click.echo("-" * 64)
    for income in incomes:
        gas = "yes" if income.includes_gas else ""
        click.echo(
            f"{income.id:>4}  {income.date.isoformat():10}  {income.concept[:24]:24}  "
            f"{money(ctx, income.amount):>16}  {gas}"
        )


@income_group.command("update")
@click.argument("income_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--concept", help="New concept")
@click.option("--date", "income_date", help="New date")
@click.pass_context
def update_income(ctx, income_id: int, amount: str | None, concept: str | None, income_date: str | None):
    """Edit an income record. Category balances are NOT adjusted."""
    cents = optional_amount_or_exit(ctx, amount)
    new_date = date_or_exit(ctx, income_date)

    try:
        notice = IncomeService(ctx.obj["db"]).update_income(
            income_id, date=new_date, concept=concept, amount=cents
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated income {income_id}")
    click.echo(f"Note: {notice}")


@income_group.command("delete")
@click.argument("income_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_income(ctx, income_id: int, yes: bool):
    """Delete an income record. Category balances are NOT adjusted."""
    if not yes and not click.confirm(f"Delete income {income_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        notice = IncomeService(ctx.obj["db"]).delete_income(income_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted income {income_id}")
    click.echo(f"Note: {notice}")


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
