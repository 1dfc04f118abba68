"""Loan commands."""

import click

from payledger.domain.entities import DurationType, LoanStatus
from payledger.domain.errors import DomainError
from payledger.domain.loan import DEFAULT_PAYMENT_DESCRIPTION, LoanService
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

UNIT_CHOICES = [unit.value for unit in DurationType]
STATUS_CHOICES = [status.value for status in LoanStatus]


@click.group()
def loan_group():
    """Manage loans and their payments."""
    pass


@loan_group.command("add")
@click.argument("name")
@click.argument("total")
@click.option("--duration", type=int, required=True, help="Length of the loan")
@click.option("--unit", type=click.Choice(UNIT_CHOICES), default="months", show_default=True)
@click.option("--start", help="Start date (defaults to today)")
@click.option("--account", help="Account name or ID")
@click.pass_context
def add_loan(ctx, name: str, total: str, duration: int, unit: str, start: str | None, account: str | None):
    """Create a loan repaid in equal fortnightly installments.

    Examples:
        payledger loan add "Car" 60000 --duration 12 --unit months
    """
    account_id = resolve_account_or_exit(ctx, account)
    total_cents = amount_or_exit(ctx, total, "total")
    start_date = date_or_exit(ctx, start, "start date")
    service = LoanService(ctx.obj["db"])

    try:
        loan_id = service.add_loan(account_id, name, total_cents, duration, unit, start_date=start_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    loan = service.require_loan(loan_id)
    click.echo(
        f"Created loan '{name}' (ID: {loan_id}): {money(ctx, loan.payment_per_fortnight)} "
        f"per fortnight over {loan.total_fortnights} fortnights"
    )


@loan_group.command("update")
@click.argument("loan_id", type=int)
@click.option("--name", help="New name")
@click.option("--total", help="New total amount")
@click.option("--duration", type=int, help="New length")
@click.option("--unit", type=click.Choice(UNIT_CHOICES), help="New duration unit")
@click.option("--start", help="New start date")
@click.pass_context
def update_loan(
    ctx,
    loan_id: int,
    name: str | None,
    total: str | None,
    duration: int | None,
    unit: str | None,
    start: str | None,
):
    """Update loan terms."""
    total_cents = optional_amount_or_exit(ctx, total, "total")
    start_date = date_or_exit(ctx, start, "start date")

    try:
        LoanService(ctx.obj["db"]).update_loan(
            loan_id,
            name=name,
            total_amount=total_cents,
            duration_value=duration,
            duration_type=unit,
            start_date=start_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated loan {loan_id}")


@loan_group.command("delete")
@click.argument("loan_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_loan(ctx, loan_id: int, yes: bool):
    """Delete a loan. Its payments stay in the history."""
    if not yes and not click.confirm(f"Delete loan {loan_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        LoanService(ctx.obj["db"]).delete_loan(loan_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted loan {loan_id}")


@loan_group.command("pay")
@click.argument("loan_id", type=int)
@click.argument("amount")
@click.option("--from", "source", type=click.Choice(CATEGORY_CHOICES), default="fixed", show_default=True, help="Category the payment comes from")
@click.option("--date", "paid_on", help="Payment date (defaults to today)")
@click.option("--description", default=DEFAULT_PAYMENT_DESCRIPTION, show_default=True)
@click.pass_context
def pay_loan(ctx, loan_id: int, amount: str, source: str, paid_on: str | None, description: str):
    """Record a loan payment.

    Examples:
        payledger loan pay 1 2500
    """
    service = LoanService(ctx.obj["db"], get_settings(ctx))
    cents = amount_or_exit(ctx, amount)
    payment_date = date_or_exit(ctx, paid_on)

    try:
        loan = service.require_loan(loan_id)
        category = category_or_exit(ctx, loan.account_id, source)
        service.pay_loan(loan_id, cents, category.id, date=payment_date, description=description)
        progress = service.get_progress(loan_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Paid {money(ctx, cents)} on '{loan.name}' from {category.display_name}")
    click.echo(
        f"  {money(ctx, progress.paid_amount)} of {money(ctx, loan.total_amount)} paid "
        f"({progress.percent_paid:.1f}%), {money(ctx, progress.remaining_amount)} left"
    )


@loan_group.command("status")
@click.argument("loan_id", type=int)
@click.argument("status", type=click.Choice(STATUS_CHOICES))
@click.pass_context
def set_status(ctx, loan_id: int, status: str):
    """Mark a loan active or paid."""
    try:
        LoanService(ctx.obj["db"]).set_status(loan_id, status)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Loan {loan_id} marked {status}")


@loan_group.command("list")
@click.option("--account", help="Account name or ID")
@click.pass_context
def list_loans(ctx, account: str | None):
    """List loans with their repayment progress."""
    account_id = resolve_account_or_exit(ctx, account)
    overview = SummaryService(ctx.obj["db"]).get_overview(account_id)

    if not overview.loans:
        click.echo("No loans found.")
        return

    click.echo(f"\n{'ID':>4}  {'Loan':20}  {'Per fortnight':>16}  {'Paid':>16}  {'Remaining':>16}  {'%':>6}  Status")
    click.echo("-" * 100)
    for progress in overview.loans:
        loan = progress.loan
        click.echo(
            f"{loan.id:>4}  {loan.name[:20]:20}  {money(ctx, loan.payment_per_fortnight):>16}  "
            f"{money(ctx, progress.paid_amount):>16}  {money(ctx, progress.remaining_amount):>16}  "
            f"{progress.percent_paid:>5.1f}%  {loan.status.value}"
        )


def register_commands(cli):
    """Register loan commands with main CLI."""
    cli.add_command(loan_group, name="loan")
