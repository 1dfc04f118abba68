"""Fixed bill commands."""

import click

from payledger.domain.allocation import fixed_bill_contribution
from payledger.domain.entities import BillFrequency
from payledger.domain.errors import DomainError
from payledger.domain.fixed_bill import FixedBillService
from payledger.utils.fortnight import current_fortnight
from payledger.cli.account_resolution import resolve_account_or_exit
from payledger.cli.error_handling import handle_domain_error
from payledger.cli.parsing import amount_or_exit, money, optional_amount_or_exit

FREQUENCY_CHOICES = [frequency.value for frequency in BillFrequency]


@click.group()
def bill_group():
    """Manage recurring fixed bills."""
    pass


@bill_group.command("add")
@click.argument("name")
@click.argument("amount")
@click.option("--frequency", type=click.Choice(FREQUENCY_CHOICES), default="monthly", show_default=True)
@click.option("--fortnight", type=click.IntRange(1, 2), help="Pay period (1 = 15th-29th, 2 = rest) the whole bill falls in")
@click.option("--icon", help="Optional display icon")
@click.option("--account", help="Account name or ID")
@click.pass_context
def add_bill(
    ctx, name: str, amount: str, frequency: str, fortnight: int | None, icon: str | None, account: str | None
):
    """Create a fixed bill.

    Monthly bills count half in each fortnight unless --fortnight pins them
    to one pay period.

    Examples:
        payledger bill add "Rent" 12000
        payledger bill add "Internet" 1800 --fortnight 2
    """
    account_id = resolve_account_or_exit(ctx, account)
    cents = amount_or_exit(ctx, amount)

    try:
        bill_id = FixedBillService(ctx.obj["db"]).add_fixed_bill(
            account_id, name, cents, frequency=frequency, fortnight=fortnight, icon=icon
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created fixed bill '{name}' (ID: {bill_id}): {money(ctx, cents)} {frequency}")


@bill_group.command("update")
@click.argument("bill_id", type=int)
@click.option("--name", help="New name")
@click.option("--amount", help="New amount")
@click.option("--frequency", type=click.Choice(FREQUENCY_CHOICES), help="New frequency")
@click.option("--fortnight", type=click.IntRange(1, 2), help="Pin to a pay period")
@click.option("--clear-fortnight", is_flag=True, help="Stop pinning to a pay period")
@click.option("--icon", help="New icon")
@click.pass_context
def update_bill(
    ctx,
    bill_id: int,
    name: str | None,
    amount: str | None,
    frequency: str | None,
    fortnight: int | None,
    clear_fortnight: bool,
    icon: str | None,
):
    """Update a fixed bill."""
    if fortnight is not None and clear_fortnight:
        click.echo("Error: --fortnight cannot be combined with --clear-fortnight.", err=True)
        ctx.exit(1)
    cents = optional_amount_or_exit(ctx, amount)

    try:
        FixedBillService(ctx.obj["db"]).update_fixed_bill(
            bill_id,
            name=name,
            amount=cents,
            frequency=frequency,
            fortnight=fortnight,
            icon=icon,
            clear_fortnight=clear_fortnight,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated fixed bill {bill_id}")


@bill_group.command("delete")
@click.argument("bill_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_bill(ctx, bill_id: int, yes: bool):
    """Delete a fixed bill."""
    if not yes and not click.confirm(f"Delete fixed bill {bill_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        FixedBillService(ctx.obj["db"]).delete_fixed_bill(bill_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted fixed bill {bill_id}")


@bill_group.command("list")
@click.option("--fortnight", type=click.IntRange(1, 2), help="Pay period to total (default: current)")
@click.option("--account", help="Account name or ID")
@click.pass_context
def list_bills(ctx, fortnight: int | None, account: str | None):
    """List fixed bills and what each commits this fortnight."""
    account_id = resolve_account_or_exit(ctx, account)
    service = FixedBillService(ctx.obj["db"])
    if fortnight is None:
        fortnight = current_fortnight()

    bills = service.list_fixed_bills(account_id)
    if not bills:
        click.echo("No fixed bills found.")
        return

    click.echo(f"\n{'ID':>4}  {'Bill':20}  {'Amount':>16}  {'Frequency':9}  {'Pinned':6}  {'This fortnight':>16}")
    click.echo("-" * 82)
    for bill in bills:
        pinned = str(bill.fortnight) if bill.fortnight else ""
        label = f"{bill.icon} {bill.name}" if bill.icon else bill.name
        click.echo(
            f"{bill.id:>4}  {label[:20]:20}  {money(ctx, bill.amount):>16}  {bill.frequency.value:9}  "
            f"{pinned:6}  {money(ctx, fixed_bill_contribution(bill, fortnight)):>16}"
        )
    click.echo("-" * 82)
    click.echo(f"Fortnight {fortnight} total: {money(ctx, service.fortnight_total(account_id, fortnight))}")


def register_commands(cli):
    """Register fixed bill commands with main CLI."""
    cli.add_command(bill_group, name="bill")
