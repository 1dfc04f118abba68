"""Account management commands."""

import click

from payledger.domain.account import AccountService
from payledger.domain.category import CategoryService
from payledger.domain.errors import DomainError
from payledger.cli.account_resolution import resolve_account_or_exit
from payledger.cli.error_handling import handle_domain_error
from payledger.cli.parsing import money


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.pass_context
def create_account(ctx, name: str):
    """Create a new account with its fixed, savings and discretionary categories.

    Examples:
        payledger account create "Household"
    """
    service = AccountService(ctx.obj["db"])

    try:
        account_id = service.create_account(name=name)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{name.strip()}' (ID: {account_id})")
    for category in CategoryService(ctx.obj["db"]).list_categories(account_id):
        click.echo(f"  {category.display_name}: {category.allocation_percentage}%")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)
    category_service = CategoryService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        total = sum(cat.balance for cat in category_service.list_categories(acc.id))
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Balance: {money(ctx, total)}")


@account_group.command("allocate")
@click.option("--fixed", "fixed_percentage", type=int, required=True, help="Percentage of each paycheck for fixed expenses")
@click.option("--account", help="Account name or ID")
@click.pass_context
def allocate(ctx, fixed_percentage: int, account: str | None):
    """Change the default split used when an income has no explicit shares.

    The rest is divided 60/40 between savings and discretionary.

    Examples:
        payledger --account Household account allocate --fixed 60
    """
    account_id = resolve_account_or_exit(ctx, account)
    try:
        fixed, savings, variable = CategoryService(ctx.obj["db"]).set_fixed_percentage(
            account_id, fixed_percentage
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Allocation set to fixed {fixed}% / savings {savings}% / discretionary {variable}%")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
