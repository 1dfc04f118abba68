"""Ledger reset command."""

import click

from payledger.domain.account import AccountService
from payledger.domain.errors import DomainError
from payledger.cli.account_resolution import resolve_account_or_exit
from payledger.cli.error_handling import handle_domain_error


@click.command("reset")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.option("--account", help="Account name or ID")
@click.pass_context
def reset(ctx, yes: bool, account: str | None):
    """Delete every income, expense, goal, periodic expense, bill and loan.

    Category balances go back to zero. This cannot be undone.
    """
    account_id = resolve_account_or_exit(ctx, account)
    service = AccountService(ctx.obj["db"])
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"This permanently erases all data of account '{account_obj.name}'. Continue?"
    ):
        click.echo("Reset cancelled.")
        return

    try:
        deleted = service.reset_all_data(account_id, confirm=True)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Reset account '{account_obj.name}'")
    for collection, count in deleted.items():
        click.echo(f"  {collection.replace('_', ' ')}: {count} deleted")


def register_commands(cli):
    """Register reset command with main CLI."""
    cli.add_command(reset)
