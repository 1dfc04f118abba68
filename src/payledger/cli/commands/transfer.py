"""Transfer command."""

import click

from payledger.domain.category import CategoryService
from payledger.domain.errors import DomainError
from payledger.cli.account_resolution import resolve_account_or_exit
from payledger.cli.error_handling import handle_domain_error
from payledger.cli.parsing import CATEGORY_CHOICES, amount_or_exit, category_or_exit, get_settings, money


@click.command("transfer")
@click.argument("amount")
@click.option("--from", "source", type=click.Choice(CATEGORY_CHOICES), required=True, help="Category debited")
@click.option("--to", "destination", type=click.Choice(CATEGORY_CHOICES), required=True, help="Category credited")
@click.option("--account", help="Account name or ID")
@click.pass_context
def transfer(ctx, amount: str, source: str, destination: str, account: str | None):
    """Move money between categories.

    Examples:
        payledger transfer 500 --from variable --to savings
    """
    account_id = resolve_account_or_exit(ctx, account)
    cents = amount_or_exit(ctx, amount)
    from_category = category_or_exit(ctx, account_id, source)
    to_category = category_or_exit(ctx, account_id, destination)

    service = CategoryService(ctx.obj["db"], get_settings(ctx))
    try:
        service.transfer(account_id, from_category.id, to_category.id, cents)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Transferred {money(ctx, cents)} from {from_category.display_name} "
        f"to {to_category.display_name}"
    )
    for category in service.list_categories(account_id):
        click.echo(f"  {category.display_name}: {money(ctx, category.balance)}")


def register_commands(cli):
    """Register transfer command with main CLI."""
    cli.add_command(transfer)
