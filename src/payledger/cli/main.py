"""Main CLI entry point."""

import dataclasses

import click

from payledger.config import (
    ACCOUNT_ENV_VAR,
    CURRENCY_SYMBOL_ENV_VAR,
    ENFORCE_AFFORDABILITY_ENV_VAR,
    GAS_POLICY_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    LOG_LEVELS,
    load_settings,
    parse_gas_policy,
)
from payledger.database.factories import DB_PATH_ENV_VAR, create_sqlite_database
from payledger.domain.entities import GasIncomePolicy
from payledger.domain.errors import DomainError
from payledger.logging_config import configure_logging
from payledger.cli.error_handling import handle_domain_error

# Import and register all commands at module level
from payledger.cli.commands import (
    account,
    income,
    transfer,
    expense,
    goal,
    periodic,
    bill,
    loan,
    summary,
    reset,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--account",
    help="Account name or ID used by ledger commands",
    envvar=ACCOUNT_ENV_VAR,
)
@click.option(
    "--gas-policy",
    type=click.Choice([policy.value for policy in GasIncomePolicy], case_sensitive=False),
    help="Where gas deposits go: isolated (gas sub-ledger only) or fixed category",
    envvar=GAS_POLICY_ENV_VAR,
)
@click.option(
    "--enforce-affordability/--no-enforce-affordability",
    default=None,
    help="Reject spends larger than the source balance",
    envvar=ENFORCE_AFFORDABILITY_ENV_VAR,
)
@click.option(
    "--currency-symbol",
    help="Symbol shown before amounts (default RD$)",
    envvar=CURRENCY_SYMBOL_ENV_VAR,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log verbosity (default WARNING)",
    envvar=LOG_LEVEL_ENV_VAR,
)
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    account: str | None,
    gas_policy: str | None,
    enforce_affordability: bool | None,
    currency_symbol: str | None,
    log_level: str | None,
):
    """Payledger - paycheck budgeting ledger.

    Split every paycheck across fixed, savings and discretionary buckets,
    fund goals and sinking funds, pay down loans and see what is left this
    fortnight.
    """
    ctx.ensure_object(dict)

    try:
        settings = load_settings()
        overrides = {}
        if gas_policy is not None:
            overrides["gas_policy"] = parse_gas_policy(gas_policy)
        if enforce_affordability is not None:
            overrides["enforce_affordability"] = enforce_affordability
        if currency_symbol is not None:
            overrides["currency_symbol"] = currency_symbol
        if log_level is not None:
            overrides["log_level"] = log_level.upper()
        settings = dataclasses.replace(settings, **overrides)
    except DomainError as e:
        handle_domain_error(ctx, e)

    configure_logging(settings.log_level)
    ctx.obj["settings"] = settings
    ctx.obj["account"] = account

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
income.register_commands(cli)
transfer.register_commands(cli)
expense.register_commands(cli)
goal.register_commands(cli)
periodic.register_commands(cli)
bill.register_commands(cli)
loan.register_commands(cli)
summary.register_commands(cli)
reset.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
