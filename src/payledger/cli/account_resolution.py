"""CLI helpers for account resolution."""

from __future__ import annotations

import click

from payledger.domain.account import AccountService
from payledger.domain.errors import DomainError
from payledger.utils.account_resolver import resolve_account
from payledger.cli.error_handling import handle_domain_error


def resolve_account_or_exit(ctx: click.Context, account: str | int | None = None) -> int:
    """Resolve account name or ID, or exit with a CLI error.

    Falls back to the group-level ``--account`` option (or PAYLEDGER_ACCOUNT)
    when no account is given.
    """
    if account is None:
        account = ctx.obj.get("account")
    try:
        return resolve_account(AccountService(ctx.obj["db"]), account)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
