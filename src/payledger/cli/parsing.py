"""CLI helpers for parsing user input and formatting money."""

from datetime import date
from typing import Optional

import click

from payledger.domain.category import CategoryService
from payledger.domain.entities import Category
from payledger.domain.errors import DomainError
from payledger.domain.settings import LedgerSettings
from payledger.utils.date_parser import parse_date
from payledger.utils.money import format_currency, parse_amount
from payledger.cli.error_handling import handle_domain_error

CATEGORY_CHOICES = ["fixed", "savings", "variable"]


def get_settings(ctx: click.Context) -> LedgerSettings:
    return ctx.obj.get("settings") or LedgerSettings()


def money(ctx: click.Context, cents: int) -> str:
    """Format cents with the configured currency symbol."""
    return format_currency(cents, show_decimals=True, symbol=get_settings(ctx).currency_symbol)


def amount_or_exit(ctx: click.Context, value: str, label: str = "amount") -> int:
    """Parse an amount into cents, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except DomainError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def optional_amount_or_exit(ctx: click.Context, value: Optional[str], label: str = "amount") -> Optional[int]:
    if value is None:
        return None
    return amount_or_exit(ctx, value, label)


def date_or_exit(ctx: click.Context, value: Optional[str], label: str = "date") -> Optional[date]:
    """Parse a date, or exit with a CLI error. ``None`` passes through."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except DomainError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def category_or_exit(ctx: click.Context, account_id: int, slug: str) -> Category:
    """Look up one of the account's categories by slug, or exit with a CLI error."""
    try:
        return CategoryService(ctx.obj["db"]).get_category_by_slug(account_id, slug)
    except DomainError as e:
        handle_domain_error(ctx, e)
