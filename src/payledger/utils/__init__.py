"""Utility functions for payledger."""

from payledger.utils.date_parser import parse_date
from payledger.utils.money import format_currency, parse_amount

__all__ = ["parse_date", "parse_amount", "format_currency"]
