"""Runtime settings read from the environment."""

import os
from typing import Mapping, Optional

from payledger.domain.entities import GasIncomePolicy
from payledger.domain.errors import ValidationError
from payledger.domain.settings import LedgerSettings

ACCOUNT_ENV_VAR = "PAYLEDGER_ACCOUNT"
GAS_POLICY_ENV_VAR = "PAYLEDGER_GAS_POLICY"
ENFORCE_AFFORDABILITY_ENV_VAR = "PAYLEDGER_ENFORCE_AFFORDABILITY"
CURRENCY_SYMBOL_ENV_VAR = "PAYLEDGER_CURRENCY_SYMBOL"
LOG_LEVEL_ENV_VAR = "PAYLEDGER_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def parse_bool(value: str) -> bool:
    """Parse an environment flag such as ``1``, ``true`` or ``off``."""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValidationError(f"Invalid boolean value '{value}'")


def parse_gas_policy(value: str) -> GasIncomePolicy:
    try:
        return GasIncomePolicy(value.strip().lower())
    except ValueError:
        choices = ", ".join(policy.value for policy in GasIncomePolicy)
        raise ValidationError(f"Invalid gas policy '{value}'. Choose one of: {choices}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> LedgerSettings:
    """Build settings from environment variables, falling back to defaults.

    Args:
        environ: Mapping to read instead of ``os.environ``

    Raises:
        ValidationError: If a variable holds an unusable value
    """
    if environ is None:
        environ = os.environ

    defaults = LedgerSettings()
    log_level = environ.get(LOG_LEVEL_ENV_VAR, defaults.log_level).strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValidationError(f"Invalid log level '{log_level}'")

    return LedgerSettings(
        gas_policy=parse_gas_policy(environ.get(GAS_POLICY_ENV_VAR, defaults.gas_policy.value)),
        enforce_affordability=parse_bool(environ.get(ENFORCE_AFFORDABILITY_ENV_VAR, "false")),
        currency_symbol=environ.get(CURRENCY_SYMBOL_ENV_VAR, defaults.currency_symbol),
        log_level=log_level,
    )
