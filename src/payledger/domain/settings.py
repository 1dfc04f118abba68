"""Behaviour switches shared by the services."""

from dataclasses import dataclass

from payledger.domain.entities import GasIncomePolicy
from payledger.utils.money import DEFAULT_CURRENCY_SYMBOL


@dataclass(frozen=True)
class LedgerSettings:
    """Service settings; see ``payledger.config.load_settings`` for the environment."""

    gas_policy: GasIncomePolicy = GasIncomePolicy.ISOLATED
    enforce_affordability: bool = False
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    log_level: str = "WARNING"
