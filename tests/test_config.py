"""Tests for settings loaded from the environment and logging setup."""

import logging

import pytest
import structlog

from payledger.config import (
    CURRENCY_SYMBOL_ENV_VAR,
    ENFORCE_AFFORDABILITY_ENV_VAR,
    GAS_POLICY_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    load_settings,
    parse_bool,
)
from payledger.domain.entities import GasIncomePolicy
from payledger.domain.errors import ValidationError
from payledger.domain.settings import LedgerSettings
from payledger.logging_config import ROOT_LOGGER_NAME, configure_logging


def test_defaults_from_empty_environment():
    assert load_settings({}) == LedgerSettings()


def test_all_variables():
    settings = load_settings(
        {
            GAS_POLICY_ENV_VAR: "FIXED",
            ENFORCE_AFFORDABILITY_ENV_VAR: "yes",
            CURRENCY_SYMBOL_ENV_VAR: "$",
            LOG_LEVEL_ENV_VAR: "debug",
        }
    )

    assert settings.gas_policy is GasIncomePolicy.FIXED
    assert settings.enforce_affordability is True
    assert settings.currency_symbol == "$"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "value,expected",
    [("1", True), ("True", True), ("on", True), ("0", False), ("off", False), ("", False)],
)
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


@pytest.mark.parametrize(
    "environ",
    [
        {GAS_POLICY_ENV_VAR: "split"},
        {ENFORCE_AFFORDABILITY_ENV_VAR: "maybe"},
        {LOG_LEVEL_ENV_VAR: "LOUD"},
    ],
)
def test_invalid_values(environ):
    with pytest.raises(ValidationError):
        load_settings(environ)


def test_configure_logging_emits_key_value_lines(capsys):
    configure_logging("INFO")
    structlog.get_logger("payledger.test").info("ledger_command_applied", account_id=1)

    err = capsys.readouterr().err
    assert "event='ledger_command_applied'" in err
    assert "account_id=1" in err


def test_configure_logging_filters_by_level(capsys):
    configure_logging("WARNING")
    structlog.get_logger("payledger.test").info("quiet")

    assert capsys.readouterr().err == ""
    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING
