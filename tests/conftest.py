"""Shared pytest fixtures for payledger tests."""

import logging
import os
import tempfile

import pytest
import structlog

from payledger.database.factories import create_sqlite_database
from payledger.domain.account import AccountService
from payledger.domain.category import CategoryService
from payledger.domain.entities import CategorySlug, Distribution
from payledger.domain.expense import ExpenseService
from payledger.domain.fixed_bill import FixedBillService
from payledger.domain.goal import GoalService
from payledger.domain.income import IncomeService
from payledger.domain.loan import LoanService
from payledger.domain.periodic import PeriodicExpenseService
from payledger.domain.summary import SummaryService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the logging configuration a CLI invocation installs."""
    yield
    structlog.reset_defaults()
    logging.getLogger("payledger").handlers.clear()


@pytest.fixture
def account_service(temp_db):
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    return CategoryService(temp_db)


@pytest.fixture
def income_service(temp_db):
    return IncomeService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    return ExpenseService(temp_db)


@pytest.fixture
def goal_service(temp_db):
    return GoalService(temp_db)


@pytest.fixture
def periodic_service(temp_db):
    return PeriodicExpenseService(temp_db)


@pytest.fixture
def bill_service(temp_db):
    return FixedBillService(temp_db)


@pytest.fixture
def loan_service(temp_db):
    return LoanService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    return SummaryService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account (with its three empty categories)."""
    account_id = account_service.create_account(name="Test Account")
    return account_service.get_account(account_id)


@pytest.fixture
def categories(temp_db, sample_account):
    """Map each slug to the sample account's category ID."""
    return {
        category.slug: category.id
        for category in temp_db.list_categories(sample_account.id)
    }


@pytest.fixture
def funded_account(income_service, sample_account):
    """Sample account after a 10000 paycheck split 5000/3000/2000."""
    income_service.record_income(
        sample_account.id,
        10000,
        "Salary",
        Distribution(fixed=5000, savings=3000, variable=2000),
    )
    return sample_account


@pytest.fixture
def balances(temp_db):
    """Return a function reading an account's balances keyed by slug."""

    def read(account_id: int) -> dict[CategorySlug, int]:
        return {cat.slug: cat.balance for cat in temp_db.list_categories(account_id)}

    return read


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
