"""Domain layer for payledger."""

import importlib

# Services load lazily: the record store imports domain.entities, and the
# services import the record store.
_SERVICES = {
    "AccountService": "payledger.domain.account",
    "CategoryService": "payledger.domain.category",
    "IncomeService": "payledger.domain.income",
    "ExpenseService": "payledger.domain.expense",
    "GoalService": "payledger.domain.goal",
    "PeriodicExpenseService": "payledger.domain.periodic",
    "FixedBillService": "payledger.domain.fixed_bill",
    "LoanService": "payledger.domain.loan",
    "SummaryService": "payledger.domain.summary",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
