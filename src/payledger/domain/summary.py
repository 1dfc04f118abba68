"""Derived-state projector.

Everything here is recomputed from a ``LedgerSnapshot`` on every read:
totals, the gas sub-ledger, fortnight commitments, the fixed surplus, loan
progress, goal shares and sinking-fund countdowns. Nothing is cached or
written back.
"""

from datetime import date
from typing import Optional

from payledger.database.base import Database
from payledger.domain.allocation import (
    fixed_surplus,
    gas_available,
    gas_expense_total,
    gas_income_total,
    loan_paid_amount,
    suggested_goal_amount,
    total_fixed_bills,
    total_loan_payments,
)
from payledger.domain.entities import (
    BudgetOverview,
    CategorySlug,
    Expense,
    ExpenseLine,
    ExpenseTarget,
    GoalProgress,
    LedgerSnapshot,
    LoanProgress,
)
from payledger.domain.periodic import periodic_status
from payledger.utils.fortnight import current_fortnight

UNKNOWN_TARGET_NAME = "Unknown category"


def category_balance(snapshot: LedgerSnapshot, slug: CategorySlug) -> int:
    for category in snapshot.categories:
        if category.slug is slug:
            return category.balance
    return 0


def resolve_target_name(expense: Expense, snapshot: LedgerSnapshot) -> str:
    """Display name of an expense's target, or a fallback when it was deleted."""
    if expense.category_type.is_category:
        candidates, name_field = snapshot.categories, "display_name"
    elif expense.category_type is ExpenseTarget.GOAL:
        candidates, name_field = snapshot.goals, "name"
    elif expense.category_type is ExpenseTarget.PERIODIC:
        candidates, name_field = snapshot.periodic_expenses, "name"
    else:
        candidates, name_field = snapshot.loans, "name"

    for entity in candidates:
        if entity.id == expense.category_id:
            return getattr(entity, name_field)
    return UNKNOWN_TARGET_NAME


def loan_progress(snapshot: LedgerSnapshot) -> tuple[LoanProgress, ...]:
    return tuple(
        LoanProgress(loan=loan, paid_amount=loan_paid_amount(loan.id, snapshot.expenses))
        for loan in snapshot.loans
    )


def goal_progress(snapshot: LedgerSnapshot) -> tuple[GoalProgress, ...]:
    savings = category_balance(snapshot, CategorySlug.SAVINGS)
    return tuple(
        GoalProgress(goal=goal, suggested_amount=suggested_goal_amount(savings, goal))
        for goal in snapshot.goals
    )


def build_overview(snapshot: LedgerSnapshot, today: Optional[date] = None) -> BudgetOverview:
    """Project a snapshot into the aggregate view shown by ``summary``.

    Args:
        snapshot: Every collection of one account
        today: Reference day for the fortnight and countdowns (defaults to today)

    Returns:
        BudgetOverview
    """
    if today is None:
        today = date.today()

    fortnight = current_fortnight(today)
    bills_total = total_fixed_bills(snapshot.fixed_bills, fortnight)
    loans_total = total_loan_payments(snapshot.loans)
    statuses = sorted(
        (periodic_status(periodic, today) for periodic in snapshot.periodic_expenses),
        key=lambda status: status.expense.due_date,
    )

    return BudgetOverview(
        as_of=today,
        categories=snapshot.categories,
        total_balance=sum(category.balance for category in snapshot.categories),
        gas_income=gas_income_total(snapshot.incomes),
        gas_expenses=gas_expense_total(snapshot.expenses),
        gas_available=gas_available(snapshot.incomes, snapshot.expenses),
        fortnight=fortnight,
        fixed_bills_total=bills_total,
        loans_total=loans_total,
        fixed_surplus=fixed_surplus(
            category_balance(snapshot, CategorySlug.FIXED), bills_total, loans_total
        ),
        loans=loan_progress(snapshot),
        goals=goal_progress(snapshot),
        periodic_expenses=tuple(statuses),
        history=tuple(
            ExpenseLine(expense=expense, target_name=resolve_target_name(expense, snapshot))
            for expense in snapshot.expenses
        ),
    )


class SummaryService:
    """Service for reading a consistent snapshot and projecting it."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def load_snapshot(self, account_id: int) -> LedgerSnapshot:
        """Read every collection of an account inside one transaction."""
        with self.db.transaction():
            return LedgerSnapshot(
                categories=tuple(self.db.list_categories(account_id)),
                goals=tuple(self.db.list_goals(account_id)),
                periodic_expenses=tuple(self.db.list_periodic_expenses(account_id)),
                fixed_bills=tuple(self.db.list_fixed_bills(account_id)),
                loans=tuple(self.db.list_loans(account_id)),
                incomes=tuple(self.db.list_incomes(account_id)),
                expenses=tuple(self.db.list_expenses(account_id)),
            )

    def get_overview(self, account_id: int, today: Optional[date] = None) -> BudgetOverview:
        """Project the account's current state."""
        return build_overview(self.load_snapshot(account_id), today)

    def expense_history(
        self,
        account_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[ExpenseLine]:
        """Expenses in a date range, newest first, with target names resolved."""
        snapshot = self.load_snapshot(account_id)
        return [
            ExpenseLine(expense=expense, target_name=resolve_target_name(expense, snapshot))
            for expense in snapshot.expenses
            if (start_date is None or expense.date >= start_date)
            and (end_date is None or expense.date <= end_date)
        ]
