"""Domain model entities for payledger.

These are pure data classes representing budgeting concepts, independent of
database schema. Every monetary field is an integer number of minor currency
units (cents); conversion to and from display strings lives in
``payledger.utils.money``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Optional


class CategorySlug(str, Enum):
    """The three top-level budget buckets."""

    FIXED = "fixed"
    SAVINGS = "savings"
    VARIABLE = "variable"


class ExpenseTarget(str, Enum):
    """Kind of entity an expense is charged against."""

    FIXED = "fixed"
    SAVINGS = "savings"
    VARIABLE = "variable"
    GOAL = "goal"
    PERIODIC = "periodic"
    LOAN = "loan"

    @property
    def is_category(self) -> bool:
        return self in (ExpenseTarget.FIXED, ExpenseTarget.SAVINGS, ExpenseTarget.VARIABLE)


class PeriodicFrequency(str, Enum):
    """How often a sinking fund comes due."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class BillFrequency(str, Enum):
    """How often a fixed bill is paid."""

    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"


class DurationType(str, Enum):
    """Unit of a loan's duration."""

    FORTNIGHTS = "fortnights"
    MONTHS = "months"


class LoanStatus(str, Enum):
    """Repayment state of a loan."""

    ACTIVE = "active"
    PAID = "paid"


class GasIncomePolicy(str, Enum):
    """Routing of deposits flagged as including gas money.

    ISOLATED keeps gas deposits out of every category; they only feed the
    gas sub-ledger. FIXED routes the whole deposit into the fixed category.
    """

    ISOLATED = "isolated"
    FIXED = "fixed"


@dataclass(frozen=True)
class Account:
    """Ledger owner; every other record is scoped to one account."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Top-level budget bucket with a running balance."""

    id: int
    account_id: int
    slug: CategorySlug
    display_name: str
    allocation_percentage: int
    balance: int
    created_at: datetime


@dataclass(frozen=True)
class Goal:
    """Savings goal funded directly and spent through goal expenses."""

    id: int
    account_id: int
    name: str
    target_amount: int
    current_amount: int
    allocation_percentage: int
    due_date: Optional[date]
    created_at: datetime


@dataclass(frozen=True)
class PeriodicExpense:
    """Sinking fund for a large, infrequent cost."""

    id: int
    account_id: int
    name: str
    target_amount: int
    current_amount: int
    due_date: date
    frequency: PeriodicFrequency
    created_at: datetime


@dataclass(frozen=True)
class FixedBill:
    """Recurring obligation charged against the fixed category's ceiling."""

    id: int
    account_id: int
    name: str
    amount: int
    frequency: BillFrequency
    fortnight: Optional[int]
    icon: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Loan:
    """Immutable amortization terms of a loan.

    Repayment progress is never stored here; see ``LoanProgress``.
    """

    id: int
    account_id: int
    name: str
    total_amount: int
    duration_value: int
    duration_type: DurationType
    start_date: date
    status: LoanStatus
    created_at: datetime

    @property
    def total_fortnights(self) -> int:
        from payledger.domain.allocation import loan_total_fortnights

        return loan_total_fortnights(self.duration_value, self.duration_type)

    @property
    def payment_per_fortnight(self) -> int:
        from payledger.domain.allocation import loan_payment_per_fortnight

        return loan_payment_per_fortnight(self.total_amount, self.total_fortnights)


@dataclass(frozen=True)
class Income:
    """Deposit history record."""

    id: int
    account_id: int
    date: date
    concept: str
    amount: int
    includes_gas: bool
    created_at: datetime


@dataclass(frozen=True)
class Expense:
    """A claim against exactly one target entity's balance."""

    id: int
    account_id: int
    date: date
    amount: int
    category_id: int
    category_type: ExpenseTarget
    description: str
    is_gas: bool
    created_at: datetime


@dataclass(frozen=True)
class Distribution:
    """Per-category split of a deposit."""

    fixed: int = 0
    savings: int = 0
    variable: int = 0

    @property
    def total(self) -> int:
        return self.fixed + self.savings + self.variable

    def for_slug(self, slug: CategorySlug) -> int:
        return getattr(self, slug.value)


@dataclass(frozen=True)
class LedgerSnapshot:
    """Every collection of one account, as read at a single point in time."""

    categories: tuple[Category, ...] = ()
    goals: tuple[Goal, ...] = ()
    periodic_expenses: tuple[PeriodicExpense, ...] = ()
    fixed_bills: tuple[FixedBill, ...] = ()
    loans: tuple[Loan, ...] = ()
    incomes: tuple[Income, ...] = ()
    expenses: tuple[Expense, ...] = ()


@dataclass(frozen=True)
class LoanProgress:
    """Loan terms plus repayment progress folded from the expense stream."""

    loan: Loan
    paid_amount: int

    @property
    def remaining_amount(self) -> int:
        return max(0, self.loan.total_amount - self.paid_amount)

    @property
    def percent_paid(self) -> float:
        if self.loan.total_amount <= 0:
            return 0.0
        return min(100.0, self.paid_amount * 100 / self.loan.total_amount)

    @property
    def fortnights_left(self) -> int:
        payment = self.loan.payment_per_fortnight
        if payment <= 0:
            return 0
        return -(-self.remaining_amount // payment)


@dataclass(frozen=True)
class GoalProgress:
    """Goal with its stored balance and the planning share of savings."""

    goal: Goal
    suggested_amount: int

    @property
    def percent_complete(self) -> float:
        if self.goal.target_amount <= 0:
            return 0.0
        return min(100.0, self.goal.current_amount * 100 / self.goal.target_amount)

    @property
    def is_complete(self) -> bool:
        return self.goal.current_amount >= self.goal.target_amount


@dataclass(frozen=True)
class PeriodicExpenseStatus:
    """Countdown and urgency of a sinking fund on a given day."""

    expense: PeriodicExpense
    days_left: int
    fortnights_left: int
    is_overdue: bool
    is_urgent: bool

    @property
    def remaining_amount(self) -> int:
        return max(0, self.expense.target_amount - self.expense.current_amount)

    @property
    def percent_complete(self) -> float:
        if self.expense.target_amount <= 0:
            return 0.0
        return min(100.0, self.expense.current_amount * 100 / self.expense.target_amount)


@dataclass(frozen=True)
class ExpenseLine:
    """Expense history row with its target name resolved for display."""

    expense: Expense
    target_name: str


@dataclass(frozen=True)
class BudgetOverview:
    """Aggregate view recomputed from a snapshot on every read."""

    as_of: date
    categories: tuple[Category, ...]
    total_balance: int
    gas_income: int
    gas_expenses: int
    gas_available: int
    fortnight: int
    fixed_bills_total: int
    loans_total: int
    fixed_surplus: int
    loans: tuple[LoanProgress, ...] = ()
    goals: tuple[GoalProgress, ...] = ()
    periodic_expenses: tuple[PeriodicExpenseStatus, ...] = ()
    history: tuple[ExpenseLine, ...] = field(default_factory=tuple)
