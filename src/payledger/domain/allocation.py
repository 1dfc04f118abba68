"""Pure allocation rules.

Nothing in this module touches the record store. Every function takes plain
values or domain entities and returns cents, so the same rules back the
mutation services, the projector and the tests.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from payledger.domain.entities import (
    BillFrequency,
    CategorySlug,
    Distribution,
    DurationType,
    Expense,
    ExpenseTarget,
    FixedBill,
    GasIncomePolicy,
    Goal,
    Income,
    Loan,
    LoanStatus,
)
from payledger.domain.errors import ValidationError
from payledger.utils.fortnight import current_fortnight

DEFAULT_SPLIT = (50, 30, 20)

# Share of the non-fixed remainder that goes to savings when the fixed
# percentage is changed; variable receives the rest.
SAVINGS_SHARE_OF_REMAINDER = Decimal("0.6")


def distribute_income(
    amount: int,
    distribution: Distribution,
    includes_gas: bool,
    policy: GasIncomePolicy = GasIncomePolicy.ISOLATED,
) -> Distribution:
    """Return the per-category credit for a deposit.

    The caller guarantees the distribution sums to ``amount``; no validation
    happens here. Gas deposits ignore the distribution: under the ISOLATED
    policy they credit nothing, under FIXED the full amount goes to fixed.
    """
    if not includes_gas:
        return distribution
    if policy is GasIncomePolicy.FIXED:
        return Distribution(fixed=amount)
    return Distribution()


def rebalance_percentages(fixed_percentage: int) -> tuple[int, int, int]:
    """Derive (fixed, savings, variable) percentages from a fixed share.

    The remainder keeps a 60/40 savings/variable ratio, rounded half up
    for savings.
    """
    fixed_percentage = max(0, min(100, fixed_percentage))
    remaining = 100 - fixed_percentage
    savings = int((Decimal(remaining) * SAVINGS_SHARE_OF_REMAINDER).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return fixed_percentage, savings, remaining - savings


def split_by_percentages(
    amount: int,
    fixed_percentage: int = DEFAULT_SPLIT[0],
    savings_percentage: int = DEFAULT_SPLIT[1],
    variable_percentage: int = DEFAULT_SPLIT[2],
) -> Distribution:
    """Split a deposit by percentages so that the parts sum to ``amount``.

    Fixed and savings are rounded half up to the cent; variable receives
    whatever is left, so rounding never creates or loses money.
    """

    def share(percentage: int) -> int:
        return int((Decimal(amount) * percentage / 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))

    if fixed_percentage + savings_percentage + variable_percentage != 100:
        raise ValidationError("Distribution percentages must add up to 100")

    fixed = share(fixed_percentage)
    savings = share(savings_percentage)
    return Distribution(fixed=fixed, savings=savings, variable=amount - fixed - savings)


def fixed_bill_contribution(bill: FixedBill, fortnight: int) -> int:
    """Cents a fixed bill commits in the given fortnight.

    An explicit fortnight overrides frequency: the full amount counts only
    in that fortnight. Otherwise biweekly bills count in full every
    fortnight and monthly bills count half in each (odd cents round up).
    """
    if bill.fortnight in (1, 2):
        return bill.amount if bill.fortnight == fortnight else 0
    if bill.frequency is BillFrequency.BIWEEKLY:
        return bill.amount
    return (bill.amount + 1) // 2


def total_fixed_bills(bills: Iterable[FixedBill], fortnight: Optional[int] = None) -> int:
    """Committed fixed-bill spend for a fortnight (default: today's)."""
    if fortnight is None:
        fortnight = current_fortnight()
    return sum(fixed_bill_contribution(bill, fortnight) for bill in bills)


def loan_total_fortnights(duration_value: int, duration_type: DurationType) -> int:
    if duration_type is DurationType.MONTHS:
        return duration_value * 2
    return duration_value


def loan_payment_per_fortnight(total_amount: int, total_fortnights: int) -> int:
    """Flat amortization installment, rounded half up to the cent.

    Returns 0 for a non-positive duration; the services reject such loans
    before they are stored.
    """
    if total_fortnights <= 0:
        return 0
    return int((Decimal(total_amount) / total_fortnights).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def total_loan_payments(loans: Iterable[Loan]) -> int:
    """Committed loan spend per fortnight over active loans only."""
    return sum(loan.payment_per_fortnight for loan in loans if loan.status is LoanStatus.ACTIVE)


def fixed_surplus(fixed_balance: int, fixed_bills_total: int, loans_total: int) -> int:
    """Unearmarked part of the fixed bucket; never negative."""
    return max(0, fixed_balance - fixed_bills_total - loans_total)


def gas_income_total(incomes: Iterable[Income]) -> int:
    return sum(income.amount for income in incomes if income.includes_gas)


def gas_expense_total(expenses: Iterable[Expense]) -> int:
    return sum(expense.amount for expense in expenses if expense.is_gas)


def gas_available(incomes: Iterable[Income], expenses: Iterable[Expense]) -> int:
    """Gas sub-ledger balance recomputed from full history; never negative."""
    return max(0, gas_income_total(incomes) - gas_expense_total(expenses))


def loan_paid_amount(loan_id: int, expenses: Iterable[Expense]) -> int:
    """Repaid amount of a loan, folded from its loan-type expenses."""
    return sum(
        expense.amount
        for expense in expenses
        if expense.category_type is ExpenseTarget.LOAN and expense.category_id == loan_id
    )


def suggested_goal_amount(savings_balance: int, goal: Goal) -> int:
    """Planning share of the savings bucket earmarked for a goal.

    This is advisory only; a goal's ``current_amount`` stays the stored,
    directly funded value.
    """
    share = Decimal(max(0, savings_balance)) * goal.allocation_percentage / 100
    return int(share.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def apply_debit(balance: int, amount: int) -> int:
    """Spend ``amount`` from a balance, flooring at zero."""
    return max(0, balance - amount)


def category_credits(distribution: Distribution) -> dict[CategorySlug, int]:
    """Map a distribution onto category slugs, dropping zero credits."""
    credits = {slug: distribution.for_slug(slug) for slug in CategorySlug}
    return {slug: cents for slug, cents in credits.items() if cents}
