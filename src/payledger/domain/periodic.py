"""Periodic expense (sinking fund) domain service."""

from datetime import date
from typing import Optional

from payledger.database.base import Database
from payledger.domain.entities import (
    PeriodicExpense as PeriodicExpenseEntity,
    PeriodicExpenseStatus,
    PeriodicFrequency,
)
from payledger.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    entity_not_found,
    insufficient_funds,
    non_positive_amount,
)
from payledger.domain.settings import LedgerSettings
from payledger.domain.unit_of_work import ledger_command
from payledger.utils.fortnight import fortnights_until

URGENT_DAYS = 14
URGENT_WEEKS = 8


def parse_frequency(value: PeriodicFrequency | str) -> PeriodicFrequency:
    try:
        return PeriodicFrequency(value)
    except ValueError:
        raise ValidationError(
            f"Invalid frequency '{value}'. Choose one of: monthly, quarterly, yearly"
        )


def periodic_status(expense: PeriodicExpenseEntity, today: Optional[date] = None) -> PeriodicExpenseStatus:
    """Countdown and urgency of a sinking fund.

    Overdue funds are always urgent. Within two weeks of the due date a fund
    is urgent until fully funded; within eight weeks, while under half funded.
    """
    if today is None:
        today = date.today()

    days_left = (expense.due_date - today).days
    funded = expense.current_amount >= expense.target_amount
    half_funded = expense.current_amount * 2 >= expense.target_amount

    is_overdue = days_left < 0
    if is_overdue:
        is_urgent = True
    elif days_left <= URGENT_DAYS:
        is_urgent = not funded
    elif days_left // 7 <= URGENT_WEEKS:
        is_urgent = not half_funded
    else:
        is_urgent = False

    return PeriodicExpenseStatus(
        expense=expense,
        days_left=days_left,
        fortnights_left=fortnights_until(expense.due_date, today),
        is_overdue=is_overdue,
        is_urgent=is_urgent,
    )


class PeriodicExpenseService:
    """Service for managing sinking funds for large, infrequent costs."""

    def __init__(self, db: Database, settings: Optional[LedgerSettings] = None):
        """Initialize periodic expense service.

        Args:
            db: Database instance
            settings: Ledger settings (defaults apply when None)
        """
        self.db = db
        self.settings = settings or LedgerSettings()

    def add_periodic_expense(
        self,
        account_id: int,
        name: str,
        target_amount: int,
        due_date: date,
        frequency: PeriodicFrequency | str = PeriodicFrequency.MONTHLY,
        current_amount: int = 0,
    ) -> int:
        """Create a sinking fund.

        Raises:
            ValidationError: If name is empty, target is not positive, the
                frequency is unknown or current amount is negative
        """
        name = name.strip()
        if not name:
            raise ValidationError("Periodic expense name is required")
        if target_amount <= 0:
            raise ValidationError(non_positive_amount("target amount"))
        if current_amount < 0:
            raise ValidationError("Current amount cannot be negative")
        frequency = parse_frequency(frequency)

        with ledger_command(self.db, account_id, "add_periodic_expense", target_amount=target_amount):
            return self.db.create_periodic_expense(
                account_id=account_id,
                name=name,
                target_amount=target_amount,
                due_date=due_date,
                frequency=frequency,
                current_amount=current_amount,
            )

    def update_periodic_expense(
        self,
        periodic_id: int,
        name: Optional[str] = None,
        target_amount: Optional[int] = None,
        due_date: Optional[date] = None,
        frequency: Optional[PeriodicFrequency | str] = None,
    ) -> None:
        """Update sinking fund fields; ``None`` leaves a field unchanged."""
        periodic = self.require_periodic_expense(periodic_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Periodic expense name is required")
        if target_amount is not None and target_amount <= 0:
            raise ValidationError(non_positive_amount("target amount"))
        if frequency is not None:
            frequency = parse_frequency(frequency)

        with ledger_command(
            self.db, periodic.account_id, "update_periodic_expense", periodic_id=periodic_id
        ):
            self.db.update_periodic_expense(
                periodic_id,
                name=name,
                target_amount=target_amount,
                due_date=due_date,
                frequency=frequency,
            )

    def delete_periodic_expense(self, periodic_id: int) -> None:
        """Delete a sinking fund. Its past expenses are kept and shown as unknown."""
        periodic = self.require_periodic_expense(periodic_id)
        with ledger_command(
            self.db, periodic.account_id, "delete_periodic_expense", periodic_id=periodic_id
        ):
            self.db.delete_periodic_expense(periodic_id)

    def fund_periodic_expense(self, periodic_id: int, amount: int, source_category_id: int) -> int:
        """Move money from a category into a sinking fund.

        Returns:
            The fund's new current amount

        Raises:
            ValidationError: If amount is not positive, or exceeds the source
                balance under affordability enforcement
            NotFoundError: If the fund or category does not exist
        """
        if amount <= 0:
            raise ValidationError(non_positive_amount())
        periodic = self.require_periodic_expense(periodic_id)

        with ledger_command(
            self.db,
            periodic.account_id,
            "fund_periodic_expense",
            periodic_id=periodic_id,
            amount=amount,
            source_category_id=source_category_id,
        ):
            source = self.db.get_category(source_category_id)
            if source is None or source.account_id != periodic.account_id:
                raise NotFoundError(category_not_found(source_category_id))
            if self.settings.enforce_affordability and amount > source.balance:
                raise ValidationError(insufficient_funds(source.display_name, source.balance, amount))
            self.db.adjust_category_balance(source_category_id, -amount)
            return self.db.adjust_periodic_amount(periodic_id, amount)

    def get_periodic_expense(self, periodic_id: int) -> Optional[PeriodicExpenseEntity]:
        """Get sinking fund by ID."""
        return self.db.get_periodic_expense(periodic_id)

    def require_periodic_expense(self, periodic_id: int) -> PeriodicExpenseEntity:
        periodic = self.db.get_periodic_expense(periodic_id)
        if periodic is None:
            raise NotFoundError(entity_not_found("Periodic expense", periodic_id))
        return periodic

    def list_periodic_expenses(self, account_id: int) -> list[PeriodicExpenseEntity]:
        """List an account's sinking funds."""
        return self.db.list_periodic_expenses(account_id)

    def list_statuses(self, account_id: int, today: Optional[date] = None) -> list[PeriodicExpenseStatus]:
        """Sinking funds with their countdown, soonest due first."""
        statuses = [periodic_status(p, today) for p in self.list_periodic_expenses(account_id)]
        return sorted(statuses, key=lambda status: status.expense.due_date)
