"""Savings goal domain service."""

from datetime import date
from typing import Optional

from payledger.database.base import Database
from payledger.domain.entities import Goal as GoalEntity
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


def validate_percentage(percentage: int) -> None:
    if not 0 <= percentage <= 100:
        raise ValidationError("Allocation percentage must be between 0 and 100")


class GoalService:
    """Service for managing savings goals.

    A goal's ``current_amount`` is the stored, directly funded value; its
    allocation percentage only drives the suggested share reported by the
    summary.
    """

    def __init__(self, db: Database, settings: Optional[LedgerSettings] = None):
        """Initialize goal service.

        Args:
            db: Database instance
            settings: Ledger settings (defaults apply when None)
        """
        self.db = db
        self.settings = settings or LedgerSettings()

    def add_goal(
        self,
        account_id: int,
        name: str,
        target_amount: int,
        allocation_percentage: int = 0,
        due_date: Optional[date] = None,
        current_amount: int = 0,
    ) -> int:
        """Create a goal.

        Args:
            account_id: Account ID
            name: Goal name
            target_amount: Target in cents
            allocation_percentage: Planning share of the savings category
            due_date: Optional deadline
            current_amount: Amount already saved, in cents

        Returns:
            Goal ID

        Raises:
            ValidationError: If name is empty, target is not positive, the
                percentage is outside 0-100 or current amount is negative
        """
        name = name.strip()
        if not name:
            raise ValidationError("Goal name is required")
        if target_amount <= 0:
            raise ValidationError(non_positive_amount("target amount"))
        if current_amount < 0:
            raise ValidationError("Current amount cannot be negative")
        validate_percentage(allocation_percentage)

        with ledger_command(self.db, account_id, "add_goal", target_amount=target_amount):
            return self.db.create_goal(
                account_id=account_id,
                name=name,
                target_amount=target_amount,
                allocation_percentage=allocation_percentage,
                due_date=due_date,
                current_amount=current_amount,
            )

    def update_goal(
        self,
        goal_id: int,
        name: Optional[str] = None,
        target_amount: Optional[int] = None,
        allocation_percentage: Optional[int] = None,
        due_date: Optional[date] = None,
        clear_due_date: bool = False,
    ) -> None:
        """Update goal fields; ``None`` leaves a field unchanged.

        Raises:
            NotFoundError: If goal not found
            ValidationError: If a new value is invalid
        """
        goal = self.require_goal(goal_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Goal name is required")
        if target_amount is not None and target_amount <= 0:
            raise ValidationError(non_positive_amount("target amount"))
        if allocation_percentage is not None:
            validate_percentage(allocation_percentage)

        with ledger_command(self.db, goal.account_id, "update_goal", goal_id=goal_id):
            self.db.update_goal(
                goal_id,
                name=name,
                target_amount=target_amount,
                allocation_percentage=allocation_percentage,
                due_date=due_date,
                clear_due_date=clear_due_date,
            )

    def delete_goal(self, goal_id: int) -> None:
        """Delete a goal. Its past expenses are kept and shown as unknown.

        Raises:
            NotFoundError: If goal not found
        """
        goal = self.require_goal(goal_id)
        with ledger_command(self.db, goal.account_id, "delete_goal", goal_id=goal_id):
            self.db.delete_goal(goal_id)

    def fund_goal(self, goal_id: int, amount: int, source_category_id: int) -> int:
        """Move money from a category into a goal.

        Returns:
            The goal's new current amount

        Raises:
            ValidationError: If amount is not positive, or exceeds the source
                balance under affordability enforcement
            NotFoundError: If the goal or category does not exist
        """
        if amount <= 0:
            raise ValidationError(non_positive_amount())
        goal = self.require_goal(goal_id)

        with ledger_command(
            self.db,
            goal.account_id,
            "fund_goal",
            goal_id=goal_id,
            amount=amount,
            source_category_id=source_category_id,
        ):
            source = self.db.get_category(source_category_id)
            if source is None or source.account_id != goal.account_id:
                raise NotFoundError(category_not_found(source_category_id))
            if self.settings.enforce_affordability and amount > source.balance:
                raise ValidationError(insufficient_funds(source.display_name, source.balance, amount))
            self.db.adjust_category_balance(source_category_id, -amount)
            return self.db.adjust_goal_amount(goal_id, amount)

    def get_goal(self, goal_id: int) -> Optional[GoalEntity]:
        """Get goal by ID."""
        return self.db.get_goal(goal_id)

    def require_goal(self, goal_id: int) -> GoalEntity:
        """Get goal by ID, raising NotFoundError if it does not exist."""
        goal = self.db.get_goal(goal_id)
        if goal is None:
            raise NotFoundError(entity_not_found("Goal", goal_id))
        return goal

    def list_goals(self, account_id: int) -> list[GoalEntity]:
        """List an account's goals."""
        return self.db.list_goals(account_id)
