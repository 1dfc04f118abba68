"""Expense domain service.

Each expense is a claim against exactly one target: a category, a goal, a
periodic expense or a loan. Recording an expense debits its target (floored
at zero), deleting it credits the amount back, and updating it does both in
that order. Gas expenses never touch a balance; they only count against the
gas sub-ledger. Loan expenses are append-only because loan progress is
summed from them.
"""

from datetime import date as date_type
from typing import Any, Optional

from payledger.database.base import Database
from payledger.domain.allocation import apply_debit, gas_available, loan_paid_amount
from payledger.domain.entities import (
    CategorySlug,
    Expense as ExpenseEntity,
    ExpenseTarget,
)
from payledger.domain.errors import (
    NotFoundError,
    ValidationError,
    category_slug_not_found,
    entity_not_found,
    insufficient_funds,
    non_positive_amount,
)
from payledger.domain.settings import LedgerSettings
from payledger.domain.unit_of_work import ledger_command

TARGET_LABELS = {
    ExpenseTarget.FIXED: "Category",
    ExpenseTarget.SAVINGS: "Category",
    ExpenseTarget.VARIABLE: "Category",
    ExpenseTarget.GOAL: "Goal",
    ExpenseTarget.PERIODIC: "Periodic expense",
    ExpenseTarget.LOAN: "Loan",
}


def parse_target(value: ExpenseTarget | str) -> ExpenseTarget:
    """Coerce a target type string, raising ValidationError on unknown values."""
    try:
        return ExpenseTarget(value)
    except ValueError:
        choices = ", ".join(target.value for target in ExpenseTarget)
        raise ValidationError(f"Invalid expense type '{value}'. Choose one of: {choices}")


class ExpenseService:
    """Service for recording, editing and reversing expenses."""

    def __init__(self, db: Database, settings: Optional[LedgerSettings] = None):
        """Initialize expense service.

        Args:
            db: Database instance
            settings: Ledger settings; ``enforce_affordability`` rejects overspending
        """
        self.db = db
        self.settings = settings or LedgerSettings()

    def add_expense(
        self,
        account_id: int,
        amount: int,
        category_type: ExpenseTarget | str,
        category_id: Optional[int] = None,
        description: str = "",
        is_gas: bool = False,
        date: Optional[date_type] = None,
    ) -> int:
        """Record an expense and debit its target.

        Args:
            account_id: Account ID
            amount: Amount in cents
            category_type: Kind of target charged
            category_id: Target ID; optional for fixed/savings/variable, where
                the account's category of that slug is used
            description: Free text
            is_gas: Charge the gas sub-ledger instead of any balance
            date: Expense date (defaults to today)

        Returns:
            Expense ID

        Raises:
            ValidationError: If amount is not positive, the type is unknown, or
                the target cannot afford it under enforcement
            NotFoundError: If the target does not exist
        """
        if amount <= 0:
            raise ValidationError(non_positive_amount())
        target = parse_target(category_type)

        with ledger_command(
            self.db, account_id, "add_expense", amount=amount, target=target.value, is_gas=is_gas
        ) as log:
            target_id = self.resolve_target_id(account_id, target, category_id)
            self._require_target(account_id, target, target_id)
            if self.settings.enforce_affordability:
                self._check_affordable(account_id, target, target_id, amount, is_gas)

            expense_id = self.db.create_expense(
                account_id=account_id,
                date=date or date_type.today(),
                amount=amount,
                category_id=target_id,
                category_type=target,
                description=description,
                is_gas=is_gas,
            )
            if not is_gas:
                self._debit_target(log, account_id, target, target_id, amount)
        return expense_id

    def update_expense(
        self,
        expense_id: int,
        amount: Optional[int] = None,
        category_type: Optional[ExpenseTarget | str] = None,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
        is_gas: Optional[bool] = None,
        date: Optional[date_type] = None,
    ) -> None:
        """Edit an expense, moving its effect from the old target to the new one.

        The old claim is reversed first, the changes are stored, and only then
        is the new target re-read and debited, so the debit always sees the
        post-reversal balance. The result equals deleting the expense and
        adding it again with the new fields.

        An expense whose target has since been deleted can still be edited
        as long as it stays on that target; there is nothing to refund or
        charge, so only the record changes.

        Raises:
            NotFoundError: If the expense or the new target does not exist
            ValidationError: If amount is not positive, the type is unknown, or
                the new target cannot afford it under enforcement
        """
        if amount is not None and amount <= 0:
            raise ValidationError(non_positive_amount())
        if category_type is not None:
            category_type = parse_target(category_type)
        account_id = self.require_expense(expense_id).account_id

        with ledger_command(
            self.db, account_id, "update_expense", expense_id=expense_id, amount=amount
        ) as log:
            # Re-read under the lock so a concurrent edit is never reversed twice
            old = self.require_expense(expense_id)
            new_target = old.category_type if category_type is None else category_type
            new_amount = old.amount if amount is None else amount
            new_is_gas = old.is_gas if is_gas is None else is_gas

            if category_id is not None:
                new_target_id = category_id
            elif new_target is old.category_type:
                new_target_id = old.category_id
            else:
                new_target_id = self.resolve_target_id(account_id, new_target, None)

            same_target = (new_target, new_target_id) == (old.category_type, old.category_id)
            if same_target:
                target_exists = self._get_target(account_id, new_target, new_target_id) is not None
            else:
                self._require_target(account_id, new_target, new_target_id)
                target_exists = True

            if not old.is_gas:
                self._credit_target(log, account_id, old.category_type, old.category_id, old.amount)

            if self.settings.enforce_affordability and (new_is_gas or target_exists):
                self._check_affordable(
                    account_id,
                    new_target,
                    new_target_id,
                    new_amount,
                    new_is_gas,
                    exclude_expense_id=expense_id,
                )

            self.db.update_expense(
                expense_id,
                date=date,
                amount=new_amount,
                category_id=new_target_id,
                category_type=new_target,
                description=description,
                is_gas=new_is_gas,
            )

            if not new_is_gas:
                self._debit_target(log, account_id, new_target, new_target_id, new_amount)

    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense and credit its amount back to the target.

        Targets deleted since the expense was recorded are skipped with a
        warning.

        Raises:
            NotFoundError: If the expense does not exist
        """
        expense = self.require_expense(expense_id)
        account_id = expense.account_id
        with ledger_command(
            self.db, account_id, "delete_expense", expense_id=expense_id, amount=expense.amount
        ) as log:
            # Re-read under the lock so a concurrent delete or edit is not refunded twice
            expense = self.require_expense(expense_id)
            self.db.delete_expense(expense_id)
            if not expense.is_gas:
                self._credit_target(
                    log, expense.account_id, expense.category_type, expense.category_id, expense.amount
                )

    def get_expense(self, expense_id: int) -> Optional[ExpenseEntity]:
        """Get expense by ID."""
        return self.db.get_expense(expense_id)

    def require_expense(self, expense_id: int) -> ExpenseEntity:
        """Get expense by ID, raising NotFoundError if it does not exist."""
        expense = self.db.get_expense(expense_id)
        if expense is None:
            raise NotFoundError(entity_not_found("Expense", expense_id))
        return expense

    def list_expenses(
        self,
        account_id: int,
        start_date: Optional[date_type] = None,
        end_date: Optional[date_type] = None,
        category_type: Optional[ExpenseTarget] = None,
        category_id: Optional[int] = None,
    ) -> list[ExpenseEntity]:
        """List an account's expenses with optional filters, newest first."""
        return self.db.list_expenses(
            account_id,
            start_date=start_date,
            end_date=end_date,
            category_type=category_type,
            category_id=category_id,
        )

    def resolve_target_id(
        self, account_id: int, target: ExpenseTarget, target_id: Optional[int]
    ) -> int:
        """Return the target ID, looking categories up by slug when none is given.

        Raises:
            ValidationError: If a goal, periodic expense or loan ID is missing
            NotFoundError: If the account has no category for the slug
        """
        if target_id is not None:
            return target_id
        if not target.is_category:
            raise ValidationError(f"An ID is required for {target.value} expenses")
        category = self.db.get_category_by_slug(account_id, CategorySlug(target.value))
        if category is None:
            raise NotFoundError(category_slug_not_found(target.value, account_id))
        return category.id

    def _get_target(self, account_id: int, target: ExpenseTarget, target_id: int) -> Any:
        if target.is_category:
            entity = self.db.get_category(target_id)
        elif target is ExpenseTarget.GOAL:
            entity = self.db.get_goal(target_id)
        elif target is ExpenseTarget.PERIODIC:
            entity = self.db.get_periodic_expense(target_id)
        else:
            entity = self.db.get_loan(target_id)
        if entity is None or entity.account_id != account_id:
            return None
        return entity

    def _require_target(self, account_id: int, target: ExpenseTarget, target_id: int) -> Any:
        entity = self._get_target(account_id, target, target_id)
        if entity is None:
            raise NotFoundError(entity_not_found(TARGET_LABELS[target], target_id))
        if target.is_category and entity.slug.value != target.value:
            raise ValidationError(
                f"Category {target_id} is the {entity.slug.value} category, not {target.value}"
            )
        return entity

    def _debit_target(
        self, log: Any, account_id: int, target: ExpenseTarget, target_id: int, amount: int
    ) -> None:
        if target is ExpenseTarget.LOAN:
            return
        # Re-read so the debit sees every write made earlier in this command
        entity = self._get_target(account_id, target, target_id)
        if entity is None:
            log.warning("debit_target_missing", target=target.value, target_id=target_id, amount=amount)
            return
        if target.is_category:
            self.db.set_category_balance(target_id, apply_debit(entity.balance, amount))
        elif target is ExpenseTarget.GOAL:
            self.db.set_goal_amount(target_id, apply_debit(entity.current_amount, amount))
        else:
            self.db.set_periodic_amount(target_id, apply_debit(entity.current_amount, amount))

    def _credit_target(
        self, log: Any, account_id: int, target: ExpenseTarget, target_id: int, amount: int
    ) -> None:
        if target is ExpenseTarget.LOAN:
            return
        if self._get_target(account_id, target, target_id) is None:
            log.warning(
                "reversal_target_missing",
                target=target.value,
                target_id=target_id,
                amount=amount,
            )
            return
        if target.is_category:
            self.db.adjust_category_balance(target_id, amount)
        elif target is ExpenseTarget.GOAL:
            self.db.adjust_goal_amount(target_id, amount)
        else:
            self.db.adjust_periodic_amount(target_id, amount)

    def available_amount(
        self,
        account_id: int,
        target: ExpenseTarget,
        target_id: int,
        is_gas: bool = False,
        exclude_expense_id: Optional[int] = None,
    ) -> int:
        """What an expense against this target can spend right now.

        Gas spends draw on the gas sub-ledger, loan expenses on the remaining
        debt, everything else on the target's balance.
        """
        if is_gas:
            expenses = [
                e for e in self.db.list_expenses(account_id) if e.id != exclude_expense_id
            ]
            return gas_available(self.db.list_incomes(account_id), expenses)

        entity = self._require_target(account_id, target, target_id)
        if target.is_category:
            return entity.balance
        if target is ExpenseTarget.LOAN:
            payments = [
                e
                for e in self.db.list_expenses(
                    account_id, category_type=ExpenseTarget.LOAN, category_id=target_id
                )
                if e.id != exclude_expense_id
            ]
            return max(0, entity.total_amount - loan_paid_amount(target_id, payments))
        return entity.current_amount

    def _check_affordable(
        self,
        account_id: int,
        target: ExpenseTarget,
        target_id: int,
        amount: int,
        is_gas: bool,
        exclude_expense_id: Optional[int] = None,
    ) -> None:
        available = self.available_amount(
            account_id, target, target_id, is_gas=is_gas, exclude_expense_id=exclude_expense_id
        )
        if amount > available:
            source = "gas budget" if is_gas else f"{target.value} {target_id}"
            raise ValidationError(insufficient_funds(source, available, amount))
