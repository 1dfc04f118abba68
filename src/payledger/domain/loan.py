"""Loan domain service.

A loan stores only its amortization terms. How much has been repaid is
always summed from the loan-type expenses recorded against it, so there is
no second balance that could drift from the ledger.
"""

from datetime import date as date_type
from typing import Optional

from payledger.database.base import Database
from payledger.domain.allocation import apply_debit, loan_paid_amount, loan_total_fortnights
from payledger.domain.entities import (
    DurationType,
    ExpenseTarget,
    Loan as LoanEntity,
    LoanProgress,
    LoanStatus,
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

DEFAULT_PAYMENT_DESCRIPTION = "Loan payment"


def parse_duration_type(value: DurationType | str) -> DurationType:
    try:
        return DurationType(value)
    except ValueError:
        raise ValidationError(f"Invalid duration type '{value}'. Choose one of: fortnights, months")


def parse_loan_status(value: LoanStatus | str) -> LoanStatus:
    try:
        return LoanStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid loan status '{value}'. Choose one of: active, paid")


class LoanService:
    """Service for managing loans and recording their payments."""

    def __init__(self, db: Database, settings: Optional[LedgerSettings] = None):
        """Initialize loan service.

        Args:
            db: Database instance
            settings: Ledger settings; ``enforce_affordability`` rejects overpayment
        """
        self.db = db
        self.settings = settings or LedgerSettings()

    def add_loan(
        self,
        account_id: int,
        name: str,
        total_amount: int,
        duration_value: int,
        duration_type: DurationType | str = DurationType.MONTHS,
        start_date: Optional[date_type] = None,
    ) -> int:
        """Create an active loan.

        Args:
            account_id: Account ID
            name: Loan name
            total_amount: Amount to repay, in cents
            duration_value: Length of the loan in ``duration_type`` units
            duration_type: fortnights or months
            start_date: First day of the loan (defaults to today)

        Returns:
            Loan ID

        Raises:
            ValidationError: If name is empty, amount or duration is not
                positive, or the duration type is unknown
        """
        name = name.strip()
        if not name:
            raise ValidationError("Loan name is required")
        if total_amount <= 0:
            raise ValidationError(non_positive_amount("total amount"))
        duration_type = parse_duration_type(duration_type)
        if loan_total_fortnights(duration_value, duration_type) <= 0:
            raise ValidationError(non_positive_amount("duration"))

        with ledger_command(self.db, account_id, "add_loan", total_amount=total_amount):
            return self.db.create_loan(
                account_id=account_id,
                name=name,
                total_amount=total_amount,
                duration_value=duration_value,
                duration_type=duration_type,
                start_date=start_date or date_type.today(),
            )

    def update_loan(
        self,
        loan_id: int,
        name: Optional[str] = None,
        total_amount: Optional[int] = None,
        duration_value: Optional[int] = None,
        duration_type: Optional[DurationType | str] = None,
        start_date: Optional[date_type] = None,
    ) -> None:
        """Update loan terms; ``None`` leaves a field unchanged.

        Raises:
            NotFoundError: If loan not found
            ValidationError: If a new value is invalid
        """
        loan = self.require_loan(loan_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Loan name is required")
        if total_amount is not None and total_amount <= 0:
            raise ValidationError(non_positive_amount("total amount"))
        if duration_type is not None:
            duration_type = parse_duration_type(duration_type)

        new_value = loan.duration_value if duration_value is None else duration_value
        new_type = loan.duration_type if duration_type is None else duration_type
        if loan_total_fortnights(new_value, new_type) <= 0:
            raise ValidationError(non_positive_amount("duration"))

        with ledger_command(self.db, loan.account_id, "update_loan", loan_id=loan_id):
            self.db.update_loan(
                loan_id,
                name=name,
                total_amount=total_amount,
                duration_value=duration_value,
                duration_type=duration_type,
                start_date=start_date,
            )

    def delete_loan(self, loan_id: int) -> None:
        """Delete a loan. Its payment expenses are kept and shown as unknown."""
        loan = self.require_loan(loan_id)
        with ledger_command(self.db, loan.account_id, "delete_loan", loan_id=loan_id):
            self.db.delete_loan(loan_id)

    def set_status(self, loan_id: int, status: LoanStatus | str) -> None:
        """Mark a loan active or paid. Paid loans drop out of the fortnight total."""
        status = parse_loan_status(status)
        loan = self.require_loan(loan_id)
        with ledger_command(
            self.db, loan.account_id, "set_loan_status", loan_id=loan_id, status=status.value
        ):
            self.db.update_loan(loan_id, status=status)

    def pay_loan(
        self,
        loan_id: int,
        amount: int,
        source_category_id: int,
        date: Optional[date_type] = None,
        description: str = DEFAULT_PAYMENT_DESCRIPTION,
    ) -> int:
        """Pay a loan from a category.

        Debits the source category (floored at zero) and appends a loan
        expense, which is what advances the loan's progress.

        Returns:
            ID of the payment expense

        Raises:
            ValidationError: If amount is not positive, or under affordability
                enforcement exceeds the source balance or the remaining debt
            NotFoundError: If the loan or category does not exist
        """
        if amount <= 0:
            raise ValidationError(non_positive_amount())
        loan = self.require_loan(loan_id)

        with ledger_command(
            self.db,
            loan.account_id,
            "pay_loan",
            loan_id=loan_id,
            amount=amount,
            source_category_id=source_category_id,
        ):
            source = self.db.get_category(source_category_id)
            if source is None or source.account_id != loan.account_id:
                raise NotFoundError(category_not_found(source_category_id))

            if self.settings.enforce_affordability:
                if amount > source.balance:
                    raise ValidationError(
                        insufficient_funds(source.display_name, source.balance, amount)
                    )
                remaining = self.get_progress(loan_id).remaining_amount
                if amount > remaining:
                    raise ValidationError(insufficient_funds(f"loan '{loan.name}'", remaining, amount))

            self.db.set_category_balance(source_category_id, apply_debit(source.balance, amount))
            return self.db.create_expense(
                account_id=loan.account_id,
                date=date or date_type.today(),
                amount=amount,
                category_id=loan_id,
                category_type=ExpenseTarget.LOAN,
                description=description,
            )

    def get_loan(self, loan_id: int) -> Optional[LoanEntity]:
        """Get loan by ID."""
        return self.db.get_loan(loan_id)

    def require_loan(self, loan_id: int) -> LoanEntity:
        """Get loan by ID, raising NotFoundError if it does not exist."""
        loan = self.db.get_loan(loan_id)
        if loan is None:
            raise NotFoundError(entity_not_found("Loan", loan_id))
        return loan

    def list_loans(self, account_id: int, status: Optional[LoanStatus] = None) -> list[LoanEntity]:
        """List an account's loans, optionally only those with a given status."""
        return self.db.list_loans(account_id, status=status)

    def get_progress(self, loan_id: int) -> LoanProgress:
        """Loan terms plus the repaid amount summed from its payments."""
        loan = self.require_loan(loan_id)
        payments = self.db.list_expenses(
            loan.account_id, category_type=ExpenseTarget.LOAN, category_id=loan_id
        )
        return LoanProgress(loan=loan, paid_amount=loan_paid_amount(loan_id, payments))
