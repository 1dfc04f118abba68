"""Fixed bill domain service."""

from typing import Optional

from payledger.database.base import Database
from payledger.domain.allocation import total_fixed_bills
from payledger.domain.entities import BillFrequency, FixedBill as FixedBillEntity
from payledger.domain.errors import NotFoundError, ValidationError, entity_not_found, non_positive_amount
from payledger.domain.unit_of_work import ledger_command


def parse_bill_frequency(value: BillFrequency | str) -> BillFrequency:
    try:
        return BillFrequency(value)
    except ValueError:
        raise ValidationError(f"Invalid frequency '{value}'. Choose one of: monthly, biweekly")


def validate_fortnight(fortnight: Optional[int]) -> None:
    if fortnight not in (None, 1, 2):
        raise ValidationError("Fortnight must be 1, 2 or empty")


class FixedBillService:
    """Service for managing recurring bills.

    Bills never hold a balance; they only reduce the fixed category's surplus.
    """

    def __init__(self, db: Database):
        """Initialize fixed bill service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_fixed_bill(
        self,
        account_id: int,
        name: str,
        amount: int,
        frequency: BillFrequency | str = BillFrequency.MONTHLY,
        fortnight: Optional[int] = None,
        icon: Optional[str] = None,
    ) -> int:
        """Create a fixed bill.

        Args:
            account_id: Account ID
            name: Bill name
            amount: Amount per occurrence, in cents
            frequency: monthly or biweekly
            fortnight: Pay period (1 or 2) the full amount falls in; overrides
                frequency when set
            icon: Optional display icon

        Returns:
            Fixed bill ID

        Raises:
            ValidationError: If name is empty, amount is not positive, or the
                frequency or fortnight is invalid
        """
        name = name.strip()
        if not name:
            raise ValidationError("Bill name is required")
        if amount <= 0:
            raise ValidationError(non_positive_amount())
        frequency = parse_bill_frequency(frequency)
        validate_fortnight(fortnight)

        with ledger_command(self.db, account_id, "add_fixed_bill", amount=amount):
            return self.db.create_fixed_bill(
                account_id=account_id,
                name=name,
                amount=amount,
                frequency=frequency,
                fortnight=fortnight,
                icon=icon,
            )

    def update_fixed_bill(
        self,
        bill_id: int,
        name: Optional[str] = None,
        amount: Optional[int] = None,
        frequency: Optional[BillFrequency | str] = None,
        fortnight: Optional[int] = None,
        icon: Optional[str] = None,
        clear_fortnight: bool = False,
    ) -> None:
        """Update bill fields; ``None`` leaves a field unchanged.

        Raises:
            NotFoundError: If bill not found
            ValidationError: If a new value is invalid
        """
        bill = self.require_fixed_bill(bill_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Bill name is required")
        if amount is not None and amount <= 0:
            raise ValidationError(non_positive_amount())
        if frequency is not None:
            frequency = parse_bill_frequency(frequency)
        validate_fortnight(fortnight)

        with ledger_command(self.db, bill.account_id, "update_fixed_bill", bill_id=bill_id):
            self.db.update_fixed_bill(
                bill_id,
                name=name,
                amount=amount,
                frequency=frequency,
                fortnight=fortnight,
                icon=icon,
                clear_fortnight=clear_fortnight,
            )

    def delete_fixed_bill(self, bill_id: int) -> None:
        """Delete a fixed bill."""
        bill = self.require_fixed_bill(bill_id)
        with ledger_command(self.db, bill.account_id, "delete_fixed_bill", bill_id=bill_id):
            self.db.delete_fixed_bill(bill_id)

    def get_fixed_bill(self, bill_id: int) -> Optional[FixedBillEntity]:
        """Get fixed bill by ID."""
        return self.db.get_fixed_bill(bill_id)

    def require_fixed_bill(self, bill_id: int) -> FixedBillEntity:
        bill = self.db.get_fixed_bill(bill_id)
        if bill is None:
            raise NotFoundError(entity_not_found("Fixed bill", bill_id))
        return bill

    def list_fixed_bills(self, account_id: int) -> list[FixedBillEntity]:
        """List an account's fixed bills."""
        return self.db.list_fixed_bills(account_id)

    def fortnight_total(self, account_id: int, fortnight: Optional[int] = None) -> int:
        """Committed bill spend for a fortnight (default: the current one)."""
        validate_fortnight(fortnight)
        return total_fixed_bills(self.list_fixed_bills(account_id), fortnight)
