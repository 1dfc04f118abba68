"""Income domain service."""

from datetime import date as date_type
from typing import Optional

from payledger.database.base import Database
from payledger.domain.allocation import category_credits, distribute_income
from payledger.domain.entities import CategorySlug, Distribution, Income as IncomeEntity
from payledger.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    category_slug_not_found,
    entity_not_found,
    non_positive_amount,
)
from payledger.domain.settings import LedgerSettings
from payledger.domain.unit_of_work import ledger_command

# Shown whenever an income record is edited or deleted: the original split is
# not stored, so category balances cannot be adjusted to match.
INCOME_NOT_ADJUSTED_NOTICE = (
    "Category balances were not adjusted: the original distribution of this "
    "income is not stored. Use a transfer to correct balances if needed."
)


class IncomeService:
    """Service for recording deposits and distributing them across categories."""

    def __init__(self, db: Database, settings: Optional[LedgerSettings] = None):
        """Initialize income service.

        Args:
            db: Database instance
            settings: Ledger settings; ``gas_policy`` decides where gas deposits go
        """
        self.db = db
        self.settings = settings or LedgerSettings()

    def record_income(
        self,
        account_id: int,
        amount: int,
        concept: str,
        distribution: Distribution,
        includes_gas: bool = False,
        date: Optional[date_type] = None,
    ) -> int:
        """Record a deposit and credit each category its share.

        The caller is responsible for a distribution that sums to ``amount``;
        each category is credited exactly its named share. Gas deposits are
        routed by the configured gas policy instead of the distribution.

        Args:
            account_id: Account ID
            amount: Deposit in cents
            concept: What the deposit is (e.g. "Salary")
            distribution: Per-category shares in cents
            includes_gas: Whether this deposit is gas money
            date: Deposit date (defaults to today)

        Returns:
            Income ID

        Raises:
            ValidationError: If amount is not positive, a share is negative or
                concept is empty
        """
        if amount <= 0:
            raise ValidationError(non_positive_amount())
        if min(distribution.fixed, distribution.savings, distribution.variable) < 0:
            raise ValidationError("Distribution shares cannot be negative")
        concept = concept.strip()
        if not concept:
            raise ValidationError("Concept is required")

        policy = self.settings.gas_policy
        with ledger_command(
            self.db,
            account_id,
            "record_income",
            amount=amount,
            includes_gas=includes_gas,
            gas_policy=policy.value,
        ):
            income_id = self.db.create_income(
                account_id=account_id,
                date=date or date_type.today(),
                concept=concept,
                amount=amount,
                includes_gas=includes_gas,
            )
            credits = category_credits(distribute_income(amount, distribution, includes_gas, policy))
            for slug, cents in credits.items():
                category = self.db.get_category_by_slug(account_id, slug)
                if category is None:
                    raise NotFoundError(category_slug_not_found(slug.value, account_id))
                self.db.adjust_category_balance(category.id, cents)
        return income_id

    def record_external_income(
        self,
        account_id: int,
        amount: int,
        category_id: int,
        concept: str,
        date: Optional[date_type] = None,
    ) -> int:
        """Add money straight to one category, keeping an income record for audit.

        Raises:
            ValidationError: If amount is not positive or concept is empty
            NotFoundError: If the category does not exist
        """
        if amount <= 0:
            raise ValidationError(non_positive_amount())
        concept = concept.strip()
        if not concept:
            raise ValidationError("Concept is required")

        with ledger_command(
            self.db, account_id, "record_external_income", amount=amount, category_id=category_id
        ):
            category = self.db.get_category(category_id)
            if category is None or category.account_id != account_id:
                raise NotFoundError(category_not_found(category_id))
            income_id = self.db.create_income(
                account_id=account_id,
                date=date or date_type.today(),
                concept=concept,
                amount=amount,
            )
            self.db.adjust_category_balance(category_id, amount)
        return income_id

    def record_income_by_slug(
        self,
        account_id: int,
        amount: int,
        slug: CategorySlug,
        concept: str,
        date: Optional[date_type] = None,
    ) -> int:
        """Same as ``record_external_income`` but addresses the category by slug."""
        category = self.db.get_category_by_slug(account_id, slug)
        if category is None:
            raise NotFoundError(category_slug_not_found(slug.value, account_id))
        return self.record_external_income(account_id, amount, category.id, concept, date=date)

    def get_income(self, income_id: int) -> Optional[IncomeEntity]:
        """Get income by ID."""
        return self.db.get_income(income_id)

    def list_incomes(
        self,
        account_id: int,
        start_date: Optional[date_type] = None,
        end_date: Optional[date_type] = None,
    ) -> list[IncomeEntity]:
        """List an account's incomes, newest first."""
        return self.db.list_incomes(account_id, start_date=start_date, end_date=end_date)

    def update_income(
        self,
        income_id: int,
        date: Optional[date_type] = None,
        concept: Optional[str] = None,
        amount: Optional[int] = None,
    ) -> str:
        """Edit an income record without touching any balance.

        Returns:
            A notice explaining that category balances were not adjusted

        Raises:
            NotFoundError: If income not found
            ValidationError: If amount is not positive or concept is empty
        """
        income = self._require_income(income_id)
        if amount is not None and amount <= 0:
            raise ValidationError(non_positive_amount())
        if concept is not None:
            concept = concept.strip()
            if not concept:
                raise ValidationError("Concept is required")

        with ledger_command(self.db, income.account_id, "update_income", income_id=income_id):
            self.db.update_income(income_id, date=date, concept=concept, amount=amount)
        return INCOME_NOT_ADJUSTED_NOTICE

    def delete_income(self, income_id: int) -> str:
        """Delete an income record without touching any balance.

        Returns:
            A notice explaining that category balances were not adjusted

        Raises:
            NotFoundError: If income not found
        """
        income = self._require_income(income_id)
        with ledger_command(self.db, income.account_id, "delete_income", income_id=income_id):
            self.db.delete_income(income_id)
        return INCOME_NOT_ADJUSTED_NOTICE

    def _require_income(self, income_id: int) -> IncomeEntity:
        income = self.db.get_income(income_id)
        if income is None:
            raise NotFoundError(entity_not_found("Income", income_id))
        return income
