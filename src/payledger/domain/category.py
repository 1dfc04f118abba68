"""Category domain service: the three budget buckets and transfers between them."""

from typing import Optional

from payledger.database.base import Database
from payledger.domain.allocation import rebalance_percentages, split_by_percentages
from payledger.domain.entities import Category as CategoryEntity, CategorySlug, Distribution
from payledger.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    category_slug_not_found,
    insufficient_funds,
    non_positive_amount,
)
from payledger.domain.settings import LedgerSettings
from payledger.domain.unit_of_work import ledger_command


class CategoryService:
    """Service for reading categories and moving money between them."""

    def __init__(self, db: Database, settings: Optional[LedgerSettings] = None):
        """Initialize category service.

        Args:
            db: Database instance
            settings: Ledger settings (defaults apply when None)
        """
        self.db = db
        self.settings = settings or LedgerSettings()

    def list_categories(self, account_id: int) -> list[CategoryEntity]:
        """List an account's categories (fixed, savings, variable)."""
        return self.db.list_categories(account_id)

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def require_category(self, account_id: int, category_id: int) -> CategoryEntity:
        """Get an account's category by ID.

        Raises:
            NotFoundError: If the category does not exist or belongs to another account
        """
        category = self.db.get_category(category_id)
        if category is None or category.account_id != account_id:
            raise NotFoundError(category_not_found(category_id))
        return category

    def get_category_by_slug(self, account_id: int, slug: CategorySlug | str) -> CategoryEntity:
        """Get an account's category by slug.

        Raises:
            ValidationError: If the slug is not fixed, savings or variable
            NotFoundError: If the account has no such category
        """
        try:
            slug = CategorySlug(slug)
        except ValueError:
            raise ValidationError(
                f"Invalid category '{slug}'. Choose one of: fixed, savings, variable"
            )
        category = self.db.get_category_by_slug(account_id, slug)
        if category is None:
            raise NotFoundError(category_slug_not_found(slug.value, account_id))
        return category

    def default_distribution(self, account_id: int, amount: int) -> Distribution:
        """Split a deposit by the account's stored category percentages."""
        percentages = {cat.slug: cat.allocation_percentage for cat in self.list_categories(account_id)}
        return split_by_percentages(
            amount,
            percentages.get(CategorySlug.FIXED, 0),
            percentages.get(CategorySlug.SAVINGS, 0),
            percentages.get(CategorySlug.VARIABLE, 0),
        )

    def set_fixed_percentage(self, account_id: int, fixed_percentage: int) -> tuple[int, int, int]:
        """Change the fixed share and rebalance savings/variable from the remainder.

        Returns:
            The new (fixed, savings, variable) percentages
        """
        if not 0 <= fixed_percentage <= 100:
            raise ValidationError("Fixed percentage must be between 0 and 100")

        fixed, savings, variable = rebalance_percentages(fixed_percentage)
        with ledger_command(self.db, account_id, "set_fixed_percentage", fixed=fixed):
            for slug, percentage in (
                (CategorySlug.FIXED, fixed),
                (CategorySlug.SAVINGS, savings),
                (CategorySlug.VARIABLE, variable),
            ):
                category = self.get_category_by_slug(account_id, slug)
                self.db.update_category(category.id, allocation_percentage=percentage)
        return fixed, savings, variable

    def transfer(
        self, account_id: int, from_category_id: int, to_category_id: int, amount: int
    ) -> None:
        """Move money from one category to another.

        The source may go negative; overdrafts are only rejected when
        affordability enforcement is enabled.

        Args:
            account_id: Account ID
            from_category_id: Category debited
            to_category_id: Category credited
            amount: Amount in cents

        Raises:
            ValidationError: If amount is not positive, source equals destination,
                or the source cannot afford it under enforcement
            NotFoundError: If either category does not exist
        """
        if amount <= 0:
            raise ValidationError(non_positive_amount())
        if from_category_id == to_category_id:
            raise ValidationError("Cannot transfer a category to itself")

        with ledger_command(
            self.db,
            account_id,
            "transfer",
            amount=amount,
            from_category_id=from_category_id,
            to_category_id=to_category_id,
        ):
            source = self.require_category(account_id, from_category_id)
            self.require_category(account_id, to_category_id)
            if self.settings.enforce_affordability and amount > source.balance:
                raise ValidationError(insufficient_funds(source.display_name, source.balance, amount))

            self.db.adjust_category_balance(from_category_id, -amount)
            self.db.adjust_category_balance(to_category_id, amount)
