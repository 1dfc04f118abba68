"""Account domain service."""

from typing import Optional

import structlog

from payledger.database.base import Database, RESETTABLE_COLLECTIONS
from payledger.domain.entities import Account as AccountEntity, CategorySlug
from payledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
)
from payledger.domain.unit_of_work import ledger_command

logger = structlog.get_logger(__name__)

# (slug, display name, allocation percentage) created with every account
DEFAULT_CATEGORIES = (
    (CategorySlug.FIXED, "Fixed Expenses", 50),
    (CategorySlug.SAVINGS, "Savings", 30),
    (CategorySlug.VARIABLE, "Discretionary", 20),
)


class AccountService:
    """Service for managing ledger accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str) -> int:
        """Create a new account together with its three categories.

        Args:
            name: Account name

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name is required")

        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")

        with self.db.transaction():
            account_id = self.db.create_account(name=name)
            for slug, display_name, percentage in DEFAULT_CATEGORIES:
                self.db.create_category(
                    account_id=account_id,
                    slug=slug,
                    display_name=display_name,
                    allocation_percentage=percentage,
                )

        logger.info("account_created", account_id=account_id, name=name)
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID, raising NotFoundError if it does not exist."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts.

        Returns:
            List of account entities
        """
        return self.db.list_accounts()

    def reset_all_data(self, account_id: int, confirm: bool = False) -> dict[str, int]:
        """Wipe an account's ledger.

        Deletes every expense, income, goal, periodic expense, fixed bill and
        loan, and zeroes every category balance. Categories themselves are
        kept. This cannot be undone.

        Args:
            account_id: Account to wipe
            confirm: Must be True; guards against accidental calls

        Returns:
            Number of deleted rows per collection

        Raises:
            ValidationError: If confirm is not True
            NotFoundError: If account not found
        """
        if confirm is not True:
            raise ValidationError("Reset is irreversible and must be explicitly confirmed")
        self.require_account(account_id)

        with ledger_command(self.db, account_id, "reset_all_data") as log:
            deleted = {
                collection: self.db.delete_all(account_id, collection)
                for collection in RESETTABLE_COLLECTIONS
            }
            self.db.reset_category_balances(account_id)
            log.info("ledger_reset", **deleted)
        return deleted
