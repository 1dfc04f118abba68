"""Abstract record store interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from payledger.domain.entities import (
    Account,
    BillFrequency,
    Category,
    CategorySlug,
    DurationType,
    Expense,
    ExpenseTarget,
    FixedBill,
    Goal,
    Income,
    Loan,
    LoanStatus,
    PeriodicExpense,
    PeriodicFrequency,
)

# Collections wiped by a ledger reset, in deletion order. Categories are
# never deleted; their balances are zeroed instead.
RESETTABLE_COLLECTIONS = (
    "expenses",
    "incomes",
    "goals",
    "periodic_expenses",
    "fixed_bills",
    "loans",
)


class Database(ABC):
    """Abstract record store for payledger.

    Every write is committed on its own unless it runs inside
    ``transaction()``, in which case all writes of the block commit or roll
    back together.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Group the writes of a block into one atomic commit.

        Raises:
            StoreError: If the store fails; every write of the block is
                rolled back
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        account_id: int,
        slug: CategorySlug,
        display_name: str,
        allocation_percentage: int,
        balance: int = 0,
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_slug(self, account_id: int, slug: CategorySlug) -> Optional[Category]:
        """Get an account's category by slug."""
        pass

    @abstractmethod
    def list_categories(self, account_id: int) -> list[Category]:
        """List an account's categories in creation order."""
        pass

    @abstractmethod
    def adjust_category_balance(self, category_id: int, delta: int) -> int:
        """Atomically add ``delta`` cents to a category balance. Returns the new balance."""
        pass

    @abstractmethod
    def set_category_balance(self, category_id: int, balance: int) -> None:
        """Overwrite a category balance."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        display_name: Optional[str] = None,
        allocation_percentage: Optional[int] = None,
    ) -> None:
        """Update category display fields."""
        pass

    # Goal operations
    @abstractmethod
    def create_goal(
        self,
        account_id: int,
        name: str,
        target_amount: int,
        allocation_percentage: int = 0,
        due_date: Optional[date] = None,
        current_amount: int = 0,
    ) -> int:
        """Create a goal. Returns goal ID."""
        pass

    @abstractmethod
    def get_goal(self, goal_id: int) -> Optional[Goal]:
        """Get goal by ID."""
        pass

    @abstractmethod
    def list_goals(self, account_id: int) -> list[Goal]:
        """List an account's goals in creation order."""
        pass

    @abstractmethod
    def update_goal(
        self,
        goal_id: int,
        name: Optional[str] = None,
        target_amount: Optional[int] = None,
        allocation_percentage: Optional[int] = None,
        due_date: Optional[date] = None,
        clear_due_date: bool = False,
    ) -> None:
        """Update goal fields; ``None`` leaves a field unchanged."""
        pass

    @abstractmethod
    def adjust_goal_amount(self, goal_id: int, delta: int) -> int:
        """Atomically add ``delta`` cents to a goal. Returns the new amount."""
        pass

    @abstractmethod
    def set_goal_amount(self, goal_id: int, amount: int) -> None:
        """Overwrite a goal's current amount."""
        pass

    @abstractmethod
    def delete_goal(self, goal_id: int) -> None:
        """Delete a goal."""
        pass

    # Periodic expense operations
    @abstractmethod
    def create_periodic_expense(
        self,
        account_id: int,
        name: str,
        target_amount: int,
        due_date: date,
        frequency: PeriodicFrequency,
        current_amount: int = 0,
    ) -> int:
        """Create a periodic expense. Returns its ID."""
        pass

    @abstractmethod
    def get_periodic_expense(self, periodic_id: int) -> Optional[PeriodicExpense]:
        """Get periodic expense by ID."""
        pass

    @abstractmethod
    def list_periodic_expenses(self, account_id: int) -> list[PeriodicExpense]:
        """List an account's periodic expenses in creation order."""
        pass

    @abstractmethod
    def update_periodic_expense(
        self,
        periodic_id: int,
        name: Optional[str] = None,
        target_amount: Optional[int] = None,
        due_date: Optional[date] = None,
        frequency: Optional[PeriodicFrequency] = None,
    ) -> None:
        """Update periodic expense fields; ``None`` leaves a field unchanged."""
        pass

    @abstractmethod
    def adjust_periodic_amount(self, periodic_id: int, delta: int) -> int:
        """Atomically add ``delta`` cents to a sinking fund. Returns the new amount."""
        pass

    @abstractmethod
    def set_periodic_amount(self, periodic_id: int, amount: int) -> None:
        """Overwrite a sinking fund's current amount."""
        pass

    @abstractmethod
    def delete_periodic_expense(self, periodic_id: int) -> None:
        """Delete a periodic expense."""
        pass

    # Fixed bill operations
    @abstractmethod
    def create_fixed_bill(
        self,
        account_id: int,
        name: str,
        amount: int,
        frequency: BillFrequency,
        fortnight: Optional[int] = None,
        icon: Optional[str] = None,
    ) -> int:
        """Create a fixed bill. Returns its ID."""
        pass

    @abstractmethod
    def get_fixed_bill(self, bill_id: int) -> Optional[FixedBill]:
        """Get fixed bill by ID."""
        pass

    @abstractmethod
    def list_fixed_bills(self, account_id: int) -> list[FixedBill]:
        """List an account's fixed bills in creation order."""
        pass

    @abstractmethod
    def update_fixed_bill(
        self,
        bill_id: int,
        name: Optional[str] = None,
        amount: Optional[int] = None,
        frequency: Optional[BillFrequency] = None,
        fortnight: Optional[int] = None,
        icon: Optional[str] = None,
        clear_fortnight: bool = False,
    ) -> None:
        """Update fixed bill fields; ``None`` leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_fixed_bill(self, bill_id: int) -> None:
        """Delete a fixed bill."""
        pass

    # Loan operations
    @abstractmethod
    def create_loan(
        self,
        account_id: int,
        name: str,
        total_amount: int,
        duration_value: int,
        duration_type: DurationType,
        start_date: date,
        status: LoanStatus = LoanStatus.ACTIVE,
    ) -> int:
        """Create a loan. Returns its ID."""
        pass

    @abstractmethod
    def get_loan(self, loan_id: int) -> Optional[Loan]:
        """Get loan by ID."""
        pass

    @abstractmethod
    def list_loans(self, account_id: int, status: Optional[LoanStatus] = None) -> list[Loan]:
        """List an account's loans, optionally filtered by status."""
        pass

    @abstractmethod
    def update_loan(
        self,
        loan_id: int,
        name: Optional[str] = None,
        total_amount: Optional[int] = None,
        duration_value: Optional[int] = None,
        duration_type: Optional[DurationType] = None,
        start_date: Optional[date] = None,
        status: Optional[LoanStatus] = None,
    ) -> None:
        """Update loan fields; ``None`` leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_loan(self, loan_id: int) -> None:
        """Delete a loan."""
        pass

    # Income operations
    @abstractmethod
    def create_income(
        self,
        account_id: int,
        date: date,
        concept: str,
        amount: int,
        includes_gas: bool = False,
    ) -> int:
        """Create an income record. Returns its ID."""
        pass

    @abstractmethod
    def get_income(self, income_id: int) -> Optional[Income]:
        """Get income by ID."""
        pass

    @abstractmethod
    def list_incomes(
        self,
        account_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Income]:
        """List an account's incomes, newest first."""
        pass

    @abstractmethod
    def update_income(
        self,
        income_id: int,
        date: Optional[date] = None,
        concept: Optional[str] = None,
        amount: Optional[int] = None,
    ) -> None:
        """Update income fields; ``None`` leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_income(self, income_id: int) -> None:
        """Delete an income record."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        account_id: int,
        date: date,
        amount: int,
        category_id: int,
        category_type: ExpenseTarget,
        description: str = "",
        is_gas: bool = False,
    ) -> int:
        """Create an expense record. Returns its ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        account_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_type: Optional[ExpenseTarget] = None,
        category_id: Optional[int] = None,
    ) -> list[Expense]:
        """List an account's expenses with optional filters, newest first."""
        pass

    @abstractmethod
    def update_expense(
        self,
        expense_id: int,
        date: Optional[date] = None,
        amount: Optional[int] = None,
        category_id: Optional[int] = None,
        category_type: Optional[ExpenseTarget] = None,
        description: Optional[str] = None,
        is_gas: Optional[bool] = None,
    ) -> None:
        """Update expense fields; ``None`` leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense record."""
        pass

    # Bulk operations
    @abstractmethod
    def delete_all(self, account_id: int, collection: str) -> int:
        """Delete every row of one collection for an account. Returns the row count."""
        pass

    @abstractmethod
    def reset_category_balances(self, account_id: int) -> None:
        """Set every category balance of an account to zero."""
        pass
