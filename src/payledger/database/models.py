"""SQLAlchemy models for payledger database.

Every monetary column is an integer number of cents. Enum-valued columns
store the enum's string value; the mappers convert them back.
"""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Ledger owner model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    categories = relationship("Category", back_populates="account", cascade="all, delete-orphan")


class Category(Base):
    """Budget bucket model; one row per slug per account."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    slug = Column(String, nullable=False)
    display_name = Column(String, nullable=False)
    allocation_percentage = Column(Integer, default=0, nullable=False)
    balance = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("account_id", "slug", name="uq_account_category_slug"),)

    # Relationships
    account = relationship("Account", back_populates="categories")


class Goal(Base):
    """Savings goal model."""

    __tablename__ = "goals"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    name = Column(String, nullable=False)
    target_amount = Column(Integer, nullable=False)
    current_amount = Column(Integer, default=0, nullable=False)
    allocation_percentage = Column(Integer, default=0, nullable=False)
    due_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class PeriodicExpense(Base):
    """Sinking fund model."""

    __tablename__ = "periodic_expenses"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    name = Column(String, nullable=False)
    target_amount = Column(Integer, nullable=False)
    current_amount = Column(Integer, default=0, nullable=False)
    due_date = Column(Date, nullable=False)
    frequency = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class FixedBill(Base):
    """Recurring bill model."""

    __tablename__ = "fixed_bills"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    name = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)
    frequency = Column(String, nullable=False)
    fortnight = Column(Integer, nullable=True)
    icon = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Loan(Base):
    """Loan amortization terms model.

    There is deliberately no repaid-amount column; progress is summed from
    loan-type expenses.
    """

    __tablename__ = "loans"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    name = Column(String, nullable=False)
    total_amount = Column(Integer, nullable=False)
    duration_value = Column(Integer, nullable=False)
    duration_type = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    status = Column(String, default="active", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Income(Base):
    """Income history model."""

    __tablename__ = "incomes"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    date = Column(Date, nullable=False)
    concept = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)
    includes_gas = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Expense(Base):
    """Expense ledger model.

    ``category_id`` points at a category, goal, periodic expense or loan
    depending on ``category_type``, so it carries no foreign key.
    """

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    date = Column(Date, nullable=False)
    amount = Column(Integer, nullable=False)
    category_id = Column(Integer, nullable=False)
    category_type = Column(String, nullable=False)
    description = Column(String, default="", nullable=False)
    is_gas = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
