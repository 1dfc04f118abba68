"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including turning stored enum
strings back into domain enums.
"""

from payledger.domain import entities as domain
from payledger.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Goal as ORMGoal,
    PeriodicExpense as ORMPeriodicExpense,
    FixedBill as ORMFixedBill,
    Loan as ORMLoan,
    Income as ORMIncome,
    Expense as ORMExpense,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        account_id=orm_category.account_id,
        slug=domain.CategorySlug(orm_category.slug),
        display_name=orm_category.display_name,
        allocation_percentage=orm_category.allocation_percentage,
        balance=orm_category.balance,
        created_at=orm_category.created_at,
    )


def goal_to_domain(orm_goal: ORMGoal) -> domain.Goal:
    """Convert SQLAlchemy Goal model to domain Goal entity."""
    return domain.Goal(
        id=orm_goal.id,
        account_id=orm_goal.account_id,
        name=orm_goal.name,
        target_amount=orm_goal.target_amount,
        current_amount=orm_goal.current_amount,
        allocation_percentage=orm_goal.allocation_percentage,
        due_date=orm_goal.due_date,
        created_at=orm_goal.created_at,
    )


def periodic_expense_to_domain(orm_periodic: ORMPeriodicExpense) -> domain.PeriodicExpense:
    """Convert SQLAlchemy PeriodicExpense model to domain PeriodicExpense entity."""
    return domain.PeriodicExpense(
        id=orm_periodic.id,
        account_id=orm_periodic.account_id,
        name=orm_periodic.name,
        target_amount=orm_periodic.target_amount,
        current_amount=orm_periodic.current_amount,
        due_date=orm_periodic.due_date,
        frequency=domain.PeriodicFrequency(orm_periodic.frequency),
        created_at=orm_periodic.created_at,
    )


def fixed_bill_to_domain(orm_bill: ORMFixedBill) -> domain.FixedBill:
    """Convert SQLAlchemy FixedBill model to domain FixedBill entity."""
    return domain.FixedBill(
        id=orm_bill.id,
        account_id=orm_bill.account_id,
        name=orm_bill.name,
        amount=orm_bill.amount,
        frequency=domain.BillFrequency(orm_bill.frequency),
        fortnight=orm_bill.fortnight,
        icon=orm_bill.icon,
        created_at=orm_bill.created_at,
    )


def loan_to_domain(orm_loan: ORMLoan) -> domain.Loan:
    """Convert SQLAlchemy Loan model to domain Loan entity."""
    return domain.Loan(
        id=orm_loan.id,
        account_id=orm_loan.account_id,
        name=orm_loan.name,
        total_amount=orm_loan.total_amount,
        duration_value=orm_loan.duration_value,
        duration_type=domain.DurationType(orm_loan.duration_type),
        start_date=orm_loan.start_date,
        status=domain.LoanStatus(orm_loan.status),
        created_at=orm_loan.created_at,
    )


def income_to_domain(orm_income: ORMIncome) -> domain.Income:
    """Convert SQLAlchemy Income model to domain Income entity."""
    return domain.Income(
        id=orm_income.id,
        account_id=orm_income.account_id,
        date=orm_income.date,
        concept=orm_income.concept,
        amount=orm_income.amount,
        includes_gas=orm_income.includes_gas,
        created_at=orm_income.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        account_id=orm_expense.account_id,
        date=orm_expense.date,
        amount=orm_expense.amount,
        category_id=orm_expense.category_id,
        category_type=domain.ExpenseTarget(orm_expense.category_type),
        description=orm_expense.description,
        is_gas=orm_expense.is_gas,
        created_at=orm_expense.created_at,
    )
