"""Tests for the mutation paths that move money between balances."""

import threading
from datetime import date

import pytest
from structlog.testing import capture_logs

from payledger.domain.account import AccountService
from payledger.domain.category import CategoryService
from payledger.domain.entities import CategorySlug, Distribution, ExpenseTarget, GasIncomePolicy
from payledger.domain.errors import ConflictError, NotFoundError, StoreError, ValidationError
from payledger.domain.expense import ExpenseService
from payledger.domain.income import INCOME_NOT_ADJUSTED_NOTICE, IncomeService
from payledger.domain.loan import LoanService
from payledger.domain.settings import LedgerSettings

FIXED = CategorySlug.FIXED
SAVINGS = CategorySlug.SAVINGS
VARIABLE = CategorySlug.VARIABLE


class TestEndToEnd:
    """The basic paycheck, transfer, spend, refund cycle."""

    def test_paycheck_transfer_spend_and_refund(
        self, funded_account, categories, category_service, expense_service, balances
    ):
        account_id = funded_account.id
        assert balances(account_id) == {FIXED: 5000, SAVINGS: 3000, VARIABLE: 2000}

        category_service.transfer(account_id, categories[VARIABLE], categories[SAVINGS], 500)
        assert balances(account_id) == {FIXED: 5000, SAVINGS: 3500, VARIABLE: 1500}

        expense_id = expense_service.add_expense(account_id, 300, ExpenseTarget.FIXED)
        assert balances(account_id)[FIXED] == 4700

        expense_service.delete_expense(expense_id)
        assert balances(account_id)[FIXED] == 5000
        assert expense_service.list_expenses(account_id) == []


class TestIncome:
    """Tests for deposits."""

    def test_income_is_recorded(self, funded_account, income_service):
        (income,) = income_service.list_incomes(funded_account.id)
        assert income.amount == 10000
        assert income.concept == "Salary"
        assert income.includes_gas is False
        assert income.date == date.today()

    def test_each_category_gets_its_named_share(self, sample_account, income_service, balances):
        income_service.record_income(
            sample_account.id, 900, "Bonus", Distribution(fixed=100, savings=200, variable=600)
        )
        assert balances(sample_account.id) == {FIXED: 100, SAVINGS: 200, VARIABLE: 600}

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_amount_rejected(self, sample_account, income_service, amount):
        with pytest.raises(ValidationError, match="greater than zero"):
            income_service.record_income(sample_account.id, amount, "Salary", Distribution())

    def test_negative_share_rejected(self, sample_account, income_service):
        with pytest.raises(ValidationError, match="negative"):
            income_service.record_income(
                sample_account.id, 100, "Salary", Distribution(fixed=200, savings=-100)
            )

    def test_empty_concept_rejected(self, sample_account, income_service):
        with pytest.raises(ValidationError, match="Concept"):
            income_service.record_income(sample_account.id, 100, "   ", Distribution(fixed=100))

    def test_external_income_credits_one_category(
        self, funded_account, categories, income_service, balances
    ):
        income_service.record_external_income(
            funded_account.id, 750, categories[SAVINGS], "Gift", date=date(2025, 2, 1)
        )
        assert balances(funded_account.id) == {FIXED: 5000, SAVINGS: 3750, VARIABLE: 2000}
        (gift,) = [i for i in income_service.list_incomes(funded_account.id) if i.concept == "Gift"]
        assert gift.amount == 750
        assert gift.date == date(2025, 2, 1)

    def test_external_income_by_slug(self, sample_account, income_service, balances):
        income_service.record_income_by_slug(sample_account.id, 400, VARIABLE, "Refund")
        assert balances(sample_account.id)[VARIABLE] == 400

    def test_external_income_unknown_category(self, sample_account, income_service):
        with pytest.raises(NotFoundError):
            income_service.record_external_income(sample_account.id, 100, 9999, "Gift")

    def test_income_update_leaves_balances_alone(self, funded_account, income_service, balances):
        (income,) = income_service.list_incomes(funded_account.id)
        before = balances(funded_account.id)

        notice = income_service.update_income(income.id, amount=20000, concept="Salary (fixed)")

        assert notice == INCOME_NOT_ADJUSTED_NOTICE
        assert balances(funded_account.id) == before
        updated = income_service.get_income(income.id)
        assert updated.amount == 20000
        assert updated.concept == "Salary (fixed)"

    def test_income_delete_leaves_balances_alone(self, funded_account, income_service, balances):
        (income,) = income_service.list_incomes(funded_account.id)
        before = balances(funded_account.id)

        assert income_service.delete_income(income.id) == INCOME_NOT_ADJUSTED_NOTICE
        assert balances(funded_account.id) == before
        assert income_service.get_income(income.id) is None

    def test_missing_income(self, income_service):
        with pytest.raises(NotFoundError, match="Income 42 not found"):
            income_service.delete_income(42)


class TestGasPolicy:
    """Gas deposits feed the gas sub-ledger, never the regular split."""

    def test_isolated_gas_deposit_touches_no_category(
        self, sample_account, income_service, summary_service, balances
    ):
        income_service.record_income(
            sample_account.id, 1500, "Gas", Distribution(fixed=1500), includes_gas=True
        )
        assert balances(sample_account.id) == {FIXED: 0, SAVINGS: 0, VARIABLE: 0}
        assert summary_service.get_overview(sample_account.id).gas_available == 1500

    def test_fixed_gas_policy_credits_fixed(self, temp_db, sample_account, balances):
        service = IncomeService(temp_db, LedgerSettings(gas_policy=GasIncomePolicy.FIXED))
        service.record_income(
            sample_account.id, 1500, "Gas", Distribution(variable=1500), includes_gas=True
        )
        assert balances(sample_account.id) == {FIXED: 1500, SAVINGS: 0, VARIABLE: 0}

    def test_gas_expense_touches_no_balance(
        self, funded_account, income_service, expense_service, summary_service, balances
    ):
        income_service.record_income(
            funded_account.id, 1500, "Gas", Distribution(), includes_gas=True
        )
        before = balances(funded_account.id)

        expense_id = expense_service.add_expense(
            funded_account.id, 400, ExpenseTarget.VARIABLE, is_gas=True
        )
        assert balances(funded_account.id) == before
        assert summary_service.get_overview(funded_account.id).gas_available == 1100

        expense_service.delete_expense(expense_id)
        assert balances(funded_account.id) == before
        assert summary_service.get_overview(funded_account.id).gas_available == 1500


class TestTransfer:
    """Tests for moving money between categories."""

    def test_transfer_may_overdraw_without_enforcement(
        self, funded_account, categories, category_service, balances
    ):
        category_service.transfer(funded_account.id, categories[VARIABLE], categories[FIXED], 2500)
        assert balances(funded_account.id) == {FIXED: 7500, SAVINGS: 3000, VARIABLE: -500}

    def test_transfer_to_itself_rejected(self, funded_account, categories, category_service):
        with pytest.raises(ValidationError, match="itself"):
            category_service.transfer(
                funded_account.id, categories[FIXED], categories[FIXED], 100
            )

    @pytest.mark.parametrize("amount", [0, -1])
    def test_non_positive_transfer_rejected(
        self, funded_account, categories, category_service, amount
    ):
        with pytest.raises(ValidationError):
            category_service.transfer(
                funded_account.id, categories[FIXED], categories[SAVINGS], amount
            )

    def test_transfer_to_other_accounts_category_rejected(
        self, funded_account, categories, account_service, category_service, temp_db, balances
    ):
        other_id = account_service.create_account("Other")
        other_fixed = temp_db.get_category_by_slug(other_id, FIXED)

        with pytest.raises(NotFoundError):
            category_service.transfer(funded_account.id, categories[FIXED], other_fixed.id, 100)
        assert balances(funded_account.id)[FIXED] == 5000

    def test_enforced_transfer_rejects_overdraft(
        self, temp_db, funded_account, categories, balances
    ):
        service = CategoryService(temp_db, LedgerSettings(enforce_affordability=True))
        with pytest.raises(ValidationError, match="Insufficient funds"):
            service.transfer(funded_account.id, categories[VARIABLE], categories[FIXED], 2001)
        assert balances(funded_account.id) == {FIXED: 5000, SAVINGS: 3000, VARIABLE: 2000}


class TestExpenses:
    """Tests for recording, editing and reversing expenses."""

    def test_debit_floors_at_zero(self, funded_account, expense_service, balances):
        expense_service.add_expense(funded_account.id, 2500, ExpenseTarget.VARIABLE)
        assert balances(funded_account.id)[VARIABLE] == 0

    def test_explicit_category_id(self, funded_account, categories, expense_service, balances):
        expense_service.add_expense(
            funded_account.id, 100, ExpenseTarget.SAVINGS, category_id=categories[SAVINGS]
        )
        assert balances(funded_account.id)[SAVINGS] == 2900

    def test_expense_fields_are_stored(self, funded_account, categories, expense_service):
        expense_id = expense_service.add_expense(
            funded_account.id,
            450,
            "variable",
            description="Groceries",
            date=date(2025, 3, 2),
        )
        expense = expense_service.get_expense(expense_id)
        assert expense.amount == 450
        assert expense.category_type is ExpenseTarget.VARIABLE
        assert expense.category_id == categories[VARIABLE]
        assert expense.description == "Groceries"
        assert expense.date == date(2025, 3, 2)
        assert expense.is_gas is False

    def test_unknown_type_rejected(self, funded_account, expense_service):
        with pytest.raises(ValidationError, match="Invalid expense type"):
            expense_service.add_expense(funded_account.id, 100, "rent")

    def test_goal_expense_needs_id(self, funded_account, expense_service):
        with pytest.raises(ValidationError, match="ID is required"):
            expense_service.add_expense(funded_account.id, 100, ExpenseTarget.GOAL)

    def test_missing_target_rejected(self, funded_account, expense_service):
        with pytest.raises(NotFoundError, match="Goal 77 not found"):
            expense_service.add_expense(funded_account.id, 100, ExpenseTarget.GOAL, category_id=77)
        assert expense_service.list_expenses(funded_account.id) == []

    def test_goal_and_periodic_targets(
        self, funded_account, expense_service, goal_service, periodic_service
    ):
        goal_id = goal_service.add_goal(funded_account.id, "Trip", 10000, current_amount=1000)
        periodic_id = periodic_service.add_periodic_expense(
            funded_account.id, "Insurance", 6000, date(2030, 1, 1), current_amount=800
        )

        goal_expense = expense_service.add_expense(
            funded_account.id, 300, ExpenseTarget.GOAL, category_id=goal_id
        )
        expense_service.add_expense(
            funded_account.id, 900, ExpenseTarget.PERIODIC, category_id=periodic_id
        )
        assert goal_service.get_goal(goal_id).current_amount == 700
        assert periodic_service.get_periodic_expense(periodic_id).current_amount == 0

        expense_service.delete_expense(goal_expense)
        assert goal_service.get_goal(goal_id).current_amount == 1000

    def test_add_then_delete_restores_every_balance(
        self, funded_account, expense_service, goal_service, balances
    ):
        goal_id = goal_service.add_goal(funded_account.id, "Trip", 10000, current_amount=1000)
        before = (balances(funded_account.id), goal_service.get_goal(goal_id).current_amount)

        for target, target_id in (
            (ExpenseTarget.FIXED, None),
            (ExpenseTarget.SAVINGS, None),
            (ExpenseTarget.VARIABLE, None),
            (ExpenseTarget.GOAL, goal_id),
        ):
            expense_id = expense_service.add_expense(
                funded_account.id, 250, target, category_id=target_id
            )
            expense_service.delete_expense(expense_id)

        after = (balances(funded_account.id), goal_service.get_goal(goal_id).current_amount)
        assert after == before

    def test_conservation(
        self, funded_account, categories, income_service, category_service, expense_service, balances
    ):
        account_id = funded_account.id
        income_service.record_income(
            account_id, 4000, "Freelance", Distribution(fixed=1000, savings=1000, variable=2000)
        )
        category_service.transfer(account_id, categories[SAVINGS], categories[VARIABLE], 700)
        kept = expense_service.add_expense(account_id, 1200, ExpenseTarget.VARIABLE)
        reversed_id = expense_service.add_expense(account_id, 300, ExpenseTarget.FIXED)
        expense_service.add_expense(account_id, 800, ExpenseTarget.SAVINGS)
        expense_service.delete_expense(reversed_id)

        total_income = sum(i.amount for i in income_service.list_incomes(account_id))
        total_spent = sum(e.amount for e in expense_service.list_expenses(account_id))
        assert sum(balances(account_id).values()) == total_income - total_spent
        assert expense_service.get_expense(kept) is not None

    def test_update_equals_delete_then_add(
        self, account_service, income_service, expense_service, balances
    ):
        paycheck = Distribution(fixed=5000, savings=3000, variable=2000)
        edited = account_service.create_account("Edited")
        replayed = account_service.create_account("Replayed")
        for account_id in (edited, replayed):
            income_service.record_income(account_id, 10000, "Salary", paycheck)

        expense_id = expense_service.add_expense(edited, 1200, ExpenseTarget.VARIABLE)
        expense_service.update_expense(expense_id, amount=700, category_type=ExpenseTarget.FIXED)

        old_id = expense_service.add_expense(replayed, 1200, ExpenseTarget.VARIABLE)
        expense_service.delete_expense(old_id)
        expense_service.add_expense(replayed, 700, ExpenseTarget.FIXED)

        assert balances(edited) == balances(replayed)
        assert balances(edited) == {FIXED: 4300, SAVINGS: 3000, VARIABLE: 2000}
        expense = expense_service.get_expense(expense_id)
        assert expense.category_type is ExpenseTarget.FIXED
        assert expense.amount == 700

    def test_update_within_same_target(self, funded_account, expense_service, balances):
        expense_id = expense_service.add_expense(funded_account.id, 500, ExpenseTarget.VARIABLE)
        expense_service.update_expense(expense_id, amount=1500, description="Dinner")

        assert balances(funded_account.id)[VARIABLE] == 500
        assert expense_service.get_expense(expense_id).description == "Dinner"

    def test_update_to_gas_refunds_target(self, funded_account, expense_service, balances):
        expense_id = expense_service.add_expense(funded_account.id, 500, ExpenseTarget.VARIABLE)
        expense_service.update_expense(expense_id, is_gas=True)
        assert balances(funded_account.id)[VARIABLE] == 2000

    def test_update_missing_expense(self, expense_service):
        with pytest.raises(NotFoundError, match="Expense 5 not found"):
            expense_service.update_expense(5, amount=100)

    def test_delete_with_orphaned_target_is_skipped(
        self, funded_account, expense_service, goal_service, balances
    ):
        goal_id = goal_service.add_goal(funded_account.id, "Trip", 10000, current_amount=1000)
        expense_id = expense_service.add_expense(
            funded_account.id, 300, ExpenseTarget.GOAL, category_id=goal_id
        )
        goal_service.delete_goal(goal_id)
        before = balances(funded_account.id)

        with capture_logs() as logs:
            expense_service.delete_expense(expense_id)

        assert expense_service.get_expense(expense_id) is None
        assert balances(funded_account.id) == before
        assert any(entry["event"] == "reversal_target_missing" for entry in logs)

    def test_update_with_orphaned_target_changes_only_the_record(
        self, funded_account, expense_service, goal_service, balances
    ):
        goal_id = goal_service.add_goal(funded_account.id, "Trip", 10000, current_amount=1000)
        expense_id = expense_service.add_expense(
            funded_account.id, 300, ExpenseTarget.GOAL, category_id=goal_id
        )
        goal_service.delete_goal(goal_id)
        before = balances(funded_account.id)

        with capture_logs() as logs:
            expense_service.update_expense(expense_id, amount=400, description="Flights")

        expense = expense_service.get_expense(expense_id)
        assert expense.description == "Flights"
        assert expense.amount == 400
        assert expense.category_id == goal_id
        assert balances(funded_account.id) == before
        events = [entry["event"] for entry in logs]
        assert "reversal_target_missing" in events
        assert "debit_target_missing" in events
        assert "ledger_command_rolled_back" not in events

    def test_orphaned_expense_can_move_to_a_category(
        self, funded_account, expense_service, goal_service, balances
    ):
        goal_id = goal_service.add_goal(funded_account.id, "Trip", 10000, current_amount=1000)
        expense_id = expense_service.add_expense(
            funded_account.id, 300, ExpenseTarget.GOAL, category_id=goal_id
        )
        goal_service.delete_goal(goal_id)

        expense_service.update_expense(expense_id, category_type=ExpenseTarget.VARIABLE)

        assert balances(funded_account.id)[VARIABLE] == 1700
        assert expense_service.get_expense(expense_id).category_type is ExpenseTarget.VARIABLE

    def test_orphaned_expense_cannot_move_to_missing_target(
        self, funded_account, expense_service, goal_service
    ):
        goal_id = goal_service.add_goal(funded_account.id, "Trip", 10000, current_amount=1000)
        expense_id = expense_service.add_expense(
            funded_account.id, 300, ExpenseTarget.GOAL, category_id=goal_id
        )
        goal_service.delete_goal(goal_id)

        with pytest.raises(NotFoundError, match="Goal 99 not found"):
            expense_service.update_expense(expense_id, category_id=99)

    def test_category_id_must_match_type(self, funded_account, categories, expense_service, balances):
        with pytest.raises(ValidationError, match="is the variable category, not fixed"):
            expense_service.add_expense(
                funded_account.id, 100, ExpenseTarget.FIXED, category_id=categories[VARIABLE]
            )

        assert expense_service.list_expenses(funded_account.id) == []
        assert balances(funded_account.id) == {FIXED: 5000, SAVINGS: 3000, VARIABLE: 2000}

    def test_update_category_id_must_match_type(
        self, funded_account, categories, expense_service, balances
    ):
        expense_id = expense_service.add_expense(funded_account.id, 100, ExpenseTarget.FIXED)

        with pytest.raises(ValidationError, match="is the savings category, not fixed"):
            expense_service.update_expense(expense_id, category_id=categories[SAVINGS])

        assert balances(funded_account.id) == {FIXED: 4900, SAVINGS: 3000, VARIABLE: 2000}
        assert expense_service.get_expense(expense_id).category_id == categories[FIXED]

    def test_loan_expense_delete_does_not_credit(
        self, funded_account, categories, expense_service, loan_service, balances
    ):
        loan_id = loan_service.add_loan(funded_account.id, "Car", 60000, 12)
        payment_id = loan_service.pay_loan(loan_id, 2500, categories[FIXED])
        assert balances(funded_account.id)[FIXED] == 2500

        expense_service.delete_expense(payment_id)
        assert balances(funded_account.id)[FIXED] == 2500
        assert loan_service.get_progress(loan_id).paid_amount == 0


class TestAffordability:
    """Optional rejection of spends larger than the source."""

    @pytest.fixture
    def strict(self, temp_db):
        return ExpenseService(temp_db, LedgerSettings(enforce_affordability=True))

    def test_rejects_overspend(self, strict, funded_account, balances):
        with pytest.raises(ValidationError, match="Insufficient funds"):
            strict.add_expense(funded_account.id, 2001, ExpenseTarget.VARIABLE)
        assert balances(funded_account.id)[VARIABLE] == 2000
        assert strict.list_expenses(funded_account.id) == []

    def test_allows_exact_balance(self, strict, funded_account, balances):
        strict.add_expense(funded_account.id, 2000, ExpenseTarget.VARIABLE)
        assert balances(funded_account.id)[VARIABLE] == 0

    def test_gas_checks_gas_budget(self, strict, funded_account, income_service):
        income_service.record_income(funded_account.id, 500, "Gas", Distribution(), includes_gas=True)
        strict.add_expense(funded_account.id, 500, ExpenseTarget.VARIABLE, is_gas=True)
        with pytest.raises(ValidationError, match="gas budget"):
            strict.add_expense(funded_account.id, 1, ExpenseTarget.VARIABLE, is_gas=True)

    def test_update_counts_refund(self, strict, funded_account, balances):
        expense_id = strict.add_expense(funded_account.id, 1500, ExpenseTarget.VARIABLE)
        strict.update_expense(expense_id, amount=2000)
        assert balances(funded_account.id)[VARIABLE] == 0

    def test_update_rejected_rolls_back_refund(self, strict, funded_account, balances):
        expense_id = strict.add_expense(funded_account.id, 1500, ExpenseTarget.VARIABLE)
        with pytest.raises(ValidationError):
            strict.update_expense(expense_id, amount=2500)
        assert balances(funded_account.id)[VARIABLE] == 500
        assert strict.get_expense(expense_id).amount == 1500

    def test_loan_overpayment_rejected(self, temp_db, funded_account, categories):
        loans = LoanService(temp_db, LedgerSettings(enforce_affordability=True))
        loan_id = loans.add_loan(funded_account.id, "Phone", 1000, 2, "fortnights")
        with pytest.raises(ValidationError, match="loan 'Phone'"):
            loans.pay_loan(loan_id, 1500, categories[FIXED])


class TestAtomicity:
    """A failure part-way through a command leaves no partial writes."""

    def test_transfer_rolls_back_first_leg(
        self, temp_db, funded_account, categories, category_service, balances, monkeypatch
    ):
        original = temp_db.adjust_category_balance
        calls = []

        def fail_second_leg(category_id, delta):
            calls.append(category_id)
            if len(calls) == 2:
                raise StoreError("disk full")
            return original(category_id, delta)

        monkeypatch.setattr(temp_db, "adjust_category_balance", fail_second_leg)

        with pytest.raises(StoreError):
            category_service.transfer(
                funded_account.id, categories[VARIABLE], categories[SAVINGS], 500
            )

        monkeypatch.undo()
        assert balances(funded_account.id) == {FIXED: 5000, SAVINGS: 3000, VARIABLE: 2000}

    def test_expense_row_rolled_back_when_debit_fails(
        self, temp_db, funded_account, expense_service, balances, monkeypatch
    ):
        def fail(category_id, balance):
            raise StoreError("disk full")

        monkeypatch.setattr(temp_db, "set_category_balance", fail)

        with pytest.raises(StoreError):
            expense_service.add_expense(funded_account.id, 300, ExpenseTarget.FIXED)

        monkeypatch.undo()
        assert expense_service.list_expenses(funded_account.id) == []
        assert balances(funded_account.id)[FIXED] == 5000

    def test_income_rolled_back_when_category_missing(
        self, temp_db, sample_account, income_service, monkeypatch
    ):
        monkeypatch.setattr(temp_db, "get_category_by_slug", lambda account_id, slug: None)

        with pytest.raises(NotFoundError):
            income_service.record_income(
                sample_account.id, 100, "Salary", Distribution(fixed=100)
            )

        monkeypatch.undo()
        assert income_service.list_incomes(sample_account.id) == []

    def test_rollback_is_logged(self, temp_db, funded_account, categories, category_service, monkeypatch):
        def fail(category_id, delta):
            raise StoreError("disk full")

        monkeypatch.setattr(temp_db, "adjust_category_balance", fail)

        with capture_logs() as logs:
            with pytest.raises(StoreError):
                category_service.transfer(
                    funded_account.id, categories[VARIABLE], categories[SAVINGS], 500
                )

        events = [entry["event"] for entry in logs]
        assert "ledger_command_rolled_back" in events
        assert "ledger_command_applied" not in events


class TestConcurrency:
    """Commands racing on one account are applied one after the other."""

    def run_together(self, *calls):
        barrier = threading.Barrier(len(calls))
        errors = []

        def worker(call):
            barrier.wait()
            try:
                call()
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(call,)) for call in calls]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return errors

    def test_concurrent_updates_refund_old_amount_once(
        self, funded_account, expense_service, balances
    ):
        expense_id = expense_service.add_expense(funded_account.id, 500, ExpenseTarget.VARIABLE)

        errors = self.run_together(
            lambda: expense_service.update_expense(
                expense_id, amount=700, category_type=ExpenseTarget.FIXED
            ),
            lambda: expense_service.update_expense(
                expense_id, amount=300, category_type=ExpenseTarget.SAVINGS
            ),
        )

        assert errors == []
        expense = expense_service.get_expense(expense_id)
        result = balances(funded_account.id)
        assert result[VARIABLE] == 2000
        assert sum(result.values()) == 10000 - expense.amount

    def test_concurrent_deletes_refund_once(self, funded_account, expense_service, balances):
        expense_id = expense_service.add_expense(funded_account.id, 500, ExpenseTarget.VARIABLE)

        errors = self.run_together(
            lambda: expense_service.delete_expense(expense_id),
            lambda: expense_service.delete_expense(expense_id),
        )

        assert len(errors) <= 1
        assert all(isinstance(error, NotFoundError) for error in errors)
        assert balances(funded_account.id)[VARIABLE] == 2000


class TestReset:
    """Tests for wiping an account."""

    def test_reset_requires_confirmation(self, funded_account, account_service, balances):
        with pytest.raises(ValidationError, match="confirmed"):
            account_service.reset_all_data(funded_account.id)
        assert balances(funded_account.id)[FIXED] == 5000

    def test_reset_clears_everything_but_categories(
        self,
        funded_account,
        account_service,
        expense_service,
        goal_service,
        bill_service,
        loan_service,
        income_service,
        balances,
    ):
        account_id = funded_account.id
        expense_service.add_expense(account_id, 100, ExpenseTarget.FIXED)
        goal_service.add_goal(account_id, "Trip", 5000)
        bill_service.add_fixed_bill(account_id, "Rent", 3000)
        loan_service.add_loan(account_id, "Car", 60000, 12)

        deleted = account_service.reset_all_data(account_id, confirm=True)

        assert deleted["expenses"] == 1
        assert deleted["incomes"] == 1
        assert deleted["goals"] == 1
        assert deleted["fixed_bills"] == 1
        assert deleted["loans"] == 1
        assert deleted["periodic_expenses"] == 0
        assert balances(account_id) == {FIXED: 0, SAVINGS: 0, VARIABLE: 0}
        assert income_service.list_incomes(account_id) == []
        assert goal_service.list_goals(account_id) == []

    def test_reset_only_touches_one_account(
        self, funded_account, account_service, income_service, balances
    ):
        other = account_service.create_account("Other")
        income_service.record_income(other, 100, "Salary", Distribution(fixed=100))

        account_service.reset_all_data(funded_account.id, confirm=True)

        assert balances(other)[FIXED] == 100

    def test_reset_unknown_account(self, account_service):
        with pytest.raises(NotFoundError):
            account_service.reset_all_data(999, confirm=True)


class TestAccounts:
    """Tests for account setup."""

    def test_create_account_creates_three_categories(self, temp_db, account_service):
        account_id = account_service.create_account("Household")
        cats = {c.slug: c for c in temp_db.list_categories(account_id)}

        assert set(cats) == {FIXED, SAVINGS, VARIABLE}
        assert [cats[s].allocation_percentage for s in (FIXED, SAVINGS, VARIABLE)] == [50, 30, 20]
        assert all(c.balance == 0 for c in cats.values())

    def test_duplicate_name_rejected(self, sample_account, account_service):
        with pytest.raises(ConflictError):
            account_service.create_account("Test Account")

    def test_empty_name_rejected(self, account_service):
        with pytest.raises(ValidationError):
            account_service.create_account("  ")

    def test_services_accept_default_settings(self, temp_db):
        assert AccountService(temp_db).list_accounts() == []
