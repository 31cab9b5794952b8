"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from pocketledger.domain.entities import (
    BudgetStatus,
    DashboardSummary,
    Goal,
    GoalState,
    Transaction,
    TransactionType,
    ZERO,
)


class TestTransaction:
    """Tests for Transaction entity."""

    def test_transaction_is_immutable(self):
        txn = Transaction(
            id=1,
            user_id=1,
            account_id=1,
            category_id=2,
            amount=Decimal("10.00"),
            transaction_type=TransactionType.EXPENSE,
            date=date(2024, 1, 15),
            description="Coffee",
            tags=None,
            notes=None,
            is_recurring=False,
            recurring_frequency=None,
            created_at=datetime.now(UTC),
        )

        with pytest.raises(FrozenInstanceError):
            txn.amount = Decimal("20.00")


class TestBudgetStatus:
    def test_rank_orders_severity(self):
        assert BudgetStatus.SUCCESS.rank < BudgetStatus.WARNING.rank < BudgetStatus.DANGER.rank

    def test_values(self):
        assert [s.value for s in BudgetStatus] == ["success", "warning", "danger"]


class TestGoal:
    def test_is_completed_follows_state(self):
        kwargs = dict(
            id=1,
            user_id=1,
            name="Car",
            description=None,
            target_amount=Decimal("100.00"),
            current_amount=Decimal("100.00"),
            deadline=None,
            category=None,
            created_at=datetime.now(UTC),
        )
        # Reaching the amount alone does not change the stored state
        assert Goal(state=GoalState.ACTIVE, **kwargs).is_completed is False
        assert Goal(state=GoalState.COMPLETED, **kwargs).is_completed is True


class TestDashboardSummary:
    def _summary(self, spent, limit):
        return DashboardSummary(
            month="2024-03",
            total_balance=ZERO,
            total_budget_spent=Decimal(spent),
            total_budget_limit=Decimal(limit),
            account_count=0,
            budget_count=0,
        )

    def test_utilization_zero_without_budgets(self):
        assert self._summary("0.00", "0.00").utilization_percentage == Decimal("0.00")

    def test_utilization_rounded(self):
        assert self._summary("1.00", "3.00").utilization_percentage == Decimal("33.33")

    def test_recent_transactions_default_empty(self):
        assert self._summary("0", "0").recent_transactions == ()
