"""Tests that every record is scoped to the user who owns it."""

from datetime import date
from decimal import Decimal

import pytest

from pocketledger.domain.errors import ValidationError


@pytest.fixture
def alice_ledger(
    account_service,
    category_service,
    transaction_service,
    budget_service,
    goal_service,
    sample_user,
    sample_account,
    expense_category,
):
    """Populate one of everything for the sample user."""
    txn_id = transaction_service.create_transaction(
        sample_user.id, sample_account.id, expense_category.id, Decimal("90.00"), "expense", date(2024, 3, 1)
    )
    budget_id = budget_service.create_budget(
        sample_user.id, expense_category.id, "2024-03", Decimal("100.00")
    )
    goal_id = goal_service.create_goal(sample_user.id, "Car", Decimal("1000.00"))
    return {
        "account": sample_account.id,
        "category": expense_category.id,
        "transaction": txn_id,
        "budget": budget_id,
        "goal": goal_id,
    }


def test_other_user_sees_nothing(
    account_service,
    category_service,
    transaction_service,
    budget_service,
    goal_service,
    notification_service,
    other_user,
    alice_ledger,
):
    assert account_service.list_accounts(other_user.id) == []
    assert category_service.list_categories(other_user.id) == []
    assert transaction_service.list_transactions(other_user.id) == []
    assert budget_service.list_budgets(other_user.id) == []
    assert goal_service.list_goals(other_user.id) == []
    assert notification_service.list_notifications(other_user.id) == []


def test_other_user_cannot_read_by_id(
    account_service,
    category_service,
    transaction_service,
    budget_service,
    goal_service,
    other_user,
    alice_ledger,
):
    assert account_service.get_account(other_user.id, alice_ledger["account"]) is None
    assert category_service.get_category(other_user.id, alice_ledger["category"]) is None
    assert transaction_service.get_transaction(other_user.id, alice_ledger["transaction"]) is None
    assert budget_service.get_budget(other_user.id, alice_ledger["budget"]) is None
    assert goal_service.get_goal(other_user.id, alice_ledger["goal"]) is None


def test_other_user_cannot_modify(
    account_service,
    category_service,
    transaction_service,
    budget_service,
    goal_service,
    sample_user,
    other_user,
    alice_ledger,
):
    assert account_service.update_account(other_user.id, alice_ledger["account"], name="Mine") is None
    assert category_service.update_category(other_user.id, alice_ledger["category"], name="Mine") is None
    assert transaction_service.update_transaction(
        other_user.id, alice_ledger["transaction"], amount=Decimal("1")
    ) is None
    assert transaction_service.delete_transaction(other_user.id, alice_ledger["transaction"]) is False
    assert budget_service.update_budget(other_user.id, alice_ledger["budget"], limit=Decimal("1")) is None
    assert goal_service.add_contribution(other_user.id, alice_ledger["goal"], Decimal("5000")) is None

    assert account_service.get_account(sample_user.id, alice_ledger["account"]).name == "Test Account"
    assert transaction_service.get_transaction(sample_user.id, alice_ledger["transaction"]) is not None
    assert goal_service.get_goal(sample_user.id, alice_ledger["goal"]).current_amount == Decimal("0.00")


def test_cannot_record_against_another_users_account(
    account_service, category_service, transaction_service, other_user, alice_ledger
):
    bobs_category = category_service.create_category(other_user.id, "Games", "expense")

    with pytest.raises(ValidationError, match="not found"):
        transaction_service.create_transaction(
            other_user.id, alice_ledger["account"], bobs_category, Decimal("10"), "expense", date(2024, 3, 2)
        )


def test_cannot_budget_another_users_category(budget_service, other_user, alice_ledger):
    with pytest.raises(ValidationError, match="not found"):
        budget_service.create_budget(other_user.id, alice_ledger["category"], "2024-04", Decimal("10"))


def test_other_users_spending_does_not_count(
    account_service,
    category_service,
    transaction_service,
    budget_service,
    sample_user,
    other_user,
    alice_ledger,
):
    bobs_account = account_service.create_account(other_user.id, "Bob's", "checking")
    bobs_category = category_service.create_category(other_user.id, "Groceries", "expense")
    transaction_service.create_transaction(
        other_user.id, bobs_account, bobs_category, Decimal("500.00"), "expense", date(2024, 3, 3)
    )

    budget = budget_service.get_budget(sample_user.id, alice_ledger["budget"])
    assert budget.spent == Decimal("90.00")


@pytest.mark.parametrize("user_id", [None, 0, -1, "1", True])
def test_missing_user_id_rejected(account_service, user_id):
    with pytest.raises(ValidationError, match="A valid user_id is required"):
        account_service.list_accounts(user_id)
