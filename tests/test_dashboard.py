"""Tests for dashboard summary service."""

from datetime import date, timedelta
from decimal import Decimal

from pocketledger.database.factories import create_sqlite_database
from pocketledger.domain.dashboard import DashboardService, RECENT_TRANSACTION_LIMIT
from pocketledger.domain.entities import DashboardSummary, DashboardUnavailable

TODAY = date(2024, 3, 15)


def test_empty_ledger(dashboard_service, sample_user):
    summary = dashboard_service.get_dashboard_summary(sample_user.id, today=TODAY)

    assert isinstance(summary, DashboardSummary)
    assert summary.month == "2024-03"
    assert summary.total_balance == Decimal("0.00")
    assert summary.total_budget_spent == Decimal("0.00")
    assert summary.total_budget_limit == Decimal("0.00")
    assert summary.account_count == 0
    assert summary.budget_count == 0
    assert summary.recent_transactions == ()
    assert summary.utilization_percentage == Decimal("0.00")


def test_total_balance_sums_all_accounts(dashboard_service, account_service, sample_user):
    account_service.create_account(sample_user.id, "Checking", "checking", Decimal("1500.25"))
    account_service.create_account(sample_user.id, "Visa", "credit_card", Decimal("-300.00"))
    savings_id = account_service.create_account(sample_user.id, "Savings", "savings", Decimal("100.00"))
    # Inactive accounts still hold money
    account_service.update_account(sample_user.id, savings_id, is_active=False)

    summary = dashboard_service.get_dashboard_summary(sample_user.id, today=TODAY)
    assert summary.total_balance == Decimal("1300.25")
    assert summary.account_count == 3


def test_budgets_only_count_current_month(
    dashboard_service,
    budget_service,
    transaction_service,
    category_service,
    sample_user,
    sample_account,
    expense_category,
):
    fuel_id = category_service.create_category(sample_user.id, "Fuel", "expense")
    budget_service.create_budget(sample_user.id, expense_category.id, "2024-03", Decimal("400.00"))
    budget_service.create_budget(sample_user.id, fuel_id, "2024-03", Decimal("100.00"))
    budget_service.create_budget(sample_user.id, expense_category.id, "2024-02", Decimal("999.00"))

    transaction_service.create_transaction(
        sample_user.id, sample_account.id, expense_category.id, Decimal("120.00"), "expense", date(2024, 3, 2)
    )
    transaction_service.create_transaction(
        sample_user.id, sample_account.id, fuel_id, Decimal("30.00"), "expense", date(2024, 3, 3)
    )
    transaction_service.create_transaction(
        sample_user.id, sample_account.id, expense_category.id, Decimal("80.00"), "expense", date(2024, 2, 20)
    )

    summary = dashboard_service.get_dashboard_summary(sample_user.id, today=TODAY)
    assert summary.budget_count == 2
    assert summary.total_budget_limit == Decimal("500.00")
    assert summary.total_budget_spent == Decimal("150.00")
    assert summary.utilization_percentage == Decimal("30.00")


def test_recent_transactions_capped_and_newest_first(
    dashboard_service, transaction_service, sample_user, sample_account, expense_category
):
    start = date(2024, 1, 1)
    for i in range(RECENT_TRANSACTION_LIMIT + 3):
        transaction_service.create_transaction(
            user_id=sample_user.id,
            account_id=sample_account.id,
            category_id=expense_category.id,
            amount=Decimal("1.00") + i,
            transaction_type="expense",
            date=start + timedelta(days=(i * 7) % 40),
        )

    summary = dashboard_service.get_dashboard_summary(sample_user.id, today=TODAY)
    recent = summary.recent_transactions

    assert len(recent) == RECENT_TRANSACTION_LIMIT
    dates = [t.date for t in recent]
    assert dates == sorted(dates, reverse=True)

    every = transaction_service.list_transactions(sample_user.id)
    assert recent[0].date == max(t.date for t in every)


def test_summary_is_idempotent(
    dashboard_service, transaction_service, budget_service, sample_user, sample_account, expense_category
):
    budget_service.create_budget(sample_user.id, expense_category.id, "2024-03", Decimal("100.00"))
    transaction_service.create_transaction(
        sample_user.id, sample_account.id, expense_category.id, Decimal("42.00"), "expense", date(2024, 3, 1)
    )

    first = dashboard_service.get_dashboard_summary(sample_user.id, today=TODAY)
    second = dashboard_service.get_dashboard_summary(sample_user.id, today=TODAY)
    assert first == second


def test_summary_does_not_notify(
    dashboard_service, notification_service, budget_service, transaction_service, sample_user, sample_account, expense_category
):
    budget_service.create_budget(sample_user.id, expense_category.id, "2024-03", Decimal("100.00"))
    transaction_service.create_transaction(
        sample_user.id, sample_account.id, expense_category.id, Decimal("90.00"), "expense", date(2024, 3, 1)
    )
    before = notification_service.list_notifications(sample_user.id)

    dashboard_service.get_dashboard_summary(sample_user.id, today=TODAY)
    assert notification_service.list_notifications(sample_user.id) == before


def test_other_users_data_excluded(dashboard_service, account_service, sample_user, other_user):
    account_service.create_account(other_user.id, "Bob's", "checking", Decimal("5000.00"))

    summary = dashboard_service.get_dashboard_summary(sample_user.id, today=TODAY)
    assert summary.total_balance == Decimal("0.00")
    assert summary.account_count == 0


def test_unreachable_store_reports_unavailable(tmp_path):
    db = create_sqlite_database(str(tmp_path / "missing" / "ledger.db"))
    try:
        summary = DashboardService(db).get_dashboard_summary(1, today=TODAY)
    finally:
        db.disconnect()

    assert isinstance(summary, DashboardUnavailable)
    assert "unavailable" in summary.reason


def test_utilization_over_100():
    summary = DashboardSummary(
        month="2024-03",
        total_balance=Decimal("0.00"),
        total_budget_spent=Decimal("150.00"),
        total_budget_limit=Decimal("100.00"),
        account_count=0,
        budget_count=1,
    )
    assert summary.utilization_percentage == Decimal("150.00")
