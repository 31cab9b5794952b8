"""Integration tests for end-to-end workflows."""

import re
from decimal import Decimal

import pytest
from pocketledger.cli.main import cli
from pocketledger.domain.entities import GoalProgress
from pocketledger.domain.goal import GoalService


def _invoke(cli_runner, temp_db, user_id, *args, **kwargs):
    base = ["--db-path", temp_db.database_path]
    if user_id is not None:
        base += ["--user", str(user_id)]
    return cli_runner.invoke(cli, base + list(args), **kwargs)


def _created_id(output: str) -> str:
    match = re.search(r"ID: (\d+)", output) or re.search(r"(?:transaction|budget|goal) (\d+)", output)
    assert match is not None, output
    return match.group(1)


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: user → account → category → budget → spend → alerts → dashboard."""
    # Step 1: Register a user
    result = _invoke(cli_runner, temp_db, None, "user", "create", "oid-1", "--name", "Alice")
    assert result.exit_code == 0
    user_id = _created_id(result.output)

    # Step 2: Create account and category
    result = _invoke(cli_runner, temp_db, user_id, "account", "create", "Checking", "--balance", "2500.00")
    assert result.exit_code == 0
    account_id = _created_id(result.output)

    result = _invoke(cli_runner, temp_db, user_id, "category", "create", "Groceries")
    assert result.exit_code == 0
    category_id = _created_id(result.output)

    # Step 3: Budget the current month
    result = _invoke(
        cli_runner, temp_db, user_id, "budget", "create", "--category", category_id, "--limit", "200"
    )
    assert result.exit_code == 0
    assert "limit 200.00" in result.output

    # Step 4: Spend below, then above the threshold
    for amount in ["100.00", "70.00"]:
        result = _invoke(
            cli_runner, temp_db, user_id,
            "transaction", "add",
            "--account", account_id,
            "--category", category_id,
            "--amount", amount,
            "--date", "today",
        )
        assert result.exit_code == 0

    result = _invoke(cli_runner, temp_db, user_id, "budget", "status")
    assert result.exit_code == 0
    assert "85.00%" in result.output
    assert "WARNING" in result.output

    # Step 5: One alert, unread
    result = _invoke(cli_runner, temp_db, user_id, "notification", "unread")
    assert result.exit_code == 0
    assert "budget_alert: Budget alert: Groceries" in result.output
    notification_id = re.search(r"\[(\d+)\]", result.output).group(1)

    result = _invoke(cli_runner, temp_db, user_id, "notification", "read", notification_id)
    assert result.exit_code == 0
    assert f"Marked notification {notification_id} as read" in result.output

    result = _invoke(cli_runner, temp_db, user_id, "notification", "unread")
    assert "No unread notifications." in result.output

    # Step 6: Dashboard reflects everything
    result = _invoke(cli_runner, temp_db, user_id, "dashboard")
    assert result.exit_code == 0
    assert "Total balance:   2,500.00 (1 accounts)" in result.output
    assert "170.00 of 200.00 (1 budgets)" in result.output
    assert "Utilization:     85.00%" in result.output
    assert "70.00" in result.output


def test_goal_workflow(cli_runner, temp_db, sample_user):
    result = _invoke(
        cli_runner, temp_db, sample_user.id,
        "goal", "create", "Bike", "--target", "800", "--deadline", "2999-01-01",
    )
    assert result.exit_code == 0
    goal_id = _created_id(result.output)

    result = _invoke(cli_runner, temp_db, sample_user.id, "goal", "contribute", goal_id, "200")
    assert result.exit_code == 0
    assert "Saved 200.00 towards 'Bike'" in result.output
    assert "Goal reached!" not in result.output

    result = _invoke(cli_runner, temp_db, sample_user.id, "goal", "progress", goal_id)
    assert result.exit_code == 0
    assert "Progress: 25.00%" in result.output
    assert "Days left:" in result.output
    assert "Complete: no" in result.output

    result = _invoke(cli_runner, temp_db, sample_user.id, "goal", "contribute", goal_id, "600")
    assert result.exit_code == 0
    assert "Goal reached!" in result.output

    result = _invoke(cli_runner, temp_db, sample_user.id, "notification", "list")
    assert "goal_reached: Goal reached: Bike" in result.output

    result = _invoke(cli_runner, temp_db, sample_user.id, "goal", "list")
    assert result.exit_code == 0
    assert "Bike" in result.output


def test_goal_complete_command(cli_runner, temp_db, sample_user):
    result = _invoke(cli_runner, temp_db, sample_user.id, "goal", "create", "Trip", "--target", "5000")
    goal_id = _created_id(result.output)

    result = _invoke(cli_runner, temp_db, sample_user.id, "goal", "complete", goal_id)
    assert result.exit_code == 0
    assert "Goal 'Trip' completed" in result.output

    result = _invoke(cli_runner, temp_db, sample_user.id, "goal", "progress", goal_id)
    assert "Complete: yes" in result.output


def test_goal_not_found(cli_runner, temp_db, sample_user):
    result = _invoke(cli_runner, temp_db, sample_user.id, "goal", "progress", "999")

    assert result.exit_code == 1
    assert "Goal 999 not found" in result.output


def test_goal_progress_uses_service(cli_runner, temp_db, sample_user, goal_service, monkeypatch):
    goal_id = goal_service.create_goal(sample_user.id, "Bike", Decimal("800.00"))
    calls = []

    def fake_progress(self, user_id, goal_id, now=None):
        calls.append((user_id, goal_id))
        return GoalProgress(percentage=Decimal("42.00"), days_left=7, is_complete=False)

    monkeypatch.setattr(GoalService, "get_progress", fake_progress)
    result = _invoke(cli_runner, temp_db, sample_user.id, "goal", "progress", str(goal_id))

    assert result.exit_code == 0
    assert calls == [(sample_user.id, goal_id)]
    assert "Progress: 42.00%" in result.output
    assert "Days left: 7" in result.output


def test_goal_list_empty(cli_runner, temp_db, sample_user):
    result = _invoke(cli_runner, temp_db, sample_user.id, "goal", "list")

    assert result.exit_code == 0
    assert "No goals found" in result.output


def test_budget_commands(cli_runner, temp_db, sample_user, expense_category):
    result = _invoke(
        cli_runner, temp_db, sample_user.id,
        "budget", "create", "--category", str(expense_category.id),
        "--limit", "300", "--month", "2024-03", "--threshold", "90",
    )
    assert result.exit_code == 0
    assert "for 2024-03: limit 300.00" in result.output
    budget_id = _created_id(result.output)

    result = _invoke(cli_runner, temp_db, sample_user.id, "budget", "list", "--month", "2024-03")
    assert result.exit_code == 0
    assert "alert at 90%" in result.output

    result = _invoke(
        cli_runner, temp_db, sample_user.id, "budget", "update", budget_id, "--limit", "350", "--threshold", "75"
    )
    assert result.exit_code == 0
    assert f"Updated budget {budget_id}: limit 350.00, alert at 75%" in result.output

    result = _invoke(cli_runner, temp_db, sample_user.id, "budget", "status", "--month", "2024-03")
    assert "0.00%" in result.output
    assert "OK" in result.output


def test_budget_duplicate(cli_runner, temp_db, sample_user, expense_category):
    args = ["budget", "create", "--category", str(expense_category.id), "--limit", "100", "--month", "2024-03"]
    assert _invoke(cli_runner, temp_db, sample_user.id, *args).exit_code == 0

    result = _invoke(cli_runner, temp_db, sample_user.id, *args)
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_budget_invalid_month(cli_runner, temp_db, sample_user, expense_category):
    result = _invoke(
        cli_runner, temp_db, sample_user.id,
        "budget", "create", "--category", str(expense_category.id), "--limit", "100", "--month", "2024-13",
    )

    assert result.exit_code == 1
    assert "Invalid month" in result.output


def test_budget_status_empty(cli_runner, temp_db, sample_user):
    result = _invoke(cli_runner, temp_db, sample_user.id, "budget", "status", "--month", "2024-03")

    assert result.exit_code == 0
    assert "No budgets for 2024-03." in result.output


def test_notification_read_not_found(cli_runner, temp_db, sample_user):
    result = _invoke(cli_runner, temp_db, sample_user.id, "notification", "read", "999")

    assert result.exit_code == 1
    assert "Notification 999 not found" in result.output


def test_notification_list_empty(cli_runner, temp_db, sample_user):
    result = _invoke(cli_runner, temp_db, sample_user.id, "notification", "list")

    assert result.exit_code == 0
    assert "No notifications." in result.output


def test_dashboard_empty(cli_runner, temp_db, sample_user):
    result = _invoke(cli_runner, temp_db, sample_user.id, "dashboard")

    assert result.exit_code == 0
    assert "Utilization:     0.00%" in result.output
    assert "No transactions yet." in result.output


def test_user_from_environment(cli_runner, temp_db, sample_user, monkeypatch):
    monkeypatch.setenv("POCKETLEDGER_USER", str(sample_user.id))

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])
    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_help_does_not_need_database(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, ["--db-path", str(tmp_path / "missing" / "x.db"), "--help"])

    assert result.exit_code == 0
    assert "personal finance tracking" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["dashboard"],
        ["account", "list"],
        ["category", "list"],
        ["budget", "list"],
        ["budget", "status", "--month", "2024-03"],
        ["goal", "list"],
        ["goal", "progress", "1"],
        ["goal", "complete", "1"],
        ["notification", "list"],
        ["notification", "unread"],
        ["transaction", "list"],
    ],
)
@pytest.mark.parametrize("user_id", [0, -3])
def test_invalid_user_is_reported(cli_runner, temp_db, user_id, args):
    result = _invoke(cli_runner, temp_db, user_id, *args)

    assert result.exit_code == 1
    assert "Error: A valid user_id is required" in result.output
    assert "Traceback" not in result.output
