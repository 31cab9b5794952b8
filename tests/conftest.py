"""Shared pytest fixtures for pocketledger tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from pocketledger.database.factories import create_sqlite_database
from pocketledger.domain.account import AccountService
from pocketledger.domain.budget import BudgetService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.dashboard import DashboardService
from pocketledger.domain.goal import GoalService
from pocketledger.domain.notification import NotificationService
from pocketledger.domain.transaction import TransactionService
from pocketledger.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    return UserService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def notification_service(temp_db):
    return NotificationService(temp_db)


@pytest.fixture
def budget_service(temp_db, notification_service):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db, notification_service)


@pytest.fixture
def transaction_service(temp_db, budget_service):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db, budget_service)


@pytest.fixture
def goal_service(temp_db, notification_service):
    return GoalService(temp_db, notification_service)


@pytest.fixture
def dashboard_service(temp_db):
    return DashboardService(temp_db)


@pytest.fixture
def sample_user(user_service):
    """Create the user most tests act as."""
    return user_service.sign_in("alice-open-id", name="Alice", email="alice@example.com")


@pytest.fixture
def other_user(user_service):
    """Create a second user whose data must stay invisible to the first."""
    return user_service.sign_in("bob-open-id", name="Bob")


@pytest.fixture
def sample_account(account_service, sample_user):
    """Create a sample checking account for testing."""
    account_id = account_service.create_account(
        user_id=sample_user.id,
        name="Test Account",
        account_type="checking",
        balance=Decimal("1000.00"),
    )
    return account_service.get_account(sample_user.id, account_id)


@pytest.fixture
def expense_category(category_service, sample_user):
    category_id = category_service.create_category(
        user_id=sample_user.id, name="Groceries", category_type="expense"
    )
    return category_service.get_category(sample_user.id, category_id)


@pytest.fixture
def income_category(category_service, sample_user):
    category_id = category_service.create_category(
        user_id=sample_user.id, name="Salary", category_type="income"
    )
    return category_service.get_category(sample_user.id, category_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
