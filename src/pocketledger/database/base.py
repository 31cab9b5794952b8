"""Abstract ledger store interface.

Every record operation takes the owning ``user_id`` as its first argument.
Implementations must never return or modify a row belonging to another user.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from pocketledger.domain.entities import (
    User,
    Account,
    Category,
    Transaction,
    Budget,
    Goal,
    Notification,
)


class Database(ABC):
    """Abstract database interface for pocketledger."""

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
    def atomic(self) -> AbstractContextManager[None]:
        """Group writes into one unit of work.

        Writes made inside the block commit together when it exits normally
        and are rolled back if it raises. Blocks may be nested; only the
        outermost one commits.
        """
        pass

    # User operations
    @abstractmethod
    def upsert_user(
        self, open_id: str, name: Optional[str] = None, email: Optional[str] = None
    ) -> User:
        """Create a user or refresh an existing one's profile and sign-in time."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        user_id: int,
        name: str,
        account_type: str,
        balance: Decimal,
        currency: str,
        description: Optional[str] = None,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, user_id: int, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: int) -> list[Account]:
        """List all accounts of a user."""
        pass

    @abstractmethod
    def update_account(self, user_id: int, account_id: int, **updates) -> bool:
        """Update account fields. Returns False if the account does not exist."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        user_id: int,
        name: str,
        category_type: str,
        color: Optional[str] = None,
        icon: Optional[str] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a new category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, user_id: int, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, user_id: int) -> list[Category]:
        """List all categories of a user."""
        pass

    @abstractmethod
    def update_category(self, user_id: int, category_id: int, **updates) -> bool:
        """Update category fields. Returns False if the category does not exist."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        user_id: int,
        account_id: int,
        category_id: int,
        amount: Decimal,
        transaction_type: str,
        date: date,
        description: Optional[str] = None,
        tags: Optional[str] = None,
        notes: Optional[str] = None,
        is_recurring: bool = False,
        recurring_frequency: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, user_id: int, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self, user_id: int, limit: Optional[int] = None, offset: int = 0
    ) -> list[Transaction]:
        """List transactions, most recent date first."""
        pass

    @abstractmethod
    def list_transactions_by_date_range(
        self, user_id: int, start_date: date, end_date: date
    ) -> list[Transaction]:
        """List transactions dated within [start_date, end_date], most recent first."""
        pass

    @abstractmethod
    def update_transaction(self, user_id: int, transaction_id: int, **updates) -> bool:
        """Update transaction fields. Returns False if the transaction does not exist."""
        pass

    @abstractmethod
    def delete_transaction(self, user_id: int, transaction_id: int) -> bool:
        """Delete a transaction. Returns False if the transaction does not exist."""
        pass

    # Budget operations
    @abstractmethod
    def create_budget(
        self,
        user_id: int,
        category_id: int,
        month: str,
        limit: Decimal,
        alert_threshold: int = 80,
        period: str = "monthly",
    ) -> int:
        """Create a budget. Returns budget ID."""
        pass

    @abstractmethod
    def get_budget(
        self, user_id: int, budget_id: int, for_update: bool = False
    ) -> Optional[Budget]:
        """Get budget by ID with its spending summed from transactions.

        With ``for_update`` the row is locked until the enclosing unit of
        work ends, on databases that support row locks.
        """
        pass

    @abstractmethod
    def find_budget(
        self, user_id: int, category_id: int, month: str, for_update: bool = False
    ) -> Optional[Budget]:
        """Get the budget for a category and month, if any."""
        pass

    @abstractmethod
    def list_budgets(self, user_id: int, month: Optional[str] = None) -> list[Budget]:
        """List budgets, optionally only those of one month."""
        pass

    @abstractmethod
    def update_budget(self, user_id: int, budget_id: int, **updates) -> bool:
        """Update budget fields. Returns False if the budget does not exist."""
        pass

    # Goal operations
    @abstractmethod
    def create_goal(
        self,
        user_id: int,
        name: str,
        target_amount: Decimal,
        description: Optional[str] = None,
        deadline: Optional[date] = None,
        category: Optional[str] = None,
    ) -> int:
        """Create a goal. Returns goal ID."""
        pass

    @abstractmethod
    def get_goal(self, user_id: int, goal_id: int, for_update: bool = False) -> Optional[Goal]:
        """Get goal by ID."""
        pass

    @abstractmethod
    def list_goals(self, user_id: int) -> list[Goal]:
        """List all goals of a user."""
        pass

    @abstractmethod
    def update_goal(self, user_id: int, goal_id: int, **updates) -> bool:
        """Update goal fields. Returns False if the goal does not exist."""
        pass

    # Notification operations
    @abstractmethod
    def create_notification(
        self,
        user_id: int,
        title: str,
        message: str,
        notification_type: str,
        related_id: Optional[int] = None,
    ) -> int:
        """Create a notification. Returns notification ID."""
        pass

    @abstractmethod
    def list_notifications(self, user_id: int, limit: int = 20) -> list[Notification]:
        """List notifications, newest first."""
        pass

    @abstractmethod
    def list_unread_notifications(self, user_id: int) -> list[Notification]:
        """List unread notifications, newest first."""
        pass

    @abstractmethod
    def mark_notification_read(self, user_id: int, notification_id: int) -> bool:
        """Mark a notification read. Returns False if it does not exist."""
        pass
