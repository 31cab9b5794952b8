"""Domain model entities for pocketledger.

These are pure data classes representing business concepts, independent of
database schema. Services only ever hand these out, never ORM rows, so the
persistence layer can change without touching business logic.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0.00")


class AccountType(str, Enum):
    """Kinds of financial account."""

    CHECKING = "checking"
    SAVINGS = "savings"
    INVESTMENT = "investment"
    CREDIT_CARD = "credit_card"
    OTHER = "other"


class CategoryType(str, Enum):
    """Whether a category classifies money coming in or going out."""

    INCOME = "income"
    EXPENSE = "expense"


class TransactionType(str, Enum):
    """Sign of a transaction; amounts themselves are always positive."""

    INCOME = "income"
    EXPENSE = "expense"


class RecurringFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class NotificationType(str, Enum):
    BUDGET_ALERT = "budget_alert"
    TRANSACTION_CREATED = "transaction_created"
    GOAL_REACHED = "goal_reached"
    INFO = "info"


class BudgetStatus(str, Enum):
    """Status tier of a budget, ordered from least to most severe."""

    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_STATUS_RANK = {
    BudgetStatus.SUCCESS: 0,
    BudgetStatus.WARNING: 1,
    BudgetStatus.DANGER: 2,
}


class GoalState(str, Enum):
    """Goal lifecycle. COMPLETED is terminal."""

    ACTIVE = "active"
    COMPLETED = "completed"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class User:
    """Owner of all ledger records."""

    id: int
    open_id: str
    name: Optional[str]
    email: Optional[str]
    role: UserRole
    created_at: datetime
    last_signed_in: datetime


@dataclass(frozen=True)
class Account:
    """Financial account domain entity."""

    id: int
    user_id: int
    name: str
    account_type: AccountType
    balance: Decimal
    currency: str
    description: Optional[str]
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: int
    user_id: int
    name: str
    category_type: CategoryType
    color: Optional[str]
    icon: Optional[str]
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    user_id: int
    account_id: int
    category_id: int
    amount: Decimal
    transaction_type: TransactionType
    date: date
    description: Optional[str]
    tags: Optional[str]
    notes: Optional[str]
    is_recurring: bool
    recurring_frequency: Optional[RecurringFrequency]
    created_at: datetime


@dataclass(frozen=True)
class Budget:
    """Monthly spending cap for one category.

    ``spent`` is derived from the expense transactions of the category during
    ``month`` and is filled in by the store on every read.
    """

    id: int
    user_id: int
    category_id: int
    month: str
    limit: Decimal
    spent: Decimal
    period: str
    alert_threshold: int
    alerted_status: Optional[BudgetStatus]
    created_at: datetime


@dataclass(frozen=True)
class Goal:
    """Savings goal domain entity."""

    id: int
    user_id: int
    name: str
    description: Optional[str]
    target_amount: Decimal
    current_amount: Decimal
    deadline: Optional[date]
    category: Optional[str]
    state: GoalState
    created_at: datetime

    @property
    def is_completed(self) -> bool:
        return self.state == GoalState.COMPLETED


@dataclass(frozen=True)
class Notification:
    """Notification domain entity."""

    id: int
    user_id: int
    title: str
    message: str
    notification_type: NotificationType
    is_read: bool
    related_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class BudgetStatusResult:
    """Outcome of evaluating a budget's spend against its limit."""

    status: BudgetStatus
    percentage: Decimal


@dataclass(frozen=True)
class GoalProgress:
    """Progress of a goal towards its target."""

    percentage: Decimal
    days_left: Optional[int]
    is_complete: bool


@dataclass(frozen=True)
class DashboardSummary:
    """Snapshot of a user's finances for the dashboard view."""

    month: str
    total_balance: Decimal
    total_budget_spent: Decimal
    total_budget_limit: Decimal
    account_count: int
    budget_count: int
    recent_transactions: tuple[Transaction, ...] = field(default_factory=tuple)

    @property
    def utilization_percentage(self) -> Decimal:
        """Spent over limit as a percentage, 0 when nothing is budgeted."""
        if self.total_budget_limit == 0:
            return ZERO
        return (self.total_budget_spent / self.total_budget_limit * 100).quantize(
            Decimal("0.01")
        )


@dataclass(frozen=True)
class DashboardUnavailable:
    """Returned instead of a summary when the store cannot be reached."""

    reason: str
