"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal
from typing import Optional

from pocketledger.domain import entities as domain
from pocketledger.database.models import (
    User as ORMUser,
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    Budget as ORMBudget,
    Goal as ORMGoal,
    Notification as ORMNotification,
)

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """Normalize a stored numeric value to a 2-place Decimal."""
    if value is None:
        return domain.ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        open_id=orm_user.open_id,
        name=orm_user.name,
        email=orm_user.email,
        role=domain.UserRole(orm_user.role),
        created_at=orm_user.created_at,
        last_signed_in=orm_user.last_signed_in,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        balance=to_money(orm_account.balance),
        currency=orm_account.currency,
        description=orm_account.description,
        is_active=orm_account.is_active,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        user_id=orm_category.user_id,
        name=orm_category.name,
        category_type=domain.CategoryType(orm_category.category_type),
        color=orm_category.color,
        icon=orm_category.icon,
        description=orm_category.description,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    frequency = orm_transaction.recurring_frequency
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        account_id=orm_transaction.account_id,
        category_id=orm_transaction.category_id,
        amount=to_money(orm_transaction.amount),
        transaction_type=domain.TransactionType(orm_transaction.transaction_type),
        date=orm_transaction.date,
        description=orm_transaction.description,
        tags=orm_transaction.tags,
        notes=orm_transaction.notes,
        is_recurring=orm_transaction.is_recurring,
        recurring_frequency=domain.RecurringFrequency(frequency) if frequency else None,
        created_at=orm_transaction.created_at,
    )


def budget_to_domain(orm_budget: ORMBudget, spent: Optional[Decimal]) -> domain.Budget:
    """Convert SQLAlchemy Budget model plus its summed spending to a domain Budget."""
    alerted = orm_budget.alerted_status
    return domain.Budget(
        id=orm_budget.id,
        user_id=orm_budget.user_id,
        category_id=orm_budget.category_id,
        month=orm_budget.month,
        limit=to_money(orm_budget.limit),
        spent=to_money(spent),
        period=orm_budget.period,
        alert_threshold=orm_budget.alert_threshold,
        alerted_status=domain.BudgetStatus(alerted) if alerted else None,
        created_at=orm_budget.created_at,
    )


def goal_to_domain(orm_goal: ORMGoal) -> domain.Goal:
    """Convert SQLAlchemy Goal model to domain Goal entity."""
    return domain.Goal(
        id=orm_goal.id,
        user_id=orm_goal.user_id,
        name=orm_goal.name,
        description=orm_goal.description,
        target_amount=to_money(orm_goal.target_amount),
        current_amount=to_money(orm_goal.current_amount),
        deadline=orm_goal.deadline,
        category=orm_goal.category,
        state=domain.GoalState(orm_goal.state),
        created_at=orm_goal.created_at,
    )


def notification_to_domain(orm_notification: ORMNotification) -> domain.Notification:
    """Convert SQLAlchemy Notification model to domain Notification entity."""
    return domain.Notification(
        id=orm_notification.id,
        user_id=orm_notification.user_id,
        title=orm_notification.title,
        message=orm_notification.message,
        notification_type=domain.NotificationType(orm_notification.notification_type),
        is_read=orm_notification.is_read,
        related_id=orm_notification.related_id,
        created_at=orm_notification.created_at,
    )
