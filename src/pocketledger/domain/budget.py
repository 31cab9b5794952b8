"""Budget domain service and status evaluation."""

import logging
from decimal import Decimal
from typing import Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import (
    Budget,
    BudgetStatus,
    BudgetStatusResult,
    NotificationType,
)
from pocketledger.domain.errors import ValidationError, category_not_found
from pocketledger.domain.notification import NotificationService
from pocketledger.domain.validation import require_amount, require_id
from pocketledger.utils.date_parser import parse_month

logger = logging.getLogger(__name__)

DEFAULT_ALERT_THRESHOLD = 80
HUNDRED = Decimal(100)


def evaluate_budget_status(
    spent: Decimal, limit: Decimal, alert_threshold: int = DEFAULT_ALERT_THRESHOLD
) -> BudgetStatusResult:
    """Classify spending against a limit.

    The first matching rule wins: at or above 100% is danger, at or above
    ``alert_threshold`` is warning, anything else is success. The reported
    percentage is rounded to cents; classification uses the exact ratio.

    Args:
        spent: Amount spent, zero or more
        limit: Budget limit, greater than zero
        alert_threshold: Warning threshold as a percentage

    Returns:
        BudgetStatusResult with the tier and percentage

    Raises:
        ValidationError: If spent is negative, limit is not positive, or
            either is a float
    """
    for value in (spent, limit):
        if isinstance(value, (float, bool)):
            raise ValidationError(f"Budget amounts must be Decimal, not {type(value).__name__}")
    spent = Decimal(spent)
    limit = Decimal(limit)
    if limit <= 0:
        raise ValidationError(f"Budget limit must be greater than zero, got {limit}")
    if spent < 0:
        raise ValidationError(f"Budget spent must not be negative, got {spent}")

    percentage = spent / limit * HUNDRED
    if percentage >= HUNDRED:
        status = BudgetStatus.DANGER
    elif percentage >= alert_threshold:
        status = BudgetStatus.WARNING
    else:
        status = BudgetStatus.SUCCESS
    return BudgetStatusResult(status=status, percentage=percentage.quantize(Decimal("0.01")))


def _require_threshold(alert_threshold) -> int:
    if isinstance(alert_threshold, bool) or not isinstance(alert_threshold, int):
        raise ValidationError("Alert threshold must be an integer percentage")
    if not 1 <= alert_threshold <= 100:
        raise ValidationError(f"Alert threshold must be between 1 and 100, got {alert_threshold}")
    return alert_threshold


def _require_month(month: str) -> str:
    try:
        return parse_month(month)
    except ValueError as e:
        raise ValidationError(str(e))


class BudgetService:
    """Service for managing monthly budgets and their alerts."""

    def __init__(self, db: Database, notification_service: Optional[NotificationService] = None):
        """Initialize budget service.

        Args:
            db: Database instance
            notification_service: Used to emit budget alerts. Defaults to one
                built on the same database.
        """
        self.db = db
        self.notifications = notification_service or NotificationService(db)

    def create_budget(
        self,
        user_id: int,
        category_id: int,
        month: str,
        limit: Decimal,
        alert_threshold: int = DEFAULT_ALERT_THRESHOLD,
    ) -> int:
        """Create a budget for one category and month.

        Spending already recorded for that month counts immediately, so a
        budget created over its threshold alerts right away.

        Args:
            user_id: Owning user ID
            category_id: Category the budget caps
            month: Month key "YYYY-MM"
            limit: Spending limit, greater than zero
            alert_threshold: Warning threshold percentage (1-100)

        Returns:
            Budget ID

        Raises:
            ValidationError: If any input is invalid or the category is unknown
            ConflictError: If the category already has a budget for the month
        """
        require_id(user_id)
        month = _require_month(month)
        limit = require_amount(limit, "Budget limit")
        alert_threshold = _require_threshold(alert_threshold)
        if self.db.get_category(user_id, category_id) is None:
            raise ValidationError(category_not_found(category_id))

        with self.db.atomic():
            budget_id = self.db.create_budget(
                user_id=user_id,
                category_id=category_id,
                month=month,
                limit=limit,
                alert_threshold=alert_threshold,
            )
            self.refresh_budget_alert(user_id, category_id, month)
        logger.info("Created budget %s for category %s in %s", budget_id, category_id, month)
        return budget_id

    def get_budget(self, user_id: int, budget_id: int) -> Optional[Budget]:
        """Get budget by ID, or None if the user has no such budget."""
        return self.db.get_budget(require_id(user_id), budget_id)

    def list_budgets(self, user_id: int, month: Optional[str] = None) -> list[Budget]:
        """List budgets, optionally restricted to one month."""
        require_id(user_id)
        if month is not None:
            month = _require_month(month)
        return self.db.list_budgets(user_id, month=month)

    def update_budget(
        self,
        user_id: int,
        budget_id: int,
        limit: Optional[Decimal] = None,
        alert_threshold: Optional[int] = None,
    ) -> Optional[Budget]:
        """Change a budget's limit or alert threshold.

        Returns:
            Updated budget, or None if the user has no such budget

        Raises:
            ValidationError: If the new limit or threshold is invalid
        """
        require_id(user_id)
        updates = {}
        if limit is not None:
            updates["limit"] = require_amount(limit, "Budget limit")
        if alert_threshold is not None:
            updates["alert_threshold"] = _require_threshold(alert_threshold)

        with self.db.atomic():
            budget = self.db.get_budget(user_id, budget_id, for_update=True)
            if budget is None:
                return None
            if updates:
                self.db.update_budget(user_id, budget_id, **updates)
                self.refresh_budget_alert(user_id, budget.category_id, budget.month)
        return self.db.get_budget(user_id, budget_id)

    def get_budget_status(self, budget: Budget) -> BudgetStatusResult:
        """Evaluate a budget's current status tier."""
        return evaluate_budget_status(budget.spent, budget.limit, budget.alert_threshold)

    def list_budget_statuses(
        self, user_id: int, month: str
    ) -> list[tuple[Budget, BudgetStatusResult]]:
        """Pair every budget of a month with its status."""
        return [(b, self.get_budget_status(b)) for b in self.list_budgets(user_id, month)]

    def refresh_budget_alert(self, user_id: int, category_id: int, month: str) -> Optional[int]:
        """Re-evaluate the budget of a category and month after its spending changed.

        Emits one budget_alert notification when the status tier rises above
        the last tier alerted for. A falling tier moves the latch down with it,
        so crossing the same line again alerts again.

        Returns:
            ID of the notification emitted, or None
        """
        with self.db.atomic():
            budget = self.db.find_budget(user_id, category_id, month, for_update=True)
            if budget is None:
                return None

            result = self.get_budget_status(budget)
            alerted = budget.alerted_status or BudgetStatus.SUCCESS

            if result.status.rank > alerted.rank:
                self.db.update_budget(user_id, budget.id, alerted_status=result.status.value)
                return self._emit_alert(budget, result)

            if result.status.rank < alerted.rank:
                latch = None if result.status == BudgetStatus.SUCCESS else result.status.value
                self.db.update_budget(user_id, budget.id, alerted_status=latch)
        return None

    def _emit_alert(self, budget: Budget, result: BudgetStatusResult) -> int:
        category = self.db.get_category(budget.user_id, budget.category_id)
        name = category.name if category is not None else f"category {budget.category_id}"
        if result.status == BudgetStatus.DANGER:
            title = f"Budget exceeded: {name}"
        else:
            title = f"Budget alert: {name}"
        message = (
            f"You have spent {budget.spent} of your {budget.limit} {name} budget "
            f"for {budget.month} ({result.percentage}%)."
        )
        logger.info(
            "Budget %s moved to %s at %s%%", budget.id, result.status.value, result.percentage
        )
        return self.notifications.notify(
            user_id=budget.user_id,
            notification_type=NotificationType.BUDGET_ALERT,
            title=title,
            message=message,
            related_id=budget.id,
        )
