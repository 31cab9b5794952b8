"""Goal domain service and progress calculation."""

import logging
import math
from datetime import date, datetime, time, UTC
from decimal import Decimal
from typing import Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import Goal, GoalProgress, GoalState, NotificationType
from pocketledger.domain.errors import ValidationError
from pocketledger.domain.notification import NotificationService
from pocketledger.domain.validation import require_amount, require_id, require_name

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)
SECONDS_PER_DAY = 24 * 60 * 60


def compute_goal_progress(goal: Goal, now: Optional[datetime] = None) -> GoalProgress:
    """Compute how far a goal is from its target.

    ``percentage`` is current over target, capped at 100. ``days_left`` counts
    whole days, rounded up, from ``now`` until the deadline's midnight; it is
    negative once the deadline has passed and None without a deadline.
    """
    if now is None:
        now = datetime.now(UTC)

    ratio = goal.current_amount / goal.target_amount * HUNDRED
    percentage = min(ratio, HUNDRED).quantize(Decimal("0.01"))

    days_left = None
    if goal.deadline is not None:
        deadline = datetime.combine(goal.deadline, time.min, tzinfo=now.tzinfo)
        days_left = math.ceil((deadline - now).total_seconds() / SECONDS_PER_DAY)

    is_complete = goal.is_completed or goal.current_amount >= goal.target_amount
    return GoalProgress(percentage=percentage, days_left=days_left, is_complete=is_complete)


class GoalService:
    """Service for managing savings goals."""

    def __init__(self, db: Database, notification_service: Optional[NotificationService] = None):
        """Initialize goal service.

        Args:
            db: Database instance
            notification_service: Used to emit goal_reached notifications
        """
        self.db = db
        self.notifications = notification_service or NotificationService(db)

    def create_goal(
        self,
        user_id: int,
        name: str,
        target_amount: Decimal,
        description: Optional[str] = None,
        deadline: Optional[date] = None,
        category: Optional[str] = None,
    ) -> int:
        """Create a goal starting from zero saved.

        Raises:
            ValidationError: If name is empty or target is not positive
        """
        require_id(user_id)
        goal_id = self.db.create_goal(
            user_id=user_id,
            name=require_name(name),
            target_amount=require_amount(target_amount, "Target amount"),
            description=description,
            deadline=deadline,
            category=category,
        )
        logger.info("Created goal %s for user %s", goal_id, user_id)
        return goal_id

    def get_goal(self, user_id: int, goal_id: int) -> Optional[Goal]:
        """Get goal by ID, or None if the user has no such goal."""
        return self.db.get_goal(require_id(user_id), goal_id)

    def list_goals(self, user_id: int) -> list[Goal]:
        """List all goals of a user."""
        return self.db.list_goals(require_id(user_id))

    def get_progress(self, user_id: int, goal_id: int, now: Optional[datetime] = None) -> Optional[GoalProgress]:
        """Compute a goal's progress as of ``now``.

        Returns:
            GoalProgress, or None if the user has no such goal
        """
        goal = self.get_goal(user_id, goal_id)
        if goal is None:
            return None
        return compute_goal_progress(goal, now=now)

    def update_goal(
        self,
        user_id: int,
        goal_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        current_amount: Optional[Decimal] = None,
        deadline: Optional[date] = None,
        category: Optional[str] = None,
        is_completed: Optional[bool] = None,
    ) -> Optional[Goal]:
        """Update goal fields.

        Reaching the target, or passing ``is_completed=True``, completes the
        goal. Completion cannot be undone.

        Returns:
            Updated goal, or None if the user has no such goal

        Raises:
            ValidationError: On invalid values or an attempt to reopen a goal
        """
        require_id(user_id)
        updates = {}
        if name is not None:
            updates["name"] = require_name(name)
        if description is not None:
            updates["description"] = description
        if current_amount is not None:
            updates["current_amount"] = require_amount(
                current_amount, "Current amount", allow_zero=True
            )
        if deadline is not None:
            updates["deadline"] = deadline
        if category is not None:
            updates["category"] = category

        with self.db.atomic():
            goal = self.db.get_goal(user_id, goal_id, for_update=True)
            if goal is None:
                return None
            if is_completed is False and goal.is_completed:
                raise ValidationError(f"Goal {goal_id} is already completed and cannot be reopened")
            if updates:
                self.db.update_goal(user_id, goal_id, **updates)
            self._settle(user_id, goal_id, force_complete=bool(is_completed))
        return self.db.get_goal(user_id, goal_id)

    def add_contribution(self, user_id: int, goal_id: int, amount: Decimal) -> Optional[Goal]:
        """Add money saved towards a goal.

        Returns:
            Updated goal, or None if the user has no such goal
        """
        require_id(user_id)
        amount = require_amount(amount, "Contribution")
        with self.db.atomic():
            goal = self.db.get_goal(user_id, goal_id, for_update=True)
            if goal is None:
                return None
            self.db.update_goal(user_id, goal_id, current_amount=goal.current_amount + amount)
            self._settle(user_id, goal_id)
        return self.db.get_goal(user_id, goal_id)

    def complete_goal(self, user_id: int, goal_id: int) -> Optional[Goal]:
        """Mark a goal completed regardless of the amount saved."""
        return self.update_goal(user_id, goal_id, is_completed=True)

    def _settle(self, user_id: int, goal_id: int, force_complete: bool = False) -> Optional[int]:
        """Complete an active goal that reached its target, notifying once."""
        goal = self.db.get_goal(user_id, goal_id)
        if goal is None or goal.is_completed:
            return None
        if not force_complete and goal.current_amount < goal.target_amount:
            return None

        self.db.update_goal(user_id, goal_id, state=GoalState.COMPLETED.value)
        logger.info("Goal %s completed for user %s", goal_id, user_id)
        return self.notifications.notify(
            user_id=user_id,
            notification_type=NotificationType.GOAL_REACHED,
            title=f"Goal reached: {goal.name}",
            message=f"You saved {goal.current_amount} of {goal.target_amount} for '{goal.name}'.",
            related_id=goal.id,
        )
