"""Notification domain service."""

import logging
from typing import Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import Notification, NotificationType
from pocketledger.domain.validation import require_choice, require_id, require_name

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for creating and reading user notifications."""

    def __init__(self, db: Database):
        """Initialize notification service.

        Args:
            db: Database instance
        """
        self.db = db

    def notify(
        self,
        user_id: int,
        notification_type: NotificationType | str,
        title: str,
        message: str,
        related_id: Optional[int] = None,
    ) -> int:
        """Create a notification for a user.

        Args:
            user_id: Owning user ID
            notification_type: One of the NotificationType values
            title: Short headline
            message: Body text
            related_id: Optional ID of the budget, goal or transaction concerned

        Returns:
            Notification ID

        Raises:
            ValidationError: If the type is unknown or title/message are empty
        """
        require_id(user_id)
        kind = require_choice(NotificationType, notification_type, "notification type")
        notification_id = self.db.create_notification(
            user_id=user_id,
            title=require_name(title, "title"),
            message=require_name(message, "message"),
            notification_type=kind.value,
            related_id=related_id,
        )
        logger.info(
            "Created %s notification %s for user %s", kind.value, notification_id, user_id
        )
        return notification_id

    def list_notifications(self, user_id: int, limit: int = 20) -> list[Notification]:
        """List the newest notifications of a user."""
        return self.db.list_notifications(require_id(user_id), limit=limit)

    def list_unread(self, user_id: int) -> list[Notification]:
        """List notifications the user has not read yet."""
        return self.db.list_unread_notifications(require_id(user_id))

    def mark_as_read(self, user_id: int, notification_id: int) -> bool:
        """Mark a notification read.

        Returns:
            False if the user has no such notification
        """
        return self.db.mark_notification_read(require_id(user_id), notification_id)
