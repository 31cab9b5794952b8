"""User domain service."""

import logging
from typing import Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import User
from pocketledger.domain.validation import require_name

logger = logging.getLogger(__name__)


class UserService:
    """Service for registering ledger owners."""

    def __init__(self, db: Database):
        self.db = db

    def sign_in(self, open_id: str, name: Optional[str] = None, email: Optional[str] = None) -> User:
        """Register a user by external identity, or refresh an existing one.

        Raises:
            ValidationError: If open_id is empty
        """
        user = self.db.upsert_user(require_name(open_id, "open_id"), name=name, email=email)
        logger.info("User %s signed in", user.id)
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get_user(user_id)

    def list_users(self) -> list[User]:
        return self.db.list_users()
