"""Dashboard summary domain service."""

import logging
from datetime import date
from typing import Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import DashboardSummary, DashboardUnavailable, ZERO
from pocketledger.domain.errors import StoreUnavailableError
from pocketledger.domain.validation import require_id
from pocketledger.utils.date_parser import month_key

logger = logging.getLogger(__name__)

RECENT_TRANSACTION_LIMIT = 10


class DashboardService:
    """Service building the read-only dashboard snapshot."""

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_dashboard_summary(
        self, user_id: int, today: Optional[date] = None
    ) -> DashboardSummary | DashboardUnavailable:
        """Summarize a user's balances, current-month budgets and recent activity.

        Args:
            user_id: Owning user ID
            today: Day whose month counts as current (defaults to the server date)

        Returns:
            DashboardSummary, or DashboardUnavailable if the store cannot be reached
        """
        require_id(user_id)
        month = month_key(today or date.today())

        try:
            accounts = self.db.list_accounts(user_id)
            budgets = self.db.list_budgets(user_id, month=month)
            recent = self.db.list_transactions(user_id, limit=RECENT_TRANSACTION_LIMIT)
        except StoreUnavailableError as e:
            logger.warning("Dashboard for user %s unavailable: %s", user_id, e)
            return DashboardUnavailable(reason=str(e))

        return DashboardSummary(
            month=month,
            total_balance=sum((acc.balance for acc in accounts), ZERO),
            total_budget_spent=sum((b.spent for b in budgets), ZERO),
            total_budget_limit=sum((b.limit for b in budgets), ZERO),
            account_count=len(accounts),
            budget_count=len(budgets),
            recent_transactions=tuple(recent),
        )
