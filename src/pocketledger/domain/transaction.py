"""Transaction domain service."""

import logging
from typing import Optional
from datetime import date
from decimal import Decimal

from pocketledger.database.base import Database
from pocketledger.domain.budget import BudgetService
from pocketledger.domain.entities import (
    RecurringFrequency,
    Transaction as TransactionEntity,
    TransactionType,
)
from pocketledger.domain.errors import ValidationError, account_not_found, category_not_found
from pocketledger.domain.validation import require_amount, require_choice, require_id
from pocketledger.utils.date_parser import month_key

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for managing transactions.

    Every write re-evaluates the budget covering the affected category and
    month in the same unit of work, which is where budget alerts come from.
    """

    def __init__(self, db: Database, budget_service: Optional[BudgetService] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            budget_service: Budget service used for alert re-evaluation
        """
        self.db = db
        self.budgets = budget_service or BudgetService(db)

    def create_transaction(
        self,
        user_id: int,
        account_id: int,
        category_id: int,
        amount: Decimal,
        transaction_type: TransactionType | str,
        date: date,
        description: Optional[str] = None,
        tags: Optional[str] = None,
        notes: Optional[str] = None,
        is_recurring: bool = False,
        recurring_frequency: Optional[RecurringFrequency | str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            user_id: Owning user ID
            account_id: Account ID
            category_id: Category ID
            amount: Transaction amount, always positive
            transaction_type: income or expense
            date: Transaction date
            description: Optional description
            tags: Optional free-form tags
            notes: Optional notes
            is_recurring: Whether the transaction repeats
            recurring_frequency: daily, weekly, monthly or yearly

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the input is invalid or the account or
                category does not belong to the user
        """
        require_id(user_id)
        amount = require_amount(amount, "Amount")
        kind = require_choice(TransactionType, transaction_type, "transaction type")
        frequency = None
        if recurring_frequency is not None:
            if not is_recurring:
                raise ValidationError("A recurring frequency requires is_recurring")
            frequency = require_choice(
                RecurringFrequency, recurring_frequency, "recurring frequency"
            ).value
        if date is None:
            raise ValidationError("A transaction date is required")

        # Verify account and category belong to the user
        if self.db.get_account(user_id, account_id) is None:
            raise ValidationError(account_not_found(account_id))
        if self.db.get_category(user_id, category_id) is None:
            raise ValidationError(category_not_found(category_id))

        with self.db.atomic():
            transaction_id = self.db.create_transaction(
                user_id=user_id,
                account_id=account_id,
                category_id=category_id,
                amount=amount,
                transaction_type=kind.value,
                date=date,
                description=description,
                tags=tags,
                notes=notes,
                is_recurring=is_recurring,
                recurring_frequency=frequency,
            )
            self.budgets.refresh_budget_alert(user_id, category_id, month_key(date))
        logger.info("Created %s transaction %s for user %s", kind.value, transaction_id, user_id)
        return transaction_id

    def get_transaction(self, user_id: int, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Returns:
            Transaction entity or None if the user has no such transaction
        """
        return self.db.get_transaction(require_id(user_id), transaction_id)

    def list_transactions(
        self, user_id: int, limit: int = 50, offset: int = 0
    ) -> list[TransactionEntity]:
        """List a page of transactions, most recent first."""
        if limit < 0 or offset < 0:
            raise ValidationError("limit and offset must not be negative")
        return self.db.list_transactions(require_id(user_id), limit=limit, offset=offset)

    def list_transactions_by_date_range(
        self, user_id: int, start_date: date, end_date: date
    ) -> list[TransactionEntity]:
        """List transactions dated between two days inclusive."""
        if start_date > end_date:
            raise ValidationError(f"Start date {start_date} is after end date {end_date}")
        return self.db.list_transactions_by_date_range(require_id(user_id), start_date, end_date)

    def update_transaction(
        self,
        user_id: int,
        transaction_id: int,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> Optional[TransactionEntity]:
        """Update the editable fields of a transaction.

        Account, category and type are fixed once a transaction exists.

        Returns:
            Updated transaction, or None if the user has no such transaction
        """
        require_id(user_id)
        updates = {}
        if amount is not None:
            updates["amount"] = require_amount(amount, "Amount")
        if description is not None:
            updates["description"] = description
        if date is not None:
            updates["date"] = date
        if notes is not None:
            updates["notes"] = notes

        with self.db.atomic():
            txn = self.db.get_transaction(user_id, transaction_id)
            if txn is None:
                return None
            self.db.update_transaction(user_id, transaction_id, **updates)
            self._refresh_months(user_id, txn.category_id, txn.date, date)
        return self.db.get_transaction(user_id, transaction_id)

    def delete_transaction(self, user_id: int, transaction_id: int) -> bool:
        """Delete a transaction.

        Returns:
            False if the user has no such transaction
        """
        require_id(user_id)
        with self.db.atomic():
            txn = self.db.get_transaction(user_id, transaction_id)
            if txn is None:
                return False
            self.db.delete_transaction(user_id, transaction_id)
            self._refresh_months(user_id, txn.category_id, txn.date)
        logger.info("Deleted transaction %s for user %s", transaction_id, user_id)
        return True

    def _refresh_months(self, user_id: int, category_id: int, *days: Optional[date]) -> None:
        for month in sorted({month_key(d) for d in days if d is not None}):
            self.budgets.refresh_budget_alert(user_id, category_id, month)
