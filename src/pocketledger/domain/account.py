"""Account domain service."""

import logging
import re
from decimal import Decimal
from typing import Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import Account as AccountEntity, AccountType
from pocketledger.domain.errors import ValidationError
from pocketledger.domain.validation import require_choice, require_id, require_name
from pocketledger.utils.amount_parser import to_cents

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "BRL"
CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


def _require_balance(balance) -> Decimal:
    # Balances may be negative (credit cards, overdrafts)
    if isinstance(balance, (float, bool)):
        raise ValidationError(f"Balance must be a Decimal, not {type(balance).__name__}")
    try:
        amount = Decimal(balance)
    except (ArithmeticError, TypeError, ValueError):
        raise ValidationError(f"Invalid balance '{balance}'")
    if not amount.is_finite():
        raise ValidationError(f"Balance must be finite, got {balance}")
    return to_cents(amount)


def _require_currency(currency: str) -> str:
    code = (currency or "").strip().upper()
    if not CURRENCY_RE.match(code):
        raise ValidationError(f"Currency must be a 3-letter code, got '{currency}'")
    return code


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        user_id: int,
        name: str,
        account_type: AccountType | str,
        balance: Decimal = Decimal("0.00"),
        currency: str = DEFAULT_CURRENCY,
        description: Optional[str] = None,
    ) -> int:
        """Create a new account.

        Args:
            user_id: Owning user ID
            name: Account name
            account_type: One of checking, savings, investment, credit_card, other
            balance: Opening balance
            currency: ISO 4217 currency code
            description: Optional description

        Returns:
            Account ID

        Raises:
            ValidationError: If any field is invalid
        """
        require_id(user_id)
        account_id = self.db.create_account(
            user_id=user_id,
            name=require_name(name),
            account_type=require_choice(AccountType, account_type, "account type").value,
            balance=_require_balance(balance),
            currency=_require_currency(currency),
            description=description,
        )
        logger.info("Created account %s for user %s", account_id, user_id)
        return account_id

    def get_account(self, user_id: int, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if the user has no such account
        """
        return self.db.get_account(require_id(user_id), account_id)

    def list_accounts(self, user_id: int) -> list[AccountEntity]:
        """List all accounts of a user."""
        return self.db.list_accounts(require_id(user_id))

    def update_account(
        self,
        user_id: int,
        account_id: int,
        name: Optional[str] = None,
        balance: Optional[Decimal] = None,
        description: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Optional[AccountEntity]:
        """Update account fields.

        The balance is edited directly; it is not derived from transactions.

        Returns:
            Updated account, or None if the user has no such account
        """
        require_id(user_id)
        updates = {}
        if name is not None:
            updates["name"] = require_name(name)
        if balance is not None:
            updates["balance"] = _require_balance(balance)
        if description is not None:
            updates["description"] = description
        if is_active is not None:
            updates["is_active"] = is_active

        if not self.db.update_account(user_id, account_id, **updates):
            return None
        logger.info("Updated account %s for user %s", account_id, user_id)
        return self.db.get_account(user_id, account_id)
