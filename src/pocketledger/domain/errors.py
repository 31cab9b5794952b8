"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist for the owning user."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StoreUnavailableError(DomainError):
    """The ledger store could not be reached."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category."""
    return f"Category {category_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def budget_not_found(budget_id: int) -> str:
    """Return message for missing budget."""
    return f"Budget {budget_id} not found"


def goal_not_found(goal_id: int) -> str:
    """Return message for missing goal."""
    return f"Goal {goal_id} not found"


def notification_not_found(notification_id: int) -> str:
    """Return message for missing notification."""
    return f"Notification {notification_id} not found"


def duplicate_budget(category_id: int, month: str) -> str:
    """Return message for a second budget on the same category and month."""
    return f"A budget for category {category_id} in {month} already exists"


def invalid_choice(field: str, value: str, choices) -> str:
    """Return message for a value outside a closed set."""
    allowed = ", ".join(choices)
    return f"Invalid {field} '{value}'. Expected one of: {allowed}"
