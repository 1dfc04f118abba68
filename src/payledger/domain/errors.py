"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StoreError(DomainError):
    """The record store failed to read or write."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_slug_not_found(slug: str, account_id: int) -> str:
    """Return message for a missing category slug."""
    return f"Category '{slug}' not found for account {account_id}"


def entity_not_found(kind: str, entity_id: int) -> str:
    """Return message for a missing goal, periodic expense, bill, loan, income or expense."""
    return f"{kind} {entity_id} not found"


def non_positive_amount(field: str = "amount") -> str:
    """Return message for amounts that must be greater than zero."""
    return f"{field.capitalize()} must be greater than zero"


def insufficient_funds(source: str, available: int, requested: int) -> str:
    """Return message when a spend exceeds what the source holds (amounts in cents)."""
    return (
        f"Insufficient funds in {source}: requested {requested / 100:,.2f}, "
        f"available {available / 100:,.2f}"
    )
