"""Shared domain error messages and error types."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only catch ValueError.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist or is not visible to the owner."""


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def invalid_window(start: date, end: date) -> str:
    """Return message for a window whose end precedes its start."""
    return f"Invalid date range: end {end.isoformat()} is before start {start.isoformat()}"


def category_kind_mismatch(category_name: str, category_kind: str, kind: str) -> str:
    """Return message when a transaction kind does not match its category."""
    return (
        f"Category '{category_name}' is an {category_kind} category "
        f"and cannot hold an {kind} transaction"
    )


def system_category_readonly(category_id: int) -> str:
    """Return message when a system category is edited or deleted."""
    return f"Category {category_id} is a system category and cannot be changed"


def category_name_taken(name: str, kind: str) -> str:
    """Return message for a duplicate custom category name."""
    return f"An {kind} category named '{name}' already exists"
