"""Domain layer for ledgerlens application."""

from ledgerlens.domain.entities import (
    Category,
    Transaction,
    TransactionKind,
    TimeFilter,
    DateWindow,
)
from ledgerlens.domain.errors import DomainError, ValidationError, NotFoundError

__all__ = [
    "Category",
    "Transaction",
    "TransactionKind",
    "TimeFilter",
    "DateWindow",
    "DomainError",
    "ValidationError",
    "NotFoundError",
]
