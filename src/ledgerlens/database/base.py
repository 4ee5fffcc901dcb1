"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerlens.domain.entities import Category, Transaction, TransactionKind


class Database(ABC):
    """Abstract ledger store interface for ledgerlens."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        name: str,
        kind: TransactionKind,
        owner_id: Optional[int] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
        is_system: bool = False,
        display_order: int = 0,
    ) -> int:
        """Create a category. Returns category ID.

        An ``owner_id`` of None creates a system-wide category.
        """
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def query_categories(
        self, owner_id: Optional[int], kind: Optional[TransactionKind] = None
    ) -> list[Category]:
        """List categories visible to an owner.

        Returns the owner's own categories plus system-wide ones, ordered by
        kind, display order and name. An ``owner_id`` of None lists the
        system-wide categories only.
        """
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> None:
        """Update category fields. Fields left as None are unchanged."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    @abstractmethod
    def count_category_transactions(self, owner_id: int, category_id: int) -> int:
        """Count an owner's transactions in a category."""
        pass

    @abstractmethod
    def reassign_transactions(
        self, owner_id: int, from_category_id: int, to_category_id: int
    ) -> int:
        """Move an owner's transactions between categories. Returns rows moved."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        owner_id: int,
        category_id: int,
        amount: Decimal,
        kind: TransactionKind,
        date: date,
        name: str,
        note: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def query_transactions(
        self,
        owner_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[TransactionKind] = None,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Transaction]:
        """List an owner's transactions matching every given filter.

        Args:
            owner_id: Owner whose ledger is read
            start_date: Optional inclusive lower date bound
            end_date: Optional inclusive upper date bound
            kind: Optional income/expense filter
            category_id: Optional category ID filter
            search: Optional case-insensitive substring of name or note
            limit: Optional maximum number of rows
            offset: Number of leading rows to skip

        Returns:
            Transactions ordered newest first
        """
        pass

    @abstractmethod
    def count_transactions(
        self,
        owner_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[TransactionKind] = None,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count an owner's transactions matching the same filters as query_transactions."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        category_id: Optional[int] = None,
        amount: Optional[Decimal] = None,
        kind: Optional[TransactionKind] = None,
        date: Optional[date] = None,
        name: Optional[str] = None,
        note: Optional[str] = None,
    ) -> None:
        """Update transaction fields. Fields left as None are unchanged."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass
