"""Transaction domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerlens.database.base import Database
from ledgerlens.domain.category import CategoryService
from ledgerlens.domain.entities import (
    DateWindow,
    Transaction as TransactionEntity,
    TransactionKind,
    TransactionPage,
)
from ledgerlens.domain.errors import (
    NotFoundError,
    ValidationError,
    category_kind_mismatch,
    transaction_not_found,
)
from ledgerlens.log import get_logger

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 20


def _check_amount(amount) -> Decimal:
    amount = Decimal(amount)
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"Amount must be a non-negative number, got {amount}")
    return amount


def _check_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Transaction name must not be empty")
    return name.strip()


class TransactionService:
    """Service for recording, editing and looking up ledger transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.categories = CategoryService(db)

    def create_transaction(
        self,
        owner_id: int,
        category_id: int,
        amount: Decimal,
        kind: TransactionKind | str,
        date: date,
        name: str,
        note: Optional[str] = None,
    ) -> int:
        """Record a transaction.

        Args:
            owner_id: Owner ID
            category_id: Category ID, must be visible to the owner
            amount: Non-negative amount
            kind: income or expense, must match the category's kind
            date: Transaction date
            name: Short description
            note: Optional note

        Returns:
            Transaction ID

        Raises:
            ValidationError: If amount is negative, name is empty or the kind
                does not match the category
            NotFoundError: If the category is not visible to the owner
        """
        kind = TransactionKind.parse(kind)
        amount = _check_amount(amount)
        name = _check_name(name)

        category = self.categories.get_category(owner_id, category_id)
        if category.kind is not kind:
            raise ValidationError(
                category_kind_mismatch(category.name, category.kind.value, kind.value)
            )

        transaction_id = self.db.create_transaction(
            owner_id=owner_id,
            category_id=category_id,
            amount=amount,
            kind=kind,
            date=date,
            name=name,
            note=note,
        )
        logger.debug(
            "transaction recorded",
            owner_id=owner_id,
            transaction_id=transaction_id,
            kind=kind.value,
        )
        return transaction_id

    def get_transaction(self, owner_id: int, transaction_id: int) -> TransactionEntity:
        """Get one of the owner's transactions.

        Raises:
            NotFoundError: If the transaction does not exist or belongs to another owner
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None or txn.owner_id != owner_id:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        owner_id: int,
        transaction_id: int,
        category_id: Optional[int] = None,
        amount: Optional[Decimal] = None,
        kind: Optional[TransactionKind | str] = None,
        date: Optional[date] = None,
        name: Optional[str] = None,
        note: Optional[str] = None,
    ) -> None:
        """Update one of the owner's transactions.

        Updates only the fields that are provided. The resulting kind must
        still match the resulting category.

        Raises:
            NotFoundError: If the transaction or the new category is not visible
                to the owner
            ValidationError: If a new value is invalid or kind and category
                no longer match
        """
        txn = self.get_transaction(owner_id, transaction_id)

        if kind is not None:
            kind = TransactionKind.parse(kind)
        if amount is not None:
            amount = _check_amount(amount)
        if name is not None:
            name = _check_name(name)

        category = self.categories.get_category(
            owner_id, category_id if category_id is not None else txn.category_id
        )
        new_kind = kind if kind is not None else txn.kind
        if category.kind is not new_kind:
            raise ValidationError(
                category_kind_mismatch(category.name, category.kind.value, new_kind.value)
            )

        self.db.update_transaction(
            transaction_id,
            category_id=category_id,
            amount=amount,
            kind=kind,
            date=date,
            name=name,
            note=note,
        )
        logger.debug("transaction updated", owner_id=owner_id, transaction_id=transaction_id)

    def delete_transaction(self, owner_id: int, transaction_id: int) -> None:
        """Delete one of the owner's transactions.

        Raises:
            NotFoundError: If the transaction does not exist or belongs to another owner
        """
        self.get_transaction(owner_id, transaction_id)
        self.db.delete_transaction(transaction_id)
        logger.debug("transaction deleted", owner_id=owner_id, transaction_id=transaction_id)

    def get_transaction_page(
        self,
        owner_id: int,
        page: int = 1,
        per_page: int = DEFAULT_PAGE_SIZE,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[TransactionKind] = None,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> TransactionPage:
        """One page of the owner's filtered transactions, newest first.

        Raises:
            ValidationError: If page or per_page is not positive, or the dates
                are inverted
        """
        if page < 1:
            raise ValidationError(f"page must be positive, got {page}")
        if per_page < 1:
            raise ValidationError(f"per_page must be positive, got {per_page}")
        if start_date is not None and end_date is not None:
            DateWindow(start=start_date, end=end_date)

        filters = dict(
            start_date=start_date,
            end_date=end_date,
            kind=kind,
            category_id=category_id,
            search=search,
        )
        transactions = self.db.query_transactions(
            owner_id, limit=per_page, offset=(page - 1) * per_page, **filters
        )
        total_count = self.db.count_transactions(owner_id, **filters)
        return TransactionPage(
            transactions=transactions,
            total_count=total_count,
            page=page,
            per_page=per_page,
        )

    def list_transactions(
        self,
        owner_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[TransactionKind] = None,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List the owner's transactions, newest first.

        Raises:
            ValidationError: If both dates are given and end_date is before start_date
        """
        if start_date is not None and end_date is not None:
            DateWindow(start=start_date, end=end_date)

        return self.db.query_transactions(
            owner_id,
            start_date=start_date,
            end_date=end_date,
            kind=kind,
            category_id=category_id,
            search=search,
        )
