"""Mapper functions to convert SQLAlchemy models into domain entities.

Rows never leave the database layer untyped: every query result passes
through one of these functions before it reaches the analytics services.
"""

from decimal import Decimal

from ledgerlens.domain import entities as domain
from ledgerlens.database.models import (
    Category as ORMCategory,
    Transaction as ORMTransaction,
)


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        owner_id=orm_category.owner_id,
        name=orm_category.name,
        icon=orm_category.icon,
        color=orm_category.color,
        kind=domain.TransactionKind(orm_category.kind),
        is_system=bool(orm_category.is_system),
        display_order=orm_category.display_order or 0,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        owner_id=orm_transaction.owner_id,
        category_id=orm_transaction.category_id,
        amount=Decimal(orm_transaction.amount),
        kind=domain.TransactionKind(orm_transaction.kind),
        date=orm_transaction.date,
        name=orm_transaction.name,
        note=orm_transaction.note,
        created_at=orm_transaction.created_at,
    )
