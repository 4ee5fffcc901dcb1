"""SQLAlchemy models for ledgerlens database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    CheckConstraint,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

KIND_CHECK = "kind IN ('income', 'expense')"


class Category(Base):
    """Category model. Rows with a NULL owner_id are system-wide defaults."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, nullable=True)
    name = Column(String(100), nullable=False)
    icon = Column(String(50), nullable=True)
    color = Column(String(7), nullable=True)
    kind = Column(String(10), nullable=False)
    is_system = Column(Boolean, default=False, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        CheckConstraint(KIND_CHECK, name="ck_categories_kind"),
        Index("ix_categories_owner_kind", "owner_id", "kind"),
    )

    # Relationships
    transactions = relationship("Transaction", back_populates="category")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    kind = Column(String(10), nullable=False)
    date = Column(Date, nullable=False)
    name = Column(String(255), nullable=False)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        CheckConstraint(KIND_CHECK, name="ck_transactions_kind"),
        CheckConstraint("amount >= 0", name="ck_transactions_amount"),
        Index("ix_transactions_owner_date", "owner_id", "date"),
        Index("ix_transactions_owner_kind", "owner_id", "kind"),
        Index("ix_transactions_owner_category", "owner_id", "category_id"),
    )

    # Relationships
    category = relationship("Category", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
