"""Shared pytest fixtures for ledgerlens tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from ledgerlens.database.factories import create_sqlite_database
from ledgerlens.domain.analytics import AnalyticsService
from ledgerlens.domain.category import CategoryService
from ledgerlens.domain.entities import TransactionKind
from ledgerlens.domain.transaction import TransactionService
from ledgerlens.log import reset_logging

# A Friday in the middle of a 31-day month
FIXED_TODAY = date(2024, 3, 15)
OWNER_ID = 1
OTHER_OWNER_ID = 2


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def today():
    """Reference date used by clock-driven services."""
    return FIXED_TODAY


@pytest.fixture
def clock(today):
    """Clock callable pinned to the reference date."""
    return lambda: today


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def analytics_service(temp_db, clock):
    """Create an AnalyticsService with a temporary database and fixed clock."""
    return AnalyticsService(temp_db, clock=clock)


@pytest.fixture
def sample_categories(category_service):
    """Seed system categories and return IDs keyed by (kind, name)."""
    category_service.seed_system_categories()
    return {
        (cat.kind.value, cat.name): cat.id
        for cat in category_service.list_categories(OWNER_ID)
    }


@pytest.fixture
def add_txn(transaction_service, sample_categories):
    """Factory recording a transaction by category name."""

    def _add(
        kind: str,
        amount,
        txn_date: date,
        category: str = None,
        name: str = "Test transaction",
        owner_id: int = OWNER_ID,
        note: str = None,
    ) -> int:
        if category is None:
            category = "Food & Dining" if kind == "expense" else "Salary"
        return transaction_service.create_transaction(
            owner_id=owner_id,
            category_id=sample_categories[kind, category],
            amount=Decimal(str(amount)),
            kind=TransactionKind(kind),
            date=txn_date,
            name=name,
            note=note,
        )

    return _add


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    reset_logging()
