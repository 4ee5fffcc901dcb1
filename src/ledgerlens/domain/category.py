"""Category domain service."""

import re
from typing import Optional

from ledgerlens.database.base import Database
from ledgerlens.domain.entities import Category as CategoryEntity, TransactionKind
from ledgerlens.domain.errors import (
    NotFoundError,
    ValidationError,
    category_name_not_found,
    category_name_taken,
    category_not_found,
    system_category_readonly,
)
from ledgerlens.log import get_logger

logger = get_logger(__name__)


# System-wide default categories: (name, icon, color, display_order)
DEFAULT_EXPENSE_CATEGORIES = [
    ("Food & Dining", "🍜", "#ef4444", 1),
    ("Transportation", "🚗", "#3b82f6", 2),
    ("Shopping", "🛍️", "#ec4899", 3),
    ("Entertainment", "🎮", "#8b5cf6", 4),
    ("Health", "💊", "#10b981", 5),
    ("Education", "📚", "#f59e0b", 6),
    ("Housing", "🏠", "#6366f1", 7),
    ("Bills", "📄", "#14b8a6", 8),
    ("Other", "📦", "#6b7280", 99),
]

DEFAULT_INCOME_CATEGORIES = [
    ("Salary", "💰", "#10b981", 1),
    ("Bonus", "🎁", "#f59e0b", 2),
    ("Investment", "📈", "#3b82f6", 3),
    ("Sales", "🏪", "#8b5cf6", 4),
    ("Other", "💵", "#6b7280", 99),
]

# Transactions of a deleted category move here
FALLBACK_CATEGORY_NAME = "Other"

COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


def _clean_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Category name must not be empty")
    return name.strip()


def _check_color(color: Optional[str]) -> None:
    if color is not None and not COLOR_PATTERN.match(color):
        raise ValidationError(f"Color must look like #rrggbb, got '{color}'")


class CategoryService:
    """Service for reading, managing and seeding categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_categories(
        self, owner_id: int, kind: Optional[TransactionKind] = None
    ) -> list[CategoryEntity]:
        """List categories visible to an owner.

        Args:
            owner_id: Owner ID
            kind: Optional income/expense filter

        Returns:
            The owner's categories plus system-wide ones
        """
        return self.db.query_categories(owner_id, kind=kind)

    def get_category(self, owner_id: int, category_id: int) -> CategoryEntity:
        """Get a category visible to an owner.

        Raises:
            NotFoundError: If the category does not exist or belongs to another owner
        """
        category = self.db.get_category(category_id)
        if category is None or category.owner_id not in (None, owner_id):
            raise NotFoundError(category_not_found(category_id))
        return category

    def find_category_by_name(
        self, owner_id: int, name: str, kind: TransactionKind
    ) -> CategoryEntity:
        """Find a category of the given kind by case-insensitive name.

        The owner's own category wins over a system category of the same name.

        Raises:
            NotFoundError: If no visible category matches
        """
        wanted = name.strip().lower()
        matches = [
            cat for cat in self.db.query_categories(owner_id, kind=kind)
            if cat.name.lower() == wanted
        ]
        if not matches:
            raise NotFoundError(category_name_not_found(name))
        matches.sort(key=lambda cat: cat.owner_id is None)
        return matches[0]

    def create_category(
        self,
        owner_id: int,
        name: str,
        kind: TransactionKind | str,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> int:
        """Create a custom category owned by ``owner_id``.

        Raises:
            ValidationError: If the name is empty or already used by one of the
                owner's categories of the same kind, or the color is not #rrggbb
        """
        kind = TransactionKind.parse(kind)
        name = _clean_name(name)
        _check_color(color)

        for cat in self.db.query_categories(owner_id, kind=kind):
            if cat.owner_id == owner_id and cat.name.lower() == name.lower():
                raise ValidationError(category_name_taken(name, kind.value))

        category_id = self.db.create_category(
            name=name,
            kind=kind,
            owner_id=owner_id,
            icon=icon,
            color=color,
            is_system=False,
        )
        logger.info("category created", owner_id=owner_id, category_id=category_id)
        return category_id

    def get_editable_category(self, owner_id: int, category_id: int) -> CategoryEntity:
        """Get one of the owner's own categories for editing.

        Raises:
            NotFoundError: If the category is not visible to the owner
            ValidationError: If the category is a system category
        """
        category = self.get_category(owner_id, category_id)
        if category.is_system or category.owner_id is None:
            raise ValidationError(system_category_readonly(category_id))
        return category

    def update_category(
        self,
        owner_id: int,
        category_id: int,
        name: Optional[str] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> None:
        """Update the name, icon or color of one of the owner's categories.

        Raises:
            NotFoundError: If the category is not visible to the owner
            ValidationError: If the category is a system category or a new
                value is invalid
        """
        category = self.get_editable_category(owner_id, category_id)
        if name is not None:
            name = _clean_name(name)
            for cat in self.db.query_categories(owner_id, kind=category.kind):
                if (
                    cat.id != category_id
                    and cat.owner_id == owner_id
                    and cat.name.lower() == name.lower()
                ):
                    raise ValidationError(category_name_taken(name, category.kind.value))
        _check_color(color)

        self.db.update_category(category_id, name=name, icon=icon, color=color)

    def get_category_usage_count(self, owner_id: int, category_id: int) -> int:
        """Number of the owner's transactions filed under a category."""
        self.get_category(owner_id, category_id)
        return self.db.count_category_transactions(owner_id, category_id)

    def delete_category(self, owner_id: int, category_id: int) -> int:
        """Delete one of the owner's categories.

        Its transactions move to the "Other" category of the same kind.

        Returns:
            Number of transactions moved

        Raises:
            NotFoundError: If the category is not visible to the owner
            ValidationError: If the category is a system category, or it is in
                use and no "Other" category is available
        """
        category = self.get_editable_category(owner_id, category_id)

        moved = 0
        if self.db.count_category_transactions(owner_id, category_id):
            fallback = self._fallback_category(owner_id, category)
            if fallback is None:
                raise ValidationError(
                    f"Category '{category.name}' is in use and no "
                    f"'{FALLBACK_CATEGORY_NAME}' category exists to take its transactions"
                )
            moved = self.db.reassign_transactions(owner_id, category_id, fallback.id)

        self.db.delete_category(category_id)
        logger.info(
            "category deleted", owner_id=owner_id, category_id=category_id, moved=moved
        )
        return moved

    def _fallback_category(
        self, owner_id: int, category: CategoryEntity
    ) -> Optional[CategoryEntity]:
        candidates = [
            cat for cat in self.db.query_categories(owner_id, kind=category.kind)
            if cat.id != category.id and cat.name.lower() == FALLBACK_CATEGORY_NAME.lower()
        ]
        if not candidates:
            return None
        candidates.sort(key=lambda cat: cat.owner_id is None)
        return candidates[0]

    def seed_system_categories(self) -> int:
        """Create the default system-wide categories that do not exist yet.

        Returns:
            Number of categories created
        """
        existing = {(cat.kind, cat.name) for cat in self.db.query_categories(None)}

        created = 0
        for kind, defaults in (
            (TransactionKind.EXPENSE, DEFAULT_EXPENSE_CATEGORIES),
            (TransactionKind.INCOME, DEFAULT_INCOME_CATEGORIES),
        ):
            for name, icon, color, display_order in defaults:
                if (kind, name) in existing:
                    continue
                self.db.create_category(
                    name=name,
                    kind=kind,
                    owner_id=None,
                    icon=icon,
                    color=color,
                    is_system=True,
                    display_order=display_order,
                )
                created += 1

        logger.info("system categories seeded", created=created)
        return created
