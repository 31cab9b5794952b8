"""Category domain service."""

import logging
import re
from typing import Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import Category as CategoryEntity, CategoryType
from pocketledger.domain.errors import ValidationError
from pocketledger.domain.validation import require_choice, require_id, require_name

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#3b82f6"
COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def _require_color(color: str) -> str:
    if not COLOR_RE.match(color):
        raise ValidationError(f"Color must look like #rrggbb, got '{color}'")
    return color.lower()


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        user_id: int,
        name: str,
        category_type: CategoryType | str,
        color: str = DEFAULT_COLOR,
        icon: Optional[str] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a category.

        Args:
            user_id: Owning user ID
            name: Category name
            category_type: income or expense
            color: Display color as #rrggbb
            icon: Optional icon name
            description: Optional description

        Returns:
            Category ID

        Raises:
            ValidationError: If any field is invalid
        """
        require_id(user_id)
        category_id = self.db.create_category(
            user_id=user_id,
            name=require_name(name),
            category_type=require_choice(CategoryType, category_type, "category type").value,
            color=_require_color(color),
            icon=icon,
            description=description,
        )
        logger.info("Created category %s for user %s", category_id, user_id)
        return category_id

    def get_category(self, user_id: int, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID, or None if the user has no such category."""
        return self.db.get_category(require_id(user_id), category_id)

    def list_categories(
        self, user_id: int, category_type: Optional[CategoryType | str] = None
    ) -> list[CategoryEntity]:
        """List categories, optionally only those of one type."""
        categories = self.db.list_categories(require_id(user_id))
        if category_type is None:
            return categories
        wanted = require_choice(CategoryType, category_type, "category type")
        return [c for c in categories if c.category_type == wanted]

    def update_category(
        self,
        user_id: int,
        category_id: int,
        name: Optional[str] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Optional[CategoryEntity]:
        """Update category fields. The type cannot change.

        Returns:
            Updated category, or None if the user has no such category
        """
        require_id(user_id)
        updates = {}
        if name is not None:
            updates["name"] = require_name(name)
        if color is not None:
            updates["color"] = _require_color(color)
        if icon is not None:
            updates["icon"] = icon
        if description is not None:
            updates["description"] = description

        if not self.db.update_category(user_id, category_id, **updates):
            return None
        logger.info("Updated category %s for user %s", category_id, user_id)
        return self.db.get_category(user_id, category_id)
