"""Category service for database operations."""

from typing import List, Optional
from errors import DeleteFailed, SaveFailed, StoreError, ValidationFailed
from logger import get_logger
from models.category import Category, DEFAULT_ACCENT_COLOR, DEFAULT_ICON_NAME
from validation import validate_category_name

logger = get_logger()

_CATEGORY_SELECT_FIELDS = "id, name, icon_name, accent_color"


def row_to_category(row: tuple) -> Category:
    """Convert a (id, name, icon_name, accent_color) row to a Category."""
    return Category(id=row[0], name=row[1], icon_name=row[2], accent_color=row[3])


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories ORDER BY name, id"
            )
            return [row_to_category(row) for row in cursor.fetchall()]

    def find(self, category_id: str) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()
            return row_to_category(row) if row else None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get the first category with the given name.

        Names are not unique; the lexically smallest ID wins so the lookup is
        stable.

        Args:
            name: The category name to find (case-sensitive).

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories "
                "WHERE name = ? ORDER BY id LIMIT 1",
                (name,),
            )
            row = cursor.fetchone()
            return row_to_category(row) if row else None

    def create(
        self,
        name: str,
        icon_name: str = DEFAULT_ICON_NAME,
        accent_color: str = DEFAULT_ACCENT_COLOR,
    ) -> Category:
        """Create a new category.

        Args:
            name: Category name (1-50 characters).
            icon_name: Symbolic icon name.
            accent_color: Hex color string without '#'.

        Returns:
            The created Category object with id populated.

        Raises:
            ValidationFailed: If the name is invalid. Nothing is written.
            SaveFailed: If the store rejects the write.
        """
        validation = validate_category_name(name)
        if not validation.is_valid:
            raise ValidationFailed(validation.error_message)

        category = Category.new(name, icon_name, accent_color)
        self.insert(category)
        logger.debug(f"Created category '{category.name}' ({category.id})")
        return category

    def insert(self, category: Category) -> Category:
        """Insert an already-built category without validating it.

        Used by the backup importer, which joins the caller's unit of work.

        Raises:
            SaveFailed: If the store rejects the write.
        """
        try:
            with self.db_manager.transaction() as conn:
                conn.execute(
                    f"INSERT INTO categories ({_CATEGORY_SELECT_FIELDS}) VALUES (?, ?, ?, ?)",
                    (
                        category.id,
                        category.name,
                        category.icon_name,
                        category.accent_color,
                    ),
                )
        except StoreError as e:
            raise SaveFailed(e.message) from e
        return category

    def update(
        self,
        category_id: str,
        name: str,
        icon_name: str = DEFAULT_ICON_NAME,
        accent_color: str = DEFAULT_ACCENT_COLOR,
    ) -> Category:
        """Update an existing category.

        Args:
            category_id: The category ID to update.
            name: New category name.
            icon_name: New icon name.
            accent_color: New accent color.

        Returns:
            The updated Category object.

        Raises:
            ValidationFailed: If the new name is invalid.
            SaveFailed: If the category is not found or the update fails.
        """
        validation = validate_category_name(name)
        if not validation.is_valid:
            raise ValidationFailed(validation.error_message)

        try:
            with self.db_manager.transaction() as conn:
                cursor = conn.execute(
                    "UPDATE categories SET name = ?, icon_name = ?, accent_color = ? WHERE id = ?",
                    (name, icon_name, accent_color, category_id),
                )
                rowcount = cursor.rowcount
        except StoreError as e:
            raise SaveFailed(e.message) from e

        if rowcount == 0:
            raise SaveFailed(f"Category with ID {category_id} not found")

        return Category(
            id=category_id, name=name, icon_name=icon_name, accent_color=accent_color
        )

    def delete(self, category_id: str) -> bool:
        """Delete a category by ID.

        Decisions that referenced the category are kept and become
        uncategorized in the same unit of work.

        Args:
            category_id: The category ID to delete.

        Returns:
            True if category was deleted, False if not found.

        Raises:
            DeleteFailed: If the store rejects the delete. Nothing changes.
        """
        try:
            with self.db_manager.transaction() as conn:
                conn.execute(
                    "UPDATE financial_decisions SET category_id = NULL WHERE category_id = ?",
                    (category_id,),
                )
                cursor = conn.execute(
                    "DELETE FROM categories WHERE id = ?", (category_id,)
                )
                deleted = cursor.rowcount > 0
        except StoreError as e:
            raise DeleteFailed(e.message) from e

        if deleted:
            logger.debug(f"Deleted category {category_id}")
        return deleted

    def delete_all(self) -> int:
        """Delete every category, detaching all decisions.

        Returns:
            Number of categories deleted.
        """
        try:
            with self.db_manager.transaction() as conn:
                conn.execute("UPDATE financial_decisions SET category_id = NULL")
                cursor = conn.execute("DELETE FROM categories")
                return cursor.rowcount
        except StoreError as e:
            raise DeleteFailed(e.message) from e

    def count_decisions(self, category_id: str) -> int:
        """Count the decisions currently filed under a category."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT COUNT(*) FROM financial_decisions WHERE category_id = ?",
                (category_id,),
            )
            return cursor.fetchone()[0]
