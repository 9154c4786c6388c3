"""Category model for grouping decisions."""

import uuid
from dataclasses import dataclass

DEFAULT_ICON_NAME = "folder"
DEFAULT_ACCENT_COLOR = "4A90E2"


@dataclass
class Category:
    """Represents a user-defined decision category.

    Attributes:
        id: Unique identifier (UUID string, assigned at creation).
        name: Category name, not necessarily unique.
        icon_name: Symbolic name of the icon shown next to the category.
        accent_color: Hex color without the leading '#', e.g. "4A90E2".
    """

    id: str
    name: str
    icon_name: str = DEFAULT_ICON_NAME
    accent_color: str = DEFAULT_ACCENT_COLOR

    @classmethod
    def new(
        cls,
        name: str,
        icon_name: str = DEFAULT_ICON_NAME,
        accent_color: str = DEFAULT_ACCENT_COLOR,
    ) -> "Category":
        """Create a Category with a freshly generated ID."""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            icon_name=icon_name,
            accent_color=accent_color,
        )

    def to_dict(self) -> dict:
        """Convert category to dictionary for database storage."""
        return {
            "id": self.id,
            "name": self.name,
            "icon_name": self.icon_name,
            "accent_color": self.accent_color,
        }
