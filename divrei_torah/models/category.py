"""Top-level categories of the library."""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    """A fixed top-level category.

    The value is the display name used in listings and snapshot keys.
    """

    TORAH = "Torah"
    MOADIM = "Moadim"

    @property
    def row_type(self) -> str:
        """Lower-case value of the raw ``type`` column selecting this category."""
        return self.value.lower()

    @property
    def has_divisions(self) -> bool:
        """Whether sections are grouped under divisions (sedarim)."""
        return self is Category.TORAH

    @classmethod
    def from_row_type(cls, row_type: str) -> Category | None:
        """Resolve a raw ``type`` cell; unknown types give None."""
        normalized = row_type.strip().lower()
        for category in cls:
            if category.row_type == normalized:
                return category
        return None

    @classmethod
    def parse(cls, name: str) -> Category | None:
        """Resolve a display name such as "Torah"; unknown names give None."""
        try:
            return cls(name)
        except ValueError:
            return None
