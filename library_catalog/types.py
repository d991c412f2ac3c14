"""Type definitions shared across the catalog."""

from enum import Enum


class EntityKind(str, Enum):
    """The two kinds of entity held by the catalog."""

    AUTHOR = "author"
    BOOK = "book"

    @property
    def label(self) -> str:
        """Capitalized name used in user-facing messages."""
        return self.value.capitalize()
