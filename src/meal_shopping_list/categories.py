from __future__ import annotations
import string
from enum import Enum


class GroceryCategory(str, Enum):
    """Canonical grocery categories, in display order."""

    PRODUCE = "Produce"
    DAIRY = "Dairy"
    MEAT_SEAFOOD = "Meat & Seafood"
    PANTRY = "Pantry"
    FROZEN = "Frozen"
    BEVERAGES = "Beverages"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value


_EDGE_CHARS = string.whitespace + string.punctuation
_BY_LABEL = {c.value.casefold(): c for c in GroceryCategory}


def is_category(candidate: str) -> GroceryCategory | None:
    """Resolve free text to a canonical category, or None.

    Surrounding whitespace and punctuation are ignored; the comparison is
    case-insensitive and otherwise exact.
    """
    return _BY_LABEL.get(candidate.strip(_EDGE_CHARS).casefold())
