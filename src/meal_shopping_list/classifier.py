from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from meal_shopping_list.categories import GroceryCategory, is_category

logger = logging.getLogger(__name__)

# Letters, spaces and "&" up to a colon at the very start of the line.
HEADER_RE = re.compile(r"^(?P<label>(?:[^\W\d_]|[ &])+):")


def header_category(line: str) -> GroceryCategory | None:
    """Return the category a header line announces, or None if it is not a header.

    A header whose label is not a canonical category still counts as a header
    and resolves to Other.
    """
    match = HEADER_RE.match(line)
    if not match:
        return None
    category = is_category(match.group("label"))
    if category is None:
        logger.debug("Unknown category header %r, using %s", match.group("label"), GroceryCategory.OTHER)
        return GroceryCategory.OTHER
    return category


@dataclass
class ParseState:
    current_category: GroceryCategory = GroceryCategory.OTHER
