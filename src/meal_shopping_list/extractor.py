from __future__ import annotations
import re
from decimal import Decimal, InvalidOperation
from meal_shopping_list.categories import GroceryCategory
from meal_shopping_list.ids import IdFactory
from meal_shopping_list.models import ShoppingItem

DEFAULT_QUANTITY = Decimal(1)
DEFAULT_UNIT = "items"

_MARKER_RE = re.compile(r"^[-•]\s*")
_ITEM_RE = re.compile(
    r"^(?P<name>.*?)"
    r"(?:\s*[-–]\s*"
    r"(?P<quantity>\d+\s+\d+/\d+|\d+/\d+|\d*\.?\d+)"
    r"\s*(?P<unit>[^\W\d_]\w*))?"
    r"\s*$"
)
_MIXED_RE = re.compile(r"^(?P<whole>\d+)\s+(?P<num>\d+)/(?P<den>\d+)$")
_FRACTION_RE = re.compile(r"^(?P<num>\d+)/(?P<den>\d+)$")


def parse_quantity(text: str) -> Decimal | None:
    """Parse "2", "1.5", ".5", "1/2" or "1 1/2" into a positive Decimal.

    Returns None for anything else, including zero denominators and values
    that are not positive.
    """
    text = text.strip()
    try:
        if match := _MIXED_RE.match(text):
            den = Decimal(match.group("den"))
            value = Decimal(match.group("whole")) + Decimal(match.group("num")) / den
        elif match := _FRACTION_RE.match(text):
            value = Decimal(match.group("num")) / Decimal(match.group("den"))
        else:
            value = Decimal(text)
    except (InvalidOperation, ZeroDivisionError):
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


def extract_item(line: str, category: GroceryCategory, new_id: IdFactory) -> ShoppingItem | None:
    """Build a ShoppingItem from one non-header line, or return None.

    Lines without a list marker must carry a quantity suffix to count as
    items; otherwise they are treated as prose.
    """
    marker = _MARKER_RE.match(line)
    body = line[marker.end():] if marker else line

    match = _ITEM_RE.match(body)
    name = match.group("name").strip()
    if not any(ch.isalnum() for ch in name):
        return None

    raw_quantity = match.group("quantity")
    if marker is None and raw_quantity is None:
        return None

    quantity = parse_quantity(raw_quantity) if raw_quantity else None
    if quantity is None:
        quantity, unit = DEFAULT_QUANTITY, DEFAULT_UNIT
    else:
        unit = match.group("unit")

    return ShoppingItem(id=new_id(), name=name, quantity=quantity, unit=unit, category=category)
