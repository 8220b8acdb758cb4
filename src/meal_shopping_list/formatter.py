from __future__ import annotations
from collections import defaultdict
from decimal import Decimal
from pydantic import TypeAdapter
from meal_shopping_list.categories import GroceryCategory
from meal_shopping_list.extractor import DEFAULT_UNIT
from meal_shopping_list.models import ShoppingItem

_items_adapter = TypeAdapter(list[ShoppingItem])


def format_quantity(quantity: Decimal) -> str:
    rounded = quantity.quantize(Decimal("0.01")).normalize()
    return f"{rounded:f}"


def format_item(item: ShoppingItem) -> str:
    parts = [format_quantity(item.quantity)]
    if item.unit != DEFAULT_UNIT:
        parts.append(item.unit)
    parts.append(item.name)
    return "[ ] " + " ".join(parts)


def format_shopping_list(items: list[ShoppingItem]) -> str:
    by_category: dict[GroceryCategory, list[ShoppingItem]] = defaultdict(list)
    for item in items:
        by_category[item.category].append(item)

    lines: list[str] = []
    for category in GroceryCategory:
        if category not in by_category:
            continue
        lines.append(f"\n{category.value}")
        lines.append("-" * len(category.value))
        for item in by_category[category]:
            lines.append(format_item(item))

    return "\n".join(lines).strip()


def items_to_json(items: list[ShoppingItem]) -> str:
    return _items_adapter.dump_json(items, by_alias=True, indent=2).decode()
