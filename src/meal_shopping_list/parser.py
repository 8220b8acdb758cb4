from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterator, Union
from meal_shopping_list.categories import GroceryCategory
from meal_shopping_list.classifier import ParseState, header_category
from meal_shopping_list.extractor import extract_item
from meal_shopping_list.ids import IdFactory, sequential_ids
from meal_shopping_list.models import ShoppingItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Header:
    category: GroceryCategory


@dataclass(frozen=True)
class Item:
    item: ShoppingItem


@dataclass(frozen=True)
class Skipped:
    line: str


LineOutcome = Union[Header, Item, Skipped]


def parse_line(line: str, current_category: GroceryCategory, new_id: IdFactory) -> LineOutcome:
    """Classify one response line. Headers are checked before items."""
    category = header_category(line)
    if category is not None:
        return Header(category)
    item = extract_item(line, current_category, new_id)
    if item is None:
        return Skipped(line)
    return Item(item)


def _lines(text: str) -> Iterator[str]:
    for raw in text.splitlines():
        line = raw.strip()
        if line:
            yield line


def parse_response(text: str, new_id: IdFactory | None = None) -> list[ShoppingItem]:
    """Turn a model's free-form shopping list into items, in line order."""
    new_id = new_id or sequential_ids()
    state = ParseState()
    items: list[ShoppingItem] = []
    skipped = 0

    for line in _lines(text):
        outcome = parse_line(line, state.current_category, new_id)
        if isinstance(outcome, Header):
            state.current_category = outcome.category
        elif isinstance(outcome, Item):
            items.append(outcome.item)
        else:
            skipped += 1
            logger.debug("Skipping line with no shopping item: %r", outcome.line)

    logger.info("Parsed %d item(s), skipped %d line(s)", len(items), skipped)
    return items
