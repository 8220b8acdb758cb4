from meal_shopping_list.categories import GroceryCategory, is_category
from meal_shopping_list.errors import (
    EmptyResultError,
    GenerationError,
    ShoppingListError,
    ValidationError,
)
from meal_shopping_list.generator import generate_shopping_list
from meal_shopping_list.models import ShoppingItem
from meal_shopping_list.parser import parse_response

__all__ = [
    "EmptyResultError",
    "GenerationError",
    "GroceryCategory",
    "ShoppingItem",
    "ShoppingListError",
    "ValidationError",
    "generate_shopping_list",
    "is_category",
    "parse_response",
]
