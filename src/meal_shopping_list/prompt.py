from __future__ import annotations
import json
from typing import Any
from meal_shopping_list.categories import GroceryCategory
from meal_shopping_list.models import MealPlan, RecipeIngredient

NO_RECIPE = "No recipe selected"


def build_system_instruction() -> str:
    categories = ", ".join(c.value for c in GroceryCategory)
    return (
        f"Create organized shopping lists using these categories: {categories}. "
        "Format items with quantities when possible.\n\n"
        "Output format:\n"
        "- Start each category with its name followed by a colon on its own line (e.g. 'Produce:')\n"
        "- Put each item on its own line as '- <item name> - <quantity> <unit>' (e.g. '- Spinach - 2 bags')\n"
        "- Leave out the quantity when it is unknown (e.g. '- Salt')\n"
        "- Only use the categories listed above"
    )


SYSTEM_INSTRUCTION = build_system_instruction()


def _format_ingredient(ingredient: RecipeIngredient | str) -> Any:
    if isinstance(ingredient, str):
        return ingredient
    return ingredient.model_dump(exclude_none=True)


def format_meal_plan(plan: MealPlan) -> list[dict[str, Any]]:
    return [
        {
            "day": day,
            "meals": [
                {
                    "type": slot,
                    "recipe": (recipe.title if recipe else None) or NO_RECIPE,
                    "ingredients": [_format_ingredient(i) for i in recipe.ingredients] if recipe else [],
                }
                for slot, recipe in meals.items()
            ],
        }
        for day, meals in plan.days()
    ]


def build_user_prompt(plan: MealPlan) -> str:
    return (
        "Create a detailed shopping list from this meal plan, organizing ingredients by category: "
        f"{json.dumps(format_meal_plan(plan), indent=2)}"
    )
