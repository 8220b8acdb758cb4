from __future__ import annotations
from decimal import Decimal
from typing import Annotated, Optional, Union
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    RootModel,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel
from meal_shopping_list.categories import GroceryCategory

JsonNumber = PlainSerializer(float, return_type=float, when_used="json")


class ShoppingItem(BaseModel):
    model_config = ConfigDict(frozen=True, validate_by_name=True, alias_generator=to_camel)

    id: str
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    quantity: Annotated[Decimal, Field(gt=0), JsonNumber] = Decimal(1)
    unit: str = "items"
    category: GroceryCategory = GroceryCategory.OTHER
    estimated_cost: Annotated[Decimal, JsonNumber] = Decimal(0)
    already_have: bool = False
    notes: str = ""


class RecipeIngredient(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(default=None, validation_alias=AliasChoices("name", "ingredientId"))
    amount: Optional[Union[int, float, str]] = None
    unit: Optional[str] = None


class RecipeRef(BaseModel):
    title: Optional[str] = None
    ingredients: list[Union[RecipeIngredient, str]] = Field(default_factory=list)

    @field_validator("ingredients", mode="before")
    @classmethod
    def missing_ingredients_are_empty(cls, v):
        return v or []


DayMeals = dict[str, Optional[RecipeRef]]


class MealPlan(RootModel[dict[str, Optional[DayMeals]]]):
    """Day label -> meal slot (breakfast, lunch, dinner, snacks) -> recipe."""

    def days(self) -> list[tuple[str, DayMeals]]:
        return [(day, meals or {}) for day, meals in self.root.items()]
