from __future__ import annotations
import asyncio
import logging
from typing import Any, Mapping, Optional
from pydantic import ValidationError as PydanticValidationError
from meal_shopping_list.errors import EmptyResultError, GenerationError, ValidationError
from meal_shopping_list.ids import IdFactory, sequential_ids
from meal_shopping_list.llm import ModelClient
from meal_shopping_list.models import MealPlan, ShoppingItem
from meal_shopping_list.parser import parse_response
from meal_shopping_list.prompt import SYSTEM_INSTRUCTION, build_user_prompt

logger = logging.getLogger(__name__)


def validate_meal_plan(meal_plan: Optional[Mapping[str, Any] | MealPlan]) -> MealPlan:
    if isinstance(meal_plan, MealPlan):
        if not meal_plan.root:
            raise ValidationError("No meal plan provided")
        return meal_plan
    if not meal_plan:
        raise ValidationError("No meal plan provided")
    try:
        return MealPlan.model_validate(meal_plan)
    except PydanticValidationError as e:
        raise ValidationError("Invalid meal plan", details=e.errors()) from e


async def generate_shopping_list(
    meal_plan: Optional[Mapping[str, Any] | MealPlan],
    client: ModelClient,
    *,
    new_id: IdFactory | None = None,
    timeout: float | None = None,
) -> list[ShoppingItem]:
    """Ask the model for a shopping list covering ``meal_plan`` and parse the answer.

    Raises ValidationError before any model call when the plan is missing or
    malformed, GenerationError when the model call fails or exceeds
    ``timeout`` seconds, and EmptyResultError when nothing could be parsed.
    Failures are never retried.
    """
    plan = validate_meal_plan(meal_plan)
    prompt = build_user_prompt(plan)

    logger.info("Requesting shopping list for %d day(s)", len(plan.root))
    try:
        call = client.complete(SYSTEM_INSTRUCTION, prompt)
        text = await (call if timeout is None else asyncio.wait_for(call, timeout))
    except Exception as e:
        logger.warning("Shopping list generation failed: %s", e)
        raise GenerationError("Failed to generate shopping list", details=e) from e

    items = parse_response(text, new_id or sequential_ids())
    if not items:
        logger.warning("Model response contained no shopping items")
        raise EmptyResultError("Generated shopping list is empty", details=text)
    return items
