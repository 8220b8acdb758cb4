from __future__ import annotations
from typing import Any


class ShoppingListError(Exception):
    """Base for every failure surfaced by shopping list generation.

    The subclasses below are the complete set; callers can handle each one
    explicitly instead of inspecting messages.
    """

    def __init__(self, reason: str, details: Any = None):
        super().__init__(reason)
        self.reason = reason
        self.details = details


class ValidationError(ShoppingListError):
    """The meal plan was missing, empty or malformed."""


class GenerationError(ShoppingListError):
    """The model call failed. ``details`` holds the original exception."""

    @property
    def cause(self) -> BaseException | None:
        return self.details if isinstance(self.details, BaseException) else None


class EmptyResultError(ShoppingListError):
    """The model answered but no shopping items could be parsed."""
