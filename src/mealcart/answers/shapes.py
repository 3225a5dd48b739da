"""Ordered registry of recognized answer shapes.

Shapes overlap structurally (both meal-plan generations carry a top-level
``meal_plan`` object), so recognizers are evaluated in a fixed priority order
and the first match wins. New shapes are appended with
:meth:`ShapeRegistry.register` without reordering existing entries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional

from pydantic import ValidationError

from mealcart.answers.normalizer import (
    normalize_current_meal_plan,
    normalize_error_message,
    normalize_legacy_meal_plan,
    normalize_simple_grocery_list,
    normalize_unrecognized,
)
from mealcart.models.answer import JsonValue, NormalizedAnswer, ShapeTag

logger = logging.getLogger(__name__)

Recognizer = Callable[[JsonValue], bool]
Normalizer = Callable[[Any], NormalizedAnswer]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _meal_plan(obj: JsonValue) -> Optional[dict]:
    if not isinstance(obj, dict):
        return None
    meal_plan = obj.get("meal_plan")
    return meal_plan if isinstance(meal_plan, dict) else None


def is_simple_grocery_list(obj: JsonValue) -> bool:
    return (
        isinstance(obj, dict)
        and isinstance(obj.get("grocery_list"), list)
        and _is_number(obj.get("total_price"))
    )


def is_current_meal_plan(obj: JsonValue) -> bool:
    meal_plan = _meal_plan(obj)
    if meal_plan is None:
        return False
    return isinstance(meal_plan.get("grocery_list"), list) or isinstance(
        meal_plan.get("daily_meals"), dict
    )


def is_legacy_meal_plan(obj: JsonValue) -> bool:
    # Legacy detection keys off the absence of a nested grocery_list.
    meal_plan = _meal_plan(obj)
    return meal_plan is not None and "grocery_list" not in meal_plan


def is_error_message(obj: JsonValue) -> bool:
    if not isinstance(obj, dict):
        return False
    if obj.get("success") is False:
        return True
    return (
        isinstance(obj.get("message"), str)
        and "grocery_list" not in obj
        and "meal_plan" not in obj
    )


@dataclass(frozen=True)
class ShapeEntry:
    tag: ShapeTag
    recognizes: Recognizer
    normalize: Normalizer


class ShapeRegistry:
    """Priority-ordered (recognizer, normalizer) pairs."""

    def __init__(self, entries: Optional[List[ShapeEntry]] = None) -> None:
        self._entries: List[ShapeEntry] = list(entries or [])

    def __iter__(self) -> Iterator[ShapeEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def register(self, entry: ShapeEntry) -> None:
        """Append a shape after every existing entry."""

        if entry.tag is ShapeTag.UNRECOGNIZED:
            raise ValueError("Unrecognized is the implicit fallback and cannot be registered.")
        if any(existing.tag is entry.tag for existing in self._entries):
            raise ValueError(f"Shape {entry.tag.value} is already registered.")
        self._entries.append(entry)

    def match(self, obj: JsonValue) -> Optional[ShapeEntry]:
        for entry in self._entries:
            if entry.recognizes(obj):
                return entry
        return None

    def classify(self, obj: JsonValue) -> ShapeTag:
        entry = self.match(obj)
        return entry.tag if entry is not None else ShapeTag.UNRECOGNIZED

    def normalize(self, tag: ShapeTag, obj: JsonValue) -> NormalizedAnswer:
        """Normalize ``obj`` with the adapter registered for ``tag``.

        Objects whose canonical plan would be empty pass through as
        unrecognized so they still reach the debug view.
        """

        if tag is ShapeTag.UNRECOGNIZED:
            return normalize_unrecognized(obj)
        entry = next((entry for entry in self._entries if entry.tag is tag), None)
        if entry is None:
            raise KeyError(f"No shape registered for {tag.value}")
        try:
            return entry.normalize(obj)
        except ValidationError as exc:
            logger.info(
                "Answer matched %s but carried no usable content: %s",
                tag.value,
                exc.errors(include_url=False),
            )
            return normalize_unrecognized(obj)


def build_default_registry() -> ShapeRegistry:
    """Return a fresh registry holding the built-in shapes in priority order."""

    return ShapeRegistry(
        [
            ShapeEntry(
                ShapeTag.SIMPLE_GROCERY_LIST,
                is_simple_grocery_list,
                normalize_simple_grocery_list,
            ),
            # Must precede the legacy shape, which also has a top-level meal_plan object.
            ShapeEntry(
                ShapeTag.CURRENT_MEAL_PLAN,
                is_current_meal_plan,
                normalize_current_meal_plan,
            ),
            ShapeEntry(
                ShapeTag.LEGACY_MEAL_PLAN,
                is_legacy_meal_plan,
                normalize_legacy_meal_plan,
            ),
            ShapeEntry(
                ShapeTag.ERROR_MESSAGE,
                is_error_message,
                normalize_error_message,
            ),
        ]
    )


DEFAULT_REGISTRY = build_default_registry()


def classify(obj: JsonValue, registry: ShapeRegistry = DEFAULT_REGISTRY) -> ShapeTag:
    """Return the tag of the first registered shape ``obj`` satisfies."""

    return registry.classify(obj)


def normalize(
    tag: ShapeTag,
    obj: JsonValue,
    registry: ShapeRegistry = DEFAULT_REGISTRY,
) -> NormalizedAnswer:
    return registry.normalize(tag, obj)


__all__ = [
    "DEFAULT_REGISTRY",
    "ShapeEntry",
    "ShapeRegistry",
    "build_default_registry",
    "classify",
    "is_current_meal_plan",
    "is_error_message",
    "is_legacy_meal_plan",
    "is_simple_grocery_list",
    "normalize",
]
