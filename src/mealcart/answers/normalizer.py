"""Adapters from each recognized answer shape to the canonical plan model."""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Mapping, Optional, Sequence

from mealcart.models.answer import (
    CanonicalPlan,
    DayPlan,
    ErrorPayload,
    GroceryItem,
    Nutrition,
    Quantity,
    ShapeTag,
    UnrecognizedPayload,
)

logger = logging.getLogger(__name__)

UNKNOWN_ITEM_NAME = "Unknown item"


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _to_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        parts = [part for part in (_to_text(entry) for entry in value) if part]
        return ", ".join(parts) or None
    return None


def _to_quantity(value: Any) -> Optional[Quantity]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, int):
        # Integers beyond float range are kept as their digits.
        return value if _to_float(value) is not None else str(value)
    return _to_text(value)


def _compact_json(value: Any) -> Optional[str]:
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError, RecursionError):
        logger.debug("Meal slot value could not be rendered as JSON")
        return None


def _first_text(entry: Mapping[str, Any], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        text = _to_text(entry.get(key))
        if text:
            return text
    return None


def _coerce_nutrition(entry: Mapping[str, Any]) -> Optional[Nutrition]:
    nutrition = Nutrition(
        kcal=_to_float(entry.get("kcal", entry.get("calories"))),
        protein_g=_to_float(entry.get("protein")),
        carbs_g=_to_float(entry.get("carbs")),
        fat_g=_to_float(entry.get("fat")),
    )
    return None if nutrition.is_empty() else nutrition


def _coerce_item(
    entry: Any,
    *,
    name_keys: Sequence[str],
    detailed: bool,
) -> Optional[GroceryItem]:
    if isinstance(entry, str):
        name = entry.strip()
        return GroceryItem(name=name) if name else None
    if not isinstance(entry, Mapping):
        logger.debug("Skipping grocery entry of type %s", type(entry).__name__)
        return None

    fields: dict[str, Any] = {
        "name": _first_text(entry, name_keys) or UNKNOWN_ITEM_NAME,
        "price": _to_float(entry.get("price")),
        "quantity": _to_quantity(entry.get("quantity")),
        "unit": _to_text(entry.get("unit")),
    }
    if detailed:
        fields.update(
            nutrition=_coerce_nutrition(entry),
            volume=_to_text(entry.get("volume")),
            brand=_to_text(entry.get("brand")),
            link=_to_text(entry.get("link")),
        )
    return GroceryItem(**fields)


def _coerce_items(
    entries: Any,
    *,
    name_keys: Sequence[str],
    detailed: bool = False,
) -> Optional[list[GroceryItem]]:
    if not isinstance(entries, list):
        return None
    items: list[GroceryItem] = []
    for entry in entries:
        item = _coerce_item(entry, name_keys=name_keys, detailed=detailed)
        if item is not None:
            items.append(item)
    return items


def _coerce_day(meals: Any) -> Optional[DayPlan]:
    if not isinstance(meals, Mapping):
        return None
    day: DayPlan = {}
    for slot, description in meals.items():
        text = _to_text(description)
        if text is None and isinstance(description, (Mapping, list)) and description:
            text = _compact_json(description)
        if text is not None:
            day[str(slot)] = text
    return day


def _coerce_days(days: Any) -> Optional[dict[str, DayPlan]]:
    if not isinstance(days, Mapping):
        return None
    plans: dict[str, DayPlan] = {}
    for day_name, meals in days.items():
        day = _coerce_day(meals)
        if day is None:
            logger.debug("Skipping day %r with non-object meals", day_name)
            continue
        plans[str(day_name)] = day
    return plans


def normalize_simple_grocery_list(obj: Mapping[str, Any]) -> CanonicalPlan:
    """``{"grocery_list": [...], "total_price": n, "message"?: str}``"""

    return CanonicalPlan(
        shape=ShapeTag.SIMPLE_GROCERY_LIST,
        items=_coerce_items(obj.get("grocery_list"), name_keys=("name", "item")),
        notes=_to_text(obj.get("message")),
        declared_total=_to_float(obj.get("total_price")),
    )


def normalize_current_meal_plan(obj: Mapping[str, Any]) -> CanonicalPlan:
    """``{"meal_plan": {"grocery_list"?: [...], "daily_meals"?: {...}, "notes"?: str}}``"""

    meal_plan = obj["meal_plan"]
    return CanonicalPlan(
        shape=ShapeTag.CURRENT_MEAL_PLAN,
        items=_coerce_items(
            meal_plan.get("grocery_list"),
            name_keys=("item", "name"),
            detailed=True,
        ),
        days=_coerce_days(meal_plan.get("daily_meals")),
        notes=_to_text(meal_plan.get("notes")),
    )


def normalize_legacy_meal_plan(obj: Mapping[str, Any]) -> CanonicalPlan:
    """``{"meal_plan": {day: {lunch, dinner, snack}}, "grocery_list": [...], "total_estimated_cost": n}``"""

    return CanonicalPlan(
        shape=ShapeTag.LEGACY_MEAL_PLAN,
        items=_coerce_items(obj.get("grocery_list"), name_keys=("item", "name")),
        days=_coerce_days(obj["meal_plan"]),
        notes=_to_text(obj.get("message")),
        declared_total=_to_float(obj.get("total_estimated_cost")),
    )


def normalize_error_message(obj: Mapping[str, Any]) -> ErrorPayload:
    budget_increase = obj.get("budgetIncrease", obj.get("budget_increase"))
    return ErrorPayload(
        message=_to_text(obj.get("message")),
        budget_increase=_to_float(budget_increase),
    )


def normalize_unrecognized(obj: Any) -> UnrecognizedPayload:
    return UnrecognizedPayload(data=obj)


__all__ = [
    "UNKNOWN_ITEM_NAME",
    "normalize_current_meal_plan",
    "normalize_error_message",
    "normalize_legacy_meal_plan",
    "normalize_simple_grocery_list",
    "normalize_unrecognized",
]
