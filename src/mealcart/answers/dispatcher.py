"""Map extraction results and normalized answers to presentation modes."""

from __future__ import annotations

import json
from typing import Any, Optional

from mealcart.answers.extractor import extract
from mealcart.answers.formatting import format_amount, format_price
from mealcart.answers.shapes import DEFAULT_REGISTRY, ShapeRegistry
from mealcart.models.answer import (
    CanonicalPlan,
    ErrorPayload,
    ExtractionKind,
    ExtractionResult,
    NormalizedAnswer,
    PlainText,
    ShapeTag,
    UnrecognizedPayload,
)
from mealcart.models.presentation import (
    DebugMode,
    EmptyMode,
    ErrorMode,
    PlanLayout,
    PresentationMode,
    RawTextMode,
    StructuredMode,
)

DEFAULT_CURRENCY = "kr"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
NO_GROCERY_LIST = "No grocery list provided by the AI."
NO_DAILY_MEALS = "No daily meal plan provided by the AI."

_LAYOUT_TITLES: dict[str, str] = {
    "grocery_list": "Your Grocery List",
    "meal_plan": "Your Weekly Meal Plan",
    "full_plan": "Your Weekly Meal Plan",
    "notes_only": "Notes from the AI",
}
_MEAL_PLAN_SHAPES = {ShapeTag.CURRENT_MEAL_PLAN, ShapeTag.LEGACY_MEAL_PLAN}


def plan_layout(plan: CanonicalPlan) -> PlanLayout:
    if plan.has_items and plan.has_days:
        return "full_plan"
    if plan.has_items:
        return "grocery_list"
    if plan.has_days:
        return "meal_plan"
    return "notes_only"


def _placeholders(plan: CanonicalPlan) -> list[str]:
    if plan.shape not in _MEAL_PLAN_SHAPES:
        return []
    missing: list[str] = []
    if not plan.has_items:
        missing.append(NO_GROCERY_LIST)
    if not plan.has_days:
        missing.append(NO_DAILY_MEALS)
    return missing


def _structured(plan: CanonicalPlan, extraction: ExtractionKind, currency: str) -> StructuredMode:
    layout = plan_layout(plan)
    return StructuredMode(
        extraction=extraction,
        shape=plan.shape,
        title=_LAYOUT_TITLES[layout],
        layout=layout,
        plan=plan,
        currency=currency,
        total_display=format_price(plan.declared_total, currency),
        placeholders=_placeholders(plan),
    )


def budget_suggestion(budget_increase: Optional[float], currency: str) -> Optional[str]:
    if not budget_increase:
        return None
    return f"Increase your budget by {format_amount(budget_increase, currency)} to meet your goal."


def _error(payload: ErrorPayload, extraction: ExtractionKind, currency: str) -> ErrorMode:
    return ErrorMode(
        extraction=extraction,
        shape=ShapeTag.ERROR_MESSAGE,
        message=payload.message or UNKNOWN_ERROR_MESSAGE,
        budget_increase=payload.budget_increase,
        suggestion=budget_suggestion(payload.budget_increase, currency),
        currency=currency,
    )


def _debug(data: Any, extraction: ExtractionKind) -> DebugMode:
    compact = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    try:
        pretty = json.dumps(data, ensure_ascii=False, indent=2)
    except RecursionError:
        # The indenting encoder recurses deeper than the one that parsed the answer.
        pretty = compact
    return DebugMode(
        extraction=extraction,
        shape=ShapeTag.UNRECOGNIZED,
        data=data,
        compact=compact,
        pretty=pretty,
    )


def dispatch(
    answer: NormalizedAnswer,
    extraction: ExtractionKind,
    *,
    currency: str = DEFAULT_CURRENCY,
) -> PresentationMode:
    """Choose the presentation mode for a normalized answer."""

    if isinstance(answer, CanonicalPlan):
        return _structured(answer, extraction, currency)
    if isinstance(answer, ErrorPayload):
        return _error(answer, extraction, currency)
    if isinstance(answer, UnrecognizedPayload):
        return _debug(answer.data, extraction)
    raise TypeError(f"Unsupported normalized answer: {type(answer).__name__}")


def render_extraction(
    result: ExtractionResult,
    *,
    currency: str = DEFAULT_CURRENCY,
    registry: ShapeRegistry = DEFAULT_REGISTRY,
) -> PresentationMode:
    if isinstance(result, PlainText):
        if not result.text.strip():
            return EmptyMode(extraction=result.kind)
        return RawTextMode(extraction=result.kind, text=result.text)

    tag = registry.classify(result.payload)
    answer = registry.normalize(tag, result.payload)
    return dispatch(answer, result.kind, currency=currency)


def render_response(
    raw: str,
    *,
    currency: str = DEFAULT_CURRENCY,
    registry: ShapeRegistry = DEFAULT_REGISTRY,
) -> PresentationMode:
    """Turn a raw model answer into exactly one presentation mode. Never raises on content."""

    return render_extraction(extract(raw), currency=currency, registry=registry)


__all__ = [
    "DEFAULT_CURRENCY",
    "NO_DAILY_MEALS",
    "NO_GROCERY_LIST",
    "UNKNOWN_ERROR_MESSAGE",
    "budget_suggestion",
    "dispatch",
    "plan_layout",
    "render_extraction",
    "render_response",
]
