"""Plain-text export of presentation modes for download."""

from __future__ import annotations

from typing import List

from mealcart.answers.formatting import (
    format_amount,
    format_number,
    format_price,
    format_quantity,
    slot_label,
)
from mealcart.models.answer import CanonicalPlan, GroceryItem, Nutrition, ShapeTag
from mealcart.models.presentation import (
    DebugMode,
    EmptyMode,
    ErrorMode,
    PresentationMode,
    RawTextMode,
    StructuredMode,
)

_EXPORT_HEADINGS = {
    "grocery_list": "Your AI-Generated Grocery List",
    "meal_plan": "Your AI-Generated Weekly Meal Plan",
    "full_plan": "Your AI-Generated Weekly Meal Plan & Grocery List",
    "notes_only": "Notes from the AI",
}

_STRUCTURED_FILENAMES = {
    ShapeTag.SIMPLE_GROCERY_LIST: "your-grocery-list.txt",
    ShapeTag.LEGACY_MEAL_PLAN: "your-meal-plan.txt",
    ShapeTag.CURRENT_MEAL_PLAN: "your-new-meal-plan.txt",
}


def _heading(title: str) -> List[str]:
    return [title, "=" * len(title), ""]


def _nutrition_line(nutrition: Nutrition) -> str:
    parts: List[str] = []
    if nutrition.kcal is not None:
        parts.append(f"Calories {format_number(nutrition.kcal)} kcal")
    if nutrition.protein_g is not None:
        parts.append(f"Protein {format_number(nutrition.protein_g)}g")
    if nutrition.carbs_g is not None:
        parts.append(f"Carbs {format_number(nutrition.carbs_g)}g")
    if nutrition.fat_g is not None:
        parts.append(f"Fat {format_number(nutrition.fat_g)}g")
    return "Nutrition (per 100g): " + ", ".join(parts)


def _item_lines(item: GroceryItem, currency: str) -> List[str]:
    lines = [f"- {item.name}"]
    if (price := format_price(item.price, currency)) is not None:
        lines.append(f"   Price: {price}")
    if (quantity := format_quantity(item.quantity, item.unit)) is not None:
        label = "Unit" if item.quantity is None else "Quantity"
        lines.append(f"   {label}: {quantity}")
    if item.nutrition is not None and not item.nutrition.is_empty():
        lines.append(f"   {_nutrition_line(item.nutrition)}")
    if item.volume is not None:
        lines.append(f"   Typical Volume: {item.volume}")
    if item.brand is not None:
        lines.append(f"   Brand: {item.brand}")
    if item.link is not None:
        lines.append(f"   Link: {item.link}")
    return lines


def _plan_lines(mode: StructuredMode) -> List[str]:
    plan: CanonicalPlan = mode.plan
    lines = _heading(_EXPORT_HEADINGS[mode.layout])

    if plan.items:
        lines.append("Grocery List:")
        for item in plan.items:
            lines.extend(_item_lines(item, mode.currency))
            lines.append("")

    if plan.days:
        lines.append("Daily Meal Ideas:")
        for day, meals in plan.days.items():
            lines.append("")
            lines.append(f"{day}:")
            for slot, description in meals.items():
                lines.append(f"  {slot_label(slot)}: {description}")
        lines.append("")

    for placeholder in mode.placeholders:
        lines.append(placeholder)
    if mode.placeholders:
        lines.append("")

    if plan.notes is not None:
        lines.append("Notes:")
        lines.append(plan.notes)
        lines.append("")

    if mode.total_display is not None:
        label = (
            "Estimated Total Cost"
            if plan.shape is ShapeTag.LEGACY_MEAL_PLAN
            else "Total Price"
        )
        lines.append("Totals:")
        lines.append(f"{label}: {mode.total_display}")

    return lines


def _error_lines(mode: ErrorMode) -> List[str]:
    lines = _heading(mode.title)
    lines.append(mode.message)
    if mode.suggestion is not None:
        lines.append("")
        lines.append(f"Suggestion: {mode.suggestion}")
    elif mode.budget_increase is not None:
        lines.append("")
        lines.append(f"Suggested budget increase: {format_amount(mode.budget_increase, mode.currency)}")
    return lines


def export_as_text(mode: PresentationMode) -> str:
    """Serialize every populated field of ``mode`` into downloadable text."""

    if isinstance(mode, StructuredMode):
        lines = _plan_lines(mode)
    elif isinstance(mode, ErrorMode):
        lines = _error_lines(mode)
    elif isinstance(mode, DebugMode):
        lines = _heading(mode.title) + [mode.description, "", mode.pretty]
    elif isinstance(mode, RawTextMode):
        lines = _heading(mode.title) + [mode.text.strip()]
    elif isinstance(mode, EmptyMode):
        lines = [mode.message]
    else:
        raise TypeError(f"Unsupported presentation mode: {type(mode).__name__}")

    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines) + "\n"


def export_filename(mode: PresentationMode) -> str:
    """Download filename for the exported text of ``mode``."""

    if isinstance(mode, StructuredMode):
        if mode.layout == "notes_only":
            return "your-plan-notes.txt"
        return _STRUCTURED_FILENAMES.get(mode.plan.shape, "your-plan.txt")
    if isinstance(mode, ErrorMode):
        return "plan-error.txt"
    if isinstance(mode, DebugMode):
        return "unrecognized-response.txt"
    if isinstance(mode, RawTextMode):
        return "ai-response.txt"
    return "empty-response.txt"


__all__ = ["export_as_text", "export_filename"]
