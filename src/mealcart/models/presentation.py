"""Presentation modes produced by the render dispatcher."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from mealcart.models.answer import CanonicalPlan, ExtractionKind, ShapeTag

PlanLayout = Literal["grocery_list", "meal_plan", "full_plan", "notes_only"]


class _ModeBase(BaseModel):
    extraction: ExtractionKind
    shape: Optional[ShapeTag] = Field(default=None)

    model_config = ConfigDict(frozen=True)


class EmptyMode(_ModeBase):
    """The completion service returned nothing but whitespace."""

    mode: Literal["empty"] = "empty"
    message: str = "No content received."


class RawTextMode(_ModeBase):
    """Prose answer shown as markdown, never evaluated as data."""

    mode: Literal["raw_text"] = "raw_text"
    title: str = "AI Response (Text)"
    text: str


class DebugMode(_ModeBase):
    """Valid JSON of unknown structure, shown verbatim for diagnosis."""

    mode: Literal["debug"] = "debug"
    title: str = "Unknown Response Structure"
    description: str = "The AI returned valid JSON, but its structure is not recognized."
    # Parsed value for in-process callers; the wire form is ``compact`` / ``pretty``.
    data: Any = Field(default=None, exclude=True)
    compact: str
    pretty: str


class ErrorMode(_ModeBase):
    mode: Literal["error"] = "error"
    title: str = "Unable to Generate Plan"
    message: str
    budget_increase: Optional[float] = Field(default=None)
    suggestion: Optional[str] = Field(default=None)
    currency: str


class StructuredMode(_ModeBase):
    """Grocery list and/or meal plan rendered from a canonical plan."""

    mode: Literal["structured"] = "structured"
    title: str
    layout: PlanLayout
    plan: CanonicalPlan
    currency: str
    total_display: Optional[str] = Field(default=None)
    placeholders: list[str] = Field(default_factory=list)

    @property
    def show_grocery(self) -> bool:
        return self.layout in {"grocery_list", "full_plan"}

    @property
    def show_meal_plan(self) -> bool:
        return self.layout in {"meal_plan", "full_plan"}


PresentationMode = Annotated[
    Union[EmptyMode, RawTextMode, DebugMode, ErrorMode, StructuredMode],
    Field(discriminator="mode"),
]


__all__ = [
    "DebugMode",
    "EmptyMode",
    "ErrorMode",
    "PlanLayout",
    "PresentationMode",
    "RawTextMode",
    "StructuredMode",
]
