"""Pydantic models defining shared data contracts."""

from mealcart.models.answer import (
    CanonicalPlan,
    DirectJson,
    ErrorPayload,
    ExtractionKind,
    ExtractionResult,
    FencedJson,
    GroceryItem,
    NormalizedAnswer,
    Nutrition,
    PlainText,
    ShapeTag,
    UnrecognizedPayload,
)
from mealcart.models.presentation import (
    DebugMode,
    EmptyMode,
    ErrorMode,
    PresentationMode,
    RawTextMode,
    StructuredMode,
)

__all__ = [
    "CanonicalPlan",
    "DirectJson",
    "ErrorPayload",
    "ExtractionKind",
    "ExtractionResult",
    "FencedJson",
    "GroceryItem",
    "NormalizedAnswer",
    "Nutrition",
    "PlainText",
    "ShapeTag",
    "UnrecognizedPayload",
    "DebugMode",
    "EmptyMode",
    "ErrorMode",
    "PresentationMode",
    "RawTextMode",
    "StructuredMode",
]
