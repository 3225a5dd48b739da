"""Canonical answer models shared by every recognized response shape."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

JsonValue = Any
Quantity = Union[int, float, str]
DayPlan = dict[str, str]


class ExtractionKind(str, Enum):
    """Tier of the extractor that produced a result."""

    DIRECT_JSON = "direct_json"
    FENCED_JSON = "fenced_json"
    PLAIN_TEXT = "plain_text"


class ShapeTag(str, Enum):
    """Recognized response schemas, in registry priority order."""

    SIMPLE_GROCERY_LIST = "simple_grocery_list"
    CURRENT_MEAL_PLAN = "current_meal_plan"
    LEGACY_MEAL_PLAN = "legacy_meal_plan"
    ERROR_MESSAGE = "error_message"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class DirectJson:
    payload: JsonValue

    @property
    def kind(self) -> ExtractionKind:
        return ExtractionKind.DIRECT_JSON


@dataclass(frozen=True)
class FencedJson:
    payload: JsonValue
    language: Optional[str] = None

    @property
    def kind(self) -> ExtractionKind:
        return ExtractionKind.FENCED_JSON


@dataclass(frozen=True)
class PlainText:
    text: str

    @property
    def kind(self) -> ExtractionKind:
        return ExtractionKind.PLAIN_TEXT


ExtractionResult = Union[DirectJson, FencedJson, PlainText]


class Nutrition(BaseModel):
    """Macronutrient profile per 100 g as reported by the model."""

    kcal: Optional[float] = Field(default=None)
    protein_g: Optional[float] = Field(default=None)
    carbs_g: Optional[float] = Field(default=None)
    fat_g: Optional[float] = Field(default=None)

    model_config = ConfigDict(frozen=True)

    def is_empty(self) -> bool:
        return all(
            value is None for value in (self.kcal, self.protein_g, self.carbs_g, self.fat_g)
        )


class GroceryItem(BaseModel):
    """Single product suggestion. Unreported values stay None."""

    name: str
    price: Optional[float] = Field(default=None, description="Unit price in the catalog currency.")
    quantity: Optional[Quantity] = Field(default=None)
    unit: Optional[str] = Field(default=None)
    nutrition: Optional[Nutrition] = Field(default=None)
    volume: Optional[str] = Field(default=None)
    brand: Optional[str] = Field(default=None)
    link: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True)


class CanonicalPlan(BaseModel):
    """Normalized form of every recognized grocery or meal-plan answer."""

    shape: ShapeTag
    items: Optional[list[GroceryItem]] = Field(default=None)
    days: Optional[dict[str, DayPlan]] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    declared_total: Optional[float] = Field(
        default=None,
        description="Total as stated by the model; never recomputed from items.",
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def require_content(self) -> "CanonicalPlan":
        if not self.items and not self.days and not self.notes:
            raise ValueError("a plan needs grocery items, day plans or notes")
        return self

    @property
    def has_items(self) -> bool:
        return bool(self.items)

    @property
    def has_days(self) -> bool:
        return bool(self.days)


class ErrorPayload(BaseModel):
    """Model-reported failure such as an insufficient budget."""

    message: Optional[str] = Field(default=None)
    budget_increase: Optional[float] = Field(default=None)

    model_config = ConfigDict(frozen=True)


class UnrecognizedPayload(BaseModel):
    """Well-formed JSON whose structure matches no registered shape."""

    data: JsonValue = None

    model_config = ConfigDict(frozen=True)


NormalizedAnswer = Union[CanonicalPlan, ErrorPayload, UnrecognizedPayload]


__all__ = [
    "CanonicalPlan",
    "DayPlan",
    "DirectJson",
    "ErrorPayload",
    "ExtractionKind",
    "ExtractionResult",
    "FencedJson",
    "GroceryItem",
    "JsonValue",
    "NormalizedAnswer",
    "Nutrition",
    "PlainText",
    "Quantity",
    "ShapeTag",
    "UnrecognizedPayload",
]
