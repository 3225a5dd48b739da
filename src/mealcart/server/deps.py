"""Dependency definitions for the Mealcart API server."""

from __future__ import annotations

from fastapi import Depends

from mealcart.assistant import GroceryAssistant
from mealcart.config import Settings, get_settings
from mealcart.llm.client import build_completion_client
from mealcart.llm.interface import CompletionService


def get_completion_service(settings: Settings = Depends(get_settings)) -> CompletionService:
    """Return the configured completion service implementation."""

    return build_completion_client(settings)


def get_assistant(
    settings: Settings = Depends(get_settings),
    service: CompletionService = Depends(get_completion_service),
) -> GroceryAssistant:
    return GroceryAssistant(
        service,
        catalog_id=settings.catalog_id,
        currency=settings.currency_label,
        provider=settings.llm_provider,
    )
