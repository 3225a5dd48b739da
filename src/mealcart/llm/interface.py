"""Completion service abstraction layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol


@dataclass(frozen=True)
class Completion:
    """Fully assembled model answer plus any catalog citations."""

    text: str
    annotations: list[dict[str, Any]] = field(default_factory=list)


class CompletionService(Protocol):
    """Protocol for hosted completion backends with catalog retrieval."""

    def complete(self, prompt: str, catalog_id: Optional[str]) -> Completion:
        """Return the completion for ``prompt`` grounded on ``catalog_id``."""


class MockCompletionService:
    """Simple deterministic completion stub for development."""

    def __init__(self, answer: str = '{"success": false, "message": "Mock answer"}') -> None:
        self._answer = answer

    def complete(self, prompt: str, catalog_id: Optional[str]) -> Completion:
        return Completion(text=self._answer)
