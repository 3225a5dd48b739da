"""Grocery assistant: ask the completion service and render its answer."""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from mealcart import metrics
from mealcart.answers import render_response
from mealcart.answers.dispatcher import DEFAULT_CURRENCY
from mealcart.errors import EmptyRequestError, UpstreamFailure
from mealcart.llm.interface import CompletionService
from mealcart.models.presentation import PresentationMode

logger = logging.getLogger(__name__)


class AssistantReply(BaseModel):
    """Raw answer text, its catalog citations and the chosen presentation."""

    answer: str
    annotations: list[dict[str, Any]] = Field(default_factory=list)
    presentation: PresentationMode

    model_config = ConfigDict(frozen=True)


class GroceryAssistant:
    def __init__(
        self,
        service: CompletionService,
        *,
        catalog_id: Optional[str] = None,
        currency: str = DEFAULT_CURRENCY,
        provider: str = "unknown",
    ) -> None:
        self._service = service
        self._catalog_id = catalog_id
        self._currency = currency
        self._provider = provider

    def ask(self, question: str) -> AssistantReply:
        """Send ``question`` upstream once and render the fully assembled answer."""

        prompt = (question or "").strip()
        if not prompt:
            raise EmptyRequestError()

        logger.info("Asking %s provider (question_chars=%d)", self._provider, len(prompt))
        try:
            completion = self._service.complete(prompt, self._catalog_id)
        except UpstreamFailure as exc:
            metrics.UPSTREAM_FAILURES.labels(provider=exc.provider or self._provider).inc()
            logger.error("Completion service failed: %s", exc)
            raise

        presentation = self.render(completion.text)
        return AssistantReply(
            answer=completion.text,
            annotations=list(completion.annotations),
            presentation=presentation,
        )

    def render(self, raw: str) -> PresentationMode:
        """Render ``raw`` without calling the completion service."""

        presentation = render_response(raw, currency=self._currency)
        shape = presentation.shape.value if presentation.shape is not None else "none"
        metrics.ANSWERS_RENDERED.labels(
            mode=presentation.mode,
            shape=shape,
            extraction=presentation.extraction.value,
        ).inc()
        logger.debug(
            "Rendered answer mode=%s shape=%s extraction=%s",
            presentation.mode,
            shape,
            presentation.extraction.value,
        )
        return presentation


__all__ = ["AssistantReply", "GroceryAssistant"]
