"""Tests for the grocery assistant service."""

from __future__ import annotations

import pytest
from prometheus_client import REGISTRY

from mealcart.assistant import GroceryAssistant
from mealcart.errors import EmptyRequestError, UpstreamFailure
from mealcart.llm.interface import Completion, MockCompletionService


class RecordingService:
    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def complete(self, prompt, catalog_id):
        self.calls.append((prompt, catalog_id))
        if self.error is not None:
            raise self.error
        return Completion(text=self.text, annotations=[{"type": "file_citation"}])


def test_ask_renders_completion(load_answer):
    service = RecordingService(text=load_answer("budget_error.json"))
    assistant = GroceryAssistant(service, catalog_id="vs_1", currency="kr")

    reply = assistant.ask("  Plan a week for 100 kr ")

    assert service.calls == [("Plan a week for 100 kr", "vs_1")]
    assert reply.presentation.mode == "error"
    assert reply.annotations == [{"type": "file_citation"}]
    assert reply.answer == load_answer("budget_error.json")


@pytest.mark.parametrize("question", ["", "   ", None])
def test_blank_question_never_reaches_upstream(question):
    service = RecordingService(text="unused")

    with pytest.raises(EmptyRequestError) as excinfo:
        GroceryAssistant(service).ask(question)

    assert str(excinfo.value) == "Please enter your request."
    assert service.calls == []


def test_upstream_failure_is_counted_and_propagated():
    def _failures():
        return REGISTRY.get_sample_value(
            "mealcart_upstream_failures_total", {"provider": "test-provider"}
        ) or 0.0

    before = _failures()
    service = RecordingService(error=UpstreamFailure("boom", provider="test-provider"))

    with pytest.raises(UpstreamFailure):
        GroceryAssistant(service, provider="openai").ask("Weekly list")

    assert _failures() == before + 1


def test_render_uses_assistant_currency(load_answer):
    assistant = GroceryAssistant(MockCompletionService(), currency="EUR")

    mode = assistant.render(load_answer("simple_grocery_list.json"))

    assert mode.total_display == "15 EUR"


def test_mock_service_answer_renders_as_error():
    reply = GroceryAssistant(MockCompletionService()).ask("Anything")

    assert reply.presentation.mode == "error"
    assert reply.presentation.message == "Mock answer"
