"""Tests for the Typer command-line interface."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from mealcart import cli
from mealcart.config import get_settings
from mealcart.errors import UpstreamFailure
from mealcart.llm.interface import Completion, MockCompletionService

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep log lines out of the captured command output."""

    monkeypatch.setenv("MEALCART_LOG_LEVEL", "WARNING")
    get_settings.cache_clear()


def test_ask_prints_export_text(monkeypatch, load_answer):
    answer = load_answer("simple_grocery_list.json")
    monkeypatch.setattr(cli, "build_completion_client", lambda settings: MockCompletionService(answer))

    result = runner.invoke(cli.app, ["ask", "Milk for the week"])

    assert result.exit_code == 0, result.output
    assert "Your AI-Generated Grocery List" in result.output
    assert "Total Price: 15 kr" in result.output


def test_ask_json_output(monkeypatch):
    monkeypatch.setattr(
        cli,
        "build_completion_client",
        lambda settings: MockCompletionService("Buy oats."),
    )

    result = runner.invoke(cli.app, ["ask", "Oats?", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["answer"] == "Buy oats."
    assert payload["presentation"]["mode"] == "raw_text"


def test_ask_upstream_failure_exits_with_error(monkeypatch):
    class FailingService:
        def complete(self, prompt, catalog_id):
            raise UpstreamFailure("connection refused", provider="openai")

    monkeypatch.setattr(cli, "build_completion_client", lambda settings: FailingService())

    result = runner.invoke(cli.app, ["ask", "Weekly list"])

    assert result.exit_code == 1
    assert "Could not connect to the AI service: connection refused" in result.output


def test_ask_blank_question_exits_with_error(monkeypatch):
    monkeypatch.setattr(
        cli,
        "build_completion_client",
        lambda settings: MockCompletionService(),
    )

    result = runner.invoke(cli.app, ["ask", "  "])

    assert result.exit_code == 1
    assert "Please enter your request." in result.output


def test_render_prints_presentation_json(tmp_path, load_answer):
    path = tmp_path / "answer.md"
    path.write_text(load_answer("fenced_answer.md"), encoding="utf-8")

    result = runner.invoke(cli.app, ["render", str(path), "--pretty"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["mode"] == "structured"
    assert payload["extraction"] == "fenced_json"


def test_render_reads_stdin():
    result = runner.invoke(cli.app, ["render", "-"], input='{"foo": "bar"}')

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["mode"] == "debug"


def test_export_writes_suggested_filename(tmp_path, load_answer):
    path = tmp_path / "answer.json"
    path.write_text(load_answer("legacy_meal_plan.json"), encoding="utf-8")

    result = runner.invoke(cli.app, ["export", str(path)])

    assert result.exit_code == 0, result.output
    written = tmp_path / "your-meal-plan.txt"
    assert written.exists()
    assert "Estimated Total Cost: 49.9 kr" in written.read_text(encoding="utf-8")


def test_export_honours_output_option(tmp_path, load_answer):
    source = tmp_path / "answer.json"
    source.write_text(load_answer("budget_error.json"), encoding="utf-8")
    target = tmp_path / "out" / "error.txt"
    target.parent.mkdir()

    result = runner.invoke(cli.app, ["export", str(source), "--output", str(target)])

    assert result.exit_code == 0, result.output
    assert "23.50 kr" in target.read_text(encoding="utf-8")


def test_completion_dataclass_defaults():
    assert Completion(text="x").annotations == []


def test_render_does_not_need_a_completion_client(tmp_path, monkeypatch):
    monkeypatch.setenv("MEALCART_LLM_PROVIDER", "carrier-pigeon")
    monkeypatch.setenv("MEALCART_CURRENCY", "SEK")
    get_settings.cache_clear()
    path = tmp_path / "answer.json"
    path.write_text('{"grocery_list": [{"name": "Milk", "price": 15}], "total_price": 15}', encoding="utf-8")

    result = runner.invoke(cli.app, ["render", str(path)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["total_display"] == "15 SEK"


def test_render_missing_file_exits_with_error(tmp_path):
    missing = tmp_path / "nope.json"

    result = runner.invoke(cli.app, ["render", str(missing)])

    assert result.exit_code == 1
    assert "Could not read answer file" in result.output
    assert not isinstance(result.exception, FileNotFoundError)


def test_export_missing_file_exits_with_error(tmp_path):
    result = runner.invoke(cli.app, ["export", str(tmp_path / "nope.json")])

    assert result.exit_code == 1
    assert "Could not read answer file" in result.output
