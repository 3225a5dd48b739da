"""Command-line interface for Mealcart."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer

from mealcart.answers import export_as_text, export_filename, render_response
from mealcart.assistant import GroceryAssistant
from mealcart.config import Settings, get_settings
from mealcart.errors import ConfigurationError, EmptyRequestError, UpstreamFailure
from mealcart.llm.client import build_completion_client
from mealcart.logging_utils import configure_logging
from mealcart.models.presentation import PresentationMode

app = typer.Typer(help="Mealcart grocery list and meal plan assistant.")


def _load_settings() -> Settings:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format, [settings.llm_api_key or ""])
    return settings


def _build_assistant() -> GroceryAssistant:
    settings = _load_settings()
    return GroceryAssistant(
        build_completion_client(settings),
        catalog_id=settings.catalog_id,
        currency=settings.currency_label,
        provider=settings.llm_provider,
    )


def _read_answer(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        _fail(f"Could not read answer file {path}: {exc}")


def _render_saved(path: str) -> PresentationMode:
    settings = _load_settings()
    return render_response(_read_answer(path), currency=settings.currency_label)


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command()
def ask(
    question: str = typer.Argument(..., help="What to ask the grocery assistant."),
    as_json: bool = typer.Option(False, "--json", help="Print the presentation as JSON."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """
    Ask for a grocery list or meal plan and print the rendered answer.
    """

    try:
        assistant = _build_assistant()
        reply = assistant.ask(question)
    except (EmptyRequestError, ConfigurationError) as exc:
        _fail(str(exc))
        return
    except UpstreamFailure as exc:
        _fail(f"Could not connect to the AI service: {exc}")
        return

    if as_json:
        payload = reply.model_dump(mode="json")
        typer.echo(json.dumps(payload, indent=2 if pretty else None, ensure_ascii=False))
    else:
        typer.echo(export_as_text(reply.presentation), nl=False)


@app.command()
def render(
    answer_path: str = typer.Argument(..., help="Saved model answer, or '-' for stdin."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Render a saved model answer into its presentation JSON."""

    presentation = _render_saved(answer_path)
    payload = presentation.model_dump(mode="json")
    typer.echo(json.dumps(payload, indent=2 if pretty else None, ensure_ascii=False))


@app.command()
def export(
    answer_path: str = typer.Argument(..., help="Saved model answer, or '-' for stdin."),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="File to write; defaults to the suggested download name in the current directory.",
    ),
) -> None:
    """Write the plain-text export of a saved model answer."""

    presentation = _render_saved(answer_path)
    target = output or Path(export_filename(presentation))
    try:
        target.write_text(export_as_text(presentation), encoding="utf-8")
    except OSError as exc:
        _fail(f"Could not write {target}: {exc}")
    typer.echo(f"Wrote {target}")


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the ``mealcart`` console script."""
    app(prog_name="mealcart", args=argv)


if __name__ == "__main__":
    main()
