"""Shared pytest fixtures for the Mealcart test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mealcart.config import get_settings
from mealcart.server.app import create_app

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "answers"

_ISOLATED_ENV = (
    "MEALCART_LOG_LEVEL",
    "MEALCART_LOG_FORMAT",
    "MEALCART_LOG_REQUESTS",
    "MEALCART_LLM_PROVIDER",
    "MEALCART_LLM_BASE_URL",
    "MEALCART_LLM_API_KEY",
    "MEALCART_LLM_MODEL",
    "MEALCART_LLM_TEMPERATURE",
    "MEALCART_LLM_MAX_TOKENS",
    "MEALCART_LLM_TIMEOUT",
    "MEALCART_CATALOG_ID",
    "MEALCART_CATALOG_MAX_RESULTS",
    "MEALCART_CURRENCY",
    "OPENAI_API_KEY",
    "VECTOR_STORE_ID",
)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep each test independent of the developer's environment and .env files."""

    for key in _ISOLATED_ENV:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def app() -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)


@pytest.fixture()
def load_answer() -> Callable[[str], str]:
    """Read a raw model answer from ``tests/fixtures/answers``."""

    def _load(name: str) -> str:
        return (FIXTURES_DIR / name).read_text(encoding="utf-8")

    return _load
