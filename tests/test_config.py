"""Tests for settings loading from the environment and .env files."""

from __future__ import annotations

from mealcart.config import Settings, get_settings


def test_defaults():
    settings = get_settings()

    assert settings == Settings()
    assert settings.llm_provider == "openai"
    assert settings.llm_base_url == "https://api.openai.com/v1"
    assert settings.catalog_id is None
    assert settings.currency_label == "kr"
    assert settings.log_requests is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MEALCART_LLM_PROVIDER", "chat")
    monkeypatch.setenv("MEALCART_LLM_TEMPERATURE", "0.7")
    monkeypatch.setenv("MEALCART_LLM_MAX_TOKENS", "1024")
    monkeypatch.setenv("MEALCART_CATALOG_MAX_RESULTS", "8")
    monkeypatch.setenv("MEALCART_LOG_REQUESTS", "off")
    monkeypatch.setenv("MEALCART_CURRENCY", "SEK")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.llm_provider == "chat"
    assert settings.llm_temperature == 0.7
    assert settings.llm_max_tokens == 1024
    assert settings.catalog_max_results == 8
    assert settings.log_requests is False
    assert settings.currency_label == "SEK"


def test_openai_style_fallback_variables(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-fallback-123456")
    monkeypatch.setenv("VECTOR_STORE_ID", "vs_fallback")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.llm_api_key == "sk-fallback-123456"
    assert settings.catalog_id == "vs_fallback"


def test_prefixed_variables_win_over_fallbacks(monkeypatch):
    monkeypatch.setenv("MEALCART_CATALOG_ID", "vs_primary")
    monkeypatch.setenv("VECTOR_STORE_ID", "vs_fallback")
    get_settings.cache_clear()

    assert get_settings().catalog_id == "vs_primary"


def test_invalid_numbers_keep_defaults(monkeypatch):
    monkeypatch.setenv("MEALCART_LLM_TIMEOUT", "soon")
    monkeypatch.setenv("MEALCART_LLM_MAX_TOKENS", "lots")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.llm_timeout == 60.0
    assert settings.llm_max_tokens == 4096


def test_env_file_values_are_loaded(tmp_path):
    (tmp_path / ".env").write_text(
        "# local settings\nVECTOR_STORE_ID=\"vs_from_file\"\nMEALCART_LLM_MODEL=gpt-test\n",
        encoding="utf-8",
    )
    (tmp_path / ".env.local").write_text("MEALCART_LLM_MODEL='gpt-local'\n", encoding="utf-8")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.catalog_id == "vs_from_file"
    assert settings.llm_model == "gpt-local"
