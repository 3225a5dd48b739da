"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs when true.",
    )
    llm_provider: str = Field(
        default="openai",
        description="Completion provider (openai responses API, chat completions, or ollama).",
    )
    llm_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Completion service base URL.",
    )
    llm_api_key: Optional[str] = Field(
        default=None,
        description="API key sent as a bearer token to the completion service.",
    )
    llm_model: str = Field(
        default="gpt-4o",
        description="Model identifier passed to the completion endpoint.",
    )
    llm_temperature: float = Field(
        default=0.2,
        description="Sampling temperature for grocery assistant completions.",
    )
    llm_max_tokens: int = Field(
        default=4096,
        description="Maximum tokens to request from the completion service.",
    )
    llm_timeout: float = Field(
        default=60.0,
        description="Seconds to wait for the completion service before giving up.",
    )
    catalog_id: Optional[str] = Field(
        default=None,
        description="Vector store id of the product catalog used by the retrieval tool.",
    )
    catalog_max_results: Optional[int] = Field(
        default=None,
        description="Cap on catalog chunks the retrieval tool may feed the model.",
    )
    currency_label: str = Field(
        default="kr",
        description="Currency suffix used when rendering prices.",
    )

    model_config = ConfigDict(frozen=True)


_NUMERIC_ENV: tuple[tuple[str, str, Callable[[str], Union[int, float]]], ...] = (
    ("MEALCART_LLM_TEMPERATURE", "llm_temperature", float),
    ("MEALCART_LLM_MAX_TOKENS", "llm_max_tokens", int),
    ("MEALCART_LLM_TIMEOUT", "llm_timeout", float),
    ("MEALCART_CATALOG_MAX_RESULTS", "catalog_max_results", int),
)


def _parse_number(raw: str, cast: Callable[[str], Union[int, float]]) -> Optional[Union[int, float]]:
    try:
        return cast(raw.strip())
    except ValueError:
        return None


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip().strip('"').strip("'")
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (log_level := _env("MEALCART_LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("MEALCART_LOG_FORMAT")):
        payload["log_format"] = log_format
    if (log_requests := _env("MEALCART_LOG_REQUESTS")):
        payload["log_requests"] = _coerce_bool(log_requests)
    if (llm_provider := _env("MEALCART_LLM_PROVIDER")):
        payload["llm_provider"] = llm_provider
    if (llm_base_url := _env("MEALCART_LLM_BASE_URL")):
        payload["llm_base_url"] = llm_base_url
    if (llm_api_key := _env("MEALCART_LLM_API_KEY") or _env("OPENAI_API_KEY")):
        payload["llm_api_key"] = llm_api_key
    if (llm_model := _env("MEALCART_LLM_MODEL")):
        payload["llm_model"] = llm_model
    for env_key, field, cast in _NUMERIC_ENV:
        if (raw := _env(env_key)) and (number := _parse_number(raw, cast)) is not None:
            payload[field] = number
    if (catalog_id := _env("MEALCART_CATALOG_ID") or _env("VECTOR_STORE_ID")):
        payload["catalog_id"] = catalog_id
    if (currency := _env("MEALCART_CURRENCY")):
        payload["currency_label"] = currency
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
