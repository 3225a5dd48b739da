"""HTTP client for the hosted completion service."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from mealcart.config import Settings, get_settings
from mealcart.errors import ConfigurationError, UpstreamFailure
from mealcart.llm.interface import Completion
from mealcart.llm.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("openai", "chat", "ollama")


class CompletionClient:
    """Call an OpenAI Responses, OpenAI-compatible chat, or Ollama endpoint.

    Only the ``openai`` provider attaches the catalog retrieval tool; the other
    providers answer from the prompt alone and ignore the catalog id.
    """

    def __init__(
        self,
        *,
        base_url: str,
        model: str,
        provider: str = "openai",
        api_key: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 4096,
        timeout: float = 60.0,
        max_results: Optional[int] = None,
        instructions: str = SYSTEM_PROMPT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._provider = (provider or "openai").strip().lower()
        if self._provider not in SUPPORTED_PROVIDERS:
            raise ConfigurationError(
                f"Unsupported completion provider '{provider}'. "
                f"Expected one of: {', '.join(SUPPORTED_PROVIDERS)}."
            )
        self._api_key = api_key
        self._temperature = max(0.0, float(temperature))
        self._max_tokens = max(1, int(max_tokens))
        self._timeout = timeout
        self._max_results = max_results
        self._instructions = instructions

    @property
    def provider(self) -> str:
        return self._provider

    def complete(self, prompt: str, catalog_id: Optional[str]) -> Completion:
        """Return the fully assembled answer for ``prompt``.

        Raises :class:`UpstreamFailure` for transport errors, error statuses
        and malformed bodies. An empty answer is returned as empty text.
        """

        if self._provider == "openai":
            if not catalog_id:
                raise ConfigurationError(
                    "MEALCART_CATALOG_ID (or VECTOR_STORE_ID) must be set for the openai provider."
                )
            if not self._api_key:
                raise ConfigurationError(
                    "MEALCART_LLM_API_KEY (or OPENAI_API_KEY) must be set for the openai provider."
                )
        elif catalog_id:
            logger.debug("Provider %s has no retrieval tool; ignoring catalog %s", self._provider, catalog_id)

        try:
            if self._provider == "ollama":
                return self._execute_ollama(prompt)
            if self._provider == "chat":
                return self._execute_chat(prompt)
            return self._execute_responses(prompt, catalog_id)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Completion request to %s failed: %s", self._provider, exc)
            raise UpstreamFailure(str(exc) or exc.__class__.__name__, provider=self._provider) from exc

    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            return {}
        return {"Authorization": f"Bearer {self._api_key}"}

    def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        with httpx.Client(timeout=self._timeout) as client:
            response = client.post(endpoint, json=payload, headers=self._headers())
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict):
            raise ValueError("Completion service returned a non-object body.")
        return body

    def _execute_responses(self, prompt: str, catalog_id: str) -> Completion:
        endpoint = self._base_url
        if not endpoint.endswith("/responses"):
            endpoint = f"{endpoint}/responses"
        tool: dict[str, Any] = {"type": "file_search", "vector_store_ids": [catalog_id]}
        if self._max_results:
            tool["max_num_results"] = self._max_results
        payload = {
            "model": self._model,
            "input": prompt,
            "instructions": self._instructions,
            "tools": [tool],
            "temperature": self._temperature,
            "max_output_tokens": self._max_tokens,
        }
        body = self._post(endpoint, payload)

        error = body.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ValueError(f"Completion service reported an error: {message}")

        text, annotations = _collect_output_text(body)
        if not text.strip():
            logger.warning("Completion service returned an empty answer")
        return Completion(text=text, annotations=annotations)

    def _execute_chat(self, prompt: str) -> Completion:
        endpoint = self._base_url
        if not endpoint.endswith("/chat/completions"):
            endpoint = f"{endpoint}/chat/completions"
        payload = {
            "model": self._model,
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
            "messages": [
                {"role": "system", "content": self._instructions},
                {"role": "user", "content": prompt},
            ],
        }
        body = self._post(endpoint, payload)
        choices = body.get("choices")
        if not isinstance(choices, list) or not choices:
            raise ValueError("Completion service returned no choices.")
        choice = choices[0]
        if not isinstance(choice, dict):
            raise ValueError("Completion service returned a malformed choice.")
        return Completion(text=_message_content(choice.get("message")))

    def _execute_ollama(self, prompt: str) -> Completion:
        endpoint = self._base_url
        if not endpoint.endswith("/api/chat"):
            endpoint = f"{endpoint}/api/chat"
        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": self._instructions},
                {"role": "user", "content": prompt},
            ],
            "stream": False,
            "options": {
                "temperature": self._temperature,
                "num_predict": self._max_tokens,
            },
        }
        body = self._post(endpoint, payload)
        return Completion(text=_message_content(body.get("message")))


def _message_content(message: Any) -> str:
    """Text of a chat ``message`` object; a missing or null content is empty."""

    if message is None:
        return ""
    if not isinstance(message, dict):
        raise ValueError("Completion service returned a malformed message.")
    content = message.get("content")
    if content is None:
        return ""
    if not isinstance(content, str):
        raise ValueError("Completion service returned non-text message content.")
    if not content.strip():
        logger.warning("Completion service returned an empty answer")
    return content.strip()


def _collect_output_text(body: dict[str, Any]) -> tuple[str, list[dict[str, Any]]]:
    """Concatenate ``output_text`` parts of a Responses API body and gather citations."""

    texts: list[str] = []
    annotations: list[dict[str, Any]] = []
    output = body.get("output") or []
    if not isinstance(output, list):
        raise ValueError("Completion service returned a malformed output list.")
    for entry in output:
        if not isinstance(entry, dict) or entry.get("type") != "message":
            continue
        content = entry.get("content") or []
        if not isinstance(content, list):
            raise ValueError("Completion service returned malformed message content.")
        for part in content:
            if not isinstance(part, dict) or part.get("type") != "output_text":
                continue
            text = part.get("text")
            if text is not None and not isinstance(text, str):
                raise ValueError("Completion service returned a non-text output part.")
            texts.append(text or "")
            cited = part.get("annotations") or []
            if isinstance(cited, list):
                annotations.extend(annotation for annotation in cited if isinstance(annotation, dict))

    if not texts and isinstance(body.get("output_text"), str):
        texts.append(body["output_text"])
    return "".join(texts), annotations


def build_completion_client(settings: Optional[Settings] = None) -> CompletionClient:
    """Create a completion client from application settings."""

    settings = settings or get_settings()
    return CompletionClient(
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        provider=settings.llm_provider,
        api_key=settings.llm_api_key,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout=settings.llm_timeout,
        max_results=settings.catalog_max_results,
    )


__all__ = ["CompletionClient", "SUPPORTED_PROVIDERS", "build_completion_client"]
