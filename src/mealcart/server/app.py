"""ASGI application for Mealcart."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any
from uuid import uuid4

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field

from mealcart import __version__, metrics
from mealcart.answers import export_as_text, export_filename
from mealcart.assistant import AssistantReply, GroceryAssistant
from mealcart.config import Settings, get_settings
from mealcart.errors import ConfigurationError, EmptyRequestError, UpstreamFailure
from mealcart.logging_utils import configure_logging as configure_app_logging
from mealcart.models.presentation import PresentationMode
from mealcart.server import deps

logger = logging.getLogger(__name__)

MAX_ANSWER_CHARS = 200_000


class AskRequest(BaseModel):
    question: str = Field(default="", max_length=4000)


class AnswerRequest(BaseModel):
    answer: str = Field(default="", max_length=MAX_ANSWER_CHARS)


def _json_safe(value: Any) -> Any:
    """Convert non-serializable values into JSON-safe representations."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value.hex()
    if isinstance(value, (list, tuple)):
        return [_json_safe(entry) for entry in value]
    if isinstance(value, dict):
        return {key: _json_safe(sub_value) for key, sub_value in value.items()}
    return repr(value)


def _normalize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{key: _json_safe(value) for key, value in error.items()} for error in errors]


def _configure_logging(settings: Settings) -> None:
    configure_app_logging(settings.log_level, settings.log_format, [settings.llm_api_key or ""])


def _record_request(method: str, path: str, status_code: int, elapsed: float) -> None:
    metrics.REQUEST_COUNT.labels(method=method, path=path, status=str(status_code)).inc()
    metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(elapsed)


def _text_attachment(text: str, filename: str) -> Response:
    return Response(
        content=text,
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="Mealcart Grocery Assistant", version=__version__)
    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        access_logger = logging.getLogger("mealcart.access")

        @application.middleware("http")
        async def trace_request(request: Request, call_next):
            """Bind a request id, then log and count the request once it completes."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            try:
                response: Response = await call_next(request)
                status_code = response.status_code
                response.headers.setdefault("X-Request-ID", request_id)
                return response
            finally:
                elapsed = perf_counter() - start
                log = access_logger.info if status_code < 500 else access_logger.warning
                log(
                    "HTTP %s %s status=%s duration_ms=%.2f",
                    request.method,
                    request.url.path,
                    status_code,
                    elapsed * 1000,
                    extra={"request_id": request_id},
                )
                _record_request(request.method, request.url.path, status_code, elapsed)

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        body_preview: str | None = None
        raw_body = await request.body()
        if raw_body:
            decoded = raw_body.decode("utf-8", errors="replace")
            if len(decoded) > 2048:
                decoded = decoded[:2048] + "...(truncated)"
            body_preview = decoded

        log_kwargs: dict[str, Any] = {}
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            log_kwargs["extra"] = {"request_id": request_id}

        logger.warning(
            "Validation error on %s %s: %s | body=%s",
            request.method,
            request.url.path,
            exc.errors(),
            body_preview,
            **log_kwargs,
        )
        return JSONResponse(
            status_code=422,
            content={"detail": _normalize_validation_errors(exc.errors())},
        )

    @application.exception_handler(ConfigurationError)
    async def configuration_exception_handler(request: Request, exc: ConfigurationError):
        logger.error("Configuration error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )

    @application.get("/healthz", summary="Liveness probe")
    def healthz() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @application.post("/ask", response_model=AssistantReply, summary="Ask the grocery assistant")
    def ask_endpoint(
        payload: AskRequest,
        assistant: GroceryAssistant = Depends(deps.get_assistant),
    ) -> AssistantReply:
        """Query the completion service and return its answer with the chosen presentation."""

        try:
            return assistant.ask(payload.question)
        except EmptyRequestError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        except UpstreamFailure as exc:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Could not connect to the AI service: {exc}",
            ) from exc

    @application.post("/render", response_model=PresentationMode, summary="Render a raw answer")
    def render_endpoint(
        payload: AnswerRequest,
        assistant: GroceryAssistant = Depends(deps.get_assistant),
    ) -> PresentationMode:
        return assistant.render(payload.answer)

    @application.post("/export", summary="Download a raw answer as plain text")
    def export_endpoint(
        payload: AnswerRequest,
        assistant: GroceryAssistant = Depends(deps.get_assistant),
    ) -> Response:
        presentation = assistant.render(payload.answer)
        return _text_attachment(export_as_text(presentation), export_filename(presentation))

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        payload = generate_latest()
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    return application


app = create_app()

__all__ = ["app", "create_app"]
