"""Run the Mealcart API under uvicorn."""

from __future__ import annotations

import asyncio
import os
from typing import Optional

import uvicorn

from mealcart.config import get_settings

APP_FACTORY = "mealcart.server.app:create_app"


def _parse_positive(name: str, value: Optional[str], cast=float):
    if not value:
        return None
    try:
        parsed = cast(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid {name} '{value}': {exc}") from exc
    if parsed <= 0:
        raise SystemExit(f"{name} must be greater than 0 when provided.")
    return parsed


async def _serve_for(server: uvicorn.Server, seconds: float) -> None:
    async def _stop_later() -> None:
        await asyncio.sleep(seconds)
        server.should_exit = True

    stopper = asyncio.create_task(_stop_later())
    try:
        await server.serve()
    finally:
        stopper.cancel()


def main() -> None:
    """Entry point of the ``mealcart-server`` script.

    ``MEALCART_SERVER_DURATION`` stops the server after the given number of
    seconds, which smoke checks use to exercise startup without a supervisor.
    """

    host = os.environ.get("MEALCART_SERVER_HOST", "127.0.0.1")
    port = _parse_positive("MEALCART_SERVER_PORT", os.environ.get("MEALCART_SERVER_PORT"), int) or 8000
    reload_enabled = os.environ.get("RELOAD") == "1"
    duration = _parse_positive("MEALCART_SERVER_DURATION", os.environ.get("MEALCART_SERVER_DURATION"))

    if reload_enabled and duration is not None:
        raise SystemExit("Use RELOAD=0 when specifying MEALCART_SERVER_DURATION.")

    if reload_enabled:
        uvicorn.run(
            APP_FACTORY,
            host=host,
            port=port,
            reload=True,
            factory=True,
        )
        return

    config = uvicorn.Config(
        APP_FACTORY,
        host=host,
        port=port,
        factory=True,
        log_level=get_settings().log_level.lower(),
    )
    server = uvicorn.Server(config)
    if duration is not None:
        asyncio.run(_serve_for(server, duration))
        return
    server.run()


if __name__ == "__main__":
    main()
