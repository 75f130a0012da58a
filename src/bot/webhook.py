"""
Finalissima Goal Tracker — Webhook host.

Stateless HTTP entry point for serverless/webhook deployments. Telegram POSTs
each update to WEBHOOK_PATH; the update is fed into the same Application
(and therefore the same dispatch path) as the polling bot.

Telegram must always get a 200, otherwise it keeps redelivering the update,
so failures are logged and the response is still "OK".
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from telegram import Update

if TYPE_CHECKING:
    from telegram.ext import Application

logger = logging.getLogger(__name__)

RUNNING_TEXT = "FinalissimaGoalBot Webhook Running..."

_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(application: Application | None = None, path: str | None = None) -> FastAPI:
    """Build the FastAPI app around a (lazily built) Telegram Application."""
    if application is None or path is None:
        from src.config import settings

        path = path or settings.WEBHOOK_PATH
        if application is None:
            from src.bot.telegram_bot import build_app
            application = build_app(with_reminder=False)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await application.initialize()
        if application.post_init:
            await application.post_init(application)
        logger.info("Webhook host ready on %s", path)
        yield
        await application.shutdown()
        logger.info("Webhook host shutting down")

    app = FastAPI(lifespan=lifespan)

    @app.api_route(path, methods=_METHODS)
    async def telegram_webhook(request: Request) -> PlainTextResponse:
        """Telegram webhook entrypoint."""
        if request.method != "POST":
            return PlainTextResponse(RUNNING_TEXT)

        try:
            payload = await request.json()
            update = Update.de_json(payload, application.bot)
            logger.debug("Received Telegram update: %s", payload.get("update_id"))
            await application.process_update(update)
        except Exception as exc:
            logger.error("Failed to process webhook update: %s", exc)

        return PlainTextResponse("OK")

    return app


def serve() -> None:
    """Entry point: run the webhook host with uvicorn on PORT."""
    import uvicorn

    from src.config import settings

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("Starting webhook host on port %d", settings.PORT)
    uvicorn.run(create_app(), host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    serve()
