"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from buyin_ledger.api.intents import parse_callback_intent, parse_message_intent
from buyin_ledger.api.telegram_models import (
    TelegramCallbackQuery,
    TelegramMessage,
    TelegramUpdate,
)
from buyin_ledger.app_logging import configure_logging
from buyin_ledger.containers import AppContainer
from buyin_ledger.domain.errors import TransportError
from buyin_ledger.telegram_commands import telegram_commands

logger = logging.getLogger(__name__)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.telegram_client.set_my_commands(
                telegram_commands()
            )
        except Exception:
            logger.exception("Failed to sync Telegram bot commands")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/telegram/webhook/{secret}")
    async def telegram_webhook(
        secret: str, update: TelegramUpdate, request: Request
    ) -> dict[str, str]:
        """Handle Telegram webhook updates."""
        state_container: AppContainer = request.app.state.container
        if secret != state_container.settings.telegram_webhook_secret:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        if update.callback_query:
            await _handle_callback(state_container, update.callback_query)
        elif update.message:
            await _handle_message(state_container, update.message)
        return {"status": "ok"}

    return app


async def _handle_message(container: AppContainer, message: TelegramMessage) -> None:
    intent = parse_message_intent(message)
    if intent is None:
        return
    try:
        result = await container.dispatcher.dispatch(intent)
    except Exception:
        logger.exception(
            "Failed to handle command", extra={"chat_id": message.chat.id}
        )
        return
    if result.ok:
        return
    try:
        await container.telegram_client.send_message(
            chat_id=message.chat.id, text=result.message
        )
    except TransportError:
        logger.exception(
            "Failed to send command reply", extra={"chat_id": message.chat.id}
        )


async def _handle_callback(
    container: AppContainer, callback: TelegramCallbackQuery
) -> None:
    if callback.message is None:
        toast = "Missing chat context."
    else:
        intent = parse_callback_intent(callback)
        if intent is None:
            toast = "Unsupported action."
        else:
            try:
                result = await container.dispatcher.dispatch(intent)
                toast = result.message
            except Exception:
                logger.exception(
                    "Failed to handle callback",
                    extra={"callback_id": callback.id, "data": callback.data},
                )
                toast = "Invalid action."
    try:
        await container.telegram_client.answer_callback_query(callback.id, text=toast)
    except TransportError:
        logger.exception(
            "Failed to answer callback query", extra={"callback_id": callback.id}
        )
