"""Game lifecycle: one active game per chat."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

from buyin_ledger.domain.errors import ConflictError, NotFoundError, ValidationError
from buyin_ledger.domain.games import GameRecord
from buyin_ledger.domain.money import parse_amount, to_cents

if TYPE_CHECKING:
    from buyin_ledger.services.status import StatusService

logger = logging.getLogger(__name__)

START_USAGE = "Usage: /startgame <buy-in amount>. Example: /startgame 50"


class GameRepository(Protocol):
    """Persistence interface for games."""

    def create_game(self, chat_id: str, buy_in_cents: int) -> GameRecord | None:
        """Insert an active game, or return None if the chat already has one."""

    def get_game(self, game_id: int) -> GameRecord | None:
        """Return a game by id, if present."""

    def get_active_game(self, chat_id: str) -> GameRecord | None:
        """Return the most recently created active game for a chat."""

    def end_game(self, game_id: int, ended_at: datetime) -> GameRecord | None:
        """Mark an active game as ended; return None if it was not active."""

    def set_status_message(self, game_id: int, message_id: int) -> None:
        """Record the id of the game's live status message."""


@dataclass
class GameService:
    """Starts, looks up and ends games."""

    repository: GameRepository
    status_service: StatusService

    def current(self, chat_id: str) -> GameRecord | None:
        """Return the active game for the chat, if any."""
        return self.repository.get_active_game(chat_id)

    def require_current(self, chat_id: str) -> GameRecord:
        """Return the active game for the chat or raise NotFoundError."""
        game = self.current(chat_id)
        if game is None:
            raise NotFoundError()
        return game

    async def start(self, chat_id: str, amount_text: str | None) -> GameRecord:
        """Start a game with a default buy-in parsed from the text."""
        if self.current(chat_id) is not None:
            raise ConflictError()

        amount = parse_amount(amount_text)
        if amount is None:
            raise ValidationError(START_USAGE)
        buy_in_cents = to_cents(amount)
        if buy_in_cents <= 0:
            raise ValidationError("Buy-in must be greater than zero.")

        game = self.repository.create_game(chat_id, buy_in_cents)
        if game is None:
            raise ConflictError()
        logger.info(
            "Game started",
            extra={"game_id": game.id, "chat_id": chat_id},
        )
        await self.status_service.publish(game)
        return game

    async def end(self, chat_id: str) -> GameRecord:
        """End the chat's active game and republish its final status."""
        game = self.require_current(chat_id)
        ended = self.repository.end_game(game.id, datetime.now(tz=UTC))
        if ended is None:
            raise NotFoundError("No active game.")
        logger.info("Game ended", extra={"game_id": ended.id, "chat_id": chat_id})
        await self.status_service.publish(ended)
        return ended
