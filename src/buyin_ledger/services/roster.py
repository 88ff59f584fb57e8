"""Roster membership for games."""

from dataclasses import dataclass
from typing import Protocol

from buyin_ledger.domain.errors import AlreadyMemberError, NotMemberError
from buyin_ledger.domain.games import ChatUser, GameRecord, PlayerRecord
from buyin_ledger.services.games import GameService
from buyin_ledger.services.status import StatusService


class PlayerRepository(Protocol):
    """Persistence interface for roster rows."""

    def add_player(self, game_id: int, user: ChatUser) -> bool:
        """Insert the roster row if absent; return whether it was inserted."""

    def get_player(self, game_id: int, user_id: str) -> PlayerRecord | None:
        """Return the roster row for the identity, if present."""

    def list_players(self, game_id: int) -> list[PlayerRecord]:
        """Return every roster row of a game."""


@dataclass
class RosterService:
    """Tracks which identities take part in a game."""

    repository: PlayerRepository
    game_service: GameService
    status_service: StatusService

    def is_member(self, game_id: int, user_id: str) -> bool:
        return self.repository.get_player(game_id, user_id) is not None

    def require_member(
        self, game_id: int, user_id: str, message: str | None = None
    ) -> None:
        """Raise NotMemberError unless the identity is on the roster."""
        if not self.is_member(game_id, user_id):
            raise NotMemberError(message)

    async def join(self, chat_id: str, user: ChatUser) -> GameRecord:
        """Add the user to the chat's active game."""
        game = self.game_service.require_current(chat_id)
        if not self.repository.add_player(game.id, user):
            raise AlreadyMemberError()
        await self.status_service.publish(game)
        return game
