"""Supabase-backed game repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from buyin_ledger.adapters.supabase_support import (
    execute,
    is_unique_violation,
    parse_timestamp,
)
from buyin_ledger.domain.errors import StoreError
from buyin_ledger.domain.games import GameRecord, GameStatus
from buyin_ledger.services.games import GameRepository

_COLUMNS = "id, chat_id, status, buy_in_cents, started_at, ended_at, status_message_id"


@dataclass
class SupabaseGameRepository(GameRepository):
    """Supabase implementation for games.

    A partial unique index on ``games(chat_id) where status = 'active'``
    keeps at most one active game per chat.
    """

    client: Client

    def create_game(self, chat_id: str, buy_in_cents: int) -> GameRecord | None:
        """Insert an active game; None when the chat already has one."""
        try:
            response = execute(
                self.client.table("games").insert(
                    {
                        "chat_id": chat_id,
                        "status": GameStatus.ACTIVE.value,
                        "buy_in_cents": buy_in_cents,
                    }
                )
            )
        except StoreError as exc:
            if is_unique_violation(exc):
                return None
            raise
        if not response.data:
            raise StoreError("Failed to create game")
        return _parse_game(response.data[0])

    def get_game(self, game_id: int) -> GameRecord | None:
        """Return a game by id, if present."""
        response = execute(
            self.client.table("games").select(_COLUMNS).eq("id", game_id).limit(1)
        )
        if not response.data:
            return None
        return _parse_game(response.data[0])

    def get_active_game(self, chat_id: str) -> GameRecord | None:
        """Return the most recent active game for a chat."""
        response = execute(
            self.client.table("games")
            .select(_COLUMNS)
            .eq("chat_id", chat_id)
            .eq("status", GameStatus.ACTIVE.value)
            .order("id", desc=True)
            .limit(1)
        )
        if not response.data:
            return None
        return _parse_game(response.data[0])

    def end_game(self, game_id: int, ended_at: datetime) -> GameRecord | None:
        """End the game only if it is still active."""
        response = execute(
            self.client.table("games")
            .update(
                {"status": GameStatus.ENDED.value, "ended_at": ended_at.isoformat()}
            )
            .eq("id", game_id)
            .eq("status", GameStatus.ACTIVE.value)
        )
        if not response.data:
            return None
        return _parse_game(response.data[0])

    def set_status_message(self, game_id: int, message_id: int) -> None:
        """Store the live status message id."""
        execute(
            self.client.table("games")
            .update({"status_message_id": message_id})
            .eq("id", game_id)
        )


def _parse_game(row: dict[str, object]) -> GameRecord:
    status_message_id = row.get("status_message_id")
    return GameRecord(
        id=int(row["id"]),
        chat_id=str(row["chat_id"]),
        status=GameStatus(row["status"]),
        buy_in_cents=int(row.get("buy_in_cents") or 0),
        started_at=parse_timestamp(row.get("started_at")),
        ended_at=parse_timestamp(row.get("ended_at")),
        status_message_id=(
            int(status_message_id) if status_message_id is not None else None
        ),
    )
