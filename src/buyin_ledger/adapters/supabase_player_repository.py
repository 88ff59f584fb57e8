"""Supabase-backed roster repository."""

from dataclasses import dataclass

from supabase import Client

from buyin_ledger.adapters.supabase_support import execute, parse_timestamp
from buyin_ledger.domain.games import ChatUser, PlayerRecord
from buyin_ledger.services.roster import PlayerRepository

_COLUMNS = "game_id, user_id, username, first_name, joined_at"


@dataclass
class SupabasePlayerRepository(PlayerRepository):
    """Supabase implementation for roster rows."""

    client: Client

    def add_player(self, game_id: int, user: ChatUser) -> bool:
        """Insert the player unless (game_id, user_id) already exists."""
        response = execute(
            self.client.table("players").upsert(
                {
                    "game_id": game_id,
                    "user_id": user.user_id,
                    "username": user.username,
                    "first_name": user.first_name,
                },
                on_conflict="game_id,user_id",
                ignore_duplicates=True,
            )
        )
        return bool(response.data)

    def get_player(self, game_id: int, user_id: str) -> PlayerRecord | None:
        """Return the roster row for a user, if present."""
        response = execute(
            self.client.table("players")
            .select(_COLUMNS)
            .eq("game_id", game_id)
            .eq("user_id", user_id)
            .limit(1)
        )
        if not response.data:
            return None
        return _parse_player(response.data[0])

    def list_players(self, game_id: int) -> list[PlayerRecord]:
        """Return all players of a game in join order."""
        response = execute(
            self.client.table("players")
            .select(_COLUMNS)
            .eq("game_id", game_id)
            .order("joined_at", desc=False)
        )
        return [_parse_player(row) for row in response.data or []]


def _parse_player(row: dict[str, object]) -> PlayerRecord:
    return PlayerRecord(
        game_id=int(row["game_id"]),
        user_id=str(row["user_id"]),
        username=row.get("username") or None,
        first_name=row.get("first_name") or None,
        joined_at=parse_timestamp(row.get("joined_at")),
    )
