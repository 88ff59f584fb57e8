"""Supabase-backed buy-in and vote repositories."""

from dataclasses import dataclass

from supabase import Client

from buyin_ledger.adapters.supabase_support import execute, parse_timestamp
from buyin_ledger.domain.errors import StoreError
from buyin_ledger.domain.games import (
    BuyInRecord,
    BuyInStatus,
    VoteDecision,
    VoteRecord,
)
from buyin_ledger.services.approvals import BuyInRepository, VoteRepository

_BUY_IN_COLUMNS = "id, game_id, user_id, amount_cents, status, created_at"


@dataclass
class SupabaseBuyInRepository(BuyInRepository):
    """Supabase implementation for buy-in requests."""

    client: Client

    def create_buy_in(
        self, game_id: int, user_id: str, amount_cents: int
    ) -> BuyInRecord:
        """Insert a pending buy-in row and return it."""
        response = execute(
            self.client.table("buyins").insert(
                {
                    "game_id": game_id,
                    "user_id": user_id,
                    "amount_cents": amount_cents,
                    "status": BuyInStatus.PENDING.value,
                }
            )
        )
        if not response.data:
            raise StoreError("Failed to create buy-in")
        return _parse_buy_in(response.data[0])

    def get_buy_in(self, buy_in_id: int) -> BuyInRecord | None:
        """Return a buy-in by id, if present."""
        response = execute(
            self.client.table("buyins")
            .select(_BUY_IN_COLUMNS)
            .eq("id", buy_in_id)
            .limit(1)
        )
        if not response.data:
            return None
        return _parse_buy_in(response.data[0])

    def list_buy_ins(self, game_id: int) -> list[BuyInRecord]:
        """Return all buy-ins of a game ordered by id."""
        response = execute(
            self.client.table("buyins")
            .select(_BUY_IN_COLUMNS)
            .eq("game_id", game_id)
            .order("id", desc=False)
        )
        return [_parse_buy_in(row) for row in response.data or []]

    def resolve_buy_in(self, buy_in_id: int, status: BuyInStatus) -> bool:
        """Compare-and-set the status; only a pending row is updated."""
        response = execute(
            self.client.table("buyins")
            .update({"status": status.value})
            .eq("id", buy_in_id)
            .eq("status", BuyInStatus.PENDING.value)
        )
        return bool(response.data)


@dataclass
class SupabaseVoteRepository(VoteRepository):
    """Supabase implementation for votes."""

    client: Client

    def add_vote(
        self, buy_in_id: int, voter_user_id: str, decision: VoteDecision
    ) -> bool:
        """Insert the vote unless the voter already voted; first vote wins."""
        response = execute(
            self.client.table("votes").upsert(
                {
                    "buyin_id": buy_in_id,
                    "voter_user_id": voter_user_id,
                    "decision": decision.value,
                },
                on_conflict="buyin_id,voter_user_id",
                ignore_duplicates=True,
            )
        )
        return bool(response.data)

    def list_votes(self, buy_in_ids: list[int]) -> list[VoteRecord]:
        """Return votes for the given buy-ins."""
        if not buy_in_ids:
            return []
        response = execute(
            self.client.table("votes")
            .select("buyin_id, voter_user_id, decision, created_at")
            .in_("buyin_id", buy_in_ids)
        )
        return [
            VoteRecord(
                buy_in_id=int(row["buyin_id"]),
                voter_user_id=str(row["voter_user_id"]),
                decision=VoteDecision(row["decision"]),
                created_at=parse_timestamp(row.get("created_at")),
            )
            for row in response.data or []
        ]


def _parse_buy_in(row: dict[str, object]) -> BuyInRecord:
    return BuyInRecord(
        id=int(row["id"]),
        game_id=int(row["game_id"]),
        user_id=str(row["user_id"]),
        amount_cents=int(row["amount_cents"]),
        status=BuyInStatus(row["status"]),
        created_at=parse_timestamp(row.get("created_at")),
    )
