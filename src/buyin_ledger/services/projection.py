"""Aggregate view of a game derived from current ledger rows."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from buyin_ledger.domain.games import BuyInStatus, VoteDecision
from buyin_ledger.domain.state import PendingRow, PlayerRow, ProjectedView

if TYPE_CHECKING:
    from buyin_ledger.services.approvals import BuyInRepository, VoteRepository
    from buyin_ledger.services.roster import PlayerRepository


def mask_user(user_id: str) -> str:
    """Redact the middle of an identity, keeping two characters at each end."""
    if len(user_id) <= 4:
        return user_id
    return f"{user_id[:2]}***{user_id[-2:]}"


def display_name(username: str | None, first_name: str | None, user_id: str) -> str:
    """Return @handle, given name or a masked identity, in that order."""
    if username:
        return f"@{username}"
    if first_name:
        return first_name
    return mask_user(user_id)


@dataclass
class StateProjector:
    """Computes per-player totals and the pending list on every call."""

    player_repository: PlayerRepository
    buy_in_repository: BuyInRepository
    vote_repository: VoteRepository

    def project(self, game_id: int) -> ProjectedView:
        """Return the projected view of a game; reads only, no caching."""
        players = self.player_repository.list_players(game_id)
        buy_ins = self.buy_in_repository.list_buy_ins(game_id)

        labels = {
            player.user_id: display_name(
                player.username, player.first_name, player.user_id
            )
            for player in players
        }
        approved: dict[str, int] = defaultdict(int)
        pending_counts: dict[str, int] = defaultdict(int)
        for buy_in in buy_ins:
            if buy_in.status is BuyInStatus.APPROVED:
                approved[buy_in.user_id] += buy_in.amount_cents
            elif buy_in.status is BuyInStatus.PENDING:
                pending_counts[buy_in.user_id] += 1

        player_rows = sorted(
            (
                PlayerRow(
                    user_id=user_id,
                    label=label,
                    approved_cents=approved[user_id],
                    pending_count=pending_counts[user_id],
                )
                for user_id, label in labels.items()
            ),
            key=lambda row: (-row.approved_cents, row.label.casefold(), row.user_id),
        )

        pending = sorted(
            (buy_in for buy_in in buy_ins if buy_in.status is BuyInStatus.PENDING),
            key=lambda buy_in: buy_in.id,
        )
        approvals: dict[int, int] = defaultdict(int)
        rejects: dict[int, int] = defaultdict(int)
        if pending:
            votes = self.vote_repository.list_votes([buy_in.id for buy_in in pending])
            for vote in votes:
                if vote.decision is VoteDecision.APPROVE:
                    approvals[vote.buy_in_id] += 1
                else:
                    rejects[vote.buy_in_id] += 1
        pending_rows = [
            PendingRow(
                id=buy_in.id,
                user_id=buy_in.user_id,
                label=labels.get(buy_in.user_id) or mask_user(buy_in.user_id),
                amount_cents=buy_in.amount_cents,
                approvals=approvals[buy_in.id],
                rejects=rejects[buy_in.id],
            )
            for buy_in in pending
        ]
        return ProjectedView(players=player_rows, pending=pending_rows)
