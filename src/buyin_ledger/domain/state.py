"""Projected view of a game's ledger."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PlayerRow:
    """Aggregated balance for one roster identity."""

    user_id: str
    label: str
    approved_cents: int
    pending_count: int


@dataclass(frozen=True)
class PendingRow:
    """A pending buy-in with its current tally."""

    id: int
    user_id: str
    label: str
    amount_cents: int
    approvals: int
    rejects: int


@dataclass(frozen=True)
class ProjectedView:
    """Player and pending rows derived from current ledger rows."""

    players: list[PlayerRow] = field(default_factory=list)
    pending: list[PendingRow] = field(default_factory=list)

    @property
    def total_approved_cents(self) -> int:
        return sum(player.approved_cents for player in self.players)

    @property
    def total_pending_count(self) -> int:
        return len(self.pending)
