"""Domain models for games, players, buy-ins and votes."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class GameStatus(StrEnum):
    """Lifecycle status of a game."""

    ACTIVE = "active"
    ENDED = "ended"


class BuyInStatus(StrEnum):
    """Resolution status of a buy-in request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class VoteDecision(StrEnum):
    """A voter's decision on a buy-in."""

    APPROVE = "approve"
    REJECT = "reject"


@dataclass(frozen=True)
class ChatUser:
    """Identity of a Telegram user with display attributes."""

    user_id: str
    username: str | None = None
    first_name: str | None = None


@dataclass(frozen=True)
class GameRecord:
    """Represents a persisted game."""

    id: int
    chat_id: str
    status: GameStatus
    buy_in_cents: int
    started_at: datetime | None = None
    ended_at: datetime | None = None
    status_message_id: int | None = None

    @property
    def is_active(self) -> bool:
        return self.status is GameStatus.ACTIVE


@dataclass(frozen=True)
class PlayerRecord:
    """A roster row for a game."""

    game_id: int
    user_id: str
    username: str | None
    first_name: str | None
    joined_at: datetime | None = None


@dataclass(frozen=True)
class BuyInRecord:
    """A buy-in request awaiting or past peer ratification."""

    id: int
    game_id: int
    user_id: str
    amount_cents: int
    status: BuyInStatus
    created_at: datetime | None = None


@dataclass(frozen=True)
class VoteRecord:
    """A single voter's decision on a buy-in."""

    buy_in_id: int
    voter_user_id: str
    decision: VoteDecision
    created_at: datetime | None = None
