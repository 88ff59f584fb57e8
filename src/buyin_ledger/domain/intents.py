"""Closed set of intents produced at the Telegram boundary."""

from dataclasses import dataclass
from enum import StrEnum

from buyin_ledger.domain.games import ChatUser, VoteDecision


@dataclass(frozen=True)
class StartGame:
    chat_id: str
    amount_text: str


@dataclass(frozen=True)
class JoinGame:
    chat_id: str
    user: ChatUser


@dataclass(frozen=True)
class RequestBuyIn:
    chat_id: str
    user: ChatUser
    amount_text: str | None = None


@dataclass(frozen=True)
class CastVote:
    chat_id: str
    buy_in_id: int
    user: ChatUser
    decision: VoteDecision


@dataclass(frozen=True)
class RefreshStatus:
    chat_id: str


@dataclass(frozen=True)
class EndGame:
    chat_id: str


Intent = StartGame | JoinGame | RequestBuyIn | CastVote | RefreshStatus | EndGame


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a dispatched intent, with a message for the actor."""

    ok: bool
    message: str


class CallbackAction(StrEnum):
    """Actions carried by status message buttons."""

    JOIN = "join"
    BUY_IN = "buyin"
    REFRESH = "refresh"
    END = "end"
    APPROVE = "approve"
    REJECT = "reject"


CALLBACK_PREFIX = "g"


def callback_data(action: CallbackAction, buy_in_id: int | None = None) -> str:
    """Build callback_data within Telegram's 64-byte limit."""
    if buy_in_id is None:
        return f"{CALLBACK_PREFIX}:{action.value}"
    return f"{CALLBACK_PREFIX}:{action.value}:{buy_in_id}"
