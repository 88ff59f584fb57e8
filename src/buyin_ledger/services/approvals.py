"""Buy-in requests and the peer-approval vote protocol."""

import logging
from dataclasses import dataclass
from typing import Protocol

from buyin_ledger.domain.errors import (
    AlreadyResolvedError,
    NotFoundError,
    SelfVoteError,
    ValidationError,
)
from buyin_ledger.domain.games import (
    BuyInRecord,
    BuyInStatus,
    ChatUser,
    VoteDecision,
    VoteRecord,
)
from buyin_ledger.domain.money import parse_amount, to_cents
from buyin_ledger.services.games import GameRepository, GameService
from buyin_ledger.services.roster import RosterService
from buyin_ledger.services.status import StatusService

logger = logging.getLogger(__name__)

BUY_IN_USAGE = "Usage: /buyin <amount>. Example: /buyin 50"


class BuyInRepository(Protocol):
    """Persistence interface for buy-in requests."""

    def create_buy_in(
        self, game_id: int, user_id: str, amount_cents: int
    ) -> BuyInRecord:
        """Insert a pending buy-in and return it."""

    def get_buy_in(self, buy_in_id: int) -> BuyInRecord | None:
        """Return a buy-in by id, if present."""

    def list_buy_ins(self, game_id: int) -> list[BuyInRecord]:
        """Return every buy-in of a game ordered by id."""

    def resolve_buy_in(self, buy_in_id: int, status: BuyInStatus) -> bool:
        """Move a pending buy-in to a final status.

        Returns False when the buy-in was no longer pending, in which case
        nothing is written.
        """


class VoteRepository(Protocol):
    """Persistence interface for buy-in votes."""

    def add_vote(
        self, buy_in_id: int, voter_user_id: str, decision: VoteDecision
    ) -> bool:
        """Insert the vote if the voter has none yet; return whether inserted."""

    def list_votes(self, buy_in_ids: list[int]) -> list[VoteRecord]:
        """Return votes cast on the given buy-ins."""


@dataclass(frozen=True)
class VoteOutcome:
    """Tally after a vote and whether it resolved the buy-in."""

    buy_in_id: int
    approvals: int
    rejects: int
    threshold: int
    status: BuyInStatus
    transitioned: bool
    recorded: bool

    @property
    def message(self) -> str:
        if self.transitioned:
            return f"Buy-in #{self.buy_in_id} {self.status.value}."
        return f"Vote recorded ({self.approvals}/{self.threshold})."


def tally(votes: list[VoteRecord]) -> tuple[int, int]:
    """Count approve and reject decisions."""
    approvals = sum(1 for vote in votes if vote.decision is VoteDecision.APPROVE)
    rejects = sum(1 for vote in votes if vote.decision is VoteDecision.REJECT)
    return approvals, rejects


def decide(approvals: int, rejects: int, threshold: int) -> BuyInStatus:
    """Return the status implied by a tally; approval wins ties."""
    if approvals >= threshold:
        return BuyInStatus.APPROVED
    if rejects >= threshold:
        return BuyInStatus.REJECTED
    return BuyInStatus.PENDING


@dataclass
class ApprovalService:
    """Creates buy-in requests and resolves them by peer vote."""

    buy_in_repository: BuyInRepository
    vote_repository: VoteRepository
    game_repository: GameRepository
    game_service: GameService
    roster_service: RosterService
    status_service: StatusService
    approvals_required: int = 1

    def __post_init__(self) -> None:
        if self.approvals_required < 1:
            raise ValueError("approvals_required must be at least 1")

    async def request_buy_in(
        self, chat_id: str, user: ChatUser, amount_text: str | None = None
    ) -> BuyInRecord:
        """Create a pending buy-in for a roster member."""
        game = self.game_service.require_current(chat_id)
        self.roster_service.require_member(
            game.id, user.user_id, "Please join the game before buying in."
        )

        trimmed = amount_text.strip() if amount_text else ""
        if trimmed:
            amount = parse_amount(trimmed)
            if amount is None:
                raise ValidationError(BUY_IN_USAGE)
            amount_cents = to_cents(amount)
            if amount_cents <= 0:
                raise ValidationError("Amount must be greater than zero.")
        else:
            amount_cents = game.buy_in_cents
            if amount_cents <= 0:
                raise ValidationError(
                    "No default buy-in found. "
                    "Restart the game with /startgame <amount>."
                )

        buy_in = self.buy_in_repository.create_buy_in(
            game.id, user.user_id, amount_cents
        )
        logger.info(
            "Buy-in requested",
            extra={"game_id": game.id, "buy_in_id": buy_in.id},
        )
        await self.status_service.publish(game)
        return buy_in

    async def vote(
        self, buy_in_id: int, voter: ChatUser, decision: VoteDecision
    ) -> VoteOutcome:
        """Record a vote and resolve the buy-in once a tally reaches the threshold."""
        buy_in = self.buy_in_repository.get_buy_in(buy_in_id)
        if buy_in is None:
            raise NotFoundError("Buy-in not found.")
        if buy_in.status is not BuyInStatus.PENDING:
            raise AlreadyResolvedError()
        if buy_in.user_id == voter.user_id:
            raise SelfVoteError()
        self.roster_service.require_member(
            buy_in.game_id,
            voter.user_id,
            "Only players can approve or reject buy-ins.",
        )

        recorded = self.vote_repository.add_vote(buy_in_id, voter.user_id, decision)
        approvals, rejects = tally(self.vote_repository.list_votes([buy_in_id]))
        target = decide(approvals, rejects, self.approvals_required)

        transitioned = False
        status = BuyInStatus.PENDING
        if target is not BuyInStatus.PENDING:
            transitioned = self.buy_in_repository.resolve_buy_in(buy_in_id, target)
            if transitioned:
                status = target
                logger.info(
                    "Buy-in resolved",
                    extra={"buy_in_id": buy_in_id, "status": target.value},
                )
            else:
                current = self.buy_in_repository.get_buy_in(buy_in_id)
                status = current.status if current else target

        game = self.game_repository.get_game(buy_in.game_id)
        if game is not None:
            await self.status_service.publish(game)

        return VoteOutcome(
            buy_in_id=buy_in_id,
            approvals=approvals,
            rejects=rejects,
            threshold=self.approvals_required,
            status=status,
            transitioned=transitioned,
            recorded=recorded,
        )
