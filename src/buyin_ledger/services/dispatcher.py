"""Routes parsed intents to the ledger services."""

import logging
from dataclasses import dataclass

from buyin_ledger.domain.errors import LedgerError, TransportError
from buyin_ledger.domain.intents import (
    ActionResult,
    CastVote,
    EndGame,
    Intent,
    JoinGame,
    RefreshStatus,
    RequestBuyIn,
    StartGame,
)
from buyin_ledger.services.approvals import ApprovalService
from buyin_ledger.services.games import GameService
from buyin_ledger.services.roster import RosterService
from buyin_ledger.services.status import StatusService

logger = logging.getLogger(__name__)


@dataclass
class IntentDispatcher:
    """Runs one intent and reports its outcome to the actor."""

    game_service: GameService
    roster_service: RosterService
    approval_service: ApprovalService
    status_service: StatusService

    async def dispatch(self, intent: Intent) -> ActionResult:
        """Run the intent; ledger errors become unsuccessful results."""
        try:
            return await self._dispatch(intent)
        except TransportError as exc:
            logger.exception(
                "Ledger store unavailable",
                extra={"intent": type(intent).__name__},
            )
            return ActionResult(ok=False, message=exc.message)
        except LedgerError as exc:
            return ActionResult(ok=False, message=exc.message)

    async def _dispatch(self, intent: Intent) -> ActionResult:  # noqa: PLR0911
        if isinstance(intent, StartGame):
            await self.game_service.start(intent.chat_id, intent.amount_text)
            return ActionResult(ok=True, message="Game started.")
        if isinstance(intent, JoinGame):
            await self.roster_service.join(intent.chat_id, intent.user)
            return ActionResult(ok=True, message="Joined the game.")
        if isinstance(intent, RequestBuyIn):
            await self.approval_service.request_buy_in(
                intent.chat_id, intent.user, intent.amount_text
            )
            return ActionResult(ok=True, message="Buy-in submitted for approval.")
        if isinstance(intent, CastVote):
            outcome = await self.approval_service.vote(
                intent.buy_in_id, intent.user, intent.decision
            )
            return ActionResult(ok=True, message=outcome.message)
        if isinstance(intent, RefreshStatus):
            if self.game_service.current(intent.chat_id) is None:
                return ActionResult(ok=False, message="No active game.")
            if await self.status_service.refresh(intent.chat_id):
                return ActionResult(ok=True, message="Status refreshed.")
            return ActionResult(
                ok=False, message="Could not refresh the status message."
            )
        if isinstance(intent, EndGame):
            await self.game_service.end(intent.chat_id)
            return ActionResult(ok=True, message="Game ended.")
        raise TypeError(f"Unsupported intent: {intent!r}")
