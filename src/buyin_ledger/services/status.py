"""Single status message per game, kept in sync with the ledger."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from buyin_ledger.domain.errors import TelegramApiError, TransportError
from buyin_ledger.domain.games import GameRecord, GameStatus
from buyin_ledger.domain.intents import CallbackAction, callback_data
from buyin_ledger.domain.money import format_money
from buyin_ledger.domain.state import ProjectedView

if TYPE_CHECKING:
    from buyin_ledger.adapters.telegram_client import TelegramClient
    from buyin_ledger.services.games import GameRepository
    from buyin_ledger.services.projection import StateProjector

logger = logging.getLogger(__name__)

PARSE_MODE = "Markdown"
_MARKDOWN_SPECIAL = ("\\", "_", "*", "`", "[")


def escape_markdown(text: str) -> str:
    """Escape characters that Telegram's legacy Markdown treats as markup."""
    for char in _MARKDOWN_SPECIAL:
        text = text.replace(char, f"\\{char}")
    return text


def render_status_text(game: GameRecord, view: ProjectedView, threshold: int) -> str:
    """Render the status message body."""
    ended = game.status is GameStatus.ENDED
    lines = [
        "*Game ended*" if ended else "*Poker Night*",
        f"Buy-in: {format_money(game.buy_in_cents)}",
        "",
    ]

    if not view.players:
        lines.append("_No players yet._")
    else:
        lines.append("*Players*")
        for player in view.players:
            pending = (
                f" (pending {player.pending_count})" if player.pending_count else ""
            )
            lines.append(
                f"- {escape_markdown(player.label)}: "
                f"{format_money(player.approved_cents)}{pending}"
            )

    if view.pending:
        lines.append("")
        lines.append("*Pending buy-ins*")
        for row in view.pending:
            lines.append(
                f"#{row.id} {escape_markdown(row.label)} - "
                f"{format_money(row.amount_cents)} ({row.approvals}/{threshold})"
            )

    if ended:
        lines.append("")
        lines.append("Start a new game with /startgame <amount>.")

    return "\n".join(lines)


def build_status_keyboard(
    game: GameRecord, view: ProjectedView, threshold: int, max_pending_rows: int
) -> dict | None:
    """Build the inline keyboard, or None once the game has ended."""
    if game.status is not GameStatus.ACTIVE:
        return None

    rows: list[list[dict[str, str]]] = [
        [
            {"text": "Join game", "callback_data": callback_data(CallbackAction.JOIN)},
            {
                "text": f"Buy-in ({format_money(game.buy_in_cents)})",
                "callback_data": callback_data(CallbackAction.BUY_IN),
            },
        ],
        [
            {"text": "Refresh", "callback_data": callback_data(CallbackAction.REFRESH)},
            {"text": "End game", "callback_data": callback_data(CallbackAction.END)},
        ],
    ]
    for row in view.pending[:max_pending_rows]:
        rows.append(
            [
                {
                    "text": f"Approve #{row.id} ({row.approvals}/{threshold})",
                    "callback_data": callback_data(CallbackAction.APPROVE, row.id),
                },
                {
                    "text": f"Reject #{row.id} ({row.rejects}/{threshold})",
                    "callback_data": callback_data(CallbackAction.REJECT, row.id),
                },
            ]
        )
    return {"inline_keyboard": rows}


@dataclass
class StatusService:
    """Publishes the projected view as one editable message per game."""

    game_repository: GameRepository
    projector: StateProjector
    telegram_client: TelegramClient
    approvals_required: int = 1
    max_pending_rows: int = 5

    async def publish(self, game: GameRecord, allow_create: bool = True) -> bool:
        """Edit the game's status message in place, or send a new one.

        Failures are logged and reported as False; they never propagate.
        """
        try:
            return await self._publish(game, allow_create)
        except TransportError:
            logger.exception(
                "Failed to publish status message",
                extra={"game_id": game.id, "chat_id": game.chat_id},
            )
            return False

    async def refresh(self, chat_id: str) -> bool:
        """Republish the active game's status without creating a new message."""
        game = self.game_repository.get_active_game(chat_id)
        if game is None:
            return False
        return await self.publish(game, allow_create=False)

    async def _publish(self, game: GameRecord, allow_create: bool) -> bool:
        # Callers may hold a snapshot taken before another publish stored a message.
        game = self.game_repository.get_game(game.id) or game
        view = self.projector.project(game.id)
        text = render_status_text(game, view, self.approvals_required)
        reply_markup = build_status_keyboard(
            game, view, self.approvals_required, self.max_pending_rows
        )
        chat_id = int(game.chat_id)

        if game.status_message_id is not None:
            try:
                await self.telegram_client.edit_message_text(
                    chat_id=chat_id,
                    message_id=game.status_message_id,
                    text=text,
                    reply_markup=reply_markup,
                    parse_mode=PARSE_MODE,
                )
            except TelegramApiError as exc:
                if exc.is_not_modified:
                    return True
                logger.warning(
                    "Failed to edit status message: %s",
                    exc,
                    extra={"game_id": game.id, "chat_id": game.chat_id},
                )
                if not allow_create:
                    return False
            else:
                return True
        elif not allow_create:
            return False

        message_id = await self.telegram_client.send_message(
            chat_id=chat_id,
            text=text,
            reply_markup=reply_markup,
            parse_mode=PARSE_MODE,
        )
        self.game_repository.set_status_message(game.id, message_id)
        return True
