"""Parse Telegram commands and button presses into intents."""

from buyin_ledger.api.telegram_models import (
    TelegramCallbackQuery,
    TelegramMessage,
    TelegramUser,
)
from buyin_ledger.domain.games import ChatUser, VoteDecision
from buyin_ledger.domain.intents import (
    CALLBACK_PREFIX,
    CallbackAction,
    CastVote,
    EndGame,
    Intent,
    JoinGame,
    RefreshStatus,
    RequestBuyIn,
    StartGame,
)
from buyin_ledger.telegram_commands import BotCommand


def chat_user(user: TelegramUser) -> ChatUser:
    """Convert a Telegram user into the identity stored on the roster."""
    return ChatUser(
        user_id=str(user.id),
        username=user.username or None,
        first_name=user.first_name or None,
    )


def parse_command(text: str) -> tuple[str, str]:
    """Split "/cmd@bot args" into a lowercase command name and argument text."""
    raw_command, *rest = text.split()
    name = raw_command.lower().split("@", maxsplit=1)[0].removeprefix("/")
    return name, " ".join(rest)


def parse_message_intent(message: TelegramMessage) -> Intent | None:  # noqa: PLR0911
    """Return the intent for a group chat command, if the message is one."""
    if not message.chat.is_group or not message.text:
        return None
    if not message.text.startswith("/"):
        return None
    name, arg_text = parse_command(message.text)
    command = BotCommand.from_text(name)
    if command is None:
        return None

    chat_id = str(message.chat.id)
    if command is BotCommand.START_GAME:
        return StartGame(chat_id=chat_id, amount_text=arg_text)
    if command is BotCommand.STATUS:
        return RefreshStatus(chat_id=chat_id)
    if command is BotCommand.END_GAME:
        return EndGame(chat_id=chat_id)
    if message.from_user is None:
        return None
    user = chat_user(message.from_user)
    if command is BotCommand.JOIN_GAME:
        return JoinGame(chat_id=chat_id, user=user)
    return RequestBuyIn(chat_id=chat_id, user=user, amount_text=arg_text or None)


def parse_callback_intent(callback: TelegramCallbackQuery) -> Intent | None:  # noqa: PLR0911
    """Parse callback data in the format g:<action>[:<buy_in_id>]."""
    if callback.message is None or not callback.data:
        return None
    parts = callback.data.split(":")
    if len(parts) not in {2, 3} or parts[0] != CALLBACK_PREFIX:
        return None
    try:
        action = CallbackAction(parts[1])
    except ValueError:
        return None

    chat_id = str(callback.message.chat.id)
    user = chat_user(callback.from_user)
    if action in {CallbackAction.APPROVE, CallbackAction.REJECT}:
        if len(parts) != 3 or not parts[2].isdigit():
            return None
        decision = (
            VoteDecision.APPROVE
            if action is CallbackAction.APPROVE
            else VoteDecision.REJECT
        )
        return CastVote(
            chat_id=chat_id,
            buy_in_id=int(parts[2]),
            user=user,
            decision=decision,
        )
    if len(parts) != 2:
        return None
    if action is CallbackAction.JOIN:
        return JoinGame(chat_id=chat_id, user=user)
    if action is CallbackAction.BUY_IN:
        return RequestBuyIn(chat_id=chat_id, user=user)
    if action is CallbackAction.REFRESH:
        return RefreshStatus(chat_id=chat_id)
    return EndGame(chat_id=chat_id)
