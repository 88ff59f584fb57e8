"""Error taxonomy for ledger operations."""


class LedgerError(Exception):
    """Base error carrying a user-facing message."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(LedgerError):
    """Malformed or non-positive amount."""

    default_message = "Amount must be greater than zero."


class ConflictError(LedgerError):
    """A game is already active in the chat."""

    default_message = "There is already an active game in this chat."


class NotFoundError(LedgerError):
    """No active game, or an unknown buy-in."""

    default_message = "No active game. Use /startgame first."


class NotMemberError(LedgerError):
    """Actor is not on the roster."""

    default_message = "Please join the game first."


class AlreadyMemberError(LedgerError):
    """Actor already joined the game."""

    default_message = "You are already part of this game."


class AlreadyResolvedError(LedgerError):
    """Buy-in is no longer pending."""

    default_message = "Buy-in already resolved."


class SelfVoteError(LedgerError):
    """Requester tried to vote on their own buy-in."""

    default_message = "You cannot vote on your own buy-in."


class TransportError(LedgerError):
    """Failure talking to the ledger store or Telegram."""

    default_message = "Something went wrong. Please try again."


class StoreError(TransportError):
    """Ledger store request failed."""


class TelegramApiError(TransportError):
    """Telegram Bot API request failed."""

    @property
    def is_not_modified(self) -> bool:
        """Return true when an edit was rejected because nothing changed."""
        return "message is not modified" in str(self).lower()
