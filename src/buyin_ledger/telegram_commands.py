"""Telegram bot command configuration."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TelegramCommand:
    """Declarative bot command definition."""

    command: str
    description: str


class BotCommand(Enum):
    """Enum of bot commands (single source of truth)."""

    START_GAME = TelegramCommand("startgame", "Start a game: /startgame <buy-in>")
    JOIN_GAME = TelegramCommand("joingame", "Join the active game")
    BUY_IN = TelegramCommand("buyin", "Request a buy-in: /buyin [amount]")
    STATUS = TelegramCommand("status", "Refresh the game status message")
    END_GAME = TelegramCommand("endgame", "End the active game")

    @classmethod
    def from_text(cls, name: str) -> "BotCommand | None":
        """Return the command with the given name, if any."""
        for entry in cls:
            if entry.value.command == name:
                return entry
        return None


def telegram_commands() -> list[dict[str, str]]:
    """Return commands formatted for Telegram API."""
    return [
        {"command": entry.value.command, "description": entry.value.description}
        for entry in BotCommand
    ]
