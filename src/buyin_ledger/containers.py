"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from buyin_ledger.adapters.supabase_buy_in_repository import (
    SupabaseBuyInRepository,
    SupabaseVoteRepository,
)
from buyin_ledger.adapters.supabase_game_repository import SupabaseGameRepository
from buyin_ledger.adapters.supabase_player_repository import (
    SupabasePlayerRepository,
)
from buyin_ledger.adapters.telegram_client import (
    HttpxTelegramClient,
    TelegramClient,
)
from buyin_ledger.config import Settings
from buyin_ledger.services.approvals import (
    ApprovalService,
    BuyInRepository,
    VoteRepository,
)
from buyin_ledger.services.dispatcher import IntentDispatcher
from buyin_ledger.services.games import GameRepository, GameService
from buyin_ledger.services.projection import StateProjector
from buyin_ledger.services.roster import PlayerRepository, RosterService
from buyin_ledger.services.status import StatusService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    telegram_client: TelegramClient
    game_service: GameService
    roster_service: RosterService
    approval_service: ApprovalService
    projector: StateProjector
    status_service: StatusService
    dispatcher: IntentDispatcher
    close_resources: Callable[[], Awaitable[None]]


def wire_services(  # noqa: PLR0913
    settings: Settings,
    telegram_client: TelegramClient,
    game_repository: GameRepository,
    player_repository: PlayerRepository,
    buy_in_repository: BuyInRepository,
    vote_repository: VoteRepository,
    close_resources: Callable[[], Awaitable[None]],
) -> AppContainer:
    """Assemble services around the given repositories and Telegram client."""
    projector = StateProjector(
        player_repository=player_repository,
        buy_in_repository=buy_in_repository,
        vote_repository=vote_repository,
    )
    status_service = StatusService(
        game_repository=game_repository,
        projector=projector,
        telegram_client=telegram_client,
        approvals_required=settings.approvals_required,
        max_pending_rows=settings.max_pending_rows_in_keyboard,
    )
    game_service = GameService(game_repository, status_service)
    roster_service = RosterService(
        repository=player_repository,
        game_service=game_service,
        status_service=status_service,
    )
    approval_service = ApprovalService(
        buy_in_repository=buy_in_repository,
        vote_repository=vote_repository,
        game_repository=game_repository,
        game_service=game_service,
        roster_service=roster_service,
        status_service=status_service,
        approvals_required=settings.approvals_required,
    )
    dispatcher = IntentDispatcher(
        game_service=game_service,
        roster_service=roster_service,
        approval_service=approval_service,
        status_service=status_service,
    )
    return AppContainer(
        settings=settings,
        telegram_client=telegram_client,
        game_service=game_service,
        roster_service=roster_service,
        approval_service=approval_service,
        projector=projector,
        status_service=status_service,
        dispatcher=dispatcher,
        close_resources=close_resources,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    telegram_client = HttpxTelegramClient.create(resolved_settings.telegram_bot_token)

    async def close_resources() -> None:
        await telegram_client.close()

    return wire_services(
        settings=resolved_settings,
        telegram_client=telegram_client,
        game_repository=SupabaseGameRepository(supabase_client),
        player_repository=SupabasePlayerRepository(supabase_client),
        buy_in_repository=SupabaseBuyInRepository(supabase_client),
        vote_repository=SupabaseVoteRepository(supabase_client),
        close_resources=close_resources,
    )
