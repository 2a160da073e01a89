"""Dependency container wiring for the application."""

from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass

from supabase import create_client

from caffeine_tracker.adapters.file_drink_store import FileDrinkStore
from caffeine_tracker.adapters.supabase_health_store import SupabaseHealthStore
from caffeine_tracker.config import Settings, resolve_timezone
from caffeine_tracker.services.complications import ComplicationService
from caffeine_tracker.services.health import HealthService
from caffeine_tracker.services.ledger import DrinkLedger


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    ledger: DrinkLedger
    health_service: HealthService | None
    complication_service: ComplicationService
    initial_load: "Future[None]"
    close_resources: Callable[[], None]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container and start loading drinks."""
    resolved_settings = settings or Settings()
    health_service = None
    if resolved_settings.health_sync_enabled:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        health_service = HealthService(
            SupabaseHealthStore(supabase_client, table=resolved_settings.health_table)
        )
    ledger = DrinkLedger(
        store=FileDrinkStore(resolved_settings.data_path),
        health=health_service,
        tz=resolve_timezone(resolved_settings.timezone),
    )
    complication_service = ComplicationService(ledger)
    initial_load = ledger.load()

    def close_resources() -> None:
        ledger.close()

    return AppContainer(
        settings=resolved_settings,
        ledger=ledger,
        health_service=health_service,
        complication_service=complication_service,
        initial_load=initial_load,
        close_resources=close_resources,
    )
