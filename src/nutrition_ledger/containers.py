"""Dependency container wiring for the application."""

from dataclasses import dataclass

from nutrition_ledger.adapters.json_snapshot_store import JsonSnapshotStore
from nutrition_ledger.app_logging import configure_logging
from nutrition_ledger.config import Settings
from nutrition_ledger.services.data_manager import DataManager
from nutrition_ledger.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    snapshot_store: JsonSnapshotStore
    data_manager: DataManager
    stats_service: StatsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container with the ledger loaded."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    snapshot_store = JsonSnapshotStore(resolved_settings.snapshot_path)
    data_manager = DataManager(
        repository=snapshot_store,
        autosave=resolved_settings.autosave,
        salt_bytes=resolved_settings.salt_bytes,
    )
    data_manager.load_all()
    return AppContainer(
        settings=resolved_settings,
        snapshot_store=snapshot_store,
        data_manager=data_manager,
        stats_service=StatsService(data_manager),
    )
