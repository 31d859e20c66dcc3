# filepath: src/convsync/app.py
"""Application wiring for the conversion queue settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from convsync.config import AppConfig
from convsync.engine.pool import TaskPool
from convsync.engine.protocols import ExecutionEngine
from convsync.settings.accessor import SettingsStoreAccessor
from convsync.settings.sync import SettingsSynchronizer
from convsync.updates import HttpUpdateChecker, UpdateInfo, check_for_updates

logger: Final = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Configure root logging for the application."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


@dataclass
class StartupReport:
    """Outcome of ConverterApp.start()."""

    max_concurrency: int
    auto_update_check: bool
    update: UpdateInfo | None = None


class ConverterApp:
    """Main controller tying configuration, engine and settings together.

    This class orchestrates startup:
    - Building the task pool with its boot-time limit
    - Opening the settings store lazily through the accessor
    - Hydrating the pool's limit from the stored setting
    - Running the update check when the user allows it

    Every collaborator can be injected, which is how the tests drive it.
    Construct the app inside the event loop that will use it.
    """

    def __init__(
        self,
        config: AppConfig,
        engine: ExecutionEngine | None = None,
        accessor: SettingsStoreAccessor | None = None,
        update_checker: HttpUpdateChecker | None = None,
    ):
        """Initialize the controller.

        Args:
            config: Loaded application configuration
            engine: Optional custom execution engine
            accessor: Optional custom settings store accessor
            update_checker: Optional custom update checker
        """
        self.config = config
        self.engine: ExecutionEngine = engine or TaskPool(config.engine_limit)
        self.accessor = accessor or SettingsStoreAccessor(config.store_path)
        self.settings = SettingsSynchronizer(self.accessor, self.engine)

        if update_checker is None and config.update_url:
            update_checker = HttpUpdateChecker(
                config.update_url, config.current_version, config.update_timeout
            )
        self.update_checker = update_checker

    async def start(self) -> StartupReport:
        """Hydrate settings into the engine and run the gated update check."""
        limit = await self.settings.load_initial_max_concurrency()
        auto_update = await self.settings.load_auto_update_check()
        logger.info("Starting with max concurrency %d", limit)

        update = None
        if self.update_checker is not None:
            update = await check_for_updates(self.settings, self.update_checker)

        return StartupReport(max_concurrency=limit, auto_update_check=auto_update, update=update)
