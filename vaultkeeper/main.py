"""Main entry point for Vaultkeeper - watches the vault and keeps indexes in sync."""

import asyncio
import logging
import sys

from vaultkeeper.config import Settings, get_settings
from vaultkeeper.indexer import Colors, IndexKeeper
from vaultkeeper.storage import SettingsStorage
from vaultkeeper.vault import Debouncer, LocalVault, VaultWatcher


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        format="%(message)s",
        level=level,
    )
    # Reduce noise from libraries
    logging.getLogger("watchdog").setLevel(logging.WARNING)


async def run(settings: Settings) -> None:
    """Watch the vault until cancelled."""
    vault = LocalVault(settings.vault_path)
    keeper = IndexKeeper(vault, SettingsStorage(settings.vault_path))
    keeper.load_vault()

    debouncer = Debouncer(keeper.on_vault_change, settings.debounce_seconds)
    watcher = VaultWatcher(settings.vault_path, debouncer.trigger)
    watcher.start(asyncio.get_running_loop())

    try:
        await asyncio.Event().wait()
    finally:
        debouncer.cancel()
        watcher.stop()


def main() -> None:
    """Run the Vaultkeeper watcher."""
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        settings = get_settings()
        logger.info(f"{Colors.DIM}Vault: {settings.vault_path}{Colors.RESET}")
    except Exception as e:
        logger.error(f"{Colors.RED}Failed to load settings: {e}{Colors.RESET}")
        logger.error(f"{Colors.RED}Make sure VAULT_PATH is set in the environment or a .env file.{Colors.RESET}")
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    logger.info(f"{Colors.GREEN}{Colors.BOLD}Vaultkeeper started ✓{Colors.RESET}")

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info(f"{Colors.DIM}Stopped.{Colors.RESET}")


if __name__ == "__main__":
    main()
