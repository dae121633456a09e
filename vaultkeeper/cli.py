"""CLI interface for Vaultkeeper - regenerate indexes and edit index settings."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from vaultkeeper.config import get_settings
from vaultkeeper.indexer import Colors, IndexKeeper
from vaultkeeper.main import setup_logging
from vaultkeeper.storage import IndexSettings, SettingsStorage
from vaultkeeper.vault import LocalVault

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def parse_setting(assignment: str, current: IndexSettings) -> tuple[str, Any]:
    """Parse a KEY=VALUE assignment, converting booleans by the current type."""
    if "=" not in assignment:
        raise ValueError(f"Expected KEY=VALUE, got: {assignment}")

    key, value = assignment.split("=", 1)
    key = key.strip()
    if not hasattr(current, key):
        raise ValueError(f"Unknown setting: {key}")

    if isinstance(getattr(current, key), bool):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return key, True
        if lowered in FALSE_VALUES:
            return key, False
        raise ValueError(f"Expected a boolean for {key}, got: {value}")

    # Allow escaped newlines for folder lists
    return key, value.replace("\\n", "\n")


def print_settings(settings: IndexSettings) -> None:
    print(json.dumps(settings.to_dict(), indent=2, ensure_ascii=False))


async def reindex(keeper: IndexKeeper) -> int:
    """Regenerate every index document. Returns the process exit code.

    A pass only reaches one folder level above each change, and without a
    watcher nothing reacts to the indexes it creates. Follow-up passes run
    until the vault stops changing so every ancestor index gets built.
    """
    report = await keeper.reindex()
    while True:
        follow_up = await keeper.keep_clean()
        report = report.merge(follow_up)
        if not follow_up.changed:
            break

    for path in report.updated:
        print(f"  {Colors.GREEN}✓ {path}{Colors.RESET}")
    for path in report.deleted:
        print(f"  {Colors.DIM}- {path}{Colors.RESET}")
    for error in report.errors:
        print(f"  {Colors.RED}✗ {error}{Colors.RESET}")

    print(f"\n{Colors.BOLD}{report.summary()}{Colors.RESET}")
    return 0 if report.ok else 1


def cli() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="vaultkeeper-cli",
        description="Maintain folder index documents in a markdown vault.",
    )
    parser.add_argument(
        "--reindex",
        action="store_true",
        help="Regenerate every index document now",
    )
    parser.add_argument(
        "--show-settings",
        action="store_true",
        help="Print the index settings and exit",
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Update an index setting (repeatable)",
    )

    args = parser.parse_args()

    setup_logging()
    logger = logging.getLogger(__name__)

    # Load settings
    try:
        settings = get_settings()
        logger.info(f"{Colors.DIM}Vault: {settings.vault_path}{Colors.RESET}")
    except Exception as e:
        logger.error(f"{Colors.RED}Failed to load settings: {e}{Colors.RESET}")
        logger.error(f"{Colors.RED}Make sure VAULT_PATH is set in the environment or a .env file.{Colors.RESET}")
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    storage = SettingsStorage(settings.vault_path)

    if args.set:
        try:
            updates = dict(parse_setting(a, storage.get()) for a in args.set)
            storage.update(**updates)
        except ValueError as e:
            print(f"{Colors.RED}Error: {e}{Colors.RESET}")
            sys.exit(2)
        print(f"{Colors.GREEN}Settings updated.{Colors.RESET}")

    if args.show_settings:
        print_settings(storage.get())

    if args.reindex:
        keeper = IndexKeeper(LocalVault(settings.vault_path), storage)
        print(f"{Colors.DIM}Regenerating index documents...{Colors.RESET}")
        sys.exit(asyncio.run(reindex(keeper)))

    if not (args.set or args.show_settings):
        parser.print_help()


if __name__ == "__main__":
    cli()
