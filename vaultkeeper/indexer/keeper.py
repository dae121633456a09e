"""Index keeper - keeps folder index documents in sync with the vault."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum

from vaultkeeper.storage import IndexSettings, SettingsStorage
from vaultkeeper.vault import IndexOnFolderError, Vault, VaultFile, VaultFolder

from .changes import RenamePlan, diff, indexes_to_update, infer_folder_rename, vault_snapshot
from .emojis import EmojiLookup, lookup_emoji
from .frontmatter import regenerate, strip
from .paths import inner_index_path, is_index_file
from .policy import is_allowed
from .renderer import ChildEntry, build_index_body, update_index_content

logger = logging.getLogger(__name__)


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    CYAN = "\033[36m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"


class KeeperState(str, Enum):
    """Phase of the current sync pass."""

    IDLE = "idle"
    DIFFING = "diffing"
    RENAMING = "renaming"
    REGENERATING = "regenerating"
    CLEANING = "cleaning"


@dataclass
class SyncReport:
    """Outcome of one sync pass."""

    changed: list[str] = field(default_factory=list)
    renamed: tuple[str, str] | None = None  # (old index path, new index path)
    updated: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def merge(self, other: "SyncReport") -> "SyncReport":
        """Combine with a later pass; each path is listed once, in first-seen order."""
        return SyncReport(
            changed=sorted(set(self.changed) | set(other.changed)),
            renamed=self.renamed or other.renamed,
            updated=list(dict.fromkeys(self.updated + other.updated)),
            deleted=list(dict.fromkeys(self.deleted + other.deleted)),
            errors=self.errors + other.errors,
        )

    def summary(self) -> str:
        parts = [
            f"{len(self.changed)} changed",
            f"{len(self.updated)} indexes updated",
            f"{len(self.deleted)} deleted",
        ]
        if self.renamed:
            parts.append(f"renamed {self.renamed[0]} -> {self.renamed[1]}")
        if self.errors:
            parts.append(f"{len(self.errors)} errors")
        return ", ".join(parts)


class IndexKeeper:
    """Owns the vault baseline snapshot and runs sync passes against it.

    A pass diffs the vault against the baseline, renames the index of a
    renamed folder, regenerates the affected indexes and removes indexes of
    excluded folders. The baseline is recaptured after every pass, whether
    or not it succeeded, so the next pass reconciles any leftovers.
    """

    def __init__(
        self,
        vault: Vault,
        settings_storage: SettingsStorage,
        emoji_lookup: EmojiLookup = lookup_emoji,
    ) -> None:
        self.vault = vault
        self.settings_storage = settings_storage
        self.emoji_lookup = emoji_lookup
        self.last_vault: set[str] | None = None
        self.state = KeeperState.IDLE
        self._lock = asyncio.Lock()

    @property
    def settings(self) -> IndexSettings:
        return self.settings_storage.get()

    def load_vault(self) -> None:
        """Capture the baseline snapshot."""
        self.last_vault = vault_snapshot(self.vault)
        logger.debug(f"Vault baseline: {len(self.last_vault)} documents")

    async def on_vault_change(self, path: str | None = None, old_path: str | None = None) -> None:
        """Entry point for debounced vault events."""
        await self.keep_clean(path=path, old_path=old_path)

    async def reindex(self) -> SyncReport:
        """Clear the baseline and regenerate every index."""
        return await self.keep_clean(triggered_manually=True)

    async def keep_clean(
        self,
        triggered_manually: bool = False,
        path: str | None = None,
        old_path: str | None = None,
    ) -> SyncReport:
        """Run one sync pass."""
        async with self._lock:
            report = SyncReport()
            logger.info(f"{Colors.DIM}Syncing index documents...{Colors.RESET}")

            if triggered_manually:
                self.last_vault = set()

            if self.last_vault is not None:
                settings = self.settings
                try:
                    self.state = KeeperState.DIFFING
                    changed = diff(self.last_vault, vault_snapshot(self.vault))
                    report.changed = sorted(changed)
                    logger.debug(f"Changed documents: {report.changed}")

                    plan = infer_folder_rename(self.vault, settings, path, old_path)
                    to_update = indexes_to_update(self.vault, settings, changed)
                    logger.debug(f"Index documents to update: {sorted(to_update)}")

                    await self.rename_index_file(plan, report)
                    await self.update_index_files(to_update, settings, report)
                except Exception as e:
                    logger.error(f"{Colors.RED}Error during indexing: {e}{Colors.RESET}")
                    report.errors.append(str(e))

            self.last_vault = vault_snapshot(self.vault)
            self.state = KeeperState.IDLE

            color = Colors.GREEN if report.ok else Colors.YELLOW
            logger.info(f"{color}Indexes in sync: {report.summary()}{Colors.RESET}")
            return report

    async def rename_index_file(self, plan: RenamePlan | None, report: SyncReport) -> None:
        """Move a renamed folder's index to its new name, replacing any occupant."""
        if plan is None:
            return

        self.state = KeeperState.RENAMING
        try:
            occupant = self.vault.resolve(plan.new_path)
            if isinstance(occupant, VaultFile):
                logger.warning(
                    f"{Colors.YELLOW}Replacing {plan.new_path} with renamed index{Colors.RESET}"
                )
                await self.vault.delete(occupant)

            await self.vault.rename(plan.index_file, plan.new_path)
            report.renamed = (plan.index_file.path, plan.new_path)
            logger.info(f"{Colors.CYAN}Renamed {plan.index_file.path} -> {plan.new_path}{Colors.RESET}")
        except Exception as e:
            logger.error(f"{Colors.RED}Failed to rename {plan.index_file.path}: {e}{Colors.RESET}")
            report.errors.append(f"{plan.index_file.path}: {e}")

    def _allowed_indexes(self, index_paths: set[str], settings: IndexSettings) -> list[str]:
        """Drop indexes of excluded folders; deepest first so subfolder indexes exist before their parents link them."""
        excluded = {
            inner_index_path(folder, settings.index_prefix, self.vault.name)
            for folder in settings.excluded_folders
        }
        allowed = [p for p in index_paths if p not in excluded and is_allowed(settings, p)]
        return sorted(allowed, key=lambda p: (-p.count("/"), p))

    async def update_index_files(
        self,
        index_paths: set[str],
        settings: IndexSettings,
        report: SyncReport,
    ) -> None:
        self.state = KeeperState.REGENERATING
        for index_path in self._allowed_indexes(index_paths, settings):
            try:
                await self.generate_index_contents(index_path, settings)
                report.updated.append(index_path)
            except Exception as e:
                logger.warning(f"{Colors.YELLOW}Failed to update {index_path}: {e}{Colors.RESET}")
                report.errors.append(f"{index_path}: {e}")

        self.state = KeeperState.CLEANING
        await self.clean_excluded_folders(settings, report)

    async def _template_content(self, settings: IndexSettings) -> str:
        if not settings.template_file:
            return ""

        template = self.vault.resolve(settings.template_file)
        if not isinstance(template, VaultFile):
            return ""

        try:
            return await self.vault.read(template)
        except OSError as e:
            logger.warning(f"Failed to read template {settings.template_file}: {e}")
            return ""

    async def generate_index_contents(self, index_path: str, settings: IndexSettings) -> None:
        """Make sure the index document exists, then regenerate it."""
        template = await self._template_content(settings)

        index_file = self.vault.resolve(index_path)
        if index_file is None:
            index_file = await self.vault.create(index_path, template)
            logger.info(f"{Colors.GREEN}Created {index_path}{Colors.RESET}")

        if not isinstance(index_file, VaultFile):
            raise IndexOnFolderError(f"Creating an index on a folder is not supported: {index_path}")

        await self.generate_index_content(index_file, settings, template)

    def _child_entries(
        self, index_file: VaultFile, settings: IndexSettings
    ) -> tuple[list[ChildEntry], list[ChildEntry]]:
        folder = self.vault.resolve(index_file.parent_path)
        if not isinstance(folder, VaultFolder):
            return [], []

        subfolders: list[ChildEntry] = []
        files: list[ChildEntry] = []
        for child in self.vault.list_children(folder):
            if child.is_file:
                files.append(
                    ChildEntry(
                        path=child.path,
                        is_folder=False,
                        target=child.path,
                        target_is_index=is_index_file(child, settings.index_prefix, self.vault.name),
                    )
                )
                continue

            inner = inner_index_path(child.path, settings.index_prefix, self.vault.name)
            target = self.vault.resolve(inner)
            if not isinstance(target, VaultFile) or not is_allowed(settings, inner):
                # No index inside (excluded or not generated yet)
                logger.debug(f"No index document in {child.path}, not linking it")
                continue
            subfolders.append(
                ChildEntry(
                    path=child.path,
                    is_folder=True,
                    target=inner,
                    target_is_index=is_index_file(target, settings.index_prefix, self.vault.name),
                )
            )

        return subfolders, files

    async def generate_index_content(
        self,
        index_file: VaultFile,
        settings: IndexSettings,
        template: str | None = None,
    ) -> None:
        """Rewrite the link list of an index document, preserving its frontmatter."""
        subfolders, files = self._child_entries(index_file, settings)
        index_body = build_index_body(subfolders, files, settings, index_file.path, self.emoji_lookup)

        original = await self.vault.read(index_file)
        current = original
        if current == "":
            current = template if template is not None else await self._template_content(settings)

        separator = settings.front_matter_separator
        frontmatter = regenerate(settings, current)
        body = update_index_content(strip(current, separator), index_body)
        if frontmatter and not body.startswith("\n"):
            body = f"\n{body}"

        content = f"{frontmatter}{body}"
        if content == original:
            logger.debug(f"{index_file.path} is up to date")
            return

        await self.vault.write(index_file, content)
        logger.debug(f"Updated {index_file.path}")

    async def clean_excluded_folders(self, settings: IndexSettings, report: SyncReport) -> None:
        """Delete the index documents of excluded folders."""
        for folder in settings.excluded_folders:
            index_path = inner_index_path(folder, settings.index_prefix, self.vault.name)
            index_file = self.vault.resolve(index_path)
            if not isinstance(index_file, VaultFile):
                continue

            try:
                await self.vault.delete(index_file)
                report.deleted.append(index_path)
                logger.info(f"{Colors.DIM}Removed index of excluded folder {folder}{Colors.RESET}")
            except Exception as e:
                logger.warning(f"{Colors.YELLOW}Failed to remove {index_path}: {e}{Colors.RESET}")
                report.errors.append(f"{index_path}: {e}")
