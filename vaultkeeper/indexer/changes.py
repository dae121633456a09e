"""Change detection between vault snapshots."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from vaultkeeper.storage import IndexSettings
from vaultkeeper.vault import Vault, VaultFile

from .paths import index_file_path, index_file_ref_for, inner_index_path, parent_folder
from .policy import is_allowed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenamePlan:
    """An index document to move after its folder was renamed."""

    index_file: VaultFile
    new_path: str


def vault_snapshot(vault: Vault) -> set[str]:
    """Paths of every document currently in the vault."""
    return {document.path for document in vault.list_documents()}


def diff(previous: Iterable[str], current: Iterable[str]) -> set[str]:
    """Paths that were created or deleted between two snapshots."""
    return set(previous) ^ set(current)


def infer_folder_rename(
    vault: Vault,
    settings: IndexSettings,
    path: str | None,
    old_path: str | None,
) -> RenamePlan | None:
    """Detect a folder rename from the move of one document inside it.

    The document keeps its name and depth and exactly one ancestor folder
    differs. The old folder's index document must still sit inside the
    renamed folder, otherwise the document was moved elsewhere (or the
    folder is excluded) and nothing needs renaming.
    """
    if not path or not old_path:
        return None

    created = path.split("/")
    deleted = old_path.split("/")

    # The document itself was renamed, not a folder
    if created[-1] != deleted[-1]:
        return None

    # Moved to a shallower or deeper folder
    if len(created) != len(deleted):
        return None

    differing = [i for i, (new, old) in enumerate(zip(created, deleted)) if new != old]
    if not differing:
        return None
    if len(differing) > 1:
        logger.debug(f"Ambiguous rename {old_path} -> {path}, skipping")
        return None

    position = differing[0]
    folder = "/".join(created[: position + 1])
    old_index_path = index_file_path(folder, deleted[position], settings.index_prefix)

    old_index = vault.resolve(old_index_path)
    if not isinstance(old_index, VaultFile):
        return None

    new_path = inner_index_path(folder, settings.index_prefix, vault.name)
    logger.debug(f"Folder renamed, index {old_index_path} -> {new_path}")
    return RenamePlan(index_file=old_index, new_path=new_path)


def _vanished_document_index(vault: Vault, path: str, prefix: str) -> str:
    """Index of the folder a deleted document lived in, if that folder remains."""
    folder_path = parent_folder(path)
    folder = vault.resolve(folder_path)
    if folder is None or folder.is_file:
        return ""
    return inner_index_path(folder_path, prefix, vault.name)


def indexes_to_update(vault: Vault, settings: IndexSettings, changed_paths: Iterable[str]) -> set[str]:
    """Index documents to regenerate for a set of changed paths.

    Each path contributes its own folder's index (subject to the folder
    policy) and the index one level up, so hierarchical links follow.
    """
    prefix = settings.index_prefix
    to_update: set[str] = set()

    for changed in changed_paths:
        index_path = index_file_ref_for(vault, changed, prefix)
        if not index_path and vault.resolve(changed) is None:
            index_path = _vanished_document_index(vault, changed, prefix)

        if index_path and is_allowed(settings, index_path):
            to_update.add(index_path)

        parent_index_path = index_file_ref_for(vault, parent_folder(changed), prefix)
        if parent_index_path:
            to_update.add(parent_index_path)

    return to_update
