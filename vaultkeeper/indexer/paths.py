"""Path helpers for locating index documents."""

import logging

from vaultkeeper.vault import Vault, VaultEntity

logger = logging.getLogger(__name__)


def parent_folder(path: str) -> str:
    """Drop the last segment of a path. Root-level items yield ''."""
    segments = path.split("/")
    segments.pop()
    return "/".join(segments)


def folder_name(folder_path: str, vault_name: str) -> str:
    """Last segment of a folder path, or the vault name for the root."""
    folder_path = folder_path.rstrip("/")
    if folder_path == "":
        return vault_name
    return folder_path.split("/")[-1]


def parent_folder_name(path: str, vault_name: str) -> str:
    return folder_name(parent_folder(path), vault_name)


def index_file_path(folder_path: str, name: str, prefix: str) -> str:
    """Build '<folder_path>/<prefix><name>.md'."""
    if folder_path and not folder_path.endswith("/"):
        folder_path += "/"
    return f"{folder_path}{prefix}{name}.md"


def inner_index_path(folder_path: str, prefix: str, vault_name: str) -> str:
    """Path of the index document living inside a folder."""
    folder_path = folder_path.rstrip("/")
    return index_file_path(folder_path, folder_name(folder_path, vault_name), prefix)


def is_index_file(entity: VaultEntity, prefix: str, vault_name: str) -> bool:
    """An index document is named '<prefix><name of its folder>'."""
    if not entity.is_file:
        return False
    return entity.basename == f"{prefix}{folder_name(entity.parent_path, vault_name)}"


def index_file_ref_for(vault: Vault, path: str, prefix: str) -> str:
    """Path of the index document listing `path`, or '' if none applies.

    Missing paths and index documents themselves have no index. When the
    parent folder no longer resolves (e.g. a subfolder moved away mid-pass)
    there is nothing to update either.
    """
    entity = vault.resolve(path)
    if entity is None or is_index_file(entity, prefix, vault.name):
        return ""

    parent_path = parent_folder(path)
    if parent_path and vault.resolve(parent_path) is None:
        logger.debug(f"Parent folder of {path} is gone, skipping")
        return ""

    return index_file_path(parent_path, parent_folder_name(path, vault.name), prefix)
