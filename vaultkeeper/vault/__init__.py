"""Vault access - entities, storage backends and change notifications."""

from .base import IndexOnFolderError, Vault, VaultError
from .entities import VaultEntity, VaultFile, VaultFolder
from .local import LocalVault, normalize_path
from .watcher import Debouncer, VaultWatcher

__all__ = [
    "Debouncer",
    "IndexOnFolderError",
    "LocalVault",
    "Vault",
    "VaultEntity",
    "VaultError",
    "VaultFile",
    "VaultFolder",
    "VaultWatcher",
    "normalize_path",
]
