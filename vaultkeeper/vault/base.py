"""Vault capability interface consumed by the index keeper."""

from abc import ABC, abstractmethod

from .entities import VaultEntity, VaultFile, VaultFolder


class VaultError(Exception):
    """Base error for vault operations."""


class IndexOnFolderError(VaultError):
    """An index document would be created on a path that is a folder."""


class Vault(ABC):
    """Storage backend holding the documents of a vault.

    Lookups are synchronous (they read metadata only). Document I/O is
    asynchronous so a sync pass can suspend at every read or write.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the vault, used as the root folder's name."""

    @abstractmethod
    def resolve(self, path: str) -> VaultEntity | None:
        """Resolve a vault-relative path to a file or folder."""

    @abstractmethod
    def list_documents(self) -> list[VaultFile]:
        """List every markdown document in the vault."""

    @abstractmethod
    def list_children(self, folder: VaultFolder) -> list[VaultEntity]:
        """List the direct children of a folder."""

    @abstractmethod
    async def read(self, file: VaultFile) -> str:
        pass

    @abstractmethod
    async def write(self, file: VaultFile, content: str) -> None:
        pass

    @abstractmethod
    async def create(self, path: str, content: str) -> VaultFile:
        pass

    @abstractmethod
    async def delete(self, entity: VaultEntity) -> None:
        pass

    @abstractmethod
    async def rename(self, entity: VaultEntity, new_path: str) -> VaultEntity:
        pass
