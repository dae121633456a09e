"""Filesystem-backed vault."""

import logging
import shutil
from pathlib import Path

from .base import Vault
from .entities import VaultEntity, VaultFile, VaultFolder

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Normalize a vault path to '/' separators without leading or trailing slashes."""
    return path.replace("\\", "/").strip("/")


class LocalVault(Vault):
    """A vault stored as a directory of markdown files."""

    def __init__(self, vault_path: Path) -> None:
        self.vault_path = vault_path.resolve()

    @property
    def name(self) -> str:
        return self.vault_path.name

    def _validate_path(self, path: str) -> Path:
        """Validate that path is within vault and return resolved path."""
        path = normalize_path(path)
        full_path = (self.vault_path / path).resolve()

        # Security check: ensure path is within vault
        try:
            full_path.relative_to(self.vault_path)
        except ValueError as e:
            raise ValueError(f"Path escapes vault: {path}") from e

        return full_path

    def _relative(self, full_path: Path) -> str:
        rel = full_path.relative_to(self.vault_path).as_posix()
        return "" if rel == "." else rel

    def _is_hidden(self, full_path: Path) -> bool:
        rel = full_path.relative_to(self.vault_path)
        return any(part.startswith(".") for part in rel.parts)

    def _entity(self, full_path: Path) -> VaultEntity | None:
        if self._is_hidden(full_path):
            return None

        rel_path = self._relative(full_path)
        if full_path.is_dir():
            if rel_path == "":
                return VaultFolder(path="", name=self.name, parent_path=None)
            return VaultFolder(
                path=rel_path,
                name=full_path.name,
                parent_path=self._relative(full_path.parent),
            )

        if full_path.is_file() and full_path.suffix == ".md":
            return VaultFile(
                path=rel_path,
                name=full_path.name,
                parent_path=self._relative(full_path.parent),
            )

        return None

    def resolve(self, path: str) -> VaultEntity | None:
        try:
            full_path = self._validate_path(path)
        except ValueError:
            return None
        if not full_path.exists():
            return None
        return self._entity(full_path)

    def list_documents(self) -> list[VaultFile]:
        documents = []
        for md_file in self.vault_path.rglob("*.md"):
            if not md_file.is_file() or self._is_hidden(md_file):
                continue
            entity = self._entity(md_file)
            if entity is not None:
                documents.append(entity)
        return documents

    def list_children(self, folder: VaultFolder) -> list[VaultEntity]:
        folder_path = self._validate_path(folder.path)
        if not folder_path.is_dir():
            return []

        children = []
        for item in sorted(folder_path.iterdir()):
            entity = self._entity(item)
            if entity is not None:
                children.append(entity)
        return children

    async def read(self, file: VaultFile) -> str:
        return self._validate_path(file.path).read_text(encoding="utf-8")

    async def write(self, file: VaultFile, content: str) -> None:
        self._validate_path(file.path).write_text(content, encoding="utf-8")

    async def create(self, path: str, content: str) -> VaultFile:
        full_path = self._validate_path(path)
        if full_path.exists():
            raise FileExistsError(f"Already exists: {normalize_path(path)}")

        # Create parent directories if needed
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
        logger.debug(f"Created {normalize_path(path)}")

        entity = self._entity(full_path)
        if not isinstance(entity, VaultFile):
            raise ValueError(f"Not a markdown document: {normalize_path(path)}")
        return entity

    async def delete(self, entity: VaultEntity) -> None:
        full_path = self._validate_path(entity.path)
        if not full_path.exists():
            raise FileNotFoundError(f"Not found: {entity.path}")

        if entity.is_file:
            full_path.unlink()
        else:
            shutil.rmtree(full_path)
        logger.debug(f"Deleted {entity.path}")

    async def rename(self, entity: VaultEntity, new_path: str) -> VaultEntity:
        source = self._validate_path(entity.path)
        target = self._validate_path(new_path)
        if target.exists():
            raise FileExistsError(f"Already exists: {normalize_path(new_path)}")

        target.parent.mkdir(parents=True, exist_ok=True)
        source.rename(target)
        logger.debug(f"Renamed {entity.path} -> {normalize_path(new_path)}")

        renamed = self._entity(target)
        if renamed is None:
            raise FileNotFoundError(f"Renamed entity not visible: {normalize_path(new_path)}")
        return renamed
