"""Vault entities - files and folders as a tagged variant."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class VaultFolder:
    """A folder in the vault. The root folder has an empty path."""

    path: str
    name: str
    parent_path: str | None = None  # None only for the root
    kind: Literal["folder"] = "folder"

    @property
    def is_file(self) -> bool:
        return False

    @property
    def is_root(self) -> bool:
        return self.path == ""


@dataclass(frozen=True)
class VaultFile:
    """A markdown document in the vault."""

    path: str
    name: str  # File name including extension
    parent_path: str
    kind: Literal["file"] = "file"

    @property
    def is_file(self) -> bool:
        return True

    @property
    def basename(self) -> str:
        """File name without the .md extension."""
        return self.name[:-3] if self.name.endswith(".md") else self.name


VaultEntity = VaultFile | VaultFolder
