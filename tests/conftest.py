"""Shared test fixtures."""

from pathlib import Path

import pytest

from vaultkeeper.storage import IndexSettings, SettingsStorage
from vaultkeeper.vault import LocalVault


def write_note(vault_path: Path, rel_path: str, content: str = "") -> Path:
    """Create a note (and its folders) inside the vault."""
    path = vault_path / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def empty_vault(tmp_path: Path) -> Path:
    """Create an empty vault directory named 'vault'."""
    vault = tmp_path / "vault"
    vault.mkdir()
    return vault


@pytest.fixture
def tmp_vault(empty_vault: Path) -> Path:
    """Create a temporary vault directory with sample notes."""
    write_note(empty_vault, "notes.md", "# Notes\n")
    write_note(empty_vault, "Projects/Alpha/notes.md", "Alpha notes")
    write_note(empty_vault, "Projects/Beta/plan.md", "Beta plan")

    # Hidden folders and attachments are not part of the vault
    write_note(empty_vault, ".obsidian/workspace.md", "hidden")
    (empty_vault / "Projects" / "diagram.png").write_bytes(b"\x89PNG")

    return empty_vault


@pytest.fixture
def settings() -> IndexSettings:
    """Index settings with a short, readable prefix."""
    return IndexSettings(index_prefix="Index_")


@pytest.fixture
def vault(tmp_vault: Path) -> LocalVault:
    return LocalVault(tmp_vault)


@pytest.fixture
def settings_storage(empty_vault: Path) -> SettingsStorage:
    storage = SettingsStorage(empty_vault)
    storage.update(index_prefix="Index_")
    return storage
