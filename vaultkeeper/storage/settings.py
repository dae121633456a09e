"""Index settings storage."""

import json
import logging
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class SortOrder(str, Enum):
    """Ordering of the link lines of an index document."""

    ASC = "asc"
    DESC = "desc"


class IndexItemStyle(str, Enum):
    """How a single link line is rendered."""

    PURE_LINK = "pure_link"  # [[target]]
    LIST = "list"  # - [[target]]
    CHECKBOX = "checkbox"  # - [ ] [[target]]


FOLDER_LIST_FIELDS = ("folders_included", "folders_excluded")


def normalize_folder_list(value: str) -> str:
    """Normalize a folder list: commas become newlines, entries are trimmed, leading '/' removed."""
    folders = []
    for folder in value.replace(",", "\n").split("\n"):
        folder = folder.strip()
        if folder.startswith("/"):
            folder = folder[1:]
        folders.append(folder)
    return "\n".join(folders)


def split_folder_list(value: str) -> list[str]:
    """Split a newline-separated folder list, dropping empty entries."""
    return [f.strip() for f in value.split("\n") if f.strip()]


@dataclass
class IndexSettings:
    """User-configurable settings for index generation."""

    folders_included: str = ""
    folders_excluded: str = ""
    index_prefix: str = "_Index_of_"
    template_file: str = ""
    front_matter_separator: str = "---"
    sort_order: SortOrder = SortOrder.ASC
    index_item_style: IndexItemStyle = IndexItemStyle.PURE_LINK
    embed_sub_index: bool = False
    clean_path: bool = True
    enable_emojis: bool = False
    folder_emoji: str = ":card_index_dividers:"
    file_emoji: str = ":page_facing_up:"
    index_tag_enabled: bool = True
    index_tag_value: str = "MOC"
    index_tag_label: str = "tags"
    index_tag_separator: str = ", "
    add_square_brackets: bool = True

    def __post_init__(self) -> None:
        self.sort_order = SortOrder(self.sort_order)
        self.index_item_style = IndexItemStyle(self.index_item_style)

    @property
    def included_folders(self) -> list[str]:
        return split_folder_list(self.folders_included)

    @property
    def excluded_folders(self) -> list[str]:
        return split_folder_list(self.folders_excluded)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["sort_order"] = self.sort_order.value
        data["index_item_style"] = self.index_item_style.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "IndexSettings":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class SettingsStorage:
    """Manages index settings stored in .vaultkeeper/settings.json."""

    def __init__(self, vault_path: Path) -> None:
        self.vault_path = vault_path
        self.keeper_dir = vault_path / ".vaultkeeper"
        self.settings_file = self.keeper_dir / "settings.json"
        self._settings: IndexSettings | None = None

    def get(self) -> IndexSettings:
        """Get current settings, loading from disk or creating defaults."""
        if self._settings is None:
            self._settings = self._load()
        return self._settings

    def update(self, **kwargs) -> IndexSettings:
        """Update specific settings and save to disk."""
        data = self.get().to_dict()

        # Update only known fields
        for key, value in kwargs.items():
            if key not in data:
                logger.warning(f"Ignoring unknown setting: {key}")
                continue
            if key in FOLDER_LIST_FIELDS:
                value = normalize_folder_list(value)
            data[key] = value

        # Raises ValueError on an invalid enum value, leaving settings untouched
        settings = IndexSettings.from_dict(data)

        self._save(settings)
        self._settings = settings
        return settings

    def _load(self) -> IndexSettings:
        """Load settings from disk, creating defaults if missing."""
        if not self.settings_file.exists():
            settings = IndexSettings()
            self._save(settings)
            return settings

        try:
            data = json.loads(self.settings_file.read_text(encoding="utf-8"))
            return IndexSettings.from_dict(data)
        except (json.JSONDecodeError, OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to load settings, using defaults: {e}")
            return IndexSettings()

    def _save(self, settings: IndexSettings) -> None:
        """Save settings to disk."""
        try:
            self.keeper_dir.mkdir(parents=True, exist_ok=True)
            self.settings_file.write_text(
                json.dumps(settings.to_dict(), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
