"""Persistent storage for index settings."""

from .settings import (
    IndexItemStyle,
    IndexSettings,
    SettingsStorage,
    SortOrder,
    normalize_folder_list,
    split_folder_list,
)

__all__ = [
    "IndexItemStyle",
    "IndexSettings",
    "SettingsStorage",
    "SortOrder",
    "normalize_folder_list",
    "split_folder_list",
]
