"""Index generation - keeps one index document per folder in sync."""

from .changes import RenamePlan, diff, indexes_to_update, infer_folder_rename, vault_snapshot
from .emojis import lookup_emoji
from .frontmatter import extract, has_frontmatter, regenerate, strip
from .keeper import Colors, IndexKeeper, KeeperState, SyncReport
from .paths import (
    folder_name,
    index_file_path,
    index_file_ref_for,
    inner_index_path,
    is_index_file,
    parent_folder,
    parent_folder_name,
)
from .policy import is_allowed
from .renderer import ChildEntry, build_index_body, render_entries, update_index_content

__all__ = [
    "ChildEntry",
    "Colors",
    "IndexKeeper",
    "KeeperState",
    "RenamePlan",
    "SyncReport",
    "build_index_body",
    "diff",
    "extract",
    "folder_name",
    "has_frontmatter",
    "index_file_path",
    "index_file_ref_for",
    "indexes_to_update",
    "infer_folder_rename",
    "inner_index_path",
    "is_allowed",
    "is_index_file",
    "lookup_emoji",
    "parent_folder",
    "parent_folder_name",
    "regenerate",
    "render_entries",
    "strip",
    "update_index_content",
    "vault_snapshot",
]
