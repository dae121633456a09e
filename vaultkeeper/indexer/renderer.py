"""Rendering of index document bodies."""

from collections.abc import Iterable
from dataclasses import dataclass

from vaultkeeper.storage import IndexItemStyle, IndexSettings, SortOrder

from .emojis import EmojiLookup, lookup_emoji

# Markers delimiting the generated link list inside an index document
BEGIN_MARKER = "%% vaultkeeper: begin of the generated index %%"
END_MARKER = "%% vaultkeeper: end of the generated index %%"

STYLE_PREFIXES = {
    IndexItemStyle.PURE_LINK: "",
    IndexItemStyle.LIST: "- ",
    IndexItemStyle.CHECKBOX: "- [ ] ",
}


@dataclass(frozen=True)
class ChildEntry:
    """A direct child of a folder as it appears in the folder's index."""

    path: str
    is_folder: bool
    target: str  # Document the link points to (a subfolder's own index)
    target_is_index: bool = False


def format_link_target(target: str, clean_path: bool) -> str:
    """Link text for a target; clean paths show only the leaf name."""
    if not clean_path:
        return target
    clean = target[:-3] if target.endswith(".md") else target
    return f"{clean}|{clean.split('/')[-1]}"


def emoji_prefix(settings: IndexSettings, is_folder: bool, emoji_lookup: EmojiLookup) -> str:
    if not settings.enable_emojis:
        return ""
    return emoji_lookup(settings.folder_emoji if is_folder else settings.file_emoji)


def render_entry(
    entry: ChildEntry,
    settings: IndexSettings,
    emoji_lookup: EmojiLookup = lookup_emoji,
) -> str:
    """Render one link line: style prefix, optional glyph, embed marker, link.

    The space after the glyph is only written when a glyph resolved, so
    lines without emojis carry no stray leading space.
    """
    glyph = emoji_prefix(settings, entry.is_folder, emoji_lookup)
    embed = "!" if settings.embed_sub_index and entry.target_is_index else ""
    link = format_link_target(entry.target, settings.clean_path)

    line = STYLE_PREFIXES[settings.index_item_style]
    if glyph:
        line += f"{glyph} "
    return f"{line}{embed}[[{link}]]"


def render_entries(
    entries: Iterable[ChildEntry],
    settings: IndexSettings,
    emoji_lookup: EmojiLookup = lookup_emoji,
) -> list[str]:
    return [render_entry(entry, settings, emoji_lookup) for entry in entries]


def sort_lines(lines: list[str], sort_order: SortOrder) -> list[str]:
    return sorted(lines, reverse=sort_order == SortOrder.DESC)


def build_index_body(
    subfolders: Iterable[ChildEntry],
    files: Iterable[ChildEntry],
    settings: IndexSettings,
    index_path: str = "",
    emoji_lookup: EmojiLookup = lookup_emoji,
) -> str:
    """Render subfolders then files, sort the lines and join them.

    The index document at `index_path` never lists itself.
    """
    lines = render_entries(subfolders, settings, emoji_lookup)
    lines += render_entries(
        (f for f in files if f.path != index_path),
        settings,
        emoji_lookup,
    )
    return "\n".join(sort_lines(lines, settings.sort_order))


def update_index_content(current_body: str, index_body: str) -> str:
    """Place the generated list between the markers, keeping surrounding text.

    A body without markers gets the marked block appended.
    """
    block = f"{BEGIN_MARKER}\n{index_body}\n{END_MARKER}" if index_body else f"{BEGIN_MARKER}\n{END_MARKER}"

    start = current_body.find(BEGIN_MARKER)
    end = current_body.find(END_MARKER, start) if start != -1 else -1
    if start != -1 and end != -1:
        return current_body[:start] + block + current_body[end + len(END_MARKER) :]

    if not current_body.strip():
        return f"{block}\n"

    separator = "" if current_body.endswith("\n") else "\n"
    return f"{current_body}{separator}{block}\n"
