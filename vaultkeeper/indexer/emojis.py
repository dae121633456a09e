"""Emoji lookup by name."""

from collections.abc import Callable

import emoji

# Resolves an emoji name such as 'page_facing_up' to its glyph, '' if unknown
EmojiLookup = Callable[[str], str]


def lookup_emoji(name: str) -> str:
    """Resolve an emoji name, with or without surrounding colons."""
    name = name.strip().strip(":")
    if not name:
        return ""

    alias = f":{name}:"
    glyph = emoji.emojize(alias, language="alias")
    return "" if glyph == alias else glyph
