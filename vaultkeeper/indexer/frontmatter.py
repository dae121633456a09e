"""Frontmatter handling for index documents.

The metadata block is delimited by a configurable separator and spans from
its first to its second occurrence. Only the index tag is ever touched; the
rest of the block is passed through as the user wrote it.
"""

import logging
import re

import yaml

from vaultkeeper.storage import IndexSettings

logger = logging.getLogger(__name__)

BRACKETED_TAG = re.compile(r"\[([^\[\]]*)\]")


def has_frontmatter(content: str, separator: str) -> bool:
    """True if the separator occurs at least twice."""
    if not separator:
        return False
    return content.count(separator) >= 2


def extract(content: str, separator: str) -> str:
    """Return the metadata block including both separators, or ''."""
    if not has_frontmatter(content, separator):
        return ""
    return f"{separator}{content.split(separator)[1]}{separator}"


def strip(content: str, separator: str) -> str:
    """Remove the metadata block from the content."""
    block = extract(content, separator)
    if not block:
        return content
    return content.replace(block, "", 1)


def regenerate(settings: IndexSettings, content: str) -> str:
    """Return the metadata block to write back, with the index tag ensured.

    Content without frontmatter yields ''. Applying this to its own output
    gives the same block again.
    """
    separator = settings.front_matter_separator
    if not has_frontmatter(content, separator):
        return ""

    if not settings.index_tag_enabled or not settings.index_tag_value.strip():
        return extract(content, separator)

    inner = content.split(separator)[1]
    return f"{separator}{_ensure_tag(settings, inner)}{separator}"


def _is_label_line(line: str, label: str) -> bool:
    return line.startswith(f"{label}:")


def _clean_tag(tag: str) -> str:
    tag = tag.strip().strip("\"'")
    if tag.startswith("[") and tag.endswith("]"):
        tag = tag[1:-1]
    return tag.strip().strip("\"'")


def _split_inline(settings: IndexSettings, inline: str) -> list[str]:
    """Split an inline tag value like 'a, b', 'a b', '[a], [b]', '[a] [b]' or '[a, b]'."""
    inline = inline.strip()

    groups = BRACKETED_TAG.findall(inline)
    if groups and not BRACKETED_TAG.sub("", inline).strip(f" ,{settings.index_tag_separator}"):
        # Bracketed tags only: each group holds one tag or a YAML flow list
        raw = [t for group in groups for t in group.split(",")]
    else:
        delimiter = settings.index_tag_separator.strip()
        if delimiter:
            raw = inline.split(delimiter)
        else:
            raw = [t.strip(",") for t in inline.split()]

    tags = [_clean_tag(t) for t in raw]
    return [t for t in tags if t]


def _format_tags(settings: IndexSettings, tags: list[str]) -> str:
    if settings.add_square_brackets:
        tags = [f"[{t}]" for t in tags]
    return settings.index_tag_separator.join(tags)


def _block_items(lines: list[str], label_index: int) -> int:
    """Index just past the '- item' lines following the label line."""
    end = label_index + 1
    while end < len(lines) and lines[end].lstrip().startswith("- "):
        end += 1
    return end


def _existing_tags(settings: IndexSettings, inner: str, lines: list[str], label_index: int) -> list[str]:
    label = settings.index_tag_label
    try:
        data = yaml.safe_load(inner)
    except yaml.YAMLError:
        data = None

    if isinstance(data, dict) and label in data:
        value = data[label]
        if value is None:
            return []
        if isinstance(value, list):
            flattened = []
            for item in value:
                if isinstance(item, list):
                    flattened.extend(str(i) for i in item)
                else:
                    flattened.append(str(item))
            return [_clean_tag(t) for t in flattened]
        return _split_inline(settings, str(value))

    # Not parseable as YAML (e.g. '[a], [b]'), read the lines directly
    inline = lines[label_index].split(":", 1)[1]
    tags = _split_inline(settings, inline)
    for line in lines[label_index + 1 : _block_items(lines, label_index)]:
        tags.append(_clean_tag(line.lstrip()[2:]))
    return tags


def _ensure_tag(settings: IndexSettings, inner: str) -> str:
    label = settings.index_tag_label
    value = settings.index_tag_value.strip()
    lines = inner.split("\n")

    label_index = next((i for i, line in enumerate(lines) if _is_label_line(line, label)), None)

    if label_index is None:
        # Keep the trailing newline before the closing separator
        insert_at = len(lines) - 1 if len(lines) > 1 and not lines[-1].strip() else len(lines)
        lines.insert(insert_at, f"{label}: {_format_tags(settings, [value])}")
        return "\n".join(lines)

    if value in _existing_tags(settings, inner, lines, label_index):
        return inner

    inline = lines[label_index].split(":", 1)[1].strip()
    if inline:
        tags = _split_inline(settings, inline) + [value]
        lines[label_index] = f"{label}: {_format_tags(settings, tags)}"
    else:
        end = _block_items(lines, label_index)
        if end > label_index + 1:
            item = lines[label_index + 1]
            indent = item[: len(item) - len(item.lstrip())]
        else:
            indent = "  "
        lines.insert(end, f"{indent}- {value}")

    logger.debug(f"Added tag '{value}' to frontmatter")
    return "\n".join(lines)
