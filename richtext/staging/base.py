from __future__ import annotations

import bisect
import json
from typing import Any, Iterable, Mapping, Sequence, Union

from richtext.documents.elements import EMPTY_STYLE, CharacterStyleSet, RawBlock
from richtext.utils import exactly_one

# ================================================================================================
# DESERIALIZERS
# ================================================================================================
# The editor serializes its content as `{"blocks": [...], "entityMap": {...}}` where each block
# dict has `text`, `type`, `depth` and `inlineStyleRanges`. Style ranges are expressed as
# `{"offset", "length", "style"}` in UTF-16 code units, the string indexing of the editor's host
# language. A block dict may instead carry an explicit `styles` list with one list of style names
# per character.
# ================================================================================================


def raw_blocks_from_dicts(
    content: Union[Mapping[str, Any], Iterable[Mapping[str, Any]]],
) -> list[RawBlock]:
    """Convert a raw-content dict (or a bare list of block dicts) to a list of raw blocks.

    Unknown block types are passed through untouched; whether a type is supported is decided by
    the tag registry at render time.

    Raises `ValueError` naming the offending block when its styles cannot be read.
    """
    block_dicts = content.get("blocks", []) if isinstance(content, Mapping) else content
    return [
        _raw_block_from_dict(item, label=item.get("key", f"#{i}"))
        for i, item in enumerate(block_dicts)
    ]


def raw_blocks_from_json(
    filename: str = "", text: str = "", encoding: str = "utf-8"
) -> list[RawBlock]:
    """Loads a list of raw blocks from a raw-content JSON file or a string."""
    exactly_one(filename=filename, text=text)

    if filename:
        with open(filename, encoding=encoding) as f:
            content = json.load(f)
    else:
        content = json.loads(text)

    return raw_blocks_from_dicts(content)


def _raw_block_from_dict(item: Mapping[str, Any], label: str) -> RawBlock:
    text: str = item.get("text", "")
    if "styles" in item:
        styles = tuple(_style_set_from_names(names, label) for names in item["styles"])
    else:
        styles = _styles_from_ranges(text, item.get("inlineStyleRanges", []), label)
    return RawBlock(
        type=item.get("type", "unstyled"),
        text=text,
        depth=int(item.get("depth", 0)),
        styles=styles,
    )


def _style_set_from_names(names: Iterable[str], label: str) -> CharacterStyleSet:
    # -- a bare string is iterable too and would become a set of its letters --
    if isinstance(names, str):
        raise ValueError(
            f"block {label}: each entry of 'styles' must be a list of style names, got {names!r}"
        )
    return frozenset(names)


def _styles_from_ranges(
    text: str, style_ranges: Sequence[Mapping[str, Any]], label: str
) -> tuple[CharacterStyleSet, ...]:
    """Expand `{"offset", "length", "style"}` ranges into one style-set per character.

    Characters with the same styles share one frozenset, mirroring how the editor shares its
    per-character metadata objects.
    """
    char_styles: list[set[str]] = [set() for _ in text]
    index_of = _utf16_offset_to_index(text)
    for style_range in style_ranges:
        try:
            offset, length, style = (
                style_range["offset"],
                style_range["length"],
                style_range["style"],
            )
        except KeyError as e:
            raise ValueError(f"block {label}: style range {style_range!r} has no {e}") from e
        for i in range(index_of(offset), index_of(offset + length)):
            char_styles[i].add(style)

    interned: dict[CharacterStyleSet, CharacterStyleSet] = {EMPTY_STYLE: EMPTY_STYLE}
    return tuple(interned.setdefault(frozenset(s), frozenset(s)) for s in char_styles)


def _utf16_offset_to_index(text: str):
    """Return a function mapping a UTF-16 code-unit offset in `text` to a `str` index.

    Characters outside the Basic Multilingual Plane take two UTF-16 code units but a single `str`
    index. Offsets past the end of `text` clamp to `len(text)`.
    """
    boundaries: list[int] = []
    offset = 0
    for ch in text:
        boundaries.append(offset)
        offset += 2 if ord(ch) > 0xFFFF else 1

    def index_of(utf16_offset: int) -> int:
        return bisect.bisect_left(boundaries, utf16_offset)

    return index_of
