"""Utilities that ease unit-testing."""

from __future__ import annotations

from typing import Iterable, Sequence

from lxml.html import fragment_fromstring

from richtext.documents.elements import (
    EMPTY_STYLE,
    BlockType,
    CharacterStyleSet,
    RawBlock,
)


def raw_block(
    text: str,
    type: str = BlockType.UNSTYLED,
    depth: int = 0,
    styles: Sequence[Iterable[str]] | None = None,
) -> RawBlock:
    """A raw block with `styles` defaulting to no style on every character."""
    return RawBlock(
        type=type,
        text=text,
        depth=depth,
        styles=tuple(styles) if styles is not None else (EMPTY_STYLE,) * len(text),
    )


def ul_item(text: str, depth: int = 0) -> RawBlock:
    return raw_block(text, BlockType.UNORDERED_LIST_ITEM, depth)


def ol_item(text: str, depth: int = 0) -> RawBlock:
    return raw_block(text, BlockType.ORDERED_LIST_ITEM, depth)


def uniform(style: CharacterStyleSet, text: str) -> tuple[CharacterStyleSet, ...]:
    """The same style-set for every character of `text`."""
    return (style,) * len(text)


def tag_tree(html: str) -> list[tuple[str, int]]:
    """(tag, nesting-level) pairs for every element in `html`, in document order.

    lxml repairs misnested markup silently rather than rejecting it, so callers compare the whole
    tree against the one they expect; a fragment that is not properly nested parses to a different
    tree. `html` is wrapped in a `<div>` because it may hold more than one top-level element; that
    div is not reported.
    """
    root = fragment_fromstring(f"<div>{html}</div>")

    def walk(element, level: int):
        for child in element:
            yield child.tag, level
            yield from walk(child, level + 1)

    return list(walk(root, 0))
