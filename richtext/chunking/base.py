"""Condense per-character style annotations into style runs ("chunks").

A raw block carries one style-set per character. Rendering wants the opposite view: contiguous
runs of text that share a style-set, so each run can be wrapped in its inline tags exactly once.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from richtext.documents.elements import Block, CharacterStyleSet, Chunk, RawBlock


def group_by_styles(text: str, styles: Sequence[CharacterStyleSet]) -> tuple[Chunk, ...]:
    """Split `text` into maximal runs of characters having equal style-sets.

    input:

        "1234", [{BOLD}, {BOLD}, {BOLD, ITALIC}, {}]

    output:

        (Chunk("12", {BOLD}), Chunk("3", {BOLD, ITALIC}), Chunk("4", {}))

    Style-sets are compared by value, so two separately-constructed but equal sets continue the
    same run. Concatenating the chunk texts always reproduces `text`. Empty text produces no
    chunks.
    """
    if len(text) != len(styles):
        raise ValueError(
            f"text has {len(text)} characters but {len(styles)} style-sets were provided",
        )
    return _add_styled_text(Block(type=""), text, styles).chunks


def _add_styled_text(block: Block, text: str, styles: Sequence[CharacterStyleSet]) -> Block:
    """Return a copy of `block` with each character of `text` added to its style runs."""
    for char, style in zip(text, styles):
        # -- extend the open run while the style-set stays the same, otherwise open a new one --
        if block.chunks and block.chunks[-1].style == style:
            block = block.add_text_to_last_chunk(char)
        else:
            block = block.add_chunk(Chunk(text=char, style=frozenset(style)))
    return block


def transform_block(raw_block: RawBlock) -> Block:
    """Transforms one raw editor block into the internal `Block` representation.

    Only the type and style runs carry over; depth is consumed separately by wrapper assembly.
    """
    return _add_styled_text(Block(type=raw_block.type), raw_block.text, raw_block.styles)


def transform_blocks(raw_blocks: Iterable[RawBlock]) -> Iterator[tuple[Block, int]]:
    """Generate a `(Block, depth)` pair for each raw block, in document order."""
    for raw_block in raw_blocks:
        yield transform_block(raw_block), raw_block.depth
