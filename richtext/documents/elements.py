"""Document model shared by every stage of the block-to-HTML pipeline.

A document snapshot arrives as a sequence of `RawBlock`s, each carrying its text and one
`CharacterStyleSet` per character. Those are condensed into `Block`s made of `Chunk`s (style runs)
and list items are then gathered under `WrapperBlock`s. All of these are immutable; "update"
methods return a new value and leave the receiver untouched.
"""

from __future__ import annotations

import dataclasses as dc
from typing import FrozenSet, Iterable, Sequence, Tuple, Union

from typing_extensions import TypeAlias

from richtext.utils import lazyproperty

CharacterStyleSet: TypeAlias = FrozenSet[str]
"""Inline-style identifiers applied to a single character, e.g. `frozenset({"BOLD"})`."""

EMPTY_STYLE: CharacterStyleSet = frozenset()


class BlockType:
    UNSTYLED = "unstyled"
    HEADER_ONE = "header-one"
    HEADER_TWO = "header-two"
    HEADER_THREE = "header-three"
    HEADER_FOUR = "header-four"
    HEADER_FIVE = "header-five"
    HEADER_SIX = "header-six"
    BLOCKQUOTE = "blockquote"
    UNORDERED_LIST_ITEM = "unordered-list-item"
    ORDERED_LIST_ITEM = "ordered-list-item"
    CODE_BLOCK = "code-block"


class WrapperType:
    UNORDERED_LIST = "unordered-list"
    ORDERED_LIST = "ordered-list"


class InlineStyle:
    BOLD = "BOLD"
    ITALIC = "ITALIC"
    UNDERLINE = "UNDERLINE"
    CODE = "CODE"


def style_set(*styles: str) -> CharacterStyleSet:
    """Construct a character style-set, e.g. `style_set(InlineStyle.BOLD, InlineStyle.ITALIC)`."""
    return frozenset(styles) if styles else EMPTY_STYLE


@dc.dataclass(frozen=True)
class RawBlock:
    """One block of an editor content snapshot, exactly as the editing surface hands it over.

    `styles` holds one style-set per character of `text`. The length check happens here so every
    later stage can rely on the two sequences lining up.
    """

    type: str
    text: str = ""
    depth: int = 0
    styles: Tuple[CharacterStyleSet, ...] = ()

    def __post_init__(self):
        # -- accept any sequence of iterables but store a tuple of frozensets --
        styles = tuple(s if isinstance(s, frozenset) else frozenset(s) for s in self.styles)
        object.__setattr__(self, "styles", styles)
        if self.depth < 0:
            raise ValueError(f"RawBlock depth must be >= 0, got {self.depth}")
        if len(self.styles) != len(self.text):
            raise ValueError(
                f"RawBlock has {len(self.text)} characters but {len(self.styles)} style-sets; "
                "there must be exactly one style-set per character.",
            )

    @classmethod
    def unstyled_text(cls, type: str, text: str, depth: int = 0) -> RawBlock:
        """A block whose characters carry no inline style at all."""
        return cls(type=type, text=text, depth=depth, styles=(EMPTY_STYLE,) * len(text))


@dc.dataclass(frozen=True)
class Chunk:
    """A maximal run of characters sharing the same inline styles (a "style run")."""

    text: str = ""
    style: CharacterStyleSet = EMPTY_STYLE

    def add_text(self, more_text: str) -> Chunk:
        return dc.replace(self, text=f"{self.text}{more_text}")

    def has_style(self, style: str) -> bool:
        return style in self.style


@dc.dataclass(frozen=True)
class Block:
    """A paragraph-level unit (paragraph, heading, quote, list item) made of style runs."""

    type: str
    chunks: Tuple[Chunk, ...] = ()

    def add_chunk(self, chunk: Chunk) -> Block:
        return dc.replace(self, chunks=self.chunks + (chunk,))

    def add_text_to_last_chunk(self, text: str) -> Block:
        """Extend the last chunk of this block with `text`.

        Raises `ValueError` when the block has no chunk yet since there is no style to extend.
        """
        if not self.chunks:
            raise ValueError("Block has no chunk to add text to")
        return dc.replace(self, chunks=self.chunks[:-1] + (self.chunks[-1].add_text(text),))

    @lazyproperty
    def text(self) -> str:
        """Concatenated text of all chunks, identical to the source block's text."""
        return "".join(chunk.text for chunk in self.chunks)


@dc.dataclass(frozen=True)
class WrapperBlock:
    """One level of list nesting, rendered as `<ul>` or `<ol>` depending on `type`.

    A `WrapperBlock` child holds the items one level deeper than this wrapper and belongs to the
    list item before it, when there is one.
    """

    type: str
    children: Tuple[Node, ...] = ()

    def add_child(self, child: Node) -> WrapperBlock:
        return dc.replace(self, children=self.children + (child,))

    def replace_last_child(self, child: Node) -> WrapperBlock:
        if not self.children:
            raise ValueError("WrapperBlock has no child to replace")
        return dc.replace(self, children=self.children[:-1] + (child,))

    @property
    def last_child(self) -> Node | None:
        return self.children[-1] if self.children else None

    @lazyproperty
    def depth(self) -> int:
        """Current nesting depth below this wrapper.

        This is the length of the chain of wrappers reached by repeatedly taking the last child
        while that child is itself a `WrapperBlock`. A wrapper whose last child is a `Block` has
        depth 0.
        """
        depth = 0
        node = self.last_child
        while isinstance(node, WrapperBlock):
            depth += 1
            node = node.last_child
        return depth


Node: TypeAlias = Union[Block, WrapperBlock]
"""A top-level or wrapper-child node of a document tree."""

Document: TypeAlias = Sequence[Node]
"""Ordered top-level nodes of one document, built fresh for each render call."""


def iter_blocks(nodes: Iterable[Node]) -> Iterable[Block]:
    """Generate every `Block` in `nodes`, depth first, in document order."""
    for node in nodes:
        if isinstance(node, WrapperBlock):
            yield from iter_blocks(node.children)
        else:
            yield node
