"""Gather list-item blocks into (possibly nested) wrapper blocks.

The editor models a list as a flat run of list-item blocks, each carrying a nesting `depth`. HTML
needs the nesting spelled out, so consecutive list items are folded into a `WrapperBlock` tree:

    [A(0), B(1), C(1), D(0)]  ->  Wrapper[A, Wrapper[B, C], D]

Every node is immutable, so folding an item into an already-open nested wrapper rebuilds each
wrapper on the path from the top-level wrapper down to the level the item lands in (a path copy)
and swaps the rebuilt top-level wrapper in as the last document node.
"""

from __future__ import annotations

from typing import Iterable, Optional

from richtext.documents.elements import Block, Node, WrapperBlock
from richtext.documents.registry import DEFAULT_REGISTRY, TagRegistry
from richtext.logger import logger


def assemble_wrappers(
    blocks: Iterable[tuple[Block, int]], registry: TagRegistry = DEFAULT_REGISTRY
) -> list[Node]:
    """Fold `(block, depth)` pairs into the top-level nodes of a document.

    A block that is not a list item becomes a top-level node of its own and closes any open list,
    so a list item after it starts a fresh wrapper. Depth is ignored for such blocks.
    """
    return _WrapperAssembler(registry).assemble(blocks)


class _WrapperAssembler:
    """Single-use folding state for one document."""

    def __init__(self, registry: TagRegistry):
        self._registry = registry
        self._document: list[Node] = []

    def assemble(self, blocks: Iterable[tuple[Block, int]]) -> list[Node]:
        for block, depth in blocks:
            self._add(block, depth)
        return self._document

    def _add(self, block: Block, depth: int) -> None:
        wrapper_type = self._registry.wrapper_type_for(block.type)
        if wrapper_type is None:
            self._document.append(block)
            return

        last = self._document[-1] if self._document else None
        folded = (
            _fold(last, block, depth, wrapper_type) if isinstance(last, WrapperBlock) else None
        )
        if folded is None:
            logger.debug(
                "opening %s list for %r block at depth %d", wrapper_type, block.type, depth
            )
            self._document.append(_new_wrapper(wrapper_type, block, depth))
        else:
            logger.debug("folded %r block into open list, now %d deep", block.type, folded.depth)
            self._document[-1] = folded


def _fold(
    wrapper: WrapperBlock, block: Block, depth: int, wrapper_type: str
) -> Optional[WrapperBlock]:
    """Return a copy of `wrapper` with `block` placed at `depth` levels below it.

    Returns None when `block` cannot join `wrapper` at all, which only happens when it belongs at
    this very level but is a different kind of list item (ordered vs. unordered). The caller then
    opens a new wrapper of the right kind alongside `wrapper`.
    """
    if depth == 0:
        return wrapper.add_child(block) if wrapper.type == wrapper_type else None

    last = wrapper.last_child
    if isinstance(last, WrapperBlock):
        nested = _fold(last, block, depth - 1, wrapper_type)
        if nested is not None:
            return wrapper.replace_last_child(nested)
        logger.debug("switching to %s list at depth %d", wrapper_type, depth)
    else:
        logger.debug("opening nested %s list at depth %d", wrapper_type, depth)

    # -- nothing open one level down that this item can join; open a new nested wrapper under the
    # -- current last list item
    return wrapper.add_child(_new_wrapper(wrapper_type, block, depth - 1))


def _new_wrapper(wrapper_type: str, block: Block, depth: int) -> WrapperBlock:
    """A wrapper holding `block` at `depth` levels below it, opening intermediate levels."""
    wrapper = WrapperBlock(type=wrapper_type, children=(block,))
    for _ in range(depth):
        wrapper = WrapperBlock(type=wrapper_type, children=(wrapper,))
    return wrapper
