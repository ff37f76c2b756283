"""Render a document tree to an HTML fragment.

The output is the concatenation of the top-level node renderings, no separators and no enclosing
`<html>` or `<body>`. Block text is embedded verbatim unless escaping is asked for.
"""

from __future__ import annotations

from typing import Iterable, Optional

from richtext.chunking.base import transform_blocks
from richtext.config import env_config
from richtext.documents import html_utils
from richtext.documents.elements import (
    Block,
    Chunk,
    Document,
    Node,
    RawBlock,
    WrapperBlock,
    iter_blocks,
)
from richtext.documents.html_utils import HtmlTag, wrap
from richtext.documents.registry import DEFAULT_REGISTRY, TagRegistry
from richtext.documents.wrappers import assemble_wrappers
from richtext.logger import logger


def blocks_to_html(
    raw_blocks: Iterable[RawBlock],
    registry: TagRegistry = DEFAULT_REGISTRY,
    escape_text: Optional[bool] = None,
) -> str:
    """Given the raw blocks of an editor content snapshot, return HTML.

    `escape_text` defaults to the `RICHTEXT_ESCAPE_TEXT` environment setting.

    Raises `UnhandledTypeError` when a block or wrapper type is missing from `registry`.
    """
    document = assemble_wrappers(transform_blocks(raw_blocks), registry)
    return HtmlRenderer(registry, escape_text).render(document)


# -- the editor's own name for the entry point --
editor_state_to_html = blocks_to_html


class HtmlRenderer:
    """Renders the `Block` / `WrapperBlock` tree of one document against a tag registry."""

    def __init__(
        self, registry: TagRegistry = DEFAULT_REGISTRY, escape_text: Optional[bool] = None
    ):
        self._registry = registry
        self._escape_text = env_config.RICHTEXT_ESCAPE_TEXT if escape_text is None else escape_text

    def render(self, document: Document) -> str:
        html = "".join(self.render_node(node) for node in document)
        logger.detail(  # type: ignore
            "rendered %d blocks in %d top-level nodes to %d characters",
            sum(1 for _ in iter_blocks(document)),
            len(document),
            len(html),
        )
        return html

    def render_node(self, node: Node, nested_html: str = "") -> str:
        """Render `node`; `nested_html` is placed inside a block's tag, after its text.

        Nested lists belong inside the `<li>` of the item they follow, which is why a block can
        be handed the markup of the wrappers that come after it.
        """
        if isinstance(node, WrapperBlock):
            tag = self._registry.wrapper_tag(node.type)
            return wrap(tag, "".join(self._iter_list_items(node)))

        tag = self._registry.block_tag(node.type)
        return wrap(tag, self.apply_inline_styles(node) + nested_html)

    def apply_inline_styles(self, block: Block) -> str:
        """
        input:

            (Chunk("12", {BOLD}), Chunk("3", {BOLD, ITALIC}), Chunk("4", {}))

        output:

            <strong>12</strong><em><strong>3</strong></em>4
        """
        return "".join(self._apply_inline_styles_for_chunk(chunk) for chunk in block.chunks)

    def _apply_inline_styles_for_chunk(self, chunk: Chunk) -> str:
        content = html_utils.escape_text(chunk.text) if self._escape_text else chunk.text
        for style, spec in self._registry.inline_styles:
            if not chunk.has_style(style):
                continue
            if spec.tag is not None:
                content = wrap(spec.tag, content)
            else:
                content = wrap(HtmlTag.SPAN, content, spec.css)
        return content

    def _iter_list_items(self, wrapper: WrapperBlock) -> Iterable[str]:
        """Generate the `<li>` markup for each item of `wrapper`.

        A nested wrapper is rendered inside the item before it. A nested wrapper with no item
        before it (a list that starts more than one level deep) gets an otherwise empty `<li>`.
        """
        children = wrapper.children
        i = 0
        while i < len(children):
            item = children[i] if isinstance(children[i], Block) else None
            if item is not None:
                i += 1
            nested: list[str] = []
            while i < len(children) and isinstance(children[i], WrapperBlock):
                nested.append(self.render_node(children[i]))
                i += 1
            if item is None:
                yield wrap(HtmlTag.LI, "".join(nested))
            else:
                yield self.render_node(item, "".join(nested))
