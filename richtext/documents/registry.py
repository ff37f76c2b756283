"""Tag registry: maps block, wrapper and inline-style identifiers to markup.

Three tables make up a registry:

- block type -> `BlockSpec` (the HTML tag, plus the wrapper type for list-item block types)
- wrapper type -> HTML tag
- inline style -> `InlineStyleSpec` (exactly one of an HTML tag or a CSS declaration mapping)

A registry is validated once, when it is built with `TagRegistry.new()`. `DEFAULT_REGISTRY` is
built at import time, so a broken default registry aborts the import rather than surfacing on the
first render.
"""

from __future__ import annotations

import dataclasses as dc
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from richtext.documents.elements import BlockType, InlineStyle, WrapperType
from richtext.documents.html_utils import IMPLEMENTED_TAGS, HtmlTag
from richtext.errors import RegistryConfigurationError, UnhandledTypeError


@dc.dataclass(frozen=True)
class BlockSpec:
    """Registry entry for a block type."""

    tag: str
    wrapper_type: Optional[str] = None
    """Wrapper type this block is gathered into; required exactly when `tag` is `li`."""


@dc.dataclass(frozen=True)
class InlineStyleSpec:
    """Registry entry for an inline style.

    Valid values for each style are either `tag` OR `css`. A `css` style is rendered as a `span`
    carrying those declarations in its `style` attribute.
    """

    tag: Optional[str] = None
    css: Optional[Mapping[str, str]] = None


class TagRegistry:
    """Read-only lookup tables consulted by the assembler and the renderer.

    Use `TagRegistry.new()` to construct a validated instance.
    """

    def __init__(
        self,
        block_specs: Mapping[str, BlockSpec],
        wrapper_tags: Mapping[str, str],
        inline_styles: Mapping[str, InlineStyleSpec],
    ):
        self._block_specs = MappingProxyType(dict(block_specs))
        self._wrapper_tags = MappingProxyType(dict(wrapper_tags))
        self._inline_styles = MappingProxyType(dict(inline_styles))

    @classmethod
    def new(
        cls,
        block_specs: Mapping[str, BlockSpec],
        wrapper_tags: Mapping[str, str],
        inline_styles: Mapping[str, InlineStyleSpec],
    ) -> TagRegistry:
        """Construct validated instance.

        Raises `RegistryConfigurationError` listing every problem found.
        """
        self = cls(block_specs, wrapper_tags, inline_styles)
        self._validate()
        return self

    def block_tag(self, block_type: str) -> str:
        """HTML tag for `block_type`; raises `UnhandledTypeError` when not registered."""
        spec = self._block_specs.get(block_type)
        if spec is None:
            raise UnhandledTypeError(block_type, kind="block")
        return spec.tag

    def wrapper_tag(self, wrapper_type: str) -> str:
        """HTML tag for `wrapper_type`; raises `UnhandledTypeError` when not registered."""
        tag = self._wrapper_tags.get(wrapper_type)
        if tag is None:
            raise UnhandledTypeError(wrapper_type, kind="wrapper")
        return tag

    def wrapper_type_for(self, block_type: str) -> Optional[str]:
        """Wrapper type `block_type` is gathered into, None when it is not a list-item type.

        An unregistered block type is not a list item as far as wrapper assembly is concerned;
        it is reported as unhandled when the block itself is rendered.
        """
        spec = self._block_specs.get(block_type)
        return None if spec is None else spec.wrapper_type

    @property
    def inline_styles(self) -> Tuple[Tuple[str, InlineStyleSpec], ...]:
        """(style, spec) pairs in declaration order, the order styles are applied in."""
        return tuple(self._inline_styles.items())

    def _validate(self) -> None:
        problems: list[str] = []

        def check_tag(owner: str, tag: Optional[str]) -> None:
            if tag not in IMPLEMENTED_TAGS:
                problems.append(f"html must implement {tag!r} (declared by {owner})")

        for block_type, spec in self._block_specs.items():
            owner = f"block type {block_type!r}"
            check_tag(owner, spec.tag)
            if spec.tag == HtmlTag.LI and spec.wrapper_type is None:
                problems.append(f"list-item {owner} must declare a wrapper type")
            if spec.wrapper_type is not None:
                if spec.tag != HtmlTag.LI:
                    problems.append(f"{owner} declares a wrapper type but is not rendered as li")
                if spec.wrapper_type not in self._wrapper_tags:
                    problems.append(
                        f"{owner} declares wrapper type {spec.wrapper_type!r} which has no tag"
                    )

        for wrapper_type, tag in self._wrapper_tags.items():
            check_tag(f"wrapper type {wrapper_type!r}", tag)

        for style, spec in self._inline_styles.items():
            owner = f"inline style {style!r}"
            if (spec.tag is None) == (spec.css is None):
                problems.append(f"{owner} must declare exactly one of tag or css")
            elif spec.tag is not None:
                check_tag(owner, spec.tag)

        if problems:
            raise RegistryConfigurationError(problems)


# -- DEFAULT TABLES ------------------------------

BLOCK_SPECS: Mapping[str, BlockSpec] = {
    BlockType.UNSTYLED: BlockSpec(HtmlTag.P),
    BlockType.HEADER_ONE: BlockSpec(HtmlTag.H1),
    BlockType.HEADER_TWO: BlockSpec(HtmlTag.H2),
    BlockType.HEADER_THREE: BlockSpec(HtmlTag.H3),
    BlockType.HEADER_FOUR: BlockSpec(HtmlTag.H4),
    BlockType.HEADER_FIVE: BlockSpec(HtmlTag.H5),
    BlockType.HEADER_SIX: BlockSpec(HtmlTag.H6),
    BlockType.BLOCKQUOTE: BlockSpec(HtmlTag.BLOCKQUOTE),
    BlockType.CODE_BLOCK: BlockSpec(HtmlTag.PRE),
    BlockType.UNORDERED_LIST_ITEM: BlockSpec(HtmlTag.LI, WrapperType.UNORDERED_LIST),
    BlockType.ORDERED_LIST_ITEM: BlockSpec(HtmlTag.LI, WrapperType.ORDERED_LIST),
}

WRAPPER_TAGS: Mapping[str, str] = {
    WrapperType.UNORDERED_LIST: HtmlTag.UL,
    WrapperType.ORDERED_LIST: HtmlTag.OL,
}

# -- declaration order matters: the first style applied ends up innermost --
INLINE_STYLES: Mapping[str, InlineStyleSpec] = {
    InlineStyle.BOLD: InlineStyleSpec(tag=HtmlTag.STRONG),
    InlineStyle.ITALIC: InlineStyleSpec(tag=HtmlTag.EM),
    InlineStyle.UNDERLINE: InlineStyleSpec(css={"text-decoration": "underline"}),
    InlineStyle.CODE: InlineStyleSpec(
        css={
            "background-color": "rgba(0, 0, 0, 0.5)",
            "font-family": '"Inconsolata", "Menlo", "Consolas", monospace',
            "font-size": "16px",
            "padding": "2px",
        }
    ),
}

DEFAULT_REGISTRY: TagRegistry = TagRegistry.new(BLOCK_SPECS, WRAPPER_TAGS, INLINE_STYLES)
