"""Markup primitives the renderer is built from.

`IMPLEMENTED_TAGS` is the closed set of tag names the renderer knows how to emit. The tag registry
is validated against it, so a registry can never name a tag that would have to be improvised.
"""

from __future__ import annotations

import html
from typing import FrozenSet, Mapping, Optional

from bs4 import BeautifulSoup


class HtmlTag:
    P = "p"
    STRONG = "strong"
    EM = "em"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"
    BLOCKQUOTE = "blockquote"
    PRE = "pre"
    SPAN = "span"
    UL = "ul"
    OL = "ol"
    LI = "li"


IMPLEMENTED_TAGS: FrozenSet[str] = frozenset(
    value for name, value in vars(HtmlTag).items() if not name.startswith("_")
)


def wrap(tag: str, content: str, css: Optional[Mapping[str, str]] = None) -> str:
    """Enclose `content` in `tag`, adding a `style` attribute when `css` is given.

    Raises `ValueError` for a tag outside `IMPLEMENTED_TAGS`.
    """
    if tag not in IMPLEMENTED_TAGS:
        raise ValueError(f"html does not implement tag {tag!r}")
    if css:
        return f'<{tag} style="{stylify(css)}">{content}</{tag}>'
    return f"<{tag}>{content}</{tag}>"


def stylify(css: Mapping[str, str]) -> str:
    """Inline-style attribute text like `text-decoration:underline;` in mapping order.

    Values are quote-escaped so a value like a quoted font-family cannot end the attribute.
    """
    return "".join(f"{key}:{html.escape(str(value), quote=True)};" for key, value in css.items())


def escape_text(text: str) -> str:
    """Escape `&`, `<` and `>` so `text` is safe to embed as element content."""
    return html.escape(text, quote=False)


def indent_html(html_string: str, html_parser="html.parser") -> str:
    """
    Formats / indents HTML.

    Used for human inspection only; the indentation whitespace changes the text content of the
    fragment so the result is never fed back into anything.

    Args:
        html_string (str): The HTML content to be formatted.
        html_parser (str, optional): The parser to use for parsing the HTML. Defaults to
            'html.parser', the built-in parser, which does not add `<html>` or `<body>` tags.

    Returns:
        str: The formatted and indented HTML content.
    """
    soup = BeautifulSoup(html_string, html_parser)
    pretty_html = soup.prettify()
    return pretty_html
