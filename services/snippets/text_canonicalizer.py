# services/snippets/text_canonicalizer.py
"""
Turn a BeautifulSoup subtree into the text a browser would render for it.

Syntax-highlighted code blocks usually wrap every source line in its own
``<div>``; the newline between two lines is implied by the block layout and
is not present as a character in the DOM.  ``inner_text_preserving_newlines``
walks the tree and puts those newlines back.

Only the tags listed in ``block_tags`` (``div`` by default) count as block
level.  Any other block element (``p``, ``li`` ...) is treated as inline, so
the result is only exact for code blocks built from nested ``div``s and text.
"""

from typing import Iterable

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

DEFAULT_BLOCK_TAGS = ("div",)

# HTML parsers drop a newline directly after these start tags; html.parser keeps it
LEADING_NEWLINE_TAGS = frozenset({"pre", "listing", "textarea"})


def _is_text_node(node: PageElement) -> bool:
    # Comments, CDATA, doctypes and processing instructions are
    # PreformattedString subclasses and are not text nodes in the DOM.
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def inner_text_preserving_newlines(
    node: PageElement,
    block_tags: Iterable[str] = DEFAULT_BLOCK_TAGS,
) -> str:
    """
    Concatenate every text node under ``node`` in document order.

    Text is returned verbatim (indentation inside code matters), except for
    a single newline right after a ``<pre>`` start tag, which HTML does not
    treat as content.  After an element listed in ``block_tags`` a ``"\\n"``
    is appended unless its text already ends with one.
    """
    block_tags = frozenset(tag.lower() for tag in block_tags)
    return _render(node, block_tags)


def _render(node: PageElement, block_tags: frozenset) -> str:
    if _is_text_node(node):
        return str(node)
    if not isinstance(node, Tag):
        return ""

    parts = [_render(child, block_tags) for child in node.children]

    name = node.name.lower()
    if name in LEADING_NEWLINE_TAGS and node.contents and _is_text_node(node.contents[0]):
        if parts[0].startswith("\n"):
            parts[0] = parts[0][1:]

    result = "".join(parts)
    if name in block_tags and not result.endswith("\n"):
        result += "\n"
    return result
