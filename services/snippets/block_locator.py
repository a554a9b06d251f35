# services/snippets/block_locator.py
from typing import Iterator

from bs4 import BeautifulSoup, Tag


def locate(doc: BeautifulSoup, tag: str = "pre") -> Iterator[Tag]:
    """
    Lazily yield every ``tag`` element of ``doc`` in document order.

    No filtering happens here; deciding whether a block is relevant is up to
    the caller.  Each call starts a fresh walk over the tree.
    """
    tag = tag.lower()
    for element in doc.descendants:
        if isinstance(element, Tag) and element.name == tag:
            yield element
