# tests/conftest.py
"""
Shared test doubles.  The real formatter shells out to Prettier, which the
unit tests must not depend on, so they use the small ``CodeFormatter``
implementations below instead.
"""

from typing import List, Tuple

import pytest

from services.snippets.exceptions import FormatFailure
from services.snippets.formatter import CodeFormatter


class StubFormatter(CodeFormatter):
    """
    Pretends to be a formatter: strips trailing whitespace from each line and
    ends the text with a single newline.  Text containing ``fail_marker`` is
    rejected with ``FormatFailure``, like Prettier does for a syntax error.
    """

    def __init__(self, fail_marker: str = "<<syntax error>>"):
        self.fail_marker = fail_marker
        self.calls: List[Tuple[str, str]] = []

    async def format(self, text: str, parser: str) -> str:
        self.calls.append((text, parser))
        if self.fail_marker and self.fail_marker in text:
            raise FormatFailure(f"SyntaxError: unexpected token ({parser})")
        lines = [line.rstrip() for line in text.strip("\n").split("\n")]
        return "\n".join(lines) + "\n"


@pytest.fixture
def stub_formatter() -> StubFormatter:
    return StubFormatter()


def pre(label, *lines: str) -> str:
    """Build a ``<pre>`` block with one ``<div>`` per source line."""
    attr = "" if label is None else f' aria-label="{label}"'
    body = "".join(f"<div>{line}</div>" for line in lines)
    return f"<pre{attr}>{body}</pre>"


def page(*blocks: str) -> str:
    return "<html><body><h1>Docs</h1>" + "<p>Some prose.</p>".join(blocks) + "</body></html>"


@pytest.fixture
def make_pre():
    return pre


@pytest.fixture
def make_page():
    return page
