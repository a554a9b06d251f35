# tests/test_formatter.py
import asyncio
import sys

import pytest
from bs4 import BeautifulSoup

from services.snippets.exceptions import FormatFailure, FormatterUnavailable, SnippetExtractionError
from services.snippets.formatter import CodeFormatter, PrettierFormatter, SnippetFormatter


def _pre(html: str):
    return BeautifulSoup(html, "html.parser").find("pre")


# -------------------------------------------------------------------
# 1️⃣  SnippetFormatter – the adapter used by the page extractor
# -------------------------------------------------------------------
def test_formats_recovered_text(stub_formatter):
    adapter = SnippetFormatter(stub_formatter)
    node = _pre("<pre><div>const a = 1;   </div><div>a;</div></pre>")

    outcome = asyncio.run(adapter.format(node))

    assert outcome.formatted is True
    assert outcome.reason is None
    assert outcome.text == "const a = 1;\na;\n"
    # the formatter saw the newline-preserving text and the grammar name
    assert stub_formatter.calls == [("const a = 1;   \na;\n", "typescript")]


def test_falls_back_to_raw_text_on_format_failure(stub_formatter):
    adapter = SnippetFormatter(stub_formatter)
    node = _pre("<pre><div>const = &lt;&lt;syntax error&gt;&gt;</div></pre>")

    outcome = asyncio.run(adapter.format(node, name="broken.ts"))

    assert outcome.formatted is False
    assert outcome.text == "const = <<syntax error>>\n"
    assert "SyntaxError" in outcome.reason


def test_parser_name_is_forwarded(stub_formatter):
    adapter = SnippetFormatter(stub_formatter, parser="babel")
    asyncio.run(adapter.format(_pre("<pre>x</pre>")))
    assert stub_formatter.calls[0][1] == "babel"


# -------------------------------------------------------------------
# 2️⃣  PrettierFormatter – subprocess plumbing, with a stand-in command
# -------------------------------------------------------------------
def test_prettier_formatter_pipes_stdin_to_stdout():
    upper = [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read().upper())"]
    formatter = PrettierFormatter(upper)

    assert asyncio.run(formatter.format("let x;\n", "typescript")) == "LET X;\n"


def test_prettier_formatter_appends_parser_argument():
    echo_args = [sys.executable, "-c", "import sys; print(' '.join(sys.argv[1:]))"]
    formatter = PrettierFormatter(echo_args)

    assert asyncio.run(formatter.format("", "typescript")).strip() == "--parser typescript"


def test_prettier_formatter_non_zero_exit_is_format_failure():
    failing = [
        sys.executable,
        "-c",
        "import sys; '--version' in sys.argv and sys.exit(0); sys.stderr.write('SyntaxError: Unexpected token (1:7)'); sys.exit(2)",
    ]
    formatter = PrettierFormatter(failing)

    with pytest.raises(FormatFailure) as exc_info:
        asyncio.run(formatter.format("const =", "typescript"))
    assert "Unexpected token" in exc_info.value.reason


def test_prettier_formatter_missing_command():
    formatter = PrettierFormatter(["definitely-not-an-installed-formatter-xyz"])

    with pytest.raises(SnippetExtractionError) as exc_info:
        asyncio.run(formatter.format("x", "typescript"))
    assert not isinstance(exc_info.value, FormatFailure)


def test_prettier_formatter_default_command():
    assert PrettierFormatter().command == ["npx", "--no-install", "prettier"]


# -------------------------------------------------------------------
# 3️⃣  An unusable formatter aborts instead of falling back
# -------------------------------------------------------------------
# Stand-in for ``npx --no-install prettier`` when prettier is not installed:
# the launcher exists but every invocation, ``--version`` included, fails.
_BROKEN_LAUNCHER = [
    sys.executable,
    "-c",
    "import sys; sys.stderr.write('npm error could not determine executable to run'); sys.exit(1)",
]


def test_failed_version_check_raises_formatter_unavailable():
    formatter = PrettierFormatter(_BROKEN_LAUNCHER)

    with pytest.raises(FormatterUnavailable) as exc_info:
        asyncio.run(formatter.format("const a = 1;", "typescript"))
    assert "could not determine executable" in exc_info.value.reason
    assert not isinstance(exc_info.value, FormatFailure)


def test_adapter_does_not_fall_back_when_formatter_is_unavailable():
    adapter = SnippetFormatter(PrettierFormatter(_BROKEN_LAUNCHER))

    with pytest.raises(FormatterUnavailable):
        asyncio.run(adapter.format(_pre("<pre>const a=1</pre>")))


def test_version_check_runs_once():
    counting = [
        sys.executable,
        "-c",
        "import sys; print('3.3.3') if '--version' in sys.argv else sys.stdout.write(sys.stdin.read())",
    ]
    formatter = PrettierFormatter(counting)

    async def format_twice():
        await formatter.format("a;", "typescript")
        formatter.command = _BROKEN_LAUNCHER  # a second --version call would now fail
        await formatter.ensure_available()

    asyncio.run(format_twice())
    assert formatter.version == "3.3.3"


# -------------------------------------------------------------------
# 4️⃣  CodeFormatter is abstract
# -------------------------------------------------------------------
def test_formatter_without_format_cannot_be_instantiated():
    class Incomplete(CodeFormatter):
        pass

    with pytest.raises(TypeError):
        Incomplete()
