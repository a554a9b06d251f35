# services/snippets/formatter.py
"""
Canonical formatting of snippet text.

``CodeFormatter`` is the black-box "text in, canonical text out" contract.
``PrettierFormatter`` fulfils it by piping the snippet through the Prettier
CLI.  ``SnippetFormatter`` is the adapter used by the page extractor: it
recovers the raw text of a ``<pre>`` block, formats it, and falls back to the
raw text when the formatter rejects it so a single broken snippet never
aborts the rest of the page.

A formatter that cannot run at all is a different matter: hashing every
snippet unformatted would make fingerprints depend on the machine, so
``FormatterUnavailable`` is raised and never turned into a fallback.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Tuple

from bs4.element import Tag
from loguru import logger

from models.snippet import FormatOutcome

from .exceptions import FormatFailure, FormatterUnavailable
from .text_canonicalizer import DEFAULT_BLOCK_TAGS, inner_text_preserving_newlines

# Truncate formatter stderr so one bad snippet doesn't flood the log
STDERR_TRUNCATE_CHARS = 2000


def _stderr_excerpt(stderr: bytes) -> str:
    text = stderr.decode("utf-8", errors="replace").strip()
    if len(text) > STDERR_TRUNCATE_CHARS:
        text = text[:STDERR_TRUNCATE_CHARS] + "... (truncated)"
    return text


class CodeFormatter(ABC):
    """Interface for canonical formatters."""

    async def ensure_available(self) -> None:
        """
        Check once that the formatter can run at all.

        Raises ``FormatterUnavailable`` otherwise.  Formatters with nothing
        to check keep this no-op.
        """

    @abstractmethod
    async def format(self, text: str, parser: str) -> str:
        """
        Return the canonical form of ``text`` for the grammar ``parser``.

        Raises ``FormatFailure`` when the text cannot be parsed.
        """


class PrettierFormatter(CodeFormatter):
    """Runs ``prettier --parser <grammar>`` with the snippet on stdin."""

    def __init__(self, command: Optional[Sequence[str]] = None):
        self.command: List[str] = list(command or ["npx", "--no-install", "prettier"])
        self.version: Optional[str] = None

    async def _run(self, args: Sequence[str], stdin: Optional[bytes]) -> Tuple[int, bytes, bytes]:
        cmd = [*self.command, *args]
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (FileNotFoundError, PermissionError) as exc:
            raise FormatterUnavailable(cmd[0], str(exc)) from exc

        try:
            stdout, stderr = await process.communicate(stdin)
        finally:
            if process.returncode is None:
                process.terminate()
                await process.wait()
        return process.returncode, stdout, stderr

    async def ensure_available(self) -> None:
        """Run ``<command> --version`` the first time; a non-zero exit is fatal."""
        if self.version is not None:
            return
        returncode, stdout, stderr = await self._run(["--version"], stdin=None)
        if returncode != 0:
            raise FormatterUnavailable(
                " ".join(self.command),
                _stderr_excerpt(stderr) or f"exited with code {returncode}",
            )
        self.version = stdout.decode("utf-8", errors="replace").strip()
        logger.debug(f"Using prettier {self.version}")

    async def format(self, text: str, parser: str) -> str:
        await self.ensure_available()
        returncode, stdout, stderr = await self._run(
            ["--parser", parser], stdin=text.encode("utf-8")
        )
        if returncode != 0:
            raise FormatFailure(
                _stderr_excerpt(stderr) or f"prettier exited with code {returncode}"
            )
        return stdout.decode("utf-8")


class SnippetFormatter:
    """Adapter: ``<pre>`` block → ``FormatOutcome``."""

    def __init__(
        self,
        formatter: CodeFormatter,
        parser: str = "typescript",
        block_tags: Iterable[str] = DEFAULT_BLOCK_TAGS,
    ):
        self.formatter = formatter
        self.parser = parser
        self.block_tags = tuple(block_tags)

    async def format(self, node: Tag, name: str = "<snippet>") -> FormatOutcome:
        """
        Format the text of ``node``.

        On ``FormatFailure`` the raw text is returned instead, flagged as a
        fallback; the outcome is still fingerprinted by the caller.
        ``FormatterUnavailable`` is not caught.
        """
        await self.formatter.ensure_available()
        raw = inner_text_preserving_newlines(node, self.block_tags)
        try:
            formatted = await self.formatter.format(raw, self.parser)
        except FormatFailure as exc:
            logger.warning(f"Could not format {name}, keeping raw text: {exc.reason}")
            return FormatOutcome.fallback(raw, exc.reason)
        return FormatOutcome.ok(formatted)
