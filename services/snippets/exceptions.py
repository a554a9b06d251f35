# services/snippets/exceptions.py
"""
Domain exceptions raised while turning documentation pages into snippet
fingerprints.  Everything derives from ``SnippetExtractionError`` so callers
(the CLI, the site crawler) can catch the whole family in one place.
"""


class SnippetExtractionError(Exception):
    """Base class for every extraction failure."""


class MissingLabelError(SnippetExtractionError):
    """Raised when a ``<pre>`` block has no usable label attribute."""

    def __init__(self, attribute: str, position: int | None = None):
        where = f" (block #{position})" if position is not None else ""
        super().__init__(f"Code block is missing its '{attribute}' label{where}.")
        self.attribute = attribute
        self.position = position


class FormatFailure(SnippetExtractionError):
    """Raised by a formatter that could not parse the snippet text."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class FormatterUnavailable(SnippetExtractionError):
    """Raised when the formatter itself cannot be run (not installed, broken launcher)."""

    def __init__(self, command: str, reason: str):
        super().__init__(f"Formatter '{command}' is not available: {reason}")
        self.command = command
        self.reason = reason


class FetchError(SnippetExtractionError):
    """Raised when a page or sitemap could not be retrieved."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class ParseFailure(SnippetExtractionError):
    """Raised when a fetched document cannot be parsed."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to parse {source}: {reason}")
        self.source = source
        self.reason = reason


class ProfileNotFoundError(KeyError):
    """Raised when a requested profile does not exist in profiles.yaml."""

    def __init__(self, profile_name: str):
        super().__init__(f"Profile '{profile_name}' not found.")
        self.profile_name = profile_name
