# models/snippet.py
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SnippetLabel(BaseModel):
    """
    Parsed form of a code block's label attribute.

    ``"utils.ts some description words"`` becomes
    ``filename="utils.ts"``, ``extension="ts"``,
    ``description="some description words"``.
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    extension: Optional[str] = None
    description: str = ""
    is_target_language: bool = False


class FormatOutcome(BaseModel):
    """
    Result of running a snippet through the canonical formatter.

    ``formatted`` is False when the formatter rejected the text; ``text`` then
    holds the raw, unformatted snippet and ``reason`` says why.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    formatted: bool = True
    reason: Optional[str] = None

    @classmethod
    def ok(cls, text: str) -> "FormatOutcome":
        return cls(text=text)

    @classmethod
    def fallback(cls, text: str, reason: str) -> "FormatOutcome":
        return cls(text=text, formatted=False, reason=reason)


class SnippetRecord(BaseModel):
    """One entry of a page result: canonical code and its fingerprint."""

    model_config = ConfigDict(frozen=True)

    code: str
    hash: str = Field(..., min_length=64, max_length=64)
    formatted: bool = Field(default=True, exclude=True)


class PageResult(BaseModel):
    """Snippet identifier → record, for a single page."""

    model_config = ConfigDict(frozen=True)

    snippets: Dict[str, SnippetRecord] = Field(default_factory=dict)
    skipped: List[str] = Field(default_factory=list, exclude=True)

    @classmethod
    def from_pairs(cls, pairs, skipped=None) -> "PageResult":
        """Fold ``(identifier, record)`` pairs; later identifiers win."""
        return cls(snippets=dict(pairs), skipped=list(skipped or []))

    def __len__(self) -> int:
        return len(self.snippets)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.snippets

    def __getitem__(self, identifier: str) -> SnippetRecord:
        return self.snippets[identifier]

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {name: record.model_dump() for name, record in self.snippets.items()}


class SiteResult(BaseModel):
    """Page key (file path or URL) → page result, in input order."""

    model_config = ConfigDict(frozen=True)

    pages: Dict[str, PageResult] = Field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.pages)

    def __getitem__(self, page_key: str) -> PageResult:
        return self.pages[page_key]

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, str]]]:
        """JSON-ready ``{page: {snippet: {code, hash}}}`` mapping."""
        return {key: page.to_dict() for key, page in self.pages.items()}
