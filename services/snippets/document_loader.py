# services/snippets/document_loader.py
from pathlib import Path
from typing import Union

from bs4 import BeautifulSoup
from loguru import logger

from .exceptions import ParseFailure

HTML_PARSER = "html.parser"


def parse_html(html: str, source: str = "<string>") -> BeautifulSoup:
    """Parse ``html`` into a document the locator can walk."""
    try:
        return BeautifulSoup(html, HTML_PARSER)
    except Exception as exc:
        raise ParseFailure(source, str(exc)) from exc


def load_document(path: Union[str, Path]) -> BeautifulSoup:
    """Read a local HTML file (UTF-8) and parse it."""
    path = Path(path)
    logger.debug(f"Reading {path}")
    return parse_html(path.read_text(encoding="utf-8"), source=str(path))
