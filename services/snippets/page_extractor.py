# services/snippets/page_extractor.py
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag
from loguru import logger

from models.extraction_request import ExtractionRequest
from models.snippet import PageResult, SnippetLabel, SnippetRecord

from .block_locator import locate
from .exceptions import MissingLabelError
from .fingerprint import fingerprint
from .formatter import CodeFormatter, PrettierFormatter, SnippetFormatter
from .label_parser import identify


class PageExtractor:
    """
    Extracts every target-language snippet of one parsed page.

    Blocks are processed strictly in document order.  Each one yields an
    ``(identifier, SnippetRecord)`` pair; the pairs are folded into the
    ``PageResult`` only once the whole page has been processed, so a later
    block with the same identifier replaces an earlier one.
    """

    def __init__(
        self,
        request: Optional[ExtractionRequest] = None,
        formatter: Optional[CodeFormatter] = None,
    ):
        self.request = request or ExtractionRequest()
        self.snippet_formatter = SnippetFormatter(
            formatter or PrettierFormatter(self.request.formatter_command),
            parser=self.request.formatter_parser,
            block_tags=self.request.block_marker_tags,
        )

    # ------------------------------------------------------------------
    def _read_label(self, block: Tag, position: int) -> Optional[SnippetLabel]:
        """
        Parse the block's label.  Returns ``None`` when the block should be
        skipped because its label is missing and the request is lenient.
        """
        attribute = self.request.label_attribute
        try:
            return identify(
                block.get(attribute),
                self.request.target_extensions,
                attribute=attribute,
            )
        except MissingLabelError:
            if not self.request.is_lenient:
                raise MissingLabelError(attribute, position) from None
            logger.warning(f"Skipping code block #{position}: no '{attribute}' label")
            return None

    def _key(self, filename: str, page_key: Optional[str]) -> str:
        if self.request.prefix_keys and page_key:
            return f"{page_key}:{filename}"
        return filename

    # ------------------------------------------------------------------
    async def extract(self, doc: BeautifulSoup, page_key: Optional[str] = None) -> PageResult:
        """
        Run locate → identify → format → fingerprint over ``doc``.

        Raises
        ------
        MissingLabelError
            In strict mode, when any located block has no label.
        """
        pairs: List[Tuple[str, SnippetRecord]] = []
        skipped: List[str] = []

        for position, block in enumerate(locate(doc, self.request.block_tag)):
            label = self._read_label(block, position)
            if label is None:
                skipped.append(f"#{position}")
                continue

            if not label.is_target_language:
                logger.info(f"Skipping {label.filename} ...")
                skipped.append(label.filename)
                continue

            outcome = await self.snippet_formatter.format(block, name=label.filename)
            record = SnippetRecord(
                code=outcome.text,
                hash=fingerprint(outcome.text),
                formatted=outcome.formatted,
            )
            pairs.append((self._key(label.filename, page_key), record))

        result = PageResult.from_pairs(pairs, skipped)
        logger.debug(
            f"Extracted {len(result)} snippet(s) from {page_key or 'document'}, "
            f"skipped {len(skipped)}"
        )
        return result
