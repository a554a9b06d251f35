# services/crawler/site_crawler.py
import asyncio
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import httpx
from loguru import logger

from models.extraction_request import ExtractionRequest
from models.snippet import PageResult, SiteResult
from services.snippets.document_loader import load_document, parse_html
from services.snippets.exceptions import FetchError, FormatterUnavailable, SnippetExtractionError
from services.snippets.formatter import CodeFormatter
from services.snippets.page_extractor import PageExtractor

from .sitemap import discover_page_urls


# ----------------------------------------------------------------------
#  SiteCrawler – fetch → parse → extract, one page at a time
# ----------------------------------------------------------------------
class SiteCrawler:
    """
    Runs the page extractor over a list of pages (URLs or local files) and
    collects a ``SiteResult`` keyed by page.

    Pages are processed sequentially unless ``request.max_concurrent`` is
    greater than one.  Either way the result lists pages in input order, not
    in completion order.
    """

    def __init__(
        self,
        request: Optional[ExtractionRequest] = None,
        formatter: Optional[CodeFormatter] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.request = request or ExtractionRequest()
        self.extractor = PageExtractor(self.request, formatter=formatter)
        self._client = client
        self._semaphore = asyncio.Semaphore(self.request.max_concurrent)

    # ------------------------------------------------------------------
    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            follow_redirects=True,
            timeout=self.request.request_timeout,
        )

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> str:
        try:
            resp = await client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise FetchError(url, str(exc)) from exc
        return resp.text

    # ------------------------------------------------------------------
    async def _process_page(self, client: httpx.AsyncClient, url: str) -> Optional[PageResult]:
        """
        Fetch, parse and extract one page.  Returns ``None`` when the page
        failed and the request is lenient; re-raises otherwise.
        """
        async with self._semaphore:
            logger.info(f"Processing {url}")
            try:
                html = await self._fetch(client, url)
                doc = parse_html(html, source=url)
                return await self.extractor.extract(doc, page_key=url)
            except FormatterUnavailable:
                raise
            except SnippetExtractionError as exc:
                if not self.request.is_lenient:
                    raise
                logger.error(f"Skipping page {url}: {exc}")
                return None

    @staticmethod
    def _assemble(keys: List[str], results: List[Optional[PageResult]]) -> SiteResult:
        pages: Dict[str, PageResult] = {
            key: result for key, result in zip(keys, results) if result is not None
        }
        return SiteResult(pages=pages)

    async def _gather_pages(self, client: httpx.AsyncClient, urls: List[str]) -> List[Optional[PageResult]]:
        """
        Process pages concurrently.  The first failure cancels every other
        page, and they are awaited before the error propagates, so nothing
        keeps running once the crawl has aborted.
        """
        tasks = [asyncio.create_task(self._process_page(client, url)) for url in urls]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    # ------------------------------------------------------------------
    async def _crawl_with(self, client: httpx.AsyncClient, urls: List[str]) -> SiteResult:
        logger.info(f"Starting crawl of {len(urls)} page(s)")
        if self.request.max_concurrent == 1:
            results = [await self._process_page(client, url) for url in urls]
        else:
            results = await self._gather_pages(client, urls)

        site = self._assemble(urls, results)
        logger.info(f"Crawl completed – {len(site)} of {len(urls)} page(s) extracted")
        return site

    async def crawl(self, urls: Iterable[str]) -> SiteResult:
        """Extract snippets from every URL in ``urls``."""
        client = self._client or self._new_client()
        try:
            return await self._crawl_with(client, list(urls))
        finally:
            if self._client is None:
                await client.aclose()

    async def crawl_sitemap(
        self,
        sitemap_url: Optional[str] = None,
        path_filter: Optional[str] = None,
    ) -> SiteResult:
        """Discover pages from the sitemap, then crawl them."""
        if sitemap_url is None and self.request.sitemap_url is not None:
            sitemap_url = str(self.request.sitemap_url)
        if not sitemap_url:
            raise ValueError("No sitemap URL given")
        if path_filter is None:
            path_filter = self.request.path_filter

        client = self._client or self._new_client()
        try:
            urls = await discover_page_urls(client, sitemap_url, path_filter)
            return await self._crawl_with(client, urls)
        finally:
            if self._client is None:
                await client.aclose()

    # ------------------------------------------------------------------
    async def extract_files(self, paths: Iterable[Union[str, Path]]) -> SiteResult:
        """Local mode: extract snippets from HTML files on disk."""
        keys: List[str] = []
        results: List[Optional[PageResult]] = []
        for path in paths:
            key = str(path)
            logger.info(f"Processing {key}")
            keys.append(key)
            results.append(await self.extractor.extract(load_document(path), page_key=key))
        return self._assemble(keys, results)
