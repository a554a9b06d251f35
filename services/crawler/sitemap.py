# services/crawler/sitemap.py
"""
Discovers the documentation pages to fingerprint from a sitemap.
"""

from typing import List
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from services.snippets.exceptions import FetchError


def parse_sitemap(xml: str) -> List[str]:
    """Return every ``<loc>`` value of ``xml``, stripped, in document order."""
    soup = BeautifulSoup(xml, "html.parser")
    urls: List[str] = []
    for loc in soup.find_all("loc"):
        value = loc.get_text(strip=True)
        if value:
            urls.append(value)
    return urls


def filter_by_path(urls: List[str], path_filter: str) -> List[str]:
    """Keep the URLs whose path contains ``path_filter`` (all of them if empty)."""
    if not path_filter:
        return list(urls)
    return [url for url in urls if path_filter in urlparse(url).path]


async def discover_page_urls(
    client: httpx.AsyncClient,
    sitemap_url: str,
    path_filter: str = "",
) -> List[str]:
    """
    Fetch ``sitemap_url`` and return the page URLs that pass ``path_filter``.

    Raises
    ------
    FetchError
        If the sitemap cannot be retrieved.  Nothing can be crawled without
        it, so callers treat this as fatal for the run.
    """
    logger.info(f"Fetching sitemap {sitemap_url}")
    try:
        resp = await client.get(sitemap_url)
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise FetchError(sitemap_url, str(exc)) from exc

    all_urls = parse_sitemap(resp.text)
    urls = filter_by_path(all_urls, path_filter)
    logger.info(
        f"Sitemap lists {len(all_urls)} URL(s), {len(urls)} match '{path_filter}'"
    )
    return urls
