# run_extractor.py
"""
Print ``{page: {snippet: {code, hash}}}`` JSON for documentation pages.

    python run_extractor.py local ./sample-data/setup-data.html
    python run_extractor.py crawl --sitemap https://docs.example.com/sitemap.xml \\
        --path-filter /docs/ --lenient

Progress and diagnostics go to stderr; only the JSON result is written to
stdout, once every page has been processed.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

# Make the repo root importable when run as a script
repo_root = Path(__file__).resolve().parent
if str(repo_root) not in sys.path:
    sys.path.append(str(repo_root))

from loguru import logger

from models.extraction_request import LabelMode
from models.snippet import SiteResult
from services.crawler.site_crawler import SiteCrawler
from services.snippets.config_loader import get_profile_config, list_available_profiles
from services.snippets.exceptions import ProfileNotFoundError, SnippetExtractionError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fingerprint code samples embedded in documentation pages.",
    )
    parser.add_argument("--profile", default="default", help="Profile from configs/profiles.yaml")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--strict", dest="label_mode", action="store_const", const=LabelMode.STRICT,
                      help="A code block without a label aborts the page")
    mode.add_argument("--lenient", dest="label_mode", action="store_const", const=LabelMode.LENIENT,
                      help="Skip unlabelled code blocks and failed pages")
    parser.add_argument("--prefix-keys", action="store_true", default=None,
                        help="Key snippets as '<page>:<snippet>'")
    parser.add_argument("--log-level", default="INFO")

    sub = parser.add_subparsers(dest="command", required=True)

    local = sub.add_parser("local", help="Extract from HTML files on disk")
    local.add_argument("paths", nargs="+", type=Path)

    crawl = sub.add_parser("crawl", help="Extract from the pages listed in a sitemap")
    crawl.add_argument("--sitemap", required=True, help="Sitemap URL")
    crawl.add_argument("--path-filter", default=None, help="Keep URLs whose path contains this")
    crawl.add_argument("--max-concurrent", type=int, default=None)

    sub.add_parser("profiles", help="List available profiles")
    return parser


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


async def run(args: argparse.Namespace) -> SiteResult:
    request = get_profile_config(args.profile)
    overrides = {}
    if args.label_mode is not None:
        overrides["label_mode"] = args.label_mode
    if args.prefix_keys:
        overrides["prefix_keys"] = True
    if getattr(args, "max_concurrent", None):
        overrides["max_concurrent"] = args.max_concurrent
    if overrides:
        request = request.model_copy(update=overrides)

    crawler = SiteCrawler(request)
    if args.command == "local":
        return await crawler.extract_files(args.paths)
    return await crawler.crawl_sitemap(args.sitemap, args.path_filter)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "profiles":
        print("\n".join(list_available_profiles()))
        return 0

    try:
        site = asyncio.run(run(args))
    except (ProfileNotFoundError, SnippetExtractionError) as exc:
        logger.error(str(exc))
        return 1

    print(json.dumps(site.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
