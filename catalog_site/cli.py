"""Command-line entry point for the site build."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .builder import build_site
from .config import (
    DEFAULT_DOWNLOAD_BATCH_SIZE,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_OUTPUT_ROOT,
    DEFAULT_SOURCE_ROOT,
    DEFAULT_TRANSLATE_URL,
    BuildConfig,
)

logger = logging.getLogger("catalog_site.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build the static catalog site from work records and remote assets.",
    )
    parser.add_argument(
        "--source",
        default=DEFAULT_SOURCE_ROOT,
        type=Path,
        help="Directory holding works/, data/, static/, templates/ and manual/",
    )
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_ROOT,
        type=Path,
        help="Directory to (re)create with the built site",
    )
    parser.add_argument(
        "--manual-url",
        default=None,
        help="Download this manuals archive instead of extracting the local manual/ zips",
    )
    parser.add_argument(
        "--manual-cache",
        default=None,
        type=Path,
        help="Where to cache the downloaded manuals archive (default: <source>/manual.zip)",
    )
    parser.add_argument(
        "--translate-url",
        default=DEFAULT_TRANSLATE_URL,
        help="URL template for translation pages; {wiki} is replaced by the wiki identifier",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_DOWNLOAD_BATCH_SIZE,
        help="Number of downloads fetched concurrently per batch",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_HTTP_TIMEOUT,
        help="HTTP timeout in seconds",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    argv = list(sys.argv[1:] if argv is None else argv)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> BuildConfig:
    overrides = dict(
        translate_url=args.translate_url,
        download_batch_size=args.batch_size,
        http_timeout=args.timeout,
        manual_archive_url=args.manual_url,
    )
    if args.manual_cache is not None:
        overrides["manual_archive_cache"] = args.manual_cache
    return BuildConfig.from_roots(args.source, args.output, **overrides)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = build_config(args)
    overall_start = time.perf_counter()
    try:
        result = asyncio.run(build_site(config))
    except Exception:
        logger.error("Build failed after %.2fs", time.perf_counter() - overall_start)
        raise

    logger.info(
        "Finished in %.2fs (%d works, %d downloads, %d translations, %d manual archives) -> %s",
        result.elapsed_seconds,
        len(result.works),
        len(result.downloads),
        len(result.translates),
        len(result.manuals),
        result.output_root,
    )


if __name__ == "__main__":
    main()
