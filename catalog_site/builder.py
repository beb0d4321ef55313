"""High-level orchestration for assembling the output directory."""

from __future__ import annotations

import logging
import shutil
import time
from contextlib import AsyncExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .catalog import load_catalog
from .config import BuildConfig
from .downloads import fetch_downloads, fetch_translations
from .fetch import Fetcher, HttpFetcher
from .manuals import extract_manuals
from .models import Download, Translate, Work
from .render import create_environment, write_pages
from .resolver import ResolvedAssets, resolve_assets
from .utils import site_path

logger = logging.getLogger("catalog_site")


@dataclass
class BuildResult:
    """Summary of a finished build."""

    output_root: Path
    works: List[Work]
    downloads: List[Download]
    translates: List[Translate]
    manuals: List[Path]
    elapsed_seconds: float


def prepare_output(config: BuildConfig) -> None:
    """Recreate the output root and its well-known subdirectories."""
    if config.output_root.exists():
        logger.info("Removing %s", config.output_root)
        shutil.rmtree(config.output_root)
    config.output_root.mkdir(parents=True)
    for subdir in config.output_subdirs:
        site_path(config.output_root, subdir).mkdir(parents=True, exist_ok=True)


def copy_static(config: BuildConfig) -> None:
    if not config.static_root.is_dir():
        logger.warning("Static directory %s does not exist; skipping", config.static_root)
        return
    logger.info("Copying static files from %s", config.static_root)
    shutil.copytree(config.static_root, config.output_root, dirs_exist_ok=True)


def fetch_workers(resolved: ResolvedAssets, batch_size: Optional[int]) -> int:
    """Size the fetch pool to the widest fan-out of the build."""
    downloads = len(resolved.downloads)
    if batch_size is not None:
        downloads = min(downloads, batch_size)
    return max(len(resolved.translates), downloads, 1)


async def build_site(config: BuildConfig, fetcher: Optional[Fetcher] = None) -> BuildResult:
    """Run every build step in order; the first failure aborts the build."""
    start = time.perf_counter()
    async with AsyncExitStack() as stack:
        prepare_output(config)
        copy_static(config)

        catalog = load_catalog(config)
        resolved = resolve_assets(
            catalog.works,
            catalog.downloads,
            cover_root=config.cover_root,
            translate_root=config.translate_root,
            translate_url=config.translate_url,
        )

        env = create_environment(config.templates_root)
        write_pages(env, config.output_root, resolved.works, catalog.types, config.pages)

        if fetcher is None:
            fetcher = await stack.enter_async_context(
                HttpFetcher(
                    config.http_timeout,
                    config.user_agent,
                    max_workers=fetch_workers(resolved, config.download_batch_size),
                )
            )

        logger.info("Fetching %d translation(s)", len(resolved.translates))
        await fetch_translations(resolved.translates, fetcher, config.output_root)

        logger.info("Fetching %d download(s)", len(resolved.downloads))
        await fetch_downloads(
            resolved.downloads, fetcher, config.output_root, config.download_batch_size
        )

        logger.info("Extracting manuals")
        manuals = await extract_manuals(
            site_path(config.output_root, config.manual_root),
            fetcher,
            config.manual_archive_root,
            archive_url=config.manual_archive_url,
            cache_path=config.manual_archive_cache,
        )

    return BuildResult(
        output_root=config.output_root,
        works=resolved.works,
        downloads=resolved.downloads,
        translates=resolved.translates,
        manuals=manuals,
        elapsed_seconds=time.perf_counter() - start,
    )
