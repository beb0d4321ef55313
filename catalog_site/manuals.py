"""Unpacking of manual archives into the output tree."""

from __future__ import annotations

import asyncio
import logging
import zipfile
from pathlib import Path
from typing import List, Optional

from .fetch import Fetcher

logger = logging.getLogger("catalog_site")


def extract_archive(archive: Path, destination: Path) -> None:
    """Unpack a zip archive; ``zipfile.BadZipFile`` propagates for corrupt input."""
    with zipfile.ZipFile(archive) as zf:
        zf.extractall(destination)


def local_archives(archive_dir: Path) -> List[Path]:
    if not archive_dir.is_dir():
        logger.warning("Manual directory %s does not exist; nothing to extract", archive_dir)
        return []
    return sorted(
        path for path in archive_dir.iterdir() if path.is_file() and path.suffix.lower() == ".zip"
    )


async def cached_archive(url: str, cache_path: Path, fetcher: Fetcher) -> Path:
    """Download ``url`` to ``cache_path`` unless a cached copy already exists."""
    if cache_path.exists():
        logger.info("Using cached manual archive %s", cache_path)
        return cache_path
    logger.info("Downloading manual archive %s", url)
    data = await fetcher.fetch_bytes(url)
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    cache_path.write_bytes(data)
    return cache_path


async def extract_manuals(
    destination: Path,
    fetcher: Fetcher,
    archive_dir: Path,
    archive_url: Optional[str] = None,
    cache_path: Optional[Path] = None,
) -> List[Path]:
    """Extract the manual archives and return the archives that were unpacked.

    With ``archive_url`` set only that archive is used; otherwise every zip in
    ``archive_dir`` is extracted.
    """
    if archive_url:
        if cache_path is None:
            raise ValueError("cache_path is required when archive_url is set")
        archives = [await cached_archive(archive_url, cache_path, fetcher)]
    else:
        archives = local_archives(archive_dir)

    destination.mkdir(parents=True, exist_ok=True)
    for archive in archives:
        logger.debug("Extracting %s into %s", archive, destination)
        await asyncio.to_thread(extract_archive, archive, destination)
    return archives
