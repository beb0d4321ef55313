"""Fetching of translation pages and binary downloads into the output tree."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from filetype import guess

from .content import extract_translation
from .fetch import Fetcher
from .models import Download, Translate
from .utils import gather_in_batches, site_path

logger = logging.getLogger("catalog_site")

IMAGE_EXTENSIONS = {"png", "jpg", "gif", "webp", "bmp", "tif", "avif"}
EXTENSION_ALIASES = {"jpeg": "jpg", "tiff": "tif"}


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        return EXTENSION_ALIASES.get(ext, ext)
    return None


def check_image(target: str, data: bytes) -> None:
    """Warn when an image target receives content of a different type."""
    expected = Path(target).suffix.lstrip(".").lower()
    expected = EXTENSION_ALIASES.get(expected, expected)
    if expected not in IMAGE_EXTENSIONS:
        return
    detected = detect_image_format(data)
    if detected is None:
        logger.warning("Download for %s does not look like an image", target)
    elif detected != expected:
        logger.warning("Download for %s is %s data, not %s", target, detected, expected)


async def fetch_translation(translate: Translate, fetcher: Fetcher, site_root: Path) -> None:
    markup = await fetcher.fetch_bytes(translate.source)
    text = extract_translation(markup)
    site_path(site_root, translate.ja).write_text(text.ja_text, encoding="utf-8")
    site_path(site_root, translate.zh).write_text(text.zh_text, encoding="utf-8")
    logger.debug(
        "Wrote %d ja / %d zh line(s) from %s", len(text.ja), len(text.zh), translate.source
    )


async def fetch_translations(
    translates: List[Translate], fetcher: Fetcher, site_root: Path
) -> None:
    """Fetch every translation page at once, with no concurrency cap."""
    await gather_in_batches(
        [
            lambda translate=translate: fetch_translation(translate, fetcher, site_root)
            for translate in translates
        ]
    )


async def fetch_download(download: Download, fetcher: Fetcher, site_root: Path) -> Path:
    data = await fetcher.fetch_bytes(download.source)
    check_image(download.target, data)
    destination = site_path(site_root, download.target)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(data)
    logger.debug("Saved %s to %s", download.source, destination)
    return destination


async def fetch_downloads(
    downloads: List[Download],
    fetcher: Fetcher,
    site_root: Path,
    batch_size: Optional[int] = 5,
) -> List[Path]:
    """Fetch downloads in barrier-separated groups of ``batch_size``."""
    return await gather_in_batches(
        [
            lambda download=download: fetch_download(download, fetcher, site_root)
            for download in downloads
        ],
        batch_size,
    )
