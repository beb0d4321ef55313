"""Resolve cover downloads and translation fetches for a loaded catalog.

Nothing here touches the network or the filesystem. Works are updated in place
and the resolved collections are returned together as :class:`ResolvedAssets`.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

from .config import COVER_ROOT, DEFAULT_TRANSLATE_URL, TRANSLATE_ROOT
from .models import Download, Item, LinkValue, Translate, Work
from .utils import wiki_slug

logger = logging.getLogger("catalog_site")


@dataclass
class ResolvedAssets:
    works: List[Work]
    downloads: List[Download]
    translates: List[Translate]


def cover_extension(source: str) -> str:
    """Return the extension of a cover source without the leading dot."""
    path = urlparse(source).path if "://" in source else source
    return posixpath.splitext(path)[1].lstrip(".")


def find_download(downloads: List[Download], source: str) -> Optional[Download]:
    for download in downloads:
        if download.source == source:
            return download
    return None


def resolve_cover(work: Work, downloads: List[Download], cover_root: str = COVER_ROOT) -> Download:
    download = find_download(downloads, work.cover)
    if download is None:
        extension = cover_extension(work.cover)
        target = f"{cover_root}/{work.code}"
        if extension:
            target = f"{target}.{extension}"
        download = Download(source=work.cover, target=target)
        downloads.append(download)
        logger.debug("Queued cover %s -> %s", download.source, download.target)
    work.cover = download.target
    return download


def resolve_translation(
    item: Item,
    translate_root: str = TRANSLATE_ROOT,
    translate_url: str = DEFAULT_TRANSLATE_URL,
) -> Optional[Translate]:
    """Synthesize a fetch for an item with an unresolved language link.

    Only ABSENT links are backfilled; USE_DEFAULT and explicit paths stay as
    they are.
    """
    links = item.links
    if not (links.ja.is_absent or links.zh.is_absent):
        return None
    slug = wiki_slug(links.wiki)
    translate = Translate(
        source=translate_url.format(wiki=links.wiki),
        ja=f"{translate_root}/{slug}.ja.txt",
        zh=f"{translate_root}/{slug}.zh.txt",
    )
    if links.ja.is_absent:
        links.ja = LinkValue.explicit(translate.ja)
    if links.zh.is_absent:
        links.zh = LinkValue.explicit(translate.zh)
    logger.debug("Queued translation %s", translate.source)
    return translate


def resolve_assets(
    works: List[Work],
    downloads: List[Download],
    cover_root: str = COVER_ROOT,
    translate_root: str = TRANSLATE_ROOT,
    translate_url: str = DEFAULT_TRANSLATE_URL,
) -> ResolvedAssets:
    """Point every work and item at output-relative asset paths."""
    translates: List[Translate] = []
    for work in works:
        resolve_cover(work, downloads, cover_root)
        for item in work.items:
            translate = resolve_translation(item, translate_root, translate_url)
            if translate is not None:
                translates.append(translate)
    logger.info(
        "Resolved %d download(s) and %d translation(s)",
        len(downloads),
        len(translates),
    )
    return ResolvedAssets(works=works, downloads=downloads, translates=translates)
