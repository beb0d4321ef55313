"""Load work records and shared data files from the source tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List

import yaml

from .config import BuildConfig
from .models import Download, Item, LinkValue, Links, Tags, Work
from .utils import unique_in_order

logger = logging.getLogger("catalog_site")


class CatalogError(ValueError):
    """Raised when a catalog file parses but does not have the expected shape."""


@dataclass
class Catalog:
    works: List[Work]
    types: List[str]
    downloads: List[Download]


def read_yaml_file(path: Path) -> Any:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _require(data: dict, key: str, source: Path) -> Any:
    if key not in data:
        raise CatalogError(f"{source}: missing required key '{key}'")
    return data[key]


def parse_link(value: Any, source: Path) -> LinkValue:
    if value is None:
        return LinkValue.absent()
    if value is True:
        return LinkValue.use_default()
    if isinstance(value, str):
        return LinkValue.explicit(value)
    raise CatalogError(f"{source}: link must be true or a path, got {value!r}")


def parse_item(data: Any, source: Path) -> Item:
    if not isinstance(data, dict):
        raise CatalogError(f"{source}: item is not a mapping")
    links = _require(data, "links", source)
    if not isinstance(links, dict):
        raise CatalogError(f"{source}: item links is not a mapping")
    types = data.get("type") or []
    if not isinstance(types, list):
        raise CatalogError(f"{source}: item type must be a list")
    return Item(
        title=str(_require(data, "title", source)),
        type=[str(t) for t in types],
        links=Links(
            wiki=str(_require(links, "wiki", source)),
            ja=parse_link(links.get("ja"), source),
            zh=parse_link(links.get("zh"), source),
        ),
    )


def parse_work(data: Any, source: Path) -> Work:
    """Build a :class:`Work` from a parsed record and derive its type tags."""
    if not isinstance(data, dict):
        raise CatalogError(f"{source}: work record is not a mapping")
    tags = _require(data, "tags", source)
    if not isinstance(tags, dict):
        raise CatalogError(f"{source}: tags is not a mapping")
    raw_items = data.get("items") or []
    if not isinstance(raw_items, list):
        raise CatalogError(f"{source}: items must be a list")
    order = _require(data, "order", source)
    if isinstance(order, bool) or not isinstance(order, (int, float)):
        raise CatalogError(f"{source}: order must be a number, got {order!r}")
    cover = _require(data, "cover", source)
    if not isinstance(cover, str) or not cover.strip():
        raise CatalogError(f"{source}: cover must be a non-empty string, got {cover!r}")

    items = [parse_item(item, source) for item in raw_items]
    return Work(
        order=order,
        code=str(_require(data, "code", source)),
        title=str(_require(data, "title", source)),
        suffix=str(data.get("suffix") or ""),
        cover=cover,
        hidden=bool(data.get("hidden", False)),
        tags=Tags(
            era=str(tags.get("era", "")),
            state=str(tags.get("state", "")),
            type=unique_in_order(t for item in items for t in item.type),
        ),
        items=items,
    )


def iter_record_files(works_dir: Path, suffixes: Iterable[str]) -> List[Path]:
    suffixes = tuple(suffixes)
    return [
        path
        for path in sorted(works_dir.iterdir())
        if path.is_file() and path.suffix.lower() in suffixes
    ]


def load_works(works_dir: Path, suffixes: Iterable[str] = (".yaml", ".yml")) -> List[Work]:
    """Load every work record in ``works_dir`` sorted by ``order``."""
    works = [
        parse_work(read_yaml_file(path), path)
        for path in iter_record_files(works_dir, suffixes)
    ]
    works.sort(key=lambda work: work.order)
    return works


def load_types(path: Path) -> List[str]:
    data = read_yaml_file(path)
    if not isinstance(data, list):
        raise CatalogError(f"{path}: expected a list of type labels")
    return [str(value) for value in data]


def load_downloads(path: Path) -> List[Download]:
    """Load the alias table that pre-seeds known cover downloads."""
    data = read_yaml_file(path) or []
    if not isinstance(data, list):
        raise CatalogError(f"{path}: expected a list of downloads")
    downloads: List[Download] = []
    for entry in data:
        if not isinstance(entry, dict):
            raise CatalogError(f"{path}: download entry is not a mapping")
        downloads.append(
            Download(
                source=str(_require(entry, "source", path)),
                target=str(_require(entry, "target", path)),
            )
        )
    return downloads


def load_catalog(config: BuildConfig) -> Catalog:
    works = load_works(config.works_root, config.record_suffixes)
    types = load_types(config.types_path)
    downloads = load_downloads(config.downloads_path)
    logger.info(
        "Loaded %d work(s), %d type(s) and %d download alias(es) from %s",
        len(works),
        len(types),
        len(downloads),
        config.works_root,
    )
    return Catalog(works=works, types=types, downloads=downloads)
