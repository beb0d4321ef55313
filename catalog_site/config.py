"""Configuration objects and constants for the site build."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple

DEFAULT_SOURCE_ROOT = Path("src")
DEFAULT_OUTPUT_ROOT = Path("public")
DEFAULT_TRANSLATE_URL = "https://cache.thwiki.cc/{wiki}"
DEFAULT_DOWNLOAD_BATCH_SIZE = 5
DEFAULT_HTTP_TIMEOUT = 30.0

COVER_ROOT = "/cover"
MANUAL_ROOT = "/manual"
TRANSLATE_ROOT = "/translate"


@dataclass
class BuildConfig:
    """Top-level settings that control where the build reads and writes."""

    output_root: Path
    static_root: Path
    data_root: Path
    works_root: Path
    templates_root: Path
    manual_archive_root: Path
    cover_root: str = COVER_ROOT
    manual_root: str = MANUAL_ROOT
    translate_root: str = TRANSLATE_ROOT
    translate_url: str = DEFAULT_TRANSLATE_URL
    record_suffixes: Tuple[str, ...] = (".yaml", ".yml")
    types_file: str = "type.yaml"
    downloads_file: str = "download.yaml"
    pages: Tuple[Tuple[str, str], ...] = (
        ("index.html", "index.html"),
        ("404.html", "404.html"),
    )
    download_batch_size: Optional[int] = DEFAULT_DOWNLOAD_BATCH_SIZE
    manual_archive_url: Optional[str] = None
    manual_archive_cache: Optional[Path] = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    user_agent: str = "catalog-site/0.1"

    @classmethod
    def from_roots(
        cls,
        source_root: Path = DEFAULT_SOURCE_ROOT,
        output_root: Path = DEFAULT_OUTPUT_ROOT,
        **overrides: Any,
    ) -> "BuildConfig":
        """Derive the conventional source layout from a single source root."""
        source_root = Path(source_root)
        values: dict = dict(
            output_root=Path(output_root),
            static_root=source_root / "static",
            data_root=source_root / "data",
            works_root=source_root / "works",
            templates_root=source_root / "templates",
            manual_archive_root=source_root / "manual",
        )
        values.update(overrides)
        if values.get("manual_archive_url") and not values.get("manual_archive_cache"):
            values["manual_archive_cache"] = source_root / "manual.zip"
        return cls(**values)

    @property
    def types_path(self) -> Path:
        return self.data_root / self.types_file

    @property
    def downloads_path(self) -> Path:
        return self.data_root / self.downloads_file

    @property
    def output_subdirs(self) -> Tuple[str, str, str]:
        return (self.cover_root, self.manual_root, self.translate_root)
