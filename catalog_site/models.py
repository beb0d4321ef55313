"""Data models used throughout the build pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class LinkState(Enum):
    ABSENT = "absent"
    USE_DEFAULT = "use_default"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class LinkValue:
    """Resolution state of one localized-text link.

    A missing key or ``null`` in the record is ABSENT, ``true`` is USE_DEFAULT
    and a string is an EXPLICIT output-relative path.
    """

    state: LinkState
    path: Optional[str] = None

    @classmethod
    def absent(cls) -> "LinkValue":
        return cls(LinkState.ABSENT)

    @classmethod
    def use_default(cls) -> "LinkValue":
        return cls(LinkState.USE_DEFAULT)

    @classmethod
    def explicit(cls, path: str) -> "LinkValue":
        return cls(LinkState.EXPLICIT, path)

    @property
    def is_absent(self) -> bool:
        return self.state is LinkState.ABSENT

    @property
    def is_default(self) -> bool:
        return self.state is LinkState.USE_DEFAULT

    def __str__(self) -> str:
        return self.path or ""


@dataclass
class Links:
    """Wiki source identifier plus the per-language text links."""

    wiki: str
    ja: LinkValue = field(default_factory=LinkValue.absent)
    zh: LinkValue = field(default_factory=LinkValue.absent)


@dataclass
class Item:
    """An edition or variant of a work."""

    title: str
    type: List[str]
    links: Links


@dataclass
class Tags:
    era: str
    state: str
    type: List[str] = field(default_factory=list)


@dataclass
class Work:
    """One cataloged work; ``cover`` holds the source until assets are resolved."""

    order: int
    code: str
    title: str
    suffix: str
    cover: str
    hidden: bool
    tags: Tags
    items: List[Item] = field(default_factory=list)


@dataclass
class Download:
    """Binary asset fetched from ``source`` into the output-relative ``target``."""

    source: str
    target: str


@dataclass
class Translate:
    """Reference page fetched once and split into two per-language text files."""

    source: str
    ja: str
    zh: str
