"""Data types describing extracted media."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


class ExtractError(Exception):
    """A page could not be turned into media data."""


@dataclass
class MediaURL:
    """One downloadable file of a stream."""

    url: str
    size: int = 0
    ext: str = ""


@dataclass
class Stream:
    """One quality variant of a media item, made of one or more files."""

    urls: list[MediaURL] = field(default_factory=list)
    size: int = 0
    quality: str = ""


@dataclass
class MediaData:
    """Everything an extractor found about one media item."""

    site: str = ""
    title: str = ""
    type: str = ""
    streams: dict[str, Stream] = field(default_factory=dict)
    url: str = ""
    err: Optional[Exception] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the data as plain JSON-compatible values."""
        return {
            "site": self.site,
            "title": self.title,
            "type": self.type,
            "streams": {key: asdict(stream) for key, stream in self.streams.items()},
            "url": self.url,
            "err": str(self.err) if self.err is not None else None,
        }