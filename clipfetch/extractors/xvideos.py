"""Extractor for xvideos.com."""

from __future__ import annotations

from typing import Optional

from ..media import MediaData, MediaURL, Stream
from ..request import HttpClient
from ..utils import match_one_of

_LOW_FLAG = "html5player.setVideoUrlLow('"
_LOW_FINAL_FLAG = "');\n\t    html5player.setVideoUrlHigh("
_HIGH_FLAG = "html5player.setVideoUrlHigh('"
_HIGH_FINAL_FLAG = "');\n\t    html5player.setVideoHLS("
_QUALITY_LOW = "low"
_QUALITY_HIGH = "high"


def _between(html: str, start_flag: str, end_flag: str) -> Optional[str]:
    start = html.find(start_flag)
    end = html.find(end_flag)
    if start == -1 or end == -1:
        return None
    return html[start + len(start_flag):end]


def get_sources(html: str) -> list[tuple[str, str]]:
    """Return (url, quality) pairs for the low and high quality videos of a page."""
    sources = []
    for start_flag, end_flag, quality in (
        (_LOW_FLAG, _LOW_FINAL_FLAG, _QUALITY_LOW),
        (_HIGH_FLAG, _HIGH_FINAL_FLAG, _QUALITY_HIGH),
    ):
        src = _between(html, start_flag, end_flag)
        if src is not None:
            sources.append((src, quality))
    return sources


def extract(url: str, client: Optional[HttpClient] = None) -> list[MediaData]:
    """Extract the videos of an xvideos page."""
    client = client or HttpClient()
    html = client.get(url, url)
    found = match_one_of(html, r"<title>(.+?)</title>")
    video_title = found[1] if found else "xvideos"

    streams: dict[str, Stream] = {}
    for src, quality in get_sources(html):
        size = client.size(src, url)
        streams[quality] = Stream(
            urls=[MediaURL(url=src, size=size, ext="mp4")],
            size=size,
            quality=quality,
        )
    return [
        MediaData(
            site="XVIDEOS xvideos.com",
            title=video_title,
            type="video",
            streams=streams,
            url=url,
        )
    ]