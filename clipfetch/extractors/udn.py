"""Extractor for video.udn.com."""

from __future__ import annotations

import re
from typing import Optional

from ..media import ExtractError, MediaData, MediaURL, Stream
from ..request import HttpClient
from ..utils import match_one_of

_START_FLAG = "',\n            mp4: '//"
_END_FLAG = "'\n        },\n        subtitles"
_EMBED_PREFIX = "https://video.udn.com/embed/"
_TITLE_PATTERN = "title: '(.+?)',\n        link:"


def get_cdn_url(html: str) -> str:
    """Return the CDN address embedded in the player page, or ''."""
    found = match_one_of(html, re.escape(_START_FLAG) + "(.+?)" + re.escape(_END_FLAG))
    return found[1] if found and found[1] else ""


def prepare_embed_url(url: str) -> str:
    """Turn a news URL into the URL of its embedded player."""
    if _EMBED_PREFIX not in url:
        return _EMBED_PREFIX + "news/" + url.split("/")[-1]
    return url


def extract(url: str, client: Optional[HttpClient] = None) -> list[MediaData]:
    """Extract the video of a udn news page."""
    client = client or HttpClient()
    url = prepare_embed_url(url)
    if not url:
        raise ExtractError("url parse failed")
    html = client.get(url, url)
    found = match_one_of(html, _TITLE_PATTERN)
    video_title = found[1] if found else "udn"
    cdn_url = get_cdn_url(html)
    if not cdn_url:
        raise ExtractError("empty list")
    src_url = client.get("http://" + cdn_url, url)
    size = client.size(src_url, url)
    quality = "normal"
    stream = Stream(urls=[MediaURL(url=src_url, size=size, ext="mp4")], size=size, quality=quality)
    return [
        MediaData(
            site="udn udn.com",
            title=video_title,
            type="video",
            streams={quality: stream},
            url=url,
        )
    ]