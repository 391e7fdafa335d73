"""Fallback extractor that downloads the URL itself."""

from __future__ import annotations

from typing import Optional

from ..media import MediaData, MediaURL, Stream
from ..request import HttpClient
from ..utils import get_name_and_ext


def extract(url: str, client: Optional[HttpClient] = None) -> list[MediaData]:
    """Describe url as a single directly downloadable file."""
    client = client or HttpClient()
    print("\nclipfetch doesn't support this URL right now, but it will try to download it directly")
    filename, ext = get_name_and_ext(url, client)
    size = client.size(url, url)
    stream = Stream(urls=[MediaURL(url=url, size=size, ext=ext)], size=size)
    content_type = client.content_type(url, url)
    return [
        MediaData(
            site="Universal",
            title=filename,
            type=content_type,
            streams={"default": stream},
            url=url,
        )
    ]