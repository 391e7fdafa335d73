"""Extractor for vimeo.com."""

from __future__ import annotations

import json
from typing import Optional

from ..media import ExtractError, MediaData, MediaURL, Stream
from ..request import HttpClient
from ..utils import match_one_of


def extract(url: str, client: Optional[HttpClient] = None) -> list[MediaData]:
    """Extract the progressive streams of a Vimeo video."""
    client = client or HttpClient()
    if "player.vimeo.com" in url:
        html = client.get(url, url)
    else:
        found = match_one_of(url, r"vimeo\.com/(\d+)")
        if not found:
            raise ExtractError("url parse failed")
        html = client.get("https://player.vimeo.com/video/" + found[1], url)

    found = match_one_of(html, r"var \w+\s?=\s?({.+?});")
    if not found or len(found) < 2:
        raise ExtractError("url parse failed")
    try:
        config = json.loads(found[1])
    except ValueError as exc:
        raise ExtractError(f"invalid player data: {exc}") from exc

    progressive = (
        config.get("request", {}).get("files", {}).get("progressive", []) or []
    )
    streams: dict[str, Stream] = {}
    for video in progressive:
        video_url = video.get("url", "")
        size = client.size(video_url, url)
        streams[str(video.get("profile", 0))] = Stream(
            urls=[MediaURL(url=video_url, size=size, ext="mp4")],
            size=size,
            quality=video.get("quality", ""),
        )

    return [
        MediaData(
            site="Vimeo vimeo.com",
            title=config.get("video", {}).get("title", ""),
            type="video",
            streams=streams,
            url=url,
        )
    ]