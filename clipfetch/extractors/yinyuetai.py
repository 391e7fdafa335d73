"""Extractor for yinyuetai.com music videos."""

from __future__ import annotations

import json
from typing import Any, Optional

from ..media import ExtractError, MediaData, MediaURL, Stream
from ..request import HttpClient
from ..utils import match_one_of

YINYUETAI_API = "https://ext.yinyuetai.com/main/"
ACTION_GET_MV_INFO = "get-h-mv-info"

_VIDEO_ID_PATTERNS = (
    r"https?://v.yinyuetai.com/video/(\d+)(?:\?vid=\d+)?",
    r"https?://v.yinyuetai.com/video/h5/(\d+)(?:\?vid=\d+)?",
    r"https?://m2.yinyuetai.com/video.html\?id=(\d+)",
)


def gen_api(action: str, param: str) -> str:
    """Build the API URL for an action and its query parameters."""
    return f"{YINYUETAI_API}{action}?json=true&{param}"


def _parse_response(body: str) -> dict[str, Any]:
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise ExtractError("url parse failed") from exc
    if not isinstance(data, dict):
        raise ExtractError("url parse failed")
    return data


def extract(url: str, client: Optional[HttpClient] = None) -> list[MediaData]:
    """Extract the streams of a yinyuetai video."""
    client = client or HttpClient()
    found = match_one_of(url, *_VIDEO_ID_PATTERNS)
    if not found or len(found) < 2:
        raise ExtractError("invalid url for yinyuetai")
    api_url = gen_api(ACTION_GET_MV_INFO, f"videoId={found[1]}")
    data = _parse_response(client.get(api_url, url))

    if data.get("error"):
        raise ExtractError(data.get("message", ""))
    core = (data.get("videoInfo") or {}).get("coreVideoInfo") or {}
    if core.get("error"):
        raise ExtractError(core.get("errorMsg", ""))

    streams: dict[str, Stream] = {}
    for model in core.get("videoURLModels") or []:
        file_size = int(model.get("fileSize", 0) or 0)
        streams[model.get("qualityLevel", "")] = Stream(
            urls=[MediaURL(url=model.get("videoURL", ""), size=file_size, ext="mp4")],
            size=file_size,
            quality=model.get("qualityLevelName", ""),
        )
    return [
        MediaData(
            site="音悦台 yinyuetai.com",
            title=core.get("videoName", ""),
            type="video",
            streams=streams,
            url=url,
        )
    ]