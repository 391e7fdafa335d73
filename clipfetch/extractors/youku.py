"""Extractor for youku.com."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import random
import struct
import time
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote_plus

from ..media import ExtractError, MediaData, MediaURL, Stream
from ..request import HttpClient
from ..utils import match_one_of

YOUKU_REFERER = "https://v.youku.com"
DEFAULT_CCODE = "0590"
DEFAULT_CKEY = "placeholder"

_UTDID_CCODE = "0103010102"
_UTDID_HMAC_KEY = b"d6fc3a4a06adbde89223bvefedc24fecde188aaa9161"
_AUDIO_LANGS = {"guoyu": "国语", "ja": "日语", "yue": "粤语"}


@dataclass
class YoukuSettings:
    """Parameters sent to the youku ups API."""

    ccode: str = DEFAULT_CCODE
    ckey: str = DEFAULT_CKEY
    password: Optional[str] = None


def get_audio_lang(lang: str) -> str:
    """Return the display name of an audio language code."""
    return _AUDIO_LANGS.get(lang, lang)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _int32_bytes(value: int) -> bytes:
    return struct.pack(">i", _to_int32(value))


def hash_code(s: str) -> int:
    """Return the 32-bit string hash used by the youku player."""
    result = 0
    for char in s:
        result = _to_int32(result * 0x1F + ord(char))
    return result


def _random_int31() -> int:
    return random.getrandbits(31)


def generate_utdid() -> str:
    """Generate a random device id in the format the player uses."""
    timestamp = _to_int32(int(time.time()))
    buffer = bytearray()
    buffer += _int32_bytes(timestamp - 60 * 60 * 8)
    buffer += _int32_bytes(_random_int31())
    buffer += b"\x03\x00"
    imei = str(_random_int31())
    buffer += _int32_bytes(hash_code(imei))
    digest = hmac.new(_UTDID_HMAC_KEY, bytes(buffer), hashlib.sha1).digest()
    buffer += _int32_bytes(hash_code(base64.b64encode(digest).decode("ascii")))
    return base64.b64encode(bytes(buffer)).decode("ascii")


def gen_streams(data: dict[str, Any]) -> dict[str, Stream]:
    """Build streams from the 'data' section of a ups response."""
    streams: dict[str, Stream] = {}
    for stream in data.get("stream") or []:
        stream_type = stream.get("stream_type", "")
        width = stream.get("width", 0)
        height = stream.get("height", 0)
        audio_lang = stream.get("audio_lang", "")
        if audio_lang == "default":
            key = stream_type
            quality = f"{stream_type} {width}x{height}"
        else:
            key = f"{stream_type}-{audio_lang}"
            quality = f"{stream_type} {width}x{height} {get_audio_lang(audio_lang)}"

        segs = stream.get("segs") or []
        if not segs:
            raise ExtractError(f"stream {key} has no segments")
        ext = segs[0].get("cdn_url", "").split("?")[0].split(".")[-1]
        streams[key] = Stream(
            urls=[
                MediaURL(url=seg.get("cdn_url", ""), size=int(seg.get("size", 0) or 0), ext=ext)
                for seg in segs
            ],
            size=int(stream.get("size", 0) or 0),
            quality=quality,
        )
    return streams


def _find_utid(client: HttpClient) -> str:
    if "cna" in client.cookie:
        found = match_one_of(client.cookie, r"cna=(.+?);", r"cna\s+(.+?)\s", r"cna\s+(.+?)$")
    else:
        headers = client.headers("http://log.mmstat.com/eg.js", YOUKU_REFERER)
        found = match_one_of(headers.get("Set-Cookie", ""), r"cna=(.+?);")
    if not found or len(found) < 2:
        raise ExtractError("url parse failed")
    return found[1]


def _youku_ups(vid: str, client: HttpClient, settings: YoukuSettings) -> dict[str, Any]:
    utid = _find_utid(client)
    data: dict[str, Any] = {}
    for ccode in (settings.ccode,):
        if ccode == _UTDID_CCODE:
            utid = generate_utdid()
        url = (
            f"https://ups.youku.com/ups/get.json?vid={vid}&ccode={ccode}"
            f"&client_ip=192.168.1.1&client_ts={int(time.time()) // 1000}"
            f"&utid={quote_plus(utid)}&ckey={quote_plus(settings.ckey)}"
        )
        if settings.password:
            url = f"{url}&password={settings.password}"
        body = client.get_bytes(url, YOUKU_REFERER)
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise ExtractError(f"invalid ups response: {exc}") from exc
        if not isinstance(data, dict):
            raise ExtractError("invalid ups response")
        if not (data.get("data") or {}).get("error"):
            return data
    return data


def extract(
    url: str,
    client: Optional[HttpClient] = None,
    settings: Optional[YoukuSettings] = None,
) -> list[MediaData]:
    """Extract the streams of a youku video."""
    client = client or HttpClient()
    settings = settings or YoukuSettings()
    found = match_one_of(url, r"id_(.+?)\.html", r"id_(.+)")
    if not found or len(found) < 2:
        raise ExtractError("url parse failed")

    data = (_youku_ups(found[1], client, settings).get("data") or {})
    error = data.get("error") or {}
    if error.get("code", 0) != 0:
        raise ExtractError(error.get("note", ""))

    streams = gen_streams(data)
    video_title = (data.get("video") or {}).get("title", "")
    show_title = (data.get("show") or {}).get("title", "")
    if not show_title or show_title in video_title:
        full_title = video_title
    else:
        full_title = f"{show_title} {video_title}"
    return [
        MediaData(
            site="优酷 youku.com",
            title=full_title,
            type="video",
            streams=streams,
            url=url,
        )
    ]