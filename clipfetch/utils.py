"""Helpers for matching, naming files and selecting playlist items."""

from __future__ import annotations

import hashlib
import json
import os
import re
import sys
from typing import IO, Iterable, Optional, Union
from urllib.parse import urljoin, urlsplit

from .request import HttpClient

MAXLENGTH = 80
VERSION = "0.1.0"

_ELLIPSES = "..."
_DOMAIN_PATTERN = (
    r"([a-z0-9][-a-z0-9]{0,62})\."
    r"(com\.cn|com\.hk|"
    r"cn|com|net|edu|gov|biz|org|info|pro|name|xxx|xyz|be|"
    r"me|top|cc|tv|tt|fm)"
)
_NAME_REPLACEMENTS = {"\n": " ", "/": " ", "|": "-", ": ": "：", ":": "：", "'": "’"}
_WINDOWS_REPLACEMENTS = {c: " " for c in ('"', "?", "*", "\\", "<", ">")}
_READ_CHUNK = 32 * 1024


def _replace_all(text: str, table: dict[str, str]) -> str:
    pattern = "|".join(re.escape(key) for key in table)
    return re.sub(pattern, lambda m: table[m.group(0)], text)


def _split_json_path(path: str) -> list[str]:
    parts, current, escaped = [], [], False
    for char in path:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == ".":
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def get_string_from_json(json_text: str, path: str) -> str:
    """Return the value at a dotted path in a JSON document as a string."""
    try:
        value = json.loads(json_text)
    except ValueError:
        return ""
    for key in _split_json_path(path):
        if isinstance(value, dict) and key in value:
            value = value[key]
        elif isinstance(value, list) and key == "#":
            value = len(value)
        elif isinstance(value, list) and key.isdigit() and int(key) < len(value):
            value = value[int(key)]
        else:
            return ""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def match_one_of(text: str, *args: str) -> Optional[list[str]]:
    """Return the whole match and its groups for the first pattern that matches."""
    for pattern in args:
        match = re.search(pattern, text)
        if match:
            return [match.group(0), *(group or "" for group in match.groups())]
    return None


def match_all(text: str, pattern: str) -> list[list[str]]:
    """Return the whole match and groups of every match of pattern."""
    return [
        [match.group(0), *(group or "" for group in match.groups())]
        for match in re.finditer(pattern, text)
    ]


def file_size(file_path: str) -> tuple[int, bool]:
    """Return the size of a file and whether it exists."""
    try:
        return os.stat(file_path).st_size, True
    except FileNotFoundError:
        return 0, False


def domain(url: str) -> str:
    """Return the second-level domain name found in url, or 'Universal'."""
    found = match_one_of(url, _DOMAIN_PATTERN)
    return found[1] if found else "Universal"


def limit_length(s: str, length: int) -> str:
    """Shorten s to length characters, ending it with an ellipsis."""
    if len(s) > length:
        return s[: length - len(_ELLIPSES)] + _ELLIPSES
    return s


def file_name(name: str, ext: str = "") -> str:
    """Turn name into a valid file name with the given extension."""
    name = _replace_all(name, _NAME_REPLACEMENTS)
    if sys.platform == "win32":
        name = _replace_all(name, _WINDOWS_REPLACEMENTS)
    limited = limit_length(name, MAXLENGTH)
    return f"{limited}.{ext}" if ext else limited


def file_path(name: str, ext: str, escape: bool, output_path: str = "") -> str:
    """Build the output path of a file; the output directory must exist."""
    if output_path:
        os.stat(output_path)
    name_part = file_name(name, ext) if escape else f"{name}.{ext}"
    return os.path.join(output_path, name_part)


def file_line_counter(stream: IO) -> int:
    """Count the newline characters in a text or binary stream."""
    count = 0
    for chunk in iter(lambda: stream.read(_READ_CHUNK), None):
        if not chunk:
            break
        count += chunk.count(b"\n" if isinstance(chunk, bytes) else "\n")
    return count


def _atoi(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def need_download_list(length: int, items: str = "", start: int = 1, end: int = 0) -> list[int]:
    """Return the 1-based item numbers selected by items or by start/end."""
    if items:
        selected = []
        for selection in items.split(","):
            bounds = selection.split("-")
            first = _atoi(bounds[0])
            last = _atoi(bounds[1]) if len(bounds) >= 2 else first
            selected.extend(range(first, last + 1))
        return selected
    start = max(start, 1)
    if end == 0:
        end = length
    end = max(end, start)
    return range_list(start, end)


def parse_input_file(stream: IO, items: str = "", start: int = 1, end: int = 0) -> list[str]:
    """Read URLs from a stream, one per line, keeping the selected lines."""
    lines = []
    for line in stream:
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        lines.append(line.strip())
    wanted = set(need_download_list(len(lines), items, start, end))
    return [line for index, line in enumerate(lines) if index in wanted]


def item_in_slice(item: object, items: Iterable[object]) -> bool:
    """Tell whether items holds a value equal to item and of the same type."""
    return any(type(candidate) is type(item) and candidate == item for candidate in items)


def get_name_and_ext(uri: str, client: Optional[HttpClient] = None) -> tuple[str, str]:
    """Return the file name and extension of a URL."""
    parts = urlsplit(uri)
    if not parts.scheme and not uri.startswith("/"):
        raise ValueError(f"invalid URI for request: {uri!r}")
    pieces = parts.path.split("/")[-1].split(".")
    if len(pieces) > 1:
        return pieces[0], pieces[1]
    content_type = (client or HttpClient()).content_type(uri, uri)
    if "/" not in content_type:
        raise ValueError(f"unexpected Content-Type {content_type!r} for {uri}")
    return pieces[0], content_type.split("/")[1]


def md5(text: str) -> str:
    """Return the hexadecimal MD5 digest of text."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def m3u8_urls(uri: str, client: Optional[HttpClient] = None) -> list[str]:
    """Return the absolute URLs of all segments of an m3u8 playlist."""
    if not uri:
        raise ValueError("url is null")
    playlist = (client or HttpClient()).get(uri, "", None)
    urls = []
    for raw in playlist.split("\n"):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        urls.append(line if line.startswith("http") else urljoin(uri, line))
    return urls


def version_text() -> str:
    """Return the version banner."""
    return f"\nclipfetch: version {VERSION}, A fast, simple and clean video downloader.\n\n"


def reverse(s: str) -> str:
    """Return s reversed."""
    return s[::-1]


def range_list(low: int, high: int) -> list[int]:
    """Return the integers from low to high inclusive."""
    return list(range(low, high + 1))