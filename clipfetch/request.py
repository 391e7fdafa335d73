"""HTTP access shared by the extractors."""

from __future__ import annotations

import itertools
import time
import warnings
from dataclasses import dataclass, field
from typing import IO, Mapping, Optional, Union

import requests
from requests.structures import CaseInsensitiveDict

# Certificates are not verified, so keep the console free of the matching warning.
warnings.filterwarnings("ignore", message="Unverified HTTPS request")

FAKE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Charset": "UTF-8,*;q=0.5",
    "Accept-Encoding": "gzip,deflate",
    "Accept-Language": "en-US,en;q=0.8",
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/69.0.3497.81 Safari/537.36"
    ),
}

_HTTP_ONLY_PREFIX = "#HttpOnly_"

Body = Union[bytes, str, IO[bytes], None]


class RequestError(Exception):
    """An HTTP request failed on every attempt."""


def parse_cookie_string(text: str) -> list[tuple[str, str]]:
    """Parse cookies in the Netscape cookie-file format into (name, value) pairs."""
    cookies = []
    for raw in text.splitlines():
        line = raw.rstrip("\r\n")
        if line.startswith(_HTTP_ONLY_PREFIX):
            line = line[len(_HTTP_ONLY_PREFIX):]
        elif not line.strip() or line.startswith("#"):
            continue
        fields = line.split("\t")
        if len(fields) < 7:
            continue
        cookies.append((fields[5], fields[6]))
    return cookies


@dataclass
class HttpClient:
    """Sends requests with browser-like headers, cookies and retries."""

    cookie: str = ""
    refer: str = ""
    retry_times: int = 10
    debug: bool = False
    timeout: float = 15 * 60
    retry_delay: float = 1.0
    fake_headers: dict[str, str] = field(default_factory=lambda: dict(FAKE_HEADERS))

    def _build_headers(self, url: str, headers: Mapping[str, str]) -> dict[str, str]:
        merged = dict(self.fake_headers)
        merged.update(headers)
        if "Referer" not in headers:
            merged["Referer"] = url
        if self.cookie:
            cookies = parse_cookie_string(self.cookie)
            if cookies:
                merged["Cookie"] = "; ".join(f"{name}={value}" for name, value in cookies)
            else:
                merged["Cookie"] = self.cookie
        if self.refer:
            merged["Referer"] = self.refer
        return merged

    def request(
        self,
        method: str,
        url: str,
        body: Body = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        """Send a request, retrying until it succeeds or the attempts run out."""
        sent_headers = self._build_headers(url, headers or {})
        for attempt in itertools.count(1):
            try:
                response = requests.request(
                    method,
                    url,
                    data=body,
                    headers=sent_headers,
                    timeout=self.timeout,
                    verify=False,
                    stream=True,
                )
            except requests.RequestException as exc:
                failure = f"request error: {exc}"
            else:
                if response.status_code < 400:
                    break
                failure = f"{url} request error: HTTP {response.status_code}"
                response.close()
            if attempt >= self.retry_times:
                raise RequestError(failure)
            time.sleep(self.retry_delay)

        if self.debug:
            print()
            print(f"URL:         {url}")
            print(f"Method:      {method}")
            print(f"Headers:     {sent_headers!r}")
            print(f"Status Code: {response.status_code}")
        return response

    def get_bytes(
        self, url: str, refer: str = "", headers: Optional[Mapping[str, str]] = None
    ) -> bytes:
        """Fetch the body of a GET request as bytes."""
        request_headers = dict(headers or {})
        if refer:
            request_headers["Referer"] = refer
        with self.request("GET", url, None, request_headers) as response:
            return response.content

    def get(
        self, url: str, refer: str = "", headers: Optional[Mapping[str, str]] = None
    ) -> str:
        """Fetch the body of a GET request as text."""
        return self.get_bytes(url, refer, headers).decode("utf-8", errors="replace")

    def headers(self, url: str, refer: str = "") -> CaseInsensitiveDict:
        """Return the response headers of a GET request."""
        with self.request("GET", url, None, {"Referer": refer}) as response:
            return response.headers

    def size(self, url: str, refer: str = "") -> int:
        """Return the Content-Length of the url."""
        length = self.headers(url, refer).get("Content-Length", "")
        if not length:
            raise RequestError("Content-Length is not present")
        return int(length)

    def content_type(self, url: str, refer: str = "") -> str:
        """Return the media type of the url, without parameters."""
        return self.headers(url, refer).get("Content-Type", "").split(";")[0]