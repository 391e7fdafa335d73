"""HTML helpers used by the extractors."""

from __future__ import annotations

from typing import Callable, Optional

from bs4 import BeautifulSoup

from .media import MediaURL
from .request import HttpClient
from .utils import get_name_and_ext


def get_doc(html: str) -> BeautifulSoup:
    """Parse an HTML string into a document."""
    return BeautifulSoup(html, "html.parser")


def get_images(
    url: str,
    html: str,
    img_class: str,
    url_handler: Optional[Callable[[str], str]] = None,
    client: Optional[HttpClient] = None,
) -> tuple[str, list[MediaURL]]:
    """Collect the images whose class attribute is exactly img_class."""
    client = client or HttpClient()
    doc = get_doc(html)
    page_title = title(doc)
    urls: list[MediaURL] = []
    last_error: Optional[Exception] = None
    for img in doc.find_all("img"):
        if " ".join(img.get("class") or []) != img_class:
            continue
        src = img.get("src", "")
        if url_handler is not None:
            src = url_handler(src)
        try:
            size = client.size(src, url)
            _, ext = get_name_and_ext(src, client)
        except Exception as exc:  # the outcome of the last image decides
            last_error = exc
            continue
        last_error = None
        urls.append(MediaURL(url=src, size=size, ext=ext))
    if last_error is not None:
        raise last_error
    return page_title, urls


def title(doc: BeautifulSoup) -> str:
    """Return the page title from h1, og:title or the title tag, in that order."""
    heading = doc.find("h1")
    text = heading.get_text().strip().replace("\n", "") if heading else ""
    if not text:
        meta = doc.find("meta", attrs={"property": "og:title"})
        text = meta.get("content", "") if meta else ""
    if not text:
        text = "".join(tag.get_text() for tag in doc.find_all("title"))
    return text