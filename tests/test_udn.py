import pytest
import responses

from clipfetch.extractors.udn import extract, get_cdn_url, prepare_embed_url
from clipfetch.media import ExtractError
from clipfetch.request import HttpClient

EMBED = "https://video.udn.com/embed/news/300040"
TITLE = '生物老師男變女 全校挺"做自己"'
SRC = "https://vod.example.com/300040.mp4"


def _page(title, cdn):
    return (
        "<script>\n"
        f"      title: '{title}',\n"
        "        link: 'https://video.udn.com/news/300040',\n"
        "        sources: {\n"
        "            hls: 'x',\n"
        f"            mp4: '//{cdn}'\n"
        "        },\n"
        "        subtitles: []\n"
        "</script>"
    )


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _client():
    return HttpClient(retry_times=1, retry_delay=0)


def _check(data, title, size=0, quality=""):
    default = max(data.streams.values(), key=lambda s: s.size)
    assert data.title == title
    if quality:
        assert default.quality == quality
    if size:
        assert default.size == size


def test_extract(mocked):
    mocked.add(responses.GET, EMBED, body=_page(TITLE, "cdn.example.com/src/300040"))
    mocked.add(responses.GET, "http://cdn.example.com/src/300040", body=SRC)
    mocked.add(responses.GET, SRC, body=b"", headers={"Content-Length": "12740874"})
    data = extract(EMBED, _client())
    _check(data[0], TITLE, size=12740874)
    assert data[0].streams["normal"].urls[0].url == SRC
    assert data[0].url == EMBED


def test_extract_without_cdn_url(mocked):
    mocked.add(responses.GET, EMBED, body="<html>nothing here</html>")
    with pytest.raises(ExtractError, match="empty list"):
        extract(EMBED, _client())


def test_prepare_embed_url():
    assert prepare_embed_url("https://video.udn.com/news/300040") == EMBED
    assert prepare_embed_url(EMBED) == EMBED


def test_get_cdn_url():
    assert get_cdn_url(_page("t", "cdn.example.com/a")) == "cdn.example.com/a"
    assert get_cdn_url("no player here") == ""