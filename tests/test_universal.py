import pytest
import responses

from clipfetch.extractors.universal import extract
from clipfetch.request import HttpClient

URL = "https://img9.bcyimg.com/drawer/15294/post/1799t/1f5a87801a0711e898b12b640777720f.jpg"


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


def test_extract(mocked, capsys):
    mocked.add(
        responses.GET,
        URL,
        body=b"",
        headers={"Content-Length": "1051042", "Content-Type": "image/jpeg"},
    )
    data = extract(URL, _client())
    _check(data[0], "1f5a87801a0711e898b12b640777720f", size=1051042)
    assert data[0].type == "image/jpeg"
    assert data[0].streams["default"].urls[0].ext == "jpg"
    assert "try to download it directly" in capsys.readouterr().out


def test_extract_rejects_relative_url():
    with pytest.raises(ValueError):
        extract("test", _client())