import base64
import json
import re

import pytest
import responses

from clipfetch.extractors import youku
from clipfetch.media import ExtractError
from clipfetch.request import HttpClient

UPS_PATTERN = re.compile(r"https://ups\.youku\.com/ups/get\.json.*")
EG_URL = "http://log.mmstat.com/eg.js"
VIDEO_URL = "http://v.youku.com/v_show/id_XMzUzMjE3NDczNg==.html"
VIDEO_TITLE = "车事儿: 智能汽车已经不在遥远 东风风光iX5发布"


@pytest.fixture
def rsps():
    with responses.RequestsMock() as mock:
        yield mock


def _client():
    return HttpClient(retry_times=1, retry_delay=0)


def _default_stream(data):
    return sorted(data.streams.values(), key=lambda s: s.size, reverse=True)[0]


def _ups_payload(show_title=""):
    return {
        "data": {
            "video": {"title": VIDEO_TITLE},
            "show": {"title": show_title},
            "stream": [
                {
                    "stream_type": "mp4hd2v2",
                    "width": 1280,
                    "height": 720,
                    "size": 22692900,
                    "audio_lang": "default",
                    "segs": [
                        {"size": 12000000, "cdn_url": "http://cdn.example.com/1.mp4?a=1"},
                        {"size": 10692900, "cdn_url": "http://cdn.example.com/2.mp4?a=2"},
                    ],
                },
                {
                    "stream_type": "mp4sd",
                    "width": 640,
                    "height": 360,
                    "size": 5000,
                    "audio_lang": "default",
                    "segs": [{"size": 5000, "cdn_url": "http://cdn.example.com/3.mp4"}],
                },
            ],
        }
    }


def _register(mock, payload):
    mock.add(responses.GET, EG_URL, body="", headers={"Set-Cookie": "cna=abc123; path=/"})
    mock.add(responses.GET, UPS_PATTERN, body=json.dumps(payload))


def test_extract_normal(rsps):
    _register(rsps, _ups_payload())
    data = youku.extract(VIDEO_URL, _client())
    item = data[0]
    assert item.title == VIDEO_TITLE
    assert item.site == "优酷 youku.com"
    stream = _default_stream(item)
    assert stream.size == 22692900
    assert stream.quality == "mp4hd2v2 1280x720"
    assert [u.ext for u in stream.urls] == ["mp4", "mp4"]
    ups_url = rsps.calls[1].request.url
    assert "vid=XMzUzMjE3NDczNg" in ups_url
    assert "utid=abc123" in ups_url
    assert "ccode=0590" in ups_url


def test_extract_joins_show_title(rsps):
    _register(rsps, _ups_payload(show_title="车事儿合集"))
    data = youku.extract(VIDEO_URL, _client())
    assert data[0].title == "车事儿合集 " + VIDEO_TITLE


def test_extract_show_title_contained(rsps):
    _register(rsps, _ups_payload(show_title="车事儿"))
    data = youku.extract(VIDEO_URL, _client())
    assert data[0].title == VIDEO_TITLE


def test_extract_password_appended(rsps):
    _register(rsps, _ups_payload())
    password = "password"
    data = youku.extract(VIDEO_URL, _client(), youku.YoukuSettings(password=password))
    assert data[0].title == VIDEO_TITLE
    assert _default_stream(data[0]).size == 22692900
    assert rsps.calls[1].request.url.endswith("&password=password")


def test_extract_api_error(rsps):
    _register(rsps, {"data": {"error": {"code": -6004, "note": "not allowed"}}})
    with pytest.raises(ExtractError, match="not allowed"):
        youku.extract(VIDEO_URL, _client())


def test_extract_without_cna_cookie(rsps):
    rsps.add(responses.GET, EG_URL, body="")
    with pytest.raises(ExtractError, match="url parse failed"):
        youku.extract(VIDEO_URL, _client())


def test_extract_invalid_url():
    with pytest.raises(ExtractError, match="url parse failed"):
        youku.extract("http://v.youku.com/v_show/nothing", _client())


def test_get_audio_lang():
    assert youku.get_audio_lang("guoyu") == "国语"
    assert youku.get_audio_lang("ja") == "日语"
    assert youku.get_audio_lang("yue") == "粤语"
    assert youku.get_audio_lang("en") == "en"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", 0),
        ("a", 97),
        ("hello", 99162322),
        ("polygenelubricants", -2147483648),
    ],
)
def test_hash_code(text, expected):
    assert youku.hash_code(text) == expected


def test_generate_utdid_layout():
    raw = base64.b64decode(youku.generate_utdid())
    assert len(raw) == 18
    assert raw[8:10] == b"\x03\x00"


def test_gen_streams_with_audio_lang():
    data = {
        "stream": [
            {
                "stream_type": "mp4hd",
                "width": 1920,
                "height": 1080,
                "size": 10,
                "audio_lang": "yue",
                "segs": [{"size": 10, "cdn_url": "http://cdn.example.com/a.flv?x=1"}],
            }
        ]
    }
    streams = youku.gen_streams(data)
    assert list(streams) == ["mp4hd-yue"]
    stream = streams["mp4hd-yue"]
    assert stream.quality == "mp4hd 1920x1080 粤语"
    assert stream.size == 10
    assert stream.urls[0].ext == "flv"
    assert stream.urls[0].url == "http://cdn.example.com/a.flv?x=1"


def test_gen_streams_without_segments():
    data = {"stream": [{"stream_type": "mp4", "audio_lang": "default", "segs": []}]}
    with pytest.raises(ExtractError):
        youku.gen_streams(data)