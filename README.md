# clipfetch

clipfetch reads video pages from a handful of sites and works out which
streams they offer: quality, size, file extension and the URL of every
part. The result comes back as plain Python objects. The package also has
the small helpers needed around that: safe file names, playlist item
selection, m3u8 segment lists, a bounded worker pool and ffmpeg merging of
downloaded parts.

## Extracting streams

Each site has a module under `clipfetch.extractors` with an `extract`
function. It takes the page URL and, optionally, an `HttpClient`, and
returns a list of `MediaData` records:

```python
from clipfetch.request import HttpClient
from clipfetch.extractors import vimeo

client = HttpClient()
for item in vimeo.extract("https://vimeo.com/254865724", client):
    print(item.title)
    for key, stream in item.streams.items():
        print(key, stream.quality, stream.size, [u.url for u in stream.urls])
```

Extractors:

- `clipfetch.extractors.universal`: treats the URL as one direct media
  file. The title is the file name, the type is the `Content-Type` and the
  only stream is `"default"`.
- `clipfetch.extractors.udn`: video.udn.com news videos. News URLs are
  turned into player URLs by `prepare_embed_url`.
- `clipfetch.extractors.vimeo`: vimeo.com and player.vimeo.com. There is one
  stream per progressive profile.
- `clipfetch.extractors.xvideos`: the `"low"` and `"high"` streams found by
  `get_sources`.
- `clipfetch.extractors.yinyuetai`: v.yinyuetai.com and m2.yinyuetai.com
  videos, read through the site's JSON API.
- `clipfetch.extractors.youku`: youku.com. It also takes a `YoukuSettings`
  with the `ccode`, the `ckey` and an optional video password:

```python
from clipfetch.extractors import youku

settings = youku.YoukuSettings(ccode="0590", ckey="placeholder")
data = youku.extract("http://v.youku.com/v_show/id_XMzUzMjE3NDczNg==.html", None, settings)
```

The records are dataclasses from `clipfetch.media`:

- `MediaData`: `site`, `title`, `type`, `streams`, `url` and `err`.
  `to_dict()` gives JSON-ready values.
- `Stream`: `urls`, `size` and `quality`.
- `MediaURL`: `url`, `size` and `ext`.

A page that cannot be understood raises `clipfetch.media.ExtractError`.

## HTTP

`clipfetch.request.HttpClient` sends browser-like headers and sets the
`Referer` to the requested URL unless one is given. It does not verify TLS
certificates. Its fields are:

- `retry_times` (default 10) and `retry_delay` (default 1 second): failed
  requests and responses with a status of 400 or higher are retried. After
  the last attempt `RequestError` is raised.
- `cookie`: Netscape cookie-file text, or a raw `Cookie` header value.
  `parse_cookie_string` reads the cookie-file form.
- `refer`: a `Referer` that overrides all others.
- `debug`: prints the URL, method, headers and status of each request.
- `timeout`: the request timeout in seconds.

It offers `get`, `get_bytes`, `headers`, `size` (from `Content-Length`) and
`content_type` (the media type without parameters).

## Utilities

`clipfetch.utils` holds the helpers:

```python
from clipfetch.utils import domain, file_name, need_download_list

domain("http://www.aa.com.cn")                   # "aa"
file_name("hello:world", "txt")                  # "hello：world.txt"
need_download_list(10, "1-3, 5, 7-8, 10", 1, 0)  # [1, 2, 3, 5, 7, 8, 10]
```

- Selecting items: `need_download_list(length, items, start, end)`. Without
  `items` it picks `start` to `end`, and an `end` of 0 means the last item.
- Input files: `parse_input_file(stream, items, start, end)` reads URLs one
  per line and keeps the selected lines.
- File names: `file_name` replaces characters that are not safe in file
  names and cuts names to 80 characters. `file_path` joins the name to an
  output directory, which must exist.
- URL helpers: `get_name_and_ext` gives the name and extension of a URL and
  asks the server for the `Content-Type` when the path has no extension.
  `m3u8_urls` returns the absolute URLs of all segments of a playlist.
- Matching and JSON: `match_one_of`, `match_all` and
  `get_string_from_json` (dotted paths such as `"children.1"`).
- Smaller helpers: `file_size`, `file_line_counter`, `item_in_slice`,
  `md5`, `reverse`, `range_list` and `version_text`.

`clipfetch.parser` parses HTML with Beautiful Soup:

- `get_doc` parses a page.
- `title` takes the first `h1`, then `og:title`, then `<title>`.
- `get_images` collects the images with a given class, with their sizes and
  extensions.

## Working in parallel

`clipfetch.pool.WaitGroupPool(size)` caps how many workers run at once. A
size of 0 or less means no cap.

```python
import threading
from clipfetch.pool import WaitGroupPool

pool = WaitGroupPool(10)

def work(n):
    try:
        ...
    finally:
        pool.done()

for n in range(100):
    pool.add()
    threading.Thread(target=work, args=(n,)).start()
pool.wait()
```

## Merging parts

`clipfetch.ffmpeg.merge_to_mp4` joins downloaded parts into one MP4.
`merge_audio_and_video` muxes separate audio and video files. Both:

- need the `ffmpeg` program on the `PATH`;
- remove the parts once merging succeeds;
- raise `MergeError` with ffmpeg's error output when merging fails.

## What it does not do

clipfetch is a library only. It has no command-line program. It does not
choose an extractor from a URL for you; call the site's module yourself. It
does not download stream files itself: it reports the URLs, sizes and
extensions of each stream, and fetching and saving the files is left to the
caller. The `ffmpeg` helpers then merge the saved parts.