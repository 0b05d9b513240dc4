"""Shared pytest fixtures for caption extraction tests."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from caption_extractor.config import Settings
from caption_extractor.fetcher import DocumentFetcher
from caption_extractor.main import app
from caption_extractor.service import CaptionExtractor, get_extractor

VIDEO_ID = "dQw4w9WgXcQ"
WATCH_URL = f"https://youtube.com/watch?v={VIDEO_ID}"
CAPTION_URL_EN = f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}&lang=en"
CAPTION_URL_EN_AUTO = f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}&lang=en&kind=asr"
CAPTION_URL_JA = f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}&lang=ja"

DEFAULT_TRACKS = [
    {
        "baseUrl": CAPTION_URL_EN_AUTO,
        "vssId": "a.en",
        "languageCode": "en",
        "kind": "asr",
        "name": {"simpleText": "English (auto-generated)"},
    },
    {
        "baseUrl": CAPTION_URL_EN,
        "vssId": ".en",
        "languageCode": "en",
        "name": {"simpleText": "English"},
    },
    {
        "baseUrl": CAPTION_URL_JA,
        "vssId": ".ja",
        "languageCode": "ja",
        "name": {"runs": [{"text": "Japanese"}]},
    },
]

TIMED_TEXT = (
    '<?xml version="1.0" encoding="utf-8" ?><transcript>'
    '<text start="0.5" dur="2.3">Hello &amp;amp; world</text>'
    '<text start="2.8" dur="1.7">It&amp;#39;s &amp;lt;b&amp;gt;bold&amp;lt;/b&amp;gt;</text>'
    "</transcript>"
)

TIMED_TEXT_JA = (
    '<?xml version="1.0" encoding="utf-8" ?><transcript>'
    '<text start="1.0" dur="2.0">こんにちは</text>'
    "</transcript>"
)


def build_watch_page(
    title: str | None = "Never Gonna Give You Up",
    description: str | None = "The official video",
    tracks: list[dict] | None = None,
) -> str:
    """Build minimal watch page markup with meta tags and a player response."""
    head = ""
    if title is not None:
        head += f'<meta name="title" content="{title}">'
    if description is not None:
        head += f'<meta name="description" content="{description}">'

    body = ""
    if tracks is not None:
        tracks_json = json.dumps(tracks, separators=(",", ":"))
        body = (
            '<script>var ytInitialPlayerResponse = {"captions":{"playerCaptionsTracklistRenderer":'
            f'{{"captionTracks":{tracks_json},"audioTracks":[{{"captionTrackIndices":[0]}}]}}}}}};</script>'
        )

    return f"<html><head>{head}</head><body>{body}</body></html>"


class UpstreamStub:
    """Serves canned documents through an httpx.MockTransport."""

    def __init__(self, documents: dict[str, tuple[int, str]] | None = None):
        self.documents = documents or {}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handler)

    def add(self, url: str, text: str, status_code: int = 200) -> None:
        self.documents[url] = (status_code, text)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, text = self.documents.get(str(request.url), (404, "Not Found"))
        return httpx.Response(status_code, text=text)

    @property
    def requested_urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]


class RecordingFetcher:
    """Fetcher double that returns canned documents and records proxy use."""

    def __init__(self, documents: dict[str, str]):
        self.documents = documents
        self.calls: list[tuple[str, str | None]] = []

    async def fetch(self, url: str, proxy_url: str | None = None) -> str:
        self.calls.append((url, proxy_url))
        return self.documents[url]


@pytest.fixture
def upstream():
    """Upstream with a captioned watch page and its timed-text documents."""
    stub = UpstreamStub()
    stub.add(WATCH_URL, build_watch_page(tracks=DEFAULT_TRACKS))
    stub.add(CAPTION_URL_EN, TIMED_TEXT)
    stub.add(CAPTION_URL_EN_AUTO, TIMED_TEXT)
    stub.add(CAPTION_URL_JA, TIMED_TEXT_JA)
    return stub


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def extractor(upstream, settings):
    """CaptionExtractor wired to the upstream stub."""
    return CaptionExtractor(settings, fetcher=DocumentFetcher(settings, transport=upstream.transport))


@pytest.fixture
def client(extractor):
    """FastAPI TestClient for endpoint testing."""
    app.dependency_overrides[get_extractor] = lambda: extractor
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
