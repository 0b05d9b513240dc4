"""
Caption extraction service that scrapes YouTube watch pages.

This module composes the pipeline stages into the public operations:

    1. Fetch the watch page (through the caller's proxy when given)
    2. Extract title and description from its meta tags
    3. Locate the caption track for the requested language
    4. Fetch the track's timed-text document and parse it into lines

Only a missing title or a failed fetch raises. A video without captions in
the requested language yields an empty subtitle list and a diagnostic event.
"""

import logging

from caption_extractor.config import Settings
from caption_extractor.diagnostics import Diagnostics
from caption_extractor.fetcher import DocumentFetcher
from caption_extractor.models import CaptionLanguage, SubtitleLine, VideoDetails
from caption_extractor.page import extract_page_metadata
from caption_extractor.tracks import CaptionTrack, locate_caption_track, parse_caption_tracks
from caption_extractor.transcript import parse_timed_text
from caption_extractor.utils import build_watch_url

logger = logging.getLogger(__name__)


# Common caption languages. Any code is accepted; these are suggestions and
# provide a display name when the page omits one.
SUGGESTED_LANGUAGES: dict[str, str] = {
    "en": "English",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "es": "Spanish",
    "de": "German",
    "fr": "French",
    "it": "Italian",
    "ru": "Russian",
}


class CaptionExtractor:
    """
    Extracts video details and captions from YouTube watch pages.

    Holds no per-call state, so one instance can serve concurrent requests.
    """

    def __init__(self, config: Settings | None = None, fetcher: DocumentFetcher | None = None):
        """
        Initialize the extractor with configuration.

        Args:
            config: Settings instance. Uses global defaults if None.
            fetcher: Document fetcher. Built from ``config`` if None.
        """
        self.config = config or Settings()
        self.fetcher = fetcher or DocumentFetcher(self.config)

    def watch_url(self, video_id: str) -> str:
        return build_watch_url(video_id, self.config.watch_url_template)

    async def _fetch_page(self, video_id: str, proxy_url: str | None) -> str:
        logger.info(f"Fetching watch page for video {video_id} (proxy={'on' if proxy_url else 'off'})")
        return await self.fetcher.fetch(self.watch_url(video_id), proxy_url)

    async def _fetch_lines(self, track: CaptionTrack, proxy_url: str | None, diagnostics: Diagnostics) -> list[SubtitleLine]:
        caption_proxy = proxy_url if self.config.proxy_caption_documents else None
        document = await self.fetcher.fetch(track.base_url, caption_proxy)
        return parse_timed_text(document, diagnostics)

    async def _load_subtitles(
        self, html: str, video_id: str, lang: str, proxy_url: str | None, diagnostics: Diagnostics
    ) -> list[SubtitleLine]:
        """Shared by both subtitle operations so their output never diverges."""
        track = locate_caption_track(html, lang, video_id, diagnostics)
        if track is None:
            return []
        lines = await self._fetch_lines(track, proxy_url, diagnostics)
        logger.info(f"Parsed {len(lines)} subtitle lines for video {video_id} ({track.vss_id})")
        return lines

    async def get_video_details(
        self,
        video_id: str,
        lang: str | None = None,
        proxy_url: str | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> VideoDetails:
        """
        Fetch title, description and subtitles of a video.

        Args:
            video_id: Video identifier
            lang: Caption language code (default: settings.default_language)
            proxy_url: Proxy for the watch page fetch
            diagnostics: Collector for degraded outcomes

        Returns:
            VideoDetails; ``subtitles`` is empty when no track matched

        Raises:
            VideoNotFoundError: If the page has no title
            DocumentFetchError: If a fetch fails
        """
        lang = lang or self.config.default_language
        if diagnostics is None:
            diagnostics = Diagnostics()

        html = await self._fetch_page(video_id, proxy_url)
        metadata = extract_page_metadata(html, video_id)
        subtitles = await self._load_subtitles(html, video_id, lang, proxy_url, diagnostics)

        return VideoDetails(
            title=metadata.title,
            description=metadata.description,
            subtitles=tuple(subtitles),
        )

    async def get_subtitles(
        self,
        video_id: str,
        lang: str | None = None,
        proxy_url: str | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> list[SubtitleLine]:
        """
        Fetch only the subtitles of a video.

        Unlike get_video_details this does not require the page to have a
        title.

        Raises:
            DocumentFetchError: If a fetch fails
        """
        lang = lang or self.config.default_language
        if diagnostics is None:
            diagnostics = Diagnostics()

        html = await self._fetch_page(video_id, proxy_url)
        return await self._load_subtitles(html, video_id, lang, proxy_url, diagnostics)

    async def list_caption_languages(
        self,
        video_id: str,
        proxy_url: str | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> list[CaptionLanguage]:
        """
        List the caption tracks a video offers, in page order.

        Raises:
            DocumentFetchError: If the watch page fetch fails
        """
        html = await self._fetch_page(video_id, proxy_url)
        tracks = parse_caption_tracks(html, video_id, diagnostics)
        return [_to_language(track) for track in tracks]


def _to_language(track: CaptionTrack) -> CaptionLanguage:
    code = track.language_code or track.vss_id.removeprefix("a.").lstrip(".")
    return CaptionLanguage(
        code=code,
        name=track.name or SUGGESTED_LANGUAGES.get(code, code),
        vss_id=track.vss_id,
        auto_generated=track.is_auto_generated,
    )


def get_extractor() -> CaptionExtractor:
    """
    Get a configured CaptionExtractor instance.

    This function is used as a FastAPI dependency for dependency injection.
    """
    return CaptionExtractor()


async def fetch_video_details(
    video_id: str,
    lang: str = "en",
    proxy_url: str | None = None,
    *,
    diagnostics: Diagnostics | None = None,
) -> VideoDetails:
    """Fetch title, description and subtitles with a default extractor."""
    return await get_extractor().get_video_details(video_id, lang, proxy_url, diagnostics)


async def fetch_subtitles(
    video_id: str,
    lang: str = "en",
    proxy_url: str | None = None,
    *,
    diagnostics: Diagnostics | None = None,
) -> list[SubtitleLine]:
    """Fetch subtitles with a default extractor."""
    return await get_extractor().get_subtitles(video_id, lang, proxy_url, diagnostics)


async def list_caption_languages(
    video_id: str,
    proxy_url: str | None = None,
    *,
    diagnostics: Diagnostics | None = None,
) -> list[CaptionLanguage]:
    """List caption tracks with a default extractor."""
    return await get_extractor().list_caption_languages(video_id, proxy_url, diagnostics)
