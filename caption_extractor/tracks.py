"""
Caption track discovery and selection.

The watch page embeds the player response, which lists every caption track of
the video under a ``"captionTracks"`` key. Each track has a ``baseUrl`` to its
timed-text document and a ``vssId`` variant identifier:

    ".en"    manually authored English captions
    "a.en"   auto-generated (speech recognition) English captions
    ".en-GB" a regional variant, matched only by the partial rule

Selection walks TRACK_MATCHERS in order and returns the first track accepted
by the earliest matcher.
"""

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from caption_extractor.diagnostics import DiagnosticCode, Diagnostics

logger = logging.getLogger(__name__)


CAPTION_TRACKS_MARKER = "captionTracks"
CAPTION_TRACKS_PATTERN = re.compile(r'"captionTracks":(\[.*?\])')


@dataclass(frozen=True)
class CaptionTrack:
    """
    A caption track descriptor from the player response.

    Attributes:
        base_url: Address of the timed-text document (may be missing)
        vss_id: Variant identifier, empty string when absent
        language_code: Language code of the track
        name: Display name of the track
        kind: "asr" for auto-generated tracks, else None
    """

    base_url: str | None
    vss_id: str
    language_code: str | None = None
    name: str | None = None
    kind: str | None = None

    @property
    def is_auto_generated(self) -> bool:
        return self.kind == "asr" or self.vss_id.startswith("a.")

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CaptionTrack":
        """Create a CaptionTrack from one entry of the captionTracks array."""
        return cls(
            base_url=_text(data.get("baseUrl")),
            vss_id=_text(data.get("vssId")) or "",
            language_code=_text(data.get("languageCode")),
            name=_track_name(data.get("name")),
            kind=_text(data.get("kind")),
        )


def _text(value: Any) -> str | None:
    # Non-string values in the page JSON are treated as absent
    return value if isinstance(value, str) and value else None


def _track_name(name: Any) -> str | None:
    # Either {"simpleText": "..."} or {"runs": [{"text": "..."}, ...]}
    if not isinstance(name, dict):
        return None
    if "simpleText" in name:
        return _text(name["simpleText"])
    runs = name.get("runs")
    if isinstance(runs, list):
        return "".join(_text(run.get("text")) or "" for run in runs if isinstance(run, dict)) or None
    return None


# ============================================================================
# Track Selection
# ============================================================================


def is_manual_track(track: CaptionTrack, lang: str) -> bool:
    """Manually authored track for exactly this language."""
    return track.vss_id == f".{lang}"


def is_auto_generated_track(track: CaptionTrack, lang: str) -> bool:
    """Auto-generated track for exactly this language."""
    return track.vss_id == f"a.{lang}"


def is_partial_match(track: CaptionTrack, lang: str) -> bool:
    """Any track whose variant identifier contains ".<lang>"."""
    return f".{lang}" in track.vss_id


TrackMatcher = Callable[[CaptionTrack, str], bool]

# Priority order; the first matcher accepting any track wins
TRACK_MATCHERS: list[tuple[str, TrackMatcher]] = [
    ("manual", is_manual_track),
    ("auto", is_auto_generated_track),
    ("partial", is_partial_match),
]


def select_caption_track(
    tracks: list[CaptionTrack],
    lang: str,
    matchers: list[tuple[str, TrackMatcher]] = TRACK_MATCHERS,
) -> CaptionTrack | None:
    """
    Pick the caption track for a language.

    Args:
        tracks: Tracks in page order
        lang: Requested language code
        matchers: Ordered (name, predicate) pairs

    Returns:
        The first track accepted by the earliest matcher, or None
    """
    for name, matcher in matchers:
        for track in tracks:
            if matcher(track, lang):
                logger.debug(f"Selected caption track {track.vss_id!r} by {name} rule")
                return track
    return None


# ============================================================================
# Page Parsing
# ============================================================================


def _read_caption_tracks(
    html: str,
    video_id: str | None,
    diagnostics: Diagnostics,
) -> list[CaptionTrack] | None:
    # None means the degradation has already been reported
    if CAPTION_TRACKS_MARKER not in html:
        diagnostics.warn(
            DiagnosticCode.NO_CAPTIONS,
            f"No captions found for video: {video_id}",
            video_id,
        )
        return None

    match = CAPTION_TRACKS_PATTERN.search(html)
    if not match:
        diagnostics.warn(
            DiagnosticCode.TRACK_LIST_NOT_FOUND,
            f"Failed to extract captionTracks from video: {video_id}",
            video_id,
        )
        return None

    try:
        raw_tracks = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        diagnostics.warn(
            DiagnosticCode.TRACK_LIST_MALFORMED,
            f"Failed to parse captionTracks from video: {video_id}: {e}",
            video_id,
        )
        return None

    if not isinstance(raw_tracks, list):
        diagnostics.warn(
            DiagnosticCode.TRACK_LIST_MALFORMED,
            f"captionTracks is not a list for video: {video_id}",
            video_id,
        )
        return None

    return [CaptionTrack.from_json(item) for item in raw_tracks if isinstance(item, dict)]


def parse_caption_tracks(
    html: str,
    video_id: str | None = None,
    diagnostics: Diagnostics | None = None,
) -> list[CaptionTrack]:
    """
    Extract all caption tracks embedded in watch page markup.

    Args:
        html: Raw watch page markup
        video_id: Video identifier, used in diagnostic messages
        diagnostics: Collector for degraded outcomes

    Returns:
        Tracks in page order; empty when the page has none or the embedded
        list cannot be read
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    return _read_caption_tracks(html, video_id, diagnostics) or []


def locate_caption_track(
    html: str,
    lang: str,
    video_id: str | None = None,
    diagnostics: Diagnostics | None = None,
) -> CaptionTrack | None:
    """
    Find the caption track to fetch for a language.

    Args:
        html: Raw watch page markup
        lang: Requested language code
        video_id: Video identifier, used in diagnostic messages
        diagnostics: Collector for degraded outcomes

    Returns:
        The selected track with a usable base URL, or None
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    tracks = _read_caption_tracks(html, video_id, diagnostics)
    if tracks is None:
        return None

    track = select_caption_track(tracks, lang)
    if track is None or not track.base_url:
        diagnostics.warn(
            DiagnosticCode.TRACK_NOT_FOUND,
            f"Could not find {lang} captions for {video_id}",
            video_id,
        )
        return None

    return track
