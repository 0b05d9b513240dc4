"""
Result types returned by the caption extraction pipeline.

These are plain frozen dataclasses built fresh for every call. The HTTP layer
has its own pydantic models for serialization.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class SubtitleLine:
    """
    A single caption line with timing and text.

    Attributes:
        start: Start offset in seconds, as written in the timed-text document
        dur: Duration in seconds, as written in the timed-text document
        text: Plain text with markup removed and entities decoded
    """

    start: str
    dur: str
    text: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class VideoDetails:
    """
    Title, description and subtitles of a video.

    Attributes:
        title: Video title (never empty)
        description: Video description, or a placeholder when the page has none
        subtitles: Caption lines in playback order, empty when no track matched
    """

    title: str
    description: str
    subtitles: tuple[SubtitleLine, ...] = ()

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "subtitles": [line.to_dict() for line in self.subtitles],
        }


@dataclass(frozen=True)
class CaptionLanguage:
    """
    A caption track offered by a video, without its fetch address.

    Attributes:
        code: Language code of the track (e.g., en, pt-BR)
        name: Display name of the track
        vss_id: Variant identifier (".en" for manual, "a.en" for auto-generated)
        auto_generated: Whether the track is speech-recognition output
    """

    code: str
    name: str
    vss_id: str
    auto_generated: bool
