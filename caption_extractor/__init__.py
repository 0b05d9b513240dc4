"""
youtube-caption-extractor - title, description and captions from YouTube watch pages.

Example usage:
    >>> import asyncio
    >>> from caption_extractor import fetch_video_details
    >>>
    >>> details = asyncio.run(fetch_video_details("dQw4w9WgXcQ", lang="en"))
    >>> details.subtitles[0].text
"""

import logging

__version__ = "0.3.0"

# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .diagnostics import DiagnosticCode, DiagnosticEvent, Diagnostics
from .errors import CaptionExtractorError, DocumentFetchError, VideoNotFoundError
from .models import CaptionLanguage, SubtitleLine, VideoDetails
from .service import (
    SUGGESTED_LANGUAGES,
    CaptionExtractor,
    fetch_subtitles,
    fetch_video_details,
    list_caption_languages,
)

__all__ = [
    "__version__",
    # Operations
    "fetch_video_details",
    "fetch_subtitles",
    "list_caption_languages",
    "CaptionExtractor",
    "SUGGESTED_LANGUAGES",
    # Models
    "VideoDetails",
    "SubtitleLine",
    "CaptionLanguage",
    # Diagnostics
    "Diagnostics",
    "DiagnosticEvent",
    "DiagnosticCode",
    # Errors
    "CaptionExtractorError",
    "VideoNotFoundError",
    "DocumentFetchError",
]
