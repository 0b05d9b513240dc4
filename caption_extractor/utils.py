"""
Shared utility functions for youtube-caption-extractor.

This module provides common functions used across multiple modules.
"""

import re


# Pre-compiled regex pattern for performance. Handles watch, short, embed and
# shorts URLs including those with additional query parameters (e.g., ?t=10).
YOUTUBE_PATTERN_COMPILED = re.compile(
    r"(?:youtube\.com/watch\?(?:[^#]*&)?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/shorts/)([a-zA-Z0-9_-]{11})"
)


def normalize_video_id(value: str) -> str:
    """
    Extract the video ID from a YouTube URL, or return the input unchanged.

    The identifier is otherwise opaque: anything that is not a recognised
    YouTube URL is passed through as-is and no validation is performed.

    Args:
        value: YouTube URL or video ID

    Returns:
        11-character YouTube video ID when ``value`` is a URL, else ``value``

    Examples:
        >>> normalize_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
        >>> normalize_video_id("https://youtu.be/dQw4w9WgXcQ?t=10")
        'dQw4w9WgXcQ'
        >>> normalize_video_id("dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
    """
    match = YOUTUBE_PATTERN_COMPILED.search(value)
    if match:
        return match.group(1)
    return value


def build_watch_url(video_id: str, template: str) -> str:
    """
    Build the watch page address for a video.

    Args:
        video_id: Video identifier
        template: Address template containing a ``{video_id}`` placeholder

    Returns:
        Watch page URL
    """
    return template.format(video_id=video_id)


def sanitize_for_log(input_str: str) -> str:
    """
    Sanitize user input for logging to prevent log injection attacks.

    Replaces newlines, carriage returns, and tabs with their escaped
    representations to prevent malicious log injection.

    Args:
        input_str: User input string to sanitize

    Returns:
        Sanitized string safe for logging
    """
    return input_str.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
