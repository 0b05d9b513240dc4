"""
Title and description extraction from a YouTube watch page.
"""

import re
from dataclasses import dataclass

from caption_extractor.errors import VideoNotFoundError

# Content is either plain quoted text or text containing an escaped &quot;
TITLE_PATTERN = re.compile(r'<meta name="title" content="([^"]*|[^"]*[^&]quot;[^"]*)">')
DESCRIPTION_PATTERN = re.compile(r'<meta name="description" content="([^"]*|[^"]*[^&]quot;[^"]*)">')

DEFAULT_DESCRIPTION = "No description found"


@dataclass(frozen=True)
class PageMetadata:
    """Title and description scraped from the watch page."""

    title: str
    description: str


def extract_page_metadata(html: str, video_id: str) -> PageMetadata:
    """
    Extract the title and description meta tags from watch page markup.

    Args:
        html: Raw watch page markup
        video_id: Video identifier, used in the error message

    Returns:
        PageMetadata with the title and the description (or a placeholder)

    Raises:
        VideoNotFoundError: If the page has no title meta tag or it is empty
    """
    title_match = TITLE_PATTERN.search(html)
    title = title_match.group(1) if title_match else None
    if not title:
        raise VideoNotFoundError(video_id)

    description_match = DESCRIPTION_PATTERN.search(html)
    description = (description_match and description_match.group(1)) or DEFAULT_DESCRIPTION

    return PageMetadata(title=title, description=description)
