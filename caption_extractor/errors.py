"""
Exceptions raised by the caption extraction pipeline.

Only two conditions are fatal: the watch page has no title (the video does
not exist) and an upstream fetch fails. Everything else degrades to an empty
result and is reported through :mod:`caption_extractor.diagnostics`.
"""


class CaptionExtractorError(Exception):
    """Base class for all fatal extraction errors."""


class VideoNotFoundError(CaptionExtractorError):
    """The watch page was fetched but carries no title meta tag."""

    def __init__(self, video_id: str):
        self.video_id = video_id
        super().__init__(f"No video found for: {video_id}")


class DocumentFetchError(CaptionExtractorError):
    """
    An upstream document could not be fetched.

    Attributes:
        url: Address that was requested
        proxy_url: Proxy the request was routed through, if any
        status_code: HTTP status when the server answered with an error
    """

    def __init__(self, url: str, proxy_url: str | None = None, status_code: int | None = None):
        self.url = url
        self.proxy_url = proxy_url
        self.status_code = status_code
        if proxy_url:
            message = f"Failed to fetch {url} through proxy {proxy_url}"
        else:
            message = f"Failed to fetch {url}"
        super().__init__(message)
