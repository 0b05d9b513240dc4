"""
Entry point for youtube-caption-extractor.

Run this file directly to start the FastAPI server:
    python main.py
    python -m main

Or use uvicorn directly:
    uvicorn caption_extractor.main:app --reload --host 0.0.0.0 --port 8000
"""

import uvicorn

from caption_extractor.config import settings


def main() -> None:
    """
    Start the uvicorn server.

    Server configuration can be overridden via environment variables:
    - HOST: Server host (default: 0.0.0.0)
    - PORT: Server port (default: 8000)
    - LOG_LEVEL: uvicorn log level (default: info)
    - CAPTIONS_USER_AGENT: User-Agent sent to YouTube
    - CAPTIONS_PROXY_CAPTION_DOCUMENTS: Also proxy timed-text fetches
    """
    print("=" * 60)
    print("YouTube Caption Extractor")
    print("=" * 60)
    print(f"Starting server on http://{settings.host}:{settings.port}")
    print(f"Upstream: {settings.watch_url_template}")
    print("=" * 60)

    uvicorn.run(
        "caption_extractor.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
