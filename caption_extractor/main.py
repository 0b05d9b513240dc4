"""
FastAPI application for YouTube caption extraction.

This module exposes the extraction pipeline over HTTP. It only translates
between query parameters and the library API; all scraping logic lives in
caption_extractor.service.
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from contextvars import ContextVar

import structlog
from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field
from starlette.middleware.base import BaseHTTPMiddleware
from structlog.contextvars import bind_contextvars, clear_contextvars

from caption_extractor import __version__
from caption_extractor.diagnostics import Diagnostics
from caption_extractor.errors import CaptionExtractorError
from caption_extractor.service import CaptionExtractor, get_extractor
from caption_extractor.utils import normalize_video_id, sanitize_for_log

# Configure logging with request ID context
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)
logger = structlog.get_logger()

# Request ID context variable
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Track app startup time for uptime calculation
_app_start_time = time.time()

SERVICE_NAME = "youtube-caption-extractor"


# ============================================================================
# Lifespan Context Manager
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    from caption_extractor.config import settings

    logger.info("=" * 60)
    logger.info("YouTube Caption Extractor Starting")
    logger.info("=" * 60)
    logger.info(f"  - Watch URL: {settings.watch_url_template}")
    logger.info(f"  - Default language: {settings.default_language}")
    logger.info(f"  - Request timeout: {settings.request_timeout or 'httpx default'}")
    logger.info(f"  - Proxy caption documents: {settings.proxy_caption_documents}")
    logger.info("=" * 60)

    yield

    logger.info("YouTube Caption Extractor stopped")


# Create FastAPI app
app = FastAPI(
    title="YouTube Caption Extractor",
    description="Extract titles, descriptions and captions from YouTube watch pages",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# ============================================================================
# Middleware Configuration
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware to add request ID for tracing."""

    async def dispatch(self, request: Request, call_next):
        """Process request and add request ID."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request_id_var.set(request_id)

        # Clear and bind context vars for structured logging
        clear_contextvars()
        bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


def configure_middleware():
    """Configure middleware."""
    from fastapi.middleware.cors import CORSMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)


# Configure middleware on import
configure_middleware()


# ============================================================================
# Pydantic Models
# ============================================================================


class SubtitleLineModel(BaseModel):
    """A single caption line with timing and text."""

    start: str = Field(..., description="Start offset in seconds, as written upstream")
    dur: str = Field(..., description="Duration in seconds, as written upstream")
    text: str = Field(..., description="Plain caption text")

    model_config = {"json_schema_extra": {"example": {"start": "0.5", "dur": "2.3", "text": "Hello & world"}}}


class VideoDetailsModel(BaseModel):
    """Title, description and captions of a video."""

    title: str = Field(..., description="Video title")
    description: str = Field(..., description="Video description")
    subtitles: list[SubtitleLineModel] = Field(default_factory=list, description="Caption lines in playback order")


class SubtitlesResponse(BaseModel):
    """Response envelope for the subtitles endpoint."""

    subtitles: list[SubtitleLineModel] = Field(..., description="Caption lines in playback order")
    video_details: VideoDetailsModel = Field(..., alias="videoDetails", description="Video details")

    model_config = {"populate_by_name": True}


class LanguageModel(BaseModel):
    """A caption track offered by a video."""

    code: str = Field(..., description="Language code")
    name: str = Field(..., description="Track display name")
    vss_id: str = Field(..., alias="vssId", description="Variant identifier")
    auto_generated: bool = Field(..., alias="autoGenerated", description="Whether the track is auto-generated")

    model_config = {"populate_by_name": True}


class LanguagesResponse(BaseModel):
    """Response model for the languages endpoint."""

    video_id: str = Field(..., alias="videoID", description="Video identifier")
    languages: list[LanguageModel] = Field(..., description="Caption tracks in page order")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Human-readable error message")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    timestamp: float = Field(..., description="Current Unix timestamp")
    uptime_seconds: float = Field(..., description="Service uptime in seconds")


def error_response(message: str, status_code: int) -> Response:
    return Response(
        content=ErrorResponse(error=message).model_dump_json(),
        status_code=status_code,
        media_type="application/json",
    )



# ============================================================================
# Exception Handlers
# ============================================================================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report invalid query parameters as a 400 error envelope."""
    errors = exc.errors()
    logger.warning(f"Validation error: {errors}")

    error_details = []
    for error in errors:
        loc = " -> ".join(str(x) for x in error["loc"])
        error_details.append(f"{loc}: {error['msg']}")

    return error_response("; ".join(error_details), 400)


# ============================================================================
# API Endpoints
# ============================================================================


@app.get(
    "/api/subtitles",
    response_model=SubtitlesResponse,
    responses={
        200: {"description": "Captions extracted successfully"},
        400: {"model": ErrorResponse, "description": "Missing videoID"},
        500: {"model": ErrorResponse, "description": "Video not found or upstream fetch failed"},
    },
    summary="Extract captions and details of a YouTube video",
)
async def get_subtitles(
    video_id: str | None = Query(None, alias="videoID", max_length=500, description="Video ID or URL"),
    lang: str = Query("en", description="Caption language code (e.g., en, ja, pt-BR)"),
    proxy_url: str | None = Query(None, alias="proxyURL", max_length=500, description="Proxy for the watch page fetch"),
    extractor: CaptionExtractor = Depends(get_extractor),
):
    """
    Extract the title, description and captions of a YouTube video.

    A video without captions in the requested language still succeeds with an
    empty subtitle list.

    **Example Usage:**
    ```bash
    curl "http://localhost:8000/api/subtitles?videoID=dQw4w9WgXcQ&lang=en"
    ```

    **Response Codes:**
    - 200: Success
    - 400: videoID missing or parameters invalid
    - 500: Video not found or upstream fetch failed
    """
    if not video_id:
        return error_response("Missing videoID", 400)

    video_id = normalize_video_id(video_id)
    diagnostics = Diagnostics()

    try:
        details = await extractor.get_video_details(video_id, lang or "en", proxy_url or None, diagnostics)
    except CaptionExtractorError as e:
        logger.error(f"Extraction failed for {sanitize_for_log(video_id)}: {e}")
        return error_response(str(e), 500)

    logger.info(
        f"Extracted {len(details.subtitles)} lines for {sanitize_for_log(video_id)}",
        warnings=len(diagnostics),
    )

    lines = [SubtitleLineModel(**line.to_dict()) for line in details.subtitles]
    return SubtitlesResponse(
        subtitles=lines,
        video_details=VideoDetailsModel(
            title=details.title,
            description=details.description,
            subtitles=lines,
        ),
    )


@app.get(
    "/api/subtitles/languages",
    response_model=LanguagesResponse,
    responses={
        200: {"description": "Available caption tracks retrieved"},
        400: {"model": ErrorResponse, "description": "Missing videoID"},
        500: {"model": ErrorResponse, "description": "Upstream fetch failed"},
    },
    summary="List caption tracks of a YouTube video",
)
async def list_languages(
    video_id: str | None = Query(None, alias="videoID", max_length=500, description="Video ID or URL"),
    proxy_url: str | None = Query(None, alias="proxyURL", max_length=500, description="Proxy for the watch page fetch"),
    extractor: CaptionExtractor = Depends(get_extractor),
):
    """
    List the caption tracks a video offers.

    **Example:**
    ```bash
    curl "http://localhost:8000/api/subtitles/languages?videoID=dQw4w9WgXcQ"
    ```
    """
    if not video_id:
        return error_response("Missing videoID", 400)

    video_id = normalize_video_id(video_id)
    diagnostics = Diagnostics()

    try:
        languages = await extractor.list_caption_languages(video_id, proxy_url or None, diagnostics)
    except CaptionExtractorError as e:
        logger.error(f"Language listing failed for {sanitize_for_log(video_id)}: {e}")
        return error_response(str(e), 500)

    return LanguagesResponse(
        video_id=video_id,
        languages=[
            LanguageModel(
                code=language.code,
                name=language.name,
                vss_id=language.vss_id,
                auto_generated=language.auto_generated,
            )
            for language in languages
        ],
    )


@app.get("/", summary="Simple health check")
async def root() -> dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "healthy", "service": SERVICE_NAME, "version": __version__}


@app.get("/health", response_model=HealthResponse, summary="Health check with uptime")
async def health() -> HealthResponse:
    """Health check with service uptime."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=__version__,
        timestamp=time.time(),
        uptime_seconds=time.time() - _app_start_time,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
