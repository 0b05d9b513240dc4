"""
Configuration module for youtube-caption-extractor.

Uses pydantic-settings to load configuration from environment variables.
This allows runtime tuning of the upstream transport without code changes.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Note: The env_prefix is set to "CAPTIONS_" but populate_by_name=True allows
    using field names directly. All settings can be set via either:
    - Prefixed: CAPTIONS_<SETTING_NAME> (e.g., CAPTIONS_USER_AGENT)
    - Unprefixed aliases for server settings (HOST, PORT, LOG_LEVEL)
    - In .env file

    Environment Variables:
        HOST: Server host (default: 0.0.0.0)
        PORT: Server port (default: 8000)
        LOG_LEVEL: Logging level (default: info)
        WATCH_URL_TEMPLATE: Watch page address, formatted with ``video_id``
            (default: https://youtube.com/watch?v={video_id})
        DEFAULT_LANGUAGE: Caption language used when none is requested (default: en)
        REQUEST_TIMEOUT: Upstream request timeout in seconds. Unset means the
            httpx defaults apply.
        USER_AGENT: Optional User-Agent header sent with upstream requests
        PROXY_CAPTION_DOCUMENTS: Route the timed-text fetch through the caller's
            proxy as well as the watch page fetch (default: false)
    """

    # ========== Server Configuration ==========

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    log_level: str = Field(default="info", alias="LOG_LEVEL")

    # ========== Upstream Settings ==========

    watch_url_template: str = "https://youtube.com/watch?v={video_id}"
    default_language: str = "en"

    request_timeout: float | None = None
    user_agent: str | None = None

    # Only the watch page honours the proxy unless this is enabled
    proxy_caption_documents: bool = False

    model_config = SettingsConfigDict(
        env_prefix="CAPTIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


# Global settings instance - loaded at startup with environment variables
settings = Settings()
