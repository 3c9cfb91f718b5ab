"""
Configuration management for TikSave.

Provider constants are fixed; only the serving process reads the environment.
"""
import os
from typing import Tuple


class Settings:
    """Application settings."""

    # Provider configuration
    provider_endpoint: str = "https://delirius-apiofc.vercel.app/download/tiktok"
    provider_query_param: str = "url"
    request_timeout_seconds: float = 30.0

    # URL admission
    allowed_domains: Tuple[str, ...] = (
        "tiktok.com",
        "vm.tiktok.com",
        "vt.tiktok.com",
        "m.tiktok.com",
    )

    # Media extraction
    media_extensions: Tuple[str, ...] = ("mp4", "mov", "avi", "webm", "m3u8")
    max_search_depth: int = 5

    # Download naming
    download_filename_prefix: str = "tiktok-video"
    download_filename_extension: str = "mp4"

    # Application settings
    environment: str = os.getenv("ENVIRONMENT", "development")
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Global settings instance
settings = Settings()
