"""
caption-validator - Configuration Module
"""
from typing import Any, Dict, Optional

from loguru import logger
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Language detection
    LANGUAGE_ENDPOINT: str = ""  # Required at run time; CLI --endpoint overrides
    LANGUAGE_TIMEOUT: float = 30.0  # Seconds to wait for the detector
    PROXY_URL: Optional[str] = None

    # Coverage
    DEFAULT_COVERAGE: float = 80.0  # Required coverage percentage

    # Format sniffing reads only this many bytes from the head of the file
    SNIFF_BYTES: int = 100

    # Logging (stderr only; stdout carries failure JSON)
    LOG_LEVEL: str = "WARNING"

    # Mock language server
    MOCK_LANGUAGE: str = "en-US"
    MOCK_SERVER_HOST: str = "127.0.0.1"
    MOCK_SERVER_PORT: int = 8081

    class Config:
        env_prefix = "CAPTION_VALIDATOR_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()


def get_httpx_client_kwargs(timeout: Optional[float] = None) -> Dict[str, Any]:
    """Get httpx client kwargs including proxy if configured"""
    kwargs: Dict[str, Any] = {
        "timeout": settings.LANGUAGE_TIMEOUT if timeout is None else timeout,
    }
    if settings.PROXY_URL:
        kwargs["proxy"] = settings.PROXY_URL
        logger.debug(f"Using proxy: {settings.PROXY_URL}")
    return kwargs
