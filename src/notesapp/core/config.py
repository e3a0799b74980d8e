"""Configuration management for the notes client."""

import logging
import os
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key}={value!r}, using {default}")
        return default


DEFAULT_API_BASE_URL = "http://localhost:5000/api"

# Remote notes service
NOTES_API_BASE_URL = (
    get_env("NOTES_API_BASE_URL", DEFAULT_API_BASE_URL) or DEFAULT_API_BASE_URL
).rstrip("/")

# Presentation
NOTES_SNIPPET_CHARS = get_env_int("NOTES_SNIPPET_CHARS", 40)

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO")


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure and return logger."""
    name = (level or LOG_LEVEL or "INFO").upper()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, name, logging.INFO),
    )
    return logging.getLogger(__name__)


def validate_core_environment(base_url: str | None = None) -> tuple[bool, str]:
    """
    Validate the configured API endpoint.

    Args:
        base_url: URL to check (defaults to NOTES_API_BASE_URL)

    Returns:
        (is_valid, message) - If not valid, message explains what's wrong.
    """
    url = base_url if base_url is not None else NOTES_API_BASE_URL
    if not url:
        return False, "Missing NOTES_API_BASE_URL - required to reach the notes API"

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return (
            False,
            f"Invalid NOTES_API_BASE_URL {url!r} - expected an http(s) URL",
        )

    return True, ""
