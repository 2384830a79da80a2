"""Application configuration helpers."""

import os
import tempfile


DEFAULT_UPLOAD_TTL_SECONDS = 3600


def parse_env_bool(value, default=False):
    """Parse a boolean-like environment value with a fallback default."""
    if value is None:
        return default
    normalized = str(value).strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def parse_env_int(name, default):
    """Parse an integer environment value with fallback."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def get_cors_origins():
    """
    Return CORS origins from env, or localhost-only defaults.

    `GPXTRACK_CORS_ORIGINS` supports a comma-separated list.
    """
    raw = os.getenv('GPXTRACK_CORS_ORIGINS', '')
    if raw.strip():
        return [origin.strip() for origin in raw.split(',') if origin.strip()]
    return [r"^http://localhost(:\d+)?$", r"^http://127\.0\.0\.1(:\d+)?$"]


def get_lenient_numbers():
    """Whether malformed numeric fields fall back to 0.0 instead of failing."""
    return parse_env_bool(os.getenv("GPXTRACK_LENIENT_NUMBERS"), default=False)


def get_upload_folder():
    folder = os.getenv("GPXTRACK_UPLOAD_FOLDER", "").strip()
    if folder:
        return folder
    return os.path.join(tempfile.gettempdir(), "gpxtrack", "uploads")


def get_upload_ttl_seconds():
    return max(1, parse_env_int("GPXTRACK_FILE_TTL_SECONDS", DEFAULT_UPLOAD_TTL_SECONDS))


def get_debug_enabled():
    return parse_env_bool(os.getenv("GPXTRACK_DEBUG"), default=False)
