"""Load and validate environment variables. Uses python-dotenv.

This module is intentionally thin and side-effect free except for loading `.env`.
Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

from pathlib import Path
import logging

from dotenv import load_dotenv
import os


def _project_root() -> Path:
    """Resolve project root (the directory holding app.py)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Uses override=True to ensure .env values take precedence over existing env vars.
    """
    root = _project_root()
    env_path = root / ".env"
    load_dotenv(env_path, override=True)


def get_required(key: str) -> str:
    """
    Get required env var. Raises if missing or empty.

    Raises:
        ValueError: If key is missing or empty after trimming.
    """
    load_config()
    val = os.getenv(key, "").strip()
    if not val:
        raise ValueError(
            f"Missing required environment variable: {key}. "
            "Set it in .env or export it."
        )
    return val


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def storefront_api_url() -> str | None:
    """Optional: base URL of the storefront API, without trailing slash."""
    val = get_optional("STOREFRONT_API_URL", "")
    return val.rstrip("/") or None


def storefront_api_token() -> str | None:
    """Optional: bearer token sent with storefront API requests."""
    val = get_optional("STOREFRONT_API_TOKEN", "")
    return val or None


def storefront_api_timeout() -> int:
    """Optional: request timeout in seconds. Default 30."""
    return get_optional_int("STOREFRONT_API_TIMEOUT", 30)


def log_level() -> int:
    """Optional: CHECKOUT_LOG_LEVEL as a logging level. Default INFO."""
    name = get_optional("CHECKOUT_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def project_root() -> Path:
    """Project root directory."""
    return _project_root()
