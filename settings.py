# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-09
# Updated: 2026-02-02
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Any, Dict, List


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


def _env_list(name: str, default: List[str]) -> List[str]:
    v = _env(name, "")
    if v == "":
        return list(default)
    return [item.strip() for item in v.split(",") if item.strip()]


# -----------------------------------------------------------------------------
# Document source collections
# -----------------------------------------------------------------------------
EMBEDDINGS_COLLECTION = _env("PS_EMBEDDINGS_COLLECTION", "productos_embeddings")
PRODUCTS_COLLECTION = _env("PS_PRODUCTS_COLLECTION", "productos")


# -----------------------------------------------------------------------------
# Bulk loading
# -----------------------------------------------------------------------------
PAGE_SIZE = _env_int("PS_PAGE_SIZE", 500)

# Run a young-generation GC + yield every N accumulated documents
RECLAIM_EVERY = _env_int("PS_RECLAIM_EVERY", 2000)

# Load embeddings and products on two worker threads
PARALLEL_LOAD = _env_bool("PS_PARALLEL_LOAD", True)


# -----------------------------------------------------------------------------
# Search defaults
# -----------------------------------------------------------------------------
SEARCH_DEFAULTS: Dict[str, Any] = {
    "top_k": _env_int("PS_DEFAULT_TOP_K", 20),
    "threshold": _env_float("PS_DEFAULT_THRESHOLD", 0.3),
}


# -----------------------------------------------------------------------------
# Scheduled refresh (default: Sunday 03:00 local time, weekly)
# -----------------------------------------------------------------------------
REFRESH_ENABLED = _env_bool("PS_REFRESH_ENABLED", True)
REFRESH_WEEKDAY = _env_int("PS_REFRESH_WEEKDAY", 6)  # Monday=0 ... Sunday=6
REFRESH_HOUR = _env_int("PS_REFRESH_HOUR", 3)
REFRESH_MINUTE = _env_int("PS_REFRESH_MINUTE", 0)


# -----------------------------------------------------------------------------
# HTTP
# -----------------------------------------------------------------------------
CORS_ORIGINS = _env_list("PS_CORS_ORIGINS", ["*"])


# -----------------------------------------------------------------------------
# Sanity checks
# -----------------------------------------------------------------------------
if not EMBEDDINGS_COLLECTION or not PRODUCTS_COLLECTION:
    raise RuntimeError("Collection names resolved to empty value")

if PAGE_SIZE <= 0:
    raise RuntimeError(f"PS_PAGE_SIZE must be positive, got {PAGE_SIZE}")

if not 0 <= REFRESH_WEEKDAY <= 6:
    raise RuntimeError(f"PS_REFRESH_WEEKDAY must be 0..6, got {REFRESH_WEEKDAY}")

if not 0 <= REFRESH_HOUR <= 23 or not 0 <= REFRESH_MINUTE <= 59:
    raise RuntimeError(
        f"Refresh time {REFRESH_HOUR:02d}:{REFRESH_MINUTE:02d} is not a valid time of day"
    )
