"""
Configuration settings for mapcluster.

Every value has a built-in default; environment variables (or a .env file in
the project root) override them. Explicit keyword arguments passed to the
library always win over anything set here.
"""

import math
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
# Look for .env file in project root (parent of mapcluster/)
_project_root = Path(__file__).parent.parent
_env_path = _project_root / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=_env_path)


def _env_number(name: str, default: float) -> float:
    """Read a numeric environment variable, falling back on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if math.isfinite(value) else default


# ===================
# Project Paths
# ===================

PROJECT_ROOT = _project_root

# ===================
# Layer Defaults
# ===================

# Min number of milliseconds between two executed recomputes
DEFAULT_THROTTLE_MS = _env_number("MAPCLUSTER_THROTTLE_MS", 200)

# Grid cell size in projected screen pixels
DEFAULT_CELL_SIZE = _env_number("MAPCLUSTER_CELL_SIZE", 150)

# Host map event that triggers a recompute
DEFAULT_VIEWPORT_EVENT = os.getenv("MAPCLUSTER_VIEWPORT_EVENT") or "zoom"

# ===================
# Logging
# ===================

LOG_LEVEL = (os.getenv("MAPCLUSTER_LOG_LEVEL") or "WARNING").upper()
