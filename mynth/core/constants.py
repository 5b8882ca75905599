"""Shared client constants: single source of truth.

Centralises the API base URL, environment variable names, endpoint
paths and the default polling schedule.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# API endpoint
# ---------------------------------------------------------------------------

API_URL: str = "https://api.mynth.io"
"""Default base URL for the Mynth API."""

GENERATE_IMAGE_PATH: str = "/image/generate"
TASK_PATH: str = "/tasks"

# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------

API_KEY_ENV_VAR: str = "MYNTH_API_KEY"
BASE_URL_ENV_VAR: str = "MYNTH_BASE_URL"
REQUEST_TIMEOUT_ENV_VAR: str = "MYNTH_REQUEST_TIMEOUT_S"

DEFAULT_REQUEST_TIMEOUT_S: float = 30.0

# ---------------------------------------------------------------------------
# Polling schedule
# ---------------------------------------------------------------------------

POLLING_TIMEOUT_S: float = 5 * 60.0
"""Overall budget for resolving one task, measured from the first poll."""

FAST_POLLING_DURATION_S: float = 12.0
FAST_POLLING_INTERVAL_S: float = 2.5
SLOW_POLLING_INTERVAL_S: float = 5.0
POLLING_JITTER_MAX_S: float = 0.5

MAX_RETRY_COUNT: int = 7
"""Consecutive transient status-check failures tolerated before giving up."""


def task_details_path(task_id: str) -> str:
    """Return the path of the full task record endpoint."""
    return f"{TASK_PATH}/{task_id}"


def task_status_path(task_id: str) -> str:
    """Return the path of the lightweight task status endpoint."""
    return f"{TASK_PATH}/{task_id}/status"
