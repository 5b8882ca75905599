"""Task resolution.

- TaskPoller: Adaptive status polling with credential fallback and retry cap
- TaskAsync: Lazily resolved, single-flight handle for one task
"""

from mynth.tasks.poller import (
    StatusSnapshot,
    TaskAsyncFetchError,
    TaskAsyncStatusError,
    TaskAsyncTaskFailedError,
    TaskAsyncTaskFetchError,
    TaskAsyncTimeoutError,
    TaskAsyncUnauthorizedError,
    TaskPoller,
    classify_status_response,
    compute_poll_delay,
)
from mynth.tasks.task_async import TaskAccess, TaskAsync

__all__ = [
    "StatusSnapshot",
    "TaskAccess",
    "TaskAsync",
    "TaskAsyncFetchError",
    "TaskAsyncStatusError",
    "TaskAsyncTaskFailedError",
    "TaskAsyncTaskFetchError",
    "TaskAsyncTimeoutError",
    "TaskAsyncUnauthorizedError",
    "TaskPoller",
    "classify_status_response",
    "compute_poll_delay",
]
