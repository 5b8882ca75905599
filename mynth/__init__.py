"""Mynth image generation SDK.

Submit image generation jobs to the Mynth API and wait for their results,
either in-process or by handing a public access token to a browser for
client-side polling.
"""

from mynth.client import Mynth
from mynth.core.config import ClientConfig, ConfigValidationError, PollingPolicy
from mynth.core.exceptions import MynthAPIError, MynthError, TaskPayloadError, TransportError
from mynth.models.catalog import AVAILABLE_MODELS, AvailableModel, ModelCapability
from mynth.models.task import Task, TaskStatus
from mynth.tasks.poller import (
    TaskAsyncFetchError,
    TaskAsyncStatusError,
    TaskAsyncTaskFailedError,
    TaskAsyncTaskFetchError,
    TaskAsyncTimeoutError,
    TaskAsyncUnauthorizedError,
)
from mynth.tasks.task_async import TaskAccess, TaskAsync

__version__ = "0.1.0"

__all__ = [
    "AVAILABLE_MODELS",
    "AvailableModel",
    "ClientConfig",
    "ConfigValidationError",
    "ModelCapability",
    "Mynth",
    "MynthAPIError",
    "MynthError",
    "PollingPolicy",
    "Task",
    "TaskAccess",
    "TaskAsync",
    "TaskAsyncFetchError",
    "TaskAsyncStatusError",
    "TaskAsyncTaskFailedError",
    "TaskAsyncTaskFetchError",
    "TaskAsyncTimeoutError",
    "TaskAsyncUnauthorizedError",
    "TaskPayloadError",
    "TaskStatus",
    "TransportError",
]
