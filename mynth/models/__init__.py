"""Data models.

Defines the data structures exchanged with the API:
- TaskData / Task: Full task record and its read-only accessor
- ImageResult: Generated images with cost and model info
- AvailableModel: Entries of the model catalogue
"""

from mynth.models.catalog import AVAILABLE_MODELS, AvailableModel, ModelCapability, get_model
from mynth.models.task import (
    ImageFailure,
    ImageResult,
    ImageSuccess,
    Task,
    TaskData,
    TaskStatus,
    parse_task_data,
)

__all__ = [
    "AVAILABLE_MODELS",
    "AvailableModel",
    "ImageFailure",
    "ImageResult",
    "ImageSuccess",
    "ModelCapability",
    "Task",
    "TaskData",
    "TaskStatus",
    "get_model",
    "parse_task_data",
]
