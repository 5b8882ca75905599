"""Task record models and the completed-task accessor.

Defines the data structures returned by ``GET /tasks/{id}``:

- ``TaskStatus``: Lifecycle state of a generation task
- ``TaskData``: The full task record as sent by the API
- ``ImageResult``: Generated images, cost breakdown and model info
- ``Task``: Read-only convenience wrapper handed to callers

Design notes:
- Payload models are pydantic models so the API's camelCase keys map onto
  snake_case attributes and unknown keys never break decoding.
- ``Task`` is a plain class; it owns no I/O.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from mynth.core.exceptions import TaskPayloadError


class TaskStatus(enum.Enum):
    """Lifecycle state of a generation task.

    Values:
        PENDING:   Submitted, generation in progress.
        COMPLETED: Generation finished; the result is available.
        FAILED:    The job concluded unsuccessfully server-side.
    """

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class ImageSuccess(_ApiModel):
    """A successfully generated image.

    Attributes:
        id: Image identifier.
        url: CDN URL of the generated image.
        size: Resolved output size (e.g. ``"1024x1024"``), if reported.
        provider: Provider that generated the image.
        cost: Cost of this image as a decimal string.
        content_rating: Classification result when content rating was enabled;
            ``{"mode": "default" | "custom", "level": ...}``.
    """

    status: Literal["succeeded"] = "succeeded"
    id: str
    url: str
    size: str | None = None
    provider: str = ""
    cost: str = ""
    content_rating: dict[str, Any] | None = None


class ImageFailure(_ApiModel):
    """An image slot that failed to generate."""

    status: Literal["failed"] = "failed"
    error: str = ""


ResultImage = Annotated[ImageSuccess | ImageFailure, Field(discriminator="status")]


class ImageResultCost(_ApiModel):
    """Cost breakdown, all values as decimal strings."""

    images: str = "0"
    total: str = "0"
    fee: str = "0"


class ImageResultSizeAuto(_ApiModel):
    """How the output size was chosen when the request asked for ``auto``."""

    source: str
    value: str | None = None


class ImageResultPromptEnhance(_ApiModel):
    """The enhanced prompt, present when prompt enhancement ran."""

    source: str
    positive: str | None = None
    negative: str | None = None


class ImageResult(_ApiModel):
    """Complete generation result.

    Attributes:
        images: Generated images; may include failed slots.
        cost: Cost breakdown.
        model: Model that was actually used.
        size_auto: Present when the size was determined automatically.
        prompt_enhance: Present when the prompt was enhanced.
    """

    images: list[ResultImage] = Field(default_factory=list)
    cost: ImageResultCost = Field(default_factory=ImageResultCost)
    model: str = ""
    size_auto: ImageResultSizeAuto | None = None
    prompt_enhance: ImageResultPromptEnhance | None = None


class TaskData(_ApiModel):
    """Full task record returned by the API.

    Attributes:
        id: Unique task identifier.
        status: Current lifecycle state.
        type: Task type (currently always ``"image"``).
        api_key_id: API key that created the task (``None`` for public access).
        user_id: Owner of the task.
        cost: Total cost as a decimal string, ``None`` until calculated.
        result: Generation result, ``None`` until completed.
        request: The original generation request, if available.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: str
    status: TaskStatus
    type: str = "image"
    api_key_id: str | None = Field(default=None, alias="apiKeyId")
    user_id: str = Field(default="", alias="userId")
    cost: str | None = None
    result: ImageResult | None = None
    request: dict[str, Any] | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


def parse_task_data(payload: object, *, task_id: str = "") -> TaskData:
    """Validate a raw task payload.

    Raises:
        TaskPayloadError: If the payload does not match ``TaskData``.
    """
    try:
        return TaskData.model_validate(payload)
    except PydanticValidationError as exc:
        msg = f"Task {task_id or '?'} payload is invalid: {exc.error_count()} error(s)"
        raise TaskPayloadError(msg, task_id=task_id) from exc


# ---------------------------------------------------------------------------
# Accessor
# ---------------------------------------------------------------------------


class Task:
    """A completed image generation task.

    Example usage::

        task = await mynth.generate({"prompt": "A lighthouse at dusk"})
        for url in task.urls:
            print(url)
    """

    def __init__(self, data: TaskData) -> None:
        self._data = data

    @property
    def data(self) -> TaskData:
        """Raw task record from the API."""
        return self._data

    @property
    def id(self) -> str:
        return self._data.id

    @property
    def status(self) -> TaskStatus:
        return self._data.status

    @property
    def result(self) -> ImageResult | None:
        """The generation result, or ``None`` if the task has not completed."""
        return self._data.result

    @property
    def is_completed(self) -> bool:
        return self._data.status is TaskStatus.COMPLETED

    @property
    def is_failed(self) -> bool:
        return self._data.status is TaskStatus.FAILED

    @property
    def urls(self) -> list[str]:
        """URLs of all successfully generated images."""
        return [image.url for image in self.get_images()]

    def get_images(self, *, include_failed: bool = False) -> list[ImageSuccess | ImageFailure]:
        """Return generated images, optionally including failed slots."""
        if self._data.result is None:
            return []
        if include_failed:
            return list(self._data.result.images)
        return [image for image in self._data.result.images if isinstance(image, ImageSuccess)]

    def get_metadata(self) -> Any:
        """Return the metadata that was attached to the generation request."""
        if self._data.request is None:
            return None
        return self._data.request.get("metadata")

    def __repr__(self) -> str:
        return f"Task(id={self.id!r}, status={self.status.value!r})"
