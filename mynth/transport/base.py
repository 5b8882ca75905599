"""TaskTransport abstract base class.

Defines the capabilities the task poller consumes. The poller interacts
exclusively with this interface, so tests and alternative HTTP stacks
can stand in for the real API.

Lifecycle:
    1. ``submit_generation(request)``: start a job, get its task id.
    2. ``check_status(task_id)``     : lightweight lifecycle status.
    3. ``fetch_task(task_id)``       : full task record once terminal.

Response objects report the HTTP outcome rather than raising, because the
poller classifies status codes itself. Only a request that could not
complete at all raises (``TransportError``).
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class StatusResponse:
    """Outcome of a single status check.

    Attributes:
        ok: Whether the HTTP status was a success (2xx).
        status_code: HTTP status code.
        status: Lifecycle status string (``"pending"``, ``"completed"``,
            ``"failed"``) when ``ok``; ``None`` otherwise.
    """

    ok: bool
    status_code: int
    status: str | None = None


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Outcome of a full task fetch.

    Attributes:
        ok: Whether the HTTP status was a success (2xx).
        status_code: HTTP status code.
        data: Decoded JSON task record when ``ok``.
    """

    ok: bool
    status_code: int
    data: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class GenerateResponse:
    """Result of submitting a generation request.

    Attributes:
        task_id: Identifier of the created task.
        public_access_token: Scoped token for client-side polling, if the
            request enabled one.
    """

    task_id: str
    public_access_token: str | None = None


class TaskTransport(abc.ABC):
    """Abstract base class for API transports."""

    @abc.abstractmethod
    async def submit_generation(self, request: dict[str, Any]) -> GenerateResponse:
        """Submit a generation request.

        Raises:
            MynthAPIError: If the API rejects the request.
            TransportError: If the request could not complete.
        """

    @abc.abstractmethod
    async def check_status(
        self,
        task_id: str,
        *,
        access_token: str | None = None,
    ) -> StatusResponse:
        """Query the lifecycle status of *task_id*.

        Args:
            task_id: The task to check.
            access_token: Credential overriding the transport's API key
                for this request only. ``None`` uses the API key.

        Raises:
            TransportError: If the request could not complete.
        """

    @abc.abstractmethod
    async def fetch_task(self, task_id: str) -> FetchResponse:
        """Fetch the full record of *task_id* using the API key.

        Raises:
            TransportError: If the request could not complete.
        """

    async def aclose(self) -> None:  # noqa: B027
        """Release network resources. No-op by default."""
