"""Mynth client: the public entry point of the SDK.

Wires configuration, the HTTP transport and the task poller together.

Usage::

    async with Mynth() as mynth:          # reads MYNTH_API_KEY
        task = await mynth.generate({"prompt": "A sunset over mountains"})
        print(task.urls)

        handle = await mynth.generate({"prompt": "A city at night"}, mode="async")
        return {"id": handle.id, "access": handle.access}
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal

from mynth.core.config import ClientConfig, PollingPolicy
from mynth.tasks.poller import TaskPoller
from mynth.tasks.task_async import TaskAsync
from mynth.transport.http import HttpTransport

if TYPE_CHECKING:
    import httpx

    from mynth.models.task import Task
    from mynth.transport.base import TaskTransport

logger = logging.getLogger(__name__)

GenerateMode = Literal["sync", "async"]

SYNC: GenerateMode = "sync"
ASYNC: GenerateMode = "async"


class Mynth:
    """Client for the Mynth image generation API.

    Args:
        api_key: Private API key. Defaults to ``MYNTH_API_KEY``.
        base_url: API base URL. Defaults to ``MYNTH_BASE_URL`` or the
            public endpoint.
        polling: Schedule used when waiting for tasks.
        http_client: Optional pre-configured ``httpx.AsyncClient``; the
            caller keeps ownership of it.
        transport: Optional transport replacing the HTTP one entirely.

    Raises:
        ConfigValidationError: If no API key is provided and
            ``MYNTH_API_KEY`` is not set.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        *,
        polling: PollingPolicy | None = None,
        http_client: httpx.AsyncClient | None = None,
        transport: TaskTransport | None = None,
    ) -> None:
        self._config = ClientConfig.from_env(api_key=api_key, base_url=base_url)
        self._transport = transport or HttpTransport(self._config, client=http_client)
        self._poller = TaskPoller(self._transport, polling)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> Mynth:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def generate(
        self,
        request: dict[str, Any],
        mode: GenerateMode = SYNC,
    ) -> Task | TaskAsync:
        """Generate images from a prompt.

        Args:
            request: Generation request, sent to the API as JSON.
            mode: ``"sync"`` waits for completion and returns a ``Task``;
                ``"async"`` returns a ``TaskAsync`` immediately.

        Raises:
            ValueError: If *mode* is not ``"sync"`` or ``"async"``.
            MynthAPIError: If the API rejects the request.
            TransportError: If the request could not complete.
        """
        if mode not in (SYNC, ASYNC):
            msg = f"mode must be 'sync' or 'async', got {mode!r}"
            raise ValueError(msg)

        submitted = await self._transport.submit_generation(request)
        handle = self.task(submitted.task_id, submitted.public_access_token)
        logger.info("Task handle created | task_id=%s | mode=%s", handle.id, mode)

        if mode == ASYNC:
            return handle

        return await handle.to_task()

    def task(self, task_id: str, public_access_token: str | None = None) -> TaskAsync:
        """Return a handle for a task submitted earlier."""
        if not task_id:
            msg = "task_id must be non-empty"
            raise ValueError(msg)
        return TaskAsync(task_id, poller=self._poller, public_access_token=public_access_token)
