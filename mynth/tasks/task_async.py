"""Handle for a submitted task that may still be running.

``TaskAsync`` is what ``Mynth.generate(..., mode="async")`` returns. It is
cheap to create and does no I/O until ``to_task()`` is awaited.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mynth.models.task import Task
    from mynth.tasks.poller import TaskPoller


@dataclass(frozen=True, slots=True)
class TaskAccess:
    """Public access information for client-side polling.

    Attributes:
        public_access_token: Scoped token that can poll this task's status
            without the API key, if one was generated.
    """

    public_access_token: str | None = None


class TaskAsync:
    """An in-flight task that can be resolved to a completed ``Task``.

    Resolution is lazy and single-flight: the first ``to_task()`` call
    starts polling, and every call (concurrent or later) shares that one
    outcome. A failed resolution re-raises the same exception instance.

    Example usage::

        handle = await mynth.generate({"prompt": "A koi pond"}, mode="async")
        # hand ``handle.id`` and ``handle.access`` to a browser, or:
        task = await handle.to_task()
    """

    def __init__(
        self,
        task_id: str,
        *,
        poller: TaskPoller,
        public_access_token: str | None = None,
    ) -> None:
        self._id = task_id
        self._poller = poller
        self._access = TaskAccess(public_access_token=public_access_token)
        self._completion: asyncio.Future[Task] | None = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def access(self) -> TaskAccess:
        return self._access

    def __str__(self) -> str:
        return self._id

    def __repr__(self) -> str:
        return f"TaskAsync(id={self._id!r})"

    async def to_task(self) -> Task:
        """Poll until completion and return the full ``Task``.

        Cancelling the awaiting caller does not stop the shared polling.
        A resolution that was cancelled along with its event loop (for
        example when ``asyncio.run`` shuts down after a ``wait_for``
        timeout) is discarded, and the next call polls afresh.

        Raises:
            TaskAsyncTimeoutError: If polling exceeds the timeout.
            TaskAsyncUnauthorizedError: If access is denied.
            TaskAsyncFetchError: If fetching status fails repeatedly.
            TaskAsyncStatusError: If a status check is rejected outright.
            TaskAsyncTaskFailedError: If the task fails during generation.
            TaskAsyncTaskFetchError: If the final record cannot be fetched.
        """
        completion = self._completion
        if completion is None or _is_stale(completion):
            completion = asyncio.ensure_future(
                self._poller.resolve(self._id, self._access.public_access_token)
            )
            completion.add_done_callback(_retrieve_exception)
            self._completion = completion
        if completion.done():
            return completion.result()
        return await asyncio.shield(completion)


def _is_stale(completion: asyncio.Future[Task]) -> bool:
    """A resolution cancelled with its loop, or bound to a loop no longer running."""
    if completion.cancelled():
        return True
    return not completion.done() and completion.get_loop() is not asyncio.get_running_loop()


def _retrieve_exception(completion: asyncio.Future[Task]) -> None:
    # Marks the failure as observed when every waiter has gone away.
    if not completion.cancelled():
        completion.exception()
