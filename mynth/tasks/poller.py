"""Task poller: resolve one generation task to its completed record.

The poller repeatedly checks a task's lifecycle status until it reaches a
terminal state, then fetches the full task record once.

Schedule:
    - Fast phase: for the first ``fast_phase_s`` seconds, poll every
      ``fast_interval_s`` (+ jitter).
    - Slow phase: afterwards, poll every ``slow_interval_s`` (+ jitter).
    - Never sleep past the overall ``timeout_s`` budget.

Failure policy:
    - Unauthorized (401/403/404) with a public access token in use: switch
      to the API key and re-check immediately, once. Otherwise fatal.
    - Transient (network error, 5xx): retried on the normal schedule; the
      consecutive-failure counter resets on every successful check and is
      fatal when it reaches ``max_retries``.
    - Any other non-success status is fatal.
    - A ``failed`` lifecycle status is fatal, with no further polling.

Every failure is raised to the caller as one of the ``TaskAsync*Error``
classes defined here.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mynth.core.config import PollingPolicy
from mynth.core.exceptions import PermanentError, TransientError, TransportError
from mynth.models.task import Task, TaskStatus, parse_task_data

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from mynth.transport.base import StatusResponse, TaskTransport

logger = logging.getLogger(__name__)

_UNAUTHORIZED_STATUS_CODES = frozenset({401, 403, 404})


# ---------------------------------------------------------------------------
# Resolution exceptions
# ---------------------------------------------------------------------------


class TaskAsyncTimeoutError(PermanentError):
    """Polling exceeded the overall timeout budget."""

    default_stage = "poll"
    default_code = "TASK_POLL_TIMEOUT"

    def __init__(self, task_id: str, timeout_s: float) -> None:
        self.timeout_s = timeout_s
        super().__init__(
            f"Task {task_id} polling timed out after {timeout_s:g}s",
            task_id=task_id,
        )


class TaskAsyncUnauthorizedError(PermanentError):
    """Access to the task was denied, or the task does not exist."""

    default_stage = "poll"
    default_code = "TASK_UNAUTHORIZED"

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Unauthorized access to task {task_id}", task_id=task_id)


class TaskAsyncFetchError(TransientError):
    """Status polling failed too many times in a row.

    Attributes:
        cause: The most recent underlying failure, if one was raised.
    """

    default_stage = "poll"
    default_code = "TASK_STATUS_FETCH_FAILED"

    def __init__(self, task_id: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(
            f"Failed to fetch status for task {task_id} after multiple retries",
            task_id=task_id,
        )


class TaskAsyncTaskFetchError(PermanentError):
    """The task completed but its full record could not be fetched."""

    default_stage = "fetch_task"
    default_code = "TASK_FETCH_FAILED"

    def __init__(self, task_id: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        suffix = f" (status {status_code})" if status_code else ""
        super().__init__(f"Failed to fetch task {task_id}{suffix}", task_id=task_id)


class TaskAsyncTaskFailedError(PermanentError):
    """The task itself reported failure during generation."""

    default_stage = "poll"
    default_code = "TASK_FAILED"

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id} failed during generation", task_id=task_id)


class TaskAsyncStatusError(PermanentError):
    """A status check was rejected with a non-retryable client error (e.g. 400)."""

    default_stage = "poll"
    default_code = "TASK_STATUS_REJECTED"

    def __init__(self, task_id: str, status_code: int | None) -> None:
        self.status_code = status_code
        super().__init__(
            f"Status check for task {task_id} was rejected (status {status_code})",
            task_id=task_id,
        )


# ---------------------------------------------------------------------------
# Status classification
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    """Classification of a single status check.

    Attributes:
        ok: The check succeeded; ``status`` holds the lifecycle status.
        status: Lifecycle status string when ``ok``.
        unauthorized: The credential was rejected or the task is not visible.
        retryable: The failure is transient.
        status_code: HTTP status code, ``None`` when the request never completed.
        error: Underlying exception for failures that raised.
    """

    ok: bool
    status: str | None = None
    unauthorized: bool = False
    retryable: bool = False
    status_code: int | None = None
    error: BaseException | None = None


def classify_status_response(response: StatusResponse) -> StatusSnapshot:
    """Map a completed status-check response onto a ``StatusSnapshot``."""
    if response.ok:
        return StatusSnapshot(ok=True, status=response.status, status_code=response.status_code)

    code = response.status_code
    if code in _UNAUTHORIZED_STATUS_CODES:
        return StatusSnapshot(ok=False, unauthorized=True, status_code=code)
    if code >= 500:
        return StatusSnapshot(ok=False, retryable=True, status_code=code)
    return StatusSnapshot(ok=False, status_code=code)


def compute_poll_delay(elapsed_s: float, policy: PollingPolicy, jitter_sample: float) -> float:
    """Return the delay before the next status check.

    Args:
        elapsed_s: Seconds since polling started.
        policy: The polling schedule.
        jitter_sample: A value in ``[0, 1)``; scaled to ``jitter_max_s``.

    Returns:
        ``min(base + jitter, remaining budget)``, never negative.
    """
    base = policy.fast_interval_s if elapsed_s < policy.fast_phase_s else policy.slow_interval_s
    interval = base + jitter_sample * policy.jitter_max_s
    remaining = policy.timeout_s - elapsed_s
    return max(0.0, min(interval, remaining))


# ---------------------------------------------------------------------------
# Poller
# ---------------------------------------------------------------------------


class TaskPoller:
    """Resolve tasks against a ``TaskTransport``.

    The poller holds no per-task state; each ``resolve`` call runs an
    independent loop, so one poller can serve any number of tasks
    concurrently.

    Args:
        transport: Provides the status-check and full-fetch capabilities.
        policy: Polling schedule and limits.
        clock: Monotonic time source in seconds.
        sleep: Coroutine function used to wait between polls.
        rng: Returns a uniform sample in ``[0, 1)`` for jitter.
    """

    def __init__(
        self,
        transport: TaskTransport,
        policy: PollingPolicy | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self._transport = transport
        self._policy = policy or PollingPolicy()
        self._clock = clock
        self._sleep = sleep
        self._rng = rng

    @property
    def policy(self) -> PollingPolicy:
        return self._policy

    async def resolve(self, task_id: str, public_access_token: str | None = None) -> Task:
        """Poll *task_id* until it is terminal and return the full record.

        Raises:
            TaskAsyncTimeoutError: If the timeout budget is exhausted.
            TaskAsyncUnauthorizedError: If access is denied with every
                available credential.
            TaskAsyncFetchError: If status checks fail ``max_retries``
                times in a row.
            TaskAsyncStatusError: If a status check is rejected with a
                non-retryable status.
            TaskAsyncTaskFailedError: If the task fails during generation.
            TaskAsyncTaskFetchError: If the final record fetch fails.
        """
        policy = self._policy
        start = self._clock()
        retry_count = 0
        use_api_key = False
        last_error: BaseException | None = None

        logger.info(
            "poll started | task_id=%s | public_token=%s",
            task_id,
            public_access_token is not None,
        )

        while True:
            elapsed = self._clock() - start

            if elapsed >= policy.timeout_s:
                raise TaskAsyncTimeoutError(task_id, policy.timeout_s)

            token = None if use_api_key or not public_access_token else public_access_token
            snapshot = await self._check_status(task_id, token)

            if snapshot.ok:
                retry_count = 0

                if snapshot.status == TaskStatus.COMPLETED.value:
                    logger.info("poll completed | task_id=%s | elapsed=%.1fs", task_id, elapsed)
                    return await self._fetch_task(task_id)

                if snapshot.status == TaskStatus.FAILED.value:
                    raise TaskAsyncTaskFailedError(task_id)

                logger.debug(
                    "poll pending | task_id=%s | status=%s | elapsed=%.1fs",
                    task_id,
                    snapshot.status,
                    elapsed,
                )

            elif snapshot.unauthorized:
                if public_access_token and not use_api_key:
                    logger.info(
                        "public token rejected, retrying with API key | task_id=%s | status=%s",
                        task_id,
                        snapshot.status_code,
                    )
                    use_api_key = True
                    continue
                raise TaskAsyncUnauthorizedError(task_id)

            elif snapshot.retryable:
                retry_count += 1
                last_error = snapshot.error

                if retry_count >= policy.max_retries:
                    raise TaskAsyncFetchError(task_id, last_error) from last_error

                logger.warning(
                    "status check failed | task_id=%s | status=%s | attempt=%d/%d",
                    task_id,
                    snapshot.status_code,
                    retry_count,
                    policy.max_retries,
                )

            else:
                raise TaskAsyncStatusError(task_id, snapshot.status_code)

            await self._sleep(compute_poll_delay(elapsed, policy, self._rng()))

    async def _check_status(self, task_id: str, access_token: str | None) -> StatusSnapshot:
        try:
            response = await self._transport.check_status(task_id, access_token=access_token)
        except TransportError as exc:
            return StatusSnapshot(ok=False, retryable=True, error=exc)
        return classify_status_response(response)

    async def _fetch_task(self, task_id: str) -> Task:
        response = await self._transport.fetch_task(task_id)

        if response.ok:
            return Task(parse_task_data(response.data, task_id=task_id))

        if response.status_code in _UNAUTHORIZED_STATUS_CODES:
            raise TaskAsyncUnauthorizedError(task_id)

        raise TaskAsyncTaskFetchError(task_id, response.status_code)
