"""Shared pytest fixtures for the Mynth SDK test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from mynth.core.config import PollingPolicy
from mynth.tasks.poller import TaskPoller
from mynth.transport.base import (
    FetchResponse,
    GenerateResponse,
    StatusResponse,
    TaskTransport,
)

# ---------------------------------------------------------------------------
# Simulated time
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only advances when something sleeps on it."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []
        self.events: list[tuple[str, object]] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.events.append(("sleep", seconds))
        self.now += seconds


# ---------------------------------------------------------------------------
# Scripted transport
# ---------------------------------------------------------------------------


class ScriptedTransport(TaskTransport):
    """Replays scripted outcomes in order.

    Script items are response objects or exception instances (raised).
    Once a script is down to its last item, that item repeats forever.
    """

    def __init__(
        self,
        statuses: list[StatusResponse | Exception],
        fetches: list[FetchResponse | Exception] | None = None,
        *,
        clock: FakeClock | None = None,
    ) -> None:
        self._statuses = list(statuses)
        self._fetches = list(fetches or [])
        self._clock = clock
        self.status_calls: list[tuple[str, str | None]] = []
        self.fetch_calls: list[str] = []
        self.submitted: list[dict[str, Any]] = []
        self.generate_response = GenerateResponse(task_id="task-1")
        self.closed = False

    async def submit_generation(self, request: dict[str, Any]) -> GenerateResponse:
        self.submitted.append(request)
        return self.generate_response

    async def check_status(
        self,
        task_id: str,
        *,
        access_token: str | None = None,
    ) -> StatusResponse:
        self.status_calls.append((task_id, access_token))
        if self._clock is not None:
            self._clock.events.append(("status", access_token))
        return _next(self._statuses)

    async def fetch_task(self, task_id: str) -> FetchResponse:
        self.fetch_calls.append(task_id)
        return _next(self._fetches)

    async def aclose(self) -> None:
        self.closed = True


def _next(script: list[Any]) -> Any:
    item = script.pop(0) if len(script) > 1 else script[0]
    if isinstance(item, Exception):
        raise item
    return item


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    """Return a fresh simulated clock starting at zero."""
    return FakeClock()


@pytest.fixture()
def make_transport(clock: FakeClock) -> Callable[..., ScriptedTransport]:
    """Factory for a ``ScriptedTransport`` that logs calls on ``clock``."""

    def _make(
        statuses: list[StatusResponse | Exception],
        fetches: list[FetchResponse | Exception] | None = None,
    ) -> ScriptedTransport:
        return ScriptedTransport(statuses, fetches, clock=clock)

    return _make


@pytest.fixture()
def make_poller(clock: FakeClock) -> Callable[..., TaskPoller]:
    """Factory for a ``TaskPoller`` driven by simulated time and zero jitter."""

    def _make(
        transport: TaskTransport,
        policy: PollingPolicy | None = None,
        rng: Callable[[], float] = lambda: 0.0,
    ) -> TaskPoller:
        return TaskPoller(transport, policy, clock=clock, sleep=clock.sleep, rng=rng)

    return _make


@pytest.fixture()
def task_payload() -> Callable[..., dict[str, Any]]:
    """Factory for a raw ``GET /tasks/{id}`` body."""

    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": "task-1",
            "status": "completed",
            "type": "image",
            "apiKeyId": "key-123",
            "userId": "user-123",
            "cost": "0.01",
            "result": {
                "images": [
                    {
                        "status": "succeeded",
                        "id": "img-1",
                        "url": "https://cdn.mynth.io/img-1.webp",
                        "size": "1024x1024",
                        "provider": "fal",
                        "cost": "0.005",
                    },
                    {"status": "failed", "error": "NSFW content blocked"},
                    {
                        "status": "succeeded",
                        "id": "img-2",
                        "url": "https://cdn.mynth.io/img-2.webp",
                        "provider": "fal",
                        "cost": "0.005",
                        "content_rating": {"mode": "default", "level": "sfw"},
                    },
                ],
                "cost": {"images": "0.01", "total": "0.011", "fee": "0.001"},
                "model": "black-forest-labs/flux.1-dev",
            },
            "request": {"prompt": "A lighthouse at dusk", "metadata": {"userId": "u-42"}},
            "createdAt": "2026-01-29T12:00:00Z",
            "updatedAt": "2026-01-29T12:00:05Z",
        }
        payload.update(overrides)
        return payload

    return _make
