"""Tests for the unified exception taxonomy.

Validates:
- MynthError hierarchy and structured attributes
- Category classification (validation, transient, permanent, contract)
- ``to_error_dict()`` produces stable payload keys
- Resolution errors carry the task id and their specific context
"""

from __future__ import annotations

from typing import ClassVar

from mynth.core.config import ConfigValidationError
from mynth.core.exceptions import (
    ContractError,
    MynthAPIError,
    MynthError,
    PermanentError,
    TaskPayloadError,
    TransientError,
    TransportError,
    ValidationError,
)
from mynth.tasks.poller import (
    TaskAsyncFetchError,
    TaskAsyncStatusError,
    TaskAsyncTaskFailedError,
    TaskAsyncTaskFetchError,
    TaskAsyncTimeoutError,
    TaskAsyncUnauthorizedError,
)


class TestMynthErrorBase:
    """MynthError base class behavior."""

    def test_default_attributes(self) -> None:
        err = MynthError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.retryable is False
        assert err.task_id == ""

    def test_str_is_message(self) -> None:
        assert str(MynthError("human-readable error")) == "human-readable error"

    def test_to_error_dict_keys(self) -> None:
        err = MynthError("x", stage="s", code="C", retryable=True, task_id="t-1")
        d = err.to_error_dict()
        assert set(d.keys()) == {"category", "code", "stage", "message", "retryable", "task_id"}
        assert d["task_id"] == "t-1"
        assert d["category"] == "transient"


class TestCategoryBases:
    """Category base classes set correct defaults."""

    def test_validation_error_not_retryable(self) -> None:
        err = ValidationError("bad input")
        assert err.retryable is False
        assert err.category == "validation"

    def test_transient_error_retryable(self) -> None:
        err = TransientError("timeout")
        assert err.retryable is True
        assert err.category == "transient"

    def test_permanent_error_not_retryable(self) -> None:
        err = PermanentError("gone")
        assert err.retryable is False
        assert err.category == "permanent"

    def test_contract_error_not_retryable(self) -> None:
        err = ContractError("schema drift")
        assert err.retryable is False
        assert err.category == "contract"


class TestConcreteErrors:
    """Each concrete error lands in the expected category."""

    EXPECTED: ClassVar[list[tuple[MynthError, str, str]]] = [
        (ConfigValidationError("KEY", 1, "bad"), "validation", "CONFIG_VALIDATION_FAILED"),
        (TransportError("reset"), "transient", "TRANSPORT_FAILED"),
        (MynthAPIError("nope", 400), "permanent", "API_REQUEST_FAILED"),
        (TaskPayloadError("drift"), "contract", "TASK_PAYLOAD_INVALID"),
        (TaskAsyncTimeoutError("t", 300.0), "permanent", "TASK_POLL_TIMEOUT"),
        (TaskAsyncUnauthorizedError("t"), "permanent", "TASK_UNAUTHORIZED"),
        (TaskAsyncFetchError("t"), "transient", "TASK_STATUS_FETCH_FAILED"),
        (TaskAsyncTaskFetchError("t", 500), "permanent", "TASK_FETCH_FAILED"),
        (TaskAsyncTaskFailedError("t"), "permanent", "TASK_FAILED"),
        (TaskAsyncStatusError("t", 400), "permanent", "TASK_STATUS_REJECTED"),
    ]

    def test_categories_and_codes(self) -> None:
        for err, category, code in self.EXPECTED:
            assert isinstance(err, MynthError), type(err).__name__
            assert err.category == category, type(err).__name__
            assert err.code == code, type(err).__name__


class TestResolutionErrors:
    """Resolution errors name the task and keep their context."""

    def test_timeout_message(self) -> None:
        err = TaskAsyncTimeoutError("task-abc-123", 300.0)
        assert "task-abc-123" in str(err)
        assert "300s" in str(err)
        assert err.task_id == "task-abc-123"

    def test_unauthorized_message(self) -> None:
        err = TaskAsyncUnauthorizedError("task-xyz-789")
        assert str(err) == "Unauthorized access to task task-xyz-789"

    def test_fetch_error_preserves_cause(self) -> None:
        original = TransportError("Network connection failed")
        err = TaskAsyncFetchError("task-fetch-456", original)
        assert err.cause is original
        assert "task-fetch-456" in str(err)

    def test_fetch_error_without_cause(self) -> None:
        assert TaskAsyncFetchError("task-id").cause is None

    def test_task_fetch_error_includes_status(self) -> None:
        err = TaskAsyncTaskFetchError("task-1", 500)
        assert str(err) == "Failed to fetch task task-1 (status 500)"
        assert err.status_code == 500

    def test_task_fetch_error_without_status(self) -> None:
        assert str(TaskAsyncTaskFetchError("task-1")) == "Failed to fetch task task-1"

    def test_task_failed_message(self) -> None:
        err = TaskAsyncTaskFailedError("task-gen-1")
        assert str(err) == "Task task-gen-1 failed during generation"
        assert err.stage == "poll"

    def test_api_error_attributes(self) -> None:
        err = MynthAPIError("Invalid prompt", 422, "INVALID_PROMPT")
        assert err.status_code == 422
        assert err.api_code == "INVALID_PROMPT"
        assert str(err) == "Invalid prompt"

    def test_every_sdk_error_names_a_known_stage(self) -> None:
        known = {"config", "api", "submit", "transport", "decode", "poll", "fetch_task"}
        errors = [
            ConfigValidationError("MYNTH_API_KEY", "", "missing"),
            TransportError("down"),
            MynthAPIError("Invalid prompt", 422),
            TaskPayloadError("bad body"),
            TaskAsyncTimeoutError("task-1", 300.0),
            TaskAsyncUnauthorizedError("task-1"),
            TaskAsyncFetchError("task-1"),
            TaskAsyncTaskFetchError("task-1", 500),
            TaskAsyncTaskFailedError("task-1"),
            TaskAsyncStatusError("task-1", 400),
        ]
        for err in errors:
            assert err.stage in known, type(err).__name__
