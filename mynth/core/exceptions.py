"""Exception hierarchy for the Mynth SDK.

Every error the client raises inherits from ``MynthError``. Callers can
catch the whole SDK with one ``except MynthError`` and branch on
``retryable`` or ``category`` instead of parsing messages.

Where each category shows up
----------------------------
- ``ValidationError``: the client was built wrongly, e.g. no API key
  (``ConfigValidationError``). Raised before any request is sent.
- ``TransientError``: the API could not be reached or answered 5xx
  (``TransportError``), or status polling gave up after repeated such
  failures (``TaskAsyncFetchError``).
- ``PermanentError``: the API said no. A rejected generation request
  (``MynthAPIError``), a denied, failed, timed-out or unfetchable task
  (the ``TaskAsync*Error`` classes in ``mynth.tasks.poller``).
- ``ContractError``: the API answered 2xx with a body the SDK cannot read
  (``TaskPayloadError``).

``to_error_dict()`` gives a flat dict with stable keys, including the task
id when one is involved, for structured logs.
"""

from __future__ import annotations


class MynthError(Exception):
    """Base exception for everything raised by the Mynth client.

    Attributes:
        message: Human-readable error description.
        stage: Where in a request or task resolution it failed
            (``"config"``, ``"api"``, ``"submit"``, ``"transport"``,
            ``"decode"``, ``"poll"``, ``"fetch_task"``).
        code: Machine-readable error code (e.g. ``"TASK_FAILED"``).
        retryable: Whether repeating the operation may succeed.
        task_id: The generation task involved, empty for errors raised
            before a task exists.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        task_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.task_id = task_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "task_id": self.task_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(MynthError):
    """The client was configured with missing or invalid settings."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(MynthError):
    """The API was unreachable or overloaded; the same call may succeed later."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(MynthError):
    """The API rejected the request or the task ended badly. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(MynthError):
    """A 2xx response body did not have the shape the SDK reads."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Transport-level errors
# ---------------------------------------------------------------------------


class TransportError(TransientError):
    """The HTTP request could not complete (connection, timeout, bad body)."""

    default_stage = "transport"
    default_code = "TRANSPORT_FAILED"


class MynthAPIError(PermanentError):
    """The API answered a request with a non-success status.

    Attributes:
        status_code: HTTP status code of the failed request.
        api_code: Error code from the API response body, if present.
    """

    default_stage = "api"
    default_code = "API_REQUEST_FAILED"

    def __init__(self, message: str, status_code: int, api_code: str | None = None) -> None:
        self.status_code = status_code
        self.api_code = api_code
        super().__init__(message)


class TaskPayloadError(ContractError):
    """A task or status response body did not match the expected shape."""

    default_stage = "decode"
    default_code = "TASK_PAYLOAD_INVALID"
