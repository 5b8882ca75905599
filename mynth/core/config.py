"""Client configuration loaded from arguments and environment variables.

Explicit constructor arguments win over environment variables, which win
over the built-in defaults.

Fail-fast validation:
    ``ClientConfig.from_env()`` and ``PollingPolicy()`` raise
    ``ConfigValidationError`` if a value is out of its valid range, so a
    bad setting is reported when the client is built rather than halfway
    through a poll.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from mynth.core.constants import (
    API_KEY_ENV_VAR,
    API_URL,
    BASE_URL_ENV_VAR,
    DEFAULT_REQUEST_TIMEOUT_S,
    FAST_POLLING_DURATION_S,
    FAST_POLLING_INTERVAL_S,
    MAX_RETRY_COUNT,
    POLLING_JITTER_MAX_S,
    POLLING_TIMEOUT_S,
    REQUEST_TIMEOUT_ENV_VAR,
    SLOW_POLLING_INTERVAL_S,
)
from mynth.core.exceptions import ValidationError


class ConfigValidationError(ValidationError):
    """Raised when configuration values are missing or out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Immutable HTTP client configuration.

    Attributes:
        api_key: Private API key, sent as a bearer token by default.
        base_url: API base URL without a trailing slash.
        request_timeout_s: Per-request timeout in seconds.
    """

    api_key: str = ""
    base_url: str = API_URL
    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S

    @classmethod
    def from_env(
        cls,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
    ) -> ClientConfig:
        """Build and validate configuration, falling back to the environment.

        Raises:
            ConfigValidationError: If the API key is missing or a value is
                out of range.
            ValueError: If ``MYNTH_REQUEST_TIMEOUT_S`` is not a number.
        """
        config = cls(
            api_key=api_key if api_key is not None else os.getenv(API_KEY_ENV_VAR, ""),
            base_url=_normalise_base_url(
                base_url if base_url is not None else os.getenv(BASE_URL_ENV_VAR, API_URL)
            ),
            request_timeout_s=float(
                os.getenv(REQUEST_TIMEOUT_ENV_VAR, str(DEFAULT_REQUEST_TIMEOUT_S))
            ),
        )
        _validate(config)
        return config


@dataclass(frozen=True, slots=True)
class PollingPolicy:
    """Schedule and limits for resolving a single task.

    Attributes:
        timeout_s: Overall budget, measured from the first status check.
        fast_phase_s: Elapsed time during which ``fast_interval_s`` applies.
        fast_interval_s: Base delay between polls in the fast phase.
        slow_interval_s: Base delay between polls after the fast phase.
        jitter_max_s: Upper bound of the uniform random delay added to
            every interval.
        max_retries: Consecutive transient failures before giving up.
    """

    timeout_s: float = POLLING_TIMEOUT_S
    fast_phase_s: float = FAST_POLLING_DURATION_S
    fast_interval_s: float = FAST_POLLING_INTERVAL_S
    slow_interval_s: float = SLOW_POLLING_INTERVAL_S
    jitter_max_s: float = POLLING_JITTER_MAX_S
    max_retries: int = MAX_RETRY_COUNT

    def __post_init__(self) -> None:
        for key in ("timeout_s", "fast_interval_s", "slow_interval_s"):
            value = getattr(self, key)
            if value <= 0:
                raise ConfigValidationError(key, value, "must be > 0 (seconds)")
        if self.fast_phase_s < 0:
            raise ConfigValidationError("fast_phase_s", self.fast_phase_s, "must be >= 0 (seconds)")
        if self.jitter_max_s < 0:
            raise ConfigValidationError("jitter_max_s", self.jitter_max_s, "must be >= 0 (seconds)")
        if self.max_retries < 1:
            raise ConfigValidationError("max_retries", self.max_retries, "must be >= 1")
        if self.fast_interval_s > self.timeout_s:
            raise ConfigValidationError(
                "fast_interval_s",
                self.fast_interval_s,
                f"must be <= timeout_s ({self.timeout_s})",
            )


def _normalise_base_url(base_url: str) -> str:
    """Strip a single trailing slash so paths can be appended verbatim."""
    return base_url[:-1] if base_url.endswith("/") else base_url


def _validate(config: ClientConfig) -> None:
    """Validate client configuration.  Raises ``ConfigValidationError``."""
    if not config.api_key:
        raise ConfigValidationError(
            API_KEY_ENV_VAR,
            config.api_key,
            f"Mynth API key is required. Either pass it as an option or set the "
            f"{API_KEY_ENV_VAR} environment variable",
        )

    if not config.base_url.startswith(("http://", "https://")):
        raise ConfigValidationError(
            BASE_URL_ENV_VAR,
            config.base_url,
            "must be an http:// or https:// URL",
        )

    if config.request_timeout_s <= 0:
        raise ConfigValidationError(
            REQUEST_TIMEOUT_ENV_VAR,
            config.request_timeout_s,
            "must be > 0 (seconds)",
        )
