"""HTTP transport for the Mynth API.

Concrete ``TaskTransport`` implementation over ``httpx.AsyncClient``.
It performs exactly one HTTP request per call: retries, polling and
credential fallback belong to the task poller, not here.

Authentication:
    Every request carries ``Authorization: Bearer <token>``. The token is
    the configured API key unless a per-request ``access_token`` override
    is given (public access tokens for status checks).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from mynth.core.constants import GENERATE_IMAGE_PATH, task_details_path, task_status_path
from mynth.core.exceptions import MynthAPIError, TaskPayloadError, TransportError
from mynth.transport.base import (
    FetchResponse,
    GenerateResponse,
    StatusResponse,
    TaskTransport,
)

if TYPE_CHECKING:
    from mynth.core.config import ClientConfig

logger = logging.getLogger(__name__)

_CONNECT_TIMEOUT_S = 10.0


class HttpTransport(TaskTransport):
    """``httpx``-backed transport.

    If no ``client`` is supplied the transport creates and owns one, and
    ``aclose()`` closes it. A caller-supplied client is left open.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.request_timeout_s, connect=_CONNECT_TIMEOUT_S),
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # TaskTransport
    # ------------------------------------------------------------------

    async def submit_generation(self, request: dict[str, Any]) -> GenerateResponse:
        response = await self._send("POST", GENERATE_IMAGE_PATH, json=request)

        if not response.is_success:
            body = _json_or_empty(response)
            message = (
                body.get("error")
                or body.get("message")
                or f"Request failed with status {response.status_code}"
            )
            raise MynthAPIError(str(message), response.status_code, body.get("code"))

        body = _decode_json(response, GENERATE_IMAGE_PATH)
        task_id = body.get("taskId") if isinstance(body, dict) else None
        if not isinstance(task_id, str) or not task_id:
            msg = "Generate response is missing taskId"
            raise TaskPayloadError(msg, stage="submit")

        access = body.get("access") or {}
        token = access.get("publicAccessToken") if isinstance(access, dict) else None
        logger.info("Generation submitted | task_id=%s | public_token=%s", task_id, bool(token))
        return GenerateResponse(task_id=task_id, public_access_token=token or None)

    async def check_status(
        self,
        task_id: str,
        *,
        access_token: str | None = None,
    ) -> StatusResponse:
        path = task_status_path(task_id)
        response = await self._send("GET", path, access_token=access_token)

        if not response.is_success:
            return StatusResponse(ok=False, status_code=response.status_code)

        body = _decode_json(response, path)
        status = body.get("status") if isinstance(body, dict) else None
        return StatusResponse(
            ok=True,
            status_code=response.status_code,
            status=status if isinstance(status, str) else None,
        )

    async def fetch_task(self, task_id: str) -> FetchResponse:
        path = task_details_path(task_id)
        response = await self._send("GET", path)

        if not response.is_success:
            return FetchResponse(ok=False, status_code=response.status_code)

        body = _decode_json(response, path)
        if not isinstance(body, dict):
            msg = f"Task {task_id} response is not a JSON object"
            raise TaskPayloadError(msg, task_id=task_id)
        return FetchResponse(ok=True, status_code=response.status_code, data=body)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _auth_headers(self, access_token: str | None = None) -> dict[str, str]:
        return {"Authorization": f"Bearer {access_token or self._config.api_key}"}

    async def _send(
        self,
        method: str,
        path: str,
        *,
        access_token: str | None = None,
        json: Any = None,
    ) -> httpx.Response:
        url = f"{self._config.base_url}{path}"
        try:
            response = await self._client.request(
                method,
                url,
                headers=self._auth_headers(access_token),
                json=json,
            )
        except httpx.HTTPError as exc:
            msg = f"{method} {path} failed: {exc}"
            raise TransportError(msg) from exc

        logger.debug("%s %s | status=%d", method, path, response.status_code)
        return response


def _decode_json(response: httpx.Response, path: str) -> Any:
    """Decode a success body. An undecodable body counts as a failed request."""
    try:
        return response.json()
    except ValueError as exc:
        msg = f"Invalid JSON in response from {path}"
        raise TransportError(msg) from exc


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
