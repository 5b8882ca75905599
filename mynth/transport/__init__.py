"""API transports.

- TaskTransport: Abstract base class consumed by the task poller
- HttpTransport: ``httpx`` implementation against the Mynth API
"""

from mynth.transport.base import FetchResponse, GenerateResponse, StatusResponse, TaskTransport
from mynth.transport.http import HttpTransport

__all__ = [
    "FetchResponse",
    "GenerateResponse",
    "HttpTransport",
    "StatusResponse",
    "TaskTransport",
]
