"""Error types raised by the repository layer."""

import json
from typing import Any, Mapping, Optional

from requests.exceptions import RequestException

# Transport failures (DNS, TCP, TLS, timeouts) come straight from requests
TransportError = RequestException


class RepositoryError(Exception):
    """Base class for errors raised by this package"""


class ConfigurationError(RepositoryError):
    """Raised when an operation runs on a repository with no resource URI."""


class UnsupportedOperationError(RepositoryError):
    """Raised for an HTTP verb or operation name outside the allowed set."""


class RequestError(RepositoryError):
    """
    Non-2xx response from the backend.

    The message is the JSON-serialised response body so it can be logged
    as-is; the parsed body and status code stay available for inspection.
    """

    def __init__(self, body: Any, status_code: int, headers: Optional[Mapping[str, str]] = None):
        self.body = body
        self.status_code = status_code
        self.headers = dict(headers or {})
        super().__init__(serialize_body(body))

    @property
    def message(self) -> str:
        return self.args[0]

    def __repr__(self) -> str:
        return f"RequestError(status_code={self.status_code}, body={self.message!r})"


def serialize_body(body: Any) -> str:
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    return json.dumps(body, default=str)
