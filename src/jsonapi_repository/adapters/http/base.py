"""
Base HTTP client - contract for the transport used by repositories

Repositories only build URIs, queries and bodies; sending them is delegated
to an implementation of this interface. Swap in any transport (or a fake in
tests) without touching repository code.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from jsonapi_repository.schemas import HttpResponse


class BaseHttpClient(ABC):
    """Abstract base class for HTTP transports"""

    @abstractmethod
    def get(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> HttpResponse:
        """
        Send a GET request.

        Args:
            url: Resource URI
            params: Nested query parameters, serialized into the query string
            headers: Request headers

        Returns:
            HttpResponse with status code, parsed body and headers
        """
        pass

    @abstractmethod
    def post(
        self,
        url: str,
        body: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> HttpResponse:
        """Send a POST request with body as JSON."""
        pass

    @abstractmethod
    def put(
        self,
        url: str,
        body: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> HttpResponse:
        """Send a PUT request with body as JSON (no body when body is None)."""
        pass

    @abstractmethod
    def patch(
        self,
        url: str,
        body: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> HttpResponse:
        """Send a PATCH request with body as JSON."""
        pass

    @abstractmethod
    def delete(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> HttpResponse:
        """Send a DELETE request. DELETE never carries a body."""
        pass

    def close(self) -> None:
        """Release transport resources. Nothing to release by default."""
