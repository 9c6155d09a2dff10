import logging
from typing import Any, Mapping, Optional

import certifi  # Provides Mozilla's CA bundle for SSL certificate verification
import requests
import urllib3

from jsonapi_repository.adapters.http.base import BaseHttpClient
from jsonapi_repository.query import encode_query
from jsonapi_repository.schemas import HttpResponse
from jsonapi_repository.settings import HttpClientSettings, get_settings

logger = logging.getLogger(__name__)


class RequestsHttpClient(BaseHttpClient):
    """
    HTTP transport on top of a requests.Session.

    Transport errors (requests.exceptions.RequestException) are not caught:
    connection, TLS and timeout failures reach the caller unchanged. Retries
    are left to whoever owns the session.
    """

    def __init__(self,
                base_url: Optional[str] = None,
                timeout: Optional[float] = None,
                verify_ssl: Optional[bool] = None,
                session: Optional[requests.Session] = None,
                settings: Optional[HttpClientSettings] = None):
        """
        Explicit arguments win over settings read from the environment.
        """
        cfg = settings or get_settings()

        self.base_url: Optional[str] = base_url if base_url is not None else (
            str(cfg.base_url) if cfg.base_url is not None else None
        )
        self.timeout = timeout if timeout is not None else cfg.timeout
        verify_ssl = cfg.verify_ssl if verify_ssl is None else verify_ssl

        if verify_ssl is False:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
            self.verify: Any = False
        else:
            self.verify = certifi.where()

        self.session = session or requests.Session()

    def __enter__(self) -> "RequestsHttpClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def build_url(self, url: str) -> str:
        """Join a relative resource URI onto base_url; absolute URIs pass through."""
        if self.base_url is None or url.startswith(("http://", "https://")):
            return url
        return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"

    def _handle_response(self, resp: requests.Response) -> HttpResponse:
        """
        Wrap a requests response without judging its status code.

        Body is parsed JSON, None for an empty body, or the raw text when the
        server did not send valid JSON.
        """
        if not resp.content:
            body = None
        else:
            try:
                body = resp.json()
            except ValueError:
                logger.warning(f"Non-JSON response from {resp.url}: {resp.text[:200]}")
                body = resp.text

        logger.debug(f"HTTP {resp.status_code} from {resp.url}")
        return HttpResponse(status_code=resp.status_code, body=body, headers=dict(resp.headers))

    def _send(self, method: str, url: str, headers: Optional[Mapping[str, str]], **kwargs) -> HttpResponse:
        full_url = self.build_url(url)
        logger.debug(f"{method} {full_url}")
        resp = self.session.request(
            method,
            full_url,
            headers=dict(headers or {}),
            timeout=self.timeout,
            verify=self.verify,
            **kwargs,
        )
        return self._handle_response(resp)

    def get(self, url: str, params: Optional[Mapping[str, Any]] = None,
            headers: Optional[Mapping[str, str]] = None) -> HttpResponse:
        return self._send("GET", url, headers, params=encode_query(params or {}))

    def post(self, url: str, body: Optional[Mapping[str, Any]] = None,
             headers: Optional[Mapping[str, str]] = None) -> HttpResponse:
        return self._send("POST", url, headers, **self._body_kwargs(body))

    def put(self, url: str, body: Optional[Mapping[str, Any]] = None,
            headers: Optional[Mapping[str, str]] = None) -> HttpResponse:
        return self._send("PUT", url, headers, **self._body_kwargs(body))

    def patch(self, url: str, body: Optional[Mapping[str, Any]] = None,
              headers: Optional[Mapping[str, str]] = None) -> HttpResponse:
        return self._send("PATCH", url, headers, **self._body_kwargs(body))

    def delete(self, url: str, headers: Optional[Mapping[str, str]] = None) -> HttpResponse:
        return self._send("DELETE", url, headers)

    @staticmethod
    def _body_kwargs(body: Optional[Mapping[str, Any]]) -> dict:
        # None means "no body at all", not a JSON null
        return {} if body is None else {"json": dict(body)}
