"""HTTP transports used by repositories."""

from .base import BaseHttpClient
from .client import RequestsHttpClient

__all__ = ["BaseHttpClient", "RequestsHttpClient"]
