"""
JSON:API repository - CRUD/find verbs over a JSON:API-style REST backend.
"""

from jsonapi_repository.errors import (
    ConfigurationError,
    RepositoryError,
    RequestError,
    TransportError,
    UnsupportedOperationError,
)
from jsonapi_repository.repositories.jsonapi import JsonApiRepository, get_repository
from jsonapi_repository.schemas import HttpResponse, RepositoryConfig

__all__ = [
    "ConfigurationError",
    "HttpResponse",
    "JsonApiRepository",
    "RepositoryConfig",
    "RepositoryError",
    "RequestError",
    "TransportError",
    "UnsupportedOperationError",
    "get_repository",
]
