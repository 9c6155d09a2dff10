"""
JSON:API Repository - REST implementation of the repository contract

Each operation becomes exactly one HTTP request against the configured
resource URI:

    create(params)        POST   {uri}
    update(id, params)    PUT    {uri}/{id}
    delete(id)            DELETE {uri}/{id}
    restore(id)           PUT    {uri}/{id}/restore
    find(id)              GET    {uri}/{id}
    find_by(...)          GET    {uri}?filter[..]=..&sort=..&page[limit]=..

Successful responses are unwrapped from their {"data": ...} envelope unless
the repository is configured with auto_unwrap=False.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from jsonapi_repository.adapters.http.base import BaseHttpClient
from jsonapi_repository.adapters.http.client import RequestsHttpClient
from jsonapi_repository.errors import ConfigurationError, RequestError, UnsupportedOperationError
from jsonapi_repository.query import build_find_query
from jsonapi_repository.repositories.base import BaseRepository, ResourceId
from jsonapi_repository.schemas import Criteria, HttpResponse, OrderBy, RepositoryConfig, is_id_collection

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

# Names accepted by dispatch(), including the camelCase spellings
OPERATIONS = {
    "configure": "configure",
    "getRepository": "configure",
    "get_repository": "configure",
    "create": "create",
    "update": "update",
    "delete": "delete",
    "restore": "restore",
    "find": "find",
    "find_by": "find_by",
    "findBy": "find_by",
    "find_one_by": "find_one_by",
    "findOneBy": "find_one_by",
    "find_all": "find_all",
    "findAll": "find_all",
}


def unwrap_response(response: HttpResponse) -> Any:
    """
    Return the payload of a successful response.

    2xx: body["data"] when the body carries a "data" key, else the body.
    Anything else raises RequestError with the status code and body.
    """
    if response.is_success:
        body = response.body
        if isinstance(body, Mapping) and "data" in body:
            return body["data"]
        return body

    logger.warning(f"Request failed with HTTP {response.status_code}: {response.body!r}")
    raise RequestError(response.body, response.status_code, response.headers)


class JsonApiRepository(BaseRepository):
    """Repository over a JSON:API resource endpoint"""

    def __init__(self,
                config: Optional[RepositoryConfig] = None,
                client: Optional[BaseHttpClient] = None):
        self._config = config
        self.client: BaseHttpClient = client if client is not None else RequestsHttpClient()

    def __repr__(self) -> str:
        uri = self._config.base_resource_uri if self._config is not None else None
        return f"{type(self).__name__}(uri={uri!r})"

    def __enter__(self) -> "JsonApiRepository":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the underlying HTTP client.

        Repositories made with configure() share this client, so closing one
        closes the transport for all of them.
        """
        self.client.close()

    @property
    def config(self) -> Optional[RepositoryConfig]:
        return self._config

    def configure(self,
                  uri: str,
                  headers: Optional[Mapping[str, str]] = None,
                  auto_unwrap: bool = True) -> "JsonApiRepository":
        """
        Return a new repository for `uri` sharing this repository's client.

        The current instance is left untouched.
        """
        return type(self)(_make_config(uri, headers, auto_unwrap), self.client)

    def _require_config(self) -> RepositoryConfig:
        if self._config is None:
            raise ConfigurationError(
                "Repository has no resource URI. "
                "Call configure() or get_repository() first."
            )
        return self._config

    def _resource_uri(self, *parts: Any) -> str:
        config = self._require_config()
        return "/".join([config.base_resource_uri, *(str(p) for p in parts)])

    def _headers(self) -> Dict[str, str]:
        config = self._require_config()
        return {**DEFAULT_HEADERS, **config.headers}

    def request(self, method: str, uri: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Send one request and return the (unwrapped) result.

        GET sends params as the query string, POST/PUT/PATCH as a JSON body
        and DELETE sends nothing. PUT and PATCH are separate verbs.
        """
        config = self._require_config()
        headers = self._headers()
        verb = method.lower()

        if verb == "get":
            response = self.client.get(uri, params or {}, headers)
        elif verb == "post":
            response = self.client.post(uri, params, headers)
        elif verb == "put":
            response = self.client.put(uri, params, headers)
        elif verb == "patch":
            response = self.client.patch(uri, params, headers)
        elif verb == "delete":
            response = self.client.delete(uri, headers)
        else:
            raise UnsupportedOperationError(f"HTTP method {method!r} is not supported")

        if not config.auto_unwrap:
            return response
        return unwrap_response(response)

    def dispatch(self, name: str, *args, **kwargs) -> Any:
        """
        Call an operation by name, e.g. dispatch("findBy", {"status": "active"}).

        Raises:
            UnsupportedOperationError: If name is not a repository operation
        """
        try:
            attr = OPERATIONS[name]
        except KeyError:
            raise UnsupportedOperationError(f"Method {name} does not exist")
        return getattr(self, attr)(*args, **kwargs)

    def create(self, params: Mapping[str, Any]) -> Any:
        return self.request("post", self._resource_uri(), params)

    def update(self, id: ResourceId, params: Mapping[str, Any]) -> Any:
        return self.request("put", self._resource_uri(id), params)

    def delete(self, id: ResourceId) -> Any:
        return self.request("delete", self._resource_uri(id))

    def restore(self, id: ResourceId) -> Any:
        return self.request("put", self._resource_uri(id, "restore"))

    def find(self, id: Union[ResourceId, Mapping[str, Any], list, tuple]) -> Any:
        """Finds an entity by its primary key/identifier."""
        if is_id_collection(id):
            return self.find_by({"id": id})

        return self.request("get", self._resource_uri(id), {})

    def find_by(self,
                criteria: Criteria,
                order_by: Optional[OrderBy] = None,
                limit: Optional[int] = None,
                offset: Optional[int] = None) -> Any:
        """Finds entities by a set of criteria."""
        query = build_find_query(criteria, order_by, limit, offset)
        return self.request("get", self._resource_uri(), query)

    def find_one_by(self, criteria: Criteria, order_by: Optional[OrderBy] = None) -> Any:
        """Finds a single entity by a set of criteria."""
        return self.find_by(criteria, order_by, 1)

    def find_all(self, order_by: Optional[OrderBy] = None) -> Any:
        """Finds all entities in the repository."""
        return self.find_by({}, order_by)


def _make_config(uri: str,
                 headers: Optional[Mapping[str, str]],
                 auto_unwrap: bool) -> RepositoryConfig:
    if not isinstance(uri, str) or not uri.strip():
        raise ConfigurationError(f"Invalid resource URI: {uri!r}")
    try:
        return RepositoryConfig(
            base_resource_uri=uri,
            headers=headers,
            auto_unwrap=auto_unwrap,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid repository configuration: {e}") from e


def get_repository(uri: str,
                   headers: Optional[Mapping[str, str]] = None,
                   auto_unwrap: bool = True,
                   client: Optional[BaseHttpClient] = None) -> JsonApiRepository:
    """
    Build a repository for one resource.

    Example:
        >>> users = get_repository("https://api.example.com/users",
        ...                        headers={"Authorization": "Bearer ..."})
        >>> users.find_by({"status": "active"}, {"name": "asc"}, limit=10)
    """
    return JsonApiRepository(_make_config(uri, headers, auto_unwrap), client)
