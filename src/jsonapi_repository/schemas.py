"""
Data models shared by the repository and its HTTP collaborators.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# {"name": "asc", "created_at": "desc"} or [("name", "asc"), ("created_at", "desc")]
OrderBy = Union[Mapping[str, str], Iterable[Tuple[str, str]]]
Criteria = Mapping[str, Any]


class RepositoryConfig(BaseModel):
    """Immutable configuration of a single resource repository."""

    model_config = ConfigDict(frozen=True)

    base_resource_uri: str
    headers: Dict[str, str] = Field(default_factory=dict)
    auto_unwrap: bool = True

    @field_validator("base_resource_uri")
    @classmethod
    def _uri_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("base_resource_uri must be a non-empty string")
        return value

    @field_validator("headers", mode="before")
    @classmethod
    def _headers_as_strings(cls, value):
        # None means "no static headers"; values such as 2 are sent as "2"
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {str(name): str(header) for name, header in value.items()}
        return value

    def with_changes(self, **changes: Any) -> "RepositoryConfig":
        """Return a validated copy with the given fields replaced."""
        return RepositoryConfig(**{**self.model_dump(), **changes})


class HttpResponse(BaseModel):
    """Status code, parsed body and headers of one HTTP exchange."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    body: Any = None
    headers: Dict[str, str] = Field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return str(self.status_code).startswith("2")


def normalize_order_by(order_by: OrderBy) -> List[Tuple[str, str]]:
    """
    Turn an ordering given as a mapping or as (field, direction) pairs into
    a list of pairs, keeping the caller's order.
    """
    if isinstance(order_by, Mapping):
        return [(str(field), str(direction)) for field, direction in order_by.items()]
    if isinstance(order_by, (str, bytes)):
        raise TypeError("order_by must be a mapping or a sequence of (field, direction) pairs")

    pairs: List[Tuple[str, str]] = []
    for item in order_by:
        try:
            field, direction = item
        except (TypeError, ValueError):
            raise TypeError(f"Invalid order_by entry {item!r}: expected a (field, direction) pair")
        pairs.append((str(field), str(direction)))
    return pairs


def is_id_collection(value: Optional[Any]) -> bool:
    """True when an id argument is a mapping or a list of ids rather than a scalar."""
    return isinstance(value, (Mapping, list, tuple))
