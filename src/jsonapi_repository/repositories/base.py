"""
Base Repository - Abstract interface for resource access

This defines the contract that all repository implementations must follow.
Callers program against these verbs and never see URIs, query strings or
response envelopes.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from jsonapi_repository.schemas import Criteria, OrderBy

ResourceId = Union[str, int]


class BaseRepository(ABC):
    """Abstract base class for resource repositories"""

    @abstractmethod
    def create(self, params: Mapping[str, Any]) -> Any:
        """
        Create a new entity.

        Args:
            params: Entity fields

        Returns:
            The created entity
        """
        pass

    @abstractmethod
    def update(self, id: ResourceId, params: Mapping[str, Any]) -> Any:
        """
        Replace the fields of an existing entity.

        Args:
            id: Entity identifier
            params: Entity fields

        Returns:
            The updated entity
        """
        pass

    @abstractmethod
    def delete(self, id: ResourceId) -> Any:
        """Delete an entity. Usually returns an empty result."""
        pass

    @abstractmethod
    def restore(self, id: ResourceId) -> Any:
        """Restore a previously deleted entity."""
        pass

    @abstractmethod
    def find(self, id: Union[ResourceId, Mapping[str, Any], list, tuple]) -> Any:
        """
        Find an entity by its identifier.

        Args:
            id: A single identifier, or a mapping/list of identifiers which
                is looked up as an "id" filter

        Returns:
            The entity, or a list of entities for a collection of ids
        """
        pass

    @abstractmethod
    def find_by(
        self,
        criteria: Criteria,
        order_by: Optional[OrderBy] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> Any:
        """
        Find entities matching a set of criteria.

        Args:
            criteria: Field -> value filter (may be empty)
            order_by: Field -> "asc"/"desc" ordering
            limit: Max number of entities
            offset: Number of entities to skip

        Returns:
            List of matching entities
        """
        pass

    @abstractmethod
    def find_one_by(self, criteria: Criteria, order_by: Optional[OrderBy] = None) -> Any:
        """Find entities matching criteria, limited to one result."""
        pass

    @abstractmethod
    def find_all(self, order_by: Optional[OrderBy] = None) -> Any:
        """Find every entity of the resource."""
        pass
