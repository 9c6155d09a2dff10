"""
JSON:API query building.

find_by() parameters map onto the JSON:API query conventions:
    criteria       -> filter[<field>]=<value>
    order_by       -> sort=field1,-field2
    limit, offset  -> page[limit]=N, page[offset]=M

build_find_query() produces the nested structure; encode_query() flattens it
into bracket-keyed pairs for the URL.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from jsonapi_repository.schemas import Criteria, OrderBy, normalize_order_by


def build_sort(order_by: OrderBy) -> str:
    """
    Serialize an ordering to a JSON:API sort value.

    Any direction other than "asc" (case-insensitive) sorts descending.

    Example:
        >>> build_sort({"name": "asc", "created_at": "DESC"})
        'name,-created_at'
    """
    sort = []
    for field, direction in normalize_order_by(order_by):
        sort.append(field if direction.lower() == "asc" else f"-{field}")
    return ",".join(sort)


def build_find_query(
    criteria: Optional[Criteria] = None,
    order_by: Optional[OrderBy] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Build the nested query for a find request.

    None arguments contribute nothing, so an omitted filter and an empty
    criteria mapping both produce no "filter" key, while an empty ordering
    still produces an empty "sort".
    """
    query: Dict[str, Any] = {}

    if criteria:
        query["filter"] = dict(criteria)

    if order_by is not None:
        query["sort"] = build_sort(order_by)

    if limit is not None:
        query.setdefault("page", {})["limit"] = limit

    if offset is not None:
        query.setdefault("page", {})["offset"] = offset

    return query


def _scalar(value: Any) -> str:
    if value is True:
        return "1"
    if value is False:
        return "0"
    return str(value)


def encode_query(params: Mapping[str, Any], prefix: Optional[str] = None) -> List[Tuple[str, str]]:
    """
    Flatten nested params into bracket-keyed pairs.

    Mappings nest by key and lists/tuples by index; None values are dropped.

    Example:
        >>> encode_query({"filter": {"id": [1, 2]}, "sort": "-name"})
        [('filter[id][0]', '1'), ('filter[id][1]', '2'), ('sort', '-name')]
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        name = str(key) if prefix is None else f"{prefix}[{key}]"
        if value is None:
            continue
        if isinstance(value, Mapping):
            pairs.extend(encode_query(value, name))
        elif isinstance(value, (list, tuple)):
            pairs.extend(encode_query(dict(enumerate(value)), name))
        else:
            pairs.append((name, _scalar(value)))
    return pairs
