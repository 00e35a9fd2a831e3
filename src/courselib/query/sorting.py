"""Sort compiler: free-text order_by clause -> ordered model sort keys."""

from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy.orm import Query

from ..utils.logging import get_logger
from .errors import InvalidSortFieldError, MappingConfigurationError
from .mapping import MappingValue, PropertyMapping, field_name_from_clause

logger = get_logger(__name__)

DESCENDING_SUFFIX = " desc"


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False


def parse_sort_clause(order_by: Optional[str]) -> List[tuple[str, bool]]:
    """
    Split an order_by string into (public field name, descending) pairs.

    Only a trimmed clause ending in exactly " desc" (lower case) is descending.
    The field name is everything before the first space, so "name DESC" or
    "name descending" parse as ascending on "name".
    """
    if order_by is None or not order_by.strip():
        return []

    parsed = []
    for clause in order_by.split(","):
        trimmed = clause.strip()
        parsed.append((field_name_from_clause(trimmed), trimmed.endswith(DESCENDING_SUFFIX)))
    return parsed


def compile_sort(
    order_by: Optional[str],
    mapping: Mapping[str, Optional[MappingValue]],
) -> List[SortKey]:
    """
    Compile an order_by string into model-level sort keys.

    Args:
        order_by: Comma-separated "field" / "field desc" clauses
        mapping: Public field -> MappingValue (looked up case-insensitively)

    Returns:
        SortKeys in application order; empty when order_by is blank

    Raises:
        InvalidSortFieldError: A clause names a field missing from the mapping
        MappingConfigurationError: A matched entry has no MappingValue
    """
    if not isinstance(mapping, PropertyMapping):
        mapping = PropertyMapping(mapping)

    sort_keys: List[SortKey] = []
    for field_name, descending in parse_sort_clause(order_by):
        if field_name not in mapping:
            raise InvalidSortFieldError(field_name)

        mapping_value = mapping[field_name]
        if mapping_value is None:
            raise MappingConfigurationError(f"Mapping value for '{field_name}' is null")

        if mapping_value.revert:
            descending = not descending

        for target_field in mapping_value.target_fields:
            sort_keys.append(SortKey(target_field, descending))
    return sort_keys


def _primary_entity(query: Query) -> type:
    return query.column_descriptions[0]["entity"]


def _nulls_first(getter: Callable[[Any], Any]) -> Callable[[Any], Tuple[bool, Any]]:
    # None orders before any value ascending, after any value descending (SQLite NULL order).
    def key(item: Any) -> Tuple[bool, Any]:
        value = getter(item)
        return (value is not None, value)
    return key


def _sort_in_memory(items: Iterable[Any], sort_keys: List[SortKey]) -> List[Any]:
    # Stable sorts applied from the least significant key backwards.
    ordered = list(items)
    for sort_key in reversed(sort_keys):
        ordered.sort(key=_nulls_first(attrgetter(sort_key.field)), reverse=sort_key.descending)
    return ordered


def apply_sort(
    source: Any,
    order_by: Optional[str],
    mapping: Mapping[str, Optional[MappingValue]],
    model: Optional[type] = None,
) -> Any:
    """
    Compile order_by and apply it to a data source.

    A SQLAlchemy Query gets ORDER BY clauses on ``model`` (default: the
    query's primary entity) and stays lazy. Any other iterable comes back
    as a new sorted list. A blank order_by returns the source untouched.
    """
    sort_keys = compile_sort(order_by, mapping)
    if not sort_keys:
        return source

    compiled = ", ".join(f"{k.field} {'desc' if k.descending else 'asc'}" for k in sort_keys)
    logger.debug(f"Compiled sort '{order_by}' -> {compiled}")

    if isinstance(source, Query):
        entity = model or _primary_entity(source)
        clauses = []
        for sort_key in sort_keys:
            column = getattr(entity, sort_key.field)
            clauses.append(column.desc() if sort_key.descending else column.asc())
        return source.order_by(*clauses)

    return _sort_in_memory(source, sort_keys)
