"""Data shaping: project typed objects down to a client-selected set of fields."""

import dataclasses
import threading
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect

from .errors import FieldNotFoundError

ShapedRecord = Dict[str, Any]


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    accessor: Callable[[Any], Any]


def _discover_field_names(source_type: type) -> List[str]:
    if isinstance(source_type, type) and issubclass(source_type, BaseModel):
        return list(source_type.model_fields) + list(source_type.model_computed_fields)

    if dataclasses.is_dataclass(source_type):
        return [f.name for f in dataclasses.fields(source_type)]

    mapper = sa_inspect(source_type, raiseerr=False)
    if mapper is not None and hasattr(mapper, "column_attrs"):
        return [attr.key for attr in mapper.column_attrs]

    names: List[str] = []
    for klass in reversed(source_type.__mro__):
        for name in getattr(klass, "__annotations__", {}):
            if not name.startswith("_") and name not in names:
                names.append(name)
    return names


class FieldTable:
    """
    Per-type table of public fields (declared name -> accessor).

    Built once per type and cached. The cache is keyed by the view and model
    classes the application shapes, a finite set fixed at import time, so it
    does not grow per request. Fills take a lock; hits do not.
    """

    _cache: Dict[type, "FieldTable"] = {}
    _cache_lock = threading.Lock()

    def __init__(self, source_type: type):
        self.source_type = source_type
        self.descriptors: Tuple[FieldDescriptor, ...] = tuple(
            FieldDescriptor(name, attrgetter(name)) for name in _discover_field_names(source_type)
        )
        self._by_lower_name = {d.name.lower(): d for d in self.descriptors}

    @classmethod
    def for_type(cls, source_type: type) -> "FieldTable":
        table = cls._cache.get(source_type)
        if table is None:
            with cls._cache_lock:
                table = cls._cache.get(source_type)
                if table is None:
                    table = cls(source_type)
                    cls._cache[source_type] = table
        return table

    @property
    def names(self) -> List[str]:
        return [d.name for d in self.descriptors]

    def find(self, field_name: str) -> Optional[FieldDescriptor]:
        """Case-insensitive lookup of one field."""
        return self._by_lower_name.get(field_name.lower())

    def resolve(self, fields: Optional[str]) -> Tuple[FieldDescriptor, ...]:
        """
        Resolve a comma-separated field list to descriptors, in request order.

        Blank ``fields`` selects every public field. Tokens are trimmed but not
        deduplicated.

        Raises:
            FieldNotFoundError: A token is not a public field of the type
        """
        if fields is None or not fields.strip():
            return self.descriptors

        resolved = []
        for token in fields.split(","):
            field_name = token.strip()
            descriptor = self.find(field_name)
            if descriptor is None:
                raise FieldNotFoundError(field_name, self.source_type)
            resolved.append(descriptor)
        return tuple(resolved)


def _project(item: Any, descriptors: Sequence[FieldDescriptor]) -> ShapedRecord:
    record: ShapedRecord = {}
    for descriptor in descriptors:
        record[descriptor.name] = descriptor.accessor(item)
    return record


def shape_data(
    items: Iterable[Any],
    fields: Optional[str] = None,
    source_type: Optional[type] = None,
) -> List[ShapedRecord]:
    """
    Shape every item to the requested fields.

    Args:
        items: Objects of one type
        fields: Comma-separated field names; blank means all public fields
        source_type: Type to resolve fields against (default: type of the first item)

    Returns:
        One ShapedRecord per item, keys in resolved order with declared casing

    Raises:
        FieldNotFoundError: A requested field does not exist on the type
    """
    items = list(items)
    if source_type is None:
        if not items:
            return []
        source_type = type(items[0])

    descriptors = FieldTable.for_type(source_type).resolve(fields)
    return [_project(item, descriptors) for item in items]


def shape_one(item: Any, fields: Optional[str] = None) -> ShapedRecord:
    """Shape a single object to the requested fields."""
    if item is None:
        raise ValueError("Cannot shape None")
    descriptors = FieldTable.for_type(type(item)).resolve(fields)
    return _project(item, descriptors)


def type_has_properties(source_type: type, fields: Optional[str]) -> bool:
    """Return True if every requested field is a public field of ``source_type``."""
    if fields is None or not fields.strip():
        return True

    table = FieldTable.for_type(source_type)
    for token in fields.split(","):
        if table.find(token.strip()) is None:
            return False
    return True
