"""Collection query engine: sort mapping, paging and data shaping.

The pieces compose into one request pipeline (see ``pipeline.run_collection_query``):

1. ``mapping``  - public view field -> internal model field(s)
2. ``sorting``  - free-text ``order_by`` -> ordered sort keys
3. ``paging``   - count + slice of a lazily evaluated source
4. ``shaping``  - typed objects -> string-keyed partial records
"""

from .errors import (
    FieldNotFoundError,
    InvalidFieldSelectionError,
    InvalidQueryError,
    InvalidSortFieldError,
    MappingConfigurationError,
    MappingNotFoundError,
    QueryError,
)
from .mapping import MappingValue, PropertyMapping, PropertyMappingRegistry
from .paging import PagedList
from .parameters import ResourceParameters
from .pipeline import PaginationMetadata, ResourceUriType, ShapedPage, run_collection_query
from .shaping import FieldTable, ShapedRecord, shape_data, shape_one, type_has_properties
from .sorting import SortKey, apply_sort, compile_sort

__all__ = [
    "FieldNotFoundError",
    "FieldTable",
    "InvalidFieldSelectionError",
    "InvalidQueryError",
    "InvalidSortFieldError",
    "MappingConfigurationError",
    "MappingNotFoundError",
    "MappingValue",
    "PagedList",
    "PaginationMetadata",
    "PropertyMapping",
    "PropertyMappingRegistry",
    "QueryError",
    "ResourceParameters",
    "ResourceUriType",
    "ShapedPage",
    "ShapedRecord",
    "SortKey",
    "apply_sort",
    "compile_sort",
    "run_collection_query",
    "shape_data",
    "shape_one",
    "type_has_properties",
]
