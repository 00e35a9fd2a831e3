"""Collection query pipeline: validate -> sort -> page -> convert -> shape."""

from enum import Enum
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..utils.logging import get_logger
from .errors import InvalidFieldSelectionError, InvalidSortFieldError
from .mapping import PropertyMappingRegistry
from .paging import PagedList
from .parameters import ResourceParameters
from .shaping import ShapedRecord, shape_data, type_has_properties
from .sorting import apply_sort

logger = get_logger(__name__)


class ResourceUriType(str, Enum):
    PREVIOUS_PAGE = "previous_page"
    NEXT_PAGE = "next_page"
    CURRENT = "current"


LinkBuilder = Callable[[ResourceParameters, ResourceUriType], str]


class PaginationMetadata(BaseModel):
    """Pagination metadata, serialized with camelCase keys for the X-Pagination header."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_count: int
    page_size: int
    current_page: int
    total_pages: int
    previous_page_link: Optional[str] = None
    next_page_link: Optional[str] = None

    @classmethod
    def from_paged_list(
        cls,
        paged: PagedList,
        params: ResourceParameters,
        link_builder: Optional[LinkBuilder] = None,
    ) -> "PaginationMetadata":
        previous_page_link = None
        next_page_link = None
        if link_builder is not None:
            if paged.has_previous:
                previous_page_link = link_builder(params, ResourceUriType.PREVIOUS_PAGE)
            if paged.has_next:
                next_page_link = link_builder(params, ResourceUriType.NEXT_PAGE)
        return cls(
            total_count=paged.total_count,
            page_size=paged.page_size,
            current_page=paged.current_page,
            total_pages=paged.total_pages,
            previous_page_link=previous_page_link,
            next_page_link=next_page_link,
        )

    def header_value(self) -> str:
        return self.model_dump_json(by_alias=True)


class ShapedPage(BaseModel):
    items: List[ShapedRecord] = Field(default_factory=list)
    pagination: PaginationMetadata


def validate_collection_request(
    params: ResourceParameters,
    *,
    mapping_registry: PropertyMappingRegistry,
    view_type: type,
    model_type: type,
) -> None:
    """
    Reject a request before any query work is done.

    Raises:
        InvalidSortFieldError: order_by names an unmapped field
        InvalidFieldSelectionError: fields names a field the view type lacks
        MappingNotFoundError: No mapping registered for (view_type, model_type)
    """
    unmapped = mapping_registry.first_unmapped_field(view_type, model_type, params.order_by)
    if unmapped is not None:
        logger.warning(
            f"Rejected order_by '{params.order_by}' for {view_type.__name__}: no mapping for '{unmapped}'"
        )
        raise InvalidSortFieldError(unmapped)

    if not type_has_properties(view_type, params.fields):
        logger.warning(f"Rejected fields '{params.fields}' for {view_type.__name__}")
        raise InvalidFieldSelectionError(
            f"Requested fields '{params.fields}' are not all available on {view_type.__name__}"
        )


def run_collection_query(
    source: Any,
    params: ResourceParameters,
    *,
    mapping_registry: PropertyMappingRegistry,
    view_type: type,
    model_type: type,
    to_view: Callable[[Any], Any],
    link_builder: Optional[LinkBuilder] = None,
) -> ShapedPage:
    """
    Run one collection request against an already-filtered data source.

    Args:
        source: Filtered SQLAlchemy Query (or in-memory sequence) of model_type
        params: Clamped request parameters
        mapping_registry: Registry holding the (view_type, model_type) mapping
        view_type: Public DTO type that fields are validated/shaped against
        model_type: Storage model type that order_by is mapped onto
        to_view: Converts one model object to a view_type object
        link_builder: Builds previous/next page links

    Returns:
        ShapedPage with shaped items and pagination metadata
    """
    validate_collection_request(
        params,
        mapping_registry=mapping_registry,
        view_type=view_type,
        model_type=model_type,
    )

    mapping = mapping_registry.get_mapping(view_type, model_type)
    sorted_source = apply_sort(source, params.order_by, mapping, model=model_type)
    paged = PagedList.create(sorted_source, params.page_number, params.page_size)

    views = [to_view(item) for item in paged]
    items = shape_data(views, params.fields, source_type=view_type)

    logger.info(
        f"Collection query {view_type.__name__}: page {paged.current_page}/{paged.total_pages}, "
        f"{len(items)} of {paged.total_count} items"
    )
    return ShapedPage(
        items=items,
        pagination=PaginationMetadata.from_paged_list(paged, params, link_builder),
    )
