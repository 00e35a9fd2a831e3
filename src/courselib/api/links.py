"""Pagination link construction for collection resources."""

from urllib.parse import urlencode

from ..query.parameters import ResourceParameters
from ..query.pipeline import ResourceUriType

AUTHORS_ROUTE = "/api/authors"


def create_resource_uri(route: str, params: ResourceParameters, uri_type: ResourceUriType) -> str:
    """
    Re-encode the request for the previous, next or current page.

    Every filter and option is carried over so the link addresses the same
    result set; only pageNumber moves.
    """
    if uri_type == ResourceUriType.PREVIOUS_PAGE:
        page_number = params.page_number - 1
    elif uri_type == ResourceUriType.NEXT_PAGE:
        page_number = params.page_number + 1
    else:
        page_number = params.page_number
    return f"{route}?{urlencode(params.to_query(page_number=page_number))}"


def create_authors_resource_uri(params: ResourceParameters, uri_type: ResourceUriType) -> str:
    return create_resource_uri(AUTHORS_ROUTE, params, uri_type)
