"""Authors API: canonical query surface for author data."""

from typing import Optional

from sqlalchemy.orm import Session

from ..database.author_repo import build_authors_query
from ..database.author_repo import create_author as create_author_row
from ..database.author_repo import delete_author as delete_author_row
from ..database.author_repo import get_author as find_author
from ..database.schema import Author
from ..query.errors import InvalidFieldSelectionError
from ..query.mapping import PropertyMappingRegistry
from ..query.pipeline import ShapedPage, run_collection_query
from ..query.shaping import ShapedRecord, shape_one, type_has_properties
from ..utils.logging import get_logger
from ..utils.time import age_in_years
from .links import create_authors_resource_uri
from .models import AuthorDto, AuthorForCreationDto, AuthorsResourceParameters

logger = get_logger(__name__)


def _author_row_to_dto(author_row: Author) -> AuthorDto:
    """Convert Author ORM row to AuthorDto."""
    return AuthorDto(
        id=author_row.id,
        name=f"{author_row.first_name} {author_row.last_name}",
        age=age_in_years(author_row.date_of_birth),
        main_category=author_row.main_category,
    )


def list_authors(
    session: Session,
    params: AuthorsResourceParameters,
    mapping_registry: PropertyMappingRegistry,
) -> ShapedPage:
    """
    List one page of authors, sorted and shaped as requested.

    Args:
        session: SQLAlchemy session
        params: Clamped collection parameters (order_by, fields, paging, filters)
        mapping_registry: Registry holding the AuthorDto -> Author mapping

    Returns:
        ShapedPage with shaped author records and pagination metadata

    Raises:
        InvalidSortFieldError: order_by names a field that cannot be sorted on
        InvalidFieldSelectionError: fields names a field AuthorDto doesn't have
    """
    authors = build_authors_query(
        session,
        main_category=params.main_category,
        search_query=params.search_query,
    )
    return run_collection_query(
        authors,
        params,
        mapping_registry=mapping_registry,
        view_type=AuthorDto,
        model_type=Author,
        to_view=_author_row_to_dto,
        link_builder=create_authors_resource_uri,
    )


def get_author(
    session: Session,
    author_id: str,
    fields: str = "",
) -> Optional[ShapedRecord]:
    """
    Get one author shaped to the requested fields.

    Args:
        session: SQLAlchemy session
        author_id: Author ID
        fields: Comma-separated AuthorDto fields (blank = all)

    Returns:
        Shaped author record, or None if not found

    Raises:
        InvalidFieldSelectionError: fields names a field AuthorDto doesn't have
    """
    if not type_has_properties(AuthorDto, fields):
        logger.warning(f"Rejected fields '{fields}' for AuthorDto")
        raise InvalidFieldSelectionError(f"Requested fields '{fields}' are not all available on AuthorDto")

    author_row = find_author(session, author_id)
    if author_row is None:
        return None
    return shape_one(_author_row_to_dto(author_row), fields)


def create_author(session: Session, author: AuthorForCreationDto) -> AuthorDto:
    """Create an author (and its courses) and commit."""
    author_row = create_author_row(
        session,
        first_name=author.first_name,
        last_name=author.last_name,
        date_of_birth=author.date_of_birth,
        main_category=author.main_category,
        courses=[course.model_dump() for course in author.courses],
    )
    session.commit()
    logger.info(f"Created author {author_row.id}")
    return _author_row_to_dto(author_row)


def delete_author(session: Session, author_id: str) -> bool:
    """Delete an author and its courses. Returns False if the author doesn't exist."""
    author_row = find_author(session, author_id)
    if author_row is None:
        return False
    delete_author_row(session, author_row)
    session.commit()
    logger.info(f"Deleted author {author_id}")
    return True
