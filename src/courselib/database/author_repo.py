"""Repository functions for the authors table."""

from datetime import date
from typing import Dict, Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from ..utils.id_generator import new_author_id, new_course_id
from ..utils.logging import get_logger
from .schema import Author, Course

logger = get_logger(__name__)


def build_authors_query(
    session: Session,
    main_category: Optional[str] = None,
    search_query: Optional[str] = None,
) -> Query:
    """
    Build a deferred, filtered authors query.

    Nothing is executed here; sorting and paging are layered on afterwards
    so the database only returns one page.

    Args:
        session: SQLAlchemy session
        main_category: Exact main category match (trimmed); blank means no filter
        search_query: Substring match on main category, first name or last name

    Returns:
        Unexecuted Query over Author
    """
    query = session.query(Author)

    if main_category and main_category.strip():
        query = query.filter(Author.main_category == main_category.strip())

    if search_query and search_query.strip():
        pattern = f"%{search_query.strip()}%"
        query = query.filter(
            or_(
                Author.main_category.like(pattern),
                Author.first_name.like(pattern),
                Author.last_name.like(pattern),
            )
        )
    return query


def get_author(session: Session, author_id: str) -> Optional[Author]:
    if not author_id:
        raise ValueError("author_id is required")
    return session.get(Author, author_id)


def author_exists(session: Session, author_id: str) -> bool:
    if not author_id:
        raise ValueError("author_id is required")
    return session.query(Author.id).filter(Author.id == author_id).first() is not None


def get_authors_by_ids(session: Session, author_ids: Iterable[str]) -> List[Author]:
    """Load several authors, ordered by first then last name."""
    ids = list(author_ids)
    if not ids:
        return []
    return (
        session.query(Author)
        .filter(Author.id.in_(ids))
        .order_by(Author.first_name, Author.last_name)
        .all()
    )


def add_author(session: Session, author: Author) -> Author:
    """
    Stage a new author (and any attached courses) for insert.

    The repository assigns ids; any id already set on the objects is replaced.
    Caller commits.
    """
    if author is None:
        raise ValueError("author is required")

    author.id = new_author_id()
    for course in author.courses:
        course.id = new_course_id()

    session.add(author)
    logger.debug(f"Added author {author.id} ({author.first_name} {author.last_name})")
    return author


def create_author(
    session: Session,
    *,
    first_name: str,
    last_name: str,
    date_of_birth: date,
    main_category: str,
    courses: Optional[List[Dict[str, Optional[str]]]] = None,
) -> Author:
    """
    Build a new Author row (with optional courses) and stage it for insert.

    Args:
        session: SQLAlchemy session
        first_name: Author first name
        last_name: Author last name
        date_of_birth: Date of birth
        main_category: Main category
        courses: Optional list of {"title", "description"} dicts

    Returns:
        Staged Author row (caller commits)
    """
    row = Author(
        first_name=first_name,
        last_name=last_name,
        date_of_birth=date_of_birth,
        main_category=main_category,
    )
    for course in courses or []:
        row.courses.append(Course(title=course["title"], description=course.get("description")))
    return add_author(session, row)


def delete_author(session: Session, author: Author) -> None:
    if author is None:
        raise ValueError("author is required")
    session.delete(author)
    logger.debug(f"Deleted author {author.id}")
