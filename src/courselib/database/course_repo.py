"""Repository functions for the courses table."""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..utils.id_generator import new_course_id
from ..utils.logging import get_logger
from .schema import Course

logger = get_logger(__name__)


def list_courses_for_author(session: Session, author_id: str) -> List[Course]:
    """All courses of one author, ordered by title."""
    if not author_id:
        raise ValueError("author_id is required")
    return (
        session.query(Course)
        .filter(Course.author_id == author_id)
        .order_by(Course.title)
        .all()
    )


def get_course(session: Session, author_id: str, course_id: str) -> Optional[Course]:
    if not author_id:
        raise ValueError("author_id is required")
    if not course_id:
        raise ValueError("course_id is required")
    return (
        session.query(Course)
        .filter(Course.author_id == author_id, Course.id == course_id)
        .first()
    )


def add_course(session: Session, author_id: str, course: Course) -> Course:
    """Stage a course for insert under ``author_id`` (always overrides course.author_id)."""
    if not author_id:
        raise ValueError("author_id is required")
    if course is None:
        raise ValueError("course is required")

    course.id = new_course_id()
    course.author_id = author_id
    session.add(course)
    logger.debug(f"Added course {course.id} for author {author_id}")
    return course


def delete_course(session: Session, course: Course) -> None:
    if course is None:
        raise ValueError("course is required")
    session.delete(course)
