"""Courses API: query surface for an author's courses."""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy.orm import Session

from ..database.author_repo import author_exists
from ..database.course_repo import get_course as find_course
from ..database.course_repo import list_courses_for_author
from ..query.shaping import ShapedRecord, shape_data
from .models import CourseDto

if TYPE_CHECKING:
    from ..database.schema import Course


def _course_row_to_dto(course_row: "Course") -> CourseDto:
    return CourseDto(
        id=course_row.id,
        title=course_row.title,
        description=course_row.description,
        author_id=course_row.author_id,
    )


def list_courses(session: Session, author_id: str, fields: str = "") -> Optional[List[ShapedRecord]]:
    """
    List an author's courses (ordered by title), shaped to ``fields``.

    Returns:
        Shaped course records, or None if the author doesn't exist

    Raises:
        FieldNotFoundError: fields names a field CourseDto doesn't have
    """
    if not author_exists(session, author_id):
        return None
    courses = [_course_row_to_dto(c) for c in list_courses_for_author(session, author_id)]
    return shape_data(courses, fields, source_type=CourseDto)


def get_course(session: Session, author_id: str, course_id: str) -> Optional[CourseDto]:
    course_row = find_course(session, author_id, course_id)
    if course_row is None:
        return None
    return _course_row_to_dto(course_row)
