"""DTOs exposed by the API layer."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..query.parameters import ResourceParameters


class AuthorDto(BaseModel):
    """Public view of an author. ``name`` and ``age`` are derived, not stored."""
    id: str
    name: str
    age: int
    main_category: str


class CourseDto(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    author_id: str


class CourseForCreationDto(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1500)


class AuthorForCreationDto(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    date_of_birth: date
    main_category: str = Field(..., min_length=1, max_length=50)
    courses: List[CourseForCreationDto] = Field(default_factory=list)


class AuthorsResourceParameters(ResourceParameters):
    """Collection parameters for /api/authors: paging/sort/fields plus filters."""
    main_category: Optional[str] = None
    search_query: Optional[str] = None
