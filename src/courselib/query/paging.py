"""Paged result container over a filtered, sorted data source."""

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, List, TypeVar

from sqlalchemy.orm import Query

from ..utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _count(source: Any) -> int:
    if isinstance(source, Query):
        return source.count()
    return len(source)


@dataclass(frozen=True)
class PagedList(Generic[T]):
    """
    One page of a result set plus its position within the whole.

    ``current_page`` and ``page_size`` are trusted as given: the requesting
    layer clamps them. A page past the end simply has no items.
    """
    items: List[T] = field(default_factory=list)
    total_count: int = 0
    page_size: int = 10
    current_page: int = 1

    @property
    def total_pages(self) -> int:
        if self.total_count == 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @classmethod
    def create(cls, source: Any, page_number: int, page_size: int) -> "PagedList[T]":
        """
        Count the full source and slice out one page.

        Args:
            source: SQLAlchemy Query (count + LIMIT/OFFSET run in the database)
                or any sized, sliceable sequence
            page_number: 1-based page number
            page_size: Items per page

        Returns:
            PagedList for the requested page

        Note:
            Count and slice are separate statements; rows written between
            them can make the two disagree.
        """
        total_count = _count(source)
        start = (page_number - 1) * page_size
        items = list(source[start:start + page_size])
        logger.debug(f"Paged slice [{start}:{start + page_size}] -> {len(items)} of {total_count}")
        return cls(
            items=items,
            total_count=total_count,
            page_size=page_size,
            current_page=page_number,
        )
