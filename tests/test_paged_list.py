"""Unit tests for PagedList."""

import math

import pytest

from courselib.database.schema import Author
from courselib.query.paging import PagedList


@pytest.mark.parametrize(
    "total_count,page_number,page_size",
    [
        (0, 1, 10),
        (1, 1, 10),
        (10, 1, 10),
        (25, 1, 10),
        (25, 2, 10),
        (25, 3, 10),
        (25, 4, 10),
        (7, 3, 3),
        (20, 1, 20),
    ],
)
def test_page_shape_and_flags(total_count, page_number, page_size):
    source = list(range(total_count))
    paged = PagedList.create(source, page_number, page_size)

    expected_len = min(page_size, max(0, total_count - (page_number - 1) * page_size))
    assert len(paged.items) == expected_len
    assert paged.total_count == total_count
    assert paged.total_pages == (0 if total_count == 0 else math.ceil(total_count / page_size))
    assert paged.has_previous == (page_number > 1)
    assert paged.has_next == (page_number < paged.total_pages)


def test_items_are_the_requested_slice():
    paged = PagedList.create(list(range(25)), 2, 10)
    assert paged.items == list(range(10, 20))
    assert list(paged) == paged.items


def test_out_of_range_page_is_empty_without_error():
    paged = PagedList.create(list(range(5)), 9, 10)
    assert paged.items == []
    assert paged.total_pages == 1
    assert paged.has_next is False
    assert paged.has_previous is True


def test_empty_source_has_zero_pages():
    paged = PagedList.create([], 1, 10)
    assert paged.total_pages == 0
    assert paged.has_next is False
    assert paged.has_previous is False


def test_paged_list_is_immutable():
    paged = PagedList.create([1, 2, 3], 1, 2)
    with pytest.raises(AttributeError):
        paged.total_count = 99


def test_create_from_query_counts_and_slices_in_database(session, authors):
    query = session.query(Author).order_by(Author.id)
    paged = PagedList.create(query, 3, 10)

    assert paged.total_count == 25
    assert paged.total_pages == 3
    assert [a.id for a in paged.items] == [f"author-{i:02d}" for i in range(20, 25)]
    assert paged.has_next is False
