"""Unit tests for data shaping and field existence checks."""

from dataclasses import dataclass
from datetime import date

import pytest

from courselib.api.models import AuthorDto
from courselib.database.schema import Author
from courselib.query.errors import FieldNotFoundError, InvalidFieldSelectionError
from courselib.query.shaping import FieldTable, shape_data, shape_one, type_has_properties


@dataclass
class PersonView:
    id: int
    firstName: str
    lastName: str


PEOPLE = [
    PersonView(1, "Ada", "Lovelace"),
    PersonView(2, "Grace", "Hopper"),
]


def test_blank_fields_reproduces_every_public_field():
    shaped = shape_data(PEOPLE, "")
    assert shaped == [
        {"id": 1, "firstName": "Ada", "lastName": "Lovelace"},
        {"id": 2, "firstName": "Grace", "lastName": "Hopper"},
    ]


def test_selection_yields_exactly_requested_fields():
    shaped = shape_data(PEOPLE, "firstName")
    assert shaped == [{"firstName": "Ada"}, {"firstName": "Grace"}]


def test_keys_use_declared_casing_and_request_order():
    shaped = shape_data(PEOPLE, " LASTNAME , id ")
    assert list(shaped[0]) == ["lastName", "id"]
    assert shaped[0] == {"lastName": "Lovelace", "id": 1}


def test_duplicate_fields_are_copied_again_without_error():
    shaped = shape_one(PEOPLE[0], "id,ID,firstName")
    assert shaped == {"id": 1, "firstName": "Ada"}


def test_unknown_field_raises_field_not_found():
    with pytest.raises(FieldNotFoundError) as exc_info:
        shape_data(PEOPLE, "id,middleName")
    assert exc_info.value.field_name == "middleName"
    assert isinstance(exc_info.value, InvalidFieldSelectionError)


def test_empty_token_is_not_a_field():
    with pytest.raises(FieldNotFoundError):
        shape_one(PEOPLE[0], "id,")


def test_field_list_resolved_once_per_call(monkeypatch):
    calls = []
    original = FieldTable.resolve

    def counting_resolve(self, fields):
        calls.append(fields)
        return original(self, fields)

    monkeypatch.setattr(FieldTable, "resolve", counting_resolve)
    shape_data(PEOPLE * 50, "id")
    assert calls == ["id"]


def test_empty_sequence_shapes_to_empty_list():
    assert shape_data([], "id") == []
    with pytest.raises(FieldNotFoundError):
        shape_data([], "nope", source_type=PersonView)


def test_shape_one_pydantic_model():
    dto = AuthorDto(id="a1", name="Ada Lovelace", age=36, main_category="Maths")
    assert shape_one(dto, "Name,AGE") == {"name": "Ada Lovelace", "age": 36}
    assert shape_one(dto) == dto.model_dump()


def test_shape_one_none_raises():
    with pytest.raises(ValueError):
        shape_one(None, "id")


def test_shape_sqlalchemy_model_uses_column_attributes():
    author = Author(
        id="a1",
        first_name="Ada",
        last_name="Lovelace",
        date_of_birth=date(1815, 12, 10),
        main_category="Maths",
    )
    table = FieldTable.for_type(Author)
    assert table.names == ["id", "first_name", "last_name", "date_of_birth", "main_category"]
    assert shape_one(author, "last_name") == {"last_name": "Lovelace"}


def test_two_types_with_same_field_names_shape_interchangeably():
    @dataclass
    class Other:
        id: int
        firstName: str
        lastName: str

    assert shape_one(Other(1, "Ada", "Lovelace")) == shape_one(PEOPLE[0])


def test_field_table_is_cached_per_type():
    assert FieldTable.for_type(PersonView) is FieldTable.for_type(PersonView)


@pytest.mark.parametrize("fields", ["", "  ", None, "id", "ID, firstname", "lastName,lastName"])
def test_type_has_properties_true(fields):
    assert type_has_properties(PersonView, fields) is True


@pytest.mark.parametrize("fields", ["middleName", "id,middleName", "id,", "first_name"])
def test_type_has_properties_false(fields):
    assert type_has_properties(PersonView, fields) is False


def test_field_table_concurrent_fill_builds_one_table():
    from concurrent.futures import ThreadPoolExecutor

    @dataclass
    class FreshView:
        id: int
        title: str

    with ThreadPoolExecutor(max_workers=8) as pool:
        tables = list(pool.map(lambda _: FieldTable.for_type(FreshView), range(32)))

    assert all(table is tables[0] for table in tables)
    assert tables[0].names == ["id", "title"]
