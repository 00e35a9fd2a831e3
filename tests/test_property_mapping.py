"""Unit tests for the property mapping registry."""

from dataclasses import FrozenInstanceError

import pytest

from courselib.api.models import AuthorDto, CourseDto
from courselib.database.schema import Author, Course
from courselib.query.errors import MappingConfigurationError, MappingNotFoundError
from courselib.query.mapping import MappingValue, PropertyMapping, PropertyMappingRegistry


def _author_entries():
    return {
        "id": MappingValue(("id",)),
        "age": MappingValue(("date_of_birth",), revert=True),
        "name": MappingValue(("last_name", "first_name")),
    }


def test_mapping_value_requires_target_fields():
    with pytest.raises(MappingConfigurationError):
        MappingValue(())


def test_mapping_value_accepts_single_string_target():
    value = MappingValue("id")
    assert value.target_fields == ("id",)
    assert value.revert is False


def test_mapping_value_is_immutable():
    value = MappingValue(("id",))
    with pytest.raises(FrozenInstanceError):
        value.revert = True


def test_property_mapping_lookup_is_case_insensitive():
    mapping = PropertyMapping(_author_entries())
    assert "NAME" in mapping
    assert "Name" in mapping
    assert mapping["nAmE"].target_fields == ("last_name", "first_name")
    assert list(mapping) == ["id", "age", "name"]


def test_property_mapping_rejects_case_insensitive_duplicates():
    with pytest.raises(MappingConfigurationError):
        PropertyMapping({"name": MappingValue("last_name"), "Name": MappingValue("first_name")})


def test_register_and_get_mapping():
    registry = PropertyMappingRegistry()
    registry.register(AuthorDto, Author, _author_entries())

    mapping = registry.get_mapping(AuthorDto, Author)
    assert mapping["age"].revert is True
    assert registry.has_mapping(AuthorDto, Author)
    assert len(registry) == 1


def test_get_mapping_for_unregistered_pair_raises_not_found():
    registry = PropertyMappingRegistry()
    registry.register(AuthorDto, Author, _author_entries())

    with pytest.raises(MappingNotFoundError) as exc_info:
        registry.get_mapping(CourseDto, Course)
    assert "CourseDto" in str(exc_info.value)
    # Configuration defect, not a client error
    assert not isinstance(exc_info.value, ValueError)


def test_register_rejects_duplicate_pair_unless_replace():
    registry = PropertyMappingRegistry()
    registry.register(AuthorDto, Author, _author_entries())

    with pytest.raises(MappingConfigurationError):
        registry.register(AuthorDto, Author, {"id": MappingValue("id")})

    registry.register(AuthorDto, Author, {"id": MappingValue("id")}, replace=True)
    assert list(registry.get_mapping(AuthorDto, Author)) == ["id"]


def test_register_rejects_unknown_target_field():
    registry = PropertyMappingRegistry()
    with pytest.raises(MappingConfigurationError, match="birth_year"):
        registry.register(AuthorDto, Author, {"age": MappingValue("birth_year")})
    assert not registry.has_mapping(AuthorDto, Author)


def test_register_rejects_null_mapping_value():
    registry = PropertyMappingRegistry()
    with pytest.raises(MappingConfigurationError):
        registry.register(AuthorDto, Author, {"id": None})


def test_frozen_registry_rejects_registration():
    registry = PropertyMappingRegistry().freeze()
    assert registry.frozen
    with pytest.raises(MappingConfigurationError):
        registry.register(AuthorDto, Author, _author_entries())


@pytest.mark.parametrize(
    "order_by",
    [
        "",
        "   ",
        None,
        "name",
        "Name",
        "name desc",
        "name asc",
        " age desc , id ",
        "NAME,AGE desc,Id",
        # Only the text before the first space is looked up.
        "name descending",
        "name DESC",
    ],
)
def test_valid_mapping_exists_for_accepts(order_by):
    registry = PropertyMappingRegistry()
    registry.register(AuthorDto, Author, _author_entries())
    assert registry.valid_mapping_exists_for(AuthorDto, Author, order_by) is True


@pytest.mark.parametrize(
    "order_by",
    [
        "title",
        "name,title",
        "first_name",  # internal field names are not public
        "name,",  # empty clause
        "main_category",  # not in this mapping
    ],
)
def test_valid_mapping_exists_for_rejects(order_by):
    registry = PropertyMappingRegistry()
    registry.register(AuthorDto, Author, _author_entries())
    assert registry.valid_mapping_exists_for(AuthorDto, Author, order_by) is False


def test_valid_mapping_exists_for_unregistered_pair_raises():
    registry = PropertyMappingRegistry()
    with pytest.raises(MappingNotFoundError):
        registry.valid_mapping_exists_for(AuthorDto, Author, "name")


def test_built_in_registry_is_frozen(registry):
    assert registry.frozen
    mapping = registry.get_mapping(AuthorDto, Author)
    assert set(mapping) == {"id", "main_category", "age", "name"}


def test_first_unmapped_field_names_the_failing_clause():
    registry = PropertyMappingRegistry()
    registry.register(AuthorDto, Author, _author_entries())
    assert registry.first_unmapped_field(AuthorDto, Author, "name, title desc, shoe") == "title"
    assert registry.first_unmapped_field(AuthorDto, Author, "name desc, Age") is None
    assert registry.first_unmapped_field(AuthorDto, Author, "") is None
