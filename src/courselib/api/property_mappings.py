"""Static property mapping configuration for the API's view types."""

from typing import Any, Dict, Mapping, Optional

from ..config.loader import get_mapping_entries
from ..database.schema import Author, Course
from ..query.errors import MappingConfigurationError
from ..query.mapping import MappingValue, PropertyMappingRegistry
from ..utils.logging import get_logger
from .models import AuthorDto, CourseDto

logger = get_logger(__name__)

# Sorting by name is sorting by last name, then first name.
AUTHOR_PROPERTY_MAPPING: Dict[str, MappingValue] = {
    "id": MappingValue(("id",)),
    "main_category": MappingValue(("main_category",)),
    "age": MappingValue(("date_of_birth",), revert=True),
    "name": MappingValue(("last_name", "first_name")),
}

KNOWN_TYPES: Dict[str, type] = {
    "AuthorDto": AuthorDto,
    "Author": Author,
    "CourseDto": CourseDto,
    "Course": Course,
}


def _resolve_type(name: str) -> type:
    resolved = KNOWN_TYPES.get(name)
    if resolved is None:
        raise MappingConfigurationError(f"Unknown type in property mapping config: {name}")
    return resolved


def build_property_mapping_registry(config: Optional[Mapping[str, Any]] = None) -> PropertyMappingRegistry:
    """
    Build and freeze the registry used by every collection request.

    Args:
        config: Parsed property mapping config (see load_property_mappings_config).
            If None, the built-in mapping table is registered.

    Returns:
        Frozen PropertyMappingRegistry
    """
    registry = PropertyMappingRegistry()

    if config is None:
        registry.register(AuthorDto, Author, AUTHOR_PROPERTY_MAPPING)
        return registry.freeze()

    for entry in get_mapping_entries(config):
        view_type = _resolve_type(entry["view"])
        model_type = _resolve_type(entry["model"])
        entries = {
            name: MappingValue(tuple(value["targets"]), revert=bool(value.get("revert", False)))
            for name, value in entry["fields"].items()
        }
        registry.register(view_type, model_type, entries)

    logger.info(f"Loaded {len(registry)} property mapping(s) from config")
    return registry.freeze()
