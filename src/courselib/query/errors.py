"""Exception types for the collection query engine.

Two families, kept apart so callers can tell them apart in logs:

- ``InvalidQueryError``: the client sent something we cannot honour
  (unknown sort field, unknown projection field). Maps to "bad request".
- ``MappingConfigurationError``: the service itself is misconfigured
  (missing mapping, null mapping value, bad target field). Fatal to the request.
"""


class QueryError(Exception):
    """Base class for all query engine errors."""


class InvalidQueryError(QueryError, ValueError):
    """Client-supplied query input failed validation."""


class InvalidSortFieldError(InvalidQueryError):
    """An order_by clause names a field with no registered mapping."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Key mapping for '{field_name}' is missing")


class InvalidFieldSelectionError(InvalidQueryError):
    """A requested projection field is not a public field of the view type."""


class FieldNotFoundError(InvalidFieldSelectionError):
    """Raised by the shaper when a requested field cannot be resolved."""

    def __init__(self, field_name: str, source_type: type):
        self.field_name = field_name
        self.source_type = source_type
        super().__init__(f"Property '{field_name}' wasn't found on {source_type.__name__}")


class MappingConfigurationError(QueryError):
    """Property mapping configuration is invalid."""


class MappingNotFoundError(MappingConfigurationError, LookupError):
    """No property mapping is registered for a (view type, model type) pair."""

    def __init__(self, view_type: type, model_type: type):
        self.view_type = view_type
        self.model_type = model_type
        super().__init__(
            f"Cannot find property mapping for <{view_type.__name__}, {model_type.__name__}>"
        )
