"""Request parameters for collection resources.

Clamping happens here, at the requesting layer, so the query engine itself can
trust page_number >= 1 and 1 <= page_size <= max.
"""

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 20


def _as_positive_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number >= 1 else None


class ResourceParameters(BaseModel):
    """
    Query-string parameters shared by every collection resource.

    Accepts both field names (``page_size``) and camelCase aliases
    (``pageSize``). Paging limits come from the validation context
    (``default_page_size`` / ``max_page_size``), falling back to 10 / 20.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    order_by: str = "name"
    fields: str = ""
    page_number: int = Field(default=1, validate_default=True)
    # None until validated; the clamp validator always resolves it to an int.
    page_size: Optional[int] = Field(default=None, validate_default=True)

    @field_validator("order_by", mode="before")
    @classmethod
    def _default_order_by(cls, value: Any) -> Any:
        return "name" if value is None else value

    @field_validator("fields", mode="before")
    @classmethod
    def _default_fields(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("page_number", mode="before")
    @classmethod
    def _default_page_number(cls, value: Any) -> int:
        return _as_positive_int(value) or 1

    @field_validator("page_size", mode="before")
    @classmethod
    def _clamp_page_size(cls, value: Any, info: ValidationInfo) -> int:
        context = info.context or {}
        max_page_size = context.get("max_page_size", MAX_PAGE_SIZE)
        default_page_size = context.get("default_page_size", DEFAULT_PAGE_SIZE)
        page_size = _as_positive_int(value) or default_page_size
        return min(page_size, max_page_size)

    @classmethod
    def from_query(
        cls,
        query: Mapping[str, Any],
        paging: Optional[Mapping[str, int]] = None,
    ):
        """
        Build parameters from a raw query mapping.

        Args:
            query: Raw request values (strings or already-typed)
            paging: Optional {"default_page_size", "max_page_size"} settings
        """
        return cls.model_validate(dict(query), context=dict(paging or {}))

    def to_query(self, page_number: Optional[int] = None) -> Dict[str, Any]:
        """Serialize back to camelCase query values, optionally for another page."""
        query = self.model_dump(by_alias=True, exclude_none=True)
        if page_number is not None:
            query["pageNumber"] = page_number
        return {key: value for key, value in query.items() if value != ""}
