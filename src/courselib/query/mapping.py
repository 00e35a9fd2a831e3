"""Property mapping registry: public view fields -> internal model fields."""

import threading
from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional, Tuple

from ..utils.logging import get_logger
from .errors import MappingConfigurationError, MappingNotFoundError

logger = get_logger(__name__)


@dataclass(frozen=True)
class MappingValue:
    """
    Target side of a property mapping.

    A public field may sort by several model fields (applied in listed order).
    ``revert`` flips the requested direction, e.g. public ``age`` ascending is
    ``date_of_birth`` descending.
    """
    target_fields: Tuple[str, ...]
    revert: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.target_fields, str):
            object.__setattr__(self, "target_fields", (self.target_fields,))
        else:
            object.__setattr__(self, "target_fields", tuple(self.target_fields))
        if not self.target_fields:
            raise MappingConfigurationError("MappingValue requires at least one target field")


class PropertyMapping(Mapping[str, Optional[MappingValue]]):
    """
    Read-only, case-insensitive mapping of public field name -> MappingValue.

    Keys keep their declared casing for iteration; lookups ignore case.
    """

    def __init__(self, entries: Mapping[str, Optional[MappingValue]]):
        self._entries: Dict[str, Optional[MappingValue]] = {}
        self._names: Dict[str, str] = {}
        for name, value in entries.items():
            key = name.lower()
            if key in self._entries:
                raise MappingConfigurationError(f"Duplicate mapping entry for '{name}' (case-insensitive)")
            self._entries[key] = value
            self._names[key] = name

    def __getitem__(self, name: str) -> Optional[MappingValue]:
        return self._entries[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._names.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PropertyMapping({dict(self.items())!r})"


def field_name_from_clause(clause: str) -> str:
    """Strip a clause down to its field name: trimmed, cut at the first space."""
    trimmed = clause.strip()
    index_of_first_space = trimmed.find(" ")
    return trimmed if index_of_first_space == -1 else trimmed[:index_of_first_space]


class PropertyMappingRegistry:
    """
    Holds one PropertyMapping per (view type, model type) pair.

    Populate at startup, then ``freeze()``. Reads are lock-free; writes take
    a lock.
    """

    def __init__(self) -> None:
        self._mappings: Dict[Tuple[type, type], PropertyMapping] = {}
        self._lock = threading.Lock()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "PropertyMappingRegistry":
        """Disallow further registrations. Returns self for chaining."""
        self._frozen = True
        return self

    def register(
        self,
        view_type: type,
        model_type: type,
        entries: Mapping[str, Optional[MappingValue]],
        replace: bool = False,
    ) -> PropertyMapping:
        """
        Register the mapping for a (view type, model type) pair.

        Every target field must exist as an attribute of ``model_type``.

        Args:
            view_type: Public view/DTO type
            model_type: Internal storage model type
            entries: Public field name -> MappingValue
            replace: Allow overwriting an existing registration

        Returns:
            The stored PropertyMapping

        Raises:
            MappingConfigurationError: Frozen registry, duplicate pair, null
                value or unknown target field
        """
        mapping = PropertyMapping(entries)
        for name, value in mapping.items():
            if value is None:
                raise MappingConfigurationError(
                    f"Mapping value for '{name}' on <{view_type.__name__}, {model_type.__name__}> is null"
                )
            for target in value.target_fields:
                if not hasattr(model_type, target):
                    raise MappingConfigurationError(
                        f"Target field '{target}' for '{name}' does not exist on {model_type.__name__}"
                    )

        key = (view_type, model_type)
        with self._lock:
            if self._frozen:
                raise MappingConfigurationError("Property mapping registry is frozen")
            if key in self._mappings and not replace:
                raise MappingConfigurationError(
                    f"Property mapping for <{view_type.__name__}, {model_type.__name__}> already registered"
                )
            self._mappings[key] = mapping
        logger.debug(
            f"Registered property mapping <{view_type.__name__}, {model_type.__name__}> "
            f"({len(mapping)} fields)"
        )
        return mapping

    def get_mapping(self, view_type: type, model_type: type) -> PropertyMapping:
        """Return the mapping for the pair or raise MappingNotFoundError."""
        mapping = self._mappings.get((view_type, model_type))
        if mapping is None:
            raise MappingNotFoundError(view_type, model_type)
        return mapping

    def has_mapping(self, view_type: type, model_type: type) -> bool:
        return (view_type, model_type) in self._mappings

    def valid_mapping_exists_for(self, view_type: type, model_type: type, fields: Optional[str]) -> bool:
        """
        Check that every clause of an order_by string resolves through the mapping.

        An empty clause is trivially valid. Each clause is trimmed and cut at
        its first space (dropping "asc"/"desc" or anything else) before lookup.

        Raises:
            MappingNotFoundError: No mapping registered for the pair
        """
        return self.first_unmapped_field(view_type, model_type, fields) is None

    def first_unmapped_field(self, view_type: type, model_type: type, fields: Optional[str]) -> Optional[str]:
        """Return the first order_by field name with no mapping, or None if all resolve."""
        mapping = self.get_mapping(view_type, model_type)
        if fields is None or not fields.strip():
            return None

        for clause in fields.split(","):
            field_name = field_name_from_clause(clause)
            if field_name not in mapping:
                return field_name
        return None

    def __len__(self) -> int:
        return len(self._mappings)
