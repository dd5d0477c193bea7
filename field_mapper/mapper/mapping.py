"""Mapping profile model."""
from dataclasses import dataclass, field
from difflib import get_close_matches
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FieldRule:
    """Populates one target field from one source path."""

    source_field: str
    target_field: str
    data_type: Optional[str] = None  # advisory only, coercion follows the target type
    transformation_rule: Optional[str] = None
    default_value: Any = None
    is_required: bool = True
    validation_rule: Optional[str] = None  # reserved, not enforced

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "sourceField": self.source_field,
            "targetField": self.target_field,
            "dataType": self.data_type,
            "transformationRule": self.transformation_rule,
            "defaultValue": self.default_value,
            "isRequired": self.is_required,
            "validationRule": self.validation_rule,
        }


@dataclass(frozen=True)
class ComputedFieldRule:
    """Populates one target field from the whole source record."""

    field_name: str
    computation_rule: str
    data_type: str = "string"
    dependent_fields: Tuple[str, ...] = ()  # informational only

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "fieldName": self.field_name,
            "computationRule": self.computation_rule,
            "dataType": self.data_type,
            "dependentFields": list(self.dependent_fields),
        }


@dataclass(frozen=True)
class EntityMapping:
    """One named transformation from a source shape to a target entity."""

    target_type: str = ""
    fields: Mapping[str, FieldRule] = field(default_factory=dict)
    computed_fields: Tuple[ComputedFieldRule, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "computed_fields", tuple(self.computed_fields))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "targetType": self.target_type,
            "fields": {name: rule.to_dict() for name, rule in self.fields.items()},
            "computedFields": [rule.to_dict() for rule in self.computed_fields],
        }


class MappingProfileSet:
    """Read-only set of named mapping profiles."""

    def __init__(self, mappings: Optional[Dict[str, EntityMapping]] = None):
        self._mappings = MappingProxyType(dict(mappings or {}))

    @property
    def mappings(self) -> Mapping[str, EntityMapping]:
        return self._mappings

    def get(self, name: str) -> Optional[EntityMapping]:
        """Return the profile registered under name, or None."""
        return self._mappings.get(name)

    def names(self) -> List[str]:
        return sorted(self._mappings)

    def suggest(self, name: str, limit: int = 3) -> List[str]:
        """
        Suggest profile names close to an unknown one.

        Args:
            name: Requested profile name
            limit: Maximum number of suggestions

        Returns:
            list: Known profile names, best match first
        """
        if not name:
            return []
        return get_close_matches(name, list(self._mappings), n=limit, cutoff=0.6)

    def __contains__(self, name: str) -> bool:
        return name in self._mappings

    def __len__(self) -> int:
        return len(self._mappings)

    def __iter__(self):
        return iter(self._mappings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"mappings": {name: m.to_dict() for name, m in self._mappings.items()}}
