"""Exceptions raised by the field mapping engine."""
from typing import List, Optional


class FieldMapperError(Exception):
    """Base class for all mapping engine errors."""


class ConfigurationError(FieldMapperError):
    """Mapping configuration payload could not be loaded."""


class ProfileNotFoundError(FieldMapperError):
    """No mapping profile registered under the requested name."""

    def __init__(self, profile_name: str, suggestions: Optional[List[str]] = None):
        self.profile_name = profile_name
        self.suggestions = suggestions or []

        message = f"No mapping configuration found for key: {profile_name}"
        if self.suggestions:
            message += f" (did you mean: {', '.join(self.suggestions)}?)"
        super().__init__(message)


class CoercionError(FieldMapperError):
    """Value cannot be converted to the target field type."""

    def __init__(self, value, target_type, reason: str = ""):
        self.value = value
        self.target_type = target_type
        type_name = getattr(target_type, "__name__", str(target_type))
        message = f"Cannot convert {value!r} to {type_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class FieldMappingError(FieldMapperError):
    """Resolution, transformation or coercion failed for one field."""

    def __init__(self, source_field: str, target_field: str, reason: str):
        self.source_field = source_field
        self.target_field = target_field
        self.reason = reason
        super().__init__(f"Error mapping field {source_field} -> {target_field}: {reason}")


class ComputationError(FieldMapperError):
    """A computed field could not be produced."""

    def __init__(self, field_name: str, computation_rule: str, reason: str):
        self.field_name = field_name
        self.computation_rule = computation_rule
        self.reason = reason
        super().__init__(f"Error computing field {field_name} ({computation_rule}): {reason}")
