"""
Mapping Profile Loader - Builds a MappingProfileSet from a JSON payload

Payload shape:
    {
        "mappings": {
            "<profile>": {
                "targetType": "Person",
                "fields": {
                    "<rule>": {"sourceField": "origin.name", "targetField": "...", ...}
                },
                "computedFields": [{"fieldName": "...", "computationRule": "...", ...}]
            }
        }
    }

Key matching is case-insensitive and unknown keys are ignored.
The whole payload loads or nothing does.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from field_mapper.errors import ConfigurationError
from field_mapper.mapper.mapping import (
    ComputedFieldRule,
    EntityMapping,
    FieldRule,
    MappingProfileSet,
)

logger = logging.getLogger(__name__)

ConfigSource = Union[str, Path, Dict[str, Any]]

_MISSING = object()


def load(config_source: ConfigSource) -> MappingProfileSet:
    """
    Load a mapping profile set

    Args:
        config_source: Path to a JSON file, JSON text, or decoded payload

    Returns:
        MappingProfileSet with every profile in the payload

    Raises:
        ConfigurationError: If the payload cannot be read or has the wrong shape
    """
    payload = _read_payload(config_source)
    profile_set = parse(payload)
    logger.info(f"Loaded {len(profile_set)} mapping profiles: {', '.join(profile_set.names())}")
    return profile_set


def parse(payload: Any) -> MappingProfileSet:
    """Build a MappingProfileSet from a decoded payload."""
    if payload is None:
        return MappingProfileSet()

    root = _as_object(payload, "configuration")
    mappings = _get(root, "mappings", {})
    if mappings is None:
        return MappingProfileSet()

    profiles = {}
    for name, body in _as_object(mappings, "mappings").items():
        profiles[name] = _parse_entity_mapping(name, body)

    return MappingProfileSet(profiles)


def _read_payload(config_source: ConfigSource) -> Any:
    """Decode the configuration source into plain JSON values."""
    if isinstance(config_source, dict):
        return config_source

    if isinstance(config_source, Path) or (
        isinstance(config_source, str) and not _looks_like_json(config_source)
    ):
        path = Path(config_source)
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read mapping configuration {path} (not a readable file or JSON text): {e}"
            ) from e
    elif isinstance(config_source, str):
        content = config_source
    else:
        raise ConfigurationError(
            f"Unsupported configuration source: {type(config_source).__name__}"
        )

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid mapping configuration JSON: {e}") from e


def _looks_like_json(text: str) -> bool:
    """JSON text rather than a file path."""
    stripped = text.strip()
    return stripped.startswith(("{", "[")) or stripped == "null"


def _parse_entity_mapping(name: str, body: Any) -> EntityMapping:
    where = f"mappings.{name}"
    obj = _as_object(body, where)

    fields = {}
    raw_fields = _get(obj, "fields", None)
    if raw_fields is None:
        raw_fields = {}
    for rule_name, rule_body in _as_object(raw_fields, f"{where}.fields").items():
        fields[rule_name] = _parse_field_rule(rule_body, f"{where}.fields.{rule_name}")

    computed = []
    raw_computed = _get(obj, "computedFields", None)
    if raw_computed is None:
        raw_computed = []
    for index, rule_body in enumerate(_as_list(raw_computed, f"{where}.computedFields")):
        computed.append(_parse_computed_field(rule_body, f"{where}.computedFields[{index}]"))

    return EntityMapping(
        target_type=_string(obj, "targetType", where, ""),
        fields=fields,
        computed_fields=tuple(computed),
    )


def _parse_field_rule(body: Any, where: str) -> FieldRule:
    obj = _as_object(body, where)
    return FieldRule(
        source_field=_string(obj, "sourceField", where, ""),
        target_field=_string(obj, "targetField", where, ""),
        data_type=_string(obj, "dataType", where),
        transformation_rule=_string(obj, "transformationRule", where),
        default_value=_get(obj, "defaultValue"),
        is_required=_boolean(obj, "isRequired", where, True),
        validation_rule=_string(obj, "validationRule", where),
    )


def _parse_computed_field(body: Any, where: str) -> ComputedFieldRule:
    obj = _as_object(body, where)

    dependent = _get(obj, "dependentFields", None)
    if dependent is None:
        dependent = []
    dependent_fields = []
    for item in _as_list(dependent, f"{where}.dependentFields"):
        if not isinstance(item, str):
            raise ConfigurationError(f"{where}.dependentFields must contain strings, got {item!r}")
        dependent_fields.append(item)

    return ComputedFieldRule(
        field_name=_string(obj, "fieldName", where, ""),
        computation_rule=_string(obj, "computationRule", where, ""),
        data_type=_string(obj, "dataType", where, "string"),
        dependent_fields=tuple(dependent_fields),
    )


# ============================================================================
# Case-insensitive accessors
# ============================================================================


def _get(obj: Dict[str, Any], key: str, default: Any = None) -> Any:
    """Look up key ignoring case; exact match wins."""
    if key in obj:
        return obj[key]

    wanted = key.lower()
    for actual, value in obj.items():
        if isinstance(actual, str) and actual.lower() == wanted:
            return value
    return default


def _string(obj: Dict[str, Any], key: str, where: str, default: Optional[str] = None) -> Optional[str]:
    value = _get(obj, key, _MISSING)
    if value is _MISSING or value is None:
        return default
    if not isinstance(value, str):
        raise ConfigurationError(f"{where}.{key} must be a string, got {value!r}")
    return value


def _boolean(obj: Dict[str, Any], key: str, where: str, default: bool) -> bool:
    value = _get(obj, key, _MISSING)
    if value is _MISSING:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{where}.{key} must be true or false, got {value!r}")
    return value


def _as_object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigurationError(f"{where} must be an object, got {type(value).__name__}")
    return value


def _as_list(value: Any, where: str) -> List[Any]:
    if not isinstance(value, list):
        raise ConfigurationError(f"{where} must be an array, got {type(value).__name__}")
    return value
