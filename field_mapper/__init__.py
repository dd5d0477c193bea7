"""
Field Mapper - Configuration-driven entity mapping

Populates typed entities from loosely-typed source records using named
mapping profiles loaded from JSON:
- Dotted source paths over dicts and attribute trees
- Named transformations and whole-record computations
- Coercion into the target field's declared type
- Per-field failure isolation with default values
"""

from .errors import (
    CoercionError,
    ComputationError,
    ConfigurationError,
    FieldMapperError,
    FieldMappingError,
    ProfileNotFoundError,
)
from .mapper.dynamic import DynamicFieldMapper
from .mapper.engine import FieldResult, Mapper, MappingResult
from .mapper.loader import load
from .mapper.mapping import ComputedFieldRule, EntityMapping, FieldRule, MappingProfileSet
from .transformer.computations import ComputationRegistry
from .transformer.registry import TransformationRegistry

__version__ = "0.1.0"

__all__ = [
    "DynamicFieldMapper",
    "Mapper",
    "MappingResult",
    "FieldResult",
    "load",
    "MappingProfileSet",
    "EntityMapping",
    "FieldRule",
    "ComputedFieldRule",
    "TransformationRegistry",
    "ComputationRegistry",
    "FieldMapperError",
    "ConfigurationError",
    "ProfileNotFoundError",
    "FieldMappingError",
    "ComputationError",
    "CoercionError",
]
