"""
Mapper - Populates typed entities from loose source records

Per call:
1. Look up the profile (unknown name raises ProfileNotFoundError)
2. Create a zero-valued target instance
3. For every field rule: resolve -> transform -> coerce -> write
4. For every computed field, in order: compute -> coerce -> write
5. Return the instance

Each step yields a FieldResult. A failed field is logged and recorded;
the rule's default is written when the rule is optional and has one,
otherwise the field keeps its zero value. Nothing below the profile
lookup aborts the call.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, List, Optional, Type, TypeVar

from field_mapper.errors import (
    CoercionError,
    ComputationError,
    FieldMapperError,
    FieldMappingError,
    ProfileNotFoundError,
)
from field_mapper.mapper.coercion import TypeCoercer
from field_mapper.mapper.field_writer import FieldWriter
from field_mapper.mapper.loose import LooseValue, PathResolver
from field_mapper.mapper.mapping import (
    ComputedFieldRule,
    EntityMapping,
    FieldRule,
    MappingProfileSet,
)
from field_mapper.transformer.computations import ComputationRegistry
from field_mapper.transformer.registry import TransformationRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FieldResult:
    """Outcome of one mapping step: a value or the reason it failed."""

    value: Any = None
    error: Optional[FieldMapperError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "FieldResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: FieldMapperError) -> "FieldResult":
        return cls(error=error)


@dataclass
class MappingResult(Generic[T]):
    """Mapped entity plus the field failures absorbed while mapping it."""

    entity: T
    profile_name: str
    failures: List[FieldMapperError] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failures


class Mapper:
    """
    Maps loose source records to typed entities using named profiles

    Usage:
    ```python
    profiles = loader.load("field-mappings.json")
    mapper = Mapper(profiles, TransformationRegistry(), ComputationRegistry())

    person = mapper.map_entity(Person, character, "character_to_person")
    ```

    The mapper only reads its profiles and registries, so one instance can
    serve concurrent calls once setup is done.
    """

    def __init__(
        self,
        profiles: MappingProfileSet,
        transformations: Optional[TransformationRegistry] = None,
        computations: Optional[ComputationRegistry] = None,
        resolver: Optional[PathResolver] = None,
        coercer: Optional[TypeCoercer] = None,
    ):
        self.profiles = profiles
        self.transformations = transformations if transformations is not None else TransformationRegistry()
        self.computations = computations if computations is not None else ComputationRegistry()
        self.resolver = resolver or PathResolver()
        self.coercer = coercer or TypeCoercer()

    def get_profile(self, profile_name: str) -> EntityMapping:
        """
        Raises:
            ProfileNotFoundError: If no profile has that name
        """
        profile = self.profiles.get(profile_name)
        if profile is None:
            raise ProfileNotFoundError(profile_name, self.profiles.suggest(profile_name))
        return profile

    def map_entity(self, target_type: Type[T], source_record: Any, profile_name: str) -> T:
        """
        Map one source record

        Args:
            target_type: Entity class, constructible without arguments
            source_record: Loose record (dict, attribute tree or LooseValue)
            profile_name: Name of a loaded profile

        Returns:
            New target_type instance

        Raises:
            ProfileNotFoundError: If profile_name is not loaded
        """
        return self.map_entity_with_report(target_type, source_record, profile_name).entity

    def map_entity_with_report(
        self,
        target_type: Type[T],
        source_record: Any,
        profile_name: str,
    ) -> MappingResult[T]:
        """Like map_entity, also returning the absorbed field failures."""
        profile = self.get_profile(profile_name)
        writer = FieldWriter.for_type(target_type)
        entity = writer.create()
        result = MappingResult(entity=entity, profile_name=profile_name)

        if isinstance(source_record, LooseValue):
            source_record = source_record.raw

        for rule_name, rule in profile.fields.items():
            outcome = self._map_field(rule, source_record, writer)
            if outcome.ok:
                write_error = self._write(entity, writer, rule.target_field, outcome.value)
                if write_error is None:
                    continue
                outcome = FieldResult.failure(self._field_error(rule, write_error))

            self._record(result, outcome.error, f"{profile_name}.{rule_name}")
            if not rule.is_required and rule.has_default:
                fallback = self._apply_default(rule, entity, writer)
                if not fallback.ok:
                    self._record(result, fallback.error, f"{profile_name}.{rule_name} (default)")

        record = LooseValue(source_record)
        for computed in profile.computed_fields:
            outcome = self._compute(computed, record, entity, writer)
            if not outcome.ok:
                self._record(result, outcome.error, profile_name)

        return result

    def map_many(self, target_type: Type[T], source_records: Iterable[Any], profile_name: str) -> List[T]:
        """Map a sequence of records with the same profile."""
        self.get_profile(profile_name)
        return [self.map_entity(target_type, record, profile_name) for record in source_records or []]

    # ------------------------------------------------------------------
    # Field rules
    # ------------------------------------------------------------------

    def _map_field(self, rule: FieldRule, source_record: Any, writer: FieldWriter) -> FieldResult:
        """Resolve, transform and coerce one field rule."""
        if not writer.has_field(rule.target_field):
            return FieldResult.failure(self._field_error(rule, "target field does not exist"))

        resolved = self._resolve(rule, source_record)
        if not resolved.ok:
            return resolved

        transformed = self._transform(rule, resolved.value)
        if not transformed.ok:
            return transformed

        return self._coerce(rule, transformed.value, writer)

    def _resolve(self, rule: FieldRule, source_record: Any) -> FieldResult:
        resolution = self.resolver.resolve(source_record, rule.source_field)
        if not resolution.found:
            return FieldResult.failure(self._field_error(rule, "source path not found"))
        return FieldResult.success(resolution.value)

    def _transform(self, rule: FieldRule, value: Any) -> FieldResult:
        # Transformations never see null
        if value is None:
            return FieldResult.success(self._default(rule))

        try:
            return FieldResult.success(self.transformations.apply(rule.transformation_rule, value))
        except Exception as e:
            reason = f"transformation {rule.transformation_rule} failed: {e}"
            return FieldResult.failure(self._field_error(rule, reason))

    def _coerce(self, rule: FieldRule, value: Any, writer: FieldWriter) -> FieldResult:
        try:
            return FieldResult.success(self.coercer.coerce(value, writer.field_type(rule.target_field)))
        except CoercionError as e:
            return FieldResult.failure(self._field_error(rule, str(e)))

    def _apply_default(self, rule: FieldRule, entity: Any, writer: FieldWriter) -> FieldResult:
        if not writer.has_field(rule.target_field):
            return FieldResult.failure(self._field_error(rule, "target field does not exist"))

        coerced = self._coerce(rule, self._default(rule), writer)
        if coerced.ok:
            write_error = self._write(entity, writer, rule.target_field, coerced.value)
            if write_error:
                return FieldResult.failure(self._field_error(rule, write_error))
        return coerced

    @staticmethod
    def _default(rule: FieldRule) -> Any:
        # each entity gets its own copy of list and dict defaults
        return copy.deepcopy(rule.default_value)

    @staticmethod
    def _field_error(rule: FieldRule, reason: str) -> FieldMappingError:
        return FieldMappingError(rule.source_field, rule.target_field, reason)

    # ------------------------------------------------------------------
    # Computed fields
    # ------------------------------------------------------------------

    def _compute(
        self,
        rule: ComputedFieldRule,
        record: LooseValue,
        entity: Any,
        writer: FieldWriter,
    ) -> FieldResult:
        if not self.computations.is_registered(rule.computation_rule):
            return FieldResult.failure(
                ComputationError(rule.field_name, rule.computation_rule, "computation not registered")
            )
        if not writer.has_field(rule.field_name):
            return FieldResult.failure(
                ComputationError(rule.field_name, rule.computation_rule, "target field does not exist")
            )

        try:
            value = self.computations.apply(rule.computation_rule, record)
            value = self.coercer.coerce(value, writer.field_type(rule.field_name))
        except Exception as e:
            return FieldResult.failure(ComputationError(rule.field_name, rule.computation_rule, str(e)))

        write_error = self._write(entity, writer, rule.field_name, value)
        if write_error:
            return FieldResult.failure(ComputationError(rule.field_name, rule.computation_rule, write_error))
        return FieldResult.success(value)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _write(entity: Any, writer: FieldWriter, name: str, value: Any) -> Optional[str]:
        """Write a coerced value; None is a no-op. Returns an error message on failure."""
        if value is None:
            return None
        try:
            writer.write(entity, name, value)
        except Exception as e:
            return f"cannot write {name} on {type(entity).__name__}: {e}"
        return None

    @staticmethod
    def _record(result: MappingResult, error: FieldMapperError, where: str) -> None:
        logger.warning(f"[{where}] {error}")
        result.failures.append(error)
