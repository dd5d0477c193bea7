"""Engine facade: load profiles, register functions, map entities."""
from typing import Any, Callable, Optional, Type, TypeVar

from field_mapper.mapper import loader
from field_mapper.mapper.engine import Mapper, MappingResult
from field_mapper.mapper.loader import ConfigSource
from field_mapper.mapper.mapping import MappingProfileSet
from field_mapper.transformer.computations import ComputationRegistry
from field_mapper.transformer.registry import TransformationRegistry


T = TypeVar("T")


class DynamicFieldMapper:
    """
    Configuration-driven field mapper

    Registries start with the built-in rules. Register custom functions
    and load the configuration during setup; loading replaces the
    underlying Mapper, mapping calls only read.
    """

    def __init__(
        self,
        transformations: Optional[TransformationRegistry] = None,
        computations: Optional[ComputationRegistry] = None,
    ):
        self.transformations = transformations or TransformationRegistry()
        self.computations = computations or ComputationRegistry()
        self._mapper = Mapper(MappingProfileSet(), self.transformations, self.computations)

    @classmethod
    def from_config(cls, config_source: ConfigSource) -> "DynamicFieldMapper":
        """Mapper with built-in rules and the given configuration loaded."""
        field_mapper = cls()
        field_mapper.load_mapping_configuration(config_source)
        return field_mapper

    @property
    def mapper(self) -> Mapper:
        return self._mapper

    @property
    def profiles(self) -> MappingProfileSet:
        return self._mapper.profiles

    def load_mapping_configuration(self, config_source: ConfigSource) -> None:
        """
        Load mapping profiles

        Raises:
            ConfigurationError: If the configuration cannot be loaded;
                the previously loaded profiles stay in place
        """
        profiles = loader.load(config_source)
        self._mapper = Mapper(profiles, self.transformations, self.computations)

    def register_transformation_function(self, name: str, function: Callable[[Any], Any]) -> None:
        """Register a (raw value) -> value transformation."""
        self.transformations.register(name, function)

    def register_computation_function(self, name: str, function: Callable[[Any], Any]) -> None:
        """
        Register a computation

        Unlike transformations, which get the raw source value, the
        function receives the whole record wrapped in a LooseValue:
        read sub-fields with ``record.get("name")`` or
        ``record.child("origin")``, not ``record["name"]``.
        """
        self.computations.register(name, function)

    def map_entity(self, target_type: Type[T], source_record: Any, profile_name: str) -> T:
        """
        Map one loose record to a new target_type instance

        Raises:
            ProfileNotFoundError: If profile_name is not loaded
        """
        return self._mapper.map_entity(target_type, source_record, profile_name)

    def map_entity_with_report(self, target_type: Type[T], source_record: Any, profile_name: str) -> MappingResult[T]:
        return self._mapper.map_entity_with_report(target_type, source_record, profile_name)
