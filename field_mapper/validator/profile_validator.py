"""Mapping profile validation."""
from typing import Dict, List, Optional

from field_mapper.mapper.field_writer import FieldWriter
from field_mapper.mapper.mapping import MappingProfileSet
from field_mapper.transformer.computations import ComputationRegistry
from field_mapper.transformer.registry import TransformationRegistry


class ProfileValidator:
    """Checks profiles against target types and registered rules."""

    def __init__(
        self,
        transformations: Optional[TransformationRegistry] = None,
        computations: Optional[ComputationRegistry] = None,
    ):
        self.transformations = transformations or TransformationRegistry()
        self.computations = computations or ComputationRegistry()

    def validate(
        self,
        profiles: MappingProfileSet,
        target_types: Dict[str, type],
    ) -> List[str]:
        """
        Validate profiles.

        Args:
            profiles: Loaded profile set
            target_types: Entity classes by targetType name

        Returns:
            List of problems, empty when everything checks out
        """
        errors = []

        for name in profiles.names():
            profile = profiles.get(name)

            target_type = target_types.get(profile.target_type)
            writer = FieldWriter.for_type(target_type) if target_type else None
            if writer is None:
                errors.append(f"{name}: unknown target type '{profile.target_type}'")

            for rule_name, rule in profile.fields.items():
                if not rule.source_field:
                    errors.append(f"{name}.{rule_name}: missing sourceField")
                if writer and not writer.has_field(rule.target_field):
                    errors.append(
                        f"{name}.{rule_name}: {profile.target_type} has no field '{rule.target_field}'"
                    )
                if rule.transformation_rule and not self.transformations.is_registered(rule.transformation_rule):
                    errors.append(
                        f"{name}.{rule_name}: unknown transformation '{rule.transformation_rule}'"
                    )

            for computed in profile.computed_fields:
                if writer and not writer.has_field(computed.field_name):
                    errors.append(
                        f"{name}: {profile.target_type} has no field '{computed.field_name}'"
                    )
                if not self.computations.is_registered(computed.computation_rule):
                    errors.append(
                        f"{name}.{computed.field_name}: unknown computation '{computed.computation_rule}'"
                    )

        return errors
