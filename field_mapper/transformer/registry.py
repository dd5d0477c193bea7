"""Transformation registry."""
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from field_mapper.mapper.loose import is_sequence
from field_mapper.schema.models import Gender, LifeStatus

logger = logging.getLogger(__name__)

TransformFunction = Callable[[Any], Any]


class TransformationRegistry:
    """Registry of named value transformations."""

    def __init__(self, include_builtins: bool = True):
        """Initialize registry."""
        self._lock = threading.Lock()
        self.transformers: Dict[str, TransformFunction] = {}

        if include_builtins:
            self.transformers = {
                "status_to_lifestatus": self._status_to_lifestatus,
                "gender_mapping": self._gender_mapping,
                "default_if_empty": self._default_if_empty,
                "extract_season": self._extract_season,
                "array_count": self._array_count,
            }

    def register(self, name: str, function: TransformFunction) -> None:
        """Register (or replace) a transformation."""
        if not name:
            raise ValueError("Transformation name is required")
        if not callable(function):
            raise TypeError(f"Transformation {name} is not callable")

        with self._lock:
            # Readers keep using the previous dict until the swap
            transformers = dict(self.transformers)
            transformers[name] = function
            self.transformers = transformers

    def get(self, name: Optional[str]) -> Optional[TransformFunction]:
        """Get transformation by name."""
        if not name:
            return None
        return self.transformers.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self.transformers

    def names(self) -> List[str]:
        return sorted(self.transformers)

    def apply(self, name: Optional[str], value: Any) -> Any:
        """
        Apply a transformation

        Args:
            name: Transformation name; empty means passthrough
            value: Raw (non-null) source value

        Returns:
            Transformed value, or the value unchanged when name is unset
            or not registered

        Raises:
            Whatever the transformation raises
        """
        if not name:
            return value

        transformer = self.get(name)
        if transformer is None:
            logger.warning(f"Unknown transformation: {name}")
            return value

        return transformer(value)

    @staticmethod
    def _status_to_lifestatus(value: Any) -> LifeStatus:
        """Map "alive"/"dead" (any case) to LifeStatus."""
        status = str(value).lower() if value is not None else ""
        if status == "alive":
            return LifeStatus.ALIVE
        if status == "dead":
            return LifeStatus.DEAD
        return LifeStatus.UNKNOWN

    @staticmethod
    def _gender_mapping(value: Any) -> Gender:
        """Map "male"/"female"/"genderless" (any case) to Gender."""
        genders = {
            "male": Gender.MALE,
            "female": Gender.FEMALE,
            "genderless": Gender.GENDERLESS,
        }
        gender = str(value).lower() if value is not None else ""
        return genders.get(gender, Gender.UNKNOWN)

    @staticmethod
    def _default_if_empty(value: Any) -> str:
        """Empty text becomes "Standard"."""
        text = str(value) if value is not None else ""
        return text if text else "Standard"

    @staticmethod
    def _extract_season(value: Any) -> str:
        """
        Extract the season label from an episode code

        "S01E01" -> "Season 1". Codes without a leading S or without an E
        give "Unknown". A non-numeric season segment (e.g. "SxxE01")
        raises ValueError.
        """
        episode_code = str(value) if value is not None else ""
        if not episode_code:
            return "Unknown"

        if episode_code.startswith("S") and "E" in episode_code:
            season_part = episode_code.split("E")[0][1:]
            return f"Season {int(season_part)}"

        return "Unknown"

    @staticmethod
    def _array_count(value: Any) -> int:
        """Number of elements of a sequence, 0 for anything else."""
        if is_sequence(value):
            return len(value)
        return 0
