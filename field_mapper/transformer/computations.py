"""Computation registry - values derived from a whole source record."""
import threading
from typing import Any, Callable, Dict, List, Optional

from field_mapper.mapper.loose import LooseValue


ComputeFunction = Callable[[LooseValue], Any]

MAIN_CHARACTERS = ("Rick", "Morty", "Summer", "Beth", "Jerry")


class ComputationRegistry:
    """
    Registry of named computations

    Computations receive the whole source record wrapped in a LooseValue
    and read the sub-fields they need. Absent sub-fields read as empty
    text, zero or false.
    """

    def __init__(self, include_builtins: bool = True):
        """Initialize registry."""
        self._lock = threading.Lock()
        self.computations: Dict[str, ComputeFunction] = {}

        if include_builtins:
            self.computations = {
                "is_main_character": self._is_main_character,
                "generate_display_name": self._generate_display_name,
                "importance_score": self._importance_score,
            }

    def register(self, name: str, function: ComputeFunction) -> None:
        """Register (or replace) a computation."""
        if not name:
            raise ValueError("Computation name is required")
        if not callable(function):
            raise TypeError(f"Computation {name} is not callable")

        with self._lock:
            computations = dict(self.computations)
            computations[name] = function
            self.computations = computations

    def get(self, name: Optional[str]) -> Optional[ComputeFunction]:
        """Get computation by name."""
        if not name:
            return None
        return self.computations.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self.computations

    def names(self) -> List[str]:
        return sorted(self.computations)

    def apply(self, name: str, record: Any) -> Any:
        """
        Run a computation against a source record

        Raises:
            KeyError: If no computation is registered under name
        """
        computation = self.get(name)
        if computation is None:
            raise KeyError(name)

        if not isinstance(record, LooseValue):
            record = LooseValue(record)
        return computation(record)

    @staticmethod
    def _is_main_character(entity: LooseValue) -> bool:
        name = _text(entity, "name")
        return any(main in name for main in MAIN_CHARACTERS)

    @staticmethod
    def _generate_display_name(entity: LooseValue) -> str:
        name = _text(entity, "name")
        species = _text(entity, "species")
        return f"{name} ({species})"

    @staticmethod
    def _importance_score(entity: LooseValue) -> int:
        """Episode count, doubled for Rick and Morty."""
        episodes = entity.child("episode")
        episode_count = episodes.count() if episodes else 0

        name = _text(entity, "name")
        is_main = "Rick" in name or "Morty" in name
        return episode_count * 2 if is_main else episode_count


def _text(entity: LooseValue, key: str) -> str:
    node = entity.child(key)
    return node.text() if node is not None else ""
