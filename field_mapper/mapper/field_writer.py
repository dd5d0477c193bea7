"""Per-type accessor tables for writing into target entities."""
import dataclasses
import threading
import typing
from typing import Any, Dict, Generic, Type, TypeVar

T = TypeVar("T")

_cache: Dict[type, "FieldWriter"] = {}
_cache_lock = threading.Lock()


class FieldWriter(Generic[T]):
    """
    Writable fields of one target type and their declared types

    Built once per type (see ``for_type``). Dataclass fields, annotated
    class attributes and properties with a setter are writable.
    """

    def __init__(self, target_type: Type[T]):
        if not isinstance(target_type, type):
            raise TypeError(f"Target type must be a class, got {target_type!r}")

        self.target_type = target_type
        self.field_types: Dict[str, Any] = self._build_table(target_type)

    @classmethod
    def for_type(cls, target_type: Type[T]) -> "FieldWriter[T]":
        """Cached accessor table for target_type."""
        writer = _cache.get(target_type)
        if writer is None:
            writer = cls(target_type)
            with _cache_lock:
                writer = _cache.setdefault(target_type, writer)
        return writer

    @staticmethod
    def _build_table(target_type: type) -> Dict[str, Any]:
        try:
            hints = typing.get_type_hints(target_type)
        except Exception:
            # unresolvable forward references
            hints = dict(getattr(target_type, "__annotations__", {}))

        table: Dict[str, Any] = {}

        if dataclasses.is_dataclass(target_type):
            for f in dataclasses.fields(target_type):
                table[f.name] = hints.get(f.name, Any)
        else:
            for name, hint in hints.items():
                if not name.startswith("_") and typing.get_origin(hint) is not typing.ClassVar:
                    table[name] = hint

        for name in dir(target_type):
            attr = getattr(target_type, name, None)
            if isinstance(attr, property) and attr.fset is not None:
                prop_hints = {}
                if attr.fget is not None:
                    try:
                        prop_hints = typing.get_type_hints(attr.fget)
                    except Exception:
                        prop_hints = {}
                table[name] = prop_hints.get("return", Any)

        return table

    def has_field(self, name: str) -> bool:
        return name in self.field_types

    def field_type(self, name: str) -> Any:
        """
        Declared type of a field

        Raises:
            KeyError: If the type has no writable field with that name
        """
        return self.field_types[name]

    def create(self) -> T:
        """New zero-valued instance."""
        return self.target_type()

    def write(self, instance: T, name: str, value: Any) -> None:
        """
        Set a field on an instance

        Raises:
            KeyError: If the type has no writable field with that name
        """
        if name not in self.field_types:
            raise KeyError(f"{self.target_type.__name__} has no writable field {name!r}")
        setattr(instance, name, value)
