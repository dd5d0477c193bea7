"""
Loose Values - Uniform read access over untyped source records

Source records arrive in whatever shape the upstream client produced:
- plain dictionaries (``response.json()``)
- attribute trees (``json.loads(..., object_hook=lambda d: SimpleNamespace(**d))``)

LooseValue hides the difference behind "get child by key, or absent".
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

_ABSENT = object()

# Values that never have children
_LEAF_TYPES = (str, bytes, bytearray, int, float, complex, bool)


def _mapping_child(node: Mapping, key: str) -> Any:
    try:
        return node.get(key, _ABSENT)
    except Exception:
        # unreadable counts as absent
        return _ABSENT


def _attribute_child(node: Any, key: str) -> Any:
    if key.startswith("_"):
        return _ABSENT
    try:
        value = getattr(node, key, _ABSENT)
    except Exception:
        # __getattr__ raising KeyError, failing properties, ...
        return _ABSENT
    if callable(value):
        return _ABSENT
    return value


def _no_child(node: Any, key: str) -> Any:
    return _ABSENT


def _child_getter(node: Any) -> Callable[[Any, str], Any]:
    """Pick the adapter for a concrete representation."""
    if isinstance(node, Mapping):
        return _mapping_child
    if isinstance(node, _LEAF_TYPES) or isinstance(node, Sequence):
        return _no_child
    return _attribute_child


class LooseValue:
    """Read-only view over one node of a loosely-typed source record."""

    __slots__ = ("raw",)

    def __init__(self, raw: Any):
        self.raw = raw

    def child(self, key: str) -> Optional["LooseValue"]:
        """Return the child stored under key, or None when absent or null."""
        if self.raw is None:
            return None
        value = _child_getter(self.raw)(self.raw, key)
        if value is _ABSENT or value is None:
            return None
        return LooseValue(value)

    def get(self, key: str) -> Any:
        """Raw child value, None when absent."""
        node = self.child(key)
        return node.raw if node is not None else None

    def text(self, default: str = "") -> str:
        """Primitive text form; absent or null gives default."""
        if self.raw is None:
            return default
        if isinstance(self.raw, Enum):
            return enum_text(self.raw)
        return str(self.raw)

    def items(self) -> List["LooseValue"]:
        """Elements when the node is an ordered sequence, else empty."""
        if is_sequence(self.raw):
            return [LooseValue(item) for item in self.raw]
        return []

    def count(self) -> int:
        return len(self.raw) if is_sequence(self.raw) else 0

    def __repr__(self) -> str:
        return f"LooseValue({self.raw!r})"


def is_sequence(value: Any) -> bool:
    """True for ordered sequences other than text."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def enum_text(member: Enum) -> str:
    """Text form of an enum member: its value when that is text, else its name."""
    return member.value if isinstance(member.value, str) else member.name


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a dotted path."""

    value: Any = None
    found: bool = False

    def __iter__(self):
        # Allows ``value, found = resolver.resolve(...)``
        return iter((self.value, self.found))


class PathResolver:
    """Resolves dotted field paths against loose source records."""

    SEPARATOR = "."

    def resolve(self, root: Any, path: str) -> Resolution:
        """
        Walk a dotted path left to right

        Args:
            root: Source record (dict, attribute tree, or LooseValue)
            path: Dotted path (e.g. "origin.name")

        Returns:
            Resolution with found=False as soon as a segment is missing
            or an intermediate node is null. A present key holding null
            at the last segment resolves as found with value None.
        """
        node = root.raw if isinstance(root, LooseValue) else root
        if node is None or not path:
            return Resolution()

        for segment in path.split(self.SEPARATOR):
            if node is None:
                return Resolution()
            node = _child_getter(node)(node, segment)
            if node is _ABSENT:
                return Resolution()

        return Resolution(value=node, found=True)
