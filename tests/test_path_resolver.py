"""
Unit tests for path resolution over loose source records

Tests:
- PathResolver: dotted paths over dicts and attribute trees
- LooseValue: child lookup, text and sequence helpers
"""

import json
from enum import Enum
from types import SimpleNamespace

import pytest

from field_mapper.mapper.loose import LooseValue, PathResolver, Resolution, is_sequence
from field_mapper.schema.models import LifeStatus


# ============================================================================
# FIXTURES
# ============================================================================


class AttrDict:
    """Attribute wrapper whose __getattr__ raises KeyError for missing keys"""

    def __init__(self, data):
        self._data = data

    def __getattr__(self, key):
        return self._data[key]


class Sensor:
    """Object with a property that fails on read"""

    name = "thermo-7"

    @property
    def reading(self):
        raise RuntimeError("sensor offline")


class Level(Enum):
    LOW = 1
    HIGH = 2


@pytest.fixture
def resolver():
    return PathResolver()


@pytest.fixture
def character():
    """Character record as returned by response.json()"""
    return {
        "id": "1",
        "name": "Rick Sanchez",
        "origin": {"name": "Earth (C-137)", "dimension": "Dimension C-137"},
        "location": None,
        "type": "",
        "episode": [{"episode": "S01E01"}, {"episode": "S01E02"}],
    }


@pytest.fixture
def character_tree(character):
    """Same record decoded into an attribute tree"""
    return json.loads(json.dumps(character), object_hook=lambda d: SimpleNamespace(**d))


# ============================================================================
# TEST: PathResolver
# ============================================================================


class TestPathResolver:
    """Tests for PathResolver"""

    def test_top_level_key(self, resolver, character):
        """Test resolving a plain key"""
        result = resolver.resolve(character, "name")

        assert result.found
        assert result.value == "Rick Sanchez"

    def test_nested_path(self, resolver):
        """Test resolving origin.name"""
        value, found = resolver.resolve({"origin": {"name": "Earth"}}, "origin.name")

        assert found is True
        assert value == "Earth"

    def test_null_intermediate_is_absent(self, resolver):
        """Test that a null intermediate node short-circuits without raising"""
        result = resolver.resolve({"origin": None}, "origin.name")

        assert result == Resolution(value=None, found=False)

    def test_missing_intermediate_is_absent(self, resolver, character):
        """Test a missing segment in the middle of the path"""
        assert not resolver.resolve(character, "residence.name").found

    def test_missing_leaf_is_absent(self, resolver, character):
        """Test a missing last segment"""
        assert not resolver.resolve(character, "origin.population").found

    def test_null_leaf_is_found(self, resolver, character):
        """Test a present key holding null"""
        result = resolver.resolve(character, "location")

        assert result.found
        assert result.value is None

    def test_empty_string_is_found(self, resolver, character):
        """Test that empty text is a real value"""
        result = resolver.resolve(character, "type")

        assert result.found
        assert result.value == ""

    def test_attribute_tree(self, resolver, character_tree):
        """Test resolution through SimpleNamespace nodes"""
        assert resolver.resolve(character_tree, "origin.name").value == "Earth (C-137)"
        assert not resolver.resolve(character_tree, "origin.population").found
        assert resolver.resolve(character_tree, "location").found
        assert not resolver.resolve(character_tree, "location.name").found

    def test_mixed_representations(self, resolver):
        """Test a dict nested inside an attribute node"""
        record = SimpleNamespace(origin={"name": "Earth"})

        assert resolver.resolve(record, "origin.name").value == "Earth"

    def test_no_array_indexing(self, resolver, character):
        """Test that numeric segments are not treated as indices"""
        assert not resolver.resolve(character, "episode.0.episode").found

    def test_sequence_value_returned_whole(self, resolver, character):
        """Test that a list is returned as-is for transformations to handle"""
        result = resolver.resolve(character, "episode")

        assert result.found
        assert len(result.value) == 2

    def test_primitive_has_no_children(self, resolver, character):
        """Test that attributes of strings are never exposed"""
        assert not resolver.resolve(character, "name.upper").found
        assert not resolver.resolve(character, "name.__class__").found

    def test_null_root(self, resolver):
        """Test a null source record"""
        assert not resolver.resolve(None, "name").found

    def test_case_sensitive_keys(self, resolver, character):
        """Test that source keys match exactly"""
        assert not resolver.resolve(character, "Name").found

    def test_loose_value_root(self, resolver, character):
        """Test that a wrapped record resolves like the raw one"""
        assert resolver.resolve(LooseValue(character), "origin.dimension").value == "Dimension C-137"

    def test_getattr_raising_key_error_is_absent(self, resolver):
        """Test a wrapper whose __getattr__ raises KeyError for missing keys"""
        record = AttrDict({"name": "Rick", "origin": AttrDict({"name": "Earth"})})

        assert resolver.resolve(record, "origin.name").value == "Earth"
        assert not resolver.resolve(record, "missing").found
        assert not resolver.resolve(record, "origin.dimension").found

    def test_failing_property_is_absent(self, resolver):
        """Test that a property raising on read resolves as absent"""
        assert resolver.resolve(Sensor(), "name").value == "thermo-7"
        assert not resolver.resolve(Sensor(), "reading").found


# ============================================================================
# TEST: LooseValue
# ============================================================================


class TestLooseValue:
    """Tests for LooseValue"""

    def test_child_of_dict(self, character):
        """Test child lookup on a dictionary"""
        origin = LooseValue(character).child("origin")

        assert origin is not None
        assert origin.get("name") == "Earth (C-137)"

    def test_child_of_namespace(self, character_tree):
        """Test child lookup on an attribute tree"""
        assert LooseValue(character_tree).child("origin").get("name") == "Earth (C-137)"

    def test_null_child_is_absent(self, character):
        """Test that null children read as absent"""
        assert LooseValue(character).child("location") is None

    def test_text_defaults(self):
        """Test primitive text conversion"""
        assert LooseValue(None).text() == ""
        assert LooseValue(None).text("n/a") == "n/a"
        assert LooseValue(42).text() == "42"

    def test_text_of_enum_members(self):
        """Test that enum text matches string coercion"""
        assert LooseValue(LifeStatus.ALIVE).text() == "Alive"
        assert LooseValue(Level.HIGH).text() == "HIGH"

    def test_child_of_unreadable_attribute(self):
        """Test child lookup when attribute access raises"""
        assert LooseValue(AttrDict({})).child("name") is None
        assert LooseValue(Sensor()).get("reading") is None

    def test_items_and_count(self, character):
        """Test sequence helpers"""
        episodes = LooseValue(character).child("episode")

        assert episodes.count() == 2
        assert episodes.items()[0].get("episode") == "S01E01"
        assert LooseValue("abc").count() == 0
        assert LooseValue(5).items() == []

    def test_is_sequence(self):
        """Test sequence detection"""
        assert is_sequence([1, 2])
        assert is_sequence((1,))
        assert not is_sequence("abc")
        assert not is_sequence({"a": 1})
        assert not is_sequence(3)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
