"""
Unit tests for mapping profile loading

Tests:
- Payload parsing from dicts, JSON text and files
- Case-insensitive keys and ignored extras
- ConfigurationError on malformed payloads
- Bundled sample configuration
"""

import json

import pytest

from field_mapper.config import DEFAULT_MAPPING_FILE
from field_mapper.errors import ConfigurationError
from field_mapper.mapper import loader
from field_mapper.mapper.mapping import ComputedFieldRule, FieldRule


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def payload():
    return {
        "mappings": {
            "character_to_person": {
                "targetType": "Person",
                "fields": {
                    "name": {"sourceField": "name", "targetField": "full_name"},
                    "origin": {
                        "sourceField": "origin.name",
                        "targetField": "race",
                        "dataType": "string",
                        "transformationRule": "default_if_empty",
                        "defaultValue": "Earth",
                        "isRequired": False,
                        "validationRule": "non_empty",
                    },
                },
                "computedFields": [
                    {
                        "fieldName": "display_name",
                        "computationRule": "generate_display_name",
                        "dependentFields": ["name", "species"],
                    }
                ],
            }
        }
    }


# ============================================================================
# TEST: load
# ============================================================================


class TestLoad:
    """Tests for loader.load"""

    def test_load_dict(self, payload):
        profiles = loader.load(payload)

        assert profiles.names() == ["character_to_person"]
        profile = profiles.get("character_to_person")
        assert profile.target_type == "Person"
        assert set(profile.fields) == {"name", "origin"}

    def test_field_rule_values(self, payload):
        rule = loader.load(payload).get("character_to_person").fields["origin"]

        assert rule == FieldRule(
            source_field="origin.name",
            target_field="race",
            data_type="string",
            transformation_rule="default_if_empty",
            default_value="Earth",
            is_required=False,
            validation_rule="non_empty",
        )

    def test_field_rule_defaults(self, payload):
        rule = loader.load(payload).get("character_to_person").fields["name"]

        assert rule.is_required is True
        assert rule.default_value is None
        assert rule.transformation_rule is None
        assert not rule.has_default

    def test_computed_field(self, payload):
        computed = loader.load(payload).get("character_to_person").computed_fields

        assert computed == (
            ComputedFieldRule(
                field_name="display_name",
                computation_rule="generate_display_name",
                data_type="string",
                dependent_fields=("name", "species"),
            ),
        )

    def test_load_json_text(self, payload):
        profiles = loader.load(json.dumps(payload))

        assert "character_to_person" in profiles

    def test_load_null_text(self):
        assert len(loader.load(" null ")) == 0

    def test_load_file(self, payload, tmp_path):
        config_file = tmp_path / "field-mappings.json"
        config_file.write_text(json.dumps(payload), encoding="utf-8")

        assert len(loader.load(config_file)) == 1
        assert len(loader.load(str(config_file))) == 1

    def test_case_insensitive_keys(self):
        profiles = loader.load({
            "MAPPINGS": {
                "p": {
                    "TargetType": "World",
                    "Fields": {"t": {"SOURCEFIELD": "name", "targetfield": "title", "IsRequired": False}},
                }
            }
        })

        rule = profiles.get("p").fields["t"]
        assert profiles.get("p").target_type == "World"
        assert rule.source_field == "name"
        assert rule.target_field == "title"
        assert rule.is_required is False

    def test_unknown_keys_ignored(self, payload):
        payload["version"] = 3
        payload["mappings"]["character_to_person"]["owner"] = "data-team"
        payload["mappings"]["character_to_person"]["fields"]["name"]["comment"] = "display"

        profiles = loader.load(payload)

        assert profiles.get("character_to_person").fields["name"].target_field == "full_name"

    def test_missing_mappings_is_empty(self):
        assert len(loader.load({})) == 0
        assert len(loader.load({"mappings": None})) == 0

    def test_profile_names_are_case_sensitive(self, payload):
        profiles = loader.load(payload)

        assert profiles.get("Character_To_Person") is None

    def test_profiles_are_read_only(self, payload):
        profiles = loader.load(payload)

        with pytest.raises(TypeError):
            profiles.mappings["extra"] = None
        with pytest.raises(TypeError):
            profiles.get("character_to_person").fields["extra"] = None

    def test_to_dict_round_trips(self, payload):
        profiles = loader.load(payload)

        assert loader.load(profiles.to_dict()).to_dict() == profiles.to_dict()

    def test_bundled_sample(self):
        profiles = loader.load(DEFAULT_MAPPING_FILE)

        assert profiles.names() == ["character_to_person", "episode_to_storyarc", "location_to_world"]


class TestLoadErrors:
    """Malformed payloads raise ConfigurationError"""

    def test_invalid_json(self):
        with pytest.raises(ConfigurationError):
            loader.load('{"mappings": ')

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            loader.load(tmp_path / "missing.json")

    def test_json_array_text(self):
        """Array text is decoded, not opened as a file"""
        with pytest.raises(ConfigurationError, match="must be an object"):
            loader.load("[1, 2, 3]")

    def test_missing_file_message(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not a readable file or JSON text"):
            loader.load(str(tmp_path / "missing.json"))

    def test_root_not_object(self):
        with pytest.raises(ConfigurationError):
            loader.parse([1, 2, 3])

    def test_mappings_not_object(self):
        with pytest.raises(ConfigurationError):
            loader.load({"mappings": ["character_to_person"]})

    def test_fields_not_object(self):
        with pytest.raises(ConfigurationError):
            loader.load({"mappings": {"p": {"fields": []}}})

    def test_computed_fields_not_array(self):
        with pytest.raises(ConfigurationError):
            loader.load({"mappings": {"p": {"computedFields": {}}}})

    def test_is_required_not_boolean(self):
        with pytest.raises(ConfigurationError):
            loader.load({"mappings": {"p": {"fields": {"f": {"sourceField": "a", "isRequired": "yes"}}}}})

    def test_source_field_not_string(self):
        with pytest.raises(ConfigurationError):
            loader.load({"mappings": {"p": {"fields": {"f": {"sourceField": 12}}}}})

    def test_no_partial_load(self):
        """One bad profile fails the whole payload"""
        with pytest.raises(ConfigurationError):
            loader.load({
                "mappings": {
                    "good": {"fields": {"f": {"sourceField": "a", "targetField": "b"}}},
                    "bad": {"fields": {"f": {"sourceField": "a", "isRequired": 1}}},
                }
            })


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
