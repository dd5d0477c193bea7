"""Fetches Rick and Morty entities and maps them to the domain model."""
import logging
from typing import List, Optional

from field_mapper.api.rickandmorty_client import RickAndMortyClient
from field_mapper.mapper.dynamic import DynamicFieldMapper
from field_mapper.mapper.loose import LooseValue
from field_mapper.schema.models import Person, StoryArc, World

logger = logging.getLogger(__name__)

PERSON_PROFILE = "character_to_person"
WORLD_PROFILE = "location_to_world"
STORY_ARC_PROFILE = "episode_to_storyarc"

CHARACTER_FIELDS = """
    id
    name
    status
    species
    type
    gender
    origin { id name type dimension created }
    location { id name type dimension created }
    image
    created
    episode { id name air_date episode created }
"""

GET_CHARACTER = """
query GetCharacter($id: ID!) {
    character(id: $id) {%s}
}
""" % CHARACTER_FIELDS

GET_CHARACTERS = """
query GetCharacters($name: String) {
    characters(filter: { name: $name }) {
        results {%s}
    }
}
""" % CHARACTER_FIELDS

GET_LOCATION = """
query GetLocation($id: ID!) {
    location(id: $id) {
        id
        name
        type
        dimension
        created
        residents { id }
    }
}
"""

GET_EPISODES = """
query GetEpisodes($name: String) {
    episodes(filter: { name: $name }) {
        results {
            id
            name
            air_date
            episode
            created
            characters { id }
        }
    }
}
"""


class CharacterService:
    """Queries the upstream API and maps results through the field mapper."""

    def __init__(self, client: RickAndMortyClient, field_mapper: DynamicFieldMapper):
        """Initialize service."""
        self.client = client
        self.field_mapper = field_mapper

    def get_person(self, person_id: int) -> Optional[Person]:
        """Get a single character as a Person."""
        data = self.client.query(GET_CHARACTER, {"id": str(person_id)})
        character = LooseValue(data).child("character")
        if character is None:
            return None
        return self.field_mapper.map_entity(Person, character, PERSON_PROFILE)

    def get_persons(self, name: Optional[str] = None) -> List[Person]:
        """Search characters by name."""
        data = self.client.query(GET_CHARACTERS, {"name": name} if name is not None else None)
        return self._map_results(data, "characters", Person, PERSON_PROFILE)

    def get_world(self, world_id: int) -> Optional[World]:
        """Get a single location as a World."""
        data = self.client.query(GET_LOCATION, {"id": str(world_id)})
        location = LooseValue(data).child("location")
        if location is None:
            return None
        return self.field_mapper.map_entity(World, location, WORLD_PROFILE)

    def get_story_arcs(self, title: Optional[str] = None) -> List[StoryArc]:
        """Search episodes by name."""
        data = self.client.query(GET_EPISODES, {"name": title} if title is not None else None)
        return self._map_results(data, "episodes", StoryArc, STORY_ARC_PROFILE)

    def _map_results(self, data, root: str, target_type: type, profile_name: str) -> list:
        page = LooseValue(data).child(root)
        results = page.child("results") if page is not None else None
        if results is None:
            return []

        entities = [
            self.field_mapper.map_entity(target_type, item, profile_name)
            for item in results.items()
        ]
        logger.info(f"Mapped {len(entities)} {target_type.__name__} records with {profile_name}")
        return entities
