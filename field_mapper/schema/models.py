"""Sample domain entities populated by the mapping profiles."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class LifeStatus(str, Enum):
    """Life status of a person"""
    ALIVE = "Alive"
    DEAD = "Dead"
    UNKNOWN = "Unknown"


class Gender(str, Enum):
    """Gender of a person"""
    MALE = "Male"
    FEMALE = "Female"
    GENDERLESS = "Genderless"
    UNKNOWN = "Unknown"


@dataclass
class World:
    """A location (planet, station, dimension...)."""

    id: int = 0
    title: str = ""
    classification: str = ""
    reality: str = ""
    inhabitant_count: int = 0
    created: datetime = datetime.min


@dataclass
class StoryArc:
    """An episode."""

    id: int = 0
    title: str = ""
    release_date: datetime = datetime.min
    season: str = ""
    episode_code: str = ""
    character_count: int = 0


@dataclass
class Person:
    """A character."""

    id: int = 0
    full_name: str = ""
    life_status: LifeStatus = LifeStatus.UNKNOWN
    race: str = ""
    personality_type: str = ""
    gender: Gender = Gender.UNKNOWN
    home_world: Optional[World] = None
    current_location: Optional[World] = None
    profile_image_url: str = ""
    is_main_character: bool = False
    display_name: str = ""
    importance_score: int = 0
    episode_count: int = 0
    first_appearance: datetime = datetime.min
    story_arcs: List[StoryArc] = field(default_factory=list)


# Target types addressable by name from the CLI and the profile validator
ENTITY_TYPES = {
    "Person": Person,
    "World": World,
    "StoryArc": StoryArc,
}
