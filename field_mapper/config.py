"""Application configuration."""
import os
from dataclasses import dataclass
from pathlib import Path

# Sample profiles shipped with the package
DEFAULT_MAPPING_FILE = str(Path(__file__).parent / "data" / "field-mappings.json")


@dataclass
class RickAndMortyApiConfig:
    """Rick and Morty GraphQL API configuration."""

    endpoint: str = "https://rickandmortyapi.com/graphql"
    timeout: int = 30

    @classmethod
    def from_env(cls) -> "RickAndMortyApiConfig":
        """Load config from environment variables."""
        return cls(
            endpoint=os.getenv("RICKMORTY_API_URL", "https://rickandmortyapi.com/graphql"),
            timeout=int(os.getenv("RICKMORTY_API_TIMEOUT", "30")),
        )


@dataclass
class AppConfig:
    """Application configuration."""

    mapping_file: str = DEFAULT_MAPPING_FILE
    output_dir: str = "./output"
    log_level: str = "WARNING"
    api: RickAndMortyApiConfig = None

    def __post_init__(self):
        """Initialize default values."""
        if self.api is None:
            self.api = RickAndMortyApiConfig.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            mapping_file=os.getenv("FIELD_MAPPER_CONFIG", DEFAULT_MAPPING_FILE),
            output_dir=os.getenv("FIELD_MAPPER_OUTPUT_DIR", "./output"),
            log_level=os.getenv("FIELD_MAPPER_LOG_LEVEL", "WARNING"),
            api=RickAndMortyApiConfig.from_env(),
        )


# Global instance
app_config = AppConfig.from_env()
