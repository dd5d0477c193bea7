"""Rick and Morty GraphQL API client."""
import logging
from typing import Any, Dict, Optional

import requests

from field_mapper.config import RickAndMortyApiConfig

logger = logging.getLogger(__name__)


class RickAndMortyClient:
    """Minimal GraphQL client for the Rick and Morty API."""

    def __init__(self, config: RickAndMortyApiConfig, session: Optional[requests.Session] = None):
        """Initialize client."""
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def query(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """
        Run a GraphQL query.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The response ``data`` object, or None if the request failed
            or the API reported errors
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = self.session.post(self.config.endpoint, json=payload, timeout=self.config.timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error querying {self.config.endpoint}: {e}")
            return None

        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            messages = "; ".join(str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors)
            logger.error(f"GraphQL errors: {messages}")
            return None

        return body.get("data") if isinstance(body, dict) else None
