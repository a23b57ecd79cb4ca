import logging

from .exceptions import ShopifyError
from .queries import LOCATIONS_QUERY
from .schemas import LocationsResponse
from .shopify_client import ShopifyClient

logger = logging.getLogger(__name__)


class LocationResolver:
    """Maps a location display name to its Shopify GID."""

    def __init__(self, client: ShopifyClient):
        self.client = client

    def resolve_id(self, name: str) -> str | None:
        """
        Exact, case-sensitive match against each location's trimmed name.
        Only the first 250 locations are considered.
        """
        response = self.client.execute_model(LOCATIONS_QUERY, None, LocationsResponse)
        for node in response.nodes():
            if (node.name or "").strip() == name:
                logger.info(f"📍 Location '{name}' -> {node.id}")
                return node.id
        return None

    def list_names(self) -> list[str]:
        """All location names, for error messages. Degrades to [] on failure."""
        try:
            response = self.client.execute_model(LOCATIONS_QUERY, None, LocationsResponse)
        except ShopifyError as e:
            logger.warning(f"⚠️ Could not list locations: {e}")
            return []
        return [node.name or "" for node in response.nodes()]
