from fleetops.geocoding.providers.base import GeocodeProvider
from fleetops.geocoding.schemas import Coordinate


class NoopGeocodeProvider(GeocodeProvider):
    """Stands in when no geocoding provider is configured; never finds anything."""

    async def geocode(self, address: str, city: str) -> list[Coordinate]:
        return []
