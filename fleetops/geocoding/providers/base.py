from abc import ABC, abstractmethod

from fleetops.geocoding.schemas import Coordinate


class GeocodeProvider(ABC):
    @abstractmethod
    async def geocode(self, address: str, city: str) -> list[Coordinate]:
        """Return candidate locations for `address`, best match first.

        Raises GeocodeError when the provider answers with a non-complete status,
        InvalidCredentialsError when it rejects the configured key.
        """
        ...
