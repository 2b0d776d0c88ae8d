import asyncio

import structlog

from fleetops.exceptions import GeocodeError, InvalidCredentialsError
from fleetops.geocoding.providers.base import GeocodeProvider
from fleetops.geocoding.schemas import Coordinate

logger = structlog.get_logger()


class GeocodeResolver:
    """Resolve free-text addresses to a single coordinate, degrading to None.

    A resolver lives for one batch. Once the provider rejects its credentials
    no further requests are made for the rest of that batch.
    """

    def __init__(
        self,
        provider: GeocodeProvider,
        city: str = "全国",
        timeout_seconds: float = 5.0,
        max_in_flight: int = 8,
    ) -> None:
        self._provider = provider
        self._city = city
        self._timeout = timeout_seconds
        self._semaphore = asyncio.Semaphore(max_in_flight)
        self._disabled = False

    @property
    def disabled(self) -> bool:
        return self._disabled

    async def resolve(self, address: str | None) -> Coordinate | None:
        if not address or self._disabled:
            return None

        async with self._semaphore:
            if self._disabled:
                return None
            try:
                candidates = await asyncio.wait_for(
                    self._provider.geocode(address, self._city), timeout=self._timeout
                )
            except InvalidCredentialsError as exc:
                self._disabled = True
                logger.warning("geocode_credentials_rejected", error=exc.message)
                return None
            except GeocodeError as exc:
                logger.info("geocode_unresolved", address=address, reason=exc.message)
                return None
            except TimeoutError:
                logger.warning("geocode_timeout", address=address, timeout=self._timeout)
                return None
            except Exception as exc:
                # The row still gets created at the sentinel coordinate
                logger.warning(
                    "geocode_unresolved",
                    address=address,
                    reason=str(exc),
                    error_type=type(exc).__name__,
                )
                return None

        if not candidates:
            logger.info("geocode_unresolved", address=address, reason="no match")
            return None
        return candidates[0]
