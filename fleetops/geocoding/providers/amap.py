import httpx
import structlog

from fleetops.exceptions import GeocodeError, InvalidCredentialsError
from fleetops.geocoding.providers.base import GeocodeProvider
from fleetops.geocoding.schemas import Coordinate

logger = structlog.get_logger()

_COMPLETE_STATUS = "1"
_INVALID_CREDENTIALS = {"INVALID_USER_KEY", "INVALID_USER_SCODE", "INVALID_USER_SIGNATURE"}


def _parse_location(raw: str) -> Coordinate | None:
    """AMap encodes a location as "lng,lat"."""
    try:
        lng, lat = (float(part) for part in raw.split(","))
        return Coordinate(longitude=lng, latitude=lat)
    except (AttributeError, ValueError):
        return None


class AMapGeocodeProvider(GeocodeProvider):
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://restapi.amap.com",
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def geocode(self, address: str, city: str) -> list[Coordinate]:
        params = {"key": self._api_key, "address": address, "city": city, "output": "JSON"}
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get("/v3/geocode/geo", params=params)
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("amap_request_failed", address=address, error=str(exc))
            raise GeocodeError(f"Geocoding request failed: {exc}") from exc

        if not isinstance(body, dict):
            raise GeocodeError("AMap returned an unexpected response body")

        info = body.get("info", "")
        if body.get("status") != _COMPLETE_STATUS:
            if info in _INVALID_CREDENTIALS:
                raise InvalidCredentialsError(f"AMap rejected the configured key: {info}")
            raise GeocodeError(f"AMap geocoding failed: {info or 'unknown status'}")

        geocodes = body.get("geocodes")
        if not isinstance(geocodes, list):
            return []
        locations = [
            _parse_location(item.get("location")) for item in geocodes if isinstance(item, dict)
        ]
        return [loc for loc in locations if loc is not None]
