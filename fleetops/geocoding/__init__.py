from fleetops.geocoding.providers.amap import AMapGeocodeProvider
from fleetops.geocoding.providers.base import GeocodeProvider
from fleetops.geocoding.providers.noop import NoopGeocodeProvider
from fleetops.geocoding.resolver import GeocodeResolver
from fleetops.geocoding.schemas import Coordinate

__all__ = [
    "AMapGeocodeProvider",
    "Coordinate",
    "GeocodeProvider",
    "GeocodeResolver",
    "NoopGeocodeProvider",
]
