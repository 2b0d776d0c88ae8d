from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials

from fleetops.auth import bearer_scheme, verify_operator_token
from fleetops.backend import resources
from fleetops.backend.client import BackendClient
from fleetops.cache import QueryCache
from fleetops.config import settings
from fleetops.geocoding.providers.amap import AMapGeocodeProvider
from fleetops.geocoding.providers.base import GeocodeProvider
from fleetops.geocoding.providers.noop import NoopGeocodeProvider
from fleetops.imports.reporter import ResultReporter
from fleetops.imports.schemas import ImportTarget
from fleetops.imports.service import BulkImportService

OperatorClaims = Annotated[dict, Depends(verify_operator_token)]


async def get_backend_client(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),  # noqa: B008
) -> AsyncGenerator[BackendClient, None]:
    async with BackendClient(
        settings.backend_base_url,
        token=credentials.credentials,
        timeout=settings.backend_timeout_seconds,
    ) as client:
        yield client


BackendClientDep = Annotated[BackendClient, Depends(get_backend_client)]


@lru_cache
def get_query_cache() -> QueryCache:
    return QueryCache(ttl_seconds=settings.list_cache_ttl_seconds)


QueryCacheDep = Annotated[QueryCache, Depends(get_query_cache)]


def get_geocode_provider() -> GeocodeProvider:
    if not settings.amap_key:
        return NoopGeocodeProvider()
    return AMapGeocodeProvider(
        settings.amap_key,
        base_url=settings.amap_base_url,
        timeout=settings.geocode_timeout_seconds,
    )


GeocodeProviderDep = Annotated[GeocodeProvider, Depends(get_geocode_provider)]


def get_bulk_import_service(
    client: BackendClientDep,
    cache: QueryCacheDep,
    geocode_provider: GeocodeProviderDep,
) -> BulkImportService:
    return BulkImportService(
        {
            ImportTarget.addresses: resources.navigation_addresses(client),
            ImportTarget.distances: resources.distance_records(client),
            ImportTarget.users: resources.users(client),
        },
        geocode_provider,
        ResultReporter(cache),
        submit_concurrency=settings.submit_concurrency,
        geocode_city=settings.geocode_city,
        geocode_timeout_seconds=settings.geocode_timeout_seconds,
        geocode_concurrency=settings.geocode_concurrency,
        default_user_password=settings.default_user_password,
    )


BulkImportServiceDep = Annotated[BulkImportService, Depends(get_bulk_import_service)]
