from typing import Any

from fastapi import APIRouter

from fleetops.backend import resources
from fleetops.dependencies import BackendClientDep, OperatorClaims, QueryCacheDep
from fleetops.imports.schemas import AddressType

router = APIRouter()


@router.get("/addresses")
async def list_addresses(
    client: BackendClientDep,
    cache: QueryCacheDep,
    operator: OperatorClaims,
    address_type: AddressType | None = None,
    keyword: str | None = None,
    company_id: int | None = None,
) -> Any:
    key = ("navigation", "addresses", operator["sub"], address_type, keyword, company_id)
    resource = resources.navigation_addresses(client)
    return await cache.get_or_fetch(
        key, lambda: resource.list(company_id, type=address_type, keyword=keyword)
    )


@router.get("/distances")
async def list_distances(
    client: BackendClientDep,
    cache: QueryCacheDep,
    operator: OperatorClaims,
    keyword: str | None = None,
    page: int = 1,
    page_size: int = 20,
    company_id: int | None = None,
) -> Any:
    key = ("distance", "list", operator["sub"], keyword, page, page_size, company_id)
    resource = resources.distance_records(client)
    return await cache.get_or_fetch(
        key, lambda: resource.list(company_id, keyword=keyword, page=page, page_size=page_size)
    )


@router.get("/users")
async def list_users(
    client: BackendClientDep,
    cache: QueryCacheDep,
    operator: OperatorClaims,
    keyword: str | None = None,
    page: int = 1,
    page_size: int = 20,
    company_id: int | None = None,
) -> Any:
    key = ("users", "list", operator["sub"], keyword, page, page_size, company_id)
    resource = resources.users(client)
    return await cache.get_or_fetch(
        key, lambda: resource.list(company_id, keyword=keyword, page=page, page_size=page_size)
    )
