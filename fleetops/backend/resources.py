from typing import Any

from fleetops.backend.client import BackendClient
from fleetops.exceptions import BackendError


class RecordResource:
    """CRUD endpoints of one backend record type."""

    def __init__(
        self,
        client: BackendClient,
        path: str,
        id_path: tuple[str, ...],
        update_method: str = "PUT",
    ) -> None:
        self._client = client
        self._path = path
        self._id_path = id_path
        self._update_method = update_method

    async def list(self, company_id: int | None = None, **filters: Any) -> Any:
        return await self._client.request(
            "GET", self._path, params={**filters, "company_id": company_id}
        )

    async def create(self, data: dict, company_id: int | None = None) -> int | None:
        """Create a record and return its backend id, when the backend reports one."""
        result = await self._client.request(
            "POST", self._path, json=data, params={"company_id": company_id}
        )
        return self._extract_id(result)

    async def update(self, record_id: int, data: dict, company_id: int | None = None) -> None:
        await self._client.request(
            self._update_method,
            f"{self._path}/{record_id}",
            json=data,
            params={"company_id": company_id},
        )

    async def delete(self, record_id: int, company_id: int | None = None) -> None:
        await self._client.request(
            "DELETE", f"{self._path}/{record_id}", params={"company_id": company_id}
        )

    def _extract_id(self, result: Any) -> int | None:
        value = result
        for key in self._id_path:
            if not isinstance(value, dict):
                return None
            value = value.get(key)
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise BackendError(f"Unexpected record id in response: {value!r}") from exc


def navigation_addresses(client: BackendClient) -> RecordResource:
    return RecordResource(client, "/navigation/addresses", ("address_id",))


def distance_records(client: BackendClient) -> RecordResource:
    return RecordResource(client, "/distance", ("id",))


def users(client: BackendClient) -> RecordResource:
    return RecordResource(client, "/users", ("user", "id"), update_method="PATCH")
