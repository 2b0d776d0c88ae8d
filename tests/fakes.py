from fleetops.exceptions import BackendError, RecordNotFoundError
from fleetops.geocoding.providers.base import GeocodeProvider
from fleetops.geocoding.schemas import Coordinate


class FakeResource:
    def __init__(self, fail_ids: set[int] | None = None, missing_ids: set[int] | None = None) -> None:
        self.created: list[dict] = []
        self.updated: list[tuple[int, dict]] = []
        self.deleted: list[int] = []
        self.company_ids: list[int | None] = []
        self._fail_ids = fail_ids or set()
        self._missing_ids = missing_ids or set()

    async def create(self, data: dict, company_id: int | None = None) -> int:
        self.created.append(data)
        self.company_ids.append(company_id)
        return 100 + len(self.created)

    async def update(self, record_id: int, data: dict, company_id: int | None = None) -> None:
        self.updated.append((record_id, data))
        if record_id in self._fail_ids:
            raise BackendError("HTTP 500", status_code=500)

    async def delete(self, record_id: int, company_id: int | None = None) -> None:
        self.deleted.append(record_id)
        if record_id in self._missing_ids:
            raise RecordNotFoundError("记录不存在")
        if record_id in self._fail_ids:
            raise BackendError("HTTP 500", status_code=500)


class FakeGeocoder(GeocodeProvider):
    def __init__(self, results: dict[str, Coordinate]) -> None:
        self.results = results
        self.calls: list[str] = []

    async def geocode(self, address: str, city: str) -> list[Coordinate]:
        self.calls.append(address)
        found = self.results.get(address)
        return [found] if found else []
