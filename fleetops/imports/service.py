from collections.abc import Awaitable, Callable, Mapping

import structlog

from fleetops.backend.resources import RecordResource
from fleetops.exceptions import RecordNotFoundError, ValidationError
from fleetops.geocoding.providers.base import GeocodeProvider
from fleetops.geocoding.resolver import GeocodeResolver
from fleetops.imports.parser import parse_rows
from fleetops.imports.reporter import ResultReporter
from fleetops.imports.schemas import (
    DEFAULT_PLACEHOLDER_ADDRESS,
    AddressType,
    BatchReport,
    ImportCandidate,
    ImportTarget,
    NavigationAddressCreate,
)
from fleetops.imports.submitter import BatchSubmitter
from fleetops.imports.validators import (
    AddressRowValidator,
    DistanceRowValidator,
    RowValidator,
    UserRowValidator,
    validate_rows,
)

logger = structlog.get_logger()

Prepare = Callable[[ImportCandidate], Awaitable[None]]


class BulkImportService:
    def __init__(
        self,
        resources: Mapping[ImportTarget, RecordResource],
        geocode_provider: GeocodeProvider,
        reporter: ResultReporter,
        *,
        submit_concurrency: int = 8,
        geocode_city: str = "全国",
        geocode_timeout_seconds: float = 5.0,
        geocode_concurrency: int = 8,
        default_user_password: str = "123456",
    ) -> None:
        self._resources = resources
        self._geocode_provider = geocode_provider
        self._reporter = reporter
        self._submitter = BatchSubmitter(submit_concurrency)
        self._geocode_city = geocode_city
        self._geocode_timeout = geocode_timeout_seconds
        self._geocode_concurrency = geocode_concurrency
        self._default_user_password = default_user_password

    async def import_addresses(
        self, address_type: AddressType, text: str, company_id: int | None = None
    ) -> BatchReport:
        """Import navigation addresses, geocoding rows that came without coordinates."""
        resolver = GeocodeResolver(
            self._geocode_provider,
            city=self._geocode_city,
            timeout_seconds=self._geocode_timeout,
            max_in_flight=self._geocode_concurrency,
        )

        async def _locate(candidate: ImportCandidate) -> None:
            payload = candidate.payload
            if candidate.coordinates_resolved or not isinstance(payload, NavigationAddressCreate):
                return
            address = payload.address if payload.address != DEFAULT_PLACEHOLDER_ADDRESS else None
            coordinate = await resolver.resolve(address)
            if coordinate is None:
                # Stays at the (0, 0) sentinel so the row is still created
                return
            payload.longitude = coordinate.longitude
            payload.latitude = coordinate.latitude
            candidate.coordinates_resolved = True

        return await self._import(
            ImportTarget.addresses,
            text,
            AddressRowValidator(address_type),
            company_id,
            prepare=_locate,
        )

    async def import_distances(self, text: str, company_id: int | None = None) -> BatchReport:
        return await self._import(ImportTarget.distances, text, DistanceRowValidator(), company_id)

    async def import_users(
        self, text: str, company_id: int | None = None, department_id: int | None = None
    ) -> BatchReport:
        validator = UserRowValidator(
            self._default_user_password, company_id=company_id, department_id=department_id
        )
        return await self._import(ImportTarget.users, text, validator, company_id)

    async def batch_edit(
        self,
        target: ImportTarget,
        ids: list[int],
        patch: dict,
        company_id: int | None = None,
    ) -> BatchReport:
        """Apply one patch to every selected record."""
        if not patch:
            raise ValidationError("No fields to update")
        if not ids:
            return self._reporter.report(
                target, [], operation="更新", empty_message="请先选择要编辑的记录"
            )

        resource = self._resources[target]
        logger.info("batch_edit_started", target=target, count=len(ids), fields=sorted(patch))

        async def _update(record_id: int) -> None:
            await resource.update(record_id, patch, company_id)

        outcomes = await self._submitter.run(ids, _update, record_of=lambda record_id: record_id)
        return self._reporter.report(target, outcomes, operation="更新")

    async def batch_delete(
        self, target: ImportTarget, ids: list[int], company_id: int | None = None
    ) -> BatchReport:
        """Delete every selected record; an id the backend no longer knows counts as deleted."""
        if not ids:
            return self._reporter.report(
                target, [], operation="删除", empty_message="请先选择要删除的记录"
            )

        resource = self._resources[target]
        logger.info("batch_delete_started", target=target, count=len(ids))

        async def _delete(record_id: int) -> None:
            try:
                await resource.delete(record_id, company_id)
            except RecordNotFoundError:
                logger.info("batch_delete_already_absent", target=target, record_id=record_id)

        outcomes = await self._submitter.run(ids, _delete, record_of=lambda record_id: record_id)
        return self._reporter.report(target, outcomes, operation="删除")

    async def _import(
        self,
        target: ImportTarget,
        text: str,
        validator: RowValidator,
        company_id: int | None,
        prepare: Prepare | None = None,
    ) -> BatchReport:
        rows = parse_rows(text)
        if not rows:
            return self._reporter.report(target, [])

        candidates, parse_errors = validate_rows(rows, validator)
        logger.info(
            "import_parsed",
            target=target,
            rows=len(rows),
            candidates=len(candidates),
            parse_errors=len(parse_errors),
        )

        resource = self._resources[target]

        async def _create(candidate: ImportCandidate) -> int | None:
            if prepare is not None:
                await prepare(candidate)
            data = candidate.payload.model_dump(mode="json", exclude_none=True)
            return await resource.create(data, company_id)

        outcomes = await self._submitter.run(candidates, _create, line_of=lambda c: c.line)
        return self._reporter.report(target, parse_errors + outcomes)
