from fastapi import APIRouter

from fleetops.dependencies import BulkImportServiceDep, OperatorClaims
from fleetops.imports.schemas import (
    AddressBatchEditRequest,
    AddressImportRequest,
    BatchDeleteRequest,
    BatchReport,
    DistanceBatchEditRequest,
    DistanceImportRequest,
    ImportTarget,
    UserImportRequest,
)

router = APIRouter()


@router.post("/addresses", response_model=BatchReport)
async def import_addresses(
    data: AddressImportRequest,
    service: BulkImportServiceDep,
    _operator: OperatorClaims,
) -> BatchReport:
    return await service.import_addresses(data.address_type, data.text, data.company_id)


@router.post("/distances", response_model=BatchReport)
async def import_distances(
    data: DistanceImportRequest,
    service: BulkImportServiceDep,
    _operator: OperatorClaims,
) -> BatchReport:
    return await service.import_distances(data.text, data.company_id)


@router.post("/users", response_model=BatchReport)
async def import_users(
    data: UserImportRequest,
    service: BulkImportServiceDep,
    _operator: OperatorClaims,
) -> BatchReport:
    return await service.import_users(data.text, data.company_id, data.department_id)


@router.post("/addresses/batch-edit", response_model=BatchReport)
async def batch_edit_addresses(
    data: AddressBatchEditRequest,
    service: BulkImportServiceDep,
    _operator: OperatorClaims,
) -> BatchReport:
    patch = data.patch.model_dump(exclude_none=True)
    return await service.batch_edit(ImportTarget.addresses, data.ids, patch, data.company_id)


@router.post("/distances/batch-edit", response_model=BatchReport)
async def batch_edit_distances(
    data: DistanceBatchEditRequest,
    service: BulkImportServiceDep,
    _operator: OperatorClaims,
) -> BatchReport:
    patch = data.patch.model_dump()
    return await service.batch_edit(ImportTarget.distances, data.ids, patch, data.company_id)


@router.post("/{target}/batch-delete", response_model=BatchReport)
async def batch_delete(
    target: ImportTarget,
    data: BatchDeleteRequest,
    service: BulkImportServiceDep,
    _operator: OperatorClaims,
) -> BatchReport:
    return await service.batch_delete(target, data.ids, data.company_id)
