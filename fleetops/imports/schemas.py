from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

DEFAULT_PLACEHOLDER_ADDRESS = "待补充地址"
DEFAULT_LONGITUDE = 0.0
DEFAULT_LATITUDE = 0.0
DEFAULT_POSITION_TYPE = "司机"
POSITION_TYPES = ("司机", "统计", "统计员", "车队长", "财务", "总经理")


class ImportTarget(StrEnum):
    addresses = "addresses"
    distances = "distances"
    users = "users"


class AddressType(StrEnum):
    loading = "loading"
    unloading = "unloading"
    charging = "charging"


class OutcomeKind(StrEnum):
    parse_error = "parse_error"
    submission_error = "submission_error"
    success = "success"


class ReportStatus(StrEnum):
    empty = "empty"
    success = "success"
    partial = "partial"
    failed = "failed"


# Create payloads, shaped like the backend record API expects them


class NavigationAddressCreate(BaseModel):
    type: AddressType
    name: str = Field(min_length=1)
    address: str = DEFAULT_PLACEHOLDER_ADDRESS
    longitude: float = DEFAULT_LONGITUDE
    latitude: float = DEFAULT_LATITUDE
    contact: str | None = None
    phone: str | None = None
    remark: str | None = None


class DistancePairCreate(BaseModel):
    loading_company: str = Field(min_length=1)
    unloading_company: str = Field(min_length=1)
    distance: float = Field(ge=0)


class UserCreate(BaseModel):
    nickname: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    password: str
    position_type: str = DEFAULT_POSITION_TYPE
    company_id: int | None = None
    department_id: int | None = None
    status: str = "active"


class ImportCandidate(BaseModel):
    """A validated row, ready for (optional) geocoding and submission."""

    line: int
    payload: NavigationAddressCreate | DistancePairCreate | UserCreate
    # Only meaningful for addresses; False means geocoding still has to run
    coordinates_resolved: bool = True


# Row outcomes and batch aggregates


class RowOutcome(BaseModel):
    kind: OutcomeKind
    line: int | None = None
    record_id: int | None = None
    created_id: int | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.success

    def describe(self) -> str:
        if self.line is not None:
            return f"第{self.line}行：{self.reason}"
        return f"记录 {self.record_id}：{self.reason}"

    @classmethod
    def parse_error(cls, line: int, reason: str) -> "RowOutcome":
        return cls(kind=OutcomeKind.parse_error, line=line, reason=reason)

    @classmethod
    def submission_error(
        cls, reason: str, *, line: int | None = None, record_id: int | None = None
    ) -> "RowOutcome":
        return cls(kind=OutcomeKind.submission_error, line=line, record_id=record_id, reason=reason)

    @classmethod
    def success(
        cls,
        *,
        line: int | None = None,
        record_id: int | None = None,
        created_id: int | None = None,
    ) -> "RowOutcome":
        return cls(kind=OutcomeKind.success, line=line, record_id=record_id, created_id=created_id)


class BatchResult(BaseModel):
    succeeded: list[RowOutcome] = Field(default_factory=list)
    failed: list[RowOutcome] = Field(default_factory=list)
    total_attempted: int = 0


class BatchReport(BaseModel):
    target: ImportTarget
    status: ReportStatus
    title: str
    message: str
    total_attempted: int
    succeeded_count: int
    failed_count: int
    errors: list[str]
    result: BatchResult


# Request bodies


class AddressImportRequest(BaseModel):
    address_type: AddressType
    text: str = ""
    company_id: int | None = None


class DistanceImportRequest(BaseModel):
    text: str = ""
    company_id: int | None = None


class UserImportRequest(BaseModel):
    text: str = ""
    company_id: int | None = None
    department_id: int | None = None


class AddressPatch(BaseModel):
    contact: str | None = None
    phone: str | None = None
    remark: str | None = None


class DistancePatch(BaseModel):
    distance: float = Field(ge=0, allow_inf_nan=False)


class BatchEditRequest(BaseModel):
    ids: list[int] = Field(default_factory=list)
    company_id: int | None = None

    @field_validator("ids")
    @classmethod
    def _dedupe_ids(cls, ids: list[int]) -> list[int]:
        return list(dict.fromkeys(ids))


class AddressBatchEditRequest(BatchEditRequest):
    patch: AddressPatch


class DistanceBatchEditRequest(BatchEditRequest):
    patch: DistancePatch


class BatchDeleteRequest(BatchEditRequest):
    pass
