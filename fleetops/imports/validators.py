import math
import re
from abc import ABC, abstractmethod

import structlog

from fleetops.imports.parser import ParsedRow
from fleetops.imports.schemas import (
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    DEFAULT_PLACEHOLDER_ADDRESS,
    DEFAULT_POSITION_TYPE,
    POSITION_TYPES,
    AddressType,
    DistancePairCreate,
    ImportCandidate,
    NavigationAddressCreate,
    RowOutcome,
    UserCreate,
)

logger = structlog.get_logger()

DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(raw: str, field: str) -> float:
    """Parse a plain decimal literal; anything else (inf, nan, '1_0', '') is rejected."""
    if not DECIMAL_PATTERN.fullmatch(raw):
        raise ValueError(f"{field}不是有效数字")
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"{field}不是有效数字")
    return value


class RowValidator(ABC):
    @abstractmethod
    def validate(self, row: ParsedRow) -> ImportCandidate:
        """Build a candidate from a parsed row or raise ValueError with the reason."""
        ...

    @staticmethod
    def _required(row: ParsedRow, index: int, field: str) -> str:
        value = row.get(index)
        if not value:
            raise ValueError(f"缺少{field}")
        return value

    @staticmethod
    def _optional(row: ParsedRow, index: int) -> str | None:
        return row.get(index) or None


class AddressRowValidator(RowValidator):
    """name, address, longitude, latitude, contact, phone, remark"""

    def __init__(self, address_type: AddressType) -> None:
        self._address_type = address_type

    def validate(self, row: ParsedRow) -> ImportCandidate:
        name = self._required(row, 0, "名称")
        address = row.get(1) or DEFAULT_PLACEHOLDER_ADDRESS
        lng_raw, lat_raw = row.get(2), row.get(3)

        if lng_raw and lat_raw:
            longitude = parse_number(lng_raw, "经度")
            latitude = parse_number(lat_raw, "纬度")
            if not -180 <= longitude <= 180:
                raise ValueError("经度超出范围（-180 ~ 180）")
            if not -90 <= latitude <= 90:
                raise ValueError("纬度超出范围（-90 ~ 90）")
            resolved = True
        elif lng_raw or lat_raw:
            raise ValueError("经度和纬度需同时填写")
        else:
            longitude, latitude = DEFAULT_LONGITUDE, DEFAULT_LATITUDE
            resolved = False

        payload = NavigationAddressCreate(
            type=self._address_type,
            name=name,
            address=address,
            longitude=longitude,
            latitude=latitude,
            contact=self._optional(row, 4),
            phone=self._optional(row, 5),
            remark=self._optional(row, 6),
        )
        return ImportCandidate(line=row.line, payload=payload, coordinates_resolved=resolved)


class DistanceRowValidator(RowValidator):
    """loading point, unloading point, distance"""

    def validate(self, row: ParsedRow) -> ImportCandidate:
        loading = self._required(row, 0, "装料地点")
        unloading = self._required(row, 1, "卸货地点")
        distance = parse_number(self._required(row, 2, "距离"), "距离")
        if distance < 0:
            raise ValueError("距离不能为负数")

        payload = DistancePairCreate(
            loading_company=loading,
            unloading_company=unloading,
            distance=distance,
        )
        return ImportCandidate(line=row.line, payload=payload)


class UserRowValidator(RowValidator):
    """nickname, phone, position type"""

    def __init__(
        self,
        default_password: str,
        company_id: int | None = None,
        department_id: int | None = None,
    ) -> None:
        self._default_password = default_password
        self._company_id = company_id
        self._department_id = department_id

    def validate(self, row: ParsedRow) -> ImportCandidate:
        nickname = self._required(row, 0, "姓名")
        phone = self._required(row, 1, "手机号")
        position_type = row.get(2) or DEFAULT_POSITION_TYPE
        if position_type not in POSITION_TYPES:
            raise ValueError(f"未知职位：{position_type}")

        payload = UserCreate(
            nickname=nickname,
            phone=phone,
            password=self._default_password,
            position_type=position_type,
            company_id=self._company_id,
            department_id=self._department_id,
        )
        return ImportCandidate(line=row.line, payload=payload)


def validate_rows(
    rows: list[ParsedRow], validator: RowValidator
) -> tuple[list[ImportCandidate], list[RowOutcome]]:
    """Split parsed rows into candidates and parse errors; every row lands in exactly one."""
    candidates: list[ImportCandidate] = []
    errors: list[RowOutcome] = []

    for row in rows:
        try:
            candidates.append(validator.validate(row))
        except ValueError as exc:
            logger.info("import_row_rejected", line=row.line, reason=str(exc))
            errors.append(RowOutcome.parse_error(row.line, str(exc)))

    return candidates, errors
