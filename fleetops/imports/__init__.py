from fleetops.imports.parser import ParsedRow, parse_rows
from fleetops.imports.reporter import ResultReporter
from fleetops.imports.service import BulkImportService
from fleetops.imports.submitter import BatchSubmitter
from fleetops.imports.validators import (
    AddressRowValidator,
    DistanceRowValidator,
    UserRowValidator,
    validate_rows,
)

__all__ = [
    "AddressRowValidator",
    "BatchSubmitter",
    "BulkImportService",
    "DistanceRowValidator",
    "ParsedRow",
    "ResultReporter",
    "UserRowValidator",
    "parse_rows",
    "validate_rows",
]
