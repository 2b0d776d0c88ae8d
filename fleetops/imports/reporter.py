import structlog

from fleetops.cache import QueryCache, QueryKey
from fleetops.imports.schemas import (
    BatchReport,
    BatchResult,
    ImportTarget,
    ReportStatus,
    RowOutcome,
)

logger = structlog.get_logger()

LIST_QUERY_KEYS: dict[ImportTarget, QueryKey] = {
    ImportTarget.addresses: ("navigation", "addresses"),
    ImportTarget.distances: ("distance", "list"),
    ImportTarget.users: ("users", "list"),
}

EMPTY_IMPORT_MESSAGE = "请输入要导入的数据"


class ResultReporter:
    def __init__(self, cache: QueryCache | None = None) -> None:
        self._cache = cache

    def report(
        self,
        target: ImportTarget,
        outcomes: list[RowOutcome],
        *,
        operation: str = "导入",
        empty_message: str = EMPTY_IMPORT_MESSAGE,
    ) -> BatchReport:
        """Merge parse and submission outcomes into one operator-facing report."""
        result = BatchResult(
            succeeded=[o for o in outcomes if o.ok],
            failed=sorted(
                (o for o in outcomes if not o.ok),
                key=lambda o: (o.line is None, o.line or 0, o.record_id or 0),
            ),
            total_attempted=len(outcomes),
        )
        report = self._build_report(target, result, operation, empty_message)

        if result.succeeded:
            self._invalidate(target)

        logger.info(
            "batch_completed",
            target=target,
            operation=operation,
            status=report.status,
            total=result.total_attempted,
            succeeded=report.succeeded_count,
            failed=report.failed_count,
        )
        return report

    def _build_report(
        self, target: ImportTarget, result: BatchResult, operation: str, empty_message: str
    ) -> BatchReport:
        succeeded, failed = len(result.succeeded), len(result.failed)
        errors = [o.describe() for o in result.failed]

        if result.total_attempted == 0:
            status, title, message = ReportStatus.empty, "没有数据", empty_message
        elif not failed:
            status, title = ReportStatus.success, f"批量{operation}成功"
            message = f"批量{operation}成功：{succeeded} 条"
        elif succeeded:
            status, title = ReportStatus.partial, f"部分{operation}失败"
            message = f"成功{operation} {succeeded} 条，失败 {failed} 条：\n" + "\n".join(errors)
        else:
            status, title = ReportStatus.failed, f"{operation}失败"
            message = "\n".join(errors)

        return BatchReport(
            target=target,
            status=status,
            title=title,
            message=message,
            total_attempted=result.total_attempted,
            succeeded_count=succeeded,
            failed_count=failed,
            errors=errors,
            result=result,
        )

    def _invalidate(self, target: ImportTarget) -> None:
        if self._cache is None:
            return
        self._cache.invalidate(LIST_QUERY_KEYS[target])
