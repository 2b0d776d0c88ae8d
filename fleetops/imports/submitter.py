import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import structlog

from fleetops.exceptions import AppError
from fleetops.imports.schemas import RowOutcome

logger = structlog.get_logger()

T = TypeVar("T")

# An action returns the created record id (or None when there is none to report)
Action = Callable[[T], Awaitable[int | None]]


class BatchSubmitter:
    """Run one backend call per item concurrently, isolating every failure.

    At most `max_in_flight` calls run at once. Outcomes come back in input order;
    a failed call never cancels, retries or rolls back any other.
    """

    def __init__(self, max_in_flight: int = 8) -> None:
        if max_in_flight < 1:
            raise ValueError("max_in_flight must be at least 1")
        self._max_in_flight = max_in_flight

    async def run(
        self,
        items: Sequence[T],
        action: Action,
        *,
        line_of: Callable[[T], int | None] = lambda _: None,
        record_of: Callable[[T], int | None] = lambda _: None,
    ) -> list[RowOutcome]:
        semaphore = asyncio.Semaphore(self._max_in_flight)

        async def _guarded(item: T) -> int | None:
            async with semaphore:
                return await action(item)

        results = await asyncio.gather(*(_guarded(item) for item in items), return_exceptions=True)

        outcomes: list[RowOutcome] = []
        for item, result in zip(items, results, strict=True):
            line, record_id = line_of(item), record_of(item)
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                reason = result.message if isinstance(result, AppError) else str(result)
                logger.warning(
                    "batch_item_failed",
                    line=line,
                    record_id=record_id,
                    error=reason,
                    error_type=type(result).__name__,
                )
                outcomes.append(
                    RowOutcome.submission_error(reason or "未知错误", line=line, record_id=record_id)
                )
            else:
                outcomes.append(RowOutcome.success(line=line, record_id=record_id, created_id=result))

        logger.info(
            "batch_submitted",
            total=len(items),
            failed=sum(1 for o in outcomes if not o.ok),
            max_in_flight=self._max_in_flight,
        )
        return outcomes
