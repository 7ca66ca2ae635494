from __future__ import annotations

import asyncio
import itertools
from dataclasses import asdict, dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, Iterator, List, Optional, Sequence

from .errors import UpsertError
from .logging_utils import log_json
from .normalize import TypedRecord
from .store import UpsertStore

BatchFailedHook = Callable[[int, Sequence[TypedRecord], str], None]


@dataclass
class UpsertReport:
    attempted: int = 0
    successful: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)
    failed_batches: List[int] = field(default_factory=list)
    batches: int = 0

    @property
    def success(self) -> bool:
        return self.failed == 0

    def merge(self, other: "UpsertReport") -> "UpsertReport":
        return UpsertReport(
            attempted=self.attempted + other.attempted,
            successful=self.successful + other.successful,
            failed=self.failed + other.failed,
            errors=self.errors + other.errors,
            failed_batches=self.failed_batches + other.failed_batches,
            batches=self.batches + other.batches,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def chunked(records: Iterable[TypedRecord], size: int) -> Iterator[List[TypedRecord]]:
    it = iter(records)
    while True:
        batch = list(itertools.islice(it, size))
        if not batch:
            return
        yield batch


class BatchUpsertDriver:
    """Submit records to the store in ordered, fixed-size batches.

    A failed batch is recorded and skipped; the remaining batches are still
    submitted. Batch numbers keep counting across calls to ``run`` on the
    same driver. The driver waits ``delay_seconds`` between batches (not after
    the last one). In dry-run mode the store is never called and every batch
    counts as successful.
    """

    def __init__(
        self,
        store: Optional[UpsertStore],
        table: str,
        conflict_key: Sequence[str],
        logger,
        batch_size: int = 100,
        delay_seconds: float = 0.2,
        dry_run: bool = False,
        on_batch_failed: Optional[BatchFailedHook] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if store is None and not dry_run:
            raise ValueError("a store is required unless running dry")
        self.store = store
        self.table = table
        self.on_conflict = ",".join(conflict_key)
        self.logger = logger
        self.batch_size = batch_size
        self.delay_seconds = delay_seconds
        self.dry_run = dry_run
        self.on_batch_failed = on_batch_failed
        self._sleep = sleep
        self._batch_seq = 0

    async def run(self, records: Iterable[TypedRecord]) -> UpsertReport:
        report = UpsertReport()
        batches = chunked(records, self.batch_size)
        batch = next(batches, None)
        while batch is not None:
            self._batch_seq += 1
            batch_num = self._batch_seq
            report.batches += 1
            report.attempted += len(batch)
            error = await self._submit(batch)
            if error is None:
                report.successful += len(batch)
                log_json(self.logger, "batch_success", table=self.table, batch=batch_num, rows=len(batch), dry_run=self.dry_run)
            else:
                report.failed += len(batch)
                report.errors.append(error)
                report.failed_batches.append(batch_num)
                log_json(self.logger, "batch_failed", table=self.table, batch=batch_num, rows=len(batch), error=error)
                if self.on_batch_failed is not None:
                    self.on_batch_failed(batch_num, batch, error)
            batch = next(batches, None)
            if batch is not None and self.delay_seconds > 0:
                await self._sleep(self.delay_seconds)
        return report

    async def _submit(self, batch: List[TypedRecord]) -> Optional[str]:
        if self.dry_run:
            return None
        try:
            await self.store.upsert(self.table, batch, self.on_conflict)
        except UpsertError as exc:
            return str(exc)
        return None
