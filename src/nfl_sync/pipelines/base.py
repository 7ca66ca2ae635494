from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence

from ..api_client import FeedClient
from ..archive import RunArchive
from ..config import Config
from ..errors import SourceExhausted
from ..logging_utils import log_json
from ..normalize import TableSpec, TypedRecord
from ..store import UpsertStore
from ..upsert import BatchUpsertDriver, UpsertReport
from ..window import utc_now

FETCHING = "FETCHING"
PARSING = "PARSING"
FILTERING = "FILTERING"
ASSEMBLING = "ASSEMBLING"
PERSISTING = "PERSISTING"
DONE = "DONE"
SKIPPED = "DONE(skipped)"
FAILED = "DONE(failed)"


def new_run_id() -> str:
    return uuid.uuid4().hex


class PipelineRun:
    """One run of a feed pipeline, from fetch to the final summary.

    Subclasses implement ``_execute``. Source exhaustion and any unexpected
    exception end the run as failed; the summary is always produced.
    """

    name = "pipeline"

    def __init__(
        self,
        cfg: Config,
        logger: logging.Logger,
        client: FeedClient,
        store: Optional[UpsertStore],
        archive: Optional[RunArchive] = None,
        dry_run: bool = False,
        force: bool = False,
        now: Optional[datetime] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.cfg = cfg
        self.logger = logger
        self.client = client
        self.store = store
        self.archive = archive
        self.dry_run = dry_run
        self.force = force
        self.now = now or utc_now()
        self._sleep = sleep
        self.run_id = new_run_id()
        self.state = FETCHING
        self.summary: Dict[str, Any] = {
            "pipeline": self.name,
            "run_id": self.run_id,
            "mode": "dry_run" if dry_run else "live",
            "started_at": utc_now().isoformat(),
        }

    async def run(self) -> Dict[str, Any]:
        try:
            await self._execute()
        except SourceExhausted as exc:
            self._fail(str(exc), reasons=exc.reasons)
        except Exception as exc:
            self.logger.exception("unexpected_error")
            self._fail(f"{type(exc).__name__}: {exc}")
        self.summary["state"] = self.state
        self.summary["finished_at"] = utc_now().isoformat()
        self.summary["timestamp"] = self.summary["finished_at"]
        log_json(self.logger, "run_finished", pipeline=self.name, state=self.state, success=self.summary.get("success"))
        if self.archive is not None:
            self.archive.put_summary(self.name, self.summary)
        return self.summary

    async def _execute(self) -> None:
        raise NotImplementedError

    def _enter(self, state: str) -> None:
        if state == self.state:
            return
        self.state = state
        log_json(self.logger, "state", pipeline=self.name, state=state)

    def _skip(self, message: str) -> None:
        self._enter(SKIPPED)
        self.summary.update({"success": True, "skipped": True, "message": message})

    def _finish(self, report: UpsertReport, message: str = "Completed") -> None:
        self._enter(DONE)
        self.summary["upsert"] = report.to_dict()
        self.summary["success"] = report.success
        self.summary["message"] = message if report.success else f"{len(report.failed_batches)} batch(es) failed"

    def _fail(self, error: str, **extra: Any) -> None:
        log_json(self.logger, "run_failed", level=logging.ERROR, pipeline=self.name, state=self.state, error=error)
        self.state = FAILED
        self.summary.update({"success": False, "error": error, **extra})

    def _driver(self, table: str, spec: TableSpec) -> BatchUpsertDriver:
        return BatchUpsertDriver(
            self.store,
            table,
            spec.conflict_key,
            self.logger,
            batch_size=self.cfg.batch_size,
            delay_seconds=self.cfg.batch_delay_seconds,
            dry_run=self.dry_run,
            on_batch_failed=self._archive_failed_batch(table),
            sleep=self._sleep,
        )

    def _archive_failed_batch(self, table: str):
        if self.archive is None:
            return None
        archive = self.archive
        run_id = self.run_id

        def _hook(batch_num: int, rows: Sequence[TypedRecord], error: str) -> None:
            archive.put_failed_batch(table, run_id, batch_num, rows, error)

        return _hook
