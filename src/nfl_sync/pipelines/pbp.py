from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator

from ..csv_parser import ParseStats, RawRecord, iter_records
from ..logging_utils import log_json
from ..normalize import RecordAssembler
from ..sources import CSV_HEADERS, SourceResolver
from ..tables import TABLE_SPECS
from ..window import SeasonWindow, TimeWindow, admit_recent, recency_window
from .base import ASSEMBLING, FETCHING, FILTERING, PARSING, PERSISTING, PipelineRun

PBP_SCHEMA = TABLE_SPECS["nflfastr_pbp"]


class PlayByPlayRun(PipelineRun):
    """Sync recent nflverse play-by-play rows into the ``nflfastr_pbp`` table."""

    name = "pbp"

    async def _execute(self) -> None:
        pbp = self.cfg.pbp
        start, end = self.cfg.pbp_season
        season = SeasonWindow(start, end)
        in_season = season.contains(self.now)
        self.summary["in_season"] = in_season
        if not in_season and not (self.dry_run or self.force):
            log_json(self.logger, "outside_season", start=start.isoformat(), end=end.isoformat())
            self._skip("Outside NFL season - sync skipped")
            return

        self._enter(FETCHING)
        resolver = SourceResolver(self.client, self.logger)
        source = await resolver.resolve(
            self.cfg.pbp_sources,
            headers=CSV_HEADERS,
            min_bytes=int(pbp["min_body_bytes"]),
        )
        self.summary["source"] = {"index": source.index, "url": source.url, "size": len(source.text)}

        self._enter(PARSING)
        stats = ParseStats()
        raws = iter_records(source.text, stats)

        self._enter(FILTERING)
        window = recency_window(self.now, int(pbp["recency_days"]))
        counts = {"admitted": 0, "filtered_out": 0}
        admitted = _filter(raws, pbp["timestamp_column"], window, counts)

        self._enter(ASSEMBLING)
        assembler = RecordAssembler(PBP_SCHEMA)
        records = list(assembler.assemble_all(admitted))
        self.summary["counts"] = _counts(stats, counts, assembler)
        log_json(self.logger, "assembled", pipeline=self.name, **self.summary["counts"])

        self._enter(PERSISTING)
        driver = self._driver(pbp["table"], PBP_SCHEMA)
        report = await driver.run(records)
        message = "Completed" if records else "No recent plays found"
        self._finish(report, message)


def _filter(raws: Iterable[RawRecord], column: str, window: TimeWindow, counts: Dict[str, int]) -> Iterator[RawRecord]:
    for raw in raws:
        if admit_recent(raw, column, window):
            counts["admitted"] += 1
            yield raw
        else:
            counts["filtered_out"] += 1


def _counts(stats: ParseStats, counts: Dict[str, int], assembler: RecordAssembler) -> Dict[str, Any]:
    return {
        "lines": stats.lines,
        "parsed": stats.records,
        "malformed": stats.malformed,
        "filtered_out": counts["filtered_out"],
        "admitted": counts["admitted"],
        "rejected": assembler.rejected,
        "records": assembler.assembled,
    }
