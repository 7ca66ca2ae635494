from __future__ import annotations

import gzip
import io
import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .logging_utils import log_json


def make_part_key(prefix: str, *parts: str) -> str:
    return "/".join([prefix.strip("/")] + [p.strip("/") for p in parts])


class RunArchive:
    """Keeps run summaries and failed upsert batches in S3.

    Failed batches are written as gzipped JSON lines so they can be replayed
    against the store later. Archive errors are logged and swallowed; they
    never change the outcome of a run.
    """

    def __init__(
        self,
        bucket: str,
        region: str,
        logger,
        meta_prefix: str = "meta",
        deadletter_prefix: str = "deadletter",
    ) -> None:
        self.bucket = bucket
        self.logger = logger
        self.meta_prefix = meta_prefix
        self.deadletter_prefix = deadletter_prefix
        self._client = boto3.client("s3", region_name=region)

    def put_summary(self, pipeline: str, summary: Mapping[str, Any]) -> Optional[str]:
        key = make_part_key(self.meta_prefix, pipeline, f"run_id={summary['run_id']}.json")
        body = json.dumps(summary, default=str).encode("utf-8")
        return self._put(key, body)

    def put_failed_batch(
        self, table: str, run_id: str, batch_num: int, rows: Sequence[Mapping[str, Any]], error: str
    ) -> Optional[str]:
        ingested_at = datetime.now(timezone.utc).date().isoformat()
        key = make_part_key(
            self.deadletter_prefix,
            table,
            f"ingested_at={ingested_at}",
            f"part-{run_id[:8]}-{batch_num:05d}.json.gz",
        )
        header = {"_error": error, "_batch": batch_num, "_run_id": run_id}
        return self._put(key, _json_lines_gz([header] + [dict(r) for r in rows]))

    def _put(self, key: str, body: bytes) -> Optional[str]:
        try:
            self._client.put_object(Bucket=self.bucket, Key=key, Body=body)
        except (BotoCoreError, ClientError) as exc:
            log_json(self.logger, "archive_failed", bucket=self.bucket, key=key, error=str(exc))
            return None
        log_json(self.logger, "archive_written", bucket=self.bucket, key=key)
        return key


def _json_lines_gz(records: Iterable[Dict[str, Any]]) -> bytes:
    buf = io.BytesIO()
    with gzip.GzipFile(fileobj=buf, mode="wb") as gz:
        for rec in records:
            gz.write(json.dumps(rec, default=str).encode("utf-8") + b"\n")
    return buf.getvalue()
