"""Tests for the S3 run archive using moto mock S3."""

from __future__ import annotations

import gzip
import json

import boto3
import pytest
from moto import mock_aws

from nfl_sync.archive import RunArchive, make_part_key


@pytest.fixture()
def archive(logger):
    """Create RunArchive backed by moto mock S3."""
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket="nfl-sync-runs")
        yield RunArchive("nfl-sync-runs", "us-east-1", logger), client


class TestRunArchive:
    def test_put_summary(self, archive):
        run_archive, client = archive
        key = run_archive.put_summary("pbp", {"run_id": "abc123", "success": True})
        assert key == "meta/pbp/run_id=abc123.json"
        body = client.get_object(Bucket="nfl-sync-runs", Key=key)["Body"].read()
        assert json.loads(body) == {"run_id": "abc123", "success": True}

    def test_put_failed_batch(self, archive):
        run_archive, client = archive
        rows = [{"play_id": 1, "game_id": "g"}, {"play_id": 2, "game_id": "g"}]
        key = run_archive.put_failed_batch("nflfastr_pbp", "abcdef123456", 3, rows, "bad row")
        assert key.startswith("deadletter/nflfastr_pbp/ingested_at=")
        assert key.endswith("part-abcdef12-00003.json.gz")
        body = gzip.decompress(client.get_object(Bucket="nfl-sync-runs", Key=key)["Body"].read())
        lines = [json.loads(line) for line in body.decode("utf-8").strip().split("\n")]
        assert lines[0]["_error"] == "bad row"
        assert lines[1:] == rows

    def test_missing_bucket_is_not_fatal(self, logger):
        with mock_aws():
            run_archive = RunArchive("no-such-bucket", "us-east-1", logger)
            assert run_archive.put_summary("odds", {"run_id": "x"}) is None


def test_make_part_key():
    assert make_part_key("/meta/", "pbp", "run_id=1.json") == "meta/pbp/run_id=1.json"
