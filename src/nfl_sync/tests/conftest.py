"""Shared test fixtures for the nfl_sync test suite.

Provides a fake upsert store, httpx.MockTransport-backed feed clients and
small play-by-play / odds payloads shaped like the real feeds.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Sequence

import httpx
import pytest

from nfl_sync.api_client import FeedClient, HttpConfig
from nfl_sync.config import Config, build_config
from nfl_sync.errors import UpsertError

NOW = datetime(2025, 10, 2, 15, 0, tzinfo=timezone.utc)

PBP_HEADER = "play_id,game_id,game_date,desc,yards_gained,epa,pass"


# ---------------------------------------------------------------------------
# Fake AWS credentials so boto3 never reaches real AWS
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True, scope="session")
def aws_credentials():
    """Set fake AWS credentials for the entire test session."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
    yield
    for key in (
        "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_SECURITY_TOKEN",
        "AWS_SESSION_TOKEN",
        "AWS_DEFAULT_REGION",
    ):
        os.environ.pop(key, None)


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------

class FakeStore:
    """Records every upsert call; fails the calls whose 1-based number is listed."""

    def __init__(self, fail_calls: Sequence[int] = ()) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.fail_calls = set(fail_calls)

    async def upsert(self, table: str, rows: Sequence[Mapping[str, Any]], on_conflict: str) -> None:
        self.calls.append({"table": table, "rows": [dict(r) for r in rows], "on_conflict": on_conflict})
        if len(self.calls) in self.fail_calls:
            raise UpsertError(f"batch {len(self.calls)} rejected", status_code=400)

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return [row for call in self.calls for row in call["rows"]]


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def make_feed_client(handler: Callable[[httpx.Request], httpx.Response], **retry: Any) -> FeedClient:
    cfg = HttpConfig(
        timeout_seconds=5,
        user_agent="nfl-sync-tests",
        retry={"max_attempts": 1, "base_delay_seconds": 0.001, "max_delay_seconds": 0.01, **retry},
    )
    client = FeedClient(cfg)
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler), headers={"User-Agent": cfg.user_agent})
    return client


def pbp_csv(rows: Sequence[str], header: str = PBP_HEADER) -> str:
    return "\n".join([header, *rows]) + "\n"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def logger() -> logging.Logger:
    return logging.getLogger("nfl_sync.tests")


@pytest.fixture()
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture()
def no_sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture()
def sample_config() -> Config:
    """Return a Config pointing at test feed URLs with no delays."""
    return build_config({
        "http": {"retry": {"max_attempts": 1, "base_delay_seconds": 0.001, "max_delay_seconds": 0.01}},
        "store": {"batch_size": 100, "batch_delay_seconds": 0},
        "pbp": {
            "sources": [
                "https://feeds.test/primary/play_by_play_2025.csv",
                "https://feeds.test/mirror/play_by_play_2025.csv",
            ],
            "min_body_bytes": 10,
        },
        "odds": {
            "base_url": "https://odds.test/v4",
            "markets": ["player_pass_yds_alternate", "player_rush_yds_alternate"],
            "request_delay_seconds": 0,
        },
    })


@pytest.fixture()
def sample_events() -> List[Dict[str, Any]]:
    """Event list shaped like The Odds API /events response."""
    return [
        {
            "id": "evt-in-window",
            "sport_key": "americanfootball_nfl",
            "commence_time": "2025-10-05T17:00:00Z",
            "home_team": "Buffalo Bills",
            "away_team": "New England Patriots",
        },
        {
            "id": "evt-next-week",
            "sport_key": "americanfootball_nfl",
            "commence_time": "2025-10-09T00:15:00Z",
            "home_team": "New York Giants",
            "away_team": "Philadelphia Eagles",
        },
        {
            "id": "evt-no-time",
            "sport_key": "americanfootball_nfl",
            "commence_time": None,
            "home_team": "Dallas Cowboys",
            "away_team": "Chicago Bears",
        },
    ]


@pytest.fixture()
def sample_event_odds() -> Dict[str, Any]:
    """Odds payload for one event and one alternate market."""
    return {
        "id": "evt-in-window",
        "commence_time": "2025-10-05T17:00:00Z",
        "bookmakers": [
            {
                "key": "draftkings",
                "title": "DraftKings",
                "last_update": "2025-10-02T14:55:00Z",
                "markets": [
                    {
                        "key": "player_pass_yds_alternate",
                        "outcomes": [
                            {"name": "Over", "description": "Josh Allen", "price": 1.91, "point": 224.5},
                            {"name": "Under", "description": "Josh Allen", "price": 1.87, "point": 224.5},
                            {"name": "Over", "description": "Drake Maye", "price": 2.5, "point": 250.0},
                            {"name": "Over", "price": 1.5, "point": 199.5},
                        ],
                    }
                ],
            }
        ],
    }
