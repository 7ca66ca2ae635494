from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .errors import ConfigurationMissing

DEFAULTS: Dict[str, Any] = {
    "http": {
        "timeout_seconds": 60,
        "user_agent": "nfl-sync/1.0",
        "retry": {
            "max_attempts": 2,
            "base_delay_seconds": 0.5,
            "max_delay_seconds": 8,
        },
    },
    "store": {
        "batch_size": 100,
        "batch_delay_seconds": 0.2,
    },
    "pbp": {
        "table": "nflfastr_pbp",
        "sources": [],
        "min_body_bytes": 10000,
        "recency_days": 7,
        "timestamp_column": "game_date",
        "season": {"start": "2025-09-04", "end": "2026-02-15"},
    },
    "odds": {
        "table": "nfl_odds_alternate_lines",
        "base_url": "https://api.the-odds-api.com/v4",
        "sport_key": "americanfootball_nfl",
        "regions": "us",
        "bookmakers": ["draftkings", "fanduel"],
        "markets": [],
        "window_days": 4,
        "request_delay_seconds": 0.4,
    },
    "archive": {
        "bucket": None,
        "region": "us-east-1",
        "meta_prefix": "meta",
        "deadletter_prefix": "deadletter",
    },
}


@dataclass
class Config:
    raw: Dict[str, Any]

    @property
    def http(self) -> Dict[str, Any]:
        return self.raw["http"]

    @property
    def store(self) -> Dict[str, Any]:
        return self.raw["store"]

    @property
    def pbp(self) -> Dict[str, Any]:
        return self.raw["pbp"]

    @property
    def odds(self) -> Dict[str, Any]:
        return self.raw["odds"]

    @property
    def archive(self) -> Dict[str, Any]:
        return self.raw["archive"]

    @property
    def batch_size(self) -> int:
        return int(self.store["batch_size"])

    @property
    def batch_delay_seconds(self) -> float:
        return float(self.store["batch_delay_seconds"])

    @property
    def pbp_sources(self) -> List[str]:
        return list(self.pbp["sources"])

    @property
    def pbp_season(self) -> Tuple[date, date]:
        season = self.pbp["season"]
        return _as_date(season["start"]), _as_date(season["end"])

    @property
    def archive_bucket(self) -> Optional[str]:
        return self.archive.get("bucket") or None


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def _as_date(value: Any) -> date:
    # yaml.safe_load already turns bare ISO dates into date objects
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def build_config(raw: Optional[Dict[str, Any]] = None) -> Config:
    cfg = Config(_merge(DEFAULTS, raw or {}))
    if cfg.batch_size <= 0:
        raise ValueError("store.batch_size must be a positive integer")
    if cfg.batch_delay_seconds < 0:
        raise ValueError("store.batch_delay_seconds must be >= 0")
    if float(cfg.odds["request_delay_seconds"]) < 0:
        raise ValueError("odds.request_delay_seconds must be >= 0")
    start, end = cfg.pbp_season
    if end < start:
        raise ValueError("pbp.season.end must be >= pbp.season.start")
    return cfg


def load_config(path: str = "config.yaml") -> Config:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    cfg = build_config(raw)
    if not cfg.pbp_sources:
        raise ValueError("pbp.sources must list at least one feed URL")
    if not cfg.odds["markets"]:
        raise ValueError("odds.markets must list at least one market")
    return cfg


def get_store_credentials() -> Tuple[str, str]:
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    missing = [name for name, value in (("SUPABASE_URL", url), ("SUPABASE_SERVICE_ROLE_KEY", key)) if not value]
    if missing:
        raise ConfigurationMissing(missing)
    return url, key


def get_odds_api_key() -> str:
    key = os.getenv("ODDS_API_KEY")
    if not key:
        raise ConfigurationMissing(["ODDS_API_KEY"])
    return key
