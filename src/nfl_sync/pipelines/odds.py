from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterator, Mapping, Optional

import httpx

from ..logging_utils import log_json
from ..normalize import RecordAssembler
from ..sources import JSON_HEADERS, SourceResolver
from ..tables import TABLE_SPECS
from ..upsert import UpsertReport
from ..window import admit_scheduled, in_nfl_season, parse_timestamp, season_year, upcoming_window, utc_now
from .base import ASSEMBLING, FETCHING, FILTERING, PERSISTING, PipelineRun

ODDS_SCHEMA = TABLE_SPECS["nfl_odds_alternate_lines"]

PROP_TYPES = {
    "player_pass_yds_alternate": "passing_yards",
    "player_pass_tds_alternate": "passing_touchdowns",
    "player_pass_attempts_alternate": "passing_attempts",
    "player_pass_completions_alternate": "passing_completions",
    "player_pass_interceptions_alternate": "pass_interceptions",
    "player_rush_yds_alternate": "rushing_yards",
    "player_rush_attempts_alternate": "rushing_attempts",
    "player_rush_tds_alternate": "rushing_touchdowns",
    "player_rush_reception_yds_alternate": "rush_reception_yards",
    "player_reception_yds_alternate": "receiving_yards",
    "player_receptions_alternate": "receptions",
    "player_field_goals_alternate": "field_goals",
}

_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r"[^a-zA-Z0-9_\-]")


def prop_type(market_key: str) -> str:
    return PROP_TYPES.get(market_key, market_key)


def bet_type(outcome_name: Optional[str]) -> str:
    name = (outcome_name or "").lower()
    if "over" in name:
        return "over"
    if "under" in name:
        return "under"
    return "unknown"


def sanitize(value: Any) -> str:
    return _UNSAFE.sub("", _WHITESPACE.sub("_", str(value)))


def format_point(point: Any) -> str:
    # 24.0 and 24 must give the same key
    if isinstance(point, float) and point.is_integer():
        return str(int(point))
    return str(point)


def line_id(event_id: str, book_key: str, market_key: str, player: str, point: Any, outcome_name: Any) -> str:
    return "_".join(
        [str(event_id), str(book_key), str(market_key), sanitize(player), format_point(point), sanitize(outcome_name)]
    )


def flatten_event_odds(
    event: Mapping[str, Any], odds: Mapping[str, Any], sport_key: str, updated_at: str
) -> Iterator[Dict[str, Any]]:
    """Yield one raw line per bookmaker/market/outcome of an event's odds payload."""
    event_id = event.get("id")
    commence_time = event.get("commence_time")
    kickoff = parse_timestamp(commence_time)
    books = odds.get("bookmakers") if isinstance(odds, Mapping) else None
    for book in books if isinstance(books, list) else []:
        if not isinstance(book, Mapping):
            continue
        for market in book.get("markets") or []:
            if not isinstance(market, Mapping):
                continue
            market_key = market.get("key")
            for outcome in market.get("outcomes") or []:
                if not isinstance(outcome, Mapping):
                    continue
                player = outcome.get("description")
                point = outcome.get("point")
                name = outcome.get("name")
                yield {
                    "id": line_id(event_id, book.get("key"), market_key, player, point, name)
                    if player and point is not None
                    else None,
                    "event_id": event_id,
                    "sport_key": sport_key,
                    "commence_time": commence_time,
                    "home_team": event.get("home_team"),
                    "away_team": event.get("away_team"),
                    "week_number": None,
                    "season_year": season_year(kickoff) if kickoff else None,
                    "bookmaker_key": book.get("key"),
                    "bookmaker_title": book.get("title"),
                    "bookmaker_last_update": book.get("last_update"),
                    "market_key": market_key,
                    "market_name": market_key,
                    "player_name": player,
                    "prop_type": prop_type(market_key) if market_key else None,
                    "outcome_name": name,
                    # decimal odds only; the American price column stays empty
                    "outcome_price": None,
                    "decimal_price": outcome.get("price"),
                    "line_value": point,
                    "bet_type": bet_type(name),
                    "updated_at": updated_at,
                }


class AlternateLinesRun(PipelineRun):
    """Sync alternate-line player props for upcoming games from The Odds API."""

    name = "odds"

    def __init__(self, *args: Any, api_key: str, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.api_key = api_key

    async def _execute(self) -> None:
        odds = self.cfg.odds
        window = upcoming_window(self.now, int(odds["window_days"]))
        self.summary["window"] = {"start": window.start.isoformat(), "end": window.end.isoformat()}
        in_season = in_nfl_season(self.now)
        self.summary["in_season"] = in_season
        if not in_season and not (self.dry_run or self.force):
            self._skip("Outside NFL season (skipped)")
            return

        self._enter(FETCHING)
        sport_key = odds["sport_key"]
        base_url = odds["base_url"].rstrip("/")
        resolver = SourceResolver(self.client, self.logger)
        source = await resolver.resolve(
            [f"{base_url}/sports/{sport_key}/events"],
            headers=JSON_HEADERS,
            min_bytes=2,
            params={"apiKey": self.api_key},
        )
        all_events = json.loads(source.text)
        if not isinstance(all_events, list):
            raise ValueError("events feed did not return a list")

        self._enter(FILTERING)
        events = [e for e in all_events if isinstance(e, Mapping) and admit_scheduled(e.get("commence_time"), window)]
        counts = {
            "events_total": len(all_events),
            "events_in_window": len(events),
            "events_with_data": 0,
            "events_without_data": 0,
            "market_fetch_failures": 0,
        }
        self.summary["counts"] = counts
        log_json(self.logger, "events_filtered", total=len(all_events), in_window=len(events))
        if not events:
            self._finish(UpsertReport(), "No games in window")
            return

        assembler = RecordAssembler(ODDS_SCHEMA)
        driver = self._driver(odds["table"], ODDS_SCHEMA)
        total = UpsertReport()
        for event in events:
            event_lines = 0
            log_json(
                self.logger,
                "event_start",
                event_id=event.get("id"),
                matchup=f"{event.get('away_team')} @ {event.get('home_team')}",
                commence_time=event.get("commence_time"),
            )
            for market in odds["markets"]:
                self._enter(ASSEMBLING)
                payload = await self._fetch_market(base_url, sport_key, event.get("id"), market)
                if payload is None:
                    counts["market_fetch_failures"] += 1
                    continue
                raws = flatten_event_odds(event, payload, sport_key, utc_now().isoformat())
                records = list(assembler.assemble_all(raws))
                if not records:
                    log_json(self.logger, "market_empty", event_id=event.get("id"), market=market)
                    continue
                self._enter(PERSISTING)
                report = await driver.run(records)
                total = total.merge(report)
                event_lines += report.successful
                log_json(self.logger, "market_done", event_id=event.get("id"), market=market, lines=len(records))
            if event_lines > 0:
                counts["events_with_data"] += 1
            else:
                counts["events_without_data"] += 1

        counts["lines_assembled"] = assembler.assembled
        counts["rejected"] = assembler.rejected
        counts["lines_upserted"] = total.successful
        self._finish(total)

    async def _fetch_market(self, base_url: str, sport_key: str, event_id: Any, market: str) -> Optional[Dict[str, Any]]:
        odds = self.cfg.odds
        await self._sleep(float(odds["request_delay_seconds"]))
        url = f"{base_url}/sports/{sport_key}/events/{event_id}/odds"
        params = {
            "apiKey": self.api_key,
            "regions": odds["regions"],
            "markets": market,
            "bookmakers": ",".join(odds["bookmakers"]),
        }
        try:
            payload = await self.client.get_json(url, params=params, headers=JSON_HEADERS)
        except httpx.HTTPStatusError as exc:
            log_json(self.logger, "market_fetch_failed", event_id=event_id, market=market, status=exc.response.status_code)
            return None
        except (httpx.HTTPError, ValueError) as exc:
            log_json(self.logger, "market_fetch_failed", event_id=event_id, market=market, error=str(exc))
            return None
        if not isinstance(payload, dict):
            log_json(self.logger, "market_fetch_failed", event_id=event_id, market=market, error="unexpected payload")
            return None
        return payload
