from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .api_client import FeedClient, HttpConfig
from .archive import RunArchive
from .config import Config, get_odds_api_key, get_store_credentials, load_config
from .errors import ConfigurationMissing
from .logging_utils import log_json, setup_logging
from .pipelines import PIPELINES
from .store import RestUpsertStore


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="nfl_sync")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    parser.add_argument("--log-level", default="INFO")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("pbp", "Sync recent nflverse play-by-play rows"),
        ("odds", "Sync alternate-line player props for upcoming games"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--dry-run", "--test", dest="dry_run", action="store_true", help="Run everything but skip writes")
        cmd.add_argument("--force", action="store_true", help="Run even outside the NFL season window")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logger = setup_logging(args.log_level)
    summary = run_command(args, logger)
    print(json.dumps(summary, indent=2, default=str))
    sys.exit(0 if summary.get("success") else 1)


def run_command(args: argparse.Namespace, logger) -> Dict[str, Any]:
    mode = "dry_run" if args.dry_run else "live"
    try:
        cfg = load_config(args.config)
        store_url, store_key = get_store_credentials()
        api_key = get_odds_api_key() if args.command == "odds" else None
        return asyncio.run(_run(args, cfg, logger, store_url, store_key, api_key))
    except ConfigurationMissing as exc:
        log_json(logger, "startup_failed", pipeline=args.command, error=str(exc))
        return _startup_failure(args.command, mode, str(exc))
    except Exception as exc:
        logger.exception("startup_failed")
        return _startup_failure(args.command, mode, f"{type(exc).__name__}: {exc}")


async def _run(
    args: argparse.Namespace,
    cfg: Config,
    logger,
    store_url: str,
    store_key: str,
    api_key: Optional[str],
) -> Dict[str, Any]:
    client = FeedClient(HttpConfig(**cfg.http), logger)
    store = None
    try:
        store = RestUpsertStore(store_url, store_key, timeout_seconds=cfg.http["timeout_seconds"])
        archive = None
        if cfg.archive_bucket:
            archive = RunArchive(
                cfg.archive_bucket,
                cfg.archive["region"],
                logger,
                meta_prefix=cfg.archive["meta_prefix"],
                deadletter_prefix=cfg.archive["deadletter_prefix"],
            )
        kwargs: Dict[str, Any] = {"archive": archive, "dry_run": args.dry_run, "force": args.force}
        if args.command == "odds":
            kwargs["api_key"] = api_key
        pipeline = PIPELINES[args.command](cfg, logger, client, store, **kwargs)
        return await pipeline.run()
    finally:
        await client.close()
        if store is not None:
            await store.close()


def _startup_failure(command: str, mode: str, error: str) -> Dict[str, Any]:
    now = datetime.now(timezone.utc).isoformat()
    return {
        "pipeline": command,
        "mode": mode,
        "success": False,
        "state": "DONE(failed)",
        "error": error,
        "timestamp": now,
    }
