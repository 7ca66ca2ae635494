from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from .logging_utils import log_json, redact_params

RETRY_STATUSES = (429, 500, 502, 503, 504)


@dataclass
class HttpConfig:
    timeout_seconds: float = 60
    user_agent: str = "nfl-sync/1.0"
    retry: Dict[str, Any] = field(default_factory=dict)


class FeedClient:
    """Sequential HTTP client for the upstream feeds.

    Retries timeouts, transport errors and 429/5xx responses with bounded
    exponential backoff; any other non-200 status raises
    ``httpx.HTTPStatusError`` straight away.
    """

    def __init__(self, cfg: HttpConfig, logger=None) -> None:
        self.cfg = cfg
        self._logger = logger
        self._client = httpx.AsyncClient(
            timeout=cfg.timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": cfg.user_agent},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def get_text(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        resp = await self._get(url, params=params, headers=headers)
        return resp.text

    async def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        resp = await self._get(url, params=params, headers=headers)
        return resp.json()

    async def _get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        attempt = 0
        max_attempts = self.cfg.retry.get("max_attempts", 2)
        params = params or {}
        while True:
            attempt += 1
            self._log("http_request_start", url=url, attempt=attempt, params=redact_params(params))
            try:
                resp = await self._client.get(url, params=params, headers=headers)
            except httpx.RequestError as exc:
                # covers timeouts too
                self._log("http_error", url=url, attempt=attempt, error=type(exc).__name__)
                if attempt >= max_attempts:
                    raise
                await asyncio.sleep(self._backoff(attempt))
                continue
            if resp.status_code == 200:
                return resp
            if resp.status_code in RETRY_STATUSES:
                if attempt >= max_attempts:
                    resp.raise_for_status()
                delay = self._backoff(attempt, resp.headers.get("Retry-After"))
                self._log("http_retry", url=url, status=resp.status_code, attempt=attempt, delay=delay)
                await asyncio.sleep(delay)
                continue
            resp.raise_for_status()
            # 2xx other than 200 (e.g. 204) carries no usable feed body
            raise httpx.HTTPStatusError(
                f"Unexpected status {resp.status_code} for {url}", request=resp.request, response=resp
            )

    def _backoff(self, attempt: int, retry_after: Optional[str] = None) -> float:
        max_delay = self.cfg.retry.get("max_delay_seconds", 8)
        if retry_after:
            return min(max_delay, float(retry_after))
        return min(max_delay, self.cfg.retry.get("base_delay_seconds", 0.5) * (2 ** (attempt - 1)))

    def _log(self, msg: str, **extra: Any) -> None:
        if self._logger:
            log_json(self._logger, msg, **extra)
