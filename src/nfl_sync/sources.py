from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import httpx

from .api_client import FeedClient
from .errors import SourceExhausted
from .logging_utils import log_json

CSV_HEADERS = {"Accept": "text/csv,application/csv,text/plain"}
JSON_HEADERS = {"Accept": "application/json"}


@dataclass
class ResolvedSource:
    text: str
    index: int
    url: str


class SourceResolver:
    """Try candidate feed URLs in order and keep the first plausible body.

    A candidate counts only when the request succeeds and the body is at
    least ``min_bytes`` characters long; error pages served with a 200 are
    usually tiny.
    """

    def __init__(self, client: FeedClient, logger) -> None:
        self.client = client
        self.logger = logger

    async def resolve(
        self,
        urls: Sequence[str],
        headers: Optional[Dict[str, str]] = None,
        min_bytes: int = 10000,
        params: Optional[Dict[str, str]] = None,
    ) -> ResolvedSource:
        reasons: List[str] = []
        total = len(urls)
        for index, url in enumerate(urls):
            log_json(self.logger, "source_attempt", source=index + 1, total=total, url=url)
            try:
                text = await self.client.get_text(url, params=params, headers=headers)
            except httpx.HTTPStatusError as exc:
                reason = f"status {exc.response.status_code}"
                reasons.append(reason)
                log_json(self.logger, "source_failed", source=index + 1, url=url, reason=reason)
                continue
            except httpx.HTTPError as exc:
                reason = f"{type(exc).__name__}: {exc}"
                reasons.append(reason)
                log_json(self.logger, "source_failed", source=index + 1, url=url, reason=reason)
                continue
            size = len(text or "")
            if size < min_bytes:
                reason = f"body too small ({size} < {min_bytes})"
                reasons.append(reason)
                log_json(self.logger, "source_failed", source=index + 1, url=url, reason=reason)
                continue
            log_json(self.logger, "source_resolved", source=index + 1, url=url, size=size)
            return ResolvedSource(text=text, index=index, url=url)
        raise SourceExhausted(total, reasons)
