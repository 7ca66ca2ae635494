from __future__ import annotations

from typing import Any, Dict, List, Mapping, Protocol, Sequence

import httpx

from .errors import UpsertError


class UpsertStore(Protocol):
    async def upsert(self, table: str, rows: Sequence[Mapping[str, Any]], on_conflict: str) -> None:
        """Insert or merge ``rows`` into ``table`` keyed on ``on_conflict``; raise UpsertError on failure."""


class RestUpsertStore:
    """Upserts through a PostgREST endpoint (the Supabase REST API).

    Each call is one request, so a batch either lands as a whole or the call
    raises ``UpsertError``.
    """

    def __init__(self, url: str, service_key: str, timeout_seconds: float = 60) -> None:
        self.base_url = url.rstrip("/") + "/rest/v1"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_seconds,
            headers={
                "apikey": service_key,
                "Authorization": f"Bearer {service_key}",
                "Content-Type": "application/json",
                "Prefer": "resolution=merge-duplicates,return=minimal",
            },
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def upsert(self, table: str, rows: Sequence[Mapping[str, Any]], on_conflict: str) -> None:
        payload: List[Dict[str, Any]] = [dict(r) for r in rows]
        try:
            resp = await self._client.post(f"/{table}", params={"on_conflict": on_conflict}, json=payload)
        except httpx.HTTPError as exc:
            raise UpsertError(f"{type(exc).__name__}: {exc}") from exc
        if resp.is_success:
            return
        raise UpsertError(_error_message(resp), status_code=resp.status_code)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {resp.status_code}: {resp.text[:200]}"
