"""Tests for the PostgREST upsert adapter using httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from nfl_sync.errors import UpsertError
from nfl_sync.store import RestUpsertStore


def _store(handler) -> RestUpsertStore:
    store = RestUpsertStore("https://project.supabase.test/", "service-key")
    store._client = httpx.AsyncClient(
        base_url=store.base_url,
        headers=dict(store._client.headers),
        transport=httpx.MockTransport(handler),
    )
    return store


class TestRestUpsertStore:
    async def test_upsert_request_shape(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["on_conflict"] = request.url.params.get("on_conflict")
            seen["prefer"] = request.headers.get("Prefer")
            seen["apikey"] = request.headers.get("apikey")
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(201)

        store = _store(handler)
        try:
            await store.upsert("nflfastr_pbp", [{"play_id": 1, "game_id": "g", "epa": None}], "play_id,game_id")
        finally:
            await store.close()

        assert seen["method"] == "POST"
        assert seen["path"] == "/rest/v1/nflfastr_pbp"
        assert seen["on_conflict"] == "play_id,game_id"
        assert "resolution=merge-duplicates" in seen["prefer"]
        assert seen["apikey"] == "service-key"
        assert seen["auth"] == "Bearer service-key"
        assert seen["body"] == [{"play_id": 1, "game_id": "g", "epa": None}]

    async def test_error_response_raises_with_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"code": "22P02", "message": "invalid input syntax for type integer"})

        store = _store(handler)
        try:
            with pytest.raises(UpsertError, match="invalid input syntax") as info:
                await store.upsert("nflfastr_pbp", [{"play_id": 1}], "play_id,game_id")
        finally:
            await store.close()
        assert info.value.status_code == 400

    async def test_transport_error_raises_upsert_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        store = _store(handler)
        try:
            with pytest.raises(UpsertError, match="ConnectError"):
                await store.upsert("nflfastr_pbp", [{"play_id": 1}], "play_id,game_id")
        finally:
            await store.close()
