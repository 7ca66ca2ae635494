"""Tests for ordered source fallback."""

from __future__ import annotations

import httpx
import pytest

from conftest import make_feed_client
from nfl_sync.errors import AllSourcesExhausted, SourceExhausted
from nfl_sync.sources import CSV_HEADERS, SourceResolver

URLS = [
    "https://feeds.test/primary.csv",
    "https://feeds.test/alternate.csv",
    "https://feeds.test/mirror.csv",
]
BODY = "play_id,game_id\n" + "\n".join(f"{i},g" for i in range(50))


class TestSourceResolver:
    async def test_first_good_source_wins(self, logger):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, text=BODY)

        client = make_feed_client(handler)
        try:
            resolved = await SourceResolver(client, logger).resolve(URLS, headers=CSV_HEADERS, min_bytes=100)
        finally:
            await client.close()
        assert resolved.index == 0
        assert resolved.url == URLS[0]
        assert resolved.text == BODY
        assert requested == [URLS[0]]

    async def test_falls_back_past_errors_and_tiny_bodies(self, logger):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(request.url.path)
            if request.url.path == "/primary.csv":
                return httpx.Response(404, text="Not Found")
            if request.url.path == "/alternate.csv":
                return httpx.Response(200, text="<html>oops</html>")
            return httpx.Response(200, text=BODY)

        client = make_feed_client(handler)
        try:
            resolved = await SourceResolver(client, logger).resolve(URLS, min_bytes=100)
        finally:
            await client.close()
        assert resolved.index == 2
        assert requested == ["/primary.csv", "/alternate.csv", "/mirror.csv"]

    async def test_sends_feed_headers(self, logger):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, text=BODY)

        client = make_feed_client(handler)
        try:
            await SourceResolver(client, logger).resolve(URLS[:1], headers=CSV_HEADERS, min_bytes=10)
        finally:
            await client.close()
        assert seen["accept"] == CSV_HEADERS["Accept"]
        assert seen["user-agent"] == "nfl-sync-tests"

    async def test_all_sources_exhausted(self, logger):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/mirror.csv":
                raise httpx.ConnectError("unreachable")
            return httpx.Response(503)

        client = make_feed_client(handler)
        try:
            with pytest.raises(SourceExhausted) as info:
                await SourceResolver(client, logger).resolve(URLS, min_bytes=10)
        finally:
            await client.close()
        assert info.value.attempted == 3
        assert len(info.value.reasons) == 3
        assert "3 sources" in str(info.value)
        assert AllSourcesExhausted is SourceExhausted
