"""
Bookmarks API — Middleware Tests
=================================

What:  Request id propagation and access-log levels.
"""

import logging

import pytest

from bookmark_api.middleware.logging import level_for_status
from bookmark_api.middleware.request_id import MAX_CLIENT_ID_LENGTH

from conftest import BOOKMARKS_URL


@pytest.mark.parametrize("status_code, level", [
    (200, logging.INFO),
    (204, logging.INFO),
    (401, logging.WARNING),
    (404, logging.WARNING),
    (500, logging.ERROR),
])
def test_level_for_status(status_code, level):
    assert level_for_status(status_code) == level


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client, auth_headers):
        response = await test_client.get(BOOKMARKS_URL, headers=auth_headers)

        rid = response.headers["x-request-id"]
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_client_id_is_echoed(self, test_client, auth_headers):
        response = await test_client.get(
            BOOKMARKS_URL, headers={**auth_headers, "X-Request-ID": "trace-abc"}
        )
        assert response.headers["x-request-id"] == "trace-abc"

    @pytest.mark.asyncio
    async def test_long_client_id_is_truncated(self, test_client, auth_headers):
        response = await test_client.get(
            BOOKMARKS_URL, headers={**auth_headers, "X-Request-ID": "x" * 500}
        )
        assert response.headers["x-request-id"] == "x" * MAX_CLIENT_ID_LENGTH

    @pytest.mark.asyncio
    async def test_present_on_401(self, test_client):
        response = await test_client.get(BOOKMARKS_URL)

        assert response.status_code == 401
        assert response.headers["x-request-id"]


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_unauthorized_request_logged_without_token(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="bookmark_api.access"):
            await test_client.get(
                BOOKMARKS_URL, headers={"Authorization": "Bearer leaked-secret"}
            )

        records = [r for r in caplog.records if r.name == "bookmark_api.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert records[0].status == 401
        assert "leaked-secret" not in caplog.text
