"""Tests for the Swift error hierarchy and its XML rendering."""

import pytest
from httpx import ASGITransport, AsyncClient

from mockswift.errors import (
    ContainerNotEmpty,
    InternalError,
    InvalidURI,
    NoSuchAccount,
    NoSuchContainer,
    NoSuchKey,
    SwiftError,
)
from mockswift.handlers.account import AccountHandler
from mockswift.xml_utils import render_error


class TestErrorStatus:
    @pytest.mark.parametrize(
        "cls, status",
        [
            (InvalidURI, 404),
            (NoSuchAccount, 404),
            (NoSuchContainer, 404),
            (NoSuchKey, 404),
            (ContainerNotEmpty, 409),
        ],
    )
    def test_http_status(self, cls, status):
        exc = cls()
        assert isinstance(exc, SwiftError)
        assert exc.http_status == status

    def test_container_not_empty_code(self):
        assert ContainerNotEmpty().code == "Conflict"


class TestRenderError:
    def test_fields(self):
        body = render_error("NoSuchKey", "The specified key does not exist.", "/v1/AUTH_t/c/o", "tx1")
        assert body.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert "<Code>NoSuchKey</Code>" in body
        assert "<Resource>/v1/AUTH_t/c/o</Resource>" in body
        assert "<RequestId>tx1</RequestId>" in body

    def test_escapes_markup(self):
        body = render_error("BadRequest", "a < b & c", "/x")
        assert "a &lt; b &amp; c" in body


class TestUnexpectedException:
    @pytest.fixture
    def broken_app(self, app, monkeypatch):
        def boom(self, request, resource, body):
            raise RuntimeError("boom")

        monkeypatch.setattr(AccountHandler, "get", boom)
        monkeypatch.setattr(AccountHandler, "head", boom)
        return app

    async def _request(self, app, method: str):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            return await ac.request(method, "/v1/AUTH_test")

    async def test_rendered_as_internal_error(self, broken_app):
        resp = await self._request(broken_app, "GET")
        assert resp.status_code == 500
        assert "<Code>InternalError</Code>" in resp.text
        assert f"<Message>{InternalError().message}</Message>" in resp.text

    async def test_head_has_no_body(self, broken_app):
        resp = await self._request(broken_app, "HEAD")
        assert resp.status_code == 500
        assert resp.content == b""

    def test_internal_error_status(self):
        assert InternalError().http_status == 500
        assert InternalError().code == "InternalError"
