"""Tests for attaching the template interceptor to httpx clients."""

from __future__ import annotations

import logging

import httpx
import pytest

from httpx_url_template.exceptions import TemplateSyntaxError
from httpx_url_template.hooks import (
    EXTENSION_PARAMS,
    EXTENSION_TEMPLATE,
    alog_route,
    attach,
    log_route,
    route_info,
)
from httpx_url_template.models import ExpansionOptions


def _echo(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"url": str(request.url)})


def _client(**kwargs: object) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(_echo), **kwargs)


class TestAttach:
    """Tests for the sync client adapter."""

    def test_expands_url_as_template(self) -> None:
        """A templated url should be expanded before sending."""
        client = _client()
        attach(client)
        response = client.get(
            "https://x.test/test/{id}", extensions={EXTENSION_PARAMS: {"id": 123}}
        )
        assert response.json()["url"] == "https://x.test/test/123"

    def test_records_template_on_request(self) -> None:
        """The resolved template and params should ride on the request."""
        client = _client()
        attach(client)
        response = client.get(
            "https://x.test/get{?foo,bar}",
            extensions={EXTENSION_PARAMS: {"foo": "foo1", "bar": "bar1"}},
        )
        assert str(response.request.url) == "https://x.test/get?foo=foo1&bar=bar1"
        assert response.request.extensions[EXTENSION_TEMPLATE] == "https://x.test/get{?foo,bar}"
        assert response.request.extensions[EXTENSION_PARAMS] == {"foo": "foo1", "bar": "bar1"}

    def test_explicit_template_wins(self) -> None:
        """A url_template extension should override the literal url."""
        client = _client()
        attach(client)
        response = client.get(
            "https://x.test/test2/123",
            extensions={
                EXTENSION_TEMPLATE: "https://x.test/test/{id}",
                EXTENSION_PARAMS: {"id": 7},
            },
        )
        assert response.json()["url"] == "https://x.test/test/7"

    def test_url_as_template_disabled(self) -> None:
        """With url_as_template off, the url should not be expanded."""
        client = _client()
        attach(client, ExpansionOptions(url_as_template=False))
        response = client.get("https://x.test/plain")
        assert response.json()["url"] == "https://x.test/plain"
        assert EXTENSION_TEMPLATE not in response.request.extensions

    def test_base_url_merged_after_expansion(self) -> None:
        """Relative templates should be expanded, then joined to base_url."""
        client = _client(base_url="https://x.test/api")
        attach(client)
        response = client.get("/users/{id}", extensions={EXTENSION_PARAMS: {"id": 42}})
        assert response.json()["url"] == "https://x.test/api/users/42"
        assert response.request.extensions[EXTENSION_TEMPLATE] == "/users/{id}"

    def test_transport_params_are_independent(self) -> None:
        """Transport query params should merge on top of the expanded url."""
        client = _client()
        attach(client)
        response = client.get(
            "https://x.test/status/{status}",
            params={"extra": "1"},
            extensions={EXTENSION_PARAMS: {"status": 201}},
        )
        assert response.json()["url"] == "https://x.test/status/201?extra=1"

    def test_httpx_url_left_alone(self) -> None:
        """Already-parsed httpx.URL objects should not be re-expanded."""
        client = _client()
        attach(client)
        response = client.get(httpx.URL("https://x.test/fixed"))
        assert response.json()["url"] == "https://x.test/fixed"
        assert EXTENSION_TEMPLATE not in response.request.extensions

    def test_attach_twice_transforms_once(self) -> None:
        """A second attach should not wrap build_request again."""
        client = _client()
        attach(client)
        build_request = client.build_request
        attach(client, ExpansionOptions(url_as_template=False))
        assert client.build_request is build_request

    def test_syntax_error_raised_before_sending(self) -> None:
        """A malformed template should surface from the request call."""
        sent: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return httpx.Response(200)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        attach(client)
        with pytest.raises(TemplateSyntaxError):
            client.get("https://x.test/{id")
        assert sent == []


    def test_none_param_skipped(self) -> None:
        """None values passed through extensions should expand to nothing."""
        client = _client()
        attach(client)
        response = client.get(
            "https://x.test/q{?page,size}",
            extensions={EXTENSION_PARAMS: {"page": None, "size": 20}},
        )
        assert response.json()["url"] == "https://x.test/q?size=20"


class TestRouteLogging:
    """Tests for response route info and logging hooks."""

    def test_route_info_uses_template(self) -> None:
        """route should be the template the url was built from."""
        client = _client()
        attach(client)
        response = client.get(
            "https://x.test/status/{status}", extensions={EXTENSION_PARAMS: {"status": 201}}
        )
        info = route_info(response)
        assert info.status == 200
        assert info.reason == "OK"
        assert info.url == "https://x.test/status/201"
        assert info.route == "https://x.test/status/{status}"
        assert info.route_params == {"status": 201}

    def test_route_info_falls_back_to_url(self) -> None:
        """Without a template, route should be the url itself."""
        client = _client()
        response = client.get("https://x.test/plain")
        info = route_info(response)
        assert info.route == "https://x.test/plain"
        assert info.route_params is None

    def test_log_responses_registers_hook(self, caplog: pytest.LogCaptureFixture) -> None:
        """log_responses should log each response's route at INFO."""
        client = _client()
        attach(client, log_responses=True)
        assert log_route in client.event_hooks["response"]
        with caplog.at_level(logging.INFO, logger="httpx_url_template.hooks"):
            client.get("https://x.test/items/{id}", extensions={EXTENSION_PARAMS: {"id": 3}})
        assert "route=https://x.test/items/{id}" in caplog.text


class TestAsyncClient:
    """Tests for the async client adapter."""

    @pytest.mark.asyncio
    async def test_async_client_expands(self) -> None:
        """AsyncClient requests should be expanded the same way."""
        async with httpx.AsyncClient(transport=httpx.MockTransport(_echo)) as client:
            attach(client)
            response = await client.get(
                "https://x.test/test{?foo,bar}",
                extensions={EXTENSION_PARAMS: {"foo": "foo", "bar": "bar"}},
            )
        assert response.json()["url"] == "https://x.test/test?foo=foo&bar=bar"

    @pytest.mark.asyncio
    async def test_async_client_gets_async_hook(self) -> None:
        """log_responses should register the async hook on AsyncClient."""
        async with httpx.AsyncClient(transport=httpx.MockTransport(_echo)) as client:
            attach(client, log_responses=True)
            assert alog_route in client.event_hooks["response"]
            response = await client.get(
                "https://x.test/a/{b}", extensions={EXTENSION_PARAMS: {"b": 1}}
            )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_async_syntax_error_raised_before_sending(self) -> None:
        """A malformed template should surface from AsyncClient.get."""
        sent: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return httpx.Response(200)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            attach(client)
            with pytest.raises(TemplateSyntaxError):
                await client.get("https://x.test/{id")
        assert sent == []
