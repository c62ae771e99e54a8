"""Tests for the HTTP shop proxy client."""

import json

import httpx
import pytest

from src.core.errors import PlatformSwitchError, ServerRejection, TransportFailure
from src.integrations.shop_proxy.client import HttpShopProxy


BASE_URL = "http://proxy.test"


def make_proxy(handler) -> HttpShopProxy:
    return HttpShopProxy(base_url=f"{BASE_URL}/", timeout=1.0, transport=httpx.MockTransport(handler))


class TestHealth:
    @pytest.mark.asyncio
    async def test_parses_camel_case(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/health"
            return httpx.Response(200, json={
                "status": "ok",
                "currentPlatform": "rusta",
                "cookieStatus": {"motonet": False, "rusta": True},
            })

        health = await make_proxy(handler).health()

        assert health.current_platform == "rusta"
        assert health.cookie_status == {"motonet": False, "rusta": True}

    @pytest.mark.asyncio
    async def test_error_status(self):
        proxy = make_proxy(lambda request: httpx.Response(503, json={}))
        with pytest.raises(TransportFailure, match="Server responded with status: 503"):
            await proxy.health()

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(TransportFailure, match="Connection refused"):
            await make_proxy(handler).health()

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        proxy = make_proxy(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(TransportFailure):
            await proxy.health()


class TestAddToCart:
    @pytest.mark.asyncio
    async def test_sends_camel_case_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True})

        await make_proxy(handler).add_to_cart("59-5064", 2)

        assert seen == {
            "method": "POST",
            "path": "/api/add-to-cart",
            "body": {"productId": "59-5064", "quantity": 2},
        }

    @pytest.mark.asyncio
    async def test_success_false_is_rejection(self):
        payload = {"success": False, "error": "Product not found"}
        proxy = make_proxy(lambda request: httpx.Response(200, json=payload))

        with pytest.raises(ServerRejection) as exc_info:
            await proxy.add_to_cart("59-5064", 1)

        assert str(exc_info.value) == "Product not found"
        assert exc_info.value.payload == payload

    @pytest.mark.asyncio
    async def test_error_status_without_message(self):
        proxy = make_proxy(lambda request: httpx.Response(500, json={}))
        with pytest.raises(ServerRejection, match=r"HTTP 500"):
            await proxy.add_to_cart("59-5064", 1)

    @pytest.mark.asyncio
    async def test_undecodable_answer_is_transport_failure(self):
        proxy = make_proxy(lambda request: httpx.Response(502, text="Bad gateway"))
        with pytest.raises(TransportFailure):
            await proxy.add_to_cart("59-5064", 1)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportFailure, match="timed out"):
            await make_proxy(handler).add_to_cart("59-5064", 1)


class TestPlatform:
    @pytest.mark.asyncio
    async def test_switch(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/switch-platform"
            assert json.loads(request.content) == {"platform": "rusta"}
            return httpx.Response(200, json={"success": True, "currentPlatform": "rusta"})

        assert await make_proxy(handler).switch_platform("rusta") == "rusta"

    @pytest.mark.asyncio
    async def test_switch_refused(self):
        proxy = make_proxy(lambda request: httpx.Response(400, json={"error": "Unknown platform"}))
        with pytest.raises(PlatformSwitchError, match="Failed to switch platform: 400"):
            await proxy.switch_platform("ikea")

    @pytest.mark.asyncio
    async def test_cart_url(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/cart/url"
            assert request.url.params["platform"] == "motonet"
            return httpx.Response(200, json={"cartUrl": "https://www.motonet.fi/fi/ostoskori"})

        assert await make_proxy(handler).cart_url("motonet") == "https://www.motonet.fi/fi/ostoskori"


@pytest.mark.asyncio
async def test_close_resets_client():
    proxy = make_proxy(lambda request: httpx.Response(200, json={"success": True}))
    first = proxy.client
    await proxy.close()
    assert proxy.client is not first
    await proxy.close()
