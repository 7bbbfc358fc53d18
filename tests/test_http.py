"""Unit tests for the Tensor HTTP client."""

import json

import httpx
import pytest

from tensor_seller.errors import ApiError, MalformedResponseError
from tensor_seller.http import TENSOR_API_KEY_HEADER, TensorHttpClient

BASE_URL = "https://tensor.test/api/v1"


def _client(handler) -> TensorHttpClient:
    return TensorHttpClient(
        BASE_URL + "/",
        "secret-key",
        async_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestRequestHeaders:
    async def test_get_sends_api_key_without_content_type(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json={"ok": True})

        result = await _client(handler).get("/user/portfolio?wallet=abc")

        request = seen["request"]
        assert result == {"ok": True}
        assert str(request.url) == f"{BASE_URL}/user/portfolio?wallet=abc"
        assert request.method == "GET"
        assert request.headers[TENSOR_API_KEY_HEADER] == "secret-key"
        assert request.headers["accept"] == "application/json"
        assert "content-type" not in request.headers

    async def test_body_adds_json_content_type(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json=[1, 2])

        result = await _client(handler).request("/echo", method="POST", body={"a": 1})

        request = seen["request"]
        assert result == [1, 2]
        assert request.method == "POST"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {"a": 1}


class TestErrors:
    async def test_non_success_status_raises_api_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, text="forbidden")

        with pytest.raises(ApiError) as excinfo:
            await _client(handler).get("/user/portfolio")

        assert excinfo.value.status_code == 403
        assert excinfo.value.body == "forbidden"
        assert "403" in str(excinfo.value)

    async def test_non_json_body_raises_malformed_response(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>")

        with pytest.raises(MalformedResponseError):
            await _client(handler).get("/user/portfolio")

    async def test_transport_failure_raises_api_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        with pytest.raises(ApiError) as excinfo:
            await _client(handler).get("/user/portfolio")

        assert excinfo.value.status_code is None
        assert "down" in str(excinfo.value)
