"""
Tests for GoogleOAuthClient using httpx.MockTransport.
"""

import httpx
import pytest

from connectors.google import GoogleOAuthClient

_URL = "https://google.test/oauth2/v2/userinfo"


def _client(handler) -> GoogleOAuthClient:
    return GoogleOAuthClient(userinfo_url=_URL, timeout=1.0, transport=httpx.MockTransport(handler))


class TestVerifyToken:
    @pytest.mark.asyncio
    async def test_valid_token_returns_profile(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["fields"] = request.url.params["fields"]
            return httpx.Response(200, json={"id": "42", "email": "gina@gmail.com", "name": "Gina"})

        user = await _client(handler).verify_token("ya29.token")

        assert user.id == "42"
        assert user.email == "gina@gmail.com"
        assert user.name == "Gina"
        assert seen == {"auth": "Bearer ya29.token", "fields": "id,email,name"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", "   ", None])
    async def test_blank_token_raises(self, token):
        client = _client(lambda request: httpx.Response(200))
        with pytest.raises(ValueError):
            await client.verify_token(token)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 500])
    async def test_non_200_returns_none(self, status):
        client = _client(lambda request: httpx.Response(status, json={"error": "invalid_token"}))
        assert await client.verify_token("bad") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [{"email": "gina@gmail.com"}, {"id": "42"}, {"id": "", "email": "gina@gmail.com"}],
    )
    async def test_incomplete_payload_returns_none(self, payload):
        client = _client(lambda request: httpx.Response(200, json=payload))
        assert await client.verify_token("tok") is None

    @pytest.mark.asyncio
    async def test_non_json_body_returns_none(self):
        client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        assert await client.verify_token("tok") is None

    @pytest.mark.asyncio
    async def test_transport_error_returns_none(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        assert await _client(handler).verify_token("tok") is None
