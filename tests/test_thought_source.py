import httpx
import pytest

from thought_wanderer.errors import ThoughtFetchError
from thought_wanderer.speech.thought_source import HttpThoughtSource, ServiceStatus


def source_for(handler):
    return HttpThoughtSource("http://thinker.test/", transport=httpx.MockTransport(handler))


class TestFetchThought:

    @pytest.mark.asyncio
    async def test_returns_thought(self):
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path))
            return httpx.Response(200, json={"thought": "The sky is wide. I like it."})

        source = source_for(handler)
        try:
            assert await source.fetch_thought() == "The sky is wide. I like it."
        finally:
            await source.aclose()
        assert seen == [("POST", "/think")]

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        source = source_for(lambda request: httpx.Response(500, json={"error": "model not loaded"}))
        try:
            with pytest.raises(ThoughtFetchError, match="think failed"):
                await source.fetch_thought()
        finally:
            await source.aclose()

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        source = source_for(lambda request: httpx.Response(200, text="<html>oops</html>"))
        try:
            with pytest.raises(ThoughtFetchError, match="invalid JSON"):
                await source.fetch_thought()
        finally:
            await source.aclose()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"thought": ""}, {"thought": "   "}, {"thought": 42}, ["a"]])
    async def test_missing_thought_raises(self, payload):
        source = source_for(lambda request: httpx.Response(200, json=payload))
        try:
            with pytest.raises(ThoughtFetchError, match="no thought"):
                await source.fetch_thought()
        finally:
            await source.aclose()

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        source = source_for(handler)
        try:
            with pytest.raises(ThoughtFetchError) as excinfo:
                await source.fetch_thought()
        finally:
            await source.aclose()
        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


class TestCheckStatus:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload, expected", [
        ({"status": "ok", "initialized": True}, ServiceStatus(online=True, initialized=True)),
        ({"status": "ok", "initialized": False}, ServiceStatus(online=True, initialized=False)),
        ({"status": "ok"}, ServiceStatus(online=True, initialized=False)),
        ({"status": "starting"}, ServiceStatus(online=False)),
    ])
    async def test_status_payloads(self, payload, expected):
        source = source_for(lambda request: httpx.Response(200, json=payload))
        try:
            assert await source.check_status() == expected
        finally:
            await source.aclose()

    @pytest.mark.asyncio
    async def test_unreachable_server_is_offline(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        source = source_for(handler)
        try:
            status = await source.check_status()
        finally:
            await source.aclose()
        assert status == ServiceStatus(online=False)
        assert status.label == "offline"

    @pytest.mark.asyncio
    async def test_error_status_is_offline(self):
        source = source_for(lambda request: httpx.Response(503))
        try:
            assert not (await source.check_status()).online
        finally:
            await source.aclose()

    @pytest.mark.asyncio
    async def test_uses_test_endpoint(self):
        paths = []

        def handler(request):
            paths.append((request.method, request.url.path))
            return httpx.Response(200, json={"status": "ok", "initialized": True})

        source = source_for(handler)
        try:
            await source.check_status()
        finally:
            await source.aclose()
        assert paths == [("GET", "/test")]


@pytest.mark.parametrize("status, label", [
    (ServiceStatus(online=False), "offline"),
    (ServiceStatus(online=True, initialized=False), "initializing"),
    (ServiceStatus(online=True, initialized=True), "connected"),
])
def test_status_label(status, label):
    assert status.label == label
