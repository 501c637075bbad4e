"""Tests for version detection."""

import httpx
import pytest

from versionselect.detector import HttpVersionDetector, StaticVersionDetector
from versionselect.types import ErrorCategory, SelectorError, Version


def _root_document(number):
    return {
        "name": "node-1",
        "cluster_name": "graylog",
        "version": {"number": number, "lucene_version": "8.7.0"},
        "tagline": "You Know, for Search",
    }


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_detector_init_defaults():
    detector = HttpVersionDetector("http://localhost:9200")
    assert detector.timeout == 5.0
    assert detector.major_only is True


@pytest.mark.asyncio
async def test_static_detector_parses_text():
    assert await StaticVersionDetector("7.10.2").detect() == Version(7, 10, 2)
    assert await StaticVersionDetector(Version(8)).detect() == Version(8)


@pytest.mark.asyncio
async def test_http_detector_major_line():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json=_root_document("7.10.2"))

    async with _client(handler) as client:
        detector = HttpVersionDetector("http://es:9200/", client=client)
        version = await detector.detect()

    assert version == Version(7)
    assert seen == ["http://es:9200/"]


@pytest.mark.asyncio
async def test_http_detector_full_version():
    def handler(request):
        return httpx.Response(200, json=_root_document("2.11.1"))

    async with _client(handler) as client:
        detector = HttpVersionDetector("http://os:9200", major_only=False, client=client)
        assert await detector.detect() == Version(2, 11, 1)


@pytest.mark.asyncio
async def test_http_detector_creates_own_client(monkeypatch):
    real_client = httpx.AsyncClient
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=_root_document("8.4.0")))
    created = []

    def make_client(timeout):
        created.append(timeout)
        return real_client(timeout=timeout, transport=transport)

    monkeypatch.setattr(httpx, "AsyncClient", make_client)

    detector = HttpVersionDetector("http://es:9200", timeout=2.5)
    assert await detector.detect() == Version(8)
    assert created == [2.5]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 404, 503])
async def test_http_detector_error_status(status):
    def handler(request):
        return httpx.Response(status, text="nope")

    async with _client(handler) as client:
        detector = HttpVersionDetector("http://es:9200", client=client)
        with pytest.raises(SelectorError) as exc_info:
            await detector.detect()

    assert exc_info.value.category == ErrorCategory.DETECTION
    assert f"HTTP {status}" in exc_info.value.message


@pytest.mark.asyncio
async def test_http_detector_timeout():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with _client(handler) as client:
        detector = HttpVersionDetector("http://es:9200", client=client)
        with pytest.raises(SelectorError) as exc_info:
            await detector.detect()

    assert exc_info.value.category == ErrorCategory.DETECTION
    assert "timed out" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)


@pytest.mark.asyncio
async def test_http_detector_connection_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        detector = HttpVersionDetector("http://es:9200", client=client)
        with pytest.raises(SelectorError) as exc_info:
            await detector.detect()

    assert exc_info.value.category == ErrorCategory.DETECTION
    assert "ConnectError" in exc_info.value.message


@pytest.mark.asyncio
async def test_http_detector_non_json():
    def handler(request):
        return httpx.Response(200, text="<html>proxy</html>")

    async with _client(handler) as client:
        detector = HttpVersionDetector("http://es:9200", client=client)
        with pytest.raises(SelectorError) as exc_info:
            await detector.detect()

    assert exc_info.value.category == ErrorCategory.DETECTION
    assert exc_info.value.raw == "<html>proxy</html>"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"name": "node-1"},
        {"version": "7.10.2"},
        {"version": {"number": 7}},
        ["7.10.2"],
    ],
)
async def test_http_detector_missing_version_number(body):
    def handler(request):
        return httpx.Response(200, json=body)

    async with _client(handler) as client:
        detector = HttpVersionDetector("http://es:9200", client=client)
        with pytest.raises(SelectorError) as exc_info:
            await detector.detect()

    assert exc_info.value.category == ErrorCategory.DETECTION


@pytest.mark.asyncio
async def test_http_detector_invalid_version_number():
    def handler(request):
        return httpx.Response(200, json=_root_document("seven"))

    async with _client(handler) as client:
        detector = HttpVersionDetector("http://es:9200", client=client)
        with pytest.raises(SelectorError) as exc_info:
            await detector.detect()

    assert exc_info.value.category == ErrorCategory.DETECTION
    assert "seven" in exc_info.value.message


@pytest.mark.asyncio
async def test_http_detector_invalid_url():
    detector = HttpVersionDetector("http://[::1")

    with pytest.raises(SelectorError) as exc_info:
        await detector.detect()

    assert exc_info.value.category == ErrorCategory.DETECTION
    assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)
