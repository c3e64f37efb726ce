"""Tests for the Iconify API client."""

import httpx
import pytest

from iconsync.client import IconifyClient
from iconsync.errors import IconApiError, IconSetFormatError


def test_search_parses_response(transport):
    with IconifyClient(transport=transport) as client:
        result = client.search("home", limit=2)
    assert result.icons == ["mdi:home", "tabler:home"]
    assert result.total == 2
    assert result.limit == 2
    assert result.collections == {"mdi": 1}


def test_search_sends_filters():
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        return httpx.Response(200, json={"icons": [], "total": 0, "limit": 5, "start": 0, "collections": {}})

    with IconifyClient(transport=httpx.MockTransport(handler)) as client:
        client.search("arrow", limit=5, prefix="lucide", category="General")
    assert seen == {"query": "arrow", "limit": "5", "prefix": "lucide", "category": "General"}


def test_fetch_icon_set_builds_document(transport):
    with IconifyClient(transport=transport) as client:
        doc = client.fetch_icon_set("lucide", ["home"])
    assert doc.prefix == "lucide"
    assert doc.aliases == {"home": "house"}
    assert set(doc.icons) == {"house", "star"}
    assert doc.width == 24


def test_fetch_unknown_collection(transport):
    with IconifyClient(transport=transport) as client:
        with pytest.raises(IconSetFormatError):
            client.fetch_icon_set("nope", ["x"])


def test_http_error_raises_api_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    with IconifyClient(transport=transport) as client:
        with pytest.raises(IconApiError) as exc_info:
            client.search("home")
    assert exc_info.value.status_code == 503


def test_transport_error_raises_api_error():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    with IconifyClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(IconApiError):
            client.list_collections()


def test_list_collections(transport):
    with IconifyClient(transport=transport) as client:
        collections = client.list_collections()
    assert collections["mdi"].license == "Apache-2.0"
    assert collections["lucide"].license == "ISC"
    assert collections["twemoji"].category == "Emoji"
