"""Shared fixtures: a fake Iconify API served through httpx.MockTransport."""

import json

import httpx
import pytest

ICON_SETS = {
    "lucide": {
        "prefix": "lucide",
        "width": 24,
        "height": 24,
        "icons": {
            "house": {"body": '<path d="M3 9l9-7 9 7"/>'},
            "star": {"body": '<polygon stroke="currentColor" points="12 2 15 8"/>'},
        },
        "aliases": {"home": {"parent": "house"}},
    },
    "mdi": {
        "prefix": "mdi",
        "width": 24,
        "height": 24,
        "icons": {"account": {"body": '<path d="M12 4a4 4 0 0 1 4 4"/>'}},
    },
}

SEARCH_RESULTS = ["mdi:home", "tabler:home", "lucide:home", "ph:house"]

COLLECTIONS = {
    "mdi": {"name": "Material Design Icons", "total": 7000, "license": {"title": "Apache 2.0", "spdx": "Apache-2.0"}, "category": "General"},
    "lucide": {"name": "Lucide", "total": 1500, "license": {"title": "ISC"}, "category": "General"},
    "twemoji": {"name": "Twitter Emoji", "total": 3600, "category": "Emoji"},
}


def fake_iconify(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/search":
        limit = int(request.url.params.get("limit", 32))
        prefix = request.url.params.get("prefix")
        icons = [i for i in SEARCH_RESULTS if not prefix or i.startswith(prefix + ":")][:limit]
        return httpx.Response(
            200,
            json={"icons": icons, "total": len(icons), "limit": limit, "start": 0, "collections": {"mdi": 1}},
        )
    if path == "/collections":
        return httpx.Response(200, json=COLLECTIONS)
    if path.endswith(".json"):
        prefix = path[1:-5]
        if prefix not in ICON_SETS:
            return httpx.Response(200, text="404")
        return httpx.Response(200, text=json.dumps(ICON_SETS[prefix]))
    return httpx.Response(404)


@pytest.fixture
def transport() -> httpx.MockTransport:
    return httpx.MockTransport(fake_iconify)
