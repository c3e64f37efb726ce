"""Tests for the icon service (end-to-end over a fake API)."""

import tempfile
from pathlib import Path

import pytest

from iconsync.client import IconifyClient
from iconsync.config import Settings
from iconsync.preferences.store import PreferenceStore
from iconsync.service import IconService, search_term_for
from iconsync.sync.managed_file import parse_existing_icons


@pytest.fixture
def workdir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def service(transport, workdir):
    settings = Settings(preferences_path=workdir / "prefs.json", icons_file=str(workdir / "icons.tsx"))
    svc = IconService(IconifyClient(transport=transport), PreferenceStore(settings.preferences_path), settings)
    yield svc
    svc.close()


# --- Sync Tests ---


def test_sync_resolves_alias_and_writes_component(service, workdir):
    result = service.sync_icon("lucide:home")
    assert result.ok
    assert result.value.component_name == "HomeIcon"
    assert not result.value.already_exists

    content = (workdir / "icons.tsx").read_text()
    assert '<path fill="currentColor" d="M3 9l9-7 9 7"/>' in content
    assert "<svg {...props}" in content
    assert parse_existing_icons(workdir / "icons.tsx") == {"lucide:home": "HomeIcon"}


def test_sync_twice_is_idempotent(service, workdir):
    service.sync_icon("lucide:home")
    before = (workdir / "icons.tsx").read_bytes()

    result = service.sync_icon("lucide:home")
    assert result.ok
    assert result.value.already_exists
    assert (workdir / "icons.tsx").read_bytes() == before


def test_sync_tracks_usage(service):
    service.sync_icon("lucide:home")
    service.sync_icon("mdi:account", flavor="vue")
    assert [h.icon_id for h in service.recent_icons()] == ["mdi:account", "lucide:home"]
    assert set(service.preferred_collections()) == {"lucide", "mdi"}


def test_sync_to_explicit_file_and_flavor(service, workdir):
    target = workdir / "lib" / "icons.ts"
    result = service.sync_icon("mdi:account", file_path=target, flavor="svelte", custom_name="UserIcon")
    assert result.value.component_name == "UserIcon"
    assert "UserIconWithClass" in target.read_text()


def test_sync_unknown_icon_is_structured_failure(service, workdir):
    result = service.sync_icon("lucide:missing")
    assert not result.ok
    assert result.error == "Icon 'lucide:missing' not found"
    assert not (workdir / "icons.tsx").exists()
    assert service.recent_icons() == []


def test_sync_invalid_id_is_structured_failure(service):
    result = service.sync_icon("no-prefix")
    assert not result.ok
    assert "prefix:name" in result.error


def test_sync_unknown_collection_is_structured_failure(service):
    result = service.sync_icon("nope:x")
    assert not result.ok


def test_sync_name_conflict_is_structured_failure(service, workdir):
    service.sync_icon("lucide:home")
    before = (workdir / "icons.tsx").read_bytes()

    result = service.sync_icon("mdi:account", custom_name="HomeIcon")
    assert not result.ok
    assert "HomeIcon" in result.error
    assert "lucide:home" in result.error
    assert (workdir / "icons.tsx").read_bytes() == before
    assert [h.icon_id for h in service.recent_icons()] == ["lucide:home"]


def test_sync_write_failure_propagates(service, workdir):
    blocker = workdir / "blocker"
    blocker.write_text("")
    with pytest.raises(OSError):
        service.sync_icon("lucide:home", file_path=blocker / "icons.tsx")


# --- Lookup Tests ---


def test_get_icon(service):
    result = service.get_icon("lucide:star", size=32)
    assert result.ok
    assert 'width="32" height="32"' in result.value.svg
    # stroke-declared polygon stays untouched
    assert '<polygon stroke="currentColor" points="12 2 15 8"/>' in result.value.svg
    assert service.recent_icons()[0].icon_id == "lucide:star"


def test_search_orders_by_learned_preferences(service):
    service.preferences.track_usage("lucide")
    service.preferences.track_usage("lucide")
    service.preferences.track_usage("ph")
    result = service.search("home")
    assert result.value.icons == ["lucide:home", "ph:house", "mdi:home", "tabler:home"]


def test_recommend_maps_use_case_and_ranks(service):
    result = service.recommend("home page link", style="outline", limit=3)
    assert result.ok
    assert result.value.search_term == "home"
    assert result.value.icons == ["lucide:home", "tabler:home", "ph:house"]


def test_search_term_falls_back_to_use_case():
    assert search_term_for("Settings button") == "settings"
    assert search_term_for("rocket") == "rocket"


def test_list_collections_filters_and_sorts(service):
    result = service.list_collections(category="general")
    assert [c.prefix for c in result.value] == ["mdi", "lucide"]
    result = service.list_collections(search="emoji")
    assert [c.prefix for c in result.value] == ["twemoji"]


def test_clear_preferences(service):
    service.get_icon("mdi:account")
    service.clear_preferences()
    assert service.recent_icons() == []
