"""Tests for alias resolution and SVG assembly."""

import pytest

from iconsync.errors import IconNotFoundError, InvalidIconIdError
from iconsync.models import IconData, IconSetDocument
from iconsync.resolver import apply_fill, build_svg, resolve_alias, resolve_icon, svg_css_background, svg_data_uri


def _doc(**aliases) -> IconSetDocument:
    return IconSetDocument(
        prefix="test",
        icons={"c": IconData(body='<path d="M0 0"/>'), "x": IconData(body="<rect/>", width=16)},
        aliases=aliases,
        width=20,
        height=20,
    )


# --- Alias Tests ---


def test_resolve_alias_follows_chain():
    assert resolve_alias(_doc(a="b", b="c"), "a") == "c"


def test_resolve_alias_without_entry_returns_name():
    assert resolve_alias(_doc(a="b"), "x") == "x"


def test_resolve_alias_self_reference_terminates():
    assert resolve_alias(_doc(a="a"), "a") == "a"


def test_resolve_alias_cycle_stops_at_depth():
    # a -> b -> a -> ... ; 10 hops from "a" lands back on "a"
    assert resolve_alias(_doc(a="b", b="a"), "a") == "a"
    assert resolve_alias(_doc(a="b", b="a"), "a", max_depth=3) == "b"


def test_resolve_alias_depth_limit_truncates_silently():
    chain = {f"n{i}": f"n{i + 1}" for i in range(20)}
    assert resolve_alias(_doc(**chain), "n0") == "n10"


# --- Fill Tests ---


def test_fill_added_to_bare_path():
    assert apply_fill('<path d="X"/>') == '<path fill="currentColor" d="X"/>'


def test_fill_not_added_when_stroke_present():
    assert apply_fill('<path stroke="red" d="X"/>') == '<path stroke="red" d="X"/>'


def test_fill_not_added_when_fill_present():
    assert apply_fill('<circle fill="none" r="2"/>') == '<circle fill="none" r="2"/>'


def test_fill_applies_to_all_shape_elements():
    body = '<rect x="1"/><ellipse rx="2"/><polygon points="0"/><polyline points="0"/><line x1="0"/>'
    result = apply_fill(body, "#fff")
    assert result.count('fill="#fff"') == 5


def test_fill_keeps_attribute_order():
    result = apply_fill('<path d="X" opacity=".5" fill-rule="evenodd"/>', "red")
    assert result == '<path fill="red" d="X" opacity=".5" fill-rule="evenodd"/>'


def test_fill_ignores_elements_sharing_a_prefix():
    body = '<linearGradient id="g"><stop/></linearGradient>'
    assert apply_fill(body) == body


def test_fill_on_group_children_only():
    result = apply_fill('<g stroke="currentColor"><path d="X"/></g>')
    assert result == '<g stroke="currentColor"><path fill="currentColor" d="X"/></g>'


# --- SVG Tests ---


def test_build_svg_defaults():
    svg = build_svg(IconData(body='<path d="X"/>'), {})
    assert svg == (
        '<svg xmlns="http://www.w3.org/2000/svg" width="1em" height="1em" viewBox="0 0 24 24">'
        '<path fill="currentColor" d="X"/></svg>'
    )


def test_build_svg_uses_document_defaults_and_offsets():
    svg = build_svg(IconData(body="", left=2, top=3), {"width": 32, "height": 16})
    assert 'viewBox="2 3 32 16"' in svg


def test_build_svg_icon_dimensions_win():
    svg = build_svg(IconData(body="", width=10, height=12), {"width": 32, "height": 16})
    assert 'viewBox="0 0 10 12"' in svg


def test_build_svg_with_size_and_color():
    svg = build_svg(IconData(body='<path d="X"/>'), {}, size=48, color="#ff0000")
    assert 'width="48" height="48"' in svg
    assert 'fill="#ff0000"' in svg


# --- Resolve Tests ---


def test_resolve_icon_through_alias():
    icon = resolve_icon(_doc(a="c"), "test:a")
    assert icon.resolved_name == "c"
    assert icon.width == 20
    assert 'fill="currentColor"' in icon.svg


def test_resolve_icon_not_found():
    with pytest.raises(IconNotFoundError):
        resolve_icon(_doc(), "test:missing")


def test_resolve_icon_invalid_id():
    with pytest.raises(InvalidIconIdError):
        resolve_icon(_doc(), "nocolon")


# --- Encoding Tests ---


def test_svg_data_uri_encodes_like_encode_uri_component():
    svg = '<svg viewBox="0 0 24 24"><path d="M1 2"/></svg>'
    assert svg_data_uri(svg) == (
        "data:image/svg+xml,%3Csvg%20viewBox%3D%220%200%2024%2024%22%3E"
        "%3Cpath%20d%3D%22M1%202%22%2F%3E%3C%2Fsvg%3E"
    )


def test_svg_data_uri_keeps_unreserved_marks():
    assert svg_data_uri("a-b_c.d!e~f*g'h(i)") == "data:image/svg+xml,a-b_c.d!e~f*g'h(i)"


def test_svg_css_background():
    assert svg_css_background("<svg/>") == 'background-image: url("data:image/svg+xml,%3Csvg%2F%3E");'
