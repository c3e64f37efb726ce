"""Ordering of candidate icon lists by preferred collection."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable, Literal, Sequence

from iconsync.models import icon_prefix

Style = Literal["solid", "outline", "any"]

STYLE_DEFAULTS: dict[str, list[str]] = {
    "solid": ["mdi", "fa-solid"],
    "outline": ["lucide", "tabler", "ph"],
    "any": ["lucide", "mdi", "heroicons"],
}


def _rank_comparator(preferred: Sequence[str]):
    ranks: dict[str, int] = {}
    for i, prefix in enumerate(preferred):
        ranks.setdefault(prefix, i)

    def compare(a: str, b: str) -> int:
        rank_a = ranks.get(icon_prefix(a))
        rank_b = ranks.get(icon_prefix(b))
        if rank_a is not None and rank_b is not None:
            return rank_a - rank_b
        if rank_a is not None:
            return -1
        if rank_b is not None:
            return 1
        return 0

    return cmp_to_key(compare)


def sort_by_preferred_collections(
    icons: Iterable[str],
    style: Style = "any",
    learned_preferences: Sequence[str] = (),
) -> list[str]:
    """Order *icons* by learned preferences first, then the style's defaults.

    Icons from unranked collections keep their relative order.
    """
    combined = list(dict.fromkeys([*learned_preferences, *STYLE_DEFAULTS.get(style, STYLE_DEFAULTS["any"])]))
    return sorted(icons, key=_rank_comparator(combined))


def sort_by_learned_preferences(icons: Sequence[str], learned_preferences: Sequence[str]) -> Sequence[str]:
    if not learned_preferences:
        return icons
    return sorted(icons, key=_rank_comparator(list(learned_preferences)))
