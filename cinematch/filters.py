"""Hard filters: drop candidates that violate a preference constraint."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cinematch.models import ContentItem, PreferenceProfile

logger = logging.getLogger(__name__)


def exclusion_reason(item: ContentItem, profile: PreferenceProfile) -> str | None:
    """Return the name of the first hard constraint *item* violates, or ``None``.

    Rules are checked in this order:

    ==============  ===================================================
    Rule            Excludes when
    ==============  ===================================================
    ``watched``     ``(id, media_type)`` is in ``watched_content``
    ``media_type``  profile is not "both" and the media type differs
    ``year``        year range set, year known and outside the range
    ``duration``    duration range set, runtime known and outside it
    ``rating``      ``min_rating`` set and ``vote_average`` below it
    ``genre``       no genre shared with ``selected_genres``
    ==============  ===================================================

    Unknown years and runtimes never exclude an item.
    """
    if item.key in profile.watched_content:
        return "watched"
    if not profile.media_type.accepts(item.media_type):
        return "media_type"
    if (
        profile.year_range is not None
        and item.release_year is not None
        and not profile.year_range.contains(item.release_year)
    ):
        return "year"
    if (
        profile.duration_range is not None
        and item.runtime_minutes is not None
        and not profile.duration_range.contains(item.runtime_minutes)
    ):
        return "duration"
    if profile.min_rating is not None and item.vote_average < profile.min_rating:
        return "rating"
    if item.genre_ids.isdisjoint(profile.selected_genres):
        return "genre"
    return None


def filter_items(
    items: Iterable[ContentItem], profile: PreferenceProfile
) -> list[ContentItem]:
    """Return the items that satisfy every hard constraint in *profile*.

    The input is not modified.  An empty result is valid.
    """
    kept: list[ContentItem] = []
    excluded: dict[str, int] = {}
    for item in items:
        reason = exclusion_reason(item, profile)
        if reason is None:
            kept.append(item)
        else:
            excluded[reason] = excluded.get(reason, 0) + 1
    if excluded:
        logger.debug("Filter kept %d item(s); excluded %s", len(kept), excluded)
    return kept
