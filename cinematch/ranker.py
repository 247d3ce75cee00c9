"""Ranker: orders scored recommendations and provides secondary views."""

from __future__ import annotations

from collections.abc import Iterable

from cinematch.models import Recommendation, SortKey


def _ranking_key(rec: Recommendation) -> tuple[float, int, int, str]:
    item = rec.item
    return (-rec.recommendation_score, -item.vote_count, item.id, item.media_type.value)


def rank(
    scored: Iterable[Recommendation], limit: int | None = None
) -> list[Recommendation]:
    """Return *scored* in ranking order, truncated to *limit*.

    Order is score descending, then vote count descending, then id
    ascending (media type breaks the last tie between a movie and a series
    sharing an id), so the output is fully determined by the input.

    Args:
        scored: Scored recommendations.
        limit: Maximum number to return.  ``None`` returns all; zero or a
            negative number returns none.

    Returns:
        A new list.
    """
    if limit is not None and limit <= 0:
        return []
    ordered = sorted(scored, key=_ranking_key)
    return ordered if limit is None else ordered[:limit]


def sort_recommendations(
    recommendations: Iterable[Recommendation], key: SortKey | str = SortKey.SCORE
) -> list[Recommendation]:
    """Re-sort already-scored recommendations for display.

    ===============  ============================================
    Key              Order
    ===============  ============================================
    ``score``        ranking order (see :func:`rank`)
    ``rating``       raw ``vote_average`` descending
    ``popularity``   raw ``popularity`` descending
    ``year``         ``release_year`` descending, unknown last
    ===============  ============================================

    Secondary views are stable, so items that tie keep their ranking order.

    Raises:
        ValueError: If *key* names no sort key.
    """
    key = SortKey(key)
    ranked = rank(recommendations)
    if key is SortKey.RATING:
        return sorted(ranked, key=lambda r: r.item.vote_average, reverse=True)
    if key is SortKey.POPULARITY:
        return sorted(ranked, key=lambda r: r.item.popularity, reverse=True)
    if key is SortKey.YEAR:
        return sorted(
            ranked,
            key=lambda r: (r.item.release_year is None, -(r.item.release_year or 0)),
        )
    return ranked
