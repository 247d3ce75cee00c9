"""Recommendation engine: runs the normalize → filter → score → rank pipeline."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from concurrent import futures
from typing import Any

import config
from cinematch.components.base import ScoringContext
from cinematch.filters import filter_items
from cinematch.models import ContentItem, PreferenceProfile, Recommendation
from cinematch.normalizer import normalize_pool
from cinematch.ranker import rank
from cinematch.scorer import Scorer

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """Turns a candidate pool and a preference profile into ranked recommendations.

    Pipeline:

    ============  =====================================================
    Stage         Work
    ============  =====================================================
    Normalize     raw catalog records → :class:`ContentItem`, dedup
    Filter        drop watched items and hard-constraint violations
    Score         weighted components → score + match reasons
    Rank          sort with deterministic tie-breaks, truncate
    ============  =====================================================

    The engine holds no per-request state, so one instance can serve
    concurrent requests from several threads.

    **Parallel scoring**: when *max_workers* is above 1, pools of at least
    *parallel_threshold* items are scored on a thread pool.  The built-in
    components are pure Python and hold the GIL, so this does not make them
    faster; it is there for custom components that release the GIL.
    Output is identical to sequential scoring.

    Args:
        scorer: The :class:`~cinematch.scorer.Scorer`.  Defaults to the
            configured component set.
        max_workers: Threads used for parallel scoring; ``1`` disables it.
        parallel_threshold: Minimum filtered pool size for parallel scoring.
    """

    def __init__(
        self,
        scorer: Scorer | None = None,
        max_workers: int = config.SCORING_MAX_WORKERS,
        parallel_threshold: int = config.PARALLEL_SCORING_THRESHOLD,
    ) -> None:
        self._scorer = scorer if scorer is not None else Scorer()
        self._max_workers = max_workers
        self._parallel_threshold = parallel_threshold

    def generate_recommendations(
        self,
        content_pool: Iterable[ContentItem | dict[str, Any]],
        preferences: PreferenceProfile,
        limit: int | None = None,
        reference_year: int | None = None,
    ) -> list[Recommendation]:
        """Return up to *limit* recommendations for *preferences*, best first.

        Args:
            content_pool: Candidate titles, as :class:`ContentItem` objects
                or raw catalog records (normalized here).  May be empty.
            preferences: The user's preference profile.
            limit: Maximum number of results.  ``None`` returns every match;
                zero or negative returns an empty list.
            reference_year: Year used as "now" for recency.  Defaults to the
                current calendar year.

        Returns:
            Ranked recommendations; empty when nothing survives filtering.

        Raises:
            ValueError: If *preferences* is missing or selects no genres.
        """
        if preferences is None:
            raise ValueError("preferences must be provided")
        if not preferences.selected_genres:
            raise ValueError("preferences must select at least one genre")
        if limit is not None and limit <= 0:
            return []

        start = time.monotonic()
        pool = normalize_pool(content_pool)
        candidates = filter_items(pool, preferences)
        if not candidates:
            logger.debug("No candidates left after filtering %d item(s).", len(pool))
            return []

        context = ScoringContext.from_items(candidates, reference_year=reference_year)
        scored = self._score_all(candidates, preferences, context)
        ranked = rank(scored, limit)

        logger.debug(
            "Ranked %d of %d candidate(s) from a pool of %d in %.1fms",
            len(ranked),
            len(candidates),
            len(pool),
            (time.monotonic() - start) * 1000,
        )
        return ranked

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _score_all(
        self,
        candidates: list[ContentItem],
        preferences: PreferenceProfile,
        context: ScoringContext,
    ) -> list[Recommendation]:
        """Score every candidate, on a thread pool when the pool is large."""
        if self._max_workers <= 1 or len(candidates) < self._parallel_threshold:
            return [self._scorer.recommend(item, preferences, context) for item in candidates]

        with futures.ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            return list(
                executor.map(
                    lambda item: self._scorer.recommend(item, preferences, context),
                    candidates,
                )
            )


_default_engine: RecommendationEngine | None = None


def generate_recommendations(
    content_pool: Iterable[ContentItem | dict[str, Any]],
    preferences: PreferenceProfile,
    limit: int | None = None,
    reference_year: int | None = None,
) -> list[Recommendation]:
    """Run :meth:`RecommendationEngine.generate_recommendations` on a shared default engine."""
    global _default_engine
    if _default_engine is None:
        _default_engine = RecommendationEngine()
    return _default_engine.generate_recommendations(
        content_pool, preferences, limit=limit, reference_year=reference_year
    )
