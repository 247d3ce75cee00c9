"""Scorer: combines the scoring components into one score plus match reasons."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import config
from cinematch.components.age_rating import AgeRatingComponent
from cinematch.components.base import ScoringComponent, ScoringContext
from cinematch.components.genre import GenreOverlapComponent
from cinematch.components.language import LanguageComponent
from cinematch.components.popularity import PopularityBandComponent
from cinematch.components.rating import RatingComponent
from cinematch.components.recency import RecencyComponent
from cinematch.components.tone import ToneComponent
from cinematch.models import ContentItem, PreferenceProfile, Recommendation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Contribution:
    """One component's share of an item's score."""

    component: str
    amount: float
    label: str | None


class Scorer:
    """Weighted sum of independent scoring components.

    Every item in a request is scored with the same components and weights,
    so scores are comparable within one engine call.  Components whose
    amount is positive contribute their label as a match reason; reasons
    are ordered by amount, largest first, with ties kept in component order.

    Args:
        components: The components to sum, in reason tie-break order.
            Defaults to :meth:`default_components`.

    Raises:
        ValueError: If the component weights break the genre-dominance rule
            (see :func:`config.validate_weights`).
    """

    def __init__(self, components: list[ScoringComponent] | None = None) -> None:
        self._components = components if components is not None else self.default_components()
        weights = {c.name: c.weight for c in self._components}
        genre = next((c for c in self._components if c.name == "genre"), None)
        if genre is None:
            raise ValueError("A genre overlap component is required")
        weights["genre_step"] = getattr(genre, "step", 0.0)
        config.validate_weights(weights)

    @staticmethod
    def default_components() -> list[ScoringComponent]:
        """Build the standard component set from :mod:`config`."""
        return [
            GenreOverlapComponent(config.GENRE_WEIGHT, step=config.GENRE_STEP_WEIGHT),
            RatingComponent(
                config.RATING_WEIGHT,
                min_votes=config.MIN_RELIABLE_VOTES,
                neutral=config.NEUTRAL_RATING,
                highly_rated=config.HIGHLY_RATED_THRESHOLD,
            ),
            PopularityBandComponent(
                config.POPULARITY_WEIGHT,
                bands=config.POPULARITY_BANDS,
                falloff=config.POPULARITY_FALLOFF,
            ),
            RecencyComponent(config.RECENCY_WEIGHT, horizon_years=config.RECENCY_HORIZON_YEARS),
            LanguageComponent(config.LANGUAGE_WEIGHT),
            ToneComponent(config.TONE_WEIGHT),
            AgeRatingComponent(config.AGE_RATING_WEIGHT),
        ]

    @property
    def components(self) -> list[ScoringComponent]:
        return list(self._components)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def contributions(
        self,
        item: ContentItem,
        profile: PreferenceProfile,
        context: ScoringContext,
    ) -> list[Contribution]:
        """Return every component's contribution for *item*, in component order."""
        return [
            Contribution(component.name, *component.contribute(item, profile, context))
            for component in self._components
        ]

    def score(
        self,
        item: ContentItem,
        profile: PreferenceProfile,
        context: ScoringContext | None = None,
    ) -> tuple[float, tuple[str, ...]]:
        """Return ``(score, reasons)`` for *item* under *profile*.

        Args:
            item: The candidate to score.
            profile: The user's preferences.
            context: Pool-wide statistics.  When omitted, the item is scored
                as if it were the only member of the pool.

        Returns:
            The summed score and the positive components' labels ordered by
            contribution, largest first.
        """
        if context is None:
            context = ScoringContext.from_items([item])
        parts = self.contributions(item, profile, context)
        total = sum(part.amount for part in parts)
        positive = [part for part in parts if part.amount > 0 and part.label]
        positive.sort(key=lambda part: part.amount, reverse=True)
        return total, tuple(part.label for part in positive)

    def recommend(
        self,
        item: ContentItem,
        profile: PreferenceProfile,
        context: ScoringContext | None = None,
    ) -> Recommendation:
        """Score *item* and wrap it as a :class:`Recommendation`."""
        total, reasons = self.score(item, profile, context)
        return Recommendation(item=item, recommendation_score=total, match_reasons=reasons)


_default_scorer: Scorer | None = None


def score(
    item: ContentItem,
    profile: PreferenceProfile,
    context: ScoringContext | None = None,
) -> tuple[float, tuple[str, ...]]:
    """Score *item* with the default component set."""
    global _default_scorer
    if _default_scorer is None:
        _default_scorer = Scorer()
    return _default_scorer.score(item, profile, context)
