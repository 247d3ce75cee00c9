"""Age rating: nudges results toward the requested audience."""

from __future__ import annotations

from cinematch.components.base import ScoringComponent, ScoringContext
from cinematch.genres import FAMILY_GENRES
from cinematch.models import AgeRating, ContentItem, PreferenceProfile


class AgeRatingComponent(ScoringComponent):
    """Soft audience-suitability signal.

    =========  ==================================================
    Profile    Effect
    =========  ==================================================
    family     +weight for family genres, -weight for adult items
    teen       -weight for adult items
    adult      none
    =========  ==================================================

    Penalties lower the score but never exclude an item and produce no
    match reason.
    """

    name = "age_rating"

    def __init__(self, weight: float, family_genres: frozenset[int] = FAMILY_GENRES) -> None:
        super().__init__(weight)
        self.family_genres = family_genres

    def contribute(
        self,
        item: ContentItem,
        profile: PreferenceProfile,
        context: ScoringContext,
    ) -> tuple[float, str | None]:
        rating = profile.age_rating
        if rating is None or rating is AgeRating.ADULT:
            return 0.0, None
        if item.adult:
            return -self.weight, None
        if rating is AgeRating.FAMILY and not item.genre_ids.isdisjoint(self.family_genres):
            return self.weight, "Family friendly"
        return 0.0, None
