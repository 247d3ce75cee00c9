"""Rating quality with a vote-count reliability damper."""

from __future__ import annotations

from cinematch.components.base import ScoringComponent, ScoringContext
from cinematch.models import ContentItem, PreferenceProfile


class RatingComponent(ScoringComponent):
    """Rewards ratings above the neutral midpoint.

    Averages backed by fewer than *min_votes* votes are blended linearly
    toward *neutral*: an item with 10 of the required 100 votes keeps 10%
    of its distance from the midpoint.  The effective rating is then scaled
    so that *neutral* earns nothing and 10.0 earns the full weight.

    Args:
        weight: Maximum contribution.
        min_votes: Vote count at which the average is trusted as-is.
        neutral: Midpoint rating that earns no credit.
        highly_rated: Effective rating from which the label reads
            "Highly rated" instead of "Well rated".
    """

    name = "rating"

    def __init__(
        self,
        weight: float,
        min_votes: int = 100,
        neutral: float = 5.0,
        highly_rated: float = 7.5,
    ) -> None:
        super().__init__(weight)
        self.min_votes = min_votes
        self.neutral = neutral
        self.highly_rated = highly_rated

    def effective_rating(self, item: ContentItem) -> float:
        """Return the vote-count damped rating for *item*."""
        if self.min_votes <= 0 or item.vote_count >= self.min_votes:
            return item.vote_average
        trust = item.vote_count / self.min_votes
        return trust * item.vote_average + (1.0 - trust) * self.neutral

    def contribute(
        self,
        item: ContentItem,
        profile: PreferenceProfile,
        context: ScoringContext,
    ) -> tuple[float, str | None]:
        rating = self.effective_rating(item)
        span = 10.0 - self.neutral
        if span <= 0 or rating <= self.neutral:
            return 0.0, None
        scaled = min(1.0, (rating - self.neutral) / span)
        label = "Highly rated" if rating >= self.highly_rated else "Well rated"
        return self.weight * scaled, label
