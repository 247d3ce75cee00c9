"""Abstract base class for scoring components and the shared scoring context."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

import numpy as np

from cinematch.models import ContentItem, PreferenceProfile


@dataclass(frozen=True, eq=False)
class ScoringContext:
    """Request-wide inputs computed once per engine call.

    Compared and hashed by identity.

    Attributes:
        reference_year: The "current" year used for recency.  Fixing it
            keeps repeated calls reproducible.
        popularity: Sorted popularity values of the filtered pool.
    """

    reference_year: int
    popularity: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float64))

    @classmethod
    def from_items(
        cls, items: Iterable[ContentItem], reference_year: int | None = None
    ) -> ScoringContext:
        values = np.sort(np.fromiter((i.popularity for i in items), dtype=np.float64))
        return cls(
            reference_year=reference_year if reference_year is not None else date.today().year,
            popularity=values,
        )

    def popularity_percentile(self, value: float) -> float:
        """Return the mid-rank percentile of *value* within the pool, in [0, 1].

        Ties share the midpoint of their rank span, so a pool of identical
        values puts every item at 0.5.  An empty pool also yields 0.5.
        """
        n = len(self.popularity)
        if n == 0:
            return 0.5
        below = int(np.searchsorted(self.popularity, value, side="left"))
        not_above = int(np.searchsorted(self.popularity, value, side="right"))
        return (below + 0.5 * (not_above - below)) / n


class ScoringComponent(ABC):
    """Abstract base class for one independently computed scoring signal.

    Each component turns one preference dimension into a weighted amount.
    The :class:`~cinematch.scorer.Scorer` sums the amounts of all
    components and collects the labels of the positive ones as match
    reasons.

    Args:
        weight: The maximum amount this component can add.
    """

    name: str = "component"

    def __init__(self, weight: float) -> None:
        self.weight = weight

    @abstractmethod
    def contribute(
        self,
        item: ContentItem,
        profile: PreferenceProfile,
        context: ScoringContext,
    ) -> tuple[float, str | None]:
        """Return ``(amount, label)`` for *item* under *profile*.

        Args:
            item: The candidate being scored.
            profile: The user's preferences for this request.
            context: Pool-wide statistics for this request.

        Returns:
            The weighted amount (``0.0`` when the signal does not apply) and
            the reason label to show when the amount is positive.
        """
