"""Recency: a mild preference for newer releases."""

from __future__ import annotations

from cinematch.components.base import ScoringComponent, ScoringContext
from cinematch.models import ContentItem, PreferenceProfile


class RecencyComponent(ScoringComponent):
    """Rewards releases close to the reference year.

    Skipped entirely when the profile carries an explicit year range, since
    the hard filter already expressed the user's period preference.
    Credit falls linearly from the full weight (this year or later) to zero
    at *horizon_years* old.
    """

    name = "recency"

    def __init__(self, weight: float, horizon_years: int = 30) -> None:
        super().__init__(weight)
        self.horizon_years = horizon_years

    def contribute(
        self,
        item: ContentItem,
        profile: PreferenceProfile,
        context: ScoringContext,
    ) -> tuple[float, str | None]:
        if profile.year_range is not None or item.release_year is None:
            return 0.0, None
        if self.horizon_years <= 0:
            return 0.0, None
        age = max(0, context.reference_year - item.release_year)
        closeness = max(0.0, 1.0 - age / self.horizon_years)
        if closeness == 0.0:
            return 0.0, None
        return self.weight * closeness, "Recent release"
