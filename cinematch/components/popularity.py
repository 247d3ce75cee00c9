"""Popularity band: biases toward niche or mainstream titles without filtering."""

from __future__ import annotations

from cinematch.components.base import ScoringComponent, ScoringContext
from cinematch.models import ContentItem, PopularityLevel, PreferenceProfile

_LABELS = {
    PopularityLevel.NICHE: "Hidden gem",
    PopularityLevel.MAINSTREAM: "Popular pick",
    PopularityLevel.BLOCKBUSTER: "Blockbuster hit",
}


class PopularityBandComponent(ScoringComponent):
    """Rewards items whose pool percentile falls in the requested band.

    Popularity is compared as a percentile within the current pool rather
    than as a raw catalog number, since raw values drift over time and
    differ between movies and series.  Items inside the band get the full
    weight; outside it, credit drops linearly to zero at *falloff*
    percentile points from the nearest band edge.

    Args:
        weight: Maximum contribution.
        bands: ``(low, high)`` percentile bounds keyed by level value.
        falloff: Distance outside the band at which credit reaches zero.
    """

    name = "popularity"

    def __init__(
        self,
        weight: float,
        bands: dict[str, tuple[float, float]],
        falloff: float = 0.5,
    ) -> None:
        super().__init__(weight)
        self.bands = bands
        self.falloff = falloff

    def contribute(
        self,
        item: ContentItem,
        profile: PreferenceProfile,
        context: ScoringContext,
    ) -> tuple[float, str | None]:
        level = profile.popularity_level
        if level is None or level.value not in self.bands:
            return 0.0, None
        low, high = self.bands[level.value]
        percentile = context.popularity_percentile(item.popularity)
        distance = max(low - percentile, percentile - high, 0.0)
        if self.falloff <= 0:
            closeness = 1.0 if distance == 0.0 else 0.0
        else:
            closeness = max(0.0, 1.0 - distance / self.falloff)
        if closeness == 0.0:
            return 0.0, None
        return self.weight * closeness, _LABELS[level]
