"""Tone: maps an emotional tone onto the genres that usually carry it."""

from __future__ import annotations

from cinematch.components.base import ScoringComponent, ScoringContext
from cinematch.genres import TONE_GENRES
from cinematch.models import ContentItem, EmotionalTone, PreferenceProfile


class ToneComponent(ScoringComponent):
    """Rewards the share of an item's genres that correlate with the chosen tone.

    Tone is not a catalog field, so it is inferred from genres through a
    lookup table (:data:`cinematch.genres.TONE_GENRES` by default).  A pure
    comedy under "light" earns the full weight; an action-comedy earns half.

    Args:
        weight: Maximum contribution.
        tone_genres: Genre codes per tone.
    """

    name = "tone"

    def __init__(
        self,
        weight: float,
        tone_genres: dict[EmotionalTone, frozenset[int]] | None = None,
    ) -> None:
        super().__init__(weight)
        self.tone_genres = tone_genres if tone_genres is not None else TONE_GENRES

    def contribute(
        self,
        item: ContentItem,
        profile: PreferenceProfile,
        context: ScoringContext,
    ) -> tuple[float, str | None]:
        tone = profile.emotional_tone
        if tone is None or not item.genre_ids:
            return 0.0, None
        correlated = self.tone_genres.get(tone, frozenset())
        matched = len(item.genre_ids & correlated)
        if matched == 0:
            return 0.0, None
        share = matched / len(item.genre_ids)
        article = "an" if tone.value[0] in "aeiou" else "a"
        return self.weight * share, f"Fits {article} {tone.value} mood"
