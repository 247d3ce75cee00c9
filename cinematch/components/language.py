"""Language match: a binary bonus for the preferred original language."""

from __future__ import annotations

from cinematch.components.base import ScoringComponent, ScoringContext
from cinematch.models import ContentItem, PreferenceProfile


class LanguageComponent(ScoringComponent):
    name = "language"

    def contribute(
        self,
        item: ContentItem,
        profile: PreferenceProfile,
        context: ScoringContext,
    ) -> tuple[float, str | None]:
        preferred = profile.language_preference
        if not preferred or not item.original_language:
            return 0.0, None
        if item.original_language.lower() != preferred.lower():
            return 0.0, None
        return self.weight, "Matches your language"
