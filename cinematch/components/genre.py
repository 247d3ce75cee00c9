"""Genre overlap: the primary relevance signal."""

from __future__ import annotations

from cinematch.components.base import ScoringComponent, ScoringContext
from cinematch.models import ContentItem, PreferenceProfile


class GenreOverlapComponent(ScoringComponent):
    """Rewards the fraction of the user's selected genres an item carries.

    The amount is ``weight * matched / selected + step * matched``.  The
    fractional part makes an item matching two of four selected genres earn
    half the weight.  The flat *step* keeps each extra matched genre worth
    at least *step* however many genres were selected, which is what lets
    :func:`config.validate_weights` guarantee that genre-derived signals
    such as tone never reorder items by genre overlap.

    Selected genres the item lacks are not penalised beyond the missing
    credit, since selection is a logical OR.

    Args:
        weight: Credit for matching every selected genre.
        step: Flat credit per matched genre.
    """

    name = "genre"

    def __init__(self, weight: float, step: float = 0.0) -> None:
        super().__init__(weight)
        self.step = step

    def contribute(
        self,
        item: ContentItem,
        profile: PreferenceProfile,
        context: ScoringContext,
    ) -> tuple[float, str | None]:
        selected = profile.selected_genres
        matched = len(item.genre_ids & selected)
        if matched == 0:
            return 0.0, None
        amount = self.weight * matched / len(selected) + self.step * matched
        if matched == len(selected) and len(selected) > 1:
            return amount, "Matches all your genres"
        return amount, "Genre match"
