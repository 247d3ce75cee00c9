"""Tests for cinematch.scorer."""

from __future__ import annotations

import pytest

from cinematch import genres
from cinematch.components.age_rating import AgeRatingComponent
from cinematch.components.base import ScoringContext
from cinematch.components.genre import GenreOverlapComponent
from cinematch.components.language import LanguageComponent
from cinematch.components.rating import RatingComponent
from cinematch.components.recency import RecencyComponent
from cinematch.components.tone import ToneComponent
from cinematch.models import AgeRating, EmotionalTone, PopularityLevel, PreferenceProfile
from cinematch.scorer import Scorer, score


@pytest.fixture
def scorer() -> Scorer:
    return Scorer()


class TestConstruction:
    def test_default_components(self, scorer) -> None:
        names = [c.name for c in scorer.components]
        assert names == ["genre", "rating", "popularity", "recency", "language", "tone", "age_rating"]

    def test_requires_genre_component(self) -> None:
        with pytest.raises(ValueError):
            Scorer([RatingComponent(10.0)])

    def test_rejects_soft_weight_above_genre(self) -> None:
        with pytest.raises(ValueError):
            Scorer([GenreOverlapComponent(10.0), LanguageComponent(20.0)])

    def test_rejects_genre_step_not_above_genre_derived_weights(self) -> None:
        with pytest.raises(ValueError, match="genre_step"):
            Scorer(
                [
                    GenreOverlapComponent(50.0, step=16.0),
                    ToneComponent(10.0),
                    AgeRatingComponent(6.0),
                ]
            )

    def test_genre_step_not_needed_without_genre_derived_signals(self) -> None:
        Scorer([GenreOverlapComponent(50.0), LanguageComponent(8.0)])


class TestScore:
    def test_reasons_sorted_by_contribution(self, scorer, make_item, context) -> None:
        profile = PreferenceProfile(
            selected_genres=frozenset({genres.ACTION}), language_preference="en"
        )
        item = make_item(1, {genres.ACTION}, vote_average=9.0, release_year=2020)
        total, reasons = scorer.score(item, profile, context)
        # genre 50 + 20 step, rating 24, language 8, recency 4
        assert reasons == ("Genre match", "Highly rated", "Matches your language", "Recent release")
        assert total == pytest.approx(106.0)

    def test_zero_components_emit_no_label(self, scorer, make_item, context) -> None:
        profile = PreferenceProfile(selected_genres=frozenset({genres.ACTION}))
        item = make_item(1, {genres.ACTION}, vote_average=4.0, release_year=1900)
        total, reasons = scorer.score(item, profile, context)
        assert reasons == ("Genre match",)
        assert total == pytest.approx(70.0)

    def test_negative_contribution_lowers_score_without_label(self, make_item, context) -> None:
        scorer = Scorer([GenreOverlapComponent(50.0, step=10.0), AgeRatingComponent(6.0)])
        profile = PreferenceProfile(
            selected_genres=frozenset({genres.ACTION}), age_rating=AgeRating.FAMILY
        )
        total, reasons = scorer.score(make_item(1, adult=True), profile, context)
        assert total == pytest.approx(54.0)
        assert reasons == ("Genre match",)

    def test_equal_contributions_keep_component_order(self, make_item, context) -> None:
        scorer = Scorer([GenreOverlapComponent(8.0), LanguageComponent(7.9), RecencyComponent(7.9)])
        profile = PreferenceProfile(
            selected_genres=frozenset({genres.ACTION}), language_preference="en"
        )
        _, reasons = scorer.score(make_item(1, release_year=2026), profile, context)
        assert reasons == ("Genre match", "Matches your language", "Recent release")

    def test_without_context(self, scorer, make_item) -> None:
        profile = PreferenceProfile(
            selected_genres=frozenset({genres.ACTION}),
            popularity_level=PopularityLevel.MAINSTREAM,
        )
        total, reasons = scorer.score(make_item(1), profile)
        assert total > 0
        assert "Popular pick" in reasons

    def test_module_level_score(self, make_item, context) -> None:
        profile = PreferenceProfile(selected_genres=frozenset({genres.ACTION}))
        assert score(make_item(1), profile, context) == Scorer().score(make_item(1), profile, context)


class TestOrderingContract:
    def test_genre_overlap_dominates_every_soft_signal(self, scorer, make_item) -> None:
        """A one-genre lead outweighs a rival that wins every soft signal."""
        profile = PreferenceProfile(
            selected_genres=frozenset({genres.ACTION}),
            language_preference="ko",
            emotional_tone=EmotionalTone.LIGHT,
            popularity_level=PopularityLevel.BLOCKBUSTER,
        )
        genre_fit = make_item(
            1, {genres.ACTION}, vote_average=5.0, release_year=1950,
            original_language="en", popularity=1.0,
        )
        soft_fit = make_item(
            2, {genres.COMEDY}, vote_average=5.0, release_year=2026,
            original_language="ko", popularity=100.0,
        )
        ctx = ScoringContext.from_items([genre_fit, soft_fit], reference_year=2026)
        genre_score, _ = scorer.score(genre_fit, profile, ctx)
        soft_score, _ = scorer.score(soft_fit, profile, ctx)
        assert genre_score > soft_score

    def test_rating_is_monotonic_in_vote_average(self, scorer, make_item, context) -> None:
        profile = PreferenceProfile(selected_genres=frozenset({genres.ACTION}))
        scores = [
            scorer.score(make_item(1, vote_average=v / 4, vote_count=1000), profile, context)[0]
            for v in range(0, 41)
        ]
        assert scores == sorted(scores)

    def test_extra_genre_beats_tone_with_many_selected_genres(self, scorer, make_item) -> None:
        profile = PreferenceProfile(
            selected_genres=frozenset(
                {genres.ACTION, genres.COMEDY, genres.HORROR, genres.DRAMA, genres.WAR, genres.WESTERN}
            ),
            emotional_tone=EmotionalTone.LIGHT,
        )
        light_single = make_item(1, {genres.COMEDY})
        dark_double = make_item(2, {genres.ACTION, genres.HORROR})
        ctx = ScoringContext.from_items([light_single, dark_double], reference_year=2026)
        light_score, light_reasons = scorer.score(light_single, profile, ctx)
        dark_score, _ = scorer.score(dark_double, profile, ctx)
        assert "Fits a light mood" in light_reasons
        assert dark_score > light_score

    @pytest.mark.parametrize("matched", [1, 2, 3, 4])
    @pytest.mark.parametrize("padding", [0, 1, 3])
    def test_more_genre_overlap_always_scores_higher(
        self, scorer, make_item, matched, padding
    ) -> None:
        """Soft signals at their maximum never close a one-genre gap."""
        tone_and_family = [genres.COMEDY, genres.FAMILY, genres.ANIMATION, genres.MUSIC]
        uncorrelated = [genres.ACTION, genres.HORROR, genres.WAR, genres.CRIME, genres.THRILLER]
        unmatched = [genres.WESTERN, genres.DOCUMENTARY, genres.HISTORY]

        soft_fit_genres = frozenset(tone_and_family[:matched])
        overlap_genres = frozenset(uncorrelated[: matched + 1])
        profile = PreferenceProfile(
            selected_genres=soft_fit_genres | overlap_genres | frozenset(unmatched[:padding]),
            emotional_tone=EmotionalTone.LIGHT,
            age_rating=AgeRating.FAMILY,
            popularity_level=PopularityLevel.MAINSTREAM,
            language_preference="en",
        )
        soft_fit = make_item(1, soft_fit_genres)
        overlap = make_item(2, overlap_genres)
        ctx = ScoringContext.from_items([soft_fit, overlap], reference_year=2026)

        soft_score, _ = scorer.score(soft_fit, profile, ctx)
        overlap_score, _ = scorer.score(overlap, profile, ctx)
        assert overlap_score > soft_score
