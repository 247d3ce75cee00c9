"""Shared pytest fixtures for all cinematch tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from cinematch import genres
from cinematch.components.base import ScoringContext
from cinematch.models import ContentItem, MediaType, PreferenceProfile

REFERENCE_YEAR = 2026


# ---------------------------------------------------------------------------
# Item factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_item() -> Callable[..., ContentItem]:
    """Factory for content items with neutral defaults."""

    def _make(
        item_id: int = 1,
        genre_ids: set[int] | frozenset[int] = frozenset({genres.ACTION}),
        media_type: MediaType = MediaType.MOVIE,
        **overrides: Any,
    ) -> ContentItem:
        fields: dict[str, Any] = {
            "title": f"Title {item_id}",
            "vote_average": 7.0,
            "vote_count": 500,
            "popularity": 20.0,
            "release_year": 2020,
            "original_language": "en",
            "runtime_minutes": 110,
        }
        fields.update(overrides)
        return ContentItem(
            id=item_id,
            media_type=media_type,
            genre_ids=frozenset(genre_ids),
            **fields,
        )

    return _make


@pytest.fixture
def context() -> ScoringContext:
    return ScoringContext.from_items([], reference_year=REFERENCE_YEAR)


# ---------------------------------------------------------------------------
# Scenario pool: A (Action), B (Comedy), C (Action + Comedy)
# ---------------------------------------------------------------------------


@pytest.fixture
def item_a(make_item) -> ContentItem:
    return make_item(1, {genres.ACTION}, vote_average=8.5, vote_count=500, release_year=2020)


@pytest.fixture
def item_b(make_item) -> ContentItem:
    return make_item(2, {genres.COMEDY}, vote_average=6.0, vote_count=10, release_year=2023)


@pytest.fixture
def item_c(make_item) -> ContentItem:
    return make_item(
        3, {genres.ACTION, genres.COMEDY}, vote_average=7.0, vote_count=1000, release_year=2019
    )


@pytest.fixture
def scenario_pool(item_a, item_b, item_c) -> list[ContentItem]:
    return [item_a, item_b, item_c]


@pytest.fixture
def action_comedy_profile() -> PreferenceProfile:
    return PreferenceProfile(selected_genres=frozenset({genres.ACTION, genres.COMEDY}))


# ---------------------------------------------------------------------------
# Raw catalog records
# ---------------------------------------------------------------------------


@pytest.fixture
def raw_movie() -> dict[str, Any]:
    return {
        "id": 550,
        "title": "Fight Club",
        "overview": "An insomniac office worker...",
        "genre_ids": [18, 53],
        "release_date": "1999-10-15",
        "vote_average": 8.4,
        "vote_count": 27000,
        "popularity": 61.4,
        "original_language": "en",
        "runtime": 139,
        "adult": False,
        "poster_path": "/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg",
    }


@pytest.fixture
def raw_series() -> dict[str, Any]:
    return {
        "id": 1396,
        "name": "Breaking Bad",
        "overview": "A chemistry teacher...",
        "genre_ids": [18, 80],
        "first_air_date": "2008-01-20",
        "vote_average": 8.9,
        "vote_count": 13000,
        "popularity": 300.2,
        "original_language": "EN",
        "episode_run_time": [0, 47, 58],
    }
