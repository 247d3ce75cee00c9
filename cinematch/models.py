"""Core domain dataclasses shared across all cinematch modules."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class MediaType(str, Enum):
    """Kind of catalog title."""

    MOVIE = "movie"
    SERIES = "series"

    @classmethod
    def parse(cls, value: Any) -> MediaType:
        """Return the member for *value*, accepting the catalog's ``"tv"`` spelling.

        Raises:
            ValueError: If *value* names no media type.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if text == "tv":
            return cls.SERIES
        return cls(text)


class MediaPreference(str, Enum):
    """Which media types a user wants to see."""

    MOVIE = "movie"
    SERIES = "series"
    BOTH = "both"

    @classmethod
    def parse(cls, value: Any) -> MediaPreference:
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.BOTH
        text = str(value).strip().lower()
        if text == "tv":
            return cls.SERIES
        return cls(text)

    def accepts(self, media_type: MediaType) -> bool:
        return self is MediaPreference.BOTH or self.value == media_type.value


class EmotionalTone(str, Enum):
    """Mood the user is in the mood for; a soft scoring signal."""

    LIGHT = "light"
    DARK = "dark"
    UPLIFTING = "uplifting"
    INTENSE = "intense"
    THOUGHTFUL = "thoughtful"
    ROMANTIC = "romantic"


class PopularityLevel(str, Enum):
    """Target popularity band; a soft scoring signal."""

    NICHE = "niche"
    MAINSTREAM = "mainstream"
    BLOCKBUSTER = "blockbuster"


class AgeRating(str, Enum):
    """Audience suitability the user asked for; a soft scoring signal."""

    FAMILY = "family"
    TEEN = "teen"
    ADULT = "adult"


class SortKey(str, Enum):
    """Secondary views over an already-ranked recommendation list."""

    SCORE = "score"
    RATING = "rating"
    POPULARITY = "popularity"
    YEAR = "year"


@dataclass(frozen=True)
class Range:
    """Inclusive numeric bounds.  Either bound may be ``None`` (open-ended).

    Raises:
        ValueError: If both bounds are set and ``min > max``.
    """

    min: float | None = None
    max: float | None = None

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"Range minimum {self.min!r} exceeds maximum {self.max!r}")

    def contains(self, value: float) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Range | None:
        """Build a range from ``{"min": ..., "max": ...}``; ``None`` if both are unset."""
        if not data:
            return None
        low = data.get("min")
        high = data.get("max")
        if low is None and high is None:
            return None
        return cls(
            min=float(low) if low is not None else None,
            max=float(high) if high is not None else None,
        )


@dataclass(frozen=True)
class ContentItem:
    """A single normalized catalog title.

    Attributes:
        id: Catalog identifier, unique within a media type.
        media_type: Movie or series.
        title: Display name.
        overview: Plot summary; may be empty.
        genre_ids: Catalog genre codes (see :mod:`cinematch.genres`).
        release_year: Year of release or first air date; ``None`` if unknown.
        vote_average: Mean user rating in [0, 10].
        vote_count: Number of votes behind :attr:`vote_average`.
        popularity: Catalog-provided relative popularity metric.
        original_language: ISO 639-1 code, lower-cased; may be empty.
        runtime_minutes: Feature or episode length; ``None`` if unknown.
        adult: The catalog's adult-content flag.
        poster_path: Catalog image path, passed through for display.
    """

    id: int
    media_type: MediaType
    title: str
    overview: str = ""
    genre_ids: frozenset[int] = field(default_factory=frozenset)
    release_year: int | None = None
    vote_average: float = 0.0
    vote_count: int = 0
    popularity: float = 0.0
    original_language: str = ""
    runtime_minutes: int | None = None
    adult: bool = False
    poster_path: str | None = None

    @property
    def key(self) -> tuple[int, MediaType]:
        """Identity key: ``(id, media_type)``."""
        return (self.id, self.media_type)


@dataclass(frozen=True)
class PreferenceProfile:
    """What the user asked for in one recommendation request.

    Hard constraints (``media_type``, ``selected_genres``, ``year_range``,
    ``duration_range``, ``min_rating``, ``watched_content``) exclude items;
    the remaining fields only shift the ranking.

    Raises:
        ValueError: If ``selected_genres`` is empty.
    """

    selected_genres: frozenset[int]
    media_type: MediaPreference = MediaPreference.BOTH
    year_range: Range | None = None
    duration_range: Range | None = None
    min_rating: float | None = None
    emotional_tone: EmotionalTone | None = None
    language_preference: str | None = None
    popularity_level: PopularityLevel | None = None
    age_rating: AgeRating | None = None
    watched_content: frozenset[tuple[int, MediaType]] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.selected_genres:
            raise ValueError("selected_genres must contain at least one genre")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PreferenceProfile:
        """Build a profile from the preference store's JSON document.

        Keys are the camelCase names the browser persists.  Watched entries
        are stored as whole catalog items, so their media type may be keyed
        either ``mediaType`` or ``media_type``.  Missing optional fields mean
        "no constraint".  Unknown values for soft signals are dropped with a
        warning rather than rejected.

        Args:
            data: The preference document.

        Returns:
            A validated :class:`PreferenceProfile`.

        Raises:
            ValueError: If *data* is empty, has no selected genres, names an
                unknown media type, or holds a malformed range.
        """
        if not data:
            raise ValueError("preferences must be provided")

        genres = frozenset(int(g) for g in data.get("selectedGenres") or [])

        watched: set[tuple[int, MediaType]] = set()
        for entry in data.get("watchedContent") or []:
            try:
                kind = entry.get("mediaType") or entry.get("media_type")
                watched.add((int(entry["id"]), MediaType.parse(kind)))
            except (AttributeError, KeyError, TypeError, ValueError):
                logger.warning("Ignoring malformed watched entry %r", entry)

        min_rating = data.get("minRating")
        language = data.get("languagePreference") or None

        return cls(
            selected_genres=genres,
            media_type=MediaPreference.parse(data.get("mediaType")),
            year_range=Range.from_dict(data.get("yearRange")),
            duration_range=Range.from_dict(
                data.get("durationRange") or data.get("duration")
            ),
            min_rating=float(min_rating) if min_rating is not None else None,
            emotional_tone=_optional_enum(EmotionalTone, data.get("emotionalTone")),
            language_preference=language.lower() if language else None,
            popularity_level=_optional_enum(PopularityLevel, data.get("popularityLevel")),
            age_rating=_optional_enum(AgeRating, data.get("ageRating")),
            watched_content=frozenset(watched),
        )


@dataclass(frozen=True)
class Recommendation:
    """A scored candidate, ready for display.

    Attributes:
        item: The recommended title.
        recommendation_score: Weighted match score; only comparable within
            one engine call.
        match_reasons: Short labels, most important first.
    """

    item: ContentItem
    recommendation_score: float
    match_reasons: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Render the catalog-like display shape consumed by the UI."""
        item = self.item
        return {
            "id": item.id,
            "mediaType": item.media_type.value,
            "title": item.title,
            "overview": item.overview,
            "genreIds": sorted(item.genre_ids),
            "releaseYear": item.release_year,
            "voteAverage": item.vote_average,
            "voteCount": item.vote_count,
            "popularity": item.popularity,
            "originalLanguage": item.original_language,
            "runtimeMinutes": item.runtime_minutes,
            "posterPath": item.poster_path,
            "recommendationScore": self.recommendation_score,
            "matchReasons": list(self.match_reasons),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Recommendation:
        """Inverse of :meth:`to_dict`, used when a client sends back a ranked list.

        Raises:
            ValueError: If ``id`` or ``mediaType`` is missing or invalid.
        """
        try:
            item_id = int(data["id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Recommendation has no valid id: {data!r}") from exc
        year = data.get("releaseYear")
        runtime = data.get("runtimeMinutes")
        item = ContentItem(
            id=item_id,
            media_type=MediaType.parse(data.get("mediaType")),
            title=str(data.get("title") or ""),
            overview=str(data.get("overview") or ""),
            genre_ids=frozenset(int(g) for g in data.get("genreIds") or []),
            release_year=int(year) if year is not None else None,
            vote_average=float(data.get("voteAverage") or 0.0),
            vote_count=int(data.get("voteCount") or 0),
            popularity=float(data.get("popularity") or 0.0),
            original_language=str(data.get("originalLanguage") or ""),
            runtime_minutes=int(runtime) if runtime is not None else None,
            poster_path=data.get("posterPath"),
        )
        return cls(
            item=item,
            recommendation_score=float(data.get("recommendationScore") or 0.0),
            match_reasons=tuple(data.get("matchReasons") or ()),
        )


def _optional_enum(enum_cls: type[Enum], value: Any) -> Any:
    if value is None or value == "":
        return None
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        logger.warning("Ignoring unknown %s value %r", enum_cls.__name__, value)
        return None
