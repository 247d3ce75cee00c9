"""Catalog genre codes and the tone → genre lookup tables.

Codes follow the TMDb genre list.  Series use a few combined codes
(e.g. "Action & Adventure") that are listed alongside the movie codes so
one table serves both media types.
"""

from __future__ import annotations

from cinematch.models import EmotionalTone

ACTION = 28
ADVENTURE = 12
ANIMATION = 16
COMEDY = 35
CRIME = 80
DOCUMENTARY = 99
DRAMA = 18
FAMILY = 10751
FANTASY = 14
HISTORY = 36
HORROR = 27
MUSIC = 10402
MYSTERY = 9648
ROMANCE = 10749
SCIENCE_FICTION = 878
TV_MOVIE = 10770
THRILLER = 53
WAR = 10752
WESTERN = 37

# Series-only codes
ACTION_ADVENTURE = 10759
KIDS = 10762
NEWS = 10763
REALITY = 10764
SCI_FI_FANTASY = 10765
SOAP = 10766
TALK = 10767
WAR_POLITICS = 10768

GENRE_NAMES: dict[int, str] = {
    ACTION: "Action",
    ADVENTURE: "Adventure",
    ANIMATION: "Animation",
    COMEDY: "Comedy",
    CRIME: "Crime",
    DOCUMENTARY: "Documentary",
    DRAMA: "Drama",
    FAMILY: "Family",
    FANTASY: "Fantasy",
    HISTORY: "History",
    HORROR: "Horror",
    MUSIC: "Music",
    MYSTERY: "Mystery",
    ROMANCE: "Romance",
    SCIENCE_FICTION: "Science Fiction",
    TV_MOVIE: "TV Movie",
    THRILLER: "Thriller",
    WAR: "War",
    WESTERN: "Western",
    ACTION_ADVENTURE: "Action & Adventure",
    KIDS: "Kids",
    NEWS: "News",
    REALITY: "Reality",
    SCI_FI_FANTASY: "Sci-Fi & Fantasy",
    SOAP: "Soap",
    TALK: "Talk",
    WAR_POLITICS: "War & Politics",
}

# Genres that tend to carry each emotional tone.  Tune here, not in the scorer.
TONE_GENRES: dict[EmotionalTone, frozenset[int]] = {
    EmotionalTone.LIGHT: frozenset({COMEDY, FAMILY, ANIMATION, MUSIC, KIDS}),
    EmotionalTone.UPLIFTING: frozenset({COMEDY, FAMILY, ANIMATION, MUSIC, ROMANCE}),
    EmotionalTone.DARK: frozenset({HORROR, CRIME, MYSTERY, THRILLER}),
    EmotionalTone.INTENSE: frozenset(
        {THRILLER, HORROR, WAR, ACTION, ACTION_ADVENTURE, WAR_POLITICS}
    ),
    EmotionalTone.THOUGHTFUL: frozenset({DRAMA, DOCUMENTARY, HISTORY, SCIENCE_FICTION}),
    EmotionalTone.ROMANTIC: frozenset({ROMANCE, DRAMA, SOAP}),
}

# Genres considered safe for a family audience.
FAMILY_GENRES: frozenset[int] = frozenset({FAMILY, ANIMATION, KIDS})


def genre_name(genre_id: int) -> str:
    """Return the display name for *genre_id*, or ``"Unknown"``."""
    return GENRE_NAMES.get(genre_id, "Unknown")
