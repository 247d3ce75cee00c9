"""Application configuration driven by environment variables.

All settings have sensible defaults for local development.  Scoring weights
and thresholds are read once at import time; pass explicit values to
:class:`~cinematch.scorer.Scorer` to override them per engine instance.
"""

import os

# ---------------------------------------------------------------------------
# gRPC server (the browser backend connects to us on this address)
# ---------------------------------------------------------------------------

GRPC_SERVER_HOST: str = os.getenv("GRPC_SERVER_HOST", "0.0.0.0")
GRPC_SERVER_PORT: int = int(os.getenv("GRPC_SERVER_PORT", "50051"))

# Thread pool size for the gRPC server.  Each concurrent RPC occupies one
# thread, so this caps concurrent request handling.
GRPC_MAX_WORKERS: int = int(os.getenv("GRPC_MAX_WORKERS", "10"))

# Warn when a single GenerateRecommendations call takes longer than this.
RECOMMENDATION_WARN_THRESHOLD_MS: int = int(
    os.getenv("RECOMMENDATION_WARN_THRESHOLD_MS", "250")
)

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# ---------------------------------------------------------------------------
# Recommendation engine
# ---------------------------------------------------------------------------

DEFAULT_RECOMMENDATION_LIMIT: int = int(
    os.getenv("DEFAULT_RECOMMENDATION_LIMIT", "50")
)

# Component weights.  GENRE_WEIGHT must stay strictly larger than every
# other weight, and GENRE_STEP_WEIGHT (credit per matched genre) strictly
# larger than the genre-derived signals combined (see validate_weights).
GENRE_WEIGHT: float = float(os.getenv("GENRE_WEIGHT", "50"))
GENRE_STEP_WEIGHT: float = float(os.getenv("GENRE_STEP_WEIGHT", "20"))
RATING_WEIGHT: float = float(os.getenv("RATING_WEIGHT", "30"))
POPULARITY_WEIGHT: float = float(os.getenv("POPULARITY_WEIGHT", "10"))
RECENCY_WEIGHT: float = float(os.getenv("RECENCY_WEIGHT", "5"))
LANGUAGE_WEIGHT: float = float(os.getenv("LANGUAGE_WEIGHT", "8"))
TONE_WEIGHT: float = float(os.getenv("TONE_WEIGHT", "10"))
AGE_RATING_WEIGHT: float = float(os.getenv("AGE_RATING_WEIGHT", "6"))

# Averages backed by fewer votes than this are blended toward NEUTRAL_RATING.
MIN_RELIABLE_VOTES: int = int(os.getenv("MIN_RELIABLE_VOTES", "100"))
NEUTRAL_RATING: float = 5.0
HIGHLY_RATED_THRESHOLD: float = 7.5

# Releases older than this many years get no recency credit.
RECENCY_HORIZON_YEARS: int = int(os.getenv("RECENCY_HORIZON_YEARS", "30"))

# Target popularity bands as (low, high) percentiles of the current pool.
POPULARITY_BANDS: dict[str, tuple[float, float]] = {
    "niche": (0.0, 0.4),
    "mainstream": (0.3, 0.8),
    "blockbuster": (0.75, 1.0),
}
# Percentile distance outside the band at which popularity credit hits zero.
POPULARITY_FALLOFF: float = 0.5

# ---------------------------------------------------------------------------
# Parallel scoring
# ---------------------------------------------------------------------------

# Scoring is pure Python and holds the GIL, so extra workers only help
# custom components that release it.  1 scores sequentially.
SCORING_MAX_WORKERS: int = int(os.getenv("SCORING_MAX_WORKERS", "1"))
PARALLEL_SCORING_THRESHOLD: int = int(
    os.getenv("PARALLEL_SCORING_THRESHOLD", "2000")
)

# Signals computed from an item's genres.  Two items that differ only in
# genres can differ in these too, so one matched genre must outweigh them all.
GENRE_DERIVED_SIGNALS: tuple[str, ...] = ("tone", "age_rating")


def validate_weights(weights: dict[str, float] | None = None) -> None:
    """Check that genre overlap dominates every other scoring signal.

    Two rules keep more genre overlap ranking above less:

    * every soft weight is strictly smaller than ``genre``;
    * ``genre_step``, the flat credit per matched genre, is strictly larger
      than the genre-derived weights (:data:`GENRE_DERIVED_SIGNALS`)
      combined, however many genres the user selected.

    Args:
        weights: Mapping of weight name to value.  Defaults to the
            module-level settings.

    Raises:
        ValueError: If a weight is negative or either rule is broken.
    """
    if weights is None:
        weights = current_weights()
    genre = weights["genre"]
    for name, value in weights.items():
        if value < 0:
            raise ValueError(f"Weight {name!r} must be non-negative, got {value!r}")
        if name not in ("genre", "genre_step") and value >= genre:
            raise ValueError(
                f"Weight {name!r} ({value!r}) must be smaller than the genre "
                f"weight ({genre!r})"
            )

    derived = sum(weights.get(name, 0.0) for name in GENRE_DERIVED_SIGNALS)
    step = weights.get("genre_step", 0.0)
    if derived > 0 and step <= derived:
        raise ValueError(
            f"Weight 'genre_step' ({step!r}) must be larger than the combined "
            f"genre-derived weights ({derived!r})"
        )


def current_weights() -> dict[str, float]:
    """Return the configured component weights keyed by component name."""
    return {
        "genre": GENRE_WEIGHT,
        "genre_step": GENRE_STEP_WEIGHT,
        "rating": RATING_WEIGHT,
        "popularity": POPULARITY_WEIGHT,
        "recency": RECENCY_WEIGHT,
        "language": LANGUAGE_WEIGHT,
        "tone": TONE_WEIGHT,
        "age_rating": AGE_RATING_WEIGHT,
    }
