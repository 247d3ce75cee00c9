"""Normalizer: coerces raw catalog records into :class:`ContentItem` objects."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable
from typing import Any

from cinematch.models import ContentItem, MediaType

logger = logging.getLogger(__name__)

_YEAR_PATTERN = re.compile(r"^\s*(\d{4})")


def normalize(raw: dict[str, Any], media_type: MediaType | str | None = None) -> ContentItem | None:
    """Convert one raw catalog record into a :class:`ContentItem`.

    Movie records carry ``title``/``release_date``/``runtime``; series
    records carry ``name``/``first_air_date``/``episode_run_time``.  Both
    shapes are accepted regardless of *media_type*.

    Optional fields that are missing or malformed map to ``None`` or a
    neutral default.  The record is dropped (``None`` returned) when it has
    no usable integer ``id`` or no recognisable media type.

    Args:
        raw: The catalog record.
        media_type: The record's media type.  When ``None`` the record's own
            ``media_type`` field is used.

    Returns:
        The normalized item, or ``None`` if the record cannot be used.
    """
    if not isinstance(raw, dict):
        logger.debug("Dropping non-mapping catalog record %r", raw)
        return None

    title = _first_text(raw, "title", "name", "original_title", "original_name")
    item_id = _to_int(raw.get("id"))
    if item_id is None:
        if title:
            logger.debug("Dropping catalog record %r without a usable id", title)
        else:
            logger.debug("Dropping catalog record without id or title")
        return None

    try:
        kind = MediaType.parse(media_type if media_type is not None else raw.get("media_type"))
    except ValueError:
        logger.debug("Dropping catalog record %d with unknown media type", item_id)
        return None

    return ContentItem(
        id=item_id,
        media_type=kind,
        title=title,
        overview=str(raw.get("overview") or ""),
        genre_ids=_genre_ids(raw),
        release_year=parse_year(raw.get("release_date") or raw.get("first_air_date")),
        vote_average=min(10.0, _non_negative_float(raw.get("vote_average"))),
        vote_count=int(_non_negative_float(raw.get("vote_count"))),
        popularity=_non_negative_float(raw.get("popularity")),
        original_language=str(raw.get("original_language") or "").strip().lower(),
        runtime_minutes=_runtime(raw),
        adult=bool(raw.get("adult", False)),
        poster_path=raw.get("poster_path") or None,
    )


def normalize_pool(
    raw_items: Iterable[Any],
    default_media_type: MediaType | str | None = None,
) -> list[ContentItem]:
    """Normalize a batch of catalog records, dropping bad ones and duplicates.

    Args:
        raw_items: Raw catalog records, or already-normalized items which
            are passed through untouched.
        default_media_type: Media type for records that do not name their own.

    Returns:
        Normalized items in input order, de-duplicated on ``(id, media_type)``.
    """
    items: list[ContentItem] = []
    dropped = 0
    for raw in raw_items:
        if isinstance(raw, ContentItem):
            items.append(raw)
            continue
        media_type = default_media_type
        if isinstance(raw, dict) and raw.get("media_type"):
            media_type = None
        item = normalize(raw, media_type)
        if item is None:
            dropped += 1
        else:
            items.append(item)
    if dropped:
        logger.info("Dropped %d malformed catalog record(s).", dropped)
    return deduplicate(items)


def deduplicate(items: Iterable[ContentItem]) -> list[ContentItem]:
    """Return *items* without repeated ``(id, media_type)`` keys, keeping first occurrences."""
    seen: set[tuple[int, MediaType]] = set()
    unique: list[ContentItem] = []
    for item in items:
        if item.key in seen:
            continue
        seen.add(item.key)
        unique.append(item)
    return unique


def parse_year(value: Any) -> int | None:
    """Return the leading four-digit year of a date string, or ``None``."""
    if not value:
        return None
    match = _YEAR_PATTERN.match(str(value))
    if match is None:
        return None
    year = int(match.group(1))
    return year if year > 0 else None


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _first_text(raw: dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not number.is_integer():
        return None
    return int(number)


def _non_negative_float(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _genre_ids(raw: dict[str, Any]) -> frozenset[int]:
    ids: set[int] = set()
    for code in raw.get("genre_ids") or []:
        genre = _to_int(code)
        if genre is not None:
            ids.add(genre)
    # Detail endpoints return [{"id": 28, "name": "Action"}, ...]
    for entry in raw.get("genres") or []:
        if isinstance(entry, dict):
            genre = _to_int(entry.get("id"))
            if genre is not None:
                ids.add(genre)
    return frozenset(ids)


def _runtime(raw: dict[str, Any]) -> int | None:
    runtime = _to_int(raw.get("runtime"))
    if runtime is not None and runtime > 0:
        return runtime
    for length in raw.get("episode_run_time") or []:
        minutes = _to_int(length)
        if minutes is not None and minutes > 0:
            return minutes
    return None
