"""gRPC servicer: the entry point for recommendation calls from the web backend.

Messages are ``google.protobuf.Struct`` documents, so clients only need the
well-known types to talk to the service:

* ``GenerateRecommendations``:
  ``{contentPool: [...], preferences: {...}, limit: n, sortBy: "score"}`` →
  ``{recommendations: [...], total: n}``
* ``SortRecommendations``:
  ``{recommendations: [...], sortBy: "rating"}`` → ``{recommendations: [...], total: n}``
"""

from __future__ import annotations

import logging
import time
from typing import Any

import grpc
from google.protobuf import json_format
from google.protobuf.struct_pb2 import Struct

import config
from cinematch.engine import RecommendationEngine
from cinematch.genres import genre_name
from cinematch.models import PreferenceProfile, Recommendation, SortKey
from cinematch.ranker import sort_recommendations

logger = logging.getLogger(__name__)

SERVICE_NAME = "cinematch.RecommenderService"


class RecommenderServicer:
    """Implements ``cinematch.RecommenderService``.

    Registered with a gRPC server via :func:`add_RecommenderServicer_to_server`.

    Args:
        engine: The :class:`~cinematch.engine.RecommendationEngine`.
        default_limit: Result count used when a request names no limit.
    """

    def __init__(
        self,
        engine: RecommendationEngine,
        default_limit: int = config.DEFAULT_RECOMMENDATION_LIMIT,
    ) -> None:
        self._engine = engine
        self._default_limit = default_limit

    # ------------------------------------------------------------------
    # Recommendation requests
    # ------------------------------------------------------------------

    def GenerateRecommendations(self, request: Struct, context: Any) -> Struct:
        """Score and rank a candidate pool for one preference profile.

        Args:
            request: ``Struct`` with ``contentPool``, ``preferences`` and
                optional ``limit`` / ``sortBy``.
            context: gRPC service context.

        Returns:
            ``Struct`` with ``recommendations`` and ``total``.  Empty on error,
            with the status code set on *context*.
        """
        payload = json_format.MessageToDict(request)
        start_ms = time.monotonic() * 1000
        try:
            preferences = PreferenceProfile.from_dict(payload.get("preferences") or {})
            limit = payload.get("limit")
            limit = int(limit) if limit is not None else self._default_limit
            sort_key = SortKey(payload.get("sortBy") or SortKey.SCORE.value)
            recommendations = self._engine.generate_recommendations(
                payload.get("contentPool") or [], preferences, limit=limit
            )
            recommendations = sort_recommendations(recommendations, sort_key)
        except (ValueError, TypeError) as exc:
            context.set_code(grpc.StatusCode.INVALID_ARGUMENT)
            context.set_details(str(exc))
            return Struct()
        except Exception:
            logger.exception("Unexpected error generating recommendations")
            context.set_code(grpc.StatusCode.INTERNAL)
            context.set_details("Internal error generating recommendations.")
            return Struct()
        finally:
            elapsed_ms = time.monotonic() * 1000 - start_ms
            if elapsed_ms > config.RECOMMENDATION_WARN_THRESHOLD_MS:
                logger.warning(
                    "GenerateRecommendations took %.1fms (threshold: %dms)",
                    elapsed_ms,
                    config.RECOMMENDATION_WARN_THRESHOLD_MS,
                )
            else:
                logger.debug("GenerateRecommendations took %.1fms", elapsed_ms)

        return _response(recommendations)

    def SortRecommendations(self, request: Struct, context: Any) -> Struct:
        """Re-sort an already-scored list without re-scoring it.

        Args:
            request: ``Struct`` with ``recommendations`` and ``sortBy``.
            context: gRPC service context.

        Returns:
            ``Struct`` with the re-sorted ``recommendations`` and ``total``.
        """
        payload = json_format.MessageToDict(request)
        try:
            recommendations = [
                Recommendation.from_dict(entry)
                for entry in payload.get("recommendations") or []
            ]
            sort_key = SortKey(payload.get("sortBy") or SortKey.SCORE.value)
            recommendations = sort_recommendations(recommendations, sort_key)
        except (ValueError, TypeError) as exc:
            context.set_code(grpc.StatusCode.INVALID_ARGUMENT)
            context.set_details(str(exc))
            return Struct()
        except Exception:
            logger.exception("Unexpected error sorting recommendations")
            context.set_code(grpc.StatusCode.INTERNAL)
            context.set_details("Internal error sorting recommendations.")
            return Struct()
        return _response(recommendations)


def add_RecommenderServicer_to_server(servicer: RecommenderServicer, server: grpc.Server) -> None:
    """Register *servicer*'s methods on *server* under :data:`SERVICE_NAME`."""
    handlers = {
        name: grpc.unary_unary_rpc_method_handler(
            getattr(servicer, name),
            request_deserializer=Struct.FromString,
            response_serializer=Struct.SerializeToString,
        )
        for name in ("GenerateRecommendations", "SortRecommendations")
    }
    server.add_generic_rpc_handlers(
        (grpc.method_handlers_generic_handler(SERVICE_NAME, handlers),)
    )


# ---------------------------------------------------------------------------
# Message helpers
# ---------------------------------------------------------------------------


def _response(recommendations: list[Recommendation]) -> Struct:
    entries = []
    for rec in recommendations:
        entry = rec.to_dict()
        entry["genreNames"] = [genre_name(g) for g in entry["genreIds"]]
        entries.append(entry)
    return json_format.ParseDict(
        {"recommendations": entries, "total": len(entries)}, Struct()
    )
