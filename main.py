"""Entry point: wires the engine and starts the gRPC server."""

from __future__ import annotations

import logging
import signal
import sys
from concurrent import futures

import grpc

import config
from cinematch.engine import RecommendationEngine
from cinematch.scorer import Scorer
from cinematch.service import RecommenderServicer, add_RecommenderServicer_to_server

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_server(engine: RecommendationEngine | None = None) -> grpc.Server:
    """Wire a recommendation engine into a gRPC server bound to the configured port.

    Args:
        engine: The engine to serve.  Defaults to one built from :mod:`config`.

    Returns:
        The server, ready for ``start()``.
    """
    if engine is None:
        engine = RecommendationEngine(
            scorer=Scorer(),
            max_workers=config.SCORING_MAX_WORKERS,
            parallel_threshold=config.PARALLEL_SCORING_THRESHOLD,
        )

    servicer = RecommenderServicer(
        engine=engine, default_limit=config.DEFAULT_RECOMMENDATION_LIMIT
    )

    server = grpc.server(
        futures.ThreadPoolExecutor(max_workers=config.GRPC_MAX_WORKERS)
    )
    add_RecommenderServicer_to_server(servicer, server)
    server.add_insecure_port(
        f"{config.GRPC_SERVER_HOST}:{config.GRPC_SERVER_PORT}"
    )
    return server


def main() -> None:
    """Validate configuration, then build and start the gRPC server.

    Invalid scoring weights abort startup before the port is bound.
    """
    try:
        config.validate_weights()
    except ValueError:
        logger.exception("Invalid scoring weights; refusing to start.")
        sys.exit(1)

    server = build_server()

    def handle_shutdown(signum: int, frame: object) -> None:
        sig_name = signal.Signals(signum).name
        logger.info("Received %s; shutting down.", sig_name)
        server.stop(grace=5)
        sys.exit(0)

    signal.signal(signal.SIGTERM, handle_shutdown)
    signal.signal(signal.SIGINT, handle_shutdown)

    server.start()
    logger.info(
        "cinematch listening on %s:%d",
        config.GRPC_SERVER_HOST,
        config.GRPC_SERVER_PORT,
    )
    server.wait_for_termination()


if __name__ == "__main__":
    main()
