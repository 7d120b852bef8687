#!/usr/bin/env python3
"""FastAPI server runner."""

from __future__ import annotations

import argparse

import uvicorn

from aggregator_core.api.app import create_app
from aggregator_core.config import load_config
from aggregator_core.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Run the FastAPI server."""
    parser = argparse.ArgumentParser(description="Aggregator dashboard API")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(level=config.logging.level, log_format=config.logging.format)

    logger.info(
        "starting_api_server",
        host=config.server.host,
        port=config.server.port,
        environment=config.environment,
    )

    try:
        uvicorn.run(
            create_app(config),
            host=config.server.host,
            port=config.server.port,
            log_config=None,  # Use our structlog setup
        )
    except Exception as e:
        logger.error("api_server_failed", error=str(e))
        raise


if __name__ == "__main__":
    main()
