"""CLI entry point for the webhook server."""

from __future__ import annotations

import argparse
import logging
import os

import uvicorn

from .log_config import configure_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(description="Soil moisture fulfillment webhook (Dialogflow + Smart Home)")
    p.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    p.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    p.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    p.add_argument("--reload", action="store_true", help="auto-reload on code changes (dev only)")
    args = p.parse_args(argv)

    # La app se importa por nombre (también en el proceso hijo de --reload)
    # y lee su nivel desde LOG_LEVEL.
    os.environ["LOG_LEVEL"] = args.log_level
    configure_logging(args.log_level)
    logger.info("[APP] Starting webhook host=%s port=%s", args.host, args.port)

    uvicorn.run(
        "fulfillment_api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
