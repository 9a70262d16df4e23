"""Serve the workout API with uvicorn."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from workout_api.config import get_settings
from workout_api.database import run_migrations
from workout_api.logging_config import configure_logging


logger = logging.getLogger("scripts.run_api")


def parse_args() -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Run the workout tracking API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve on the configured APP_HOST / APP_PORT
  python scripts/run_api.py

  # Apply pending migrations first, then serve on port 9000
  python scripts/run_api.py --migrate --port 9000
        """
    )
    parser.add_argument("--host", default=settings.app_host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.app_port, help="Port to bind")
    parser.add_argument("--migrate", action="store_true", help="Apply migrations before serving")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    return parser.parse_args()


def main() -> None:
    configure_logging()
    args = parse_args()

    if args.migrate:
        Path("data").mkdir(exist_ok=True)
        logger.info("Applying database migrations")
        run_migrations()

    logger.info("Starting API on %s:%d", args.host, args.port)
    uvicorn.run(
        "workout_api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
