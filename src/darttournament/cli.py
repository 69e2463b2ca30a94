"""Command line entry point: run the Dart Tournament HTTP server."""

# Dart Tournament
# Copyright (C) 2025  Dart Tournament developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import sys
from typing import List, Optional

from darttournament.exceptions import ConfigurationException
from darttournament.utils import set_log_level, setup_logger
from darttournament.utils.validation import validate_port

logger = setup_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Defaults come from the environment (see :mod:`darttournament.server.settings`).
    """
    parser = argparse.ArgumentParser(
        prog="darttournament",
        description="Run the dart tournament web server",
    )
    parser.add_argument("--host", help="Listen address (default: $HOST or 0.0.0.0)")
    parser.add_argument(
        "--port", type=int, help="Listen port (default: $PORT or 8080)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    args = create_parser().parse_args(argv)

    from darttournament.server import create_app, load_settings

    try:
        settings = load_settings()
    except ConfigurationException as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.host:
        settings.host = args.host
    if args.port is not None:
        result = validate_port(args.port)
        if not result:
            logger.error(f"Invalid configuration: --port: {result.error_message}")
            return 1
        settings.port = result.sanitized_value
    if args.log_level:
        settings.log_level = args.log_level
    set_log_level(settings.log_level)

    import uvicorn

    logger.info(f"Starting server at http://{settings.host}:{settings.port}")
    try:
        uvicorn.run(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Server interrupted by user")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
