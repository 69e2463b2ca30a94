"""Server settings, read from the environment.

Environment variables:
    HOST                        Listen address (default 0.0.0.0)
    PORT                        Listen port (default 8080)
    INACTIVITY_TIMEOUT_SECONDS  Idle time before a tournament is dropped (default 12h)
    CLEANUP_INTERVAL_SECONDS    How often idle tournaments are swept (default 30 min)
    LOG_LEVEL                   Logging level name (default INFO)
"""

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

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from darttournament.constants import (
    CLEANUP_INTERVAL_SECONDS,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    INACTIVITY_TIMEOUT_SECONDS,
)
from darttournament.exceptions import InvalidConfigurationException
from darttournament.utils.validation import validate_count, validate_port


@dataclass
class ServerSettings:
    """Process-level configuration for the HTTP server."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    inactivity_timeout: float = INACTIVITY_TIMEOUT_SECONDS
    cleanup_interval: float = CLEANUP_INTERVAL_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ServerSettings:
    """Build ServerSettings from environment variables.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``

    Raises:
        InvalidConfigurationException: A variable holds an invalid value
    """
    env = os.environ if environ is None else environ
    settings = ServerSettings()

    settings.host = env.get("HOST", "").strip() or DEFAULT_HOST

    if env.get("PORT"):
        result = validate_port(env["PORT"])
        if not result:
            raise InvalidConfigurationException(f"PORT: {result.error_message}")
        settings.port = result.sanitized_value

    for var, attr in (
        ("INACTIVITY_TIMEOUT_SECONDS", "inactivity_timeout"),
        ("CLEANUP_INTERVAL_SECONDS", "cleanup_interval"),
    ):
        if env.get(var):
            result = validate_count(env[var], minimum=1, label=var)
            if not result:
                raise InvalidConfigurationException(result.error_message)
            setattr(settings, attr, result.sanitized_value)

    level = env.get("LOG_LEVEL", "").strip().upper()
    if level:
        if not isinstance(logging.getLevelName(level), int):
            raise InvalidConfigurationException(f"LOG_LEVEL: unknown level {level!r}")
        settings.log_level = level

    return settings
