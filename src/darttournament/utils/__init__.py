"""Shared helpers for Dart Tournament."""

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
from typing import Optional, Union

from darttournament.constants import LOG_FORMAT

ROOT_LOGGER_NAME = "darttournament"


def setup_logger(name: str) -> logging.Logger:
    """Return a named logger under the package root logger.

    The first call attaches one stream handler to the ``darttournament``
    root logger; every module logger propagates to it.

    Args:
        name: Logger name, normally ``__name__``

    Returns:
        The configured logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        if root.level == logging.NOTSET:
            root.setLevel(logging.INFO)
    return logging.getLogger(name)


def set_log_level(level: Union[str, int], logger_name: Optional[str] = None) -> None:
    """Set the level of the package root logger (or a named logger)."""
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger(logger_name or ROOT_LOGGER_NAME).setLevel(level)
