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

SERVICE_NAME = "dart-tournament"

DEFAULT_MAX_LOSSES = 3

# Players needed to start a tournament, keyed by mode value
PLAYERS_REQUIRED_TO_START = {
    "one_v_one": 4,
    "two_v_two": 8,
}

# Bracket size (semi-finalists), keyed by mode value
PLAYERS_REQUIRED_FOR_SEMI = {
    "one_v_one": 4,
    "two_v_two": 8,
}

# Players in one match; also the minimum to generate a round
PLAYERS_PER_MATCH = {
    "one_v_one": 2,
    "two_v_two": 4,
}

SEMI_FINAL_MATCH_COUNT = 2
FINALS_MATCH_COUNT = 1

# Server defaults
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"
INACTIVITY_TIMEOUT_SECONDS = 12 * 3600
CLEANUP_INTERVAL_SECONDS = 30 * 60

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
