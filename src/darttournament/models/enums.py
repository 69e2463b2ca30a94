"""Enumerations shared by tournament models."""

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

from enum import Enum


class Team(Enum):
    """Side of a match. Wire values match the JSON API."""

    ONE = "one"
    TWO = "two"

    @property
    def other(self) -> "Team":
        return Team.TWO if self is Team.ONE else Team.ONE


class RoundType(Enum):
    """Phase of the tournament a match belongs to."""

    GROUP_PLAY = "group_play"
    SEMI_FINALS = "semi_finals"
    FINALS = "finals"
    # Reserved for a 1v1 deciding match; nothing generates it yet
    GRAND_FINALS = "grand_finals"


class TournamentState(Enum):
    """Current phase of the tournament."""

    # Adding players, setting max losses; not started
    SETUP = "setup"
    # Main phase: group play rounds until the roster shrinks to bracket size
    GROUP_PLAY = "group_play"
    # At or below bracket size; may pull players back from the last eliminated
    FINAL_SELECTION = "final_selection"
    SEMI_FINALS = "semi_finals"
    FINALS = "finals"
    COMPLETED = "completed"


class TournamentMode(Enum):
    """Team size for every match of the tournament."""

    ONE_V_ONE = "one_v_one"
    TWO_V_TWO = "two_v_two"

    @property
    def team_size(self) -> int:
        return 1 if self is TournamentMode.ONE_V_ONE else 2
