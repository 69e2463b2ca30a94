"""TournamentConfig data class."""

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

from dataclasses import dataclass
from typing import Any, Dict

from darttournament.constants import (
    DEFAULT_MAX_LOSSES,
    PLAYERS_PER_MATCH,
    PLAYERS_REQUIRED_FOR_SEMI,
    PLAYERS_REQUIRED_TO_START,
)
from darttournament.models.enums import TournamentMode


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Both values may only change while the tournament is in setup.

    Attributes
    ----------
    max_losses : int
        Losses at which a player is eliminated during group play.
    mode : TournamentMode
        Team size for every match (1v1 or 2v2).
    """

    max_losses: int = DEFAULT_MAX_LOSSES
    mode: TournamentMode = TournamentMode.TWO_V_TWO

    @property
    def players_required_to_start(self) -> int:
        return PLAYERS_REQUIRED_TO_START[self.mode.value]

    @property
    def players_required_for_semi(self) -> int:
        return PLAYERS_REQUIRED_FOR_SEMI[self.mode.value]

    @property
    def players_per_match(self) -> int:
        return PLAYERS_PER_MATCH[self.mode.value]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "max_losses": self.max_losses,
            "mode": self.mode.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            max_losses=data.get("max_losses", DEFAULT_MAX_LOSSES),
            mode=TournamentMode(data.get("mode", TournamentMode.TWO_V_TWO.value)),
        )
