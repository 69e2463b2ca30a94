"""GameMatch data class."""

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

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from darttournament.models.enums import RoundType, Team
from darttournament.type_hints import MatchId, PlayerId, TeamIds


@dataclass
class GameMatch:
    """A single match between two teams.

    Attributes
    ----------
    team_1 : list of str
        Player IDs on team one (2 in 2v2, 1 in 1v1).
    team_2 : list of str
        Player IDs on team two.
    round : RoundType
        Phase the match belongs to.
    id : str
        Unique match identifier.
    winner : Team or None
        Left unset on live matches. Pending results are kept in the
        tournament's result maps until the round is processed.
    """

    team_1: TeamIds
    team_2: TeamIds
    round: RoundType
    id: MatchId = field(default_factory=lambda: uuid.uuid4().hex)
    winner: Optional[Team] = None

    @property
    def player_ids(self) -> List[PlayerId]:
        return list(self.team_1) + list(self.team_2)

    def team(self, team: Team) -> TeamIds:
        return list(self.team_1) if team is Team.ONE else list(self.team_2)

    def winning_team(self, winner: Team) -> TeamIds:
        return self.team(winner)

    def losing_team(self, winner: Team) -> TeamIds:
        return self.team(winner.other)

    def copy(self) -> "GameMatch":
        return GameMatch(
            team_1=list(self.team_1),
            team_2=list(self.team_2),
            round=self.round,
            id=self.id,
            winner=self.winner,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "team_1": list(self.team_1),
            "team_2": list(self.team_2),
            "winner": self.winner.value if self.winner else None,
            "round": self.round.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameMatch":
        """Deserialize match from dictionary."""
        winner = data.get("winner")
        return cls(
            team_1=list(data["team_1"]),
            team_2=list(data["team_2"]),
            round=RoundType(data["round"]),
            id=data["id"],
            winner=Team(winner) if winner else None,
        )
