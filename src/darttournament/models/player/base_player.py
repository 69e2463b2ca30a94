"""A dart player taking part in a tournament."""

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

import dataclasses
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict


def new_player_id() -> str:
    """Return a fresh opaque player identifier."""
    return uuid.uuid4().hex


@dataclass
class PlayerStats:
    """Statistics view of a player, for display and API responses."""

    losses: int = 0
    wins: int = 0
    times_sat_out: int = 0
    eliminated_status: bool = False

    @classmethod
    def from_player(cls, player: "Player") -> "PlayerStats":
        return cls(
            losses=player.losses,
            wins=player.wins,
            times_sat_out=player.times_sat_out,
            eliminated_status=player.eliminated,
        )

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(slots=True)
class Player:
    """
    A player entered in a dart tournament.

    The tournament aggregate owns every ``Player``. When a player moves
    between collections (active roster, sit-outs, eliminated, bracket
    snapshots) the move is a value copy plus a removal from the source,
    so two collections never share one live object.

    Attributes
    ----------
    name : str
        Display name, trimmed. Unique (case-insensitively) per roster.
    id : str
        Opaque unique identifier, generated on creation.
    wins : int
        Matches won.
    losses : int
        Matches lost. Reaching the tournament's ``max_losses`` eliminates
        the player during group play.
    times_sat_out : int
        Group play rounds this player sat out. Never decreases.
    internal_times_sat_out : int
        Fairness counter used to pick who sits out next. Moves together
        with ``times_sat_out`` but is kept separate so it can be adjusted
        on its own.
    seed : int
        Reserved seeding value; always 0.
    eliminated : bool
        Whether the player is out of the tournament.

    Examples
    --------
    Recording a round::

        player = Player(name="Phil")
        player.add_loss()
        player.record_sat_out()
    """

    name: str
    id: str = field(default_factory=new_player_id)
    wins: int = 0
    losses: int = 0
    times_sat_out: int = 0
    internal_times_sat_out: int = 0
    seed: int = 0
    eliminated: bool = False

    def add_win(self) -> None:
        self.wins += 1

    def add_loss(self) -> None:
        self.losses += 1

    def eliminate(self) -> None:
        self.eliminated = True

    def record_sat_out(self) -> None:
        """Record that this player sat out one round."""
        self.times_sat_out += 1
        self.internal_times_sat_out += 1

    def matches_name(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.casefold() == name.strip().casefold()

    def copy(self) -> "Player":
        """Independent value copy, for snapshots and collection moves."""
        return dataclasses.replace(self)

    def stats(self) -> PlayerStats:
        return PlayerStats.from_player(self)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "losses": self.losses,
            "wins": self.wins,
            "times_sat_out": self.times_sat_out,
            "internal_times_sat_out": self.internal_times_sat_out,
            "seed": self.seed,
            "eliminated": self.eliminated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(
            name=data["name"],
            id=data["id"],
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            times_sat_out=data.get("times_sat_out", 0),
            internal_times_sat_out=data.get("internal_times_sat_out", 0),
            seed=data.get("seed", 0),
            eliminated=data.get("eliminated", False),
        )
