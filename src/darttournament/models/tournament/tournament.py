"""Main Tournament class - the aggregate root for one dart tournament.

The tournament owns every player and match. Roster operations live here as
methods; phase logic (group play, final selection, finals) lives in
:mod:`darttournament.controllers.tournament` and operates on a Tournament
passed in.
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

import uuid
from typing import Any, Dict, Iterable, List, Optional

from darttournament.constants import DEFAULT_MAX_LOSSES
from darttournament.exceptions import (
    DuplicatePlayerException,
    PlayerNotFoundException,
    TournamentStateException,
)
from darttournament.models.enums import Team, TournamentMode, TournamentState
from darttournament.models.player import Player
from darttournament.type_hints import MatchResults
from darttournament.utils import setup_logger
from darttournament.utils.validation import validate_count, validate_player_name

from .game_match import GameMatch
from .tournament_config import TournamentConfig

logger = setup_logger(__name__)

# Phases in which the roster may still grow
_ROSTER_OPEN_STATES = (
    TournamentState.SETUP,
    TournamentState.GROUP_PLAY,
    TournamentState.FINAL_SELECTION,
)

# Phases in which losses may be edited and players eliminated by hand
_ROSTER_EDIT_STATES = (
    TournamentState.GROUP_PLAY,
    TournamentState.FINAL_SELECTION,
)


class Tournament:
    """Full tournament state: players, matches, results, and phase.

    Collections
    -----------
    players
        Active roster. While a group play round is in flight the players
        sitting out are moved from here into ``unused_players``.
    unused_players
        Players sitting out the current group play round.
    eliminated_players
        Everyone eliminated so far (accumulates).
    last_eliminated_players
        Players eliminated by the most recently processed round. Final
        selection draws from this list.
    matches
        The current round's matches; empty between rounds.
    match_results, final_match_results
        Pending winners per match id for the current group play round and
        the current bracket round respectively.

    The ``bracket_*`` fields are snapshots taken as the bracket advances and
    are never cleared; they exist for display once the rounds are over.
    """

    def __init__(
        self,
        max_losses: int = DEFAULT_MAX_LOSSES,
        mode: TournamentMode = TournamentMode.TWO_V_TWO,
        tournament_id: Optional[str] = None,
    ) -> None:
        self.id: str = tournament_id or uuid.uuid4().hex
        self.config = TournamentConfig(max_losses=max_losses, mode=TournamentMode(mode))
        self._reset_state()

    def _reset_state(self) -> None:
        """Empty roster, no matches, no snapshots, back in Setup."""
        self.state = TournamentState.SETUP
        self.round_number = 0

        self.players: List[Player] = []
        self.eliminated_players: List[Player] = []
        self.last_eliminated_players: List[Player] = []
        self.unused_players: List[Player] = []

        self.matches: List[GameMatch] = []
        self.match_results: MatchResults = {}
        self.final_match_results: MatchResults = {}

        self.bracket_semi_final_matches: Optional[List[GameMatch]] = None
        self.bracket_semi_final_results: Optional[MatchResults] = None
        self.bracket_finals_match: Optional[GameMatch] = None
        self.bracket_finals_result: Optional[Team] = None
        self.bracket_semi_final_players: Optional[List[Player]] = None

    @classmethod
    def with_players(
        cls,
        players: Iterable[Player],
        max_losses: int = DEFAULT_MAX_LOSSES,
        mode: TournamentMode = TournamentMode.TWO_V_TWO,
    ) -> "Tournament":
        """Create a tournament in setup with an initial roster."""
        tournament = cls(max_losses=max_losses, mode=mode)
        tournament.players = list(players)
        return tournament

    # ========== Properties ==========

    @property
    def max_losses(self) -> int:
        return self.config.max_losses

    @property
    def mode(self) -> TournamentMode:
        return self.config.mode

    @property
    def active_roster(self) -> List[Player]:
        """Players still in the tournament, including those sitting out."""
        return self.players + self.unused_players

    @property
    def champions(self) -> List[Player]:
        """Players on the winning side of the finals (empty until completed)."""
        if self.bracket_finals_match is None or self.bracket_finals_result is None:
            return []
        winner_ids = self.bracket_finals_match.winning_team(self.bracket_finals_result)
        return [p for p in self.players if p.id in winner_ids]

    def players_required_to_start(self) -> int:
        return self.config.players_required_to_start

    def players_required_for_semi(self) -> int:
        return self.config.players_required_for_semi

    def players_per_match(self) -> int:
        return self.config.players_per_match

    # ========== Lookups ==========

    def require_state(self, *states: TournamentState) -> None:
        """Raise TournamentStateException unless the phase is one of ``states``."""
        if self.state not in states:
            raise TournamentStateException(
                f"Invalid state for this action ({self.state.value})"
            )

    def get_player(self, player_id: str) -> Optional[Player]:
        """Find a player in the active roster or among those sitting out."""
        for player in self.active_roster:
            if player.id == player_id:
                return player
        return None

    def require_player(self, player_id: str) -> Player:
        player = self.get_player(player_id)
        if player is None:
            raise PlayerNotFoundException(player_id)
        return player

    def get_match(self, match_id: str) -> Optional[GameMatch]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    # ========== Player Management ==========

    def add_player(self, name: str) -> Player:
        """Add a player (valid in Setup, GroupPlay, or FinalSelection).

        Args:
            name: Display name; trimmed, must be non-empty and unique
                (case-insensitive) among active players

        Returns:
            The new Player

        Raises:
            TournamentStateException: Wrong phase or empty name
            DuplicatePlayerException: Name already taken
        """
        self.require_state(*_ROSTER_OPEN_STATES)
        result = validate_player_name(name)
        if not result:
            raise TournamentStateException(result.error_message)
        clean_name = result.sanitized_value
        if any(p.matches_name(clean_name) for p in self.active_roster):
            raise DuplicatePlayerException(clean_name)

        player = Player(name=clean_name)
        self.players.append(player)
        logger.info(f"Added player: {player.name} ({player.id})")
        return player

    def remove_player(self, player_id: str) -> Player:
        """Remove a player by id (only valid in Setup)."""
        self.require_state(TournamentState.SETUP)
        for index, player in enumerate(self.players):
            if player.id == player_id:
                del self.players[index]
                logger.info(f"Removed player: {player.name} ({player_id})")
                return player
        raise PlayerNotFoundException(player_id)

    def set_max_losses(self, max_losses: int) -> None:
        """Set losses before elimination (only valid in Setup)."""
        self.require_state(TournamentState.SETUP)
        result = validate_count(max_losses, minimum=1, label="Max losses")
        if not result:
            raise TournamentStateException(result.error_message)
        self.config.max_losses = result.sanitized_value
        logger.info(f"Max losses set to {self.config.max_losses}")

    def set_mode(self, mode: TournamentMode) -> None:
        """Switch between 1v1 and 2v2 (only valid in Setup)."""
        self.require_state(TournamentState.SETUP)
        self.config.mode = TournamentMode(mode)
        logger.info(f"Mode set to {self.config.mode.value}")

    def set_player_losses(self, player_id: str, losses: int) -> Player:
        """Set a player's loss count by hand (GroupPlay or FinalSelection).

        The player is flagged eliminated only once at least one round has
        been generated; editing losses before the first round must not
        shrink the pool below what match generation needs.
        """
        self.require_state(*_ROSTER_EDIT_STATES)
        result = validate_count(losses, minimum=0, label="Losses")
        if not result:
            raise TournamentStateException(result.error_message)
        player = self.require_player(player_id)

        player.losses = result.sanitized_value
        if self.round_number > 0 and player.losses >= self.max_losses:
            player.eliminate()
        logger.info(
            f"Set losses for {player.name} to {player.losses}"
            f"{' (eliminated)' if player.eliminated else ''}"
        )
        return player

    def eliminate_player(self, player_id: str) -> Player:
        """Eliminate a player by hand (GroupPlay or FinalSelection).

        The player moves from the active roster (or the sit-out list) into
        ``eliminated_players``.
        """
        self.require_state(*_ROSTER_EDIT_STATES)
        player = self.require_player(player_id).copy()
        player.eliminate()

        self.players = [p for p in self.players if p.id != player_id]
        self.unused_players = [p for p in self.unused_players if p.id != player_id]
        self.eliminated_players.append(player)
        logger.info(f"Eliminated player: {player.name} ({player_id})")
        return player

    def restart_tournament(self) -> None:
        """Go back to Setup with the same player names.

        Every name from the active, sit-out and eliminated lists is re-added
        with fresh stats. Max losses, mode and the tournament id are kept.
        """
        self.require_state(*_ROSTER_EDIT_STATES)
        names = [p.name for p in self.active_roster + self.eliminated_players]

        self._reset_state()
        for name in names:
            try:
                self.add_player(name)
            except (DuplicatePlayerException, TournamentStateException):
                logger.debug(f"Skipped {name!r} while restarting")
        logger.info(f"Restarted tournament {self.id} with {len(self.players)} players")

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary.

        Returns:
            JSON-compatible dictionary containing all tournament data
        """
        return {
            "id": self.id,
            "players": [p.to_dict() for p in self.players],
            "eliminated_players": [p.to_dict() for p in self.eliminated_players],
            "last_eliminated_players": [
                p.to_dict() for p in self.last_eliminated_players
            ],
            "matches": [m.to_dict() for m in self.matches],
            "unused_players": [p.to_dict() for p in self.unused_players],
            **self.config.to_dict(),
            "state": self.state.value,
            "round_number": self.round_number,
            "match_results": _results_to_dict(self.match_results),
            "final_match_results": _results_to_dict(self.final_match_results),
            "bracket_semi_final_matches": (
                [m.to_dict() for m in self.bracket_semi_final_matches]
                if self.bracket_semi_final_matches is not None
                else None
            ),
            "bracket_semi_final_results": (
                _results_to_dict(self.bracket_semi_final_results)
                if self.bracket_semi_final_results is not None
                else None
            ),
            "bracket_finals_match": (
                self.bracket_finals_match.to_dict()
                if self.bracket_finals_match is not None
                else None
            ),
            "bracket_finals_result": (
                self.bracket_finals_result.value
                if self.bracket_finals_result is not None
                else None
            ),
            "bracket_semi_final_players": (
                [p.to_dict() for p in self.bracket_semi_final_players]
                if self.bracket_semi_final_players is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary.

        Args:
            data: Dictionary produced by :meth:`to_dict`

        Returns:
            Reconstructed Tournament object
        """
        config = TournamentConfig.from_dict(data)
        tournament = cls(
            max_losses=config.max_losses,
            mode=config.mode,
            tournament_id=data["id"],
        )
        tournament.state = TournamentState(data.get("state", "setup"))
        tournament.round_number = data.get("round_number", 0)

        tournament.players = _players_from(data.get("players"))
        tournament.eliminated_players = _players_from(data.get("eliminated_players"))
        tournament.last_eliminated_players = _players_from(
            data.get("last_eliminated_players")
        )
        tournament.unused_players = _players_from(data.get("unused_players"))
        tournament.matches = [GameMatch.from_dict(m) for m in data.get("matches", [])]
        tournament.match_results = _results_from_dict(data.get("match_results"))
        tournament.final_match_results = _results_from_dict(
            data.get("final_match_results")
        )

        if data.get("bracket_semi_final_matches") is not None:
            tournament.bracket_semi_final_matches = [
                GameMatch.from_dict(m) for m in data["bracket_semi_final_matches"]
            ]
        if data.get("bracket_semi_final_results") is not None:
            tournament.bracket_semi_final_results = _results_from_dict(
                data["bracket_semi_final_results"]
            )
        if data.get("bracket_finals_match") is not None:
            tournament.bracket_finals_match = GameMatch.from_dict(
                data["bracket_finals_match"]
            )
        if data.get("bracket_finals_result") is not None:
            tournament.bracket_finals_result = Team(data["bracket_finals_result"])
        if data.get("bracket_semi_final_players") is not None:
            tournament.bracket_semi_final_players = _players_from(
                data["bracket_semi_final_players"]
            )
        return tournament

    def __repr__(self) -> str:
        return (
            f"Tournament(id={self.id!r}, state={self.state.value}, "
            f"players={len(self.players)}, mode={self.mode.value})"
        )


def _results_to_dict(results: MatchResults) -> Dict[str, str]:
    return {match_id: team.value for match_id, team in results.items()}


def _results_from_dict(data: Optional[Dict[str, str]]) -> MatchResults:
    return {match_id: Team(team) for match_id, team in (data or {}).items()}


def _players_from(data: Optional[List[Dict[str, Any]]]) -> List[Player]:
    return [Player.from_dict(p) for p in data or []]
