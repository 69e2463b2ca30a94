"""Setup phase: start the tournament (Setup to GroupPlay or FinalSelection)."""

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

from darttournament.exceptions import NotEnoughPlayersToStartException
from darttournament.models.enums import TournamentState
from darttournament.models.tournament import Tournament
from darttournament.utils import setup_logger

logger = setup_logger(__name__)


def start_tournament(tournament: Tournament) -> Tournament:
    """Start the tournament.

    Requires 4 players (1v1) or 8 (2v2). A roster already at exactly that
    size skips group play and goes straight to final selection.

    Raises:
        TournamentStateException: Not in Setup
        NotEnoughPlayersToStartException: Roster below the start threshold
    """
    tournament.require_state(TournamentState.SETUP)
    required = tournament.players_required_to_start()
    if len(tournament.players) < required:
        raise NotEnoughPlayersToStartException(required)

    if len(tournament.players) > required:
        tournament.state = TournamentState.GROUP_PLAY
    else:
        tournament.state = TournamentState.FINAL_SELECTION

    logger.info(
        f"Started tournament {tournament.id} with {len(tournament.players)} players "
        f"({tournament.mode.value}), state: {tournament.state.value}"
    )
    return tournament
