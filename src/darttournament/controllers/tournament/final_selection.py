"""Final selection: bring the roster up to bracket size (4 for 1v1, 8 for 2v2)."""

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

from typing import Iterable

from darttournament.exceptions import (
    PlayerNotInLastEliminatedException,
    TournamentStateException,
    WrongNumberOfPlayersException,
)
from darttournament.models.enums import TournamentState
from darttournament.models.tournament import Tournament
from darttournament.utils import setup_logger

logger = setup_logger(__name__)


def add_players_back_from_last_eliminated(
    tournament: Tournament, player_ids: Iterable[str]
) -> Tournament:
    """Return selected players from the last eliminated group to the roster.

    Exactly ``required - len(players)`` ids must be given, all from
    ``last_eliminated_players``. A repeated id counts towards that total but
    moves the player only once. Their elimination is reversed
    (flag cleared, removed from ``eliminated_players``) but their losses are
    kept. Reaching bracket size moves the tournament to SemiFinals.

    Raises:
        TournamentStateException: Not in FinalSelection, or roster already full
        WrongNumberOfPlayersException: Selection size differs from what is needed
        PlayerNotInLastEliminatedException: A selected player is not eligible
    """
    tournament.require_state(TournamentState.FINAL_SELECTION)
    required = tournament.players_required_for_semi()
    current = len(tournament.players)
    if current >= required:
        raise TournamentStateException("Roster is already at bracket size")

    selected = list(player_ids)
    needed = required - current
    if len(selected) != needed:
        raise WrongNumberOfPlayersException(needed=needed, selected=len(selected))

    eligible = {p.id for p in tournament.last_eliminated_players}
    for player_id in selected:
        if player_id not in eligible:
            raise PlayerNotInLastEliminatedException(player_id)

    chosen = set(selected)
    returning = [p for p in tournament.last_eliminated_players if p.id in chosen]
    tournament.last_eliminated_players = [
        p for p in tournament.last_eliminated_players if p.id not in chosen
    ]
    tournament.eliminated_players = [
        p for p in tournament.eliminated_players if p.id not in chosen
    ]
    for player in returning:
        player.eliminated = False
        tournament.players.append(player)

    logger.info(
        f"Added back from last eliminated: {', '.join(p.name for p in returning)}"
    )

    if len(tournament.players) == required:
        tournament.state = TournamentState.SEMI_FINALS
        logger.info(f"Tournament {tournament.id} moved to semi-finals")
    return tournament


def start_semi_finals(tournament: Tournament) -> Tournament:
    """Move from FinalSelection to SemiFinals when no add-back is needed.

    Raises:
        TournamentStateException: Not in FinalSelection, or roster is not
            exactly bracket size
    """
    tournament.require_state(TournamentState.FINAL_SELECTION)
    required = tournament.players_required_for_semi()
    if len(tournament.players) != required:
        raise TournamentStateException(
            f"Semi-finals need exactly {required} players "
            f"(have {len(tournament.players)})"
        )
    tournament.state = TournamentState.SEMI_FINALS
    logger.info(f"Tournament {tournament.id} moved to semi-finals")
    return tournament
