"""Final rounds: semi-finals and finals (single-elimination bracket).

The tournament ends after the finals; the winning side of the finals match
are the champions (two players in 2v2, one in 1v1). No elimination rules
apply here, but every bracket match still counts towards wins and losses.
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

import random
from typing import Dict, List, Optional

from darttournament.constants import FINALS_MATCH_COUNT, SEMI_FINAL_MATCH_COUNT
from darttournament.exceptions import (
    IncompleteResultsException,
    PlayerNotFoundException,
    TournamentStateException,
)
from darttournament.models.enums import RoundType, Team, TournamentState
from darttournament.models.player import Player
from darttournament.models.tournament import GameMatch, Tournament
from darttournament.utils import setup_logger

logger = setup_logger(__name__)


def generate_semi_final_matches(
    tournament: Tournament, rng: Optional[random.Random] = None
) -> Tournament:
    """Generate the two semi-final matches with a random draw.

    2v2 (8 players): ``[0,1] vs [2,3]`` and ``[4,5] vs [6,7]`` after a
    shuffle. 1v1 (4 players): ``[0] vs [1]`` and ``[2] vs [3]``.

    Raises:
        TournamentStateException: Not in SemiFinals, or roster is not
            exactly bracket size
    """
    tournament.require_state(TournamentState.SEMI_FINALS)
    required = tournament.players_required_for_semi()
    if len(tournament.players) != required:
        raise TournamentStateException(
            f"Semi-finals need exactly {required} players "
            f"(have {len(tournament.players)})"
        )

    players = list(tournament.players)
    if rng:
        rng.shuffle(players)
    else:
        random.shuffle(players)

    team_size = tournament.mode.team_size
    match_size = team_size * 2
    matches = []
    for index in range(SEMI_FINAL_MATCH_COUNT):
        chunk = [p.id for p in players[index * match_size : (index + 1) * match_size]]
        matches.append(
            GameMatch(
                team_1=chunk[:team_size],
                team_2=chunk[team_size:],
                round=RoundType.SEMI_FINALS,
            )
        )

    tournament.players = players
    tournament.matches = matches
    tournament.final_match_results.clear()
    logger.info(f"Created semi-finals for tournament {tournament.id}")
    return tournament


def set_finals_match_winner(
    tournament: Tournament, match_id: str, team: Team
) -> Tournament:
    """Record (or overwrite) the winner of a semi-final or finals match.

    Raises:
        TournamentStateException: Unknown match id
    """
    if tournament.get_match(match_id) is None:
        raise TournamentStateException("Match not found")
    tournament.final_match_results[match_id] = Team(team)
    logger.debug(f"Bracket match {match_id} winner: team {Team(team).value}")
    return tournament


def _check_round_ready(tournament: Tournament, match_count: int) -> Dict[str, Player]:
    """Validate an in-flight bracket round and index its players by id."""
    if len(tournament.matches) != match_count:
        raise TournamentStateException(
            f"Expected {match_count} matches, found {len(tournament.matches)}"
        )
    for match in tournament.matches:
        if match.id not in tournament.final_match_results:
            raise IncompleteResultsException()

    by_id = {p.id: p for p in tournament.active_roster}
    for match in tournament.matches:
        for player_id in match.player_ids:
            if player_id not in by_id:
                raise PlayerNotFoundException(player_id)
    return by_id


def _apply_playoff_result(
    by_id: Dict[str, Player], match: GameMatch, winner: Team
) -> None:
    for player_id in match.losing_team(winner):
        by_id[player_id].add_loss()
    for player_id in match.winning_team(winner):
        by_id[player_id].add_win()


def _finalized_copy(match: GameMatch, winner: Team) -> GameMatch:
    snapshot = match.copy()
    snapshot.winner = winner
    return snapshot


def process_semi_final_results(tournament: Tournament) -> Tournament:
    """Process semi-final results and set up the finals.

    Applies wins and losses, snapshots the semi-finalists, matches and
    results for the bracket display, keeps only the winners on the roster
    and creates the finals match: first semi's winners against the second
    semi's winners.

    Raises:
        TournamentStateException: Not in SemiFinals, or not exactly two matches
        IncompleteResultsException: A semi-final has no recorded winner
    """
    tournament.require_state(TournamentState.SEMI_FINALS)
    by_id = _check_round_ready(tournament, SEMI_FINAL_MATCH_COUNT)

    results = dict(tournament.final_match_results)
    winner_ids: List[str] = []
    for match in tournament.matches:
        _apply_playoff_result(by_id, match, results[match.id])
        winner_ids.extend(match.winning_team(results[match.id]))

    tournament.bracket_semi_final_players = [p.copy() for p in tournament.players]
    tournament.bracket_semi_final_matches = [
        _finalized_copy(m, results[m.id]) for m in tournament.matches
    ]
    tournament.bracket_semi_final_results = results

    team_size = tournament.mode.team_size
    tournament.players = [by_id[player_id] for player_id in winner_ids]
    tournament.matches = [
        GameMatch(
            team_1=winner_ids[:team_size],
            team_2=winner_ids[team_size:],
            round=RoundType.FINALS,
        )
    ]
    tournament.final_match_results = {}
    tournament.state = TournamentState.FINALS

    logger.info(
        f"Semi-finals done, finalists: "
        f"{', '.join(p.name for p in tournament.players)}"
    )
    return tournament


def process_finals_results(tournament: Tournament) -> Tournament:
    """Process the finals result and complete the tournament.

    Raises:
        TournamentStateException: Not in Finals, or not exactly one match
        IncompleteResultsException: The finals match has no recorded winner
    """
    tournament.require_state(TournamentState.FINALS)
    by_id = _check_round_ready(tournament, FINALS_MATCH_COUNT)

    match = tournament.matches[0]
    winner = tournament.final_match_results[match.id]
    _apply_playoff_result(by_id, match, winner)

    tournament.bracket_finals_match = _finalized_copy(match, winner)
    tournament.bracket_finals_result = winner
    tournament.matches = []
    tournament.final_match_results = {}
    tournament.state = TournamentState.COMPLETED

    logger.info(
        f"Tournament {tournament.id} completed, champions: "
        f"{', '.join(p.name for p in tournament.champions)}"
    )
    return tournament


def submit_final_round(tournament: Tournament) -> Tournament:
    """Submit the current bracket round (semi to finals, finals to completed).

    Raises:
        TournamentStateException: Not in SemiFinals or Finals
    """
    if tournament.state is TournamentState.SEMI_FINALS:
        return process_semi_final_results(tournament)
    if tournament.state is TournamentState.FINALS:
        return process_finals_results(tournament)
    raise TournamentStateException(
        f"Invalid state for this action ({tournament.state.value})"
    )
