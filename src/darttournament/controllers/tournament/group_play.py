"""Group stage: match generation and result processing.

Each group play round seats every non-eliminated player either in a match
or on the sit-out list, records the winners as they are reported, and then
applies wins and losses in one step, eliminating players who reach the
tournament's loss limit.
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

from darttournament.exceptions import (
    IncompleteResultsException,
    NotEnoughPlayersException,
    PlayerNotFoundException,
    TournamentStateException,
)
from darttournament.models.enums import RoundType, Team, TournamentState
from darttournament.models.player import Player
from darttournament.models.tournament import GameMatch, Tournament
from darttournament.utils import setup_logger

logger = setup_logger(__name__)


def generate_group_play_matches(
    tournament: Tournament, rng: Optional[random.Random] = None
) -> Tournament:
    """Generate matches for the current group play round.

    1. Take every non-eliminated player (sit-outs of a discarded round included).
    2. Sort by ``internal_times_sat_out`` ascending, ties broken by a
       single-use random value.
    3. The first ``n % k`` players sit out (``k`` = 2 for 1v1, 4 for 2v2)
       and have their sit-out counters bumped.
    4. Shuffle the rest and chunk them into matches of ``k``; the first
       half of each chunk is team one.

    Args:
        tournament: Tournament in GroupPlay
        rng: Random source; defaults to the ``random`` module

    Raises:
        TournamentStateException: Not in GroupPlay
        NotEnoughPlayersException: Fewer than ``k`` players available
    """
    tournament.require_state(TournamentState.GROUP_PLAY)
    draw = rng.random if rng else random.random
    shuffle = rng.shuffle if rng else random.shuffle
    per_match = tournament.players_per_match()

    available = [p for p in tournament.active_roster if not p.eliminated]
    if len(available) < per_match:
        raise NotEnoughPlayersException(per_match)

    tiebreak = {p.id: draw() for p in available}
    available.sort(key=lambda p: (p.internal_times_sat_out, tiebreak[p.id]))

    excess = len(available) % per_match
    sitting_out = available[:excess]
    playing = available[excess:]
    shuffle(playing)
    matches = _chunk_into_matches(playing, per_match)

    for player in sitting_out:
        player.record_sat_out()
    sitting_out_ids = {p.id for p in sitting_out}
    tournament.players = [
        p for p in tournament.active_roster if p.id not in sitting_out_ids
    ]
    tournament.unused_players = sitting_out
    tournament.matches = matches
    tournament.match_results.clear()
    tournament.round_number += 1

    logger.info(
        f"Created group play round {tournament.round_number}: "
        f"{len(matches)} matches, sitting out: "
        f"{', '.join(p.name for p in sitting_out) or 'None'}"
    )
    return tournament


def _chunk_into_matches(players: List[Player], per_match: int) -> List[GameMatch]:
    half = per_match // 2
    matches = []
    for start in range(0, len(players) - per_match + 1, per_match):
        chunk = [p.id for p in players[start : start + per_match]]
        matches.append(
            GameMatch(team_1=chunk[:half], team_2=chunk[half:], round=RoundType.GROUP_PLAY)
        )
    return matches


def set_match_winner(tournament: Tournament, match_id: str, team: Team) -> Tournament:
    """Record (or overwrite) the winner of a group play match.

    Raises:
        TournamentStateException: Not in GroupPlay, or unknown match id
    """
    tournament.require_state(TournamentState.GROUP_PLAY)
    if tournament.get_match(match_id) is None:
        raise TournamentStateException("Match not found")
    tournament.match_results[match_id] = Team(team)
    logger.debug(f"Match {match_id} winner: team {Team(team).value}")
    return tournament


def process_group_play_results(tournament: Tournament) -> Tournament:
    """Apply the current round's results and close the round.

    Losers gain a loss and are eliminated on reaching ``max_losses``;
    winners gain a win. Everyone flagged eliminated (including by a manual
    loss edit) leaves the roster for ``eliminated_players`` and
    ``last_eliminated_players``. Sit-outs rejoin the roster. Once the roster
    is at or below bracket size the tournament moves to FinalSelection.

    Raises:
        TournamentStateException: Not in GroupPlay
        IncompleteResultsException: A match has no recorded winner
        PlayerNotFoundException: A match references a player not on the roster
    """
    tournament.require_state(TournamentState.GROUP_PLAY)
    for match in tournament.matches:
        if match.id not in tournament.match_results:
            raise IncompleteResultsException()

    by_id: Dict[str, Player] = {p.id: p for p in tournament.players}
    for match in tournament.matches:
        for player_id in match.player_ids:
            if player_id not in by_id:
                raise PlayerNotFoundException(player_id)

    max_losses = tournament.max_losses
    for match in tournament.matches:
        winner = tournament.match_results[match.id]
        for player_id in match.losing_team(winner):
            player = by_id[player_id]
            player.add_loss()
            if player.losses >= max_losses:
                player.eliminate()
        for player_id in match.winning_team(winner):
            by_id[player_id].add_win()

    roster = tournament.active_roster
    eliminated = [p for p in roster if p.eliminated]
    tournament.last_eliminated_players = [p.copy() for p in eliminated]
    tournament.eliminated_players.extend(p.copy() for p in eliminated)
    tournament.players = [p for p in roster if not p.eliminated]

    tournament.matches = []
    tournament.unused_players = []
    tournament.match_results.clear()

    logger.info(
        f"Processed group play round {tournament.round_number}: "
        f"eliminated {', '.join(p.name for p in eliminated) or 'None'}, "
        f"{len(tournament.players)} players remain"
    )

    if len(tournament.players) <= tournament.players_required_for_semi():
        tournament.state = TournamentState.FINAL_SELECTION
        logger.info(f"Tournament {tournament.id} moved to final selection")
    return tournament
