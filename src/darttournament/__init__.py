"""Dart Tournament: a multi-round elimination dart tournament tracker.

Players enter, play group play rounds in teams, are eliminated at a loss
limit and the survivors go through semi-finals and finals.
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

from darttournament.controllers.tournament import (
    add_players_back_from_last_eliminated,
    generate_group_play_matches,
    generate_semi_final_matches,
    process_finals_results,
    process_group_play_results,
    process_semi_final_results,
    set_finals_match_winner,
    set_match_winner,
    start_semi_finals,
    start_tournament,
    submit_final_round,
)
from darttournament.exceptions import DartTournamentException, TournamentException
from darttournament.models import (
    GameMatch,
    Player,
    PlayerStats,
    RoundType,
    Team,
    Tournament,
    TournamentConfig,
    TournamentMode,
    TournamentState,
)

__version__ = "0.1.0"

__all__ = [
    "DartTournamentException",
    "GameMatch",
    "Player",
    "PlayerStats",
    "RoundType",
    "Team",
    "Tournament",
    "TournamentConfig",
    "TournamentException",
    "TournamentMode",
    "TournamentState",
    "add_players_back_from_last_eliminated",
    "generate_group_play_matches",
    "generate_semi_final_matches",
    "process_finals_results",
    "process_group_play_results",
    "process_semi_final_results",
    "set_finals_match_winner",
    "set_match_winner",
    "start_semi_finals",
    "start_tournament",
    "submit_final_round",
]
