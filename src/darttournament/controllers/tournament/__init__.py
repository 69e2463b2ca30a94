"""Tournament phase logic: setup, group play, final selection and finals."""

from darttournament.controllers.tournament.final_selection import (
    add_players_back_from_last_eliminated,
    start_semi_finals,
)
from darttournament.controllers.tournament.finals import (
    generate_semi_final_matches,
    process_finals_results,
    process_semi_final_results,
    set_finals_match_winner,
    submit_final_round,
)
from darttournament.controllers.tournament.group_play import (
    generate_group_play_matches,
    process_group_play_results,
    set_match_winner,
)
from darttournament.controllers.tournament.setup_phase import start_tournament

__all__ = [
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
