"""Data structures for the dart tournament: players, matches, tournament state."""

from darttournament.models.enums import RoundType, Team, TournamentMode, TournamentState
from darttournament.models.player import Player, PlayerStats
from darttournament.models.tournament import GameMatch, Tournament, TournamentConfig

__all__ = [
    "GameMatch",
    "Player",
    "PlayerStats",
    "RoundType",
    "Team",
    "Tournament",
    "TournamentConfig",
    "TournamentMode",
    "TournamentState",
]
