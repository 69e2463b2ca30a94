from darttournament.models.tournament.game_match import GameMatch
from darttournament.models.tournament.tournament import Tournament
from darttournament.models.tournament.tournament_config import TournamentConfig

__all__ = [
    "GameMatch",
    "Tournament",
    "TournamentConfig",
]
