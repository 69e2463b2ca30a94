from darttournament.models.player.base_player import Player, PlayerStats, new_player_id

__all__ = [
    "Player",
    "PlayerStats",
    "new_player_id",
]
