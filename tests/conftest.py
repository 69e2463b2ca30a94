import random

import pytest

from darttournament import Player, Team, Tournament, TournamentMode, TournamentState


def _make_tournament(
    num_players,
    max_losses=2,
    mode=TournamentMode.TWO_V_TWO,
    state=TournamentState.GROUP_PLAY,
):
    players = [Player(name=f"P{i}") for i in range(num_players)]
    tournament = Tournament.with_players(players, max_losses=max_losses, mode=mode)
    tournament.state = state
    return tournament


def _decide_all(tournament, team=Team.ONE, final=False):
    results = tournament.final_match_results if final else tournament.match_results
    for match in tournament.matches:
        results[match.id] = team
    return tournament


@pytest.fixture
def make_tournament():
    """Factory: tournament with ``P0..Pn-1`` in the given state (GroupPlay by default)."""
    return _make_tournament


@pytest.fixture
def decide_all():
    """Record the same winning team for every in-flight match."""
    return _decide_all


@pytest.fixture
def rng():
    return random.Random(1234)
