import pytest

from darttournament import Tournament, TournamentMode, TournamentState, start_tournament
from darttournament.exceptions import (
    NotEnoughPlayersToStartException,
    TournamentStateException,
)


def _tournament_with(names, mode=TournamentMode.TWO_V_TWO, max_losses=2):
    tournament = Tournament(max_losses=max_losses, mode=mode)
    for name in names:
        tournament.add_player(name)
    return tournament


def test_start_requires_bracket_size_players():
    tournament = _tournament_with(["A", "B", "C", "D"])
    with pytest.raises(NotEnoughPlayersToStartException) as excinfo:
        start_tournament(tournament)
    assert excinfo.value.required == 8
    assert excinfo.value.to_dict() == {
        "error": "Need at least 8 players to start",
        "kind": "NotEnoughPlayersToStart",
        "required": 8,
    }
    assert tournament.state is TournamentState.SETUP


def test_start_with_exactly_bracket_size_skips_group_play():
    tournament = _tournament_with([f"P{i}" for i in range(8)])
    start_tournament(tournament)
    assert tournament.state is TournamentState.FINAL_SELECTION


def test_start_with_more_players_enters_group_play():
    tournament = _tournament_with([f"P{i}" for i in range(9)])
    start_tournament(tournament)
    assert tournament.state is TournamentState.GROUP_PLAY


def test_start_one_v_one_thresholds():
    short = _tournament_with(["A", "B", "C"], mode=TournamentMode.ONE_V_ONE)
    with pytest.raises(NotEnoughPlayersToStartException) as excinfo:
        start_tournament(short)
    assert excinfo.value.required == 4

    exact = _tournament_with(["A", "B", "C", "D"], mode=TournamentMode.ONE_V_ONE)
    start_tournament(exact)
    assert exact.state is TournamentState.FINAL_SELECTION

    more = _tournament_with(["A", "B", "C", "D", "E"], mode=TournamentMode.ONE_V_ONE)
    start_tournament(more)
    assert more.state is TournamentState.GROUP_PLAY


def test_start_twice_is_rejected():
    tournament = _tournament_with([f"P{i}" for i in range(9)])
    start_tournament(tournament)
    with pytest.raises(TournamentStateException):
        start_tournament(tournament)
    assert tournament.state is TournamentState.GROUP_PLAY
