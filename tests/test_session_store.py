import threading

import pytest

from darttournament import TournamentMode, TournamentState
from darttournament.exceptions import TournamentNotFoundException
from darttournament.server import SessionStore


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SessionStore(inactivity_timeout=60, clock=clock)


def test_create_stores_tournament(store):
    tournament = store.create(max_losses=2, mode=TournamentMode.ONE_V_ONE)
    assert tournament.id in store
    assert len(store) == 1
    assert tournament.state is TournamentState.SETUP
    assert tournament.max_losses == 2
    assert store.get(tournament.id) is tournament


def test_create_gives_unique_ids(store):
    ids = {store.create().id for _ in range(20)}
    assert len(ids) == 20


def test_unknown_id_raises(store):
    with pytest.raises(TournamentNotFoundException) as excinfo:
        store.get("missing")
    assert excinfo.value.tournament_id == "missing"
    assert str(excinfo.value) == "No tournament"


def test_session_yields_live_tournament(store):
    tournament = store.create()
    with store.session(tournament.id) as live:
        live.add_player("Anna")
    assert [p.name for p in store.get(tournament.id).players] == ["Anna"]


def test_sweep_drops_idle_tournaments(store, clock):
    idle = store.create()
    clock.now += 30
    fresh = store.create()
    clock.now += 30

    assert store.sweep() == 1
    assert idle.id not in store
    assert fresh.id in store


def test_access_refreshes_activity(store, clock):
    tournament = store.create()
    clock.now += 50
    store.get(tournament.id)
    clock.now += 50
    assert store.sweep() == 0
    clock.now += 10
    assert store.sweep() == 1
    assert len(store) == 0


def test_remove(store):
    tournament = store.create()
    assert store.remove(tournament.id)
    assert not store.remove(tournament.id)
    assert tournament.id not in store


def test_concurrent_adds_are_serialized(store):
    tournament = store.create()
    errors = []

    def add(index):
        try:
            with store.session(tournament.id) as live:
                live.add_player(f"Player {index}")
        except Exception as exc:  # pragma: no cover - surfaced by the assert below
            errors.append(exc)

    threads = [threading.Thread(target=add, args=(i,)) for i in range(25)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(store.get(tournament.id).players) == 25
