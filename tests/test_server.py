"""
tests/test_server.py - HTTP API tests.

Uses FastAPI's TestClient, no server process needed.
"""

import asyncio
import logging

import pytest
from fastapi.testclient import TestClient

from darttournament.server import ServerSettings, SessionStore, create_app
from darttournament.server.app import _sweep_periodically


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def client(store):
    app = create_app(ServerSettings(), store)
    with TestClient(app) as c:
        yield c


def _create(client, **body):
    resp = client.post("/api/tournaments", json=body or None)
    assert resp.status_code == 200
    return resp.json()


def _add_players(client, tournament_id, count):
    data = None
    for i in range(count):
        resp = client.post(
            f"/api/tournaments/{tournament_id}/players", json={"name": f"Player {i}"}
        )
        assert resp.status_code == 200
        data = resp.json()
    return data


# ======================================================================
# Basics
# ======================================================================


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "service": "dart-tournament"}

    def test_favicon(self, client):
        assert client.get("/favicon.ico").status_code == 204


class TestCreateTournament:
    def test_defaults(self, client, store):
        data = _create(client)
        assert data["state"] == "setup"
        assert data["max_losses"] == 3
        assert data["mode"] == "two_v_two"
        assert data["players"] == []
        assert data["id"] in store

    def test_with_body(self, client):
        data = _create(client, max_losses=1, mode="one_v_one")
        assert data["max_losses"] == 1
        assert data["mode"] == "one_v_one"

    def test_rejects_zero_max_losses(self, client):
        resp = client.post("/api/tournaments", json={"max_losses": 0})
        assert resp.status_code == 422

    def test_get_unknown(self, client):
        resp = client.get("/api/tournaments/nope")
        assert resp.status_code == 404
        assert resp.json() == {"error": "No tournament"}

    def test_get_existing(self, client):
        created = _create(client)
        resp = client.get(f"/api/tournaments/{created['id']}")
        assert resp.status_code == 200
        assert resp.json()["id"] == created["id"]


# ======================================================================
# Roster
# ======================================================================


class TestRoster:
    def test_add_and_remove_player(self, client):
        tid = _create(client)["id"]
        data = _add_players(client, tid, 2)
        assert [p["name"] for p in data["players"]] == ["Player 0", "Player 1"]

        player_id = data["players"][0]["id"]
        resp = client.delete(f"/api/tournaments/{tid}/players/{player_id}")
        assert resp.status_code == 200
        assert [p["name"] for p in resp.json()["players"]] == ["Player 1"]

    def test_duplicate_name_is_400(self, client):
        tid = _create(client)["id"]
        _add_players(client, tid, 1)
        resp = client.post(
            f"/api/tournaments/{tid}/players", json={"name": " player 0 "}
        )
        assert resp.status_code == 400
        body = resp.json()
        assert body["kind"] == "DuplicatePlayerName"
        assert body["error"] == "A player with this name already exists"

    def test_remove_unknown_player(self, client):
        tid = _create(client)["id"]
        resp = client.delete(f"/api/tournaments/{tid}/players/ghost")
        assert resp.status_code == 400
        assert resp.json()["kind"] == "PlayerNotFound"
        assert resp.json()["player_id"] == "ghost"

    def test_settings_in_setup(self, client):
        tid = _create(client)["id"]
        resp = client.put(f"/api/tournaments/{tid}/max-losses", json={"max_losses": 5})
        assert resp.json()["max_losses"] == 5
        resp = client.put(f"/api/tournaments/{tid}/mode", json={"mode": "one_v_one"})
        assert resp.json()["mode"] == "one_v_one"

    def test_invalid_max_losses_is_400(self, client):
        tid = _create(client)["id"]
        resp = client.put(f"/api/tournaments/{tid}/max-losses", json={"max_losses": 0})
        assert resp.status_code == 400
        assert resp.json()["kind"] == "InvalidState"


# ======================================================================
# Tournament flow
# ======================================================================


class TestStart:
    def test_not_enough_players(self, client):
        tid = _create(client)["id"]
        _add_players(client, tid, 7)
        resp = client.post(f"/api/tournaments/{tid}/start")
        assert resp.status_code == 400
        assert resp.json() == {
            "error": "Need at least 8 players to start",
            "kind": "NotEnoughPlayersToStart",
            "required": 8,
        }

    def test_start_into_group_play(self, client):
        tid = _create(client)["id"]
        _add_players(client, tid, 10)
        resp = client.post(f"/api/tournaments/{tid}/start")
        assert resp.status_code == 200
        assert resp.json()["state"] == "group_play"


class TestGroupPlay:
    def test_round_trip(self, client):
        tid = _create(client, max_losses=2)["id"]
        _add_players(client, tid, 10)
        client.post(f"/api/tournaments/{tid}/start")

        data = client.post(f"/api/tournaments/{tid}/matches/generate").json()
        assert len(data["matches"]) == 2
        assert len(data["unused_players"]) == 2

        resp = client.post(f"/api/tournaments/{tid}/matches/submit")
        assert resp.status_code == 400
        assert resp.json()["kind"] == "IncompleteResults"

        for match in data["matches"]:
            resp = client.put(
                f"/api/tournaments/{tid}/matches/winner",
                json={"match_id": match["id"], "team": "one"},
            )
            assert resp.status_code == 200

        data = client.post(f"/api/tournaments/{tid}/matches/submit").json()
        assert data["state"] == "group_play"
        assert len(data["players"]) == 10
        assert sum(p["wins"] for p in data["players"]) == 4
        assert sum(p["losses"] for p in data["players"]) == 4

    def test_bad_team_is_422(self, client):
        tid = _create(client)["id"]
        _add_players(client, tid, 9)
        client.post(f"/api/tournaments/{tid}/start")
        data = client.post(f"/api/tournaments/{tid}/matches/generate").json()
        resp = client.put(
            f"/api/tournaments/{tid}/matches/winner",
            json={"match_id": data["matches"][0]["id"], "team": "three"},
        )
        assert resp.status_code == 422

    def test_edit_losses_and_eliminate(self, client):
        tid = _create(client)["id"]
        data = _add_players(client, tid, 9)
        client.post(f"/api/tournaments/{tid}/start")
        first, second = data["players"][0]["id"], data["players"][1]["id"]

        resp = client.put(
            f"/api/tournaments/{tid}/players/{first}/losses", json={"losses": 2}
        )
        assert resp.status_code == 200
        player = next(p for p in resp.json()["players"] if p["id"] == first)
        assert player["losses"] == 2

        resp = client.post(f"/api/tournaments/{tid}/players/{second}/eliminate")
        assert [p["id"] for p in resp.json()["eliminated_players"]] == [second]

    def test_restart(self, client):
        tid = _create(client)["id"]
        _add_players(client, tid, 9)
        client.post(f"/api/tournaments/{tid}/start")
        client.post(f"/api/tournaments/{tid}/matches/generate")

        data = client.post(f"/api/tournaments/{tid}/restart").json()
        assert data["id"] == tid
        assert data["state"] == "setup"
        assert len(data["players"]) == 9
        assert data["matches"] == []


class TestFinals:
    def _decide(self, client, tid, matches, team):
        for match in matches:
            resp = client.put(
                f"/api/tournaments/{tid}/finals/winner",
                json={"match_id": match["id"], "team": team},
            )
            assert resp.status_code == 200

    def test_eight_players_to_champions(self, client):
        tid = _create(client)["id"]
        _add_players(client, tid, 8)
        data = client.post(f"/api/tournaments/{tid}/start").json()
        assert data["state"] == "final_selection"

        data = client.post(f"/api/tournaments/{tid}/final-selection/start-semi").json()
        assert data["state"] == "semi_finals"

        data = client.post(f"/api/tournaments/{tid}/finals/matches").json()
        assert len(data["matches"]) == 2
        self._decide(client, tid, data["matches"], "one")

        data = client.post(f"/api/tournaments/{tid}/finals/submit").json()
        assert data["state"] == "finals"
        assert len(data["players"]) == 4
        assert len(data["bracket_semi_final_matches"]) == 2

        self._decide(client, tid, data["matches"], "two")
        data = client.post(f"/api/tournaments/{tid}/finals/submit").json()
        assert data["state"] == "completed"
        assert data["bracket_finals_result"] == "two"
        assert data["bracket_finals_match"]["winner"] == "two"

    def test_submit_in_group_play_is_400(self, client):
        tid = _create(client)["id"]
        _add_players(client, tid, 9)
        client.post(f"/api/tournaments/{tid}/start")
        resp = client.post(f"/api/tournaments/{tid}/finals/submit")
        assert resp.status_code == 400
        assert resp.json()["kind"] == "InvalidState"

    def test_add_back_wrong_count(self, client):
        tid = _create(client, max_losses=1)["id"]
        _add_players(client, tid, 10)
        client.post(f"/api/tournaments/{tid}/start")
        data = client.post(f"/api/tournaments/{tid}/matches/generate").json()
        for match in data["matches"]:
            client.put(
                f"/api/tournaments/{tid}/matches/winner",
                json={"match_id": match["id"], "team": "one"},
            )
        data = client.post(f"/api/tournaments/{tid}/matches/submit").json()
        assert data["state"] == "final_selection"
        eligible = [p["id"] for p in data["last_eliminated_players"]]

        resp = client.post(
            f"/api/tournaments/{tid}/final-selection/add-back",
            json={"player_ids": eligible[:1]},
        )
        assert resp.status_code == 400
        assert resp.json()["kind"] == "WrongNumberOfPlayers"
        assert resp.json()["needed"] == 2

        resp = client.post(
            f"/api/tournaments/{tid}/final-selection/add-back",
            json={"player_ids": eligible[:2]},
        )
        assert resp.status_code == 200
        assert resp.json()["state"] == "semi_finals"


# ======================================================================
# App factory and cleanup
# ======================================================================


class TestAppFactory:
    def test_uses_given_empty_store(self):
        store = SessionStore(inactivity_timeout=5)
        app = create_app(ServerSettings(), store)
        assert app.state.store is store

        with TestClient(app) as c:
            tid = c.post("/api/tournaments").json()["id"]
        assert len(store) == 1
        assert tid in store


class FailingStore:
    def __init__(self):
        self.calls = 0

    def sweep(self):
        self.calls += 1
        raise RuntimeError("boom")


class TestSweeper:
    def test_sweep_errors_do_not_stop_cleanup(self, caplog):
        store = FailingStore()

        async def run():
            task = asyncio.create_task(_sweep_periodically(store, 0.01))
            await asyncio.sleep(0.1)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        with caplog.at_level(logging.ERROR, logger="darttournament"):
            asyncio.run(run())
        assert store.calls >= 2
        assert "Session cleanup failed" in caplog.text
