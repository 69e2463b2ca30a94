"""
server/app.py - FastAPI application exposing tournament operations as JSON.

Endpoints (all under /api):
    GET    /health                                        Health check
    POST   /tournaments                                   Create a tournament
    GET    /tournaments/{id}                              Fetch a tournament
    POST   /tournaments/{id}/players                      Add a player
    DELETE /tournaments/{id}/players/{player_id}          Remove a player
    PUT    /tournaments/{id}/max-losses                   Set max losses
    PUT    /tournaments/{id}/mode                         Set 1v1 / 2v2
    POST   /tournaments/{id}/start                        Start the tournament
    POST   /tournaments/{id}/matches/generate             Generate a group play round
    PUT    /tournaments/{id}/matches/winner               Set a group play winner
    POST   /tournaments/{id}/matches/submit               Submit the group play round
    PUT    /tournaments/{id}/players/{player_id}/losses   Edit a player's losses
    POST   /tournaments/{id}/players/{player_id}/eliminate  Eliminate a player
    POST   /tournaments/{id}/restart                      Back to setup, same names
    POST   /tournaments/{id}/final-selection/add-back     Re-add last eliminated players
    POST   /tournaments/{id}/final-selection/start-semi   Go to semi-finals
    POST   /tournaments/{id}/finals/matches               Generate semi-finals
    PUT    /tournaments/{id}/finals/winner                Set a bracket winner
    POST   /tournaments/{id}/finals/submit                Submit the bracket round

Every successful call returns the full tournament. Tournament errors map to
400 with the error kind and payload; unknown tournament ids map to 404.
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

import asyncio
from contextlib import asynccontextmanager
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from darttournament.constants import DEFAULT_MAX_LOSSES, SERVICE_NAME
from darttournament.controllers.tournament import (
    add_players_back_from_last_eliminated,
    generate_group_play_matches,
    generate_semi_final_matches,
    process_group_play_results,
    set_finals_match_winner,
    set_match_winner,
    start_semi_finals,
    start_tournament,
    submit_final_round,
)
from darttournament.exceptions import TournamentException, TournamentNotFoundException
from darttournament.models import Team, Tournament, TournamentMode
from darttournament.server.session_store import SessionStore
from darttournament.server.settings import ServerSettings, load_settings
from darttournament.utils import setup_logger

logger = setup_logger(__name__)


# ======================================================================
# Request Models
# ======================================================================


class CreateTournamentRequest(BaseModel):
    max_losses: int = Field(DEFAULT_MAX_LOSSES, ge=1)
    mode: TournamentMode = TournamentMode.TWO_V_TWO


class AddPlayerRequest(BaseModel):
    name: str


class MaxLossesRequest(BaseModel):
    max_losses: int


class SetModeRequest(BaseModel):
    mode: TournamentMode


class SetMatchWinnerRequest(BaseModel):
    match_id: str
    team: Team


class SetPlayerLossesRequest(BaseModel):
    losses: int = Field(ge=0)


class AddBackRequest(BaseModel):
    player_ids: List[str]


class HealthResponse(BaseModel):
    ok: bool
    service: str


# ======================================================================
# Helpers
# ======================================================================


def get_store(request: Request) -> SessionStore:
    return request.app.state.store


def _apply(
    store: SessionStore,
    tournament_id: str,
    operation: Callable[[Tournament], Any],
) -> Dict[str, Any]:
    """Run one operation on a tournament under the store lock and serialize it."""
    with store.session(tournament_id) as tournament:
        operation(tournament)
        return tournament.to_dict()


async def _sweep_periodically(store: SessionStore, interval: float) -> None:
    while True:
        await asyncio.sleep(interval)
        try:
            await asyncio.to_thread(store.sweep)
        except Exception:
            logger.exception("Session cleanup failed")


# ======================================================================
# Application
# ======================================================================


def create_app(
    settings: Optional[ServerSettings] = None,
    store: Optional[SessionStore] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Server settings; read from the environment when omitted
        store: Session store; a fresh one using ``settings`` when omitted
    """
    if settings is None:
        settings = load_settings()
    if store is None:
        store = SessionStore(inactivity_timeout=settings.inactivity_timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Session cleanup every {settings.cleanup_interval}s, "
            f"inactivity timeout {settings.inactivity_timeout}s"
        )
        sweeper = asyncio.create_task(
            _sweep_periodically(app.state.store, settings.cleanup_interval)
        )
        yield
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass

    app = FastAPI(title="Dart Tournament", lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings

    @app.exception_handler(TournamentException)
    async def tournament_error(request: Request, exc: TournamentException):
        return JSONResponse(status_code=400, content=exc.to_dict())

    @app.exception_handler(TournamentNotFoundException)
    async def tournament_missing(request: Request, exc: TournamentNotFoundException):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    _register_routes(app)
    return app


def _register_routes(app: FastAPI) -> None:
    @app.get("/api/health", response_model=HealthResponse)
    def api_health() -> Dict[str, Any]:
        return {"ok": True, "service": SERVICE_NAME}

    @app.get("/favicon.ico", status_code=204)
    def favicon() -> Response:
        return Response(status_code=204)

    @app.post("/api/tournaments")
    def api_create_tournament(
        req: Optional[CreateTournamentRequest] = None,
        store: SessionStore = Depends(get_store),
    ) -> Dict[str, Any]:
        req = req or CreateTournamentRequest()
        return store.create(max_losses=req.max_losses, mode=req.mode).to_dict()

    @app.get("/api/tournaments/{tournament_id}")
    def api_get_tournament(
        tournament_id: str, store: SessionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, lambda t: None)

    @app.post("/api/tournaments/{tournament_id}/players")
    def api_add_player(
        tournament_id: str,
        req: AddPlayerRequest,
        store: SessionStore = Depends(get_store),
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, lambda t: t.add_player(req.name))

    @app.delete("/api/tournaments/{tournament_id}/players/{player_id}")
    def api_remove_player(
        tournament_id: str, player_id: str, store: SessionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, lambda t: t.remove_player(player_id))

    @app.put("/api/tournaments/{tournament_id}/max-losses")
    def api_set_max_losses(
        tournament_id: str,
        req: MaxLossesRequest,
        store: SessionStore = Depends(get_store),
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, lambda t: t.set_max_losses(req.max_losses))

    @app.put("/api/tournaments/{tournament_id}/mode")
    def api_set_mode(
        tournament_id: str,
        req: SetModeRequest,
        store: SessionStore = Depends(get_store),
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, lambda t: t.set_mode(req.mode))

    @app.post("/api/tournaments/{tournament_id}/start")
    def api_start_tournament(
        tournament_id: str, store: SessionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, start_tournament)

    @app.post("/api/tournaments/{tournament_id}/matches/generate")
    def api_generate_matches(
        tournament_id: str, store: SessionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, generate_group_play_matches)

    @app.put("/api/tournaments/{tournament_id}/matches/winner")
    def api_set_match_winner(
        tournament_id: str,
        req: SetMatchWinnerRequest,
        store: SessionStore = Depends(get_store),
    ) -> Dict[str, Any]:
        return _apply(
            store, tournament_id, lambda t: set_match_winner(t, req.match_id, req.team)
        )

    @app.post("/api/tournaments/{tournament_id}/matches/submit")
    def api_submit_match_results(
        tournament_id: str, store: SessionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, process_group_play_results)

    @app.put("/api/tournaments/{tournament_id}/players/{player_id}/losses")
    def api_set_player_losses(
        tournament_id: str,
        player_id: str,
        req: SetPlayerLossesRequest,
        store: SessionStore = Depends(get_store),
    ) -> Dict[str, Any]:
        return _apply(
            store, tournament_id, lambda t: t.set_player_losses(player_id, req.losses)
        )

    @app.post("/api/tournaments/{tournament_id}/players/{player_id}/eliminate")
    def api_eliminate_player(
        tournament_id: str, player_id: str, store: SessionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, lambda t: t.eliminate_player(player_id))

    @app.post("/api/tournaments/{tournament_id}/restart")
    def api_restart_tournament(
        tournament_id: str, store: SessionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, lambda t: t.restart_tournament())

    @app.post("/api/tournaments/{tournament_id}/final-selection/add-back")
    def api_final_selection_add_back(
        tournament_id: str,
        req: AddBackRequest,
        store: SessionStore = Depends(get_store),
    ) -> Dict[str, Any]:
        return _apply(
            store,
            tournament_id,
            lambda t: add_players_back_from_last_eliminated(t, req.player_ids),
        )

    @app.post("/api/tournaments/{tournament_id}/final-selection/start-semi")
    def api_final_selection_start_semi(
        tournament_id: str, store: SessionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, start_semi_finals)

    @app.post("/api/tournaments/{tournament_id}/finals/matches")
    def api_finals_generate_matches(
        tournament_id: str, store: SessionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, generate_semi_final_matches)

    @app.put("/api/tournaments/{tournament_id}/finals/winner")
    def api_finals_set_winner(
        tournament_id: str,
        req: SetMatchWinnerRequest,
        store: SessionStore = Depends(get_store),
    ) -> Dict[str, Any]:
        return _apply(
            store,
            tournament_id,
            lambda t: set_finals_match_winner(t, req.match_id, req.team),
        )

    @app.post("/api/tournaments/{tournament_id}/finals/submit")
    def api_finals_submit(
        tournament_id: str, store: SessionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return _apply(store, tournament_id, submit_final_round)
