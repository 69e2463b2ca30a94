"""
In-memory session storage for live tournaments.

One SessionStore per server lifetime maps tournament id to the tournament
and its last activity time. A single coarse lock guards every lookup and
mutation, so a request never observes a half-applied operation. Entries
idle for longer than the inactivity timeout are dropped by ``sweep()``.
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

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterator

from darttournament.constants import DEFAULT_MAX_LOSSES, INACTIVITY_TIMEOUT_SECONDS
from darttournament.exceptions import TournamentNotFoundException
from darttournament.models import Tournament, TournamentMode
from darttournament.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class SessionEntry:
    tournament: Tournament
    last_activity: float


class SessionStore:
    """Thread-safe registry of tournaments keyed by id."""

    def __init__(
        self,
        inactivity_timeout: float = INACTIVITY_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.inactivity_timeout = inactivity_timeout
        self._clock = clock
        self._entries: Dict[str, SessionEntry] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, tournament_id: object) -> bool:
        with self._lock:
            return tournament_id in self._entries

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def create(
        self,
        max_losses: int = DEFAULT_MAX_LOSSES,
        mode: TournamentMode = TournamentMode.TWO_V_TWO,
    ) -> Tournament:
        """Create, store and return a new tournament in Setup."""
        tournament = Tournament(max_losses=max_losses, mode=mode)
        with self._lock:
            self._entries[tournament.id] = SessionEntry(tournament, self._clock())
        logger.info(
            f"Created tournament {tournament.id} "
            f"(max losses {max_losses}, {tournament.mode.value})"
        )
        return tournament

    @contextmanager
    def session(self, tournament_id: str) -> Iterator[Tournament]:
        """Hold the store lock while working on one tournament.

        Refreshes the tournament's activity time on entry.

        Raises:
            TournamentNotFoundException: No live tournament with this id
        """
        with self._lock:
            entry = self._entries.get(tournament_id)
            if entry is None:
                raise TournamentNotFoundException(tournament_id)
            entry.last_activity = self._clock()
            yield entry.tournament

    def get(self, tournament_id: str) -> Tournament:
        """Return a tournament by id, refreshing its activity time."""
        with self.session(tournament_id) as tournament:
            return tournament

    def remove(self, tournament_id: str) -> bool:
        with self._lock:
            return self._entries.pop(tournament_id, None) is not None

    # ------------------------------------------------------------------
    # Eviction
    # ------------------------------------------------------------------

    def sweep(self) -> int:
        """Drop tournaments idle for longer than the inactivity timeout.

        Returns:
            Number of tournaments removed
        """
        now = self._clock()
        with self._lock:
            stale = [
                tournament_id
                for tournament_id, entry in self._entries.items()
                if now - entry.last_activity >= self.inactivity_timeout
            ]
            for tournament_id in stale:
                del self._entries[tournament_id]
        if stale:
            logger.info(f"Cleaned up {len(stale)} inactive tournament(s)")
        return len(stale)
