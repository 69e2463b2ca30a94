"""Exceptions for use in Dart Tournament"""

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

from typing import Any, Dict, Optional


# ========== Base Application Exception ==========


class DartTournamentException(Exception):
    """Base exception for all Dart Tournament errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Tournament Exceptions ==========


class TournamentException(DartTournamentException):
    """Base exception for tournament-related errors.

    Every subclass names its error ``kind`` and carries its own structured
    payload, so callers can branch on the class (or on ``kind``) instead of
    parsing the message.
    """

    kind = "TournamentError"
    default_message = "Tournament error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)

    def payload(self) -> Dict[str, Any]:
        """Structured context for this error (empty for plain variants)."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for API responses."""
        data = {"error": self.message, "kind": self.kind}
        data.update(self.payload())
        return data


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    kind = "InvalidState"
    default_message = "Invalid state for this action"


class NotEnoughPlayersException(TournamentException):
    """Raised when too few non-eliminated players remain to generate a round."""

    kind = "NotEnoughPlayers"

    def __init__(self, required: int):
        self.required = required
        super().__init__(f"Need at least {required} players to generate matches")

    def payload(self) -> Dict[str, Any]:
        return {"required": self.required}


class NotEnoughPlayersToStartException(TournamentException):
    """Raised when the roster is below the size needed to start."""

    kind = "NotEnoughPlayersToStart"

    def __init__(self, required: int):
        self.required = required
        super().__init__(f"Need at least {required} players to start")

    def payload(self) -> Dict[str, Any]:
        return {"required": self.required}


class IncompleteResultsException(TournamentException):
    """Raised when results are submitted before every match has a winner."""

    kind = "IncompleteResults"
    default_message = "Not all matches have a result"


class DuplicatePlayerException(TournamentException):
    """Raised when attempting to add a player that already exists."""

    kind = "DuplicatePlayerName"

    def __init__(self, name: str):
        self.name = name
        super().__init__("A player with this name already exists")

    def payload(self) -> Dict[str, Any]:
        return {"name": self.name}


class PlayerNotFoundException(TournamentException):
    """Raised when a requested player cannot be found."""

    kind = "PlayerNotFound"

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__("Player not found")

    def payload(self) -> Dict[str, Any]:
        return {"player_id": self.player_id}


class WrongNumberOfPlayersException(TournamentException):
    """Raised when final selection does not pick exactly the missing number of players."""

    kind = "WrongNumberOfPlayers"

    def __init__(self, needed: int, selected: int):
        self.needed = needed
        self.selected = selected
        super().__init__(
            f"Must select exactly {needed} players to rejoin (selected {selected})"
        )

    def payload(self) -> Dict[str, Any]:
        return {"needed": self.needed, "selected": self.selected}


class PlayerNotInLastEliminatedException(TournamentException):
    """Raised when final selection names a player outside the last eliminated group."""

    kind = "PlayerNotInLastEliminated"

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__("Selected player is not in the last eliminated list")

    def payload(self) -> Dict[str, Any]:
        return {"player_id": self.player_id}


# ========== Session Exceptions ==========


class SessionException(DartTournamentException):
    """Base exception for session storage errors."""

    pass


class TournamentNotFoundException(SessionException):
    """Raised when no live tournament exists for an identifier."""

    def __init__(self, tournament_id: str):
        self.tournament_id = tournament_id
        super().__init__("No tournament")


# ========== Configuration Exceptions ==========


class ConfigurationException(DartTournamentException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
