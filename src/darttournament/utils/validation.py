"""Validation utilities for Dart Tournament.

This module provides reusable validation functions with consistent error handling.
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

from typing import Any, Optional


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Name Validation ==========


def validate_player_name(name: Optional[str]) -> ValidationResult:
    """Validate a player's display name.

    Surrounding whitespace is stripped; what remains must not be empty.

    Args:
        name: Name to validate

    Returns:
        ValidationResult with the trimmed name as ``sanitized_value``

    Example:
        >>> validate_player_name("  Phil ").sanitized_value
        'Phil'
    """
    if name is None or not name.strip():
        return ValidationResult(is_valid=False, error_message="Name is required")
    return ValidationResult(is_valid=True, sanitized_value=name.strip())


# ========== Count Validation ==========


def validate_count(
    value: Any, minimum: int = 0, label: str = "Value"
) -> ValidationResult:
    """Validate a whole-number counter (losses, thresholds, ports).

    Args:
        value: Value to validate; ints and numeric strings are accepted
        minimum: Smallest allowed value
        label: Name used in the error message

    Returns:
        ValidationResult with the parsed int as ``sanitized_value``
    """
    if isinstance(value, bool):
        return ValidationResult(
            is_valid=False, error_message=f"{label} must be a whole number"
        )
    try:
        number = int(str(value).strip()) if isinstance(value, str) else value
    except ValueError:
        return ValidationResult(
            is_valid=False, error_message=f"{label} must be a whole number"
        )
    if not isinstance(number, int):
        return ValidationResult(
            is_valid=False, error_message=f"{label} must be a whole number"
        )
    if number < minimum:
        return ValidationResult(
            is_valid=False, error_message=f"{label} must be at least {minimum}"
        )
    return ValidationResult(is_valid=True, sanitized_value=number)


def validate_port(port: Any) -> ValidationResult:
    """Validate a TCP port number (1-65535)."""
    result = validate_count(port, minimum=1, label="Port")
    if result and result.sanitized_value > 65535:
        return ValidationResult(
            is_valid=False, error_message="Port must be at most 65535"
        )
    return result
