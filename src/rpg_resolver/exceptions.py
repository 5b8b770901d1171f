"""
Exception hierarchy for the rpg-resolver engine.

Every failure raised by the engine reflects a programming or data
configuration defect (bad notation, a mis-built catalog entry, a roll
outside the oracle tables). None of them are transient, so callers should
let them propagate rather than retry.
"""

from __future__ import annotations

from typing import Any


class ResolverError(Exception):
    """Base exception for all rpg-resolver errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary of additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize the error.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidNotationError(ResolverError, ValueError):
    """Dice notation does not match ``[count]d<sides>[+/-modifier]``."""

    def __init__(self, notation: str, details: dict[str, Any] | None = None):
        super().__init__(f"Invalid dice notation: {notation!r}", details)
        self.notation = notation


class UnsupportedDieError(ResolverError, ValueError):
    """Notation is well formed but names a die outside the supported set.

    Attributes:
        sides: The requested number of sides
    """

    def __init__(self, sides: int, details: dict[str, Any] | None = None):
        super().__init__(
            f"Unsupported die: d{sides}. Only d4, d6, d8, d10, d12, d20 and d100 are supported",
            details,
        )
        self.sides = sides


class ConfigurationError(ResolverError):
    """Static data or an action definition cannot be used as requested.

    Raised when an opposed check is requested on an action without a
    secondary stat, and when the encounter catalog or oracle tables fail
    their startup validation.
    """
    pass


class InvalidLikelihoodError(ResolverError, ValueError):
    """Likelihood label is not one of the nine oracle levels."""

    def __init__(self, likelihood: Any, details: dict[str, Any] | None = None):
        super().__init__(f"Invalid likelihood: {likelihood!r}", details)
        self.likelihood = likelihood


class OutOfRangeRollError(ResolverError, ValueError):
    """No oracle band contains the given percentile roll.

    Attributes:
        likelihood: The likelihood whose table was searched
        roll: The roll that matched no band
    """

    def __init__(self, likelihood: str, roll: int, details: dict[str, Any] | None = None):
        super().__init__(
            f"No result found for roll {roll} on likelihood '{likelihood}'",
            details,
        )
        self.likelihood = likelihood
        self.roll = roll


__all__ = [
    "ResolverError",
    "InvalidNotationError",
    "UnsupportedDieError",
    "ConfigurationError",
    "InvalidLikelihoodError",
    "OutOfRangeRollError",
]
