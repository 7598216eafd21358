"""Typed failures raised by the game logic.

Every error here is recoverable at the action boundary: the failing action
leaves the room untouched and the message is reported to the caller only.
"""


class GameError(Exception):
    """Base class for all action-level game failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(GameError):
    """Malformed or out-of-range input."""


class NotFoundError(GameError):
    """Unknown room code or player."""


class TurnOrderError(GameError):
    """Action attempted by someone other than the current player."""


class NotOwnedError(GameError):
    """Referenced card or resource is not held by the player."""


class InsufficientFundsError(GameError):
    """Purchase cost exceeds the player's cash."""


class InsufficientSharesError(GameError):
    """Sale quantity exceeds the player's holding."""


class StateError(GameError):
    """Action is invalid for the room's current phase or turn state."""


class HostOnlyError(StateError):
    """Action reserved to the room host."""


__all__ = [
    "GameError",
    "HostOnlyError",
    "InsufficientFundsError",
    "InsufficientSharesError",
    "NotFoundError",
    "NotOwnedError",
    "StateError",
    "TurnOrderError",
    "ValidationError",
]
