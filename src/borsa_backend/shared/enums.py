"""Shared enumerations used across the backend."""

from enum import IntEnum, StrEnum


class RoomPhase(StrEnum):
    """Lifecycle stages of a room."""

    LOBBY = "lobby"
    PLAYING = "playing"
    ENDED = "ended"


class TradeSide(StrEnum):
    """Direction of a share trade."""

    BUY = "buy"
    SELL = "sell"


class CardType(IntEnum):
    """The five market-manipulation card variants."""

    SURGE = 1
    SLUMP = 2
    RALLY = 3
    DOUBLE_UP = 4
    HALVE = 5
