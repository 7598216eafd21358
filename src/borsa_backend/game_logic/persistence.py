"""Storage abstraction for live rooms.

Rooms live only in process memory; the protocol exists so the registry does
not depend on a particular container and tests can substitute their own.
"""

from __future__ import annotations

from typing import Protocol

from borsa_backend.game_logic.state import Room  # noqa: TC001


class RoomStore(Protocol):
    """Protocol describing how rooms are kept by code."""

    def save_room(self, room: Room) -> None:
        """Register *room* under its code, replacing any previous value."""

    def load_room(self, code: str) -> Room | None:
        """Return the room stored for *code* or ``None``."""

    def __contains__(self, code: object) -> bool:
        """Return whether *code* is taken."""


class InMemoryRoomStore:
    """Dictionary-backed implementation of :class:`RoomStore`."""

    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}

    def save_room(self, room: Room) -> None:
        """Store *room* keyed by its code."""
        self._rooms[room.code] = room

    def load_room(self, code: str) -> Room | None:
        """Return the stored room for *code* if available."""
        return self._rooms.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self._rooms


__all__ = ["InMemoryRoomStore", "RoomStore"]
