"""Room registry: the entry points the API layer drives.

The registry owns the room store and resolves codes to rooms, enforces lobby
eligibility on create and join, and forwards in-game actions to the
:class:`GameEngine`.
"""

from __future__ import annotations

import logging

from borsa_backend.game_logic.configuration import GameRules  # noqa: TC001
from borsa_backend.game_logic.engine import GameEngine
from borsa_backend.game_logic.errors import NotFoundError, ValidationError
from borsa_backend.game_logic.persistence import InMemoryRoomStore, RoomStore
from borsa_backend.game_logic.projection import RoomView, project_room
from borsa_backend.game_logic.state import Room  # noqa: TC001
from borsa_backend.shared.enums import RoomPhase

logger = logging.getLogger(__name__)

MAX_CODE_ATTEMPTS = 1_000


def normalize_name(raw: object, max_length: int) -> str:
    """Trim and cap a display name, rejecting empty results."""
    name = raw.strip()[:max_length] if isinstance(raw, str) else ""
    if not name:
        msg = "A name is required."
        raise ValidationError(msg)
    return name


def normalize_code(raw: object) -> str:
    """Trim and upper-case a room code, rejecting empty results."""
    code = raw.strip().upper() if isinstance(raw, str) else ""
    if not code:
        msg = "A room code is required."
        raise ValidationError(msg)
    return code


class RoomRegistry:
    """Map room codes to rooms and expose one operation per player action."""

    def __init__(
        self,
        *,
        engine: GameEngine | None = None,
        store: RoomStore | None = None,
    ) -> None:
        self._engine = engine or GameEngine()
        self._store = store if store is not None else InMemoryRoomStore()

    @property
    def engine(self) -> GameEngine:
        return self._engine

    @property
    def rules(self) -> GameRules:
        return self._engine.rules

    def create_room(self, host_name: object) -> tuple[Room, str]:
        """Open a lobby hosted by a new player named *host_name*."""
        name = normalize_name(host_name, self.rules.name_max_length)
        room = self._engine.new_room(self._fresh_code())
        host = self._engine.new_player(room, name)
        room.host_player_id = host.id
        room.log.append(f"{name} created the lobby.")
        self._store.save_room(room)
        logger.info("Created room %s hosted by %s", room.code, host.id)
        return room, host.id

    def join_room(self, code: object, name: object) -> tuple[Room, str]:
        """Attach a new player named *name* to the lobby *code*."""
        room_code = normalize_code(code)
        player_name = normalize_name(name, self.rules.name_max_length)
        room = self.get_room(room_code)
        if room.phase is not RoomPhase.LOBBY:
            msg = "The game has already started."
            raise ValidationError(msg)
        if room.player_count >= self.rules.max_players:
            msg = "The lobby is full."
            raise ValidationError(msg)
        player = self._engine.new_player(room, player_name)
        room.log.append(f"{player_name} joined the lobby.")
        logger.info("Player %s joined room %s", player.id, room.code)
        return room, player.id

    def get_room(self, code: str) -> Room:
        """Return the room registered under *code*."""
        room = self._store.load_room(code)
        if room is None:
            msg = f"Lobby '{code}' not found."
            raise NotFoundError(msg)
        return room

    def start_game(self, code: str, player_id: str) -> Room:
        room = self.get_room(code)
        self._engine.start_game(room, player_id)
        return room

    def play_card(
        self,
        code: str,
        player_id: str,
        *,
        card_id: str,
        determined_id: str,
        chosen_id: str,
    ) -> Room:
        room = self.get_room(code)
        self._engine.play_card(room, player_id, card_id, determined_id, chosen_id)
        return room

    def trade(
        self,
        code: str,
        player_id: str,
        *,
        side: object,
        stock_id: str,
        qty: object,
    ) -> Room:
        room = self.get_room(code)
        self._engine.trade(room, player_id, side, stock_id, qty)
        return room

    def end_turn(self, code: str, player_id: str) -> Room:
        room = self.get_room(code)
        self._engine.end_turn(room, player_id)
        return room

    def leave(self, code: str, player_id: str) -> Room:
        """Mark *player_id* as disconnected from room *code*."""
        room = self.get_room(code)
        self._engine.disconnect(room, player_id)
        return room

    def project(self, code: str, viewer_id: str | None) -> RoomView:
        """Return the snapshot of room *code* as seen by *viewer_id*."""
        return project_room(
            self.get_room(code), viewer_id, log_window=self.rules.log_window
        )

    def _fresh_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = self._engine.identifiers.room_code()
            if code not in self._store:
                return code
            logger.warning("Room code collision detected, regenerating: %s", code)
        msg = "Unable to allocate a free room code."
        raise RuntimeError(msg)


__all__ = ["RoomRegistry", "normalize_code", "normalize_name"]
