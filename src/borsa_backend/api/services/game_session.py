"""Game session service: binds sockets to rooms and dispatches actions."""

from __future__ import annotations

import asyncio
import logging
import time
import weakref
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from borsa_backend.api.models.session import (
    CreateLobbyRequest,
    EndTurnRequest,
    ErrorResponse,
    HelloPayload,
    HelloResponse,
    InboundWsMessage,
    JoinedPayload,
    JoinedResponse,
    JoinLobbyRequest,
    LeaveRequest,
    OutboundWsMessage,
    PlayCardRequest,
    RoomStateResponse,
    StartGameRequest,
    TradeRequest,
)
from borsa_backend.game_logic import (
    GameEngine,
    GameError,
    GameRules,
    RoomRegistry,
    StateError,
    get_default_rules,
)
from borsa_backend.game_logic.orchestration import normalize_code
from borsa_backend.game_logic.state import Room  # noqa: TC001
from borsa_backend.shared import IdentifierGenerator, RandomService

logger = logging.getLogger(__name__)

ActionSender = Callable[[OutboundWsMessage], Awaitable[None]]


@dataclass(slots=True)
class ConnectionBinding:
    """Room seat controlled by a connection."""

    room_code: str
    player_id: str


class GameSessionService:
    """Serialize player actions per room and fan out room snapshots.

    Each action runs to completion, broadcast included, while holding the lock
    of its room. Room creation also holds the registry lock while a code is
    allocated.
    """

    def __init__(self, *, registry: RoomRegistry) -> None:
        self._registry = registry
        self._bindings: dict[ActionSender, ConnectionBinding] = {}
        self._room_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._registry_lock = asyncio.Lock()

    @classmethod
    def create_default(cls, rules: GameRules | None = None) -> GameSessionService:
        """Return a service backed by a fresh in-memory registry."""
        rules = rules or get_default_rules()
        engine = GameEngine(
            rules,
            rng=RandomService(rules.rng_seed),
            identifiers=IdentifierGenerator(),
        )
        return cls(registry=RoomRegistry(engine=engine))

    @property
    def registry(self) -> RoomRegistry:
        return self._registry

    def binding_for(self, sender: ActionSender) -> ConnectionBinding | None:
        """Return the seat bound to *sender*, if any."""
        return self._bindings.get(sender)

    async def connect(self, sender: ActionSender) -> None:
        """Greet a freshly accepted connection."""
        server_time = int(time.time() * 1000)
        await sender(HelloResponse(payload=HelloPayload(server_time=server_time)))

    async def handle(self, sender: ActionSender, message: InboundWsMessage) -> None:
        """Apply *message* for *sender*; failures are reported to it alone."""
        try:
            if isinstance(message, CreateLobbyRequest | JoinLobbyRequest):
                await self._enter_room(sender, message)
            else:
                await self._act(sender, message)
        except GameError as exc:
            logger.debug("Rejected %s: %s", message.type, exc.message)
            await sender(ErrorResponse.from_message(exc.message))

    async def disconnect(self, sender: ActionSender) -> None:
        """Release *sender*, flagging its player as disconnected."""
        binding = self._bindings.pop(sender, None)
        if binding is None:
            return
        async with self._lock_for(binding.room_code):
            room = self._registry.leave(binding.room_code, binding.player_id)
            await self._broadcast(room)
        logger.info(
            "Connection for player %s left room %s",
            binding.player_id,
            binding.room_code,
        )

    async def _enter_room(
        self,
        sender: ActionSender,
        message: CreateLobbyRequest | JoinLobbyRequest,
    ) -> None:
        if sender in self._bindings:
            msg = "You are already in a lobby."
            raise StateError(msg)
        if isinstance(message, CreateLobbyRequest):
            async with self._registry_lock:
                room, player_id = self._registry.create_room(message.payload.name)
            async with self._lock_for(room.code):
                await self._seat(sender, room, player_id)
            return
        code = normalize_code(message.payload.code)
        async with self._lock_for(code):
            room, player_id = self._registry.join_room(code, message.payload.name)
            await self._seat(sender, room, player_id)

    async def _seat(self, sender: ActionSender, room: Room, player_id: str) -> None:
        """Bind *sender* to its new seat, confirm it and refresh the room."""
        self._bindings[sender] = ConnectionBinding(room.code, player_id)
        await sender(
            JoinedResponse(
                payload=JoinedPayload(
                    room_code=room.code,
                    player_id=player_id,
                    is_host=player_id == room.host_player_id,
                )
            )
        )
        await self._broadcast(room)

    async def _act(self, sender: ActionSender, message: InboundWsMessage) -> None:
        binding = self._bindings.get(sender)
        if binding is None:
            msg = "You are not in a lobby."
            raise StateError(msg)
        code, player_id = binding.room_code, binding.player_id
        async with self._lock_for(code):
            match message:
                case StartGameRequest():
                    room = self._registry.start_game(code, player_id)
                case PlayCardRequest(payload=payload):
                    room = self._registry.play_card(
                        code,
                        player_id,
                        card_id=payload.card_id,
                        determined_id=payload.determined_stock_id,
                        chosen_id=payload.chosen_stock_id,
                    )
                case TradeRequest(payload=payload):
                    room = self._registry.trade(
                        code,
                        player_id,
                        side=payload.side,
                        stock_id=payload.stock_id,
                        qty=payload.qty,
                    )
                case EndTurnRequest():
                    room = self._registry.end_turn(code, player_id)
                case LeaveRequest():
                    room = self._registry.leave(code, player_id)
                    del self._bindings[sender]
                case _:
                    msg = f"Unsupported message type: {message.type}"
                    raise StateError(msg)
            await self._broadcast(room)

    async def _broadcast(self, room: Room) -> None:
        """Send every connection bound to *room* its own snapshot."""
        recipients = [
            (sender, binding.player_id)
            for sender, binding in self._bindings.items()
            if binding.room_code == room.code
        ]
        for sender, player_id in recipients:
            view = self._registry.project(room.code, player_id)
            try:
                await sender(RoomStateResponse(payload=view))
            except Exception:  # noqa: BLE001
                logger.exception("Failed to deliver room state to %s", player_id)

    def _lock_for(self, code: str) -> asyncio.Lock:
        # Entries vanish once no task holds or awaits the lock.
        lock = self._room_locks.get(code)
        if lock is None:
            lock = self._room_locks[code] = asyncio.Lock()
        return lock


__all__ = ["ActionSender", "ConnectionBinding", "GameSessionService"]
