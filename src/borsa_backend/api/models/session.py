"""Pydantic models for the gameplay WebSocket contract.

Every frame is an envelope ``{"type": ..., "payload": {...}}`` with camelCase
payload keys.
"""

# ruff: noqa: TC001

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from borsa_backend.game_logic.projection import RoomView


class WireModel(BaseModel):
    """Base model using camelCase aliases on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmptyPayload(WireModel):
    """Payload of messages that carry no data."""


class CreateLobbyPayload(WireModel):
    name: Any = ""


class JoinLobbyPayload(WireModel):
    code: Any = ""
    name: Any = ""


class PlayCardPayload(WireModel):
    card_id: str
    determined_stock_id: str
    chosen_stock_id: str


class TradePayload(WireModel):
    """Trade request; ``side`` and ``qty`` are validated by the game engine."""

    side: Any = None
    stock_id: str
    qty: Any = None


class InboundEnvelope(BaseModel):
    """Common base of inbound frames; a missing payload reads as empty."""

    @field_validator("payload", mode="before", check_fields=False)
    @classmethod
    def _default_payload(cls, value: Any) -> Any:
        return {} if value is None else value


class CreateLobbyRequest(InboundEnvelope):
    type: Literal["CREATE_LOBBY"]
    payload: CreateLobbyPayload = Field(default_factory=CreateLobbyPayload)


class JoinLobbyRequest(InboundEnvelope):
    type: Literal["JOIN_LOBBY"]
    payload: JoinLobbyPayload = Field(default_factory=JoinLobbyPayload)


class StartGameRequest(InboundEnvelope):
    type: Literal["START_GAME"]
    payload: EmptyPayload = Field(default_factory=EmptyPayload)


class PlayCardRequest(InboundEnvelope):
    type: Literal["PLAY_CARD"]
    payload: PlayCardPayload


class TradeRequest(InboundEnvelope):
    type: Literal["TRADE"]
    payload: TradePayload


class EndTurnRequest(InboundEnvelope):
    type: Literal["END_TURN"]
    payload: EmptyPayload = Field(default_factory=EmptyPayload)


class LeaveRequest(InboundEnvelope):
    type: Literal["LEAVE"]
    payload: EmptyPayload = Field(default_factory=EmptyPayload)


InboundWsMessage = Annotated[
    CreateLobbyRequest
    | JoinLobbyRequest
    | StartGameRequest
    | PlayCardRequest
    | TradeRequest
    | EndTurnRequest
    | LeaveRequest,
    Field(discriminator="type"),
]


class HelloPayload(WireModel):
    server_time: int


class JoinedPayload(WireModel):
    room_code: str
    player_id: str
    is_host: bool


class ErrorPayload(WireModel):
    message: str


class HelloResponse(BaseModel):
    """Greeting sent as soon as a socket is accepted."""

    type: Literal["HELLO"] = "HELLO"
    payload: HelloPayload


class JoinedResponse(BaseModel):
    """Sent to the originating socket after a successful create or join."""

    type: Literal["JOINED"] = "JOINED"
    payload: JoinedPayload


class RoomStateResponse(BaseModel):
    """Per-recipient room snapshot broadcast after every state change."""

    type: Literal["ROOM_STATE"] = "ROOM_STATE"
    payload: RoomView


class ErrorResponse(BaseModel):
    """Failure report sent only to the originating socket."""

    type: Literal["ERROR"] = "ERROR"
    payload: ErrorPayload

    @classmethod
    def from_message(cls, message: str) -> ErrorResponse:
        return cls(payload=ErrorPayload(message=message))


OutboundWsMessage = Annotated[
    HelloResponse | JoinedResponse | RoomStateResponse | ErrorResponse,
    Field(discriminator="type"),
]


__all__ = [
    "CreateLobbyPayload",
    "CreateLobbyRequest",
    "EmptyPayload",
    "EndTurnRequest",
    "ErrorPayload",
    "ErrorResponse",
    "HelloPayload",
    "HelloResponse",
    "InboundEnvelope",
    "InboundWsMessage",
    "JoinLobbyPayload",
    "JoinLobbyRequest",
    "JoinedPayload",
    "JoinedResponse",
    "LeaveRequest",
    "OutboundWsMessage",
    "PlayCardPayload",
    "PlayCardRequest",
    "RoomStateResponse",
    "StartGameRequest",
    "TradePayload",
    "TradeRequest",
    "WireModel",
]
