"""Models used for API request and response payloads."""

from borsa_backend.api.models.session import (
    CreateLobbyRequest,
    EndTurnRequest,
    ErrorResponse,
    HelloResponse,
    InboundWsMessage,
    JoinedResponse,
    JoinLobbyRequest,
    LeaveRequest,
    OutboundWsMessage,
    PlayCardRequest,
    RoomStateResponse,
    StartGameRequest,
    TradeRequest,
)

__all__ = [
    "CreateLobbyRequest",
    "EndTurnRequest",
    "ErrorResponse",
    "HelloResponse",
    "InboundWsMessage",
    "JoinLobbyRequest",
    "JoinedResponse",
    "LeaveRequest",
    "OutboundWsMessage",
    "PlayCardRequest",
    "RoomStateResponse",
    "StartGameRequest",
    "TradeRequest",
]
