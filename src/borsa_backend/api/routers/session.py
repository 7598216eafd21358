"""WebSocket endpoint for gameplay sessions."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, WebSocket
from pydantic import TypeAdapter, ValidationError

from borsa_backend.api.dependencies import get_game_session_service
from borsa_backend.api.models.session import (
    ErrorResponse,
    InboundWsMessage,
    OutboundWsMessage,
)
from borsa_backend.api.services import GameSessionService  # noqa: TC001

logger = logging.getLogger(__name__)

router = APIRouter(tags=["session"])

INBOUND_WS_MESSAGE_ADAPTER = TypeAdapter(InboundWsMessage)

_KNOWN_TYPES = frozenset(
    {
        "CREATE_LOBBY",
        "JOIN_LOBBY",
        "START_GAME",
        "PLAY_CARD",
        "TRADE",
        "END_TURN",
        "LEAVE",
    }
)


@router.get("/")
def health() -> dict[str, str]:
    """Report that the service is up."""
    return {"status": "ok", "service": "La Borsa"}


@router.websocket("/ws")
async def game_session(
    websocket: WebSocket,
    service: GameSessionService = Depends(get_game_session_service),  # noqa: B008
) -> None:
    """Accept player actions and stream room snapshots back."""
    await websocket.accept()

    send_lock = asyncio.Lock()

    async def send(model: OutboundWsMessage) -> None:
        async with send_lock:
            await websocket.send_json(model.model_dump(mode="json", by_alias=True))

    await service.connect(send)
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                break
            try:
                data = _decode_frame(frame)
            except (json.JSONDecodeError, UnicodeDecodeError):
                await send(ErrorResponse.from_message("Invalid JSON"))
                continue

            try:
                message = INBOUND_WS_MESSAGE_ADAPTER.validate_python(data)
            except ValidationError as exc:
                logger.debug("Discarding invalid frame: %s", exc.errors())
                await send(ErrorResponse.from_message(_describe_invalid(data)))
                continue

            await service.handle(send, message)
    finally:
        await service.disconnect(send)


def _decode_frame(frame: dict[str, Any]) -> object:
    """Parse a text or binary frame as JSON."""
    text = frame.get("text")
    if text is None:
        text = (frame.get("bytes") or b"").decode("utf-8")
    return json.loads(text)


def _describe_invalid(data: object) -> str:
    """Return a short reason for an inbound frame that failed validation."""
    if isinstance(data, dict):
        message_type = data.get("type")
        if isinstance(message_type, str):
            if message_type not in _KNOWN_TYPES:
                return f"Unsupported message type: {message_type}"
            return f"Invalid payload for {message_type}"
    return "Invalid message"


__all__ = ["INBOUND_WS_MESSAGE_ADAPTER", "router"]
