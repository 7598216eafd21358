"""Shared utilities, shared models and cross-cutting helpers for the backend."""

from borsa_backend.shared.enums import CardType, RoomPhase, TradeSide
from borsa_backend.shared.events import EventLog, LogEntry
from borsa_backend.shared.identifiers import IdentifierGenerator
from borsa_backend.shared.rng import RandomService

__all__ = [
    "CardType",
    "EventLog",
    "IdentifierGenerator",
    "LogEntry",
    "RandomService",
    "RoomPhase",
    "TradeSide",
]
