"""Core rules and mechanics that drive La Borsa gameplay."""

from borsa_backend.game_logic.cards import (
    BASE_HAND,
    CARD_EFFECTS,
    HAND_SIZE,
    Card,
    build_starting_hand,
)
from borsa_backend.game_logic.configuration import GameRules, get_default_rules
from borsa_backend.game_logic.engine import GameEngine
from borsa_backend.game_logic.errors import (
    GameError,
    HostOnlyError,
    InsufficientFundsError,
    InsufficientSharesError,
    NotFoundError,
    NotOwnedError,
    StateError,
    TurnOrderError,
    ValidationError,
)
from borsa_backend.game_logic.market import (
    STOCK_LISTINGS,
    BoundaryEvent,
    CardEffect,
    MarketLedger,
    PriceAdjustment,
    Stock,
    StockListing,
)
from borsa_backend.game_logic.orchestration import RoomRegistry
from borsa_backend.game_logic.persistence import InMemoryRoomStore, RoomStore
from borsa_backend.game_logic.projection import RoomView, project_room
from borsa_backend.game_logic.state import Player, Room, Standing, TurnState

__all__ = [
    "BASE_HAND",
    "CARD_EFFECTS",
    "HAND_SIZE",
    "STOCK_LISTINGS",
    "BoundaryEvent",
    "Card",
    "CardEffect",
    "GameEngine",
    "GameError",
    "GameRules",
    "HostOnlyError",
    "InMemoryRoomStore",
    "InsufficientFundsError",
    "InsufficientSharesError",
    "MarketLedger",
    "NotFoundError",
    "NotOwnedError",
    "Player",
    "PriceAdjustment",
    "Room",
    "RoomRegistry",
    "RoomStore",
    "RoomView",
    "Standing",
    "StateError",
    "Stock",
    "StockListing",
    "TurnOrderError",
    "TurnState",
    "ValidationError",
    "build_starting_hand",
    "get_default_rules",
    "project_room",
]
