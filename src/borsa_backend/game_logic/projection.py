"""Per-viewer redacted snapshots of a room."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from borsa_backend.game_logic.state import Room  # noqa: TC001
from borsa_backend.shared.enums import CardType, RoomPhase  # noqa: TC001

DEFAULT_LOG_WINDOW = 80


class _ViewModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class CardView(_ViewModel):
    id: str
    type: CardType


class StockView(_ViewModel):
    id: str
    name: str
    price: int


class PlayerView(_ViewModel):
    """Public player data; ``cards`` is only filled for the viewer."""

    id: str
    name: str
    cash: int
    holdings: dict[str, int]
    cards: list[CardView] | None = None
    card_count: int
    connected: bool


class LogEntryView(_ViewModel):
    """Log line stamped with epoch milliseconds."""

    t: int
    msg: str


class StandingView(_ViewModel):
    id: str
    name: str
    cash: int
    stock_value: int
    total: int


class RoomView(_ViewModel):
    """Snapshot of a room as broadcast in ``ROOM_STATE``."""

    code: str
    phase: RoomPhase
    host_player_id: str | None
    turn_order: list[str]
    turn_index: int
    current_player_id: str | None
    round: int
    max_rounds: int
    stocks: list[StockView]
    players: list[PlayerView]
    logs: list[LogEntryView]
    final_standings: list[StandingView]


def project_room(
    room: Room, viewer_id: str | None, *, log_window: int = DEFAULT_LOG_WINDOW
) -> RoomView:
    """Build the view of *room* for *viewer_id* without touching the room."""
    players = [
        PlayerView(
            id=player.id,
            name=player.name,
            cash=player.cash,
            holdings=dict(player.holdings),
            cards=(
                [CardView(id=card.id, type=card.type) for card in player.hand]
                if player.id == viewer_id
                else None
            ),
            card_count=len(player.hand),
            connected=player.connected,
        )
        for player in room.players.values()
    ]
    return RoomView(
        code=room.code,
        phase=room.phase,
        host_player_id=room.host_player_id,
        turn_order=list(room.turn_order),
        turn_index=room.turn_index,
        current_player_id=room.current_player_id,
        round=room.round,
        max_rounds=room.max_rounds,
        stocks=[
            StockView(id=stock.id, name=stock.name, price=stock.price)
            for stock in room.market.stocks
        ],
        players=players,
        logs=[
            LogEntryView(
                t=int(entry.occurred_at.timestamp() * 1000), msg=entry.message
            )
            for entry in room.log.tail(log_window)
        ],
        final_standings=[
            StandingView(**standing.model_dump()) for standing in room.final_standings
        ],
    )


__all__ = [
    "DEFAULT_LOG_WINDOW",
    "CardView",
    "LogEntryView",
    "PlayerView",
    "RoomView",
    "StandingView",
    "StockView",
    "project_room",
]
