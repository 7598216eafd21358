"""Player, turn and room state containers used by the game logic layer."""

from __future__ import annotations

from collections.abc import Iterable  # noqa: TC003
from datetime import UTC, datetime

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from borsa_backend.game_logic.cards import Card  # noqa: TC001
from borsa_backend.game_logic.errors import NotFoundError
from borsa_backend.game_logic.market import MarketLedger  # noqa: TC001
from borsa_backend.shared.enums import RoomPhase, TradeSide
from borsa_backend.shared.events import EventLog


class TurnState(BaseModel):
    """What a player has already done during their current turn."""

    card_played: bool = False
    traded_direction: dict[str, TradeSide | None] = Field(default_factory=dict)

    @classmethod
    def fresh(cls, stock_ids: Iterable[str]) -> TurnState:
        """Return a cleared turn state covering *stock_ids*."""
        return cls(traded_direction=dict.fromkeys(stock_ids))

    def direction_for(self, stock_id: str) -> TradeSide | None:
        return self.traded_direction.get(stock_id)


class Player(BaseModel):
    """Participant holding cash, shares and a private hand of cards."""

    id: str
    name: str
    cash: int = 0
    holdings: dict[str, int] = Field(default_factory=dict)
    hand: list[Card] = Field(default_factory=list)
    connected: bool = True
    turn: TurnState = Field(default_factory=TurnState)

    def find_card(self, card_id: str) -> int | None:
        """Return the hand index of *card_id* or ``None``."""
        for index, card in enumerate(self.hand):
            if card.id == card_id:
                return index
        return None

    def shares(self, stock_id: str) -> int:
        return self.holdings.get(stock_id, 0)

    def stock_value(self, market: MarketLedger) -> int:
        """Mark-to-market value of every holding."""
        return sum(self.shares(stock.id) * stock.price for stock in market.stocks)


class Standing(BaseModel):
    """Final score line of a player."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    cash: int
    stock_value: int
    total: int


class Room(BaseModel):
    """One isolated game session identified by a short code.

    Players are kept in join order, which is also the tie-break order of the
    final standings.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    code: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    phase: RoomPhase = RoomPhase.LOBBY
    host_player_id: str | None = None
    turn_order: list[str] = Field(default_factory=list)
    turn_index: int = Field(default=0, ge=0)
    round: int = Field(default=0, ge=0)
    max_rounds: int = Field(default=6, ge=1)
    market: MarketLedger
    players: dict[str, Player] = Field(default_factory=dict)
    log: EventLog = Field(default_factory=EventLog)
    final_standings: list[Standing] = Field(default_factory=list)

    @property
    def current_player_id(self) -> str | None:
        """Identifier of the player whose turn it is, if any."""
        if self.phase is not RoomPhase.PLAYING or not self.turn_order:
            return None
        return self.turn_order[self.turn_index]

    @property
    def player_count(self) -> int:
        return len(self.players)

    def player(self, player_id: str) -> Player:
        """Return the player for *player_id*."""
        player = self.players.get(player_id)
        if player is None:
            msg = f"Player '{player_id}' is not in room {self.code}."
            raise NotFoundError(msg)
        return player

    def add_player(self, player: Player) -> Player:
        """Attach *player* to the room."""
        self.players[player.id] = player
        return player


__all__ = ["Player", "Room", "Standing", "TurnState"]
