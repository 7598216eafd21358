"""Room state machine: game start, card plays, trades and turn progression."""

from __future__ import annotations

import logging

from borsa_backend.game_logic.cards import CARD_EFFECTS, build_starting_hand
from borsa_backend.game_logic.configuration import GameRules, get_default_rules
from borsa_backend.game_logic.errors import (
    HostOnlyError,
    InsufficientFundsError,
    InsufficientSharesError,
    NotOwnedError,
    StateError,
    TurnOrderError,
    ValidationError,
)
from borsa_backend.game_logic.market import BoundaryEvent, MarketLedger
from borsa_backend.game_logic.state import Player, Room, Standing, TurnState
from borsa_backend.shared.enums import RoomPhase, TradeSide
from borsa_backend.shared.events import EventLog
from borsa_backend.shared.identifiers import IdentifierGenerator
from borsa_backend.shared.rng import RandomService

logger = logging.getLogger(__name__)


def _format_prices(prices: dict[str, int]) -> str:
    return ", ".join(f"{stock_id} ${price}" for stock_id, price in prices.items())


def _describe_boundary(event: BoundaryEvent) -> str:
    if event.kind == "dividend":
        return (
            f"DIVIDEND {event.stock_name}: +${event.per_share}/share "
            f"(total paid ${event.total}). Price reset to ${event.reset_price}."
        )
    return (
        f"CONFISCATION {event.stock_name}: price below floor. "
        f"{event.total} shares confiscated. Price reset to ${event.reset_price}."
    )


def parse_quantity(raw: object) -> int:
    """Return *raw* if it is a positive integer, otherwise reject it."""
    if isinstance(raw, bool) or not isinstance(raw, int) or raw <= 0:
        msg = "Quantity must be a positive integer."
        raise ValidationError(msg)
    return raw


def parse_side(raw: object) -> TradeSide:
    """Return the trade side named by *raw*."""
    try:
        return TradeSide(raw)
    except (TypeError, ValueError) as exc:
        msg = f"Invalid trade side '{raw}'."
        raise ValidationError(msg) from exc


class GameEngine:
    """Apply player actions to a :class:`Room` while preserving its invariants.

    Every public method validates completely before mutating anything, so a
    raised :class:`~borsa_backend.game_logic.errors.GameError` means the room
    is unchanged.
    """

    def __init__(
        self,
        rules: GameRules | None = None,
        *,
        rng: RandomService | None = None,
        identifiers: IdentifierGenerator | None = None,
    ) -> None:
        self._rules = rules or get_default_rules()
        self._rng = rng or RandomService(self._rules.rng_seed)
        self._identifiers = identifiers or IdentifierGenerator()

    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def identifiers(self) -> IdentifierGenerator:
        return self._identifiers

    def new_room(self, code: str) -> Room:
        """Return an empty lobby for *code*."""
        rules = self._rules
        return Room(
            code=code,
            max_rounds=rules.max_rounds,
            market=MarketLedger.opening(
                initial_price=rules.initial_price,
                price_floor=rules.price_floor,
                price_ceiling=rules.price_ceiling,
            ),
            log=self._new_log(),
        )

    def new_player(self, room: Room, name: str) -> Player:
        """Create a player with zero cash and holdings and attach it to *room*."""
        stock_ids = room.market.stock_ids
        player = Player(
            id=self._identifiers.player_id(),
            name=name,
            holdings=dict.fromkeys(stock_ids, 0),
            turn=TurnState.fresh(stock_ids),
        )
        return room.add_player(player)

    def start_game(self, room: Room, player_id: str) -> None:
        """Move *room* from the lobby into play."""
        if player_id != room.host_player_id:
            msg = "Only the host can start the game."
            raise HostOnlyError(msg)
        if room.phase is not RoomPhase.LOBBY:
            msg = "The game has already started."
            raise StateError(msg)
        count = room.player_count
        if not self._rules.min_players <= count <= self._rules.max_players:
            msg = (
                f"{self._rules.min_players}-{self._rules.max_players} players "
                "are needed to start."
            )
            raise ValidationError(msg)

        room.turn_order = self._rng.shuffle(room.players)
        room.turn_index = 0
        room.round = 0
        room.final_standings = []
        room.market.reset(self._rules.initial_price)
        stock_ids = room.market.stock_ids
        for player in room.players.values():
            player.cash = self._rules.starting_cash
            player.holdings = dict.fromkeys(stock_ids, 0)
            player.hand = build_starting_hand(self._rng, self._identifiers)
            player.turn = TurnState.fresh(stock_ids)
        room.phase = RoomPhase.PLAYING

        order = " -> ".join(room.players[pid].name for pid in room.turn_order)
        room.log.append(f"Game started. Turn order: {order}")
        logger.info("Room %s started with %d players", room.code, count)

    def play_card(
        self,
        room: Room,
        player_id: str,
        card_id: str,
        determined_id: str,
        chosen_id: str,
    ) -> list[BoundaryEvent]:
        """Consume a card, move prices and run the boundary pass."""
        player = self._require_turn(room, player_id)
        if player.turn.card_played:
            msg = "A card has already been played this turn."
            raise StateError(msg)
        index = player.find_card(card_id)
        if index is None:
            msg = "Card not in hand."
            raise NotOwnedError(msg)
        if determined_id == chosen_id:
            msg = "Choose two different stocks."
            raise ValidationError(msg)
        determined = room.market.get(determined_id)
        chosen = room.market.get(chosen_id)

        card = player.hand.pop(index)
        before = room.market.prices()
        room.market.apply_effect(
            CARD_EFFECTS[card.type],
            determined_id=determined.id,
            chosen_id=chosen.id,
        )
        events = room.market.apply_boundaries(room.players.values())
        for event in events:
            room.log.append(_describe_boundary(event))
        player.turn.card_played = True

        room.log.append(
            f"{player.name} played card T{card.type.value}: {determined.name} "
            f"(determined) & {chosen.name} (chosen). Prices: "
            f"{_format_prices(before)} -> {_format_prices(room.market.prices())}"
        )
        return events

    def trade(
        self,
        room: Room,
        player_id: str,
        side: object,
        stock_id: str,
        qty: object,
    ) -> int:
        """Buy or sell shares at the current price and return the amount moved."""
        player = self._require_turn(room, player_id)
        quantity = parse_quantity(qty)
        trade_side = parse_side(side)
        stock = room.market.get(stock_id)

        previous = player.turn.direction_for(stock.id)
        if previous is not None and previous is not trade_side:
            msg = "You cannot buy and sell the same stock in one turn."
            raise ValidationError(msg)

        amount = stock.price * quantity
        if trade_side is TradeSide.BUY:
            if amount > player.cash:
                msg = "Insufficient cash."
                raise InsufficientFundsError(msg)
            player.cash -= amount
            player.holdings[stock.id] = player.shares(stock.id) + quantity
            verb, outcome = "BUYS", "spent"
        else:
            if player.shares(stock.id) < quantity:
                msg = "Insufficient shares."
                raise InsufficientSharesError(msg)
            player.holdings[stock.id] = player.shares(stock.id) - quantity
            player.cash += amount
            verb, outcome = "SELLS", "received"
        player.turn.traded_direction[stock.id] = trade_side

        room.log.append(
            f"{player.name} {verb} {quantity} {stock.name} @ ${stock.price} "
            f"({outcome} ${amount})."
        )
        return amount

    def end_turn(self, room: Room, player_id: str) -> None:
        """Pass the turn on, closing rounds and the game when due."""
        player = self._require_turn(room, player_id)
        if not player.turn.card_played:
            msg = "You must play exactly one card before ending your turn."
            raise ValidationError(msg)

        player.turn = TurnState.fresh(room.market.stock_ids)
        room.turn_index += 1
        if room.turn_index >= len(room.turn_order):
            room.turn_index = 0
            room.round += 1
            room.log.append(f"--- End of round {room.round} / {room.max_rounds} ---")

        if room.round >= room.max_rounds:
            self._finish(room)

    def disconnect(self, room: Room, player_id: str) -> None:
        """Flag *player_id* as disconnected; the seat is kept."""
        player = room.player(player_id)
        player.connected = False
        room.log.append(f"{player.name} disconnected.")

    def compute_standings(self, room: Room) -> list[Standing]:
        """Rank players by cash plus mark-to-market holdings."""
        standings = []
        for player in room.players.values():
            stock_value = player.stock_value(room.market)
            standings.append(
                Standing(
                    id=player.id,
                    name=player.name,
                    cash=player.cash,
                    stock_value=stock_value,
                    total=player.cash + stock_value,
                )
            )
        # sorted() is stable, so ties keep join order
        return sorted(standings, key=lambda standing: standing.total, reverse=True)

    def _finish(self, room: Room) -> None:
        room.phase = RoomPhase.ENDED
        room.final_standings = self.compute_standings(room)
        winner = room.final_standings[0]
        room.log.append(
            f"GAME OVER. {winner.name} wins with ${winner.total} "
            f"(cash ${winner.cash}, stocks ${winner.stock_value})."
        )
        logger.info("Room %s ended; winner %s", room.code, winner.id)

    def _require_turn(self, room: Room, player_id: str) -> Player:
        if room.phase is not RoomPhase.PLAYING:
            msg = "The game is not in progress."
            raise StateError(msg)
        if room.current_player_id != player_id:
            msg = "It is not your turn."
            raise TurnOrderError(msg)
        return room.player(player_id)

    def _new_log(self) -> EventLog:
        return EventLog(capacity=self._rules.log_capacity)


__all__ = ["GameEngine", "parse_quantity", "parse_side"]
