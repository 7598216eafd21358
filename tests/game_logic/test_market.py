"""Tests for price transforms and the boundary pass."""

from decimal import Decimal

import pytest

from borsa_backend.game_logic.cards import CARD_EFFECTS
from borsa_backend.game_logic.errors import ValidationError
from borsa_backend.game_logic.market import MarketLedger, PriceAdjustment, round_price
from borsa_backend.game_logic.state import Player
from borsa_backend.shared.enums import CardType


def make_ledger(**prices: int) -> MarketLedger:
    ledger = MarketLedger.opening(initial_price=100, price_floor=10, price_ceiling=250)
    for stock_id, price in prices.items():
        ledger.get(stock_id).price = price
    return ledger


def make_holder(player_id: str, cash: int = 0, **holdings: int) -> Player:
    return Player(id=player_id, name=player_id, cash=cash, holdings=holdings)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("62.5"), 63),
        (Decimal("62.4"), 62),
        (Decimal("0.5"), 1),
        (Decimal(-40), 0),
    ],
)
def test_round_price_is_half_up_and_never_negative(
    value: Decimal, expected: int
) -> None:
    assert round_price(value) == expected


def test_price_adjustment_halves_odd_prices_upwards() -> None:
    assert PriceAdjustment(factor=Decimal("0.5")).apply(125) == 63


@pytest.mark.parametrize(
    ("card_type", "expected"),
    [
        (CardType.SURGE, {"BP": 160, "VOW": 70, "DB": 100, "IBM": 100}),
        (CardType.SLUMP, {"BP": 50, "VOW": 140, "DB": 100, "IBM": 100}),
        (CardType.RALLY, {"BP": 200, "VOW": 90, "DB": 90, "IBM": 90}),
        (CardType.DOUBLE_UP, {"BP": 200, "VOW": 50, "DB": 100, "IBM": 100}),
        (CardType.HALVE, {"BP": 50, "VOW": 200, "DB": 100, "IBM": 100}),
    ],
)
def test_card_effects_from_opening_prices(
    card_type: CardType, expected: dict[str, int]
) -> None:
    ledger = make_ledger()

    ledger.apply_effect(CARD_EFFECTS[card_type], determined_id="BP", chosen_id="VOW")

    assert ledger.prices() == expected


def test_dividend_pays_every_holder_and_clamps_to_ceiling() -> None:
    ledger = make_ledger(BP=200)
    alice = make_holder("alice", cash=5, BP=3)
    bob = make_holder("bob", cash=0, BP=1)
    carol = make_holder("carol", cash=7)

    ledger.apply_effect(
        CARD_EFFECTS[CardType.SURGE], determined_id="BP", chosen_id="VOW"
    )
    events = ledger.apply_boundaries([alice, bob, carol])

    assert ledger.get("BP").price == 250
    assert alice.cash == 5 + 3 * 10
    assert bob.cash == 10
    assert carol.cash == 7
    assert alice.holdings["BP"] == 3
    assert [event.kind for event in events] == ["dividend"]
    assert events[0].per_share == 10
    assert events[0].total == 40


def test_confiscation_zeroes_holdings_and_clamps_to_floor() -> None:
    ledger = make_ledger(VOW=35)
    alice = make_holder("alice", cash=50, VOW=4, BP=2)
    bob = make_holder("bob", VOW=1)

    ledger.apply_effect(
        CARD_EFFECTS[CardType.SURGE], determined_id="BP", chosen_id="VOW"
    )
    events = ledger.apply_boundaries([alice, bob])

    assert ledger.get("VOW").price == 10
    assert alice.holdings == {"VOW": 0, "BP": 2}
    assert bob.holdings["VOW"] == 0
    assert alice.cash == 50
    assert len(events) == 1
    assert events[0].kind == "confiscation"
    assert events[0].total == 5


def test_negative_intermediate_price_is_confiscated_at_floor() -> None:
    ledger = make_ledger(BP=20)
    holder = make_holder("alice", BP=2)

    ledger.apply_effect(
        CARD_EFFECTS[CardType.SLUMP], determined_id="BP", chosen_id="DB"
    )
    ledger.apply_boundaries([holder])

    assert ledger.get("BP").price == 10
    assert holder.holdings["BP"] == 0


def test_boundary_pass_leaves_in_range_prices_alone() -> None:
    ledger = make_ledger(BP=250, VOW=10)
    holder = make_holder("alice", cash=1, BP=1, VOW=1)

    events = ledger.apply_boundaries([holder])

    assert events == []
    assert ledger.prices()["BP"] == 250
    assert ledger.prices()["VOW"] == 10
    assert holder.cash == 1
    assert holder.holdings == {"BP": 1, "VOW": 1}


def test_unknown_stock_is_rejected() -> None:
    with pytest.raises(ValidationError):
        make_ledger().get("TSLA")
