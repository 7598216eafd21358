"""Shared price ledger, card price transforms and the boundary pass."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from borsa_backend.game_logic.errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from borsa_backend.game_logic.state import Player


class StockListing(BaseModel):
    """Static description of a tradable instrument."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


STOCK_LISTINGS: tuple[StockListing, ...] = (
    StockListing(id="BP", name="British Petroleum"),
    StockListing(id="VOW", name="Volkswagen"),
    StockListing(id="DB", name="Deutsche Bank"),
    StockListing(id="IBM", name="IBM"),
)


def round_price(value: Decimal) -> int:
    """Round half-up to an integer price, never below zero."""
    rounded = int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return max(0, rounded)


class PriceAdjustment(BaseModel):
    """Affine transform ``price * factor + offset``."""

    model_config = ConfigDict(frozen=True)

    factor: Decimal = Decimal(1)
    offset: Decimal = Decimal(0)

    def apply(self, price: int) -> int:
        """Return the adjusted integer price."""
        return round_price(Decimal(price) * self.factor + self.offset)


class CardEffect(BaseModel):
    """Price transforms a card applies to the instruments of the ledger.

    ``others`` applies to every instrument except the determined one and takes
    precedence over ``chosen``.
    """

    model_config = ConfigDict(frozen=True)

    determined: PriceAdjustment
    chosen: PriceAdjustment | None = None
    others: PriceAdjustment | None = None


class Stock(BaseModel):
    """Instrument with its current price."""

    id: str
    name: str
    price: int = Field(..., ge=0)


class BoundaryEvent(BaseModel):
    """Correction applied when a price leaves the allowed corridor."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["dividend", "confiscation"]
    stock_id: str
    stock_name: str
    per_share: int = 0
    total: int = 0
    reset_price: int


class MarketLedger(BaseModel):
    """Current prices of the fixed instrument set."""

    stocks: list[Stock]
    price_floor: int = 10
    price_ceiling: int = 250

    @classmethod
    def opening(
        cls,
        *,
        initial_price: int,
        price_floor: int,
        price_ceiling: int,
        listings: Iterable[StockListing] = STOCK_LISTINGS,
    ) -> MarketLedger:
        """Build a ledger with every listing priced at *initial_price*."""
        return cls(
            stocks=[
                Stock(id=listing.id, name=listing.name, price=initial_price)
                for listing in listings
            ],
            price_floor=price_floor,
            price_ceiling=price_ceiling,
        )

    @property
    def stock_ids(self) -> tuple[str, ...]:
        return tuple(stock.id for stock in self.stocks)

    def reset(self, price: int) -> None:
        """Set every instrument back to *price*."""
        for stock in self.stocks:
            stock.price = price

    def get(self, stock_id: str) -> Stock:
        """Return the instrument for *stock_id*."""
        for stock in self.stocks:
            if stock.id == stock_id:
                return stock
        msg = f"Unknown stock '{stock_id}'."
        raise ValidationError(msg)

    def prices(self) -> dict[str, int]:
        """Return a copy of the current prices keyed by instrument id."""
        return {stock.id: stock.price for stock in self.stocks}

    def apply_effect(
        self, effect: CardEffect, *, determined_id: str, chosen_id: str
    ) -> None:
        """Apply *effect* to the ledger without correcting boundaries."""
        for stock in self.stocks:
            if stock.id == determined_id:
                adjustment = effect.determined
            elif effect.others is not None:
                adjustment = effect.others
            elif stock.id == chosen_id:
                adjustment = effect.chosen
            else:
                adjustment = None
            if adjustment is not None:
                stock.price = adjustment.apply(stock.price)

    def apply_boundaries(self, players: Iterable[Player]) -> list[BoundaryEvent]:
        """Pay dividends above the ceiling and confiscate below the floor.

        Each instrument is corrected independently, so the enumeration order
        does not affect the outcome.
        """
        holders = list(players)
        events: list[BoundaryEvent] = []
        for stock in self.stocks:
            if stock.price > self.price_ceiling:
                per_share = stock.price - self.price_ceiling
                total_paid = 0
                for player in holders:
                    shares = player.holdings.get(stock.id, 0)
                    if shares > 0:
                        payout = shares * per_share
                        player.cash += payout
                        total_paid += payout
                stock.price = self.price_ceiling
                events.append(
                    BoundaryEvent(
                        kind="dividend",
                        stock_id=stock.id,
                        stock_name=stock.name,
                        per_share=per_share,
                        total=total_paid,
                        reset_price=stock.price,
                    )
                )
            elif stock.price < self.price_floor:
                confiscated = 0
                for player in holders:
                    shares = player.holdings.get(stock.id, 0)
                    if shares > 0:
                        confiscated += shares
                        player.holdings[stock.id] = 0
                stock.price = self.price_floor
                events.append(
                    BoundaryEvent(
                        kind="confiscation",
                        stock_id=stock.id,
                        stock_name=stock.name,
                        total=confiscated,
                        reset_price=stock.price,
                    )
                )
        return events


__all__ = [
    "STOCK_LISTINGS",
    "BoundaryEvent",
    "CardEffect",
    "MarketLedger",
    "PriceAdjustment",
    "Stock",
    "StockListing",
    "round_price",
]
