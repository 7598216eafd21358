"""Card catalogue and starting-hand construction."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic.config import ConfigDict

from borsa_backend.game_logic.market import CardEffect, PriceAdjustment
from borsa_backend.shared.enums import CardType

if TYPE_CHECKING:
    from borsa_backend.shared.identifiers import IdentifierGenerator
    from borsa_backend.shared.rng import RandomService


class Card(BaseModel):
    """A single card in a player's hand."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: CardType


CARD_EFFECTS: dict[CardType, CardEffect] = {
    CardType.SURGE: CardEffect(
        determined=PriceAdjustment(offset=Decimal(60)),
        chosen=PriceAdjustment(offset=Decimal(-30)),
    ),
    CardType.SLUMP: CardEffect(
        determined=PriceAdjustment(offset=Decimal(-50)),
        chosen=PriceAdjustment(offset=Decimal(40)),
    ),
    CardType.RALLY: CardEffect(
        determined=PriceAdjustment(offset=Decimal(100)),
        others=PriceAdjustment(offset=Decimal(-10)),
    ),
    CardType.DOUBLE_UP: CardEffect(
        determined=PriceAdjustment(factor=Decimal(2)),
        chosen=PriceAdjustment(factor=Decimal("0.5")),
    ),
    CardType.HALVE: CardEffect(
        determined=PriceAdjustment(factor=Decimal("0.5")),
        chosen=PriceAdjustment(factor=Decimal(2)),
    ),
}

# 1x T1, 2x T2, 1x T3, 1x T4, 1x T5
BASE_HAND: tuple[CardType, ...] = (
    CardType.SURGE,
    CardType.SLUMP,
    CardType.SLUMP,
    CardType.RALLY,
    CardType.DOUBLE_UP,
    CardType.HALVE,
)
EXTRA_DRAWS = 2
HAND_SIZE = len(BASE_HAND) + EXTRA_DRAWS


def build_starting_hand(
    rng: RandomService, identifiers: IdentifierGenerator
) -> list[Card]:
    """Deal the fixed base multiset plus random extras in shuffled order."""
    catalogue = tuple(CardType)
    extras = [rng.choice(catalogue) for _ in range(EXTRA_DRAWS)]
    types = rng.shuffle([*BASE_HAND, *extras])
    return [Card(id=identifiers.card_id(), type=card_type) for card_type in types]


__all__ = [
    "BASE_HAND",
    "CARD_EFFECTS",
    "EXTRA_DRAWS",
    "HAND_SIZE",
    "Card",
    "build_starting_hand",
]
