"""Builders shared by the test modules."""

from __future__ import annotations

from borsa_backend.game_logic import Card, GameEngine, GameRules, Room, RoomRegistry
from borsa_backend.shared import CardType, RandomService


def make_registry(*, seed: int = 1234, **overrides: object) -> RoomRegistry:
    """Build a registry with seeded randomness and optional rule overrides."""
    rules = GameRules(rng_seed=seed, **overrides)
    return RoomRegistry(engine=GameEngine(rules, rng=RandomService(seed)))


def start_room(registry: RoomRegistry, *names: str) -> tuple[Room, dict[str, str]]:
    """Create a lobby for *names*, start it and return the room and name ids."""
    host_name, *guests = names
    room, host_id = registry.create_room(host_name)
    ids = {host_name: host_id}
    for guest in guests:
        _, guest_id = registry.join_room(room.code, guest)
        ids[guest] = guest_id
    registry.start_game(room.code, host_id)
    return room, ids


def give_hand(room: Room, player_id: str, *types: CardType) -> list[Card]:
    """Replace a player's hand with cards of *types* and return it."""
    hand = [
        Card(id=f"{player_id}-card-{index}", type=card_type)
        for index, card_type in enumerate(types)
    ]
    room.players[player_id].hand = hand
    return hand
