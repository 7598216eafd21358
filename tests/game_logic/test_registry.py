"""Tests for lobby creation, joining and lookup."""

from __future__ import annotations

import pytest

from borsa_backend.game_logic import (
    GameEngine,
    GameRules,
    InMemoryRoomStore,
    NotFoundError,
    RoomRegistry,
    ValidationError,
)
from borsa_backend.shared import IdentifierGenerator, RoomPhase
from tests.factories import start_room


def test_create_room_registers_host_lobby(registry: RoomRegistry) -> None:
    room, host_id = registry.create_room("  Alice  ")

    assert registry.get_room(room.code) is room
    assert len(room.code) == 6
    assert room.code == room.code.upper()
    assert room.phase is RoomPhase.LOBBY
    assert room.host_player_id == host_id
    assert room.turn_order == []
    host = room.players[host_id]
    assert host.name == "Alice"
    assert host.cash == 0
    assert host.hand == []
    assert set(host.holdings.values()) == {0}
    assert host.connected
    assert list(room.log)[-1].message == "Alice created the lobby."


def test_names_are_capped(registry: RoomRegistry) -> None:
    room, host_id = registry.create_room("x" * 40)

    assert room.players[host_id].name == "x" * 24


@pytest.mark.parametrize("name", ["", "   ", None, 42])
def test_create_room_requires_a_name(registry: RoomRegistry, name: object) -> None:
    with pytest.raises(ValidationError):
        registry.create_room(name)


def test_join_room_accepts_any_case_code(registry: RoomRegistry) -> None:
    room, host_id = registry.create_room("Alice")

    joined, guest_id = registry.join_room(f" {room.code.lower()} ", "Bob")

    assert joined is room
    assert guest_id != host_id
    assert list(room.players) == [host_id, guest_id]
    assert room.host_player_id == host_id
    assert list(room.log)[-1].message == "Bob joined the lobby."


def test_join_unknown_room(registry: RoomRegistry) -> None:
    with pytest.raises(NotFoundError):
        registry.join_room("ZZZZZZ", "Bob")


@pytest.mark.parametrize(("code", "name"), [("", "Bob"), ("ABC123", " ")])
def test_join_requires_code_and_name(
    registry: RoomRegistry, code: str, name: str
) -> None:
    with pytest.raises(ValidationError):
        registry.join_room(code, name)


def test_join_rejected_once_started(registry: RoomRegistry) -> None:
    room, _ = start_room(registry, "Alice", "Bob")

    with pytest.raises(ValidationError):
        registry.join_room(room.code, "Carol")

    assert len(room.players) == 2


def test_lobby_holds_at_most_eight_players(registry: RoomRegistry) -> None:
    room, _ = registry.create_room("P0")
    for index in range(1, 8):
        registry.join_room(room.code, f"P{index}")

    with pytest.raises(ValidationError):
        registry.join_room(room.code, "P8")

    assert room.player_count == 8


def test_get_room_unknown_code(registry: RoomRegistry) -> None:
    with pytest.raises(NotFoundError):
        registry.get_room("NOPE00")


def test_room_code_collisions_are_regenerated() -> None:
    tokens = iter(["aaaaaa", "host-1", "aaaaaa", "bbbbbb", "host-2"])
    identifiers = IdentifierGenerator(token_source=lambda _size: next(tokens))
    registry = RoomRegistry(
        engine=GameEngine(GameRules(), identifiers=identifiers),
        store=InMemoryRoomStore(),
    )

    first, _ = registry.create_room("Alice")
    second, _ = registry.create_room("Bob")

    assert first.code == "AAAAAA"
    assert second.code == "BBBBBB"
    assert registry.get_room("AAAAAA") is first


def test_rules_shape_new_rooms() -> None:
    registry = RoomRegistry(
        engine=GameEngine(GameRules(max_rounds=2, log_capacity=5, initial_price=120))
    )

    room, _ = registry.create_room("Alice")

    assert room.max_rounds == 2
    assert room.log.capacity == 5
    assert set(room.market.prices().values()) == {120}


def test_rules_reject_incoherent_corridor() -> None:
    with pytest.raises(ValueError, match="Initial price"):
        GameRules(initial_price=5)
