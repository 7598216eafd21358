"""Tests for per-viewer room snapshots and the event log window."""

from __future__ import annotations

import pytest

from borsa_backend.game_logic import Room, RoomRegistry, project_room
from borsa_backend.shared import EventLog
from tests.factories import make_registry, start_room


def test_viewer_only_sees_own_hand(duel: tuple[Room, dict[str, str]]) -> None:
    room, ids = duel

    view = project_room(room, ids["Alice"])

    by_name = {player.name: player for player in view.players}
    assert by_name["Alice"].cards is not None
    assert [card.id for card in by_name["Alice"].cards] == [
        card.id for card in room.players[ids["Alice"]].hand
    ]
    assert by_name["Bob"].cards is None
    assert by_name["Bob"].card_count == 8


def test_spectator_sees_no_hands(duel: tuple[Room, dict[str, str]]) -> None:
    room, _ = duel

    view = project_room(room, None)

    assert all(player.cards is None for player in view.players)


def test_view_mirrors_room_progress(duel: tuple[Room, dict[str, str]]) -> None:
    room, ids = duel

    view = project_room(room, ids["Bob"])

    assert view.code == room.code
    assert view.phase == "playing"
    assert view.host_player_id == ids["Alice"]
    assert view.turn_order == room.turn_order
    assert view.current_player_id == room.turn_order[0]
    assert view.round == 0
    assert view.max_rounds == 6
    assert [stock.id for stock in view.stocks] == ["BP", "VOW", "DB", "IBM"]
    assert view.final_standings == []


def test_log_is_truncated_without_mutating_room(
    duel: tuple[Room, dict[str, str]],
) -> None:
    room, ids = duel
    for index in range(100):
        room.log.append(f"entry {index}")
    total = len(room.log)

    view = project_room(room, ids["Alice"], log_window=80)

    assert len(view.logs) == 80
    assert view.logs[-1].msg == "entry 99"
    assert view.logs[0].msg == "entry 20"
    assert len(room.log) == total


def test_registry_projection_uses_configured_window() -> None:
    registry: RoomRegistry = make_registry(log_window=3)
    room, ids = start_room(registry, "Alice", "Bob")

    view = registry.project(room.code, ids["Alice"])

    assert len(view.logs) == 3
    assert view.logs[-1].msg.startswith("Game started.")


def test_wire_keys_are_camel_case(duel: tuple[Room, dict[str, str]]) -> None:
    room, ids = duel

    payload = project_room(room, ids["Alice"]).model_dump(mode="json", by_alias=True)

    assert {"hostPlayerId", "turnOrder", "currentPlayerId", "maxRounds"} <= set(payload)
    player = payload["players"][0]
    assert {"cardCount", "holdings", "connected"} <= set(player)
    assert {"t", "msg"} == set(payload["logs"][0])


def test_log_times_are_epoch_milliseconds(duel: tuple[Room, dict[str, str]]) -> None:
    room, ids = duel

    payload = project_room(room, ids["Alice"]).model_dump(mode="json", by_alias=True)

    entry = room.log.tail(1)[0]
    stamp = payload["logs"][-1]["t"]
    assert isinstance(stamp, int)
    assert stamp == int(entry.occurred_at.timestamp() * 1000)


def test_bounded_event_log_drops_oldest() -> None:
    log = EventLog(capacity=3)
    for index in range(5):
        log.append(f"line {index}")

    assert [entry.message for entry in log] == ["line 2", "line 3", "line 4"]
    assert [entry.message for entry in log.tail(2)] == ["line 3", "line 4"]
    assert log.tail(0) == ()


def test_event_log_rejects_non_positive_capacity() -> None:
    with pytest.raises(ValueError, match="capacity"):
        EventLog(capacity=0)
