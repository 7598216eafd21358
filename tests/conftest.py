"""Test configuration and fixtures for the backend test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from borsa_backend.api.dependencies import get_game_session_service
from borsa_backend.game_logic import get_default_rules
from borsa_backend.settings import get_settings
from tests.factories import make_registry, start_room

if TYPE_CHECKING:
    from collections.abc import Iterator

    from borsa_backend.game_logic import Room, RoomRegistry


@pytest.fixture(autouse=True)
def _reset_cached_config() -> Iterator[None]:
    """Ensure settings and rules are rebuilt for every test."""
    get_settings.cache_clear()
    get_default_rules.cache_clear()
    get_game_session_service.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_rules.cache_clear()
    get_game_session_service.cache_clear()


@pytest.fixture
def registry() -> RoomRegistry:
    return make_registry()


@pytest.fixture
def duel(registry: RoomRegistry) -> tuple[Room, dict[str, str]]:
    """Started two-player room keyed by player name."""
    return start_room(registry, "Alice", "Bob")
