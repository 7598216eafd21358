"""Dependency providers for FastAPI routers."""

from __future__ import annotations

from functools import cache

from borsa_backend.api.services import GameSessionService


@cache
def get_game_session_service() -> GameSessionService:
    """Return the process-wide :class:`GameSessionService` instance."""

    return GameSessionService.create_default()


__all__ = ["get_game_session_service"]
