"""Service layer for API-specific business logic."""

from borsa_backend.api.services.game_session import (
    ActionSender,
    ConnectionBinding,
    GameSessionService,
)

__all__ = ["ActionSender", "ConnectionBinding", "GameSessionService"]
