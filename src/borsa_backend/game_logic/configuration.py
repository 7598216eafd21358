"""Rule parameters for rooms, loaded from the environment."""

from __future__ import annotations

from functools import cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameRules(BaseSettings):
    """Tunable rules shared by every room created by a registry."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BORSA_GAME_",
        extra="ignore",
    )

    max_rounds: int = Field(default=6, ge=1)
    min_players: int = Field(default=2, ge=1)
    max_players: int = Field(default=8, ge=1)
    starting_cash: int = Field(default=300, ge=0)
    initial_price: int = Field(default=100, ge=0)
    price_floor: int = Field(default=10, ge=0)
    price_ceiling: int = Field(default=250, ge=1)
    log_window: int = Field(default=80, ge=1)
    log_capacity: int | None = Field(default=None, ge=1)
    name_max_length: int = Field(default=24, ge=1)
    rng_seed: int | None = None

    @model_validator(mode="after")
    def _validate_ranges(self) -> GameRules:
        """Ensure the price corridor and player range are coherent."""
        if self.price_floor >= self.price_ceiling:
            msg = "Price floor must be below the price ceiling."
            raise ValueError(msg)
        if not self.price_floor <= self.initial_price <= self.price_ceiling:
            msg = "Initial price must lie inside the price corridor."
            raise ValueError(msg)
        if self.min_players > self.max_players:
            msg = "Minimum player count exceeds the maximum."
            raise ValueError(msg)
        return self


@cache
def get_default_rules() -> GameRules:
    """Return the cached rule set built from the environment."""
    return GameRules()


__all__ = ["GameRules", "get_default_rules"]
