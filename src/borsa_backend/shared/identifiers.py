"""Generators for room codes and player/card identifiers."""

from __future__ import annotations

import secrets
from collections.abc import Callable

ROOM_CODE_BYTES = 3
ENTITY_ID_BYTES = 10


class IdentifierGenerator:
    """Produce opaque identifiers from a hex token source.

    Room codes are six upper-case hex characters; uniqueness against live rooms
    is the registry's job. Player and card identifiers are long enough that
    collisions are not checked.
    """

    def __init__(self, token_source: Callable[[int], str] = secrets.token_hex) -> None:
        self._token_source = token_source

    def room_code(self) -> str:
        """Return a fresh candidate room code."""
        return self._token_source(ROOM_CODE_BYTES).upper()

    def player_id(self) -> str:
        """Return a fresh player identifier."""
        return self._token_source(ENTITY_ID_BYTES)

    def card_id(self) -> str:
        """Return a fresh card identifier."""
        return self._token_source(ENTITY_ID_BYTES)


__all__ = ["ENTITY_ID_BYTES", "ROOM_CODE_BYTES", "IdentifierGenerator"]
