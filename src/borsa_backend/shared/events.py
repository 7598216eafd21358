"""Human-readable room narration."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from datetime import UTC, datetime

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class LogEntry(BaseModel):
    """Single immutable line of the room event log."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(..., min_length=1)
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))


class EventLog:
    """Append-only sequence of :class:`LogEntry` items.

    With ``capacity`` left as ``None`` the log grows without bound and callers
    read a window through :meth:`tail`. Passing a capacity turns it into a ring
    buffer that drops the oldest entries.
    """

    def __init__(self, capacity: int | None = None) -> None:
        if capacity is not None and capacity < 1:
            msg = "Log capacity must be positive."
            raise ValueError(msg)
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int | None:
        """Maximum number of retained entries, if bounded."""
        return self._entries.maxlen

    def append(self, message: str) -> LogEntry:
        """Record *message* and return the stored entry."""
        entry = LogEntry(message=message)
        self._entries.append(entry)
        return entry

    def tail(self, limit: int) -> tuple[LogEntry, ...]:
        """Return the most recent *limit* entries, oldest first."""
        if limit <= 0:
            return ()
        entries = tuple(self._entries)
        return entries[-limit:]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(tuple(self._entries))


__all__ = ["EventLog", "LogEntry"]
