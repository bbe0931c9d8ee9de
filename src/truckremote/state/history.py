"""Bounded, most-recent-first command history (in memory only)."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from datetime import datetime

from truckremote._constants import HISTORY_LIMIT
from truckremote.models._base import utcnow
from truckremote.models.command import CommandRecord, RemoteCommand


class CommandHistory:
    """Keep the last ``limit`` command records, newest first."""

    def __init__(
        self,
        *,
        limit: int = HISTORY_LIMIT,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self._clock = clock
        self._limit = limit
        self._records: deque[CommandRecord] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CommandRecord]:
        return iter(self._records)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def records(self) -> tuple[CommandRecord, ...]:
        return tuple(self._records)

    @property
    def latest(self) -> CommandRecord | None:
        return self._records[0] if self._records else None

    def record(self, command: RemoteCommand, *, success: bool) -> CommandRecord:
        """Prepend a record, dropping the oldest once the limit is exceeded."""
        entry = CommandRecord(command=command, timestamp=self._clock(), success=success)
        self._records.appendleft(entry)
        return entry

    def clear(self) -> None:
        self._records.clear()
