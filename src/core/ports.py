"""Ports (interfaces) used by the core command processor.

Ports define the minimal contracts for storage and timestamp rendering so
that the core can be reused with different backends.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterator, Optional, Protocol

from core.models import Entry, EntryIndices


class EntryStorePort(Protocol):
    """Storage operations required by the command processor."""

    def append(
        self, term: str, term_key: str, explanation: str, author: Optional[str] = None
    ) -> int:
        ...

    def append_ranked(
        self, term: str, term_key: str, explanation: str, author: Optional[str] = None
    ) -> EntryIndices:
        ...

    def query_by_key(self, term_key: str) -> Iterator[Entry]:
        ...


class TimestampFormatterPort(Protocol):
    """Renders a UTC timestamp for display."""

    def __call__(self, value: datetime) -> str:
        ...
