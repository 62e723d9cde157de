"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Entry:
    """Persisted glossary entry, one row of the t_expl table."""

    id: int
    author: Optional[str]
    term: str
    term_key: str
    explanation: str
    created_at: Optional[datetime]
    enabled: bool = True


@dataclass(frozen=True)
class EntryIndices:
    """Ranks of a freshly added entry among its term's history."""

    entry_id: int
    normal_index: int
    permanent_index: int


@dataclass(frozen=True)
class ReportItem:
    """A single visible entry in an !expl result."""

    term: str
    normal_index: int
    permanent_index: int
    text: str
    metadata: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExplReport:
    """Result of an !expl query.

    total counts every visible entry, items holds at most cap of them.
    """

    term: str
    total: int
    cap: int
    items: Tuple[ReportItem, ...]


@dataclass(frozen=True)
class CommandRequest:
    """Minimal inbound command context used by the core."""

    text: str
    user_name: Optional[str] = None


@dataclass(frozen=True)
class MessageAttachment:
    """Structured response body with a plain-text fallback."""

    fallback: str
    title: str
    text: str


@dataclass(frozen=True)
class CommandResponse:
    """Outbound response: plain text, attachments, or both."""

    text: Optional[str] = None
    attachments: Tuple[MessageAttachment, ...] = ()
