"""Command processing for !add and !expl.

This module is integration-agnostic. It only relies on ports for storage and
timestamp rendering, so any chat transport can feed it CommandRequests.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.config import ExplConfig
from core.models import CommandRequest, CommandResponse
from core.ports import EntryStorePort, TimestampFormatterPort
from core.query import build_report
from core.responses import (
    ADD_SYNTAX,
    EXPL_SYNTAX,
    EXPLANATION_TOO_LONG,
    TERM_TOO_LONG,
    format_added,
    format_report,
    text_response,
)
from core.text import normalize_term, utf16_length

LOGGER = logging.getLogger(__name__)

ADD_COMMAND = "!add"
EXPL_COMMAND = "!expl"


def split_command(text: str) -> list[str]:
    """Split on whitespace into at most three parts, keeping the remainder intact."""

    return text.rstrip().split(maxsplit=2)


class ExplCommands:
    """Orchestrates validation, persistence, ranking and response building."""

    def __init__(
        self,
        store: EntryStorePort,
        format_timestamp: TimestampFormatterPort,
        config: Optional[ExplConfig] = None,
    ) -> None:
        self._store = store
        self._format_timestamp = format_timestamp
        self._config = config or ExplConfig()

    def handle(self, request: CommandRequest) -> Optional[CommandResponse]:
        """Dispatch a request by its command word; returns None for other text."""

        parts = request.text.split(maxsplit=1)
        if not parts:
            return None
        command = parts[0].lower()
        if command == ADD_COMMAND:
            return self.add(request)
        if command == EXPL_COMMAND:
            return self.expl(request)
        return None

    def add(self, request: CommandRequest) -> CommandResponse:
        """Store a new explanation and report its indices."""

        parts = split_command(request.text)
        if len(parts) != 3:
            return text_response(ADD_SYNTAX)
        _, term, explanation = parts

        # Validation happens before any storage access.
        if utf16_length(term) > self._config.max_term_units:
            return text_response(TERM_TOO_LONG)
        if utf16_length(explanation) > self._config.max_explanation_units:
            return text_response(EXPLANATION_TOO_LONG)

        term_key = normalize_term(term)
        indices = self._store.append_ranked(term, term_key, explanation, request.user_name)
        LOGGER.info(
            "Entry %s added for %r by %s (%s/p%s)",
            indices.entry_id,
            term_key,
            request.user_name,
            indices.normal_index,
            indices.permanent_index,
        )
        return format_added(term, indices)

    def expl(self, request: CommandRequest) -> CommandResponse:
        """Look up every visible explanation for a term."""

        parts = split_command(request.text)
        if len(parts) != 2:
            return text_response(EXPL_SYNTAX)
        _, term = parts

        entries = self._store.query_by_key(normalize_term(term))
        report = build_report(
            term,
            entries,
            self._format_timestamp,
            cap=self._config.max_results,
        )
        LOGGER.debug("Lookup for %r returned %s entries", term, report.total)
        return format_report(report)
