"""Telethon event handling for glossary commands.

Every command message gets exactly one answer: the command's response, or a
generic error reply when processing fails.
"""

from __future__ import annotations

import asyncio
import logging

from adapters.telegram_mapper import build_request, is_command
from adapters.telegram_responder import TelegramResponder
from core.commands import ExplCommands
from core.responses import INTERNAL_ERROR, text_response

LOGGER = logging.getLogger(__name__)


async def process_event(event, commands: ExplCommands, responder: TelegramResponder) -> None:
    """Run one incoming message through the command processor and reply."""

    if not is_command(event.raw_text or ""):
        return
    try:
        request = await build_request(event.message)
        # SQLite calls block, so they run off the event loop.
        response = await asyncio.to_thread(commands.handle, request)
    except Exception:
        LOGGER.exception("Error while processing command")
        response = text_response(INTERNAL_ERROR)
    if response is None:
        return
    await responder.send(event, response)
