"""Telegram reply adapter.

Renders a CommandResponse and sends it as replies to the triggering message.
"""

from __future__ import annotations

from adapters.telegram_formatting import check_mode, render_response
from core.models import CommandResponse


class TelegramResponder:
    """Sends rendered responses as replies via Telethon."""

    def __init__(self, mode: str) -> None:
        self._mode = check_mode(mode)

    async def send(self, event, response: CommandResponse) -> None:
        """Reply to the event with every message the response renders to."""

        for message in render_response(response, self._mode):
            # parse_mode=None keeps Telethon from parsing entity-mode text.
            await event.reply(
                message.text,
                parse_mode=message.parse_mode,
                formatting_entities=list(message.entities) or None,
                link_preview=False,
            )
