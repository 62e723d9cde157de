"""Telegram-to-core request mapping adapter.

This keeps Telethon-specific details out of the command processor.
"""

from __future__ import annotations

from typing import Any, Optional

from telethon.tl.custom import Message

from core.models import CommandRequest


def sender_name(sender: Any) -> Optional[str]:
    """Return the name stored as an entry's author.

    Prefers the public username, then the display name, then the numeric id.
    """

    if sender is None:
        return None
    username = getattr(sender, "username", None)
    if isinstance(username, str) and username:
        return username
    title = getattr(sender, "title", None)
    if title:
        return str(title)
    first = getattr(sender, "first_name", None)
    last = getattr(sender, "last_name", None)
    if first or last:
        return " ".join(part for part in [first, last] if part)
    sender_id = getattr(sender, "id", None)
    return str(sender_id) if sender_id is not None else None


def is_command(text: str) -> bool:
    """Cheap pre-filter so plain chatter never reaches the processor."""

    return text.lstrip().startswith("!")


async def build_request(message: Message) -> CommandRequest:
    """Build a core CommandRequest from a Telethon Message."""

    sender = await message.get_sender()
    return CommandRequest(text=message.raw_text or "", user_name=sender_name(sender))
