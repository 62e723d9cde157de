"""Telegram rendering of command responses.

Keeping formatting here prevents drift between reply modes and keeps messages
consistent regardless of how the bot is configured.

Two modes are supported:
- "html": text with HTML markup, sent with parse_mode="html"
- "markdown": plain text plus Telethon message entities (bold title, pre
  block), sent without any parse mode so user text is never reinterpreted
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from telethon.tl.types import MessageEntityBold, MessageEntityPre

from core.models import CommandResponse, MessageAttachment
from core.responses import BLOCK_DELIMITER
from core.text import utf16_length

# Telegram measures message length and entity offsets in UTF-16 code units.
MESSAGE_LIMIT = 4096

MODES = ("markdown", "html")

Entity = Union[MessageEntityBold, MessageEntityPre]


@dataclass(frozen=True)
class OutgoingMessage:
    """One Telegram message ready to send."""

    text: str
    entities: Tuple[Entity, ...] = ()
    parse_mode: Optional[str] = None


def check_mode(mode: str) -> str:
    if mode not in MODES:
        raise ValueError(f"Unsupported reply mode: {mode}")
    return mode


def _split_body(body: str) -> Tuple[str, Optional[List[str]]]:
    """Split an attachment body into its header and the delimited block lines."""

    opening = f"\n{BLOCK_DELIMITER}\n"
    closing = f"\n{BLOCK_DELIMITER}"
    header, sep, rest = body.partition(opening)
    if not sep or not rest.endswith(closing):
        return body, None
    return header, rest[: -len(closing)].split("\n")


def _render_entities(title: str, header: str, lines: List[str]) -> OutgoingMessage:
    text = ""
    entities: List[Entity] = []

    def _append(part: str) -> int:
        nonlocal text
        if text:
            text += "\n"
        offset = utf16_length(text)
        text += part
        return offset

    if title:
        offset = _append(title)
        entities.append(MessageEntityBold(offset=offset, length=utf16_length(title)))
    if header:
        _append(header)
    if lines:
        block = "\n".join(lines)
        offset = _append(block)
        entities.append(MessageEntityPre(offset=offset, length=utf16_length(block), language=""))
    return OutgoingMessage(text=text, entities=tuple(entities))


def _render_html(title: str, header: str, lines: List[str]) -> OutgoingMessage:
    parts = []
    if title:
        parts.append(f"<b>{html.escape(title)}</b>")
    if header:
        parts.append(html.escape(header))
    if lines:
        parts.append("<pre>" + html.escape("\n".join(lines)) + "</pre>")
    return OutgoingMessage(text="\n".join(parts), parse_mode="html")


def _render(mode: str, title: str, header: str, lines: List[str]) -> OutgoingMessage:
    if mode == "markdown":
        return _render_entities(title, header, lines)
    if mode == "html":
        return _render_html(title, header, lines)
    raise ValueError(f"Unsupported reply mode: {mode}")


def _chunk_lines(mode: str, title: str, header: str, lines: List[str]) -> List[OutgoingMessage]:
    """Pack block lines into as few messages as fit the Telegram limit.

    Only the first message carries the title and header. A single line that
    exceeds the limit on its own still gets its own message.
    """

    messages: List[OutgoingMessage] = []
    current: List[str] = []
    for line in lines:
        first = not messages
        candidate = _render(mode, title if first else "", header if first else "", current + [line])
        if current and utf16_length(candidate.text) > MESSAGE_LIMIT:
            messages.append(_render(mode, title if first else "", header if first else "", current))
            current = [line]
        else:
            current.append(line)
    first = not messages
    messages.append(_render(mode, title if first else "", header if first else "", current))
    return messages


def render_attachment(attachment: MessageAttachment, mode: str) -> List[OutgoingMessage]:
    """Render an attachment into one or more Telegram messages."""

    if not attachment.text:
        return [_render(mode, "", attachment.fallback, [])]
    header, lines = _split_body(attachment.text)
    if lines is None:
        return [_render(mode, attachment.title, header, [])]
    return _chunk_lines(mode, attachment.title, header, lines)


def render_response(response: CommandResponse, mode: str) -> List[OutgoingMessage]:
    """Return the messages to send for a response, in order."""

    messages: List[OutgoingMessage] = []
    if response.text:
        messages.append(_render(mode, "", response.text, []))
    for attachment in response.attachments:
        messages.extend(render_attachment(attachment, mode))
    return messages
