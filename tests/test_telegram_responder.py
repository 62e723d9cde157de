from __future__ import annotations

import asyncio

from adapters.telegram_responder import TelegramResponder
from core.models import ExplReport, ReportItem
from core.responses import format_report, text_response


class DummyEvent:
    def __init__(self) -> None:
        self.replies: list[tuple[str, dict]] = []

    async def reply(self, message: str, **kwargs) -> None:
        self.replies.append((message, kwargs))


def test_send_plain_text_reply() -> None:
    event = DummyEvent()
    asyncio.run(TelegramResponder("html").send(event, text_response("Sorry, no entry found.")))

    [(message, kwargs)] = event.replies
    assert message == "Sorry, no entry found."
    assert kwargs["parse_mode"] == "html"
    assert kwargs["formatting_entities"] is None


def test_send_report_with_entities() -> None:
    event = DummyEvent()
    items = (ReportItem("widget", 1, 1, "a **cool** thing", ("alice",)),)
    response = format_report(ExplReport(term="widget", total=1, cap=50, items=items))

    asyncio.run(TelegramResponder("markdown").send(event, response))

    [(message, kwargs)] = event.replies
    assert "widget[1]: a **cool** thing (alice)" in message
    assert kwargs["parse_mode"] is None
    assert len(kwargs["formatting_entities"]) == 2
