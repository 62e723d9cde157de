from __future__ import annotations

from core.models import EntryIndices, ExplReport, ReportItem
from core.responses import (
    EXPL_FALLBACK,
    NO_ENTRY_FOUND,
    format_added,
    format_item,
    format_report,
    report_header,
)


def test_format_added_shows_both_indices() -> None:
    response = format_added("widget", EntryIndices(entry_id=7, normal_index=2, permanent_index=3))
    assert response.text == "I added the new entry widget[2/p3]."
    assert response.attachments == ()


def test_format_item_with_and_without_metadata() -> None:
    item = ReportItem("widget", 2, 3, "a cool thing", ("alice", "01.01.2024 13:00"))
    assert format_item(item) == "widget[2]: a cool thing (alice, 01.01.2024 13:00)"
    bare = ReportItem("widget", 1, 1, "plain")
    assert format_item(bare) == "widget[1]: plain"


def test_report_header_variants() -> None:
    assert report_header(0, 50) == NO_ENTRY_FOUND
    assert report_header(1, 50) == "I found the following entry:"
    assert report_header(2, 50) == "I found the following 2 entries:"
    assert report_header(50, 50) == "I found the following 50 entries:"
    assert report_header(51, 50) == "I found 51 entries, showing the last 50:"


def test_empty_report_is_plain_text() -> None:
    response = format_report(ExplReport(term="widget", total=0, cap=50, items=()))
    assert response.text == NO_ENTRY_FOUND
    assert response.attachments == ()


def test_report_body_uses_block_delimiter() -> None:
    items = (
        ReportItem("widget", 1, 1, "first", ("alice",)),
        ReportItem("widget", 2, 3, "second"),
    )
    response = format_report(ExplReport(term="Widget", total=2, cap=50, items=items))

    assert response.text is None
    [attachment] = response.attachments
    assert attachment.title == "!expl Widget"
    assert attachment.fallback == EXPL_FALLBACK
    assert attachment.text == (
        "I found the following 2 entries:\n"
        "```\n"
        "widget[1]: first (alice)\n"
        "widget[2]: second\n"
        "```"
    )
