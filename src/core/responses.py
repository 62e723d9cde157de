"""Response building for glossary commands.

Keeping every user-facing sentence here prevents drift between commands and
transports.
"""

from __future__ import annotations

from core.models import CommandResponse, EntryIndices, ExplReport, MessageAttachment, ReportItem

BLOCK_DELIMITER = "```"

ADD_SYNTAX = "Syntax: !add <term> <explanation>"
EXPL_SYNTAX = "Syntax: !expl <term>"
TERM_TOO_LONG = "Sorry, the term is too long."
EXPLANATION_TOO_LONG = "Sorry, the explanation is too long."
NO_ENTRY_FOUND = "Sorry, no entry found."
EXPL_FALLBACK = "Sorry, your client cannot display the results of !expl."
INTERNAL_ERROR = "Sorry, something went wrong."


def text_response(text: str) -> CommandResponse:
    return CommandResponse(text=text)


def format_added(term: str, indices: EntryIndices) -> CommandResponse:
    """Confirm a new entry with both its normal and permanent index."""

    return text_response(
        f"I added the new entry {term}[{indices.normal_index}/p{indices.permanent_index}]."
    )


def format_item(item: ReportItem) -> str:
    """Render one entry line: term[index]: text (metadata)."""

    line = f"{item.term}[{item.normal_index}]: {item.text}"
    if item.metadata:
        line += " (" + ", ".join(item.metadata) + ")"
    return line


def report_header(total: int, cap: int) -> str:
    if total == 0:
        return NO_ENTRY_FOUND
    if total == 1:
        return "I found the following entry:"
    if total <= cap:
        return f"I found the following {total} entries:"
    return f"I found {total} entries, showing the last {cap}:"


def format_report(report: ExplReport) -> CommandResponse:
    """Render an !expl report.

    Nothing found is a plain text answer; otherwise the entry lines go into a
    delimited block inside an attachment titled with the query.
    """

    header = report_header(report.total, report.cap)
    if report.total == 0:
        return text_response(header)

    lines = "\n".join(format_item(item) for item in report.items)
    body = f"{header}\n{BLOCK_DELIMITER}\n{lines}\n{BLOCK_DELIMITER}"
    attachment = MessageAttachment(
        fallback=EXPL_FALLBACK,
        title=f"!expl {report.term}",
        text=body,
    )
    return CommandResponse(attachments=(attachment,))
