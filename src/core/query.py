"""Query engine for !expl lookups (core domain)."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from core.models import Entry, ExplReport, ReportItem
from core.text import collapse_whitespace


def rank_history(entries: Iterable[Entry]) -> Iterator[Tuple[Entry, Optional[int], int]]:
    """Yield (entry, normal_index, permanent_index) for a term's history.

    entries must be ordered by ascending id. Disabled entries get no normal
    index but still consume a permanent one, so disabling leaves a gap in the
    permanent numbering while later normal numbers close up.
    """

    normal_index = permanent_index = 1
    for entry in entries:
        if entry.enabled:
            yield entry, normal_index, permanent_index
            normal_index += 1
        else:
            yield entry, None, permanent_index
        permanent_index += 1


def _metadata(entry: Entry, format_timestamp: Callable[[datetime], str]) -> tuple[str, ...]:
    items: List[str] = []
    if entry.author is not None:
        items.append(entry.author)
    if entry.created_at is not None:
        items.append(format_timestamp(entry.created_at))
    return tuple(items)


def build_report(
    term: str,
    entries: Iterable[Entry],
    format_timestamp: Callable[[datetime], str],
    cap: int = 50,
) -> ExplReport:
    """Rank and filter the entries of one term.

    Only the last cap visible entries are kept; total reports how many were
    visible before truncation.
    """

    visible: List[ReportItem] = []
    for entry, normal_index, permanent_index in rank_history(entries):
        if normal_index is None:
            continue
        visible.append(
            ReportItem(
                term=entry.term,
                normal_index=normal_index,
                permanent_index=permanent_index,
                text=collapse_whitespace(entry.explanation),
                metadata=_metadata(entry, format_timestamp),
            )
        )

    total = len(visible)
    if total > cap:
        visible = visible[total - cap:]
    return ExplReport(term=term, total=total, cap=cap, items=tuple(visible))
