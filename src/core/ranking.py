"""Entry ranking (core domain).

Every entry carries two 1-based ranks within its term: the normal index
counts only enabled entries, the permanent index counts all of them and
therefore never changes when an older entry is disabled later on.
"""

from __future__ import annotations

from typing import Iterable, Tuple


def indices_from_counts(counts: Iterable[Tuple[bool, int]]) -> Tuple[int, int]:
    """Turn grouped prior-entry counts into (normal_index, permanent_index).

    counts holds (enabled, count) pairs for the entries that precede the new
    one under the same term key, as produced by a GROUP BY on the enabled flag.
    """

    normal_index = permanent_index = 1
    for enabled, count in counts:
        permanent_index += count
        if enabled:
            normal_index += count
    return normal_index, permanent_index
