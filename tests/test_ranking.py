from __future__ import annotations

from core.ranking import indices_from_counts


def test_no_prior_entries_ranks_first() -> None:
    assert indices_from_counts([]) == (1, 1)


def test_disabled_entries_only_move_permanent_index() -> None:
    assert indices_from_counts([(True, 3), (False, 2)]) == (4, 6)
    assert indices_from_counts([(False, 1)]) == (1, 2)
