from __future__ import annotations

from vig.search import SearchEngine, SearchOrigin, find_matches

COMMITS = ("Fix bug", "Add feature", "FIX typo")
ORIGIN = SearchOrigin(offset_y=4, cursor=(4, 0))


def test_search_is_case_insensitive() -> None:
    engine = SearchEngine()

    matches = engine.start("fix", COMMITS, ORIGIN)

    assert [match.row for match in matches] == [0, 2]
    assert engine.status_label() == "[0/2]"


def test_next_wraps_around() -> None:
    engine = SearchEngine()
    engine.start("fix", COMMITS, ORIGIN)

    assert engine.next().row == 0
    assert engine.next().row == 2
    assert engine.next().row == 0
    assert engine.status_label() == "[1/2]"


def test_previous_from_fresh_search_goes_to_last() -> None:
    engine = SearchEngine()
    engine.start("fix", COMMITS, ORIGIN)

    assert engine.previous().row == 2
    assert engine.previous().row == 0


def test_clear_restores_origin_only_without_selection() -> None:
    engine = SearchEngine()
    engine.start("fix", COMMITS, ORIGIN)
    assert engine.clear() == ORIGIN
    assert not engine.active
    assert engine.status_label() == ""

    engine.start("fix", COMMITS, ORIGIN)
    engine.next()
    assert engine.clear() is None


def test_retargeting_keeps_first_origin() -> None:
    engine = SearchEngine()
    engine.start("f", COMMITS, ORIGIN)

    engine.start("fi", COMMITS, SearchOrigin(offset_y=0, cursor=(0, 0)))

    assert engine.clear() == ORIGIN


def test_no_match_leaves_nothing_to_step_to() -> None:
    engine = SearchEngine()
    engine.start("zzz", COMMITS, ORIGIN)

    assert engine.next() is None
    assert engine.current is None


def test_update_rows_recomputes_and_clamps_current() -> None:
    engine = SearchEngine()
    engine.start("fix", COMMITS, ORIGIN)
    engine.next()
    engine.next()

    engine.update_rows(("fix one", "other"))

    assert len(engine.matches) == 1
    assert engine.current_index == 0


def test_per_field_matches_for_diff_rows() -> None:
    rows = [("old value", "new value"), (None, "value value")]

    all_matches = find_matches("value", rows, per_row=False)
    per_row = find_matches("value", rows)

    assert [(m.row, m.field, m.col_start) for m in all_matches] == [
        (0, 0, 4),
        (0, 1, 4),
        (1, 1, 0),
        (1, 1, 6),
    ]
    assert [(m.row, m.field) for m in per_row] == [(0, 0), (1, 1)]
    assert find_matches("", rows) == []
