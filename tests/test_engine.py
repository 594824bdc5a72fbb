import pytest

from helpers import render_rows, store_from_rows

from tilematch.engine import MatchEngine
from tilematch.errors import UsageError
from tilematch.grid.store import ListTileStore
from tilematch.matching.match_info import TileChange

SEVEN_BY_SEVEN = [
    "B C D E F B C",
    "C D E F B C D",
    "D E F C D E F",
    "A A A B C D E",
    "E F B A F B C",
    "F B C D E F B",
    "B C D E F B C",
]

THREE_BY_THREE = [
    "B C D",
    "E F A",
    "A A C",
]


def make_engine(rows):
    store = store_from_rows(rows)
    cols = len(rows[0].split())
    return MatchEngine(store, len(rows), cols), cols


def test_swap_completing_run_of_four_is_accepted():
    engine, _ = make_engine(SEVEN_BY_SEVEN)
    result = engine.attempt_swap(24, 31)
    assert result.accepted and result.swapped
    assert result.combo.sorted_positions == (21, 22, 23, 24)


def test_swap_without_match_is_rejected_and_revertible():
    engine, cols = make_engine(THREE_BY_THREE)
    result = engine.attempt_swap(0, 1)
    assert not result.accepted
    assert result.combo is None
    assert result.swapped
    assert render_rows(engine.store, cols)[0] == "C B D"
    engine.revert_swap(0, 1)
    assert render_rows(engine.store, cols) == THREE_BY_THREE


def test_non_adjacent_swap_leaves_board_untouched():
    engine, cols = make_engine(THREE_BY_THREE)
    for a, b in [(0, 2), (2, 3), (0, 4)]:
        result = engine.attempt_swap(a, b)
        assert not result.accepted and not result.swapped
    assert render_rows(engine.store, cols) == THREE_BY_THREE


def test_swap_with_unset_position_is_usage_error():
    engine, _ = make_engine(THREE_BY_THREE)
    with pytest.raises(UsageError):
        engine.attempt_swap(None, 1)
    with pytest.raises(UsageError):
        engine.revert_swap(0, None)


def test_store_must_match_grid_shape():
    with pytest.raises(UsageError):
        MatchEngine(store_from_rows(["A B C"]), 2, 2)


def test_resolve_combo_clears_and_settles():
    engine, cols = make_engine(THREE_BY_THREE)
    result = engine.attempt_swap(5, 8)
    assert result.combo.sorted_positions == (6, 7, 8)
    changes = engine.resolve_combo(result.combo)
    assert render_rows(engine.store, cols) == [
        "- - -",
        "B C D",
        "E F C",
    ]
    assert [change.position for change in changes] == list(range(9))
    assert changes[0] == TileChange(0, "B", True)
    assert changes[8] == TileChange(8, "C", False)
    assert len(engine.last_moves) == 6


def test_resolve_combo_reports_only_changed_slots():
    engine, cols = make_engine([
        "B C A",
        "E F A",
        "C A D",
    ])
    result = engine.attempt_swap(7, 8)
    assert result.combo.sorted_positions == (2, 5, 8)
    changes = engine.resolve_combo(result.combo)
    # Nothing sits above the cleared column, so it simply empties.
    assert changes == [TileChange(2, "A", True), TileChange(5, "A", True), TileChange(8, "A", True)]
    assert engine.last_moves == []
    assert render_rows(engine.store, cols) == ["B C -", "E F -", "C D -"]


def test_find_valid_swaps_does_not_touch_board():
    engine, cols = make_engine(THREE_BY_THREE)
    swaps = engine.find_valid_swaps()
    assert (5, 8) in swaps
    assert (0, 1) not in swaps
    assert render_rows(engine.store, cols) == THREE_BY_THREE


def test_two_wide_board_swap_matches_both_columns():
    engine, cols = make_engine([
        "A B",
        "B A",
        "A B",
    ])
    result = engine.attempt_swap(2, 3)
    assert result.combo.sorted_positions == (0, 1, 2, 3, 4, 5)
    engine.resolve_combo(result.combo)
    assert render_rows(engine.store, cols) == ["- -", "- -", "- -"]


def test_two_wide_board_shared_run_counted_once():
    engine, _ = make_engine([
        "A B",
        "A C",
        "A D",
        "B C",
    ])
    # Both partners are A: the runs around them are the same column.
    result = engine.attempt_swap(2, 4)
    assert result.accepted
    assert result.combo.first.along_y == (0, 2, 4)
    assert result.combo.second.along_y == (0, 2, 4)
    assert result.combo.sorted_positions == (0, 2, 4)


def test_engine_accepts_plain_list_store():
    store = ListTileStore.from_types(["A", "B", "A", "A"])
    engine = MatchEngine(store, 1, 4)
    assert engine.attempt_swap(0, 1).combo.sorted_positions == (1, 2, 3)
