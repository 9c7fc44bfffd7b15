"""Row store and selection controller tests."""

import os
import random
import sys
from datetime import datetime

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from state import AppState, FileEntry, EditSession
from controllers.rows import (
    replace_rows,
    find_entry,
    toggle_selection,
    select_all,
    clear_selection,
    toggle_select_all,
    is_fully_selected,
    is_partially_selected,
    select_all_state,
    selected_entries,
)


def _make_entries(ids):
    return [
        FileEntry(id=i, file_name=f"prog{i}.bas", size=i * 100, modified_at=datetime(2024, 1, i % 28 + 1))
        for i in ids
    ]


def _make_state(ids=(1, 2, 3, 4, 5)):
    state = AppState()
    replace_rows(state, _make_entries(ids))
    return state


def test_replace_rows_keeps_order_and_clears_selection():
    state = _make_state()
    select_all(state)
    replace_rows(state, _make_entries([9, 3, 7]))
    assert [e.id for e in state.rows] == [9, 3, 7]
    assert state.selection == set()


def test_replace_rows_drops_repeated_ids():
    state = AppState()
    entries = _make_entries([1, 2]) + [FileEntry(1, "dup.bas", 1, datetime(2024, 1, 1))]
    replace_rows(state, entries)
    assert [e.id for e in state.rows] == [1, 2]
    assert find_entry(state, 1).file_name == "prog1.bas"


def test_replace_rows_ends_edit_on_removed_row():
    state = _make_state([1, 2])
    state.edit = EditSession(entry_id=2, field="fileName", original_value="prog2.bas", value="x")
    replace_rows(state, _make_entries([1, 2, 3]))
    assert state.edit is not None

    replace_rows(state, _make_entries([1]))
    assert state.edit is None


def test_toggle_selection():
    state = _make_state()
    toggle_selection(state, 2)
    assert state.selection == {2}
    toggle_selection(state, 2)
    assert state.selection == set()


def test_toggle_unknown_id_is_ignored():
    state = _make_state()
    toggle_selection(state, 42)
    assert state.selection == set()


def test_selection_always_subset_of_rows():
    rng = random.Random(7)
    state = AppState()
    for _ in range(500):
        op = rng.choice(["replace", "toggle", "all", "clear", "toggle_all"])
        if op == "replace":
            ids = rng.sample(range(1, 20), rng.randint(0, 8))
            replace_rows(state, _make_entries(ids))
        elif op == "toggle":
            toggle_selection(state, rng.randint(1, 20))
        elif op == "all":
            select_all(state)
        elif op == "clear":
            clear_selection(state)
        else:
            toggle_select_all(state)
        assert state.selection <= state.row_ids


def test_select_all_tri_state():
    state = _make_state([1, 2, 3, 4, 5])
    assert select_all_state(state) == "unchecked"

    for entry_id in (1, 2, 3):
        toggle_selection(state, entry_id)
    assert select_all_state(state) == "indeterminate"
    assert is_partially_selected(state)

    toggle_selection(state, 4)
    toggle_selection(state, 5)
    assert select_all_state(state) == "checked"
    assert is_fully_selected(state)


def test_empty_store_is_never_fully_selected():
    state = AppState()
    select_all(state)
    assert not is_fully_selected(state)
    assert select_all_state(state) == "unchecked"


def test_toggle_select_all_clears_when_full():
    state = _make_state()
    toggle_selection(state, 1)
    toggle_select_all(state)
    assert state.selection == {1, 2, 3, 4, 5}
    toggle_select_all(state)
    assert state.selection == set()


def test_selected_entries_follow_row_order():
    state = _make_state([5, 1, 3])
    toggle_selection(state, 3)
    toggle_selection(state, 5)
    assert [e.id for e in selected_entries(state)] == [5, 3]
