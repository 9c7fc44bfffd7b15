"""
Row store and selection controller.

Owns AppState.rows and AppState.selection. Every function keeps the
selection a subset of the ids currently in the row store.
"""

from typing import Iterable, List, Optional

from state import AppState, FileEntry

SELECT_ALL_CHECKED = "checked"
SELECT_ALL_INDETERMINATE = "indeterminate"
SELECT_ALL_UNCHECKED = "unchecked"


def replace_rows(state: AppState, entries: Iterable[FileEntry]) -> None:
    """
    Install a new row store snapshot received from the portal.

    The selection is reset and optimistic display values are dropped. An edit
    session whose row disappeared from the snapshot is ended.

    Args:
        state: AppState instance
        entries: Entries in the order the portal returned them
    """
    rows: List[FileEntry] = []
    seen = set()
    for entry in entries:
        # Keep the first entry for a repeated id
        if entry.id in seen:
            continue
        seen.add(entry.id)
        rows.append(entry)

    state.rows = rows
    state.selection = set()
    state.display_overrides = {}
    if state.edit is not None and state.edit.entry_id not in seen:
        state.edit = None
    if state.focused >= len(rows):
        state.focused = max(0, len(rows) - 1)


def find_entry(state: AppState, entry_id: int) -> Optional[FileEntry]:
    """Look up a row by id."""
    for entry in state.rows:
        if entry.id == entry_id:
            return entry
    return None


def toggle_selection(state: AppState, entry_id: int) -> None:
    """Add or remove a row from the selection. Unknown ids are ignored."""
    if find_entry(state, entry_id) is None:
        return
    if entry_id in state.selection:
        state.selection.discard(entry_id)
    else:
        state.selection.add(entry_id)


def select_all(state: AppState) -> None:
    state.selection = state.row_ids


def clear_selection(state: AppState) -> None:
    state.selection = set()


def toggle_select_all(state: AppState) -> None:
    """Select-all checkbox click: clear when everything is selected, else select all."""
    if is_fully_selected(state):
        clear_selection(state)
    else:
        select_all(state)


def is_fully_selected(state: AppState) -> bool:
    return len(state.rows) > 0 and len(state.selection) == len(state.rows)


def is_partially_selected(state: AppState) -> bool:
    return 0 < len(state.selection) < len(state.rows)


def select_all_state(state: AppState) -> str:
    """
    Tri-state value for the select-all checkbox.

    Returns:
        "checked", "indeterminate" or "unchecked"
    """
    if is_fully_selected(state):
        return SELECT_ALL_CHECKED
    if is_partially_selected(state):
        return SELECT_ALL_INDETERMINATE
    return SELECT_ALL_UNCHECKED


def selected_entries(state: AppState) -> List[FileEntry]:
    """Selected rows in row store order."""
    return [entry for entry in state.rows if entry.id in state.selection]
