"""
Edit session controller.

A single-slot state machine for in-place rename: Idle, or Editing one
cell. Only one cell can be edited at a time; begin_edit is ignored while a
session is open. Only the file name column is editable.
"""

from dataclasses import dataclass
from typing import Optional

from state import AppState, EditSession, FIELD_FILE_NAME
from controllers.rows import find_entry

EDITABLE_FIELDS = (FIELD_FILE_NAME,)


@dataclass
class RenameRequest:
    """A committed edit that must be sent to the portal."""

    entry_id: int
    old_name: str
    new_name: str


def is_editing(state: AppState) -> bool:
    return state.edit is not None


def begin_edit(state: AppState, entry_id: int, field: str = FIELD_FILE_NAME) -> bool:
    """
    Open an edit session on a row.

    Args:
        state: AppState instance
        entry_id: Row to edit
        field: Column to edit

    Returns:
        True if a session was opened, False if the request was ignored
    """
    if state.edit is not None:
        return False
    if field not in EDITABLE_FIELDS:
        return False

    entry = find_entry(state, entry_id)
    if entry is None:
        return False

    state.edit = EditSession(
        entry_id=entry_id,
        field=field,
        original_value=entry.file_name,
        value=entry.file_name,
    )
    return True


def update_edit_value(state: AppState, value: str) -> None:
    """Track the text typed into the edit control."""
    if state.edit is not None:
        state.edit.value = value


def commit_edit(state: AppState, value: Optional[str] = None) -> Optional[RenameRequest]:
    """
    Close the edit session, keeping the typed value.

    Args:
        state: AppState instance
        value: Final text; defaults to the tracked edit value

    Returns:
        RenameRequest when the trimmed value is non-empty and changed,
        otherwise None
    """
    session = state.edit
    if session is None:
        return None
    state.edit = None

    new_value = (session.value if value is None else value).strip()
    if not new_value or new_value == session.original_value:
        return None
    return RenameRequest(session.entry_id, session.original_value, new_value)


def cancel_edit(state: AppState) -> None:
    """Close the edit session and discard the typed value."""
    state.edit = None


def blur_edit(state: AppState) -> Optional[RenameRequest]:
    """Focus left the edit control; treated as a commit."""
    return commit_edit(state)
