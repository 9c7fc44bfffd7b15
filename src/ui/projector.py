"""
View projector for Portal Browser.

Maps the row store, selection, sort spec and edit session to a table
description. Pure: it reads AppState and never changes it, so the screens
only ever draw what this module returns.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from state import (
    AppState,
    FIELD_FILE_NAME,
    FIELD_SIZE,
    FIELD_MODIFIED_AT,
)
from controllers.rows import select_all_state
from controllers.sorting import ordered_view
from utils.formatting import format_size, format_date

COLUMNS = [
    (FIELD_FILE_NAME, "Name"),
    (FIELD_SIZE, "Size"),
    (FIELD_MODIFIED_AT, "Modified"),
]


@dataclass
class RowView:
    entry_id: int
    checked: bool
    display_name: str
    size_text: str
    date_text: str
    highlighted: bool = False  # selected row
    focused: bool = False  # keyboard cursor
    editing: bool = False
    edit_value: str = ""


@dataclass
class ColumnView:
    field: str
    label: str
    sort_direction: Optional[str] = None  # "asc" / "desc" on the active column


@dataclass
class ToolbarView:
    upload_enabled: bool = True
    download_enabled: bool = False
    delete_enabled: bool = False
    selection_text: str = ""


@dataclass
class TableView:
    rows: List[RowView] = field(default_factory=list)
    columns: List[ColumnView] = field(default_factory=list)
    select_all: str = "unchecked"
    toolbar: ToolbarView = field(default_factory=ToolbarView)


def project_toolbar(state: AppState) -> ToolbarView:
    """Toolbar state for the current selection."""
    count = len(state.selection)
    return ToolbarView(
        upload_enabled=state.edit is None,
        download_enabled=count > 0,
        delete_enabled=count == 1,
        selection_text=f"{count} selected" if count > 0 else "",
    )


def project_table(state: AppState) -> TableView:
    """
    Build the table description for the file list screen.

    Args:
        state: AppState instance

    Returns:
        TableView with rows in display order
    """
    edit = state.edit
    rows = []
    for index, entry in enumerate(ordered_view(state.rows, state.sort)):
        editing = edit is not None and edit.entry_id == entry.id
        rows.append(
            RowView(
                entry_id=entry.id,
                checked=entry.id in state.selection,
                display_name=state.display_overrides.get(entry.id, entry.file_name),
                size_text=format_size(entry.size),
                date_text=format_date(entry.modified_at),
                highlighted=entry.id in state.selection,
                focused=index == state.focused,
                editing=editing,
                edit_value=edit.value if editing else "",
            )
        )

    columns = [
        ColumnView(
            field=name,
            label=label,
            sort_direction=state.sort.direction if state.sort.field == name else None,
        )
        for name, label in COLUMNS
    ]

    return TableView(
        rows=rows,
        columns=columns,
        select_all=select_all_state(state),
        toolbar=project_toolbar(state),
    )


def entry_id_at(state: AppState, index: int) -> Optional[int]:
    """Id of the row shown at a display position."""
    view = ordered_view(state.rows, state.sort)
    if 0 <= index < len(view):
        return view[index].id
    return None
