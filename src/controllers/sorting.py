"""
Sort controller.

Derives the display order from the row store without touching it.
"""

from typing import Any, Callable, Dict, List, Sequence

from state import (
    AppState,
    FileEntry,
    SortSpec,
    FIELD_FILE_NAME,
    FIELD_SIZE,
    FIELD_MODIFIED_AT,
    ASCENDING,
    DESCENDING,
)

# Comparison key per sortable column
SORT_KEYS: Dict[str, Callable[[FileEntry], Any]] = {
    FIELD_FILE_NAME: lambda entry: entry.file_name,
    FIELD_SIZE: lambda entry: entry.size,
    FIELD_MODIFIED_AT: lambda entry: entry.modified_at.timestamp(),
}


def set_sort(state: AppState, sort_field: str) -> None:
    """
    Header click: flip the direction on the active column, otherwise switch
    to the new column in ascending order.

    Args:
        state: AppState instance
        sort_field: One of fileName, size, modifiedAt
    """
    if sort_field not in SORT_KEYS:
        raise ValueError(f"Unknown sort field: {sort_field}")

    if state.sort.field == sort_field:
        direction = DESCENDING if state.sort.direction == ASCENDING else ASCENDING
        state.sort = SortSpec(sort_field, direction)
    else:
        state.sort = SortSpec(sort_field, ASCENDING)


def ordered_view(rows: Sequence[FileEntry], sort: SortSpec) -> List[FileEntry]:
    """
    Return the rows in display order.

    The sort is stable in both directions, so rows with equal keys keep
    their row store order.

    Args:
        rows: Row store contents
        sort: Active sort spec

    Returns:
        New list; the input sequence is not modified
    """
    key = SORT_KEYS[sort.field]
    return sorted(rows, key=key, reverse=sort.direction == DESCENDING)
