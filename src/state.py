"""
Application state management for Portal Browser.
Centralizes the row store, selection, sort order, edit session and the
presentation flags into a single AppState holder.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Set, Dict, Optional, Any


# Sort fields, named after the portal's column keys
FIELD_FILE_NAME = "fileName"
FIELD_SIZE = "size"
FIELD_MODIFIED_AT = "modifiedAt"

ASCENDING = "asc"
DESCENDING = "desc"


@dataclass
class FileEntry:
    """One file stored on the device, as reported by the portal."""

    id: int
    file_name: str
    size: int
    modified_at: datetime


@dataclass
class SortSpec:
    """Active column and direction used to derive display order."""

    field: str = FIELD_FILE_NAME
    direction: str = ASCENDING


@dataclass
class EditSession:
    """
    An in-progress single-cell rename.

    Attributes:
        entry_id: Id of the row being edited
        field: Edited column (only fileName is editable)
        original_value: Value when the edit began
        value: Current text of the edit control
    """

    entry_id: int
    field: str
    original_value: str
    value: str = ""


@dataclass
class NoticeState:
    """Transient notice (snackbar) shown at the bottom of the screen."""

    message: str = ""
    kind: str = "info"  # "info" | "success" | "error"
    expires_at: int = 0  # pygame ticks


@dataclass
class LoadingState:
    """State for the blocking operation overlay."""

    show: bool = False
    message: str = ""


@dataclass
class ConfirmModalState:
    """State for the confirmation modal."""

    show: bool = False
    title: str = ""
    message: str = ""
    ok_label: str = "Delete"
    cancel_label: str = "Cancel"
    button_index: int = 1  # 0 = OK, 1 = Cancel


@dataclass
class LoginState:
    """State for the token entry screen."""

    input_text: str = ""
    invalid: bool = False
    helper_text: str = ""
    busy: bool = False


@dataclass
class UploadPickerState:
    """State for the local file picker used to choose uploads."""

    show: bool = False
    current_path: str = ""
    items: List[Dict[str, Any]] = field(default_factory=list)
    highlighted: int = 0
    chosen: List[str] = field(default_factory=list)  # paths, in pick order


class AppState:
    """
    Centralized application state for Portal Browser.

    The row store, selection set, sort spec and edit session are only
    changed through the controllers package so their invariants hold.
    """

    def __init__(self):
        # ---- Session ---- #
        self.token: Optional[str] = None
        self.mode: str = "login"  # login, files

        # ---- Row Store ---- #
        self.rows: List[FileEntry] = []

        # ---- View State ---- #
        self.selection: Set[int] = set()
        self.sort = SortSpec()
        self.edit: Optional[EditSession] = None
        # Optimistic display values by entry id, dropped on rollback
        self.display_overrides: Dict[int, str] = {}
        self.focused: int = 0  # keyboard focus, index into the ordered view
        self.scroll_offset: int = 0

        # ---- Presentation ---- #
        self.login = LoginState()
        self.notice = NoticeState()
        self.loading = LoadingState()
        self.confirm_modal = ConfirmModalState()
        self.upload_picker = UploadPickerState()

        # ---- Runtime Flags ---- #
        self.running: bool = True

    @property
    def authenticated(self) -> bool:
        return self.token is not None

    @property
    def row_ids(self) -> Set[int]:
        return {entry.id for entry in self.rows}

    def enter_mode(self, new_mode: str):
        """
        Transition to a new application mode.

        Args:
            new_mode: The mode to transition to
        """
        self.mode = new_mode
        self.focused = 0
        self.scroll_offset = 0
