"""
Mutation coordinator for Portal Browser.

Runs every operation that touches the device's file store, applies the
operation's commit policy and reconciles the row store afterwards. Calls
run to completion one at a time; the only suspension points are the
remote calls themselves.
"""

import os
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from constants import DEFAULT_ARCHIVE_NAME, INVALID_TOKEN_TEXT
from state import AppState
from controllers import edit_session
from controllers.edit_session import RenameRequest
from controllers.rows import (
    replace_rows,
    find_entry,
    selected_entries,
    is_fully_selected,
)
from services.remote_store import RemoteStoreClient
from services.upload_encoding import read_as_data_url
from utils.logging import log_error


class CommitPolicy(Enum):
    """When a change becomes visible relative to the remote confirmation."""

    CONFIRM_FIRST = "confirm_first"
    OPTIMISTIC = "optimistic"
    FIRE_AND_FORGET = "fire_and_forget"


# Every remote operation must declare its policy here
OPERATION_POLICIES: Dict[str, CommitPolicy] = {
    "login": CommitPolicy.CONFIRM_FIRST,
    "refresh": CommitPolicy.CONFIRM_FIRST,
    "upload": CommitPolicy.CONFIRM_FIRST,
    "delete": CommitPolicy.CONFIRM_FIRST,
    "rename": CommitPolicy.OPTIMISTIC,
    "download": CommitPolicy.FIRE_AND_FORGET,
}


class Outcome(Enum):
    SUCCESS = "success"
    CANCELLED = "cancelled"
    NOOP = "noop"  # precondition not met, nothing surfaced
    AUTH_FAILURE = "auth_failure"
    REMOTE_FAILURE = "remote_failure"
    PARTIAL_BATCH_FAILURE = "partial_batch_failure"


@dataclass
class OperationResult:
    """Result of a coordinator call."""

    outcome: Outcome
    reason: str = ""
    detail: Any = None

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.SUCCESS


@dataclass
class DownloadRequest:
    """Query parameters and suggested local name for a download."""

    params: List[Tuple[str, str]] = field(default_factory=list)
    suggested_name: str = DEFAULT_ARCHIVE_NAME


def build_download_request(state: AppState) -> Optional[DownloadRequest]:
    """
    Build download parameters for the current selection.

    The whole row store selected sends a single all=true marker; otherwise
    each selected name is sent as a repeated file parameter. A single
    selected entry suggests its own name, anything else the archive name.

    Returns:
        DownloadRequest, or None when nothing is selected
    """
    entries = selected_entries(state)
    if not entries:
        return None

    if is_fully_selected(state):
        params = [("all", "true")]
    else:
        params = [("file", entry.file_name) for entry in entries]

    suggested = entries[0].file_name if len(entries) == 1 else DEFAULT_ARCHIVE_NAME
    return DownloadRequest(params=params, suggested_name=suggested)


def _no_redraw() -> None:
    pass


class MutationCoordinator:
    """
    Sequences remote-affecting user operations.

    Presentation collaborators are injected: notify shows a transient
    notice, confirm asks a yes/no question and blocks for the answer, and
    redraw lets the view catch up before a remote call blocks.
    """

    def __init__(
        self,
        state: AppState,
        client: RemoteStoreClient,
        notify: Callable[[str, str], None],
        confirm: Callable[[str, str], bool],
        download_dir: str,
        redraw: Callable[[], None] = _no_redraw,
        read_upload: Callable[[str], Tuple[str, str]] = read_as_data_url,
    ):
        """
        Initialize the coordinator.

        Args:
            state: AppState instance
            client: Remote store client
            notify: Callback taking (message, kind) with kind info/success/error
            confirm: Callback taking (title, message), returns True to proceed
            download_dir: Where downloads are saved
            redraw: Callback that re-renders the current state
            read_upload: Reads a local path into (file_name, data_url)
        """
        self.state = state
        self.client = client
        self.notify = notify
        self.confirm = confirm
        self.download_dir = download_dir
        self.redraw = redraw
        self.read_upload = read_upload

    # ---- Commit policy ---- #

    def _commit(
        self,
        operation: str,
        remote_call: Callable[[], tuple],
        on_success: Callable[[tuple], None],
        message: str = "",
        show_pending: Optional[Callable[[], None]] = None,
        rollback: Optional[Callable[[], None]] = None,
    ) -> Tuple[bool, str]:
        """
        Run one remote call under the operation's commit policy.

        Optimistic operations apply show_pending before the call and
        rollback after a failure. Confirm-first operations only touch state
        in on_success.

        Returns:
            Tuple of (success, error_message)
        """
        policy = OPERATION_POLICIES[operation]
        if policy == CommitPolicy.OPTIMISTIC and show_pending is not None:
            show_pending()

        self.state.loading.show = True
        self.state.loading.message = message
        self.redraw()
        try:
            result = remote_call()
        finally:
            self.state.loading.show = False
            self.state.loading.message = ""

        success, error = result[0], result[-1]
        if success:
            on_success(result)
            return True, ""

        if policy == CommitPolicy.OPTIMISTIC and rollback is not None:
            rollback()
        return False, error

    def _reload_rows(self) -> Tuple[bool, str]:
        """Fetch the file list under the refresh policy and replace the rows."""
        return self._commit(
            "refresh",
            self.client.list_files,
            lambda result: replace_rows(self.state, result[1]),
            "Refreshing...",
        )

    # ---- Operations ---- #

    def login(self, token: str) -> OperationResult:
        """
        Present an access token; on success the file list becomes visible.

        Args:
            token: Text typed on the token screen

        Returns:
            OperationResult (AUTH_FAILURE when the portal rejects the token)
        """
        token = token.strip()
        if not token:
            return OperationResult(Outcome.NOOP)

        def on_success(result):
            self.state.token = token
            replace_rows(self.state, result[1])
            self.state.login.invalid = False
            self.state.enter_mode("files")

        self.state.login.busy = True
        try:
            success, error = self._commit(
                "login", lambda: self.client.login(token), on_success, "Logging in..."
            )
        finally:
            self.state.login.busy = False

        if not success:
            self.state.login.invalid = True
            self.state.login.helper_text = INVALID_TOKEN_TEXT
            self.notify(error, "error")
            return OperationResult(Outcome.AUTH_FAILURE, error)
        return OperationResult(Outcome.SUCCESS)

    def refresh(self) -> OperationResult:
        """Reload the file list from the portal."""
        if not self.state.authenticated:
            return OperationResult(Outcome.NOOP)

        success, error = self._reload_rows()
        if not success:
            self.notify(error, "error")
            return OperationResult(Outcome.REMOTE_FAILURE, error)
        return OperationResult(Outcome.SUCCESS)

    def upload(self, paths: Sequence[str]) -> OperationResult:
        """
        Upload local files one at a time, in the order given.

        The batch stops at the first failure; files after it are never
        sent. A list refresh follows either way so the row store shows what
        actually reached the device.

        Args:
            paths: Local file paths in submission order

        Returns:
            OperationResult (PARTIAL_BATCH_FAILURE when earlier files made it)
        """
        if not paths:
            return OperationResult(Outcome.NOOP)

        total = len(paths)
        self.notify("Uploading files...", "info")

        for index, path in enumerate(paths):
            try:
                file_name, data_url = self.read_upload(path)
            except OSError as e:
                log_error(f"Failed to read upload {path}: {e}", type(e).__name__, traceback.format_exc())
                reason = f"Cannot read {os.path.basename(path)}: {e.strerror or e}"
                return self._abort_upload(index, reason)

            success, error = self._commit(
                "upload",
                lambda: self.client.upload(file_name, data_url),
                lambda result: None,
                f"Uploading {file_name}...",
            )
            if not success:
                return self._abort_upload(index, error)

            if total > 1:
                self.notify(f"Uploaded {index + 1}/{total} files", "info")

        success, error = self._reload_rows()
        if not success:
            self.notify(error, "error")
            return OperationResult(Outcome.REMOTE_FAILURE, error)

        self.notify(f"Successfully uploaded {total} file(s)", "success")
        return OperationResult(Outcome.SUCCESS)

    def _abort_upload(self, failed_index: int, reason: str) -> OperationResult:
        # Reconcile with whatever reached the device before the failure
        success, error = self._reload_rows()
        if not success:
            log_error(f"Refresh after failed upload also failed: {error}")
            reason = f"{reason} (refresh failed: {error})"
        self.notify(reason, "error")

        if failed_index > 0:
            return OperationResult(Outcome.PARTIAL_BATCH_FAILURE, reason, detail=failed_index)
        return OperationResult(Outcome.REMOTE_FAILURE, reason, detail=failed_index)

    def download(self) -> OperationResult:
        """
        Hand the selection to the download transfer.

        Transfer errors are logged only; the row store is never touched.
        """
        request = build_download_request(self.state)
        if request is None:
            return OperationResult(Outcome.NOOP)

        success, saved_path, error = self.client.download(
            request.params, self.download_dir, request.suggested_name
        )
        if success:
            print(f"Downloaded to {saved_path}")
        else:
            log_error(f"Download of {request.suggested_name} failed: {error}")
        return OperationResult(Outcome.SUCCESS, detail=request)

    def delete(self) -> OperationResult:
        """
        Delete the single selected file after the user confirms.

        Returns:
            OperationResult (NOOP unless exactly one row is selected,
            CANCELLED when the dialog is declined)
        """
        if len(self.state.selection) != 1:
            return OperationResult(Outcome.NOOP)

        entries = selected_entries(self.state)
        if not entries:
            return OperationResult(Outcome.NOOP)
        entry = entries[0]

        confirmed = self.confirm(
            "Delete file",
            f"Are you sure you want to permanently delete {entry.file_name}? You cannot undo",
        )
        if not confirmed:
            return OperationResult(Outcome.CANCELLED)

        success, error = self._commit(
            "delete",
            lambda: self.client.delete(entry.file_name),
            lambda result: replace_rows(self.state, result[1]),
            f"Deleting {entry.file_name}...",
        )
        if not success:
            self.notify(error, "error")
            return OperationResult(Outcome.REMOTE_FAILURE, error)

        self.notify("File deleted successfully", "success")
        return OperationResult(Outcome.SUCCESS)

    def rename(self, request: RenameRequest) -> OperationResult:
        """
        Rename a file, showing the new name before the portal answers.

        On failure the display value is dropped and the row renders from
        the row store again, which still holds the old name.
        """
        entry = find_entry(self.state, request.entry_id)
        if entry is None or not request.new_name.strip():
            return OperationResult(Outcome.NOOP)

        overrides = self.state.display_overrides

        def on_success(result):
            overrides.pop(entry.id, None)
            entry.file_name = request.new_name

        success, error = self._commit(
            "rename",
            lambda: self.client.rename(request.old_name, request.new_name),
            on_success,
            f"Renaming {request.old_name}...",
            show_pending=lambda: overrides.__setitem__(entry.id, request.new_name),
            rollback=lambda: overrides.pop(entry.id, None),
        )
        if not success:
            self.notify(error, "error")
            return OperationResult(Outcome.REMOTE_FAILURE, error)

        self.notify("File renamed successfully", "success")
        return OperationResult(Outcome.SUCCESS)

    def commit_edit(self, value: Optional[str] = None) -> OperationResult:
        """Close the edit session and rename if the value changed."""
        request = edit_session.commit_edit(self.state, value)
        if request is None:
            return OperationResult(Outcome.NOOP)
        return self.rename(request)

    def blur_edit(self) -> OperationResult:
        """Focus left the edit control: commit with the current value."""
        request = edit_session.blur_edit(self.state)
        if request is None:
            return OperationResult(Outcome.NOOP)
        return self.rename(request)
