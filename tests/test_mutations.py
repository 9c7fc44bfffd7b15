"""Mutation coordinator tests against an in-memory portal."""

import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from constants import INVALID_TOKEN_TEXT
from state import AppState, FileEntry
from controllers.rows import replace_rows, toggle_selection, select_all, find_entry
from controllers.edit_session import begin_edit, update_edit_value
from controllers.mutations import (
    MutationCoordinator,
    Outcome,
    CommitPolicy,
    OPERATION_POLICIES,
    build_download_request,
)
from ui.projector import project_table


class FakePortal:
    """In-memory stand-in for RemoteStoreClient."""

    def __init__(self, names=("a.bas", "b.bas", "c.bas"), token="secret"):
        self.token = token
        self.files = {name: 10 * (i + 1) for i, name in enumerate(names)}
        self.ids = {name: i + 1 for i, name in enumerate(names)}
        self.calls = []
        self.fail = {}  # operation -> reason, or (operation, name) -> reason

    def _entries(self):
        return [
            FileEntry(self.ids[name], name, size, datetime(2024, 1, 1))
            for name, size in self.files.items()
        ]

    def _failure(self, operation, name=None):
        return self.fail.get((operation, name)) or self.fail.get(operation)

    def login(self, token):
        self.calls.append(("login", token))
        if token != self.token:
            return False, [], "Invalid token"
        return True, self._entries(), ""

    def list_files(self):
        self.calls.append(("list",))
        reason = self._failure("list")
        if reason:
            return False, [], reason
        return True, self._entries(), ""

    def upload(self, file_name, data_url):
        self.calls.append(("upload", file_name))
        reason = self._failure("upload", file_name)
        if reason:
            return False, [], reason
        self.ids.setdefault(file_name, max(self.ids.values(), default=0) + 1)
        self.files[file_name] = len(data_url)
        return True, self._entries(), ""

    def rename(self, old_name, new_name):
        self.calls.append(("rename", old_name, new_name))
        reason = self._failure("rename")
        if reason:
            return False, reason
        self.ids[new_name] = self.ids.pop(old_name)
        self.files[new_name] = self.files.pop(old_name)
        return True, ""

    def delete(self, file_name):
        self.calls.append(("delete", file_name))
        reason = self._failure("delete")
        if reason:
            return False, [], reason
        del self.files[file_name]
        return True, self._entries(), ""

    def download(self, params, dest_dir, suggested_name):
        self.calls.append(("download", list(params), suggested_name))
        return True, os.path.join(dest_dir, suggested_name), ""


def _make_coordinator(portal=None, confirm_answer=True, logged_in=True):
    portal = portal or FakePortal()
    state = AppState()
    notices = []
    questions = []

    def confirm(title, message):
        questions.append((title, message))
        return confirm_answer

    coordinator = MutationCoordinator(
        state,
        portal,
        notify=lambda message, kind: notices.append((kind, message)),
        confirm=confirm,
        download_dir="/tmp/downloads",
        read_upload=lambda path: (os.path.basename(path), f"data:text/plain;base64,{path}"),
    )
    if logged_in:
        coordinator.login(portal.token)
        notices.clear()
        portal.calls.clear()
    return coordinator, portal, notices, questions


# ---- Policies ---- #

def test_policies_declared_for_every_operation():
    assert OPERATION_POLICIES["rename"] == CommitPolicy.OPTIMISTIC
    for operation in ("login", "upload", "delete", "refresh"):
        assert OPERATION_POLICIES[operation] == CommitPolicy.CONFIRM_FIRST
    assert OPERATION_POLICIES["download"] == CommitPolicy.FIRE_AND_FORGET


# ---- Login ---- #

def test_login_success_replaces_rows():
    coordinator, portal, notices, _ = _make_coordinator(logged_in=False)
    result = coordinator.login("  secret ")
    state = coordinator.state
    assert result.ok
    assert state.token == "secret"
    assert state.mode == "files"
    assert [e.file_name for e in state.rows] == ["a.bas", "b.bas", "c.bas"]
    assert portal.calls == [("login", "secret")]


def test_login_failure_marks_input_invalid():
    coordinator, portal, notices, _ = _make_coordinator(logged_in=False)
    result = coordinator.login("wrong")
    state = coordinator.state
    assert result.outcome == Outcome.AUTH_FAILURE
    assert result.reason == "Invalid token"
    assert state.mode == "login"
    assert state.token is None
    assert state.login.invalid
    assert state.login.helper_text == INVALID_TOKEN_TEXT
    assert notices == [("error", "Invalid token")]


def test_empty_token_is_noop():
    coordinator, portal, notices, _ = _make_coordinator(logged_in=False)
    assert coordinator.login("   ").outcome == Outcome.NOOP
    assert portal.calls == []
    assert notices == []


def test_login_clears_selection():
    coordinator, portal, _, _ = _make_coordinator()
    select_all(coordinator.state)
    coordinator.login("secret")
    assert coordinator.state.selection == set()


# ---- Upload ---- #

def test_upload_batch_success():
    coordinator, portal, notices, _ = _make_coordinator()
    toggle_selection(coordinator.state, 1)
    result = coordinator.upload(["/tmp/x.bas", "/tmp/y.bas"])
    assert result.ok
    assert [c[0] for c in portal.calls] == ["upload", "upload", "list"]
    assert "x.bas" in [e.file_name for e in coordinator.state.rows]
    assert coordinator.state.selection == set()
    assert notices == [
        ("info", "Uploading files..."),
        ("info", "Uploaded 1/2 files"),
        ("info", "Uploaded 2/2 files"),
        ("success", "Successfully uploaded 2 file(s)"),
    ]


def test_single_upload_has_no_progress_notice():
    coordinator, portal, notices, _ = _make_coordinator()
    coordinator.upload(["/tmp/x.bas"])
    assert notices == [
        ("info", "Uploading files..."),
        ("success", "Successfully uploaded 1 file(s)"),
    ]


def test_upload_aborts_on_first_failure():
    portal = FakePortal()
    portal.fail[("upload", "two.bas")] = "Disk full"
    coordinator, portal, notices, _ = _make_coordinator(portal)

    result = coordinator.upload(["/tmp/one.bas", "/tmp/two.bas", "/tmp/three.bas"])

    assert result.outcome == Outcome.PARTIAL_BATCH_FAILURE
    assert result.reason == "Disk full"
    uploads = [c[1] for c in portal.calls if c[0] == "upload"]
    assert uploads == ["one.bas", "two.bas"]
    assert portal.calls[-1] == ("list",)
    progress = [n for n in notices if n[1].startswith("Uploaded")]
    assert progress == [("info", "Uploaded 1/3 files")]
    assert ("error", "Disk full") in notices
    # The reconciliation refresh shows the file that made it
    assert "one.bas" in [e.file_name for e in coordinator.state.rows]


def test_upload_failure_refresh_shows_loading():
    portal = FakePortal()
    portal.fail[("upload", "two.bas")] = "Disk full"
    coordinator, portal, notices, _ = _make_coordinator(portal)
    shown = []
    coordinator.redraw = lambda: shown.append(coordinator.state.loading.message)

    coordinator.upload(["/tmp/one.bas", "/tmp/two.bas"])

    assert shown == ["Uploading one.bas...", "Uploading two.bas...", "Refreshing..."]
    assert not coordinator.state.loading.show


def test_upload_failure_with_failed_refresh_reports_both():
    portal = FakePortal()
    portal.fail[("upload", "two.bas")] = "Disk full"
    portal.fail["list"] = "Connection failed"
    coordinator, portal, notices, _ = _make_coordinator(portal)
    toggle_selection(coordinator.state, 1)

    result = coordinator.upload(["/tmp/one.bas", "/tmp/two.bas"])

    assert result.outcome == Outcome.PARTIAL_BATCH_FAILURE
    assert notices[-1] == ("error", "Disk full (refresh failed: Connection failed)")
    # Rows untouched by the failed refresh
    assert [e.file_name for e in coordinator.state.rows] == ["a.bas", "b.bas", "c.bas"]
    assert coordinator.state.selection == {1}


def test_first_upload_failure_is_remote_failure():
    portal = FakePortal()
    portal.fail["upload"] = "No space"
    coordinator, portal, notices, _ = _make_coordinator(portal)
    result = coordinator.upload(["/tmp/one.bas", "/tmp/two.bas"])
    assert result.outcome == Outcome.REMOTE_FAILURE
    assert [c[0] for c in portal.calls] == ["upload", "list"]


def test_unreadable_upload_aborts_batch():
    coordinator, portal, notices, _ = _make_coordinator()

    def read_upload(path):
        if path.endswith("bad.bas"):
            raise OSError(13, "Permission denied")
        return os.path.basename(path), "data:,"

    coordinator.read_upload = read_upload
    result = coordinator.upload(["/tmp/ok.bas", "/tmp/bad.bas", "/tmp/never.bas"])
    assert result.outcome == Outcome.PARTIAL_BATCH_FAILURE
    assert "bad.bas" in result.reason
    assert [c[1] for c in portal.calls if c[0] == "upload"] == ["ok.bas"]


def test_empty_upload_is_noop():
    coordinator, portal, notices, _ = _make_coordinator()
    assert coordinator.upload([]).outcome == Outcome.NOOP
    assert portal.calls == []


# ---- Delete ---- #

def test_delete_requires_exactly_one_selection():
    coordinator, portal, _, questions = _make_coordinator()
    assert coordinator.delete().outcome == Outcome.NOOP

    toggle_selection(coordinator.state, 1)
    toggle_selection(coordinator.state, 2)
    assert coordinator.delete().outcome == Outcome.NOOP
    assert questions == []
    assert portal.calls == []


def test_delete_confirmed():
    coordinator, portal, notices, questions = _make_coordinator()
    toggle_selection(coordinator.state, 2)
    result = coordinator.delete()
    assert result.ok
    assert questions[0][0] == "Delete file"
    assert "b.bas" in questions[0][1]
    assert portal.calls == [("delete", "b.bas")]
    assert [e.file_name for e in coordinator.state.rows] == ["a.bas", "c.bas"]
    assert coordinator.state.selection == set()
    assert notices == [("success", "File deleted successfully")]


def test_delete_declined_is_cancelled():
    coordinator, portal, notices, _ = _make_coordinator(confirm_answer=False)
    toggle_selection(coordinator.state, 2)
    assert coordinator.delete().outcome == Outcome.CANCELLED
    assert portal.calls == []
    assert notices == []
    assert coordinator.state.selection == {2}


def test_delete_failure_leaves_state():
    portal = FakePortal()
    portal.fail["delete"] = "File is open"
    coordinator, portal, notices, _ = _make_coordinator(portal)
    toggle_selection(coordinator.state, 2)
    result = coordinator.delete()
    assert result.outcome == Outcome.REMOTE_FAILURE
    assert len(coordinator.state.rows) == 3
    assert coordinator.state.selection == {2}
    assert notices == [("error", "File is open")]


# ---- Rename ---- #

def test_rename_failure_rolls_back_display():
    portal = FakePortal()
    portal.fail["rename"] = "Name taken"
    coordinator, portal, notices, _ = _make_coordinator(portal)
    state = coordinator.state
    seen = []

    def redraw():
        row = next(r for r in project_table(state).rows if r.entry_id == 1)
        seen.append((row.display_name, find_entry(state, 1).file_name))

    coordinator.redraw = redraw
    begin_edit(state, 1)
    update_edit_value(state, "b2.bas")
    result = coordinator.commit_edit()

    assert result.outcome == Outcome.REMOTE_FAILURE
    # New name was visible while the call was pending, store untouched
    assert seen == [("b2.bas", "a.bas")]
    row = next(r for r in project_table(state).rows if r.entry_id == 1)
    assert row.display_name == "a.bas"
    assert find_entry(state, 1).file_name == "a.bas"
    assert notices == [("error", "Name taken")]


def test_rename_success_updates_store():
    coordinator, portal, notices, _ = _make_coordinator()
    state = coordinator.state
    toggle_selection(state, 3)
    begin_edit(state, 1)
    result = coordinator.commit_edit("z.bas")
    assert result.ok
    assert portal.calls == [("rename", "a.bas", "z.bas")]
    assert find_entry(state, 1).file_name == "z.bas"
    assert state.display_overrides == {}
    assert state.selection == {3}
    assert notices == [("success", "File renamed successfully")]


def test_blur_commits_rename():
    coordinator, portal, _, _ = _make_coordinator()
    begin_edit(coordinator.state, 2)
    update_edit_value(coordinator.state, "q.bas")
    assert coordinator.blur_edit().ok
    assert portal.calls == [("rename", "b.bas", "q.bas")]


def test_unchanged_edit_sends_nothing():
    coordinator, portal, _, _ = _make_coordinator()
    begin_edit(coordinator.state, 2)
    assert coordinator.commit_edit().outcome == Outcome.NOOP
    assert portal.calls == []


# ---- Download ---- #

def test_download_all_marker():
    coordinator, portal, _, _ = _make_coordinator()
    select_all(coordinator.state)
    request = build_download_request(coordinator.state)
    assert request.params == [("all", "true")]
    assert request.suggested_name == "smallbasic-files.zip"


def test_download_single_file_name():
    portal = FakePortal(names=("x.bas", "y.bas"))
    coordinator, portal, _, _ = _make_coordinator(portal)
    toggle_selection(coordinator.state, 1)
    request = build_download_request(coordinator.state)
    assert request.params == [("file", "x.bas")]
    assert request.suggested_name == "x.bas"


def test_download_subset_uses_filters():
    coordinator, portal, _, _ = _make_coordinator()
    toggle_selection(coordinator.state, 3)
    toggle_selection(coordinator.state, 1)
    result = coordinator.download()
    assert result.ok
    assert portal.calls == [
        ("download", [("file", "a.bas"), ("file", "c.bas")], "smallbasic-files.zip")
    ]
    assert coordinator.state.selection == {1, 3}


def test_download_without_selection_is_noop():
    coordinator, portal, _, _ = _make_coordinator()
    assert build_download_request(coordinator.state) is None
    assert coordinator.download().outcome == Outcome.NOOP
    assert portal.calls == []


# ---- Refresh ---- #

def test_refresh_failure_keeps_rows():
    portal = FakePortal()
    coordinator, portal, notices, _ = _make_coordinator(portal)
    portal.fail["list"] = "Connection failed"
    toggle_selection(coordinator.state, 1)
    result = coordinator.refresh()
    assert result.outcome == Outcome.REMOTE_FAILURE
    assert len(coordinator.state.rows) == 3
    assert coordinator.state.selection == {1}


def test_refresh_requires_login():
    coordinator, portal, _, _ = _make_coordinator(logged_in=False)
    assert coordinator.refresh().outcome == Outcome.NOOP
    assert portal.calls == []


def test_loading_overlay_cleared_after_call():
    coordinator, portal, _, _ = _make_coordinator()
    shown = []
    coordinator.redraw = lambda: shown.append(coordinator.state.loading.message)
    coordinator.refresh()
    assert shown == ["Refreshing..."]
    assert not coordinator.state.loading.show
