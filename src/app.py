"""
Portal Browser Application - Main orchestrator.

This module provides the main application class that wires state,
settings, the portal client, the mutation coordinator and the UI.
"""

import os
import sys
import traceback
from typing import Any, Dict, Optional

import pygame

from constants import FPS, SCREEN_WIDTH, SCREEN_HEIGHT, DOUBLE_CLICK_MS
from state import AppState, NoticeState
from config.settings import load_settings
from controllers import edit_session
from controllers.rows import toggle_selection, toggle_select_all
from controllers.sorting import set_sort
from controllers.mutations import MutationCoordinator
from services.remote_store import RemoteStoreClient
from services.local_files import load_folder_contents
from input.keymap import files_intent, picker_intent, confirm_intent, edit_text
from ui.theme import Theme
from ui.projector import entry_id_at
from ui.screens.screen_manager import ScreenManager
from utils.logging import log_error, init_log_file


class PortalBrowserApp:
    """
    Main application class for Portal Browser.

    Runs a single-threaded pygame loop. Remote operations block the loop
    while they run; the coordinator asks for a redraw before each one so
    the loading overlay and optimistic values are on screen meanwhile.
    """

    def __init__(self, server_url: Optional[str] = None):
        """
        Initialize the application.

        Args:
            server_url: Portal address; overrides the stored setting
        """
        init_log_file()

        pygame.init()
        pygame.display.set_caption("Portal Browser")

        self.settings: Dict[str, Any] = load_settings()
        if server_url:
            self.settings["server_url"] = server_url

        if self.settings.get("fullscreen"):
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        self.clock = pygame.time.Clock()

        self.theme = Theme()
        self.state = AppState()
        self.screen_manager = ScreenManager(self.theme)
        self.rects: Dict[str, Any] = {}
        self._last_click = (None, 0)  # (entry id, ticks) for double clicks

        self.client = RemoteStoreClient(
            self.settings["server_url"], timeout=self.settings["request_timeout"]
        )
        self.coordinator = MutationCoordinator(
            self.state,
            self.client,
            notify=self._notify,
            confirm=self._confirm,
            download_dir=self.settings["download_dir"],
            redraw=self._render_frame,
        )
        print(f"Portal: {self.client.base_url}")

    # ---- Presentation callbacks ---- #

    def _notify(self, message: str, kind: str = "info"):
        """Replace the current notice."""
        self.state.notice = NoticeState(
            message=message,
            kind=kind,
            expires_at=pygame.time.get_ticks() + self.settings["notice_duration_ms"],
        )

    def _confirm(self, title: str, message: str) -> bool:
        """
        Show the confirm dialog and wait for an answer.

        Runs its own event loop; closing the dialog any way other than
        the OK button counts as a "no".
        """
        modal = self.state.confirm_modal
        modal.show = True
        modal.title = title
        modal.message = message
        modal.button_index = 1

        answer = None
        while answer is None:
            self.clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.state.running = False
                    answer = False
                elif event.type == pygame.KEYDOWN:
                    intent = confirm_intent(event)
                    if intent == "switch":
                        modal.button_index = 1 - modal.button_index
                    elif intent == "choose":
                        answer = modal.button_index == 0
                    elif intent == "yes":
                        answer = True
                    elif intent == "no":
                        answer = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if self.rects.get("confirm_ok") and self.rects["confirm_ok"].collidepoint(event.pos):
                        answer = True
                    elif self.rects.get("confirm_cancel") and self.rects["confirm_cancel"].collidepoint(event.pos):
                        answer = False
                    elif self.rects.get("dialog") and not self.rects["dialog"].collidepoint(event.pos):
                        answer = False
                if answer is not None:
                    break
            self._render_frame()

        modal.show = False
        return answer

    def _render_frame(self):
        """Render a single frame."""
        self.rects = self.screen_manager.render(
            self.screen, self.state, pygame.time.get_ticks()
        )
        pygame.display.flip()
        # Process events to prevent freezing during blocking calls
        pygame.event.pump()

    # ---- Main loop ---- #

    def run(self):
        """Run the main application loop."""
        while self.state.running:
            self.clock.tick(FPS)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.state.running = False
                elif event.type == pygame.KEYDOWN:
                    self._handle_key_event(event)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._handle_click(event.pos)
                elif event.type == pygame.MOUSEWHEEL:
                    self._move_focus(-event.y)

            self._ensure_focus_visible()
            self._render_frame()

        pygame.quit()

    # ---- Keyboard ---- #

    def _handle_key_event(self, event: pygame.event.Event):
        """Handle keyboard events."""
        state = self.state

        if state.mode == "login":
            text, action = edit_text(state.login.input_text, event)
            state.login.input_text = text
            if action == "submit" and not state.login.busy:
                self.coordinator.login(text)
            return

        if state.upload_picker.show:
            self._handle_picker_intent(picker_intent(event))
            return

        if state.edit is not None:
            text, action = edit_text(state.edit.value, event)
            edit_session.update_edit_value(state, text)
            if action == "submit":
                self.coordinator.commit_edit()
            elif action == "cancel":
                edit_session.cancel_edit(state)
            elif action == "blur":
                self.coordinator.blur_edit()
            return

        self._handle_files_intent(files_intent(event))

    def _handle_files_intent(self, intent: Optional[str]):
        state = self.state
        if intent is None:
            return

        if intent == "focus_up":
            self._move_focus(-1)
        elif intent == "focus_down":
            self._move_focus(1)
        elif intent == "page_up":
            self._move_focus(-self._visible_rows())
        elif intent == "page_down":
            self._move_focus(self._visible_rows())
        elif intent == "toggle_selection":
            entry_id = entry_id_at(state, state.focused)
            if entry_id is not None:
                toggle_selection(state, entry_id)
        elif intent == "toggle_select_all":
            toggle_select_all(state)
        elif intent.startswith("sort:"):
            set_sort(state, intent.split(":", 1)[1])
        elif intent == "begin_edit":
            entry_id = entry_id_at(state, state.focused)
            if entry_id is not None:
                edit_session.begin_edit(state, entry_id)
        elif intent == "delete":
            self.coordinator.delete()
        elif intent == "download":
            self.coordinator.download()
        elif intent == "upload":
            self._open_upload_picker()
        elif intent == "refresh":
            self.coordinator.refresh()
        elif intent == "dismiss_notice":
            state.notice.expires_at = 0
        elif intent == "quit":
            state.running = False

    def _move_focus(self, delta: int):
        if self.state.mode != "files" or not self.state.rows:
            return
        focused = self.state.focused + delta
        self.state.focused = max(0, min(len(self.state.rows) - 1, focused))

    def _visible_rows(self) -> int:
        files_screen = self.screen_manager.files_screen
        return files_screen.table.visible_rows(files_screen.table_area(self.screen))

    def _ensure_focus_visible(self):
        visible = self._visible_rows()
        if self.state.focused < self.state.scroll_offset:
            self.state.scroll_offset = self.state.focused
        elif self.state.focused >= self.state.scroll_offset + visible:
            self.state.scroll_offset = self.state.focused - visible + 1

    # ---- Mouse ---- #

    def _handle_click(self, pos: tuple):
        """Handle left clicks on the current screen."""
        state = self.state
        rects = self.rects

        if state.mode == "login":
            if rects.get("submit") and rects["submit"].collidepoint(pos) and not state.login.busy:
                self.coordinator.login(state.login.input_text)
            return

        if state.upload_picker.show:
            for row in rects.get("picker_rows", []):
                if row["row"].collidepoint(pos):
                    state.upload_picker.highlighted = row["index"]
                    item = state.upload_picker.items[row["index"]]
                    self._handle_picker_intent("pick" if item["type"] == "file" else "open")
                    return
            return

        # Clicking anywhere but the edit control ends the edit session
        if state.edit is not None:
            editing_row = next(
                (r for r in rects.get("rows", []) if r["entry_id"] == state.edit.entry_id), None
            )
            if editing_row is None or not editing_row["name"].collidepoint(pos):
                self.coordinator.blur_edit()
            else:
                return

        toolbar = rects.get("toolbar")
        for name in ("upload", "download", "delete"):
            rect = rects.get(name)
            if rect and rect.collidepoint(pos):
                if toolbar is None or getattr(toolbar, f"{name}_enabled"):
                    self._handle_files_intent(name)
                return

        if rects.get("select_all") and rects["select_all"].collidepoint(pos):
            toggle_select_all(state)
            return

        for field, rect in rects.get("headers", {}).items():
            if rect.collidepoint(pos):
                set_sort(state, field)
                return

        for offset, row in enumerate(rects.get("rows", [])):
            if not row["row"].collidepoint(pos):
                continue
            state.focused = state.scroll_offset + offset
            if row["checkbox"].collidepoint(pos):
                toggle_selection(state, row["entry_id"])
            elif row["name"].collidepoint(pos):
                now = pygame.time.get_ticks()
                last_id, last_time = self._last_click
                if last_id == row["entry_id"] and now - last_time <= DOUBLE_CLICK_MS:
                    edit_session.begin_edit(state, row["entry_id"])
                    self._last_click = (None, 0)
                else:
                    self._last_click = (row["entry_id"], now)
            return

    # ---- Upload picker ---- #

    def _open_upload_picker(self):
        picker = self.state.upload_picker
        picker.show = True
        picker.chosen = []
        self._browse_to(picker.current_path or self.settings["upload_dir"])

    def _browse_to(self, path: str):
        picker = self.state.upload_picker
        picker.current_path = os.path.abspath(path)
        picker.items = load_folder_contents(picker.current_path)
        picker.highlighted = 0

    def _handle_picker_intent(self, intent: Optional[str]):
        picker = self.state.upload_picker
        if intent is None:
            return

        item = picker.items[picker.highlighted] if picker.items else None

        if intent == "up":
            picker.highlighted = max(0, picker.highlighted - 1)
        elif intent == "down":
            picker.highlighted = min(len(picker.items) - 1, picker.highlighted + 1)
        elif intent == "pick" and item and item["type"] == "file":
            if item["path"] in picker.chosen:
                picker.chosen.remove(item["path"])
            else:
                picker.chosen.append(item["path"])
        elif intent == "open" and item:
            if item["type"] in ("folder", "parent"):
                self._browse_to(item["path"])
                return
            paths = list(picker.chosen) or [item["path"]]
            picker.show = False
            self.coordinator.upload(paths)
        elif intent == "parent":
            self._browse_to(os.path.dirname(picker.current_path))
        elif intent == "close":
            picker.show = False


def main():
    """Entry point for the application."""
    server_url = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        app = PortalBrowserApp(server_url)
        app.run()
    except Exception as e:
        log_error(f"Application error: {e}", type(e).__name__, traceback.format_exc())
        raise


if __name__ == "__main__":
    main()
