"""
Screen manager - Coordinates screen rendering based on app state.
"""

import pygame
from typing import Dict, Any

from state import AppState
from ui.theme import Theme, default_theme
from ui.atoms.text import Text
from ui.molecules.notice_bar import NoticeBar
from ui.organisms.confirm_dialog import ConfirmDialog
from .login_screen import LoginScreen
from .files_screen import FilesScreen
from .upload_picker_screen import UploadPickerScreen


class ScreenManager:
    """
    Screen manager.

    Picks the screen for the current mode, then draws the confirm dialog,
    the loading overlay and the notice bar on top.
    """

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)

        # Initialize screens
        self.login_screen = LoginScreen(theme)
        self.files_screen = FilesScreen(theme)
        self.upload_picker_screen = UploadPickerScreen(theme)

        # Initialize overlays
        self.confirm_dialog = ConfirmDialog(theme)
        self.notice_bar = NoticeBar(theme)

    def render(self, screen: pygame.Surface, state: AppState, now: int) -> Dict[str, Any]:
        """
        Render the appropriate screen based on state.

        Args:
            screen: Surface to render to
            state: Application state object
            now: Current pygame ticks (notice expiry, cursor blink)

        Returns:
            Dictionary of interactive element rects
        """
        screen.fill(self.theme.background)
        cursor_visible = (now // self.theme.cursor_blink_rate) % 2 == 0

        if state.mode == "login":
            rects = self.login_screen.render(screen, state, cursor_visible)
        elif state.upload_picker.show:
            rects = self.upload_picker_screen.render(screen, state.upload_picker)
        else:
            rects = self.files_screen.render(screen, state, cursor_visible)

        if state.confirm_modal.show:
            rects.update(self.confirm_dialog.render(screen, state.confirm_modal))

        if state.loading.show and state.loading.message:
            self._render_loading(screen, state.loading.message)

        rects["notice"] = self.notice_bar.render(screen, state.notice, now)
        return rects

    def _render_loading(self, screen: pygame.Surface, message: str) -> None:
        t = self.theme
        sw, sh = screen.get_size()
        w, h = self.text.measure(message)
        box = pygame.Rect(0, 0, w + 2 * t.padding_lg, h + 2 * t.padding_md)
        box.center = (sw // 2, sh // 2)
        pygame.draw.rect(screen, t.surface, box)
        pygame.draw.rect(screen, t.primary_dark, box, width=1)
        self.text.render(screen, message, (box.centerx, box.top + t.padding_md), align="center")
