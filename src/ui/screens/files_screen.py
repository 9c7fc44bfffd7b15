"""
Files screen - Toolbar plus the file table.
"""

import pygame
from typing import Any, Dict

from state import AppState
from ui.theme import Theme, default_theme
from ui.atoms.text import Text
from ui.atoms.button import Button
from ui.organisms.file_table import FileTable
from ui.projector import project_table


class FilesScreen:
    """Main screen once the token has been accepted."""

    TOOLBAR_BUTTONS = [
        ("upload", "UPLOAD (U)", "upload_enabled"),
        ("download", "DOWNLOAD (D)", "download_enabled"),
        ("delete", "DELETE (Del)", "delete_enabled"),
    ]

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)
        self.button = Button(theme)
        self.table = FileTable(theme)

    def table_area(self, screen: pygame.Surface) -> pygame.Rect:
        t = self.theme
        sw, sh = screen.get_size()
        top = t.toolbar_height + t.padding_sm
        return pygame.Rect(
            t.padding_sm, top, sw - 2 * t.padding_sm, sh - top - t.notice_height
        )

    def render(
        self, screen: pygame.Surface, state: AppState, cursor_visible: bool = True
    ) -> Dict[str, Any]:
        """
        Render toolbar and table from the projected view.

        Returns:
            Dict of clickable rects (toolbar buttons by name plus the
            table's rects)
        """
        t = self.theme
        view = project_table(state)
        rects: Dict[str, Any] = {}

        x = t.padding_sm
        for name, label, flag in self.TOOLBAR_BUTTONS:
            rect = pygame.Rect(x, t.padding_xs, 150, t.toolbar_height - t.padding_sm)
            self.button.render(screen, rect, label, enabled=getattr(view.toolbar, flag))
            rects[name] = rect
            x = rect.right + t.padding_sm

        if view.toolbar.selection_text:
            _, text_h = self.text.measure(view.toolbar.selection_text, t.font_size_sm)
            self.text.render(
                screen,
                view.toolbar.selection_text,
                (screen.get_width() - t.padding_md, t.toolbar_height // 2 - text_h // 2),
                color=t.text_secondary,
                size=t.font_size_sm,
                align="right",
            )

        rects.update(
            self.table.render(
                screen,
                view,
                self.table_area(screen),
                scroll_offset=state.scroll_offset,
                cursor_visible=cursor_visible,
            )
        )
        rects["toolbar"] = view.toolbar
        return rects
