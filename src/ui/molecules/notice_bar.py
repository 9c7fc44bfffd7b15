"""
Notice bar molecule - Transient snackbar at the bottom of the screen.
"""

import pygame
from typing import Optional

from state import NoticeState
from ui.theme import Theme, default_theme
from ui.atoms.text import Text


class NoticeBar:
    """Shows the current notice until it expires."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)

    def render(
        self, screen: pygame.Surface, notice: NoticeState, now: int
    ) -> Optional[pygame.Rect]:
        """
        Render the notice if it is still live.

        Args:
            screen: Surface to render to
            notice: Current notice state
            now: Current pygame ticks

        Returns:
            Rect of the bar, or None when nothing is shown
        """
        if not notice.message or now >= notice.expires_at:
            return None

        t = self.theme
        color = {"error": t.error, "success": t.success}.get(notice.kind, t.info)
        sw, sh = screen.get_size()
        rect = pygame.Rect(0, sh - t.notice_height, sw, t.notice_height)
        pygame.draw.rect(screen, t.surface, rect)
        pygame.draw.line(screen, color, rect.topleft, rect.topright)

        _, text_h = self.text.measure(notice.message, t.font_size_sm)
        self.text.render(
            screen,
            notice.message,
            (rect.left + t.padding_md, rect.centery - text_h // 2),
            color=color,
            size=t.font_size_sm,
            max_width=rect.width - t.padding_lg,
        )
        return rect
