"""
Button atom - Toolbar button rendering.
"""

import pygame
from typing import Optional

from ui.theme import Theme, Color, default_theme
from ui.atoms.text import Text


class Button:
    """
    Toolbar button atom.

    Disabled buttons are drawn dimmed; callers still get the rect back
    and decide whether a click on it counts.
    """

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)

    def render(
        self,
        screen: pygame.Surface,
        rect: pygame.Rect,
        label: str,
        enabled: bool = True,
        color: Optional[Color] = None,
    ) -> pygame.Rect:
        """
        Render a labelled button.

        Args:
            screen: Surface to render to
            rect: Button rectangle
            label: Button caption
            enabled: Draw in the enabled style
            color: Border/caption color (default: primary)

        Returns:
            Button rect
        """
        accent = color or self.theme.primary
        if not enabled:
            accent = self.theme.text_disabled

        pygame.draw.rect(screen, self.theme.surface, rect)
        pygame.draw.rect(screen, accent, rect, width=1)

        font_size = self.theme.font_size_sm
        _, text_h = self.text.measure(label, font_size)
        self.text.render(
            screen,
            label,
            (rect.centerx, rect.centery - text_h // 2),
            color=accent,
            size=font_size,
            max_width=rect.width - self.theme.padding_sm,
            align="center",
        )
        return rect
