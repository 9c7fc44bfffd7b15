"""
Text atom - Basic text rendering component.
"""

import pygame
from typing import Tuple, Optional

from ui.theme import Theme, Color, default_theme


class Text:
    """
    Basic text rendering atom.

    Caches fonts per size and truncates with an ellipsis when a width
    limit is given.
    """

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self._font_cache: dict = {}

    def get_font(self, size: int) -> pygame.font.Font:
        """Get or create a font of the given size."""
        if size not in self._font_cache:
            self._font_cache[size] = pygame.font.Font(self.theme.font_path, size)
        return self._font_cache[size]

    def render(
        self,
        screen: pygame.Surface,
        text: str,
        position: Tuple[int, int],
        color: Optional[Color] = None,
        size: Optional[int] = None,
        max_width: Optional[int] = None,
        align: str = "left",  # "left", "center", "right"
    ) -> pygame.Rect:
        """
        Render text to the screen.

        Args:
            screen: Surface to render to
            text: Text to render
            position: (x, y) anchor; meaning depends on align
            color: Text color (default: text_primary)
            size: Font size (default: font_size_md)
            max_width: Truncate with ellipsis past this width
            align: Text alignment ("left", "center", "right")

        Returns:
            Rect of rendered text
        """
        color = color or self.theme.text_primary
        font = self.get_font(size or self.theme.font_size_md)

        if max_width:
            text = self._truncate(text, font, max_width)

        surface = font.render(text, True, color)
        rect = surface.get_rect()
        x, y = position
        if align == "center":
            rect.midtop = (x, y)
        elif align == "right":
            rect.topright = (x, y)
        else:
            rect.topleft = (x, y)

        screen.blit(surface, rect)
        return rect

    def measure(self, text: str, size: Optional[int] = None) -> Tuple[int, int]:
        """Measure text dimensions without rendering."""
        return self.get_font(size or self.theme.font_size_md).size(text)

    def _truncate(
        self, text: str, font: pygame.font.Font, max_width: int, suffix: str = "..."
    ) -> str:
        if font.size(text)[0] <= max_width:
            return text
        while text and font.size(text + suffix)[0] > max_width:
            text = text[:-1]
        return text + suffix
