"""
Checkbox atom - Tri-state checkbox rendering.
"""

import pygame

from ui.theme import Theme, default_theme


class Checkbox:
    """Draws checked, indeterminate or unchecked boxes."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme

    def render(
        self,
        screen: pygame.Surface,
        center: tuple,
        state: str = "unchecked",  # "checked", "indeterminate", "unchecked"
    ) -> pygame.Rect:
        size = self.theme.checkbox_size
        rect = pygame.Rect(0, 0, size, size)
        rect.center = center

        pygame.draw.rect(screen, self.theme.primary_dark, rect, width=1)
        inner = rect.inflate(-6, -6)
        if state == "checked":
            pygame.draw.rect(screen, self.theme.primary, inner)
        elif state == "indeterminate":
            bar = pygame.Rect(inner.left, inner.centery - 1, inner.width, 3)
            pygame.draw.rect(screen, self.theme.primary, bar)
        return rect
