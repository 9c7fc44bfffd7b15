"""
Confirm dialog organism - Yes/no question over a dimmed screen.
"""

import pygame
from typing import Dict

from state import ConfirmModalState
from ui.theme import Theme, default_theme
from ui.atoms.text import Text
from ui.atoms.button import Button


class ConfirmDialog:
    """Modal dialog with an OK and a Cancel button."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)
        self.button = Button(theme)

    def _wrap(self, message: str, max_width: int) -> list:
        size = self.theme.font_size_sm
        lines, current = [], ""
        for word in message.split():
            candidate = f"{current} {word}".strip()
            if current and self.text.measure(candidate, size)[0] > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        if current:
            lines.append(current)
        return lines

    def render(self, screen: pygame.Surface, modal: ConfirmModalState) -> Dict[str, pygame.Rect]:
        """
        Render the dialog.

        Returns:
            Dict with "confirm_ok", "confirm_cancel" and "dialog" rects
        """
        t = self.theme
        sw, sh = screen.get_size()

        overlay = pygame.Surface((sw, sh), pygame.SRCALPHA)
        overlay.fill(t.overlay)
        screen.blit(overlay, (0, 0))

        dialog = pygame.Rect(0, 0, t.dialog_width, t.dialog_height)
        dialog.center = (sw // 2, sh // 2)
        pygame.draw.rect(screen, t.surface, dialog)
        pygame.draw.rect(screen, t.primary, dialog, width=2)

        y = dialog.top + t.padding_md
        title_rect = self.text.render(
            screen, modal.title, (dialog.left + t.padding_md, y), color=t.primary
        )
        y = title_rect.bottom + t.padding_sm
        for line in self._wrap(modal.message, dialog.width - 2 * t.padding_md):
            rect = self.text.render(
                screen,
                line,
                (dialog.left + t.padding_md, y),
                color=t.text_secondary,
                size=t.font_size_sm,
            )
            y = rect.bottom + 2

        button_w, button_h = 120, 36
        cancel = pygame.Rect(0, 0, button_w, button_h)
        cancel.bottomright = (dialog.right - t.padding_md, dialog.bottom - t.padding_md)
        ok = cancel.move(-(button_w + t.padding_sm), 0)

        self.button.render(
            screen, ok, modal.ok_label, color=t.error if modal.button_index == 0 else t.primary_dark
        )
        self.button.render(
            screen,
            cancel,
            modal.cancel_label,
            color=t.primary if modal.button_index == 1 else t.primary_dark,
        )
        return {"confirm_ok": ok, "confirm_cancel": cancel, "dialog": dialog}
