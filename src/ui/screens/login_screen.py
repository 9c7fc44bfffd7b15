"""
Login screen - Token entry form.
"""

import pygame
from typing import Dict

from constants import LOGIN_HELPER_TEXT
from state import AppState
from ui.theme import Theme, default_theme
from ui.atoms.text import Text
from ui.atoms.button import Button


class LoginScreen:
    """Asks for the access token shown on the device."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)
        self.button = Button(theme)

    def render(
        self, screen: pygame.Surface, state: AppState, cursor_visible: bool = True
    ) -> Dict[str, pygame.Rect]:
        t = self.theme
        login = state.login
        sw, sh = screen.get_size()
        form_w = min(560, sw - 2 * t.padding_lg)
        x = (sw - form_w) // 2
        y = sh // 3

        self.text.render(screen, "Enter your access token", (x, y), color=t.primary)
        y += t.font_size_md + t.padding_sm

        field_color = t.error if login.invalid else t.primary_dark
        field = pygame.Rect(x, y, form_w, 40)
        pygame.draw.rect(screen, t.surface, field)
        pygame.draw.rect(screen, field_color, field, width=2 if login.invalid else 1)
        caret = "_" if cursor_visible and not login.busy else ""
        self.text.render(
            screen,
            login.input_text + caret,
            (field.left + t.padding_sm, field.top + t.padding_sm),
            max_width=field.width - t.padding_md,
        )
        y = field.bottom + t.padding_xs

        helper = login.helper_text or LOGIN_HELPER_TEXT
        self.text.render(
            screen,
            helper,
            (x, y),
            color=t.error if login.invalid else t.text_secondary,
            size=t.font_size_sm,
            max_width=form_w,
        )
        y += t.font_size_sm + t.padding_md

        submit = pygame.Rect(x, y, 160, 40)
        label = "Logging in..." if login.busy else "Submit"
        self.button.render(screen, submit, label, enabled=not login.busy)
        return {"token_input": field, "submit": submit}
