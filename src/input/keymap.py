"""
Keyboard mapping for Portal Browser.
Translates pygame key events into intent names for each screen.
"""

import pygame
from typing import Any, Optional, Tuple

from state import FIELD_FILE_NAME, FIELD_SIZE, FIELD_MODIFIED_AT

FILES_KEYS = {
    pygame.K_UP: "focus_up",
    pygame.K_DOWN: "focus_down",
    pygame.K_PAGEUP: "page_up",
    pygame.K_PAGEDOWN: "page_down",
    pygame.K_SPACE: "toggle_selection",
    pygame.K_a: "toggle_select_all",
    pygame.K_1: "sort:" + FIELD_FILE_NAME,
    pygame.K_2: "sort:" + FIELD_SIZE,
    pygame.K_3: "sort:" + FIELD_MODIFIED_AT,
    pygame.K_F2: "begin_edit",
    pygame.K_RETURN: "begin_edit",
    pygame.K_DELETE: "delete",
    pygame.K_d: "download",
    pygame.K_u: "upload",
    pygame.K_r: "refresh",
    pygame.K_F5: "refresh",
    pygame.K_ESCAPE: "dismiss_notice",
}

PICKER_KEYS = {
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
    pygame.K_SPACE: "pick",
    pygame.K_RETURN: "open",
    pygame.K_BACKSPACE: "parent",
    pygame.K_ESCAPE: "close",
}

CONFIRM_KEYS = {
    pygame.K_LEFT: "switch",
    pygame.K_RIGHT: "switch",
    pygame.K_TAB: "switch",
    pygame.K_RETURN: "choose",
    pygame.K_y: "yes",
    pygame.K_n: "no",
    pygame.K_ESCAPE: "no",
}


def files_intent(event: Any) -> Optional[str]:
    """
    Map a key press on the file list to an intent.

    Args:
        event: pygame KEYDOWN event

    Returns:
        Intent name, or None for unmapped keys
    """
    if event.key == pygame.K_q and event.mod & pygame.KMOD_CTRL:
        return "quit"
    return FILES_KEYS.get(event.key)


def picker_intent(event: Any) -> Optional[str]:
    return PICKER_KEYS.get(event.key)


def confirm_intent(event: Any) -> Optional[str]:
    return CONFIRM_KEYS.get(event.key)


def edit_text(text: str, event: Any) -> Tuple[str, Optional[str]]:
    """
    Apply a key press to a single-line text field.

    Args:
        text: Current field text
        event: pygame KEYDOWN event

    Returns:
        Tuple of (new_text, action) where action is "submit", "cancel",
        "blur" or None
    """
    if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
        return text, "submit"
    if event.key == pygame.K_ESCAPE:
        return text, "cancel"
    if event.key == pygame.K_TAB:
        return text, "blur"
    if event.key == pygame.K_BACKSPACE:
        return text[:-1], None
    if event.unicode and event.unicode.isprintable():
        return text + event.unicode, None
    return text, None
