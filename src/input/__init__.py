"""
Input handling for Portal Browser.
Maps keyboard events to intents.
"""

from .keymap import files_intent, picker_intent, confirm_intent, edit_text

__all__ = [
    "files_intent",
    "picker_intent",
    "confirm_intent",
    "edit_text",
]
