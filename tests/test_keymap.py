"""Key mapping tests."""

import os
import sys
from types import SimpleNamespace

import pygame

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from input.keymap import files_intent, picker_intent, confirm_intent, edit_text


def _key(key, unicode="", mod=0):
    return SimpleNamespace(key=key, unicode=unicode, mod=mod)


def test_files_intents():
    assert files_intent(_key(pygame.K_DOWN)) == "focus_down"
    assert files_intent(_key(pygame.K_SPACE)) == "toggle_selection"
    assert files_intent(_key(pygame.K_2)) == "sort:size"
    assert files_intent(_key(pygame.K_DELETE)) == "delete"
    assert files_intent(_key(pygame.K_z)) is None


def test_ctrl_q_quits():
    assert files_intent(_key(pygame.K_q, "q", pygame.KMOD_LCTRL)) == "quit"
    assert files_intent(_key(pygame.K_q, "q")) is None


def test_picker_and_confirm_intents():
    assert picker_intent(_key(pygame.K_SPACE)) == "pick"
    assert picker_intent(_key(pygame.K_ESCAPE)) == "close"
    assert confirm_intent(_key(pygame.K_y)) == "yes"
    assert confirm_intent(_key(pygame.K_ESCAPE)) == "no"


def test_edit_text_typing():
    assert edit_text("ab", _key(pygame.K_c, "c")) == ("abc", None)
    assert edit_text("abc", _key(pygame.K_BACKSPACE)) == ("ab", None)
    assert edit_text("", _key(pygame.K_BACKSPACE)) == ("", None)
    assert edit_text("ab", _key(pygame.K_LSHIFT)) == ("ab", None)


def test_edit_text_actions():
    assert edit_text("x", _key(pygame.K_RETURN)) == ("x", "submit")
    assert edit_text("x", _key(pygame.K_KP_ENTER)) == ("x", "submit")
    assert edit_text("x", _key(pygame.K_ESCAPE)) == ("x", "cancel")
    assert edit_text("x", _key(pygame.K_TAB)) == ("x", "blur")
