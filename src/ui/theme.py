"""
Theme and design tokens for Portal Browser.
Centralizes all visual constants for consistent styling.
"""

from dataclasses import dataclass
from typing import Tuple, Optional

# Type alias for colors
Color = Tuple[int, int, int]
ColorAlpha = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Theme:
    """
    Design tokens for the application UI.

    Immutable; screens receive one instance and read from it.
    """

    # ---- Base Colors ---- #
    background: Color = (0, 20, 0)  # Dark green CRT phosphor
    surface: Color = (0, 30, 0)
    surface_selected: Color = (0, 50, 5)

    # ---- Primary Accent (Phosphor Green) ---- #
    primary: Color = (0, 255, 65)
    primary_dark: Color = (0, 180, 45)

    # ---- Secondary Accent (Amber) ---- #
    secondary: Color = (200, 200, 0)

    # ---- Text Colors ---- #
    text_primary: Color = (0, 255, 65)
    text_secondary: Color = (0, 180, 45)
    text_disabled: Color = (0, 80, 20)

    # ---- Status Colors ---- #
    info: Color = (0, 180, 45)
    error: Color = (255, 50, 30)
    success: Color = (0, 255, 65)

    # ---- Effects ---- #
    overlay: ColorAlpha = (0, 0, 0, 160)

    # ---- Spacing ---- #
    padding_xs: int = 4
    padding_sm: int = 8
    padding_md: int = 16
    padding_lg: int = 24

    # ---- Typography ---- #
    font_size_sm: int = 20
    font_size_md: int = 24
    font_path: Optional[str] = None  # pygame default font

    # ---- Component Sizes ---- #
    toolbar_height: int = 44
    header_height: int = 34
    row_height: int = 30
    notice_height: int = 34
    checkbox_size: int = 16
    checkbox_column: int = 40
    size_column: int = 120
    date_column: int = 150
    dialog_width: int = 520
    dialog_height: int = 200

    # ---- Cursor ---- #
    cursor_blink_rate: int = 500  # ms


# Default theme instance
default_theme = Theme()
