"""
UI components for Portal Browser.
Follows Atomic Design methodology: atoms -> molecules -> organisms -> screens.
"""

from .theme import Theme

__all__ = ["Theme"]
