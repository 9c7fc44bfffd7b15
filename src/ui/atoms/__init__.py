"""
UI Atoms - Basic building blocks.
Smallest UI components with no dependencies on other components.
"""

from .text import Text
from .button import Button
from .checkbox import Checkbox

__all__ = [
    'Text',
    'Button',
    'Checkbox',
]
