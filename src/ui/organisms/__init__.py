"""
UI Organisms - Complex UI sections.
Composed of atoms and molecules working together.
"""

from .file_table import FileTable
from .confirm_dialog import ConfirmDialog

__all__ = [
    "FileTable",
    "ConfirmDialog",
]
