"""
UI Molecules - Combinations of atoms.
"""

from .notice_bar import NoticeBar

__all__ = ["NoticeBar"]
