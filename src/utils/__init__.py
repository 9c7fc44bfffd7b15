"""
Utility functions for Portal Browser.
"""

from .logging import log_error, init_log_file
from .formatting import format_size, format_date, truncate_text

__all__ = [
    "log_error",
    "init_log_file",
    "format_size",
    "format_date",
    "truncate_text",
]
