"""
Formatting utilities for Portal Browser.
Provides functions for formatting sizes, dates and table text.
"""

from datetime import datetime

SIZE_UNITS = ["B", "KB", "MB", "GB"]


def format_size(size_bytes: float) -> str:
    """
    Convert bytes to a binary-prefixed, human readable string.

    One decimal place is kept and a trailing ".0" is dropped, so 1536 bytes
    reads "1.5 KB" and 2048 reads "2 KB". Sizes past the GB range stay in GB.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string with appropriate unit (B, KB, MB, GB)
    """
    if size_bytes <= 0:
        return "0 B"

    value = float(size_bytes)
    unit = SIZE_UNITS[0]
    for unit in SIZE_UNITS:
        if value < 1024 or unit == SIZE_UNITS[-1]:
            break
        value /= 1024

    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text} {unit}"


def format_date(moment: datetime) -> str:
    """Format a modification time as a calendar date."""
    return moment.strftime("%Y-%m-%d")


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length, adding suffix if truncated.

    Args:
        text: The text to truncate
        max_length: Maximum allowed length
        suffix: Suffix to add if truncated (default: "...")

    Returns:
        Truncated text with suffix if needed
    """
    if len(text) <= max_length:
        return text
    return text[: max_length - len(suffix)] + suffix
