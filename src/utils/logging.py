"""
Error log for Portal Browser.
Appends timestamped error blocks to error.log next to the config file.
"""

import os
import platform
import sys
from datetime import datetime
from typing import Optional

from constants import LOG_FILE

SEPARATOR = "-" * 80


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def log_error(
    error_msg: str,
    error_type: Optional[str] = None,
    traceback_str: Optional[str] = None,
    log_file: str = LOG_FILE,
) -> None:
    """
    Append an error to the log file.

    Args:
        error_msg: What went wrong
        error_type: Exception class name, if there was one
        traceback_str: Formatted traceback, if there was one
        log_file: Log file path
    """
    lines = [f"[{_timestamp()}] ERROR: {error_msg}"]
    if error_type:
        lines.append(f"Type: {error_type}")
    if traceback_str:
        lines.append(f"Traceback:\n{traceback_str.rstrip()}")
    lines.append(SEPARATOR)
    entry = "\n".join(lines) + "\n"

    try:
        with open(log_file, "a") as f:
            f.write(entry)
    except OSError as e:
        # Log file unavailable, fall back to the console
        print(f"Failed to write to log file: {e}")
        print(entry)


def init_log_file(log_file: str = LOG_FILE) -> bool:
    """
    Truncate the log and write a session header.

    Returns:
        True if successful, False otherwise
    """
    try:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        with open(log_file, "w") as f:
            f.write(f"Portal Browser log - started {_timestamp()}\n")
            f.write(f"Python version: {sys.version}\n")
            f.write(f"Platform: {platform.platform()}\n")
            f.write(SEPARATOR + "\n")

        print(f"Log file initialized: {log_file}")
        return True

    except OSError as e:
        print(f"Failed to initialize log file: {e}")
        return False
