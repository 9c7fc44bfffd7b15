"""
Local file listing for the upload picker.
"""

import os
from typing import List, Dict, Any


def load_folder_contents(path: str) -> List[Dict[str, Any]]:
    """
    Load folder contents for the upload picker.

    Args:
        path: Directory path to list

    Returns:
        List of item dictionaries with name, type ("parent", "folder" or
        "file"), path and size
    """
    path = os.path.abspath(path)
    items: List[Dict[str, Any]] = []

    # Add parent directory option unless we're at root
    if path != os.path.dirname(path):
        items.append(
            {"name": "..", "type": "parent", "path": os.path.dirname(path), "size": 0}
        )

    try:
        entries = os.listdir(path)
    except OSError:
        return items

    dirs = []
    files = []
    for entry in entries:
        # Skip hidden files
        if entry.startswith("."):
            continue

        full_path = os.path.join(path, entry)
        if os.path.isdir(full_path):
            dirs.append({"name": entry, "type": "folder", "path": full_path, "size": 0})
        else:
            try:
                size = os.path.getsize(full_path)
            except OSError:
                size = 0
            files.append({"name": entry, "type": "file", "path": full_path, "size": size})

    # Directories first, then files, each alphabetically
    dirs.sort(key=lambda x: x["name"].lower())
    files.sort(key=lambda x: x["name"].lower())
    return items + dirs + files
