"""
Upload encoding for Portal Browser.
Packs local file content into self-describing data URLs.
"""

import base64
import mimetypes
import os
from typing import Tuple

DEFAULT_MIME_TYPE = "application/octet-stream"


def encode_data_url(content: bytes, file_name: str) -> str:
    """
    Encode bytes as a base64 data URL.

    Args:
        content: Raw file content
        file_name: Used to guess the media type

    Returns:
        String of the form data:<mime>;base64,<payload>
    """
    mime_type, _ = mimetypes.guess_type(file_name)
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{payload}"


def read_as_data_url(path: str) -> Tuple[str, str]:
    """
    Read a local file for upload.

    Args:
        path: Local file path

    Returns:
        Tuple of (file_name, data_url)

    Raises:
        OSError: If the file cannot be read
    """
    file_name = os.path.basename(path)
    with open(path, "rb") as f:
        content = f.read()
    return file_name, encode_data_url(content, file_name)
