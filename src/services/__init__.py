"""
Services layer for Portal Browser.
Handles the portal connection, upload encoding and local file listing.
"""

from .remote_store import (
    RemoteStoreClient,
    parse_entries,
    parse_modified,
    encode_component,
    filename_from_disposition,
)
from .upload_encoding import (
    encode_data_url,
    read_as_data_url,
)
from .local_files import load_folder_contents

__all__ = [
    # Remote store
    'RemoteStoreClient',
    'parse_entries',
    'parse_modified',
    'encode_component',
    'filename_from_disposition',
    # Upload encoding
    'encode_data_url',
    'read_as_data_url',
    # Local files
    'load_folder_contents',
]
