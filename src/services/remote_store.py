"""
Remote store client for Portal Browser.
Talks to the file portal served by the on-device interpreter: login, list,
upload, rename, delete and download.
"""

import os
import re
import traceback
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple
from urllib.parse import quote

import requests

from constants import (
    API_LOGIN,
    API_FILES,
    API_UPLOAD,
    API_RENAME,
    API_DELETE,
    API_DOWNLOAD,
    REQUEST_CONTENT_TYPE,
    REQUEST_TIMEOUT,
)
from state import FileEntry
from utils.logging import log_error

_FILENAME_HINT = re.compile(r'filename\*?=(?:UTF-8\'\')?"?([^";]+)"?', re.IGNORECASE)


def encode_component(value: str) -> str:
    """Percent-encode a value the way a browser's encodeURIComponent does."""
    return quote(value, safe="!~*'()")


def parse_modified(value: Any) -> datetime:
    """
    Convert the portal's date field into a local datetime.

    Args:
        value: Milliseconds since the epoch, or an ISO-8601 string

    Returns:
        Naive datetime in local time; ISO values carrying an offset are
        converted, ISO values without one are taken as local already

    Raises:
        ValueError: If the value is not a usable date
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid date: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"Date out of range: {value!r}") from e
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        moment = datetime.fromisoformat(text)
        if moment.tzinfo is not None:
            moment = moment.astimezone().replace(tzinfo=None)
        return moment
    raise ValueError(f"Invalid date: {value!r}")


def parse_entries(payload: Any) -> List[FileEntry]:
    """
    Convert a portal file list into FileEntry records.

    Args:
        payload: Decoded JSON list of {id, fileName, size, date}

    Returns:
        Entries in the order received

    Raises:
        ValueError: If the payload is not a well formed list
    """
    if not isinstance(payload, list):
        raise ValueError("Expected a file list")

    entries = []
    for item in payload:
        try:
            entries.append(
                FileEntry(
                    id=int(item["id"]),
                    file_name=str(item["fileName"]),
                    size=max(0, int(item.get("size") or 0)),
                    modified_at=parse_modified(item.get("date", 0)),
                )
            )
        except (KeyError, TypeError, AttributeError, ValueError, OverflowError) as e:
            raise ValueError(f"Malformed file entry: {item!r}") from e
    return entries


def filename_from_disposition(header: Optional[str]) -> Optional[str]:
    """Extract the filename hint from a Content-Disposition header."""
    if not header:
        return None
    match = _FILENAME_HINT.search(header)
    if not match:
        return None
    name = os.path.basename(match.group(1).strip())
    return name or None


class RemoteStoreClient:
    """
    Client for the device's file portal.

    Every call returns a tuple whose first item is a success flag and whose
    last item is the failure reason ("" on success). A JSON body carrying an
    "error" field is a failure whatever the HTTP status.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Portal address, e.g. http://192.168.1.20:8080
            timeout: Request timeout in seconds
            session: Optional requests session (cookies persist across calls)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.token: Optional[str] = None

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _post(self, path: str, body: str) -> Tuple[bool, Any, str]:
        """
        POST a plain text body and decode the JSON reply.

        Returns:
            Tuple of (success, decoded_json, error_message)
        """
        try:
            response = self.session.post(
                self._url(path),
                data=body.encode("utf-8"),
                headers={"Content-Type": REQUEST_CONTENT_TYPE},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            return False, None, "Connection timed out"
        except requests.exceptions.ConnectionError:
            return False, None, "Connection failed"
        except requests.exceptions.RequestException as e:
            log_error(f"Portal request error: {e}", type(e).__name__, traceback.format_exc())
            return False, None, str(e)

        try:
            data = response.json()
        except ValueError:
            return False, None, f"Invalid response (HTTP {response.status_code})"

        if isinstance(data, dict) and "error" in data:
            return False, None, str(data["error"])

        return True, data, ""

    def _post_for_list(self, path: str, body: str) -> Tuple[bool, List[FileEntry], str]:
        success, data, error = self._post(path, body)
        if not success:
            return False, [], error
        try:
            return True, parse_entries(data), ""
        except ValueError as e:
            log_error(f"Unexpected file list from {path}: {e}", type(e).__name__)
            return False, [], str(e)

    def login(self, token: str) -> Tuple[bool, List[FileEntry], str]:
        """
        Present the access token and fetch the file list.

        Args:
            token: Token displayed on the device's About screen

        Returns:
            Tuple of (success, entries, error_message)
        """
        success, entries, error = self._post_for_list(API_LOGIN, f"token={token}")
        if success:
            self.token = token
        return success, entries, error

    def list_files(self) -> Tuple[bool, List[FileEntry], str]:
        """Fetch the current file list."""
        return self._post_for_list(API_FILES, "")

    def upload(self, file_name: str, data_url: str) -> Tuple[bool, List[FileEntry], str]:
        """
        Store one file on the device.

        Args:
            file_name: Name to store the file under
            data_url: File content as a data URL

        Returns:
            Tuple of (success, entries, error_message)
        """
        body = f"fileName={encode_component(file_name)}&data={data_url}"
        return self._post_for_list(API_UPLOAD, body)

    def rename(self, old_name: str, new_name: str) -> Tuple[bool, str]:
        """
        Rename a file on the device.

        Returns:
            Tuple of (success, error_message)
        """
        body = f"from={encode_component(old_name)}&to={encode_component(new_name)}"
        success, _data, error = self._post(API_RENAME, body)
        return success, error

    def delete(self, file_name: str) -> Tuple[bool, List[FileEntry], str]:
        """Delete a file and return the remaining list."""
        return self._post_for_list(API_DELETE, f"fileName={encode_component(file_name)}")

    def download(
        self,
        params: Sequence[Tuple[str, str]],
        dest_dir: str,
        suggested_name: str,
    ) -> Tuple[bool, Optional[str], str]:
        """
        Stream a download into a local directory.

        Args:
            params: Query parameters, ("all", "true") or repeated ("file", name)
            dest_dir: Directory to save into
            suggested_name: Name used when the server gives no filename hint

        Returns:
            Tuple of (success, saved_path, error_message)
        """
        try:
            os.makedirs(dest_dir, exist_ok=True)
            with self.session.get(
                self._url(API_DOWNLOAD),
                params=list(params),
                stream=True,
                timeout=self.timeout,
            ) as response:
                if response.status_code != 200:
                    return False, None, f"Download failed (HTTP {response.status_code})"

                hint = filename_from_disposition(response.headers.get("Content-Disposition"))
                dest_path = os.path.join(dest_dir, hint or suggested_name)
                with open(dest_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=65536):
                        if chunk:
                            f.write(chunk)
            return True, dest_path, ""

        except requests.exceptions.Timeout:
            return False, None, "Connection timed out"
        except requests.exceptions.ConnectionError:
            return False, None, "Connection failed"
        except (requests.exceptions.RequestException, OSError) as e:
            log_error(f"Download error: {e}", type(e).__name__, traceback.format_exc())
            return False, None, str(e)
