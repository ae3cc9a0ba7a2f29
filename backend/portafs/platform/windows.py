"""Windows enumeration: FindFirstFile produces the first entry as part of opening."""

from __future__ import annotations

import logging
import os
from typing import Optional

from portafs.metadata import is_directory
from portafs.paths import join_path
from portafs.platform.base import (
    DOT_ENTRIES,
    DirectoryEnumerator,
    EnumerationError,
    EnumerationState,
    os_error_code,
)

logger = logging.getLogger(__name__)

ERROR_FILE_NOT_FOUND = 2


def _is_drive_root(path: str) -> bool:
    _, tail = os.path.splitdrive(path)
    return tail in ("\\", "/")


class WindowsEnumerator(DirectoryEnumerator):
    """FindFirstFile/FindNextFile semantics on top of os.scandir."""

    name = "windows"

    def open_first(self, state: EnumerationState, path: str) -> Optional[str]:
        # os.scandir appends the \* wildcard itself; the pattern is only logged
        logger.debug("Searching %s", join_path(path, "*"))

        try:
            state.handle = os.scandir(path)
        except ValueError as e:
            raise EnumerationError("open", path, None) from e
        except OSError as e:
            code = os_error_code(e)
            # "No files" on a real directory is an empty listing, not a failure
            if code != ERROR_FILE_NOT_FOUND or not is_directory(path):
                raise EnumerationError("open", path, code) from e
            return None

        state.path = path
        if not _is_drive_root(path):
            state.pending.extend(DOT_ENTRIES)

        try:
            return self.read_next(state)
        except EnumerationError as e:
            raise EnumerationError("open", path, e.code) from e
