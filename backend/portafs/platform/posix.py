"""POSIX enumeration: open the directory, then read entries one at a time."""

from __future__ import annotations

import logging
import os
from typing import Optional

from portafs.platform.base import (
    DOT_ENTRIES,
    DirectoryEnumerator,
    EnumerationError,
    EnumerationState,
    os_error_code,
)

logger = logging.getLogger(__name__)


class PosixEnumerator(DirectoryEnumerator):
    """opendir/readdir semantics on top of os.scandir."""

    name = "posix"

    def open_first(self, state: EnumerationState, path: str) -> Optional[str]:
        try:
            state.handle = os.scandir(path)
        except OSError as e:
            raise EnumerationError("open", path, os_error_code(e)) from e
        except ValueError as e:
            # Embedded NUL byte: no OS call was made, so there is no error code
            raise EnumerationError("open", path, None) from e

        state.path = path
        state.pending.extend(DOT_ENTRIES)

        # A failed first read is an iteration error, not an open error
        first = self.read_next(state)
        if first is None:
            logger.debug("Directory %s has no entries", path)
        return first
